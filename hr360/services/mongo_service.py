"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. flow_runs           - Input/output of every successful AI flow run
2. raw_resumes         - Uploaded resume files (data URI) before processing
3. assessment_sessions - Generated tests, answer keys included

WHY MongoDB for these?
- Flow outputs have a different nested shape per flow
- Answer keys must stay server-side until the candidate submits
- No joins needed - documents are self-contained
"""

import uuid
from datetime import datetime
from typing import Optional, List
from bson import ObjectId
from pymongo.collection import Collection

from hr360.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


# ============================================================
# FLOW RUNS COLLECTION
# ============================================================

class FlowRunService:
    """
    History of AI flow runs, newest first per flow.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["flow_runs"])

    def record(self, flow: str, model: str, input_data: dict, output_data: dict, user_id: int = None) -> str:
        """
        Store one successful run.

        Returns:
            MongoDB ObjectId as string
        """
        doc = {
            "flow": flow,
            "model": model,
            "input": input_data,
            "output": output_data,
            "user_id": user_id,
            "created_at": datetime.utcnow()
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def list_for_flow(self, flow: str, limit: int = 20) -> List[dict]:
        cursor = self.collection.find({"flow": flow}).sort("created_at", -1).limit(limit)
        return serialize_docs(list(cursor))


# ============================================================
# RAW RESUMES COLLECTION
# ============================================================

class RawResumeService:
    """
    Handles raw resume document storage.
    These are the original uploads, kept as data URIs.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["raw_resumes"])

    def insert(self, applicant_id: int, data_uri: str, filename: str = None) -> str:
        """
        Insert a raw resume document.

        Args:
            applicant_id: relational applicant ID (foreign reference)
            data_uri: the uploaded file as a base64 data URI
            filename: Original filename
        """
        doc = {
            "applicant_id": applicant_id,
            "data_uri": data_uri,
            "filename": filename,
            "uploaded_at": datetime.utcnow(),
            "is_processed": False
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def mark_as_processed(self, mongo_id: str) -> bool:
        """Mark resume as processed after the resume_processor flow."""
        result = self.collection.update_one(
            {"_id": ObjectId(mongo_id)},
            {"$set": {"is_processed": True, "processed_at": datetime.utcnow()}}
        )
        return result.modified_count > 0


# ============================================================
# ASSESSMENT SESSIONS COLLECTION
# ============================================================

class AssessmentSessionService:
    """
    A generated aptitude or typing test, keyed by session_id.

    Aptitude sessions store the full questions (with correct answers);
    typing sessions store the reference text. Submissions are scored
    against the stored copy, never against anything the client sends back.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["assessment_sessions"])

    def create(self, kind: str, content: dict, applicant_id: int = None) -> str:
        session_id = uuid.uuid4().hex
        doc = {
            "session_id": session_id,
            "kind": kind,
            "applicant_id": applicant_id,
            "content": content,
            "created_at": datetime.utcnow(),
            "submitted_at": None,
            "result": None
        }
        self.collection.insert_one(doc)
        return session_id

    def get(self, session_id: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"session_id": session_id}))

    def mark_submitted(self, session_id: str, result: dict) -> bool:
        """
        Claim the session for one submission.

        Only matches a session that has not been submitted yet, so of two
        concurrent submissions exactly one gets True.
        """
        update = self.collection.update_one(
            {"session_id": session_id, "submitted_at": None},
            {"$set": {"submitted_at": datetime.utcnow(), "result": result}}
        )
        return update.modified_count > 0

    def release(self, session_id: str) -> bool:
        """Undo mark_submitted when the result could not be saved."""
        update = self.collection.update_one(
            {"session_id": session_id},
            {"$set": {"submitted_at": None, "result": None}}
        )
        return update.modified_count > 0
