"""
Shared pytest fixtures.

The app runs against:
- a temporary SQLite database (DATABASE_URL is set before hr360 is imported)
- in-memory stand-ins for the MongoDB collections
- a stub LLM client that replays queued replies
"""
import copy
import json
import os
import sys
import tempfile
import uuid
from pathlib import Path

_tmp_dir = tempfile.mkdtemp(prefix="hr360-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_tmp_dir) / 'hr360_test.db'}"
os.environ["LOG_DIR"] = str(Path(_tmp_dir) / "logs")
os.environ["JWT_SECRET_KEY"] = "test-secret"

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from hr360.services import llm_client as llm_module
from hr360.services import mongo_service


# ============================================================
# IN-MEMORY MONGO
# ============================================================

class _InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class _UpdateResult:
    def __init__(self, modified_count):
        self.modified_count = modified_count


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=1):
        self._docs = sorted(self._docs, key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def limit(self, n):
        self._docs = self._docs[:n]
        return self

    def __iter__(self):
        return iter(self._docs)


class FakeCollection:
    """The subset of pymongo's Collection the services use."""

    def __init__(self):
        self.docs = []

    def _matches(self, doc, query):
        return all(doc.get(key) == value for key, value in query.items())

    def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return _InsertResult(doc["_id"])

    def find(self, query=None):
        return FakeCursor([copy.deepcopy(d) for d in self.docs if self._matches(d, query or {})])

    def find_one(self, query=None, sort=None):
        cursor = self.find(query)
        for key, direction in sort or []:
            cursor.sort(key, direction)
        return next(iter(cursor), None)

    def update_one(self, query, update):
        for doc in self.docs:
            if self._matches(doc, query):
                doc.update(copy.deepcopy(update.get("$set", {})))
                return _UpdateResult(1)
        return _UpdateResult(0)

    def create_index(self, *args, **kwargs):
        return "index"


@pytest.fixture(autouse=True)
def fake_mongo(monkeypatch):
    collections = {}

    def get_collection(name):
        return collections.setdefault(name, FakeCollection())

    monkeypatch.setattr(mongo_service, "get_collection", get_collection)
    return collections


# ============================================================
# STUB LLM
# ============================================================

TINY_PNG = "data:image/png;base64,iVBORw0KGgo="


class StubLLM(llm_module.LLMClient):
    """Replays queued replies in order; an Exception in the queue is raised."""

    def __init__(self):
        self.model = "stub-model"
        self.replies = []
        self.calls = []
        self.image_prompts = []
        self.failing_image_prompts = set()

    def reply_with(self, *replies):
        self.replies.extend(replies)

    def call(self, system_prompt, user_content, model=None, max_tokens=1000):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_content": user_content,
            "model": model,
            "max_tokens": max_tokens,
        })
        if not self.replies:
            raise AssertionError("StubLLM has no reply queued")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply if isinstance(reply, str) else json.dumps(reply)

    def generate_image(self, prompt, model):
        self.image_prompts.append(prompt)
        if prompt in self.failing_image_prompts:
            raise ValueError("Image model returned no data")
        return TINY_PNG


@pytest.fixture
def llm():
    stub = StubLLM()
    llm_module.set_llm_client(stub)
    yield stub
    llm_module.set_llm_client(None)


@pytest.fixture
def settings():
    from hr360.core.config import get_settings
    return get_settings()


# ============================================================
# HTTP
# ============================================================

@pytest.fixture
def client(monkeypatch, llm):
    import hr360.main as main_module
    monkeypatch.setattr(main_module, "init_mongo_indexes", lambda: None)
    with TestClient(main_module.app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    email = f"hr-{uuid.uuid4().hex[:8]}@hr360.com"
    response = client.post("/api/auth/register", json={
        "email": email, "password": "s3cure-pass", "full_name": "Test Recruiter"
    })
    assert response.status_code == 201
    response = client.post("/api/auth/login", json={"email": email, "password": "s3cure-pass"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def unique_email(prefix: str = "applicant") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@acme.com"


@pytest.fixture
def make_applicant(client):
    """Register a walk-in applicant through the public endpoint."""
    def _make(**overrides):
        payload = {
            "full_name": "Priya Raman",
            "email": unique_email(),
            "phone": "+919876543210",
        }
        payload.update(overrides)
        response = client.post("/api/applicants/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make
