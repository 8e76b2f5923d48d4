"""
Compliance Document Routes (HR only)

GET /documents - List policy/training/manual documents
POST /documents - Add a document (starts as Draft, 0% acknowledged)
PUT /documents/{id}/status - Publish / archive
PUT /documents/{id}/acknowledgement - Update acknowledgement percentage
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from hr360.core.auth import get_current_hr_user
from hr360.schemas.schemas import (
    DocumentCreate, DocumentStatusUpdate, AcknowledgementUpdate, DocumentResponse,
    DocumentStatus, DocumentType
)
from hr360.services.records_service import DocumentRepository

router = APIRouter(prefix="/documents", tags=["Compliance"], dependencies=[Depends(get_current_hr_user)])


@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    status: Optional[DocumentStatus] = Query(None),
    type: Optional[DocumentType] = Query(None)
):
    return DocumentRepository().list(status=status, type=type)


@router.post("", response_model=DocumentResponse, status_code=201)
async def create_document(document: DocumentCreate):
    return DocumentRepository().create(document.model_dump())


@router.put("/{document_id}/status", response_model=DocumentResponse)
async def update_status(document_id: int, update: DocumentStatusUpdate):
    return DocumentRepository().set_status(document_id, update.status)


@router.put("/{document_id}/acknowledgement", response_model=DocumentResponse)
async def update_acknowledgement(document_id: int, update: AcknowledgementUpdate):
    return DocumentRepository().set_acknowledgement(document_id, update.acknowledgement_percentage)
