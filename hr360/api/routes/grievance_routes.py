"""
Grievance Hub Routes (HR only)

GET /grievances - List tickets, newest first
GET /grievances/{ticket_id} - Ticket details
POST /grievances - File a ticket (auto-assigned to HR or Legal)
PUT /grievances/{ticket_id}/status - Update ticket status
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from hr360.core.auth import get_current_hr_user
from hr360.core.logging_config import get_logger
from hr360.schemas.schemas import (
    GrievanceCreate, GrievanceStatusUpdate, GrievanceResponse, GrievanceStatus
)
from hr360.services.records_service import GrievanceRepository

router = APIRouter(prefix="/grievances", tags=["Grievance Hub"], dependencies=[Depends(get_current_hr_user)])
logger = get_logger("hr360.api")


@router.get("", response_model=List[GrievanceResponse])
async def list_grievances(status: Optional[GrievanceStatus] = Query(None)):
    return GrievanceRepository().list(status=status)


@router.get("/{ticket_id}", response_model=GrievanceResponse)
async def get_grievance(ticket_id: str):
    return GrievanceRepository().get(ticket_id)


@router.post("", response_model=GrievanceResponse, status_code=201)
async def file_grievance(grievance: GrievanceCreate):
    """
    Policy and Facilities tickets go to Legal, everything else to HR.
    """
    ticket = GrievanceRepository().create(grievance.model_dump())
    logger.info(f"Grievance {ticket['ticket_id']} filed, assigned to {ticket['assigned_to']}")
    return ticket


@router.put("/{ticket_id}/status", response_model=GrievanceResponse)
async def update_status(ticket_id: str, update: GrievanceStatusUpdate):
    return GrievanceRepository().set_status(ticket_id, update.status)
