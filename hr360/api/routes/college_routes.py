"""
Campus HR Routes (HR only)

GET /colleges - List partner colleges
POST /colleges - Invite a college (status Invited)
PUT /colleges/{id}/status - Update drive status
POST /colleges/{id}/resumes - Record resumes received from the college
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from hr360.core.auth import get_current_hr_user
from hr360.schemas.schemas import (
    CollegeCreate, CollegeStatusUpdate, ResumesReceived, CollegeResponse, CollegeStatus
)
from hr360.services.records_service import CollegeRepository

router = APIRouter(prefix="/colleges", tags=["Campus HR"], dependencies=[Depends(get_current_hr_user)])


@router.get("", response_model=List[CollegeResponse])
async def list_colleges(status: Optional[CollegeStatus] = Query(None)):
    return CollegeRepository().list(status=status)


@router.post("", response_model=CollegeResponse, status_code=201)
async def invite_college(college: CollegeCreate):
    return CollegeRepository().create(college.model_dump())


@router.put("/{college_id}/status", response_model=CollegeResponse)
async def update_status(college_id: int, update: CollegeStatusUpdate):
    return CollegeRepository().set_status(college_id, update.status)


@router.post("/{college_id}/resumes", response_model=CollegeResponse)
async def add_resumes(college_id: int, received: ResumesReceived):
    return CollegeRepository().add_resumes(college_id, received.count)
