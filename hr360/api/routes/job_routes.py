"""
Job Routes (HR only)

POST /jobs - Create job posting
GET /jobs - List jobs (status, source filters)
GET /jobs/archive - Closed postings
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id}/status - Update posting status
POST /jobs/{job_id}/archive - Close a posting
POST /jobs/{job_id}/applicants - Count a new applicant against the posting
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from hr360.core.auth import get_current_hr_user
from hr360.schemas.schemas import JobCreate, JobStatusUpdate, JobResponse, JobStatus, JobSource
from hr360.services.records_service import JobRepository

router = APIRouter(prefix="/jobs", tags=["Jobs"], dependencies=[Depends(get_current_hr_user)])


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate):
    """Create a new job posting."""
    return JobRepository().create(job.model_dump())


@router.get("", response_model=List[JobResponse])
async def list_jobs(
    status: Optional[JobStatus] = Query(None),
    source: Optional[JobSource] = Query(None)
):
    return JobRepository().list(status=status, source=source)


@router.get("/archive", response_model=List[JobResponse])
async def archived_jobs():
    return JobRepository().list(status=JobStatus.closed)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: int):
    return JobRepository().get(job_id)


@router.put("/{job_id}/status", response_model=JobResponse)
async def update_status(job_id: int, update: JobStatusUpdate):
    return JobRepository().set_status(job_id, update.status)


@router.post("/{job_id}/archive", response_model=JobResponse)
async def archive_job(job_id: int):
    return JobRepository().archive(job_id)


@router.post("/{job_id}/applicants", response_model=JobResponse)
async def increment_applicants(job_id: int):
    return JobRepository().increment_applicants(job_id)
