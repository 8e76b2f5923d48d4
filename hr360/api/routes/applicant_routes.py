"""
Applicant Routes

Public (kiosk):
POST /applicants/register - Walk-in self-registration
POST /applicants/register/resume - Read a resume photo/file to prefill the form

HR only:
GET /applicants - List applicants (status filter, search)
GET /applicants/pipeline - Count per pipeline status
GET /applicants/{id} - Applicant details
POST /applicants - Add applicant manually
PATCH /applicants/{id} - Update details
PUT /applicants/{id}/status - Move through the pipeline
PUT /applicants/{id}/assign-test - Assign aptitude or typing test
POST /applicants/{id}/resume - Upload resume, extract details with AI
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Query, UploadFile, File
from pymongo.errors import PyMongoError

from hr360.core.auth import get_current_hr_user
from hr360.core.logging_config import get_logger
from hr360.schemas.schemas import (
    WalkInRegistration, ApplicantCreate, ApplicantUpdate, ApplicantStatusUpdate,
    AssignTestRequest, ApplicantResponse, ApplicantStatus, PipelineCount
)
from hr360.schemas.flow_schemas import ResumeProcessorInput, ResumeProcessorOutput
from hr360.services.records_service import ApplicantRepository
from hr360.services.mongo_service import RawResumeService
from hr360.services.flow_runner import run_flow
from hr360.utils.data_uri import to_data_uri
from hr360.utils.file_upload import read_upload

router = APIRouter(prefix="/applicants", tags=["Applicants"])
logger = get_logger("hr360.api")

WALK_IN_ROLE = "Walk-in Applicant"
WALK_IN_SOURCE = "Walk-in Kiosk"


def _ensure_email_free(repo: ApplicantRepository, email: str):
    if repo.get_by_email(email):
        raise HTTPException(status_code=409, detail="An applicant with this email already exists")


# ============================================================
# PUBLIC (KIOSK)
# ============================================================

@router.post("/register", response_model=ApplicantResponse, status_code=201)
async def register_walk_in(registration: WalkInRegistration):
    """
    Walk-in registration from the kiosk.

    Role, source and status are fixed; HR reassigns them later.
    """
    repo = ApplicantRepository()
    _ensure_email_free(repo, registration.email)

    applicant = repo.create({
        **registration.model_dump(),
        "role": WALK_IN_ROLE,
        "source": WALK_IN_SOURCE,
        "status": ApplicantStatus.new,
    })
    logger.info(f"Walk-in applicant registered: {applicant['id']}")
    return applicant


@router.post("/register/resume", response_model=ResumeProcessorOutput)
async def read_walk_in_resume(file: UploadFile = File(...)):
    """Extract name, email, phone and summary to prefill the kiosk form."""
    content, filename, mime_type = await read_upload(file)
    return await run_flow("resume_processor", ResumeProcessorInput(resume_data_uri=to_data_uri(content, mime_type)))


# ============================================================
# HR
# ============================================================

@router.get("", response_model=List[ApplicantResponse])
async def list_applicants(
    status: Optional[ApplicantStatus] = Query(None),
    search: Optional[str] = Query(None, description="Search in name or email"),
    limit: int = Query(100, ge=1, le=500),
    user: dict = Depends(get_current_hr_user)
):
    """List applicants, newest first."""
    return ApplicantRepository().list(status=status, search=search, limit=limit)


@router.get("/pipeline", response_model=List[PipelineCount])
async def pipeline_counts(user: dict = Depends(get_current_hr_user)):
    """Number of applicants at each pipeline stage."""
    return ApplicantRepository().pipeline_counts()


@router.get("/{applicant_id}", response_model=ApplicantResponse)
async def get_applicant(applicant_id: int, user: dict = Depends(get_current_hr_user)):
    return ApplicantRepository().get(applicant_id)


@router.post("", response_model=ApplicantResponse, status_code=201)
async def create_applicant(applicant: ApplicantCreate, user: dict = Depends(get_current_hr_user)):
    """Add an applicant from the dashboard form."""
    repo = ApplicantRepository()
    _ensure_email_free(repo, applicant.email)
    return repo.create(applicant.model_dump())


@router.patch("/{applicant_id}", response_model=ApplicantResponse)
async def update_applicant(applicant_id: int, update: ApplicantUpdate, user: dict = Depends(get_current_hr_user)):
    return ApplicantRepository().update(applicant_id, update.model_dump(exclude_unset=True))


@router.put("/{applicant_id}/status", response_model=ApplicantResponse)
async def update_status(applicant_id: int, update: ApplicantStatusUpdate, user: dict = Depends(get_current_hr_user)):
    return ApplicantRepository().set_status(applicant_id, update.status, update.hr_notes)


@router.put("/{applicant_id}/assign-test", response_model=ApplicantResponse)
async def assign_test(applicant_id: int, request: AssignTestRequest, user: dict = Depends(get_current_hr_user)):
    """The candidate sees the test on their portal until they submit it."""
    applicant = ApplicantRepository().assign_test(applicant_id, request.test)
    logger.info(f"Assigned {request.test.value} test to applicant {applicant_id}")
    return applicant


@router.post("/{applicant_id}/resume")
async def upload_resume(
    applicant_id: int,
    file: UploadFile = File(...),
    user: dict = Depends(get_current_hr_user)
):
    """
    Upload a resume (PDF, DOCX, TXT or image).

    The raw file is kept in MongoDB; the extracted text and summary
    are written to the applicant record.
    """
    repo = ApplicantRepository()
    repo.get(applicant_id)

    content, filename, mime_type = await read_upload(file)
    data_uri = to_data_uri(content, mime_type)

    raw_service = RawResumeService()
    try:
        raw_id = raw_service.insert(applicant_id, data_uri, filename)
    except PyMongoError as e:
        logger.warning(f"Could not store raw resume for applicant {applicant_id}: {e}")
        raw_id = None

    extracted = await run_flow(
        "resume_processor", ResumeProcessorInput(resume_data_uri=data_uri), user_id=user["user_id"]
    )

    applicant = repo.update(applicant_id, {
        "resume_text": extracted.raw_text,
        "resume_summary": extracted.summary,
    })
    if raw_id:
        raw_service.mark_as_processed(raw_id)

    return {
        "applicant": ApplicantResponse(**applicant),
        "extracted": extracted,
        "raw_resume_id": raw_id,
    }
