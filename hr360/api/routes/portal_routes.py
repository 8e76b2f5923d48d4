"""
Candidate Portal Routes (public, addressed by applicant ID)

GET /portal/{id} - Applicant view and whether a test is waiting
POST /portal/{id}/aptitude/start - Generate the assigned aptitude test
POST /portal/{id}/aptitude/submit - Score it and save "c / t" on the record
POST /portal/{id}/typing/start - Generate a role-specific typing text
POST /portal/{id}/typing/submit - Score it and save WPM/accuracy

Submitting clears assigned_test, so a test can't be retaken unless
HR assigns it again.
"""

from fastapi import APIRouter, HTTPException

from hr360.core.config import get_settings
from hr360.schemas.schemas import (
    PortalResponse, AptitudeSessionResponse, AptitudeSubmission, AptitudeResult,
    TypingSessionResponse, TypingSubmission, TypingResult, AssignedTest
)
from hr360.schemas.flow_schemas import AptitudeTestInput, TypingTestInput
from hr360.services import assessment_service
from hr360.services.flow_runner import run_flow
from hr360.services.records_service import ApplicantRepository

router = APIRouter(prefix="/portal", tags=["Candidate Portal"])


def _applicant_with_test(applicant_id: int, test: AssignedTest) -> dict:
    applicant = ApplicantRepository().get(applicant_id)
    if applicant["assigned_test"] != test.value:
        raise HTTPException(status_code=409, detail=f"No {test.value} test is assigned to this applicant")
    return applicant


@router.get("/{applicant_id}", response_model=PortalResponse)
async def get_portal(applicant_id: int):
    applicant = ApplicantRepository().get(applicant_id)
    return PortalResponse(applicant=applicant, has_pending_test=applicant["assigned_test"] is not None)


# ============================================================
# APTITUDE
# ============================================================

@router.post("/{applicant_id}/aptitude/start", response_model=AptitudeSessionResponse)
async def start_aptitude(applicant_id: int):
    applicant = _applicant_with_test(applicant_id, AssignedTest.aptitude)
    settings = get_settings()

    test = await run_flow("aptitude_test", AptitudeTestInput(
        topic="Comprehensive",
        role=applicant["role"],
        num_questions=settings.aptitude_default_questions,
        time_limit_minutes=settings.aptitude_default_minutes,
        difficulty="medium"
    ))
    return assessment_service.start_aptitude_session(
        test, settings.aptitude_default_minutes, applicant_id=applicant_id
    )


@router.post("/{applicant_id}/aptitude/submit", response_model=AptitudeResult)
async def submit_aptitude(applicant_id: int, submission: AptitudeSubmission):
    _applicant_with_test(applicant_id, AssignedTest.aptitude)
    return assessment_service.submit_aptitude_session(
        submission.session_id, submission.answers, applicant_id=applicant_id,
        save=lambda result: ApplicantRepository().record_aptitude_result(applicant_id, result.score)
    )


# ============================================================
# TYPING
# ============================================================

@router.post("/{applicant_id}/typing/start", response_model=TypingSessionResponse)
async def start_typing(applicant_id: int):
    applicant = _applicant_with_test(applicant_id, AssignedTest.typing)
    generated = await run_flow("typing_test", TypingTestInput(job_role=applicant["role"]))
    return assessment_service.start_typing_session(generated.test_content, applicant_id=applicant_id)


@router.post("/{applicant_id}/typing/submit", response_model=TypingResult)
async def submit_typing(applicant_id: int, submission: TypingSubmission):
    _applicant_with_test(applicant_id, AssignedTest.typing)
    if not submission.session_id:
        raise HTTPException(status_code=400, detail="session_id is required")
    return assessment_service.submit_typing_session(
        submission.session_id, submission.typed_text, submission.elapsed_seconds, applicant_id=applicant_id,
        save=lambda result: ApplicantRepository().record_typing_result(applicant_id, result.wpm, result.accuracy)
    )
