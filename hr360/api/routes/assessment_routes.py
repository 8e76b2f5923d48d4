"""
Assessment Center Routes (public practice tests, no applicant record)

POST /assessments/aptitude/start - Generate an aptitude test session
POST /assessments/aptitude/submit - Score a session
POST /assessments/typing/start - Typing session (sample text, or role-specific if a role is given)
POST /assessments/typing/submit - Score a typing attempt
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from hr360.core.config import get_settings
from hr360.schemas.schemas import (
    AptitudeSessionResponse, AptitudeSubmission, AptitudeResult,
    TypingSessionResponse, TypingSubmission, TypingResult
)
from hr360.schemas.flow_schemas import AptitudeTestInput, TypingTestInput
from hr360.services import assessment_service
from hr360.services.flow_runner import run_flow
from hr360.services.scoring_service import SAMPLE_TYPING_TEXT, compute_typing_metrics

router = APIRouter(prefix="/assessments", tags=["Assessment Center"])


@router.post("/aptitude/start", response_model=AptitudeSessionResponse)
async def start_aptitude(request: AptitudeTestInput):
    test = await run_flow("aptitude_test", request)
    return assessment_service.start_aptitude_session(test, request.time_limit_minutes)


@router.post("/aptitude/submit", response_model=AptitudeResult)
async def submit_aptitude(submission: AptitudeSubmission):
    return assessment_service.submit_aptitude_session(submission.session_id, submission.answers)


@router.post("/typing/start", response_model=TypingSessionResponse)
async def start_typing(role: Optional[str] = Query(None, min_length=2, description="Job role for a tailored text")):
    if role:
        generated = await run_flow("typing_test", TypingTestInput(job_role=role))
        return assessment_service.start_typing_session(generated.test_content)
    return assessment_service.start_typing_session(SAMPLE_TYPING_TEXT)


@router.post("/typing/submit", response_model=TypingResult)
async def submit_typing(submission: TypingSubmission):
    """
    With a session_id the stored text is used. Without one, the attempt is
    scored against the sample text and elapsed_seconds is required.
    """
    if submission.session_id:
        return assessment_service.submit_typing_session(
            submission.session_id, submission.typed_text, submission.elapsed_seconds
        )
    if submission.elapsed_seconds is None:
        raise HTTPException(status_code=400, detail="elapsed_seconds is required without a session_id")

    metrics = compute_typing_metrics(
        SAMPLE_TYPING_TEXT,
        submission.typed_text,
        submission.elapsed_seconds,
        get_settings().typing_test_duration_seconds
    )
    return TypingResult(**metrics.to_dict())
