"""
Assessment Service - aptitude and typing test sessions.

A session is created when a test is generated and holds everything needed
to score it later (questions with answers, or the reference text). The
candidate only ever receives the public part. Each session can be
submitted once.
"""

from datetime import datetime
from typing import Callable, List, Optional

from fastapi import HTTPException
from pydantic import BaseModel

from hr360.core.config import get_settings
from hr360.core.logging_config import get_logger
from hr360.schemas.flow_schemas import AptitudeTestOutput
from hr360.schemas.schemas import (
    AptitudeSessionResponse, AptitudeResult, PublicQuestion, TypingSessionResponse, TypingResult
)
from hr360.services.mongo_service import AssessmentSessionService
from hr360.services.scoring_service import (
    score_aptitude, format_aptitude_score, compute_typing_metrics
)

logger = get_logger("hr360.assessments")

APTITUDE = "aptitude"
TYPING = "typing"

ALREADY_SUBMITTED = "This test has already been submitted"


def _load_session(sessions: AssessmentSessionService, session_id: str, kind: str,
                  applicant_id: Optional[int]) -> dict:
    session = sessions.get(session_id)
    if not session or session["kind"] != kind or session.get("applicant_id") != applicant_id:
        raise HTTPException(status_code=404, detail="Assessment session not found")
    if session.get("submitted_at"):
        raise HTTPException(status_code=409, detail=ALREADY_SUBMITTED)
    return session


def _claim(sessions: AssessmentSessionService, session_id: str, result: BaseModel,
           save: Optional[Callable[[BaseModel], object]]):
    """
    Mark the session submitted, then run save(result).

    The claim is atomic, so a concurrent second submission gets 409. If
    save fails the claim is released and the candidate can submit again.
    """
    if not sessions.mark_submitted(session_id, result.model_dump()):
        raise HTTPException(status_code=409, detail=ALREADY_SUBMITTED)
    if save is None:
        return
    try:
        save(result)
    except Exception:
        logger.error(f"Saving result of session {session_id} failed, releasing it")
        sessions.release(session_id)
        raise


# ============================================================
# APTITUDE
# ============================================================

def start_aptitude_session(test: AptitudeTestOutput, time_limit_minutes: int,
                           applicant_id: Optional[int] = None) -> AptitudeSessionResponse:
    """Store the full test; return it without answers or explanations."""
    session_id = AssessmentSessionService().create(
        APTITUDE,
        {**test.model_dump(), "time_limit_minutes": time_limit_minutes},
        applicant_id=applicant_id
    )
    return AptitudeSessionResponse(
        session_id=session_id,
        test_name=test.test_name,
        test_instructions=test.test_instructions,
        time_limit_minutes=time_limit_minutes,
        questions=[
            PublicQuestion(question_text=q.question_text, question_image=q.question_image, options=q.options)
            for q in test.questions
        ]
    )


def submit_aptitude_session(session_id: str, answers: List[str], applicant_id: Optional[int] = None,
                            save: Optional[Callable[[AptitudeResult], object]] = None) -> AptitudeResult:
    sessions = AssessmentSessionService()
    session = _load_session(sessions, session_id, APTITUDE, applicant_id)

    questions = session["content"]["questions"]
    correct = score_aptitude(answers, questions)
    result = AptitudeResult(
        correct=correct,
        total=len(questions),
        score=format_aptitude_score(correct, len(questions)),
        explanations=[q["explanation"] for q in questions]
    )
    _claim(sessions, session_id, result, save)
    logger.info(f"Aptitude session {session_id} scored {result.score}")
    return result


# ============================================================
# TYPING
# ============================================================

def start_typing_session(test_content: str, applicant_id: Optional[int] = None) -> TypingSessionResponse:
    duration = get_settings().typing_test_duration_seconds
    session_id = AssessmentSessionService().create(
        TYPING,
        {"test_content": test_content, "duration_seconds": duration},
        applicant_id=applicant_id
    )
    return TypingSessionResponse(session_id=session_id, test_content=test_content, duration_seconds=duration)


def submit_typing_session(session_id: str, typed_text: str, elapsed_seconds: Optional[float] = None,
                          applicant_id: Optional[int] = None,
                          save: Optional[Callable[[TypingResult], object]] = None) -> TypingResult:
    """
    Score against the stored reference text. When the client does not
    report elapsed time, the time since the session started is used.
    """
    sessions = AssessmentSessionService()
    session = _load_session(sessions, session_id, TYPING, applicant_id)
    content = session["content"]

    if elapsed_seconds is None:
        elapsed_seconds = (datetime.utcnow() - session["created_at"]).total_seconds()

    metrics = compute_typing_metrics(
        content["test_content"], typed_text, elapsed_seconds, content["duration_seconds"]
    )
    result = TypingResult(**metrics.to_dict())
    _claim(sessions, session_id, result, save)
    logger.info(f"Typing session {session_id}: {result.wpm} WPM, {result.accuracy}% accuracy")
    return result
