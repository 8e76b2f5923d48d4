#!/usr/bin/env python3
"""
Assessment Session Tests (service level, in-memory Mongo)

1. A session is submitted exactly once, even when two submissions race
2. A failed result write releases the session
3. Typing elapsed time falls back to the session age

Run: pytest scripts/test_assessment_sessions.py
"""
from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException

from hr360.services import assessment_service
from hr360.services.mongo_service import AssessmentSessionService


def _typing_session(text="cat"):
    return assessment_service.start_typing_session(text).session_id


def test_mark_submitted_only_once():
    sessions = AssessmentSessionService()
    session_id = _typing_session()
    assert sessions.mark_submitted(session_id, {"wpm": 1}) is True
    assert sessions.mark_submitted(session_id, {"wpm": 99}) is False
    assert sessions.get(session_id)["result"] == {"wpm": 1}


def test_racing_submissions_score_once(monkeypatch):
    session_id = _typing_session()
    unsubmitted = AssessmentSessionService().get(session_id)

    # Both submissions read the session before either one writes
    monkeypatch.setattr(AssessmentSessionService, "get", lambda self, sid: dict(unsubmitted))
    saved = []

    assessment_service.submit_typing_session(session_id, "cat", 60, save=saved.append)
    with pytest.raises(HTTPException) as exc:
        assessment_service.submit_typing_session(session_id, "cab", 60, save=saved.append)

    assert exc.value.status_code == 409
    assert [r.accuracy for r in saved] == [100]


def test_failed_save_releases_session():
    session_id = _typing_session()

    def broken_save(result):
        raise RuntimeError("database is restarting")

    with pytest.raises(RuntimeError):
        assessment_service.submit_typing_session(session_id, "cat", 60, save=broken_save)
    assert AssessmentSessionService().get(session_id)["submitted_at"] is None

    result = assessment_service.submit_typing_session(session_id, "cat", 60)
    assert result.accuracy == 100


def test_elapsed_defaults_to_session_age(fake_mongo):
    session_id = _typing_session("x" * 100)
    fake_mongo["assessment_sessions"].docs[-1]["created_at"] = datetime.utcnow() - timedelta(seconds=30)

    # 50 chars = 10 words in half a minute
    result = assessment_service.submit_typing_session(session_id, "x" * 50)
    assert result.wpm == 20
    assert 30 <= result.elapsed_seconds < 35


def test_session_age_is_capped_at_duration(fake_mongo):
    session_id = _typing_session("x" * 100)
    fake_mongo["assessment_sessions"].docs[-1]["created_at"] = datetime.utcnow() - timedelta(minutes=10)

    result = assessment_service.submit_typing_session(session_id, "x" * 50)
    assert result.elapsed_seconds == 60
    assert result.wpm == 10
