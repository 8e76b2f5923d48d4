#!/usr/bin/env python3
"""
Candidate Portal and Assessment Center Tests

1. Assigned aptitude test: answers hidden, "c / t" saved, no retake
2. Assigned typing test: WPM/accuracy saved
3. Public practice tests

Run: pytest scripts/test_portal.py
"""
from datetime import datetime, timedelta

from sqlalchemy.exc import OperationalError

from hr360.services.records_service import ApplicantRepository


def _aptitude_reply(answers):
    return {
        "test_name": "Comprehensive Aptitude Test",
        "questions": [
            {
                "question_text": f"Question {i + 1}?",
                "image_prompt": None,
                "options": ["A", "B", "C", "D"],
                "correct_answer": answer,
                "explanation": f"The answer is {answer}.",
            }
            for i, answer in enumerate(answers)
        ],
        "cheating_prevention_tips": ["Full-screen mode."],
        "test_instructions": "You have 10 minutes.",
    }


def _assign(client, headers, applicant_id, test):
    response = client.put(f"/api/applicants/{applicant_id}/assign-test", headers=headers, json={"test": test})
    assert response.status_code == 200


# ============================================================
# PORTAL - APTITUDE
# ============================================================

def test_portal_shows_pending_test(client, auth_headers, make_applicant):
    applicant = make_applicant()
    assert client.get(f"/api/portal/{applicant['id']}").json()["has_pending_test"] is False

    _assign(client, auth_headers, applicant["id"], "aptitude")
    body = client.get(f"/api/portal/{applicant['id']}").json()
    assert body["has_pending_test"] is True
    assert body["applicant"]["assigned_test"] == "aptitude"


def test_portal_unknown_applicant(client):
    assert client.get("/api/portal/999999").status_code == 404


def test_aptitude_flow_records_score(client, auth_headers, make_applicant, llm):
    applicant = make_applicant()
    _assign(client, auth_headers, applicant["id"], "aptitude")

    llm.reply_with(_aptitude_reply(["A", "B", "C", "D", "A"]))
    response = client.post(f"/api/portal/{applicant['id']}/aptitude/start")
    assert response.status_code == 200, response.text
    session = response.json()
    assert len(session["questions"]) == 5
    assert "correct_answer" not in session["questions"][0]
    assert "explanation" not in session["questions"][0]
    assert 'for a "Walk-in Applicant" position' in llm.calls[-1]["user_content"]

    response = client.post(f"/api/portal/{applicant['id']}/aptitude/submit", json={
        "session_id": session["session_id"], "answers": ["A", "B", "C", "A", "B"],
    })
    assert response.status_code == 200
    result = response.json()
    assert result["score"] == "3 / 5"
    assert result["correct"] == 3
    assert result["explanations"][0] == "The answer is A."

    record = client.get(f"/api/applicants/{applicant['id']}", headers=auth_headers).json()
    assert record["aptitude_score"] == "3 / 5"
    assert record["assigned_test"] is None


def test_aptitude_cannot_be_resubmitted(client, auth_headers, make_applicant, llm):
    applicant = make_applicant()
    _assign(client, auth_headers, applicant["id"], "aptitude")
    llm.reply_with(_aptitude_reply(["A"] * 5))
    session = client.post(f"/api/portal/{applicant['id']}/aptitude/start").json()

    submission = {"session_id": session["session_id"], "answers": ["A"] * 5}
    assert client.post(f"/api/portal/{applicant['id']}/aptitude/submit", json=submission).status_code == 200

    # HR re-assigns, but the old session is spent
    _assign(client, auth_headers, applicant["id"], "aptitude")
    response = client.post(f"/api/portal/{applicant['id']}/aptitude/submit", json=submission)
    assert response.status_code == 409


def test_session_belongs_to_applicant(client, auth_headers, make_applicant, llm):
    owner = make_applicant()
    other = make_applicant()
    for applicant in (owner, other):
        _assign(client, auth_headers, applicant["id"], "aptitude")

    llm.reply_with(_aptitude_reply(["A"] * 5))
    session = client.post(f"/api/portal/{owner['id']}/aptitude/start").json()
    response = client.post(f"/api/portal/{other['id']}/aptitude/submit", json={
        "session_id": session["session_id"], "answers": ["A"] * 5,
    })
    assert response.status_code == 404


def test_unassigned_test_is_conflict(client, make_applicant, llm):
    applicant = make_applicant()
    assert client.post(f"/api/portal/{applicant['id']}/aptitude/start").status_code == 409
    assert client.post(f"/api/portal/{applicant['id']}/typing/start").status_code == 409
    assert llm.calls == []


# ============================================================
# PORTAL - TYPING
# ============================================================

def test_typing_flow_records_metrics(client, auth_headers, make_applicant, llm):
    applicant = make_applicant()
    _assign(client, auth_headers, applicant["id"], "typing")

    llm.reply_with({"test_content": "cat"})
    session = client.post(f"/api/portal/{applicant['id']}/typing/start").json()
    assert session["test_content"] == "cat"
    assert session["duration_seconds"] == 60

    response = client.post(f"/api/portal/{applicant['id']}/typing/submit", json={
        "session_id": session["session_id"], "typed_text": "cab", "elapsed_seconds": 60,
    })
    assert response.status_code == 200
    assert response.json()["accuracy"] == 67
    assert response.json()["wpm"] == 1

    record = client.get(f"/api/applicants/{applicant['id']}", headers=auth_headers).json()
    assert record["typing_wpm"] == 1
    assert record["typing_accuracy"] == 67
    assert record["assigned_test"] is None


def test_typing_submit_requires_session(client, auth_headers, make_applicant):
    applicant = make_applicant()
    _assign(client, auth_headers, applicant["id"], "typing")
    response = client.post(f"/api/portal/{applicant['id']}/typing/submit", json={"typed_text": "cab"})
    assert response.status_code == 400


# ============================================================
# ASSESSMENT CENTER
# ============================================================

def test_practice_typing_uses_sample_text(client, llm):
    from hr360.services.scoring_service import SAMPLE_TYPING_TEXT

    session = client.post("/api/assessments/typing/start").json()
    assert session["test_content"] == SAMPLE_TYPING_TEXT
    assert llm.calls == []

    response = client.post("/api/assessments/typing/submit", json={
        "session_id": session["session_id"], "typed_text": SAMPLE_TYPING_TEXT, "elapsed_seconds": 60,
    })
    assert response.json()["accuracy"] == 100


def test_practice_typing_for_role(client, llm):
    llm.reply_with({"test_content": "Reconcile the ledger before the quarter closes."})
    session = client.post("/api/assessments/typing/start", params={"role": "Accountant"}).json()
    assert session["test_content"] == "Reconcile the ledger before the quarter closes."


def test_sessionless_typing_needs_elapsed_time(client):
    response = client.post("/api/assessments/typing/submit", json={"typed_text": "The quick"})
    assert response.status_code == 400

    response = client.post("/api/assessments/typing/submit", json={"typed_text": "", "elapsed_seconds": 30})
    assert response.json()["accuracy"] == 0
    assert response.json()["wpm"] == 0


def test_practice_aptitude(client, llm):
    llm.reply_with(_aptitude_reply(["B"] * 5))
    response = client.post("/api/assessments/aptitude/start", json={
        "topic": "Logical", "num_questions": 5, "time_limit_minutes": 15, "difficulty": "hard",
    })
    assert response.status_code == 200
    session = response.json()
    assert session["time_limit_minutes"] == 15

    result = client.post("/api/assessments/aptitude/submit", json={
        "session_id": session["session_id"], "answers": ["B", "B"],
    }).json()
    assert result["score"] == "2 / 5"


def test_practice_aptitude_validates_question_count(client, llm):
    response = client.post("/api/assessments/aptitude/start", json={
        "topic": "Logical", "num_questions": 3, "time_limit_minutes": 15, "difficulty": "hard",
    })
    assert response.status_code == 400
    assert "num_questions" in response.json()["details"]
    assert llm.calls == []


def test_unknown_session_is_404(client):
    response = client.post("/api/assessments/aptitude/submit", json={"session_id": "nope", "answers": []})
    assert response.status_code == 404


# ============================================================
# RESULT WRITE FAILURES
# ============================================================

def test_failed_score_write_lets_candidate_retry(client, auth_headers, make_applicant, llm, monkeypatch):
    applicant = make_applicant()
    _assign(client, auth_headers, applicant["id"], "aptitude")
    llm.reply_with(_aptitude_reply(["A"] * 5))
    session = client.post(f"/api/portal/{applicant['id']}/aptitude/start").json()

    original = ApplicantRepository.record_aptitude_result
    failures = []

    def fails_once(self, applicant_id, score):
        if not failures:
            failures.append(score)
            raise OperationalError("UPDATE applicants", {}, Exception("connection reset"))
        return original(self, applicant_id, score)

    monkeypatch.setattr(ApplicantRepository, "record_aptitude_result", fails_once)
    submission = {"session_id": session["session_id"], "answers": ["A"] * 5}

    assert client.post(f"/api/portal/{applicant['id']}/aptitude/submit", json=submission).status_code == 500
    record = client.get(f"/api/applicants/{applicant['id']}", headers=auth_headers).json()
    assert record["assigned_test"] == "aptitude"
    assert record["aptitude_score"] is None

    response = client.post(f"/api/portal/{applicant['id']}/aptitude/submit", json=submission)
    assert response.status_code == 200
    assert response.json()["score"] == "5 / 5"
    record = client.get(f"/api/applicants/{applicant['id']}", headers=auth_headers).json()
    assert record["aptitude_score"] == "5 / 5"
    assert record["assigned_test"] is None


def test_practice_typing_without_elapsed_uses_session_age(client, fake_mongo):
    session = client.post("/api/assessments/typing/start").json()
    fake_mongo["assessment_sessions"].docs[-1]["created_at"] = datetime.utcnow() - timedelta(seconds=30)

    response = client.post("/api/assessments/typing/submit", json={
        "session_id": session["session_id"], "typed_text": "x" * 50,
    })
    assert response.status_code == 200
    assert response.json()["wpm"] == 20
