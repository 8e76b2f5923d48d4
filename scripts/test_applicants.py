#!/usr/bin/env python3
"""
Applicant API Tests

1. Walk-in registration (fixed role/source/status, validation errors)
2. HR pipeline operations
3. Resume upload through the resume_processor flow

Run: pytest scripts/test_applicants.py
"""
from conftest import unique_email


# ============================================================
# WALK-IN REGISTRATION
# ============================================================

def test_walk_in_registration_sets_fixed_fields(client):
    email = unique_email("walkin")
    response = client.post("/api/applicants/register", json={
        "full_name": "Arjun Mehta",
        "email": email,
        "phone": "+919812345678",
        "resume_summary": "Customer support lead with six years of experience.",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["id"] > 0
    assert body["email"] == email
    assert body["role"] == "Walk-in Applicant"
    assert body["source"] == "Walk-in Kiosk"
    assert body["status"] == "New"
    assert body["assigned_test"] is None


def test_walk_in_registration_ignores_client_role(client):
    response = client.post("/api/applicants/register", json={
        "full_name": "Arjun Mehta", "email": unique_email(), "phone": "+919812345678",
        "role": "CEO", "status": "Hired",
    })
    assert response.status_code == 201
    assert response.json()["role"] == "Walk-in Applicant"
    assert response.json()["status"] == "New"


def test_invalid_registration_returns_field_errors(client):
    response = client.post("/api/applicants/register", json={
        "full_name": "A", "email": "not-an-email", "phone": "123",
    })
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input"
    assert set(body["details"]) == {"full_name", "email", "phone"}
    assert all(isinstance(messages, list) and messages for messages in body["details"].values())


def test_duplicate_email_is_rejected(client, make_applicant):
    applicant = make_applicant()
    response = client.post("/api/applicants/register", json={
        "full_name": "Someone Else", "email": applicant["email"], "phone": "+919812345678",
    })
    assert response.status_code == 409


# ============================================================
# HR OPERATIONS
# ============================================================

def test_dashboard_routes_require_auth(client):
    assert client.get("/api/applicants").status_code in (401, 403)


def test_create_and_search_applicants(client, auth_headers):
    email = unique_email("search")
    response = client.post("/api/applicants", headers=auth_headers, json={
        "full_name": "Meera Krishnan", "email": email, "role": "Backend Developer", "source": "LinkedIn",
    })
    assert response.status_code == 201
    applicant_id = response.json()["id"]

    results = client.get("/api/applicants", headers=auth_headers, params={"search": "meera krish"}).json()
    assert applicant_id in [a["id"] for a in results]

    results = client.get("/api/applicants", headers=auth_headers, params={"search": email.upper()}).json()
    assert [a["id"] for a in results] == [applicant_id]


def test_status_change_and_filter(client, auth_headers, make_applicant):
    applicant = make_applicant()
    response = client.put(
        f"/api/applicants/{applicant['id']}/status", headers=auth_headers,
        json={"status": "Interview Scheduled", "hr_notes": "Strong communicator"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Interview Scheduled"
    assert response.json()["hr_notes"] == "Strong communicator"

    scheduled = client.get("/api/applicants", headers=auth_headers, params={"status": "Interview Scheduled"}).json()
    assert applicant["id"] in [a["id"] for a in scheduled]
    assert all(a["status"] == "Interview Scheduled" for a in scheduled)


def test_unknown_status_is_rejected(client, auth_headers, make_applicant):
    applicant = make_applicant()
    response = client.put(
        f"/api/applicants/{applicant['id']}/status", headers=auth_headers, json={"status": "Maybe"}
    )
    assert response.status_code == 400
    assert "status" in response.json()["details"]


def test_partial_update(client, auth_headers, make_applicant):
    applicant = make_applicant()
    response = client.patch(
        f"/api/applicants/{applicant['id']}", headers=auth_headers, json={"college": "Vellore Institute of Technology"}
    )
    assert response.status_code == 200
    assert response.json()["college"] == "Vellore Institute of Technology"
    assert response.json()["full_name"] == applicant["full_name"]


def test_missing_applicant_is_404(client, auth_headers):
    assert client.get("/api/applicants/999999", headers=auth_headers).status_code == 404


def test_pipeline_lists_every_status(client, auth_headers, make_applicant):
    make_applicant()
    counts = client.get("/api/applicants/pipeline", headers=auth_headers).json()
    statuses = [c["status"] for c in counts]
    assert statuses[0] == "New"
    assert len(statuses) == 8
    assert next(c["count"] for c in counts if c["status"] == "New") >= 1


def test_assign_test(client, auth_headers, make_applicant):
    applicant = make_applicant()
    response = client.put(
        f"/api/applicants/{applicant['id']}/assign-test", headers=auth_headers, json={"test": "typing"}
    )
    assert response.status_code == 200
    assert response.json()["assigned_test"] == "typing"


# ============================================================
# RESUME UPLOAD
# ============================================================

def test_resume_upload_fills_applicant_record(client, auth_headers, make_applicant, llm, fake_mongo):
    applicant = make_applicant()
    llm.reply_with({
        "full_name": "Priya Raman", "email": "priya@acme.com", "phone": "+919876543210",
        "summary": "Data analyst with four years of SQL.", "raw_text": "Priya Raman\nSQL, Python",
    })
    response = client.post(
        f"/api/applicants/{applicant['id']}/resume", headers=auth_headers,
        files={"file": ("resume.txt", b"Priya Raman\nSQL, Python", "text/plain")}
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["applicant"]["resume_summary"] == "Data analyst with four years of SQL."
    assert body["extracted"]["full_name"] == "Priya Raman"

    raw = fake_mongo["raw_resumes"].docs[-1]
    assert raw["applicant_id"] == applicant["id"]
    assert raw["is_processed"] is True
    run = fake_mongo["flow_runs"].docs[-1]
    assert run["flow"] == "resume_processor"
    assert run["input"]["resume_data_uri"].startswith("<data uri")


def test_resume_upload_rejects_unknown_extension(client, auth_headers, make_applicant):
    applicant = make_applicant()
    response = client.post(
        f"/api/applicants/{applicant['id']}/resume", headers=auth_headers,
        files={"file": ("resume.exe", b"MZ", "application/octet-stream")}
    )
    assert response.status_code == 400


def test_kiosk_resume_read_prefills_form(client, llm):
    llm.reply_with({
        "full_name": "Arjun Mehta", "email": "arjun@acme.com", "phone": "",
        "summary": "Support lead.", "raw_text": "Arjun Mehta",
    })
    response = client.post(
        "/api/applicants/register/resume",
        files={"file": ("photo.jpg", b"\xff\xd8\xff\xe0", "image/jpeg")}
    )
    assert response.status_code == 200
    assert response.json()["phone"] == ""
    assert isinstance(llm.calls[-1]["user_content"], list)


def test_flow_failure_is_reported_as_502(client, llm):
    llm.reply_with("not json")
    response = client.post(
        "/api/applicants/register/resume",
        files={"file": ("resume.txt", b"Arjun Mehta", "text/plain")}
    )
    assert response.status_code == 502
    assert response.json() == {"error": "AI flow failed", "flow": "resume_processor", "message": response.json()["message"]}
