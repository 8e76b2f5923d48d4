#!/usr/bin/env python3
"""
Demo Data Seeder

Fills every table with a small, realistic data set. Safe to run again:
rows are upserted on their natural keys, analytics is replaced.

Usage: python scripts/seed_data.py
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from hr360.db.postgres import get_db_session, init_schema
from hr360.core.logging_config import setup_base_logging

AVATAR = "https://placehold.co/100x100.png"

EMPLOYEES = [
    {"name": "Alice Johnson", "role": "Software Engineer", "status": "Remote", "email": "alice.j@hr360.com", "points": 1200},
    {"name": "Bob Williams", "role": "Product Manager", "status": "Office", "email": "bob.w@hr360.com", "points": 950},
    {"name": "Charlie Brown", "role": "UX Designer", "status": "Leave", "email": "charlie.b@hr360.com", "points": 800},
    {"name": "Diana Miller", "role": "Data Scientist", "status": "Remote", "email": "diana.m@hr360.com", "points": 1500},
    {"name": "Ethan Davis", "role": "DevOps Engineer", "status": "Probation", "email": "ethan.d@hr360.com", "points": 300},
]

APPLICANTS = [
    {"full_name": "Charlie Davis", "email": "charlie.d@example.com", "phone": "+1234567890", "status": "Pending Review",
     "role": "Chat Support", "source": "Email", "college": "State University",
     "resume_summary": "Experienced chat support specialist with a track record of high customer satisfaction scores."},
    {"full_name": "Diana Smith", "email": "diana.s@example.com", "phone": "+1987654321", "status": "Interview Scheduled",
     "role": "Product Manager", "source": "LinkedIn", "college": "Ivy League College",
     "resume_summary": "Results-driven Product Manager with 5+ years of experience in agile environments."},
    {"full_name": "Ethan Johnson", "email": "ethan.j@example.com", "phone": "+442079460958", "status": "Rejected",
     "role": "Data Analyst", "source": "Naukri", "college": "Tech Institute",
     "resume_summary": "Data Analyst with a strong background in SQL and Python."},
    {"full_name": "Fiona Garcia", "email": "fiona.g@example.com", "phone": "+1231231234", "status": "Applied",
     "role": "Software Engineer Intern", "source": "Campus Drive",
     "college": "National Institute of Technology, Trichy", "resume_summary": None},
    {"full_name": "George Clark", "email": "george.c@example.com", "phone": "+1231231235", "status": "Screening",
     "role": "Marketing Intern", "source": "Campus Drive",
     "college": "Indian Institute of Technology, Bombay", "resume_summary": None},
]

JOBS = [
    {"title": "Senior Product Manager", "department": "Product", "location": "San Francisco, CA",
     "source": "LinkedIn", "status": "Interviewing", "applicants_count": 78},
    {"title": "UX/UI Designer", "department": "Design", "location": "New York, NY",
     "source": "Company Website", "status": "Screening", "applicants_count": 124},
    {"title": "Backend Developer", "department": "Engineering", "location": "Remote",
     "source": "LinkedIn", "status": "Screening", "applicants_count": 210},
    {"title": "Software Engineering Intern", "department": "Engineering", "location": "Remote",
     "source": "Other", "status": "Accepting Applications", "applicants_count": 350},
]

COLLEGES = [
    {"name": "National Institute of Technology, Trichy", "location": "Tiruchirappalli, TN",
     "status": "Invited", "resumes_received": 124, "contact_email": "tpo@nitt.edu"},
    {"name": "Indian Institute of Technology, Bombay", "location": "Mumbai, MH",
     "status": "Confirmed", "resumes_received": 258, "contact_email": "tpo@iitb.ac.in"},
    {"name": "Vellore Institute of Technology", "location": "Vellore, TN",
     "status": "Screening", "resumes_received": 312, "contact_email": "tpo@vit.ac.in"},
]

DOCUMENTS = [
    {"name": "Employee Handbook 2024", "type": "Policy", "version": "v3.1", "status": "Active",
     "acknowledgement_percentage": 95, "expiry_date": None},
    {"name": "Code of Conduct", "type": "Policy", "version": "v2.5", "status": "Active",
     "acknowledgement_percentage": 100, "expiry_date": None},
    {"name": "Anti-Harassment Training", "type": "Training", "version": "2024", "status": "Active",
     "acknowledgement_percentage": 78, "expiry_date": "2024-12-31"},
]

GRIEVANCES = [
    {"ticket_id": "TKT-001", "title": "Issue with payslip calculation", "category": "Payroll",
     "is_anonymous": False, "assigned_to": "HR", "status": "In Progress", "created_at": "2024-05-20 10:00:00"},
    {"ticket_id": "TKT-002", "title": "Request for workplace adjustment", "category": "Facilities",
     "is_anonymous": False, "assigned_to": "Legal", "status": "Open", "created_at": "2024-05-18 14:30:00"},
    {"ticket_id": "TKT-003", "title": "Anonymous feedback on management", "category": "Feedback",
     "is_anonymous": True, "assigned_to": "HR", "status": "Open", "created_at": "2024-05-21 11:00:00"},
]

KUDOS = [
    {"giver_name": "Alice Johnson", "receiver_name": "Bob Williams", "reason_category": "Team Collaboration",
     "reason_text": "Great presentation on the new feature!", "points_awarded": 50},
    {"giver_name": "Charlie Brown", "receiver_name": "Alice Johnson", "reason_category": "Mentorship",
     "reason_text": "Thanks for helping me debug my code.", "points_awarded": 30},
    {"giver_name": "Admin", "receiver_name": "Diana Miller", "reason_category": "Work Anniversary",
     "reason_text": "Congratulations on your 3-year work anniversary!", "points_awarded": 100},
]

ANALYTICS = {
    "attrition_prediction": "Attrition is predicted to be low (2.1%) next quarter, driven by high employee sentiment scores and competitive compensation packages.",
    "burnout_heatmap": "The Engineering department shows a moderate risk of burnout due to the recent product launch crunch. Recommend monitoring workloads and encouraging PTO.",
    "salary_benchmarks": "Salaries are competitive across most roles. The Data Science team is slightly below market average (5-7%); recommend a market adjustment review.",
    "key_insights": "Overall company health is strong. Focus on targeted interventions for the Engineering team's workload and review Data Science compensation to maintain a competitive edge.",
}


def upsert(db, table: str, rows: list, conflict: str):
    """INSERT ... ON CONFLICT (conflict) DO UPDATE for every non-key column."""
    columns = list(rows[0])
    keys = {c.strip() for c in conflict.split(",")}
    updates = ", ".join(f"{c} = EXCLUDED.{c}" for c in columns if c not in keys)
    sql = text(f"""
        INSERT INTO {table} ({', '.join(columns)})
        VALUES ({', '.join(':' + c for c in columns)})
        ON CONFLICT ({conflict}) DO UPDATE SET {updates}
    """)
    for row in rows:
        db.execute(sql, row)
    print(f"    ✅ {len(rows)} {table} seeded")


def seed():
    with get_db_session() as db:
        upsert(db, "employees", [{**e, "avatar_url": AVATAR} for e in EMPLOYEES], "email")
        upsert(db, "applicants", APPLICANTS, "email")
        upsert(db, "jobs", JOBS, "title")
        upsert(db, "colleges", COLLEGES, "name")
        upsert(db, "documents", DOCUMENTS, "name, version")
        upsert(db, "grievances", GRIEVANCES, "ticket_id")

        # Kudos have no natural key; replace them
        db.execute(text("DELETE FROM kudos"))
        for kudo in KUDOS:
            db.execute(text("""
                INSERT INTO kudos (giver_name, receiver_name, reason_category, reason_text, points_awarded)
                VALUES (:giver_name, :receiver_name, :reason_category, :reason_text, :points_awarded)
            """), kudo)
        print(f"    ✅ {len(KUDOS)} kudos seeded")

        db.execute(text("DELETE FROM analytics"))
        db.execute(text("""
            INSERT INTO analytics (attrition_prediction, burnout_heatmap, salary_benchmarks, key_insights)
            VALUES (:attrition_prediction, :burnout_heatmap, :salary_benchmarks, :key_insights)
        """), ANALYTICS)
        print("    ✅ analytics seeded")


def main():
    setup_base_logging()
    print("=" * 50)
    print("HR360 - SEED DEMO DATA")
    print("=" * 50)
    try:
        init_schema()
        seed()
    except SQLAlchemyError as e:
        print(f"    ❌ Seeding failed: {e}")
        sys.exit(1)
    print("\nDatabase seeding complete!")


if __name__ == "__main__":
    main()
