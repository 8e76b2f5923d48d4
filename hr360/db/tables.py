"""
Table definitions for the relational store.

Declared with SQLAlchemy Core so the same DDL works on PostgreSQL and
SQLite. Queries elsewhere are raw SQL against these tables.

Status columns carry CHECK constraints so a row can never hold a value
outside its enumerated set.
"""

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Text, Boolean, Date, DateTime,
    CheckConstraint, UniqueConstraint, func
)

from hr360.schemas.schemas import (
    ApplicantStatus, AssignedTest, EmployeeStatus, JobStatus, JobSource,
    CollegeStatus, DocumentStatus, DocumentType, GrievanceCategory,
    GrievanceStatus, GrievanceAssignee, UserRole
)

metadata = MetaData()


def _one_of(column: str, enum_cls) -> CheckConstraint:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return CheckConstraint(f"{column} IN ({values})", name=f"ck_{column}_{enum_cls.__name__.lower()}")


hr_users = Table(
    "hr_users", metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("full_name", String(100)),
    Column("role", String(20), nullable=False, server_default=UserRole.hr.value),
    Column("is_active", Boolean, nullable=False, server_default="1"),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    _one_of("role", UserRole),
)

applicants = Table(
    "applicants", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("full_name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("phone", String(20)),
    Column("college", String(200)),
    Column("role", String(100), nullable=False),
    Column("source", String(50), nullable=False, server_default="Other"),
    Column("status", String(30), nullable=False, server_default=ApplicantStatus.new.value),
    Column("resume_text", Text),
    Column("resume_summary", Text),
    Column("assigned_test", String(20)),
    Column("aptitude_score", String(20)),
    Column("typing_wpm", Integer),
    Column("typing_accuracy", Integer),
    Column("hr_notes", Text),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    _one_of("status", ApplicantStatus),
    CheckConstraint(
        "assigned_test IS NULL OR assigned_test IN ({})".format(
            ", ".join(f"'{t.value}'" for t in AssignedTest)
        ),
        name="ck_assigned_test"
    ),
)

employees = Table(
    "employees", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("role", String(100), nullable=False),
    Column("status", String(20), nullable=False, server_default=EmployeeStatus.office.value),
    Column("points", Integer, nullable=False, server_default="0"),
    Column("avatar_url", String(500)),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    _one_of("status", EmployeeStatus),
)

jobs = Table(
    "jobs", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(200), nullable=False, unique=True),
    Column("department", String(100), nullable=False),
    Column("location", String(200), nullable=False),
    Column("source", String(30), nullable=False, server_default=JobSource.other.value),
    Column("status", String(30), nullable=False, server_default=JobStatus.accepting.value),
    Column("applicants_count", Integer, nullable=False, server_default="0"),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    _one_of("status", JobStatus),
    _one_of("source", JobSource),
)

colleges = Table(
    "colleges", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False, unique=True),
    Column("location", String(200), nullable=False),
    Column("contact_email", String(255)),
    Column("status", String(20), nullable=False, server_default=CollegeStatus.invited.value),
    Column("resumes_received", Integer, nullable=False, server_default="0"),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    _one_of("status", CollegeStatus),
)

documents = Table(
    "documents", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("type", String(20), nullable=False, server_default=DocumentType.policy.value),
    Column("version", String(20), nullable=False),
    Column("status", String(20), nullable=False, server_default=DocumentStatus.draft.value),
    Column("acknowledgement_percentage", Integer, nullable=False, server_default="0"),
    Column("expiry_date", Date),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    UniqueConstraint("name", "version", name="uq_documents_name_version"),
    _one_of("status", DocumentStatus),
    _one_of("type", DocumentType),
    CheckConstraint(
        "acknowledgement_percentage BETWEEN 0 AND 100",
        name="ck_acknowledgement_percentage"
    ),
)

grievances = Table(
    "grievances", metadata,
    Column("ticket_id", String(20), primary_key=True),
    Column("title", String(200), nullable=False),
    Column("description", Text),
    Column("category", String(20), nullable=False, server_default=GrievanceCategory.other.value),
    Column("is_anonymous", Boolean, nullable=False, server_default="0"),
    Column("assigned_to", String(10), nullable=False, server_default=GrievanceAssignee.hr.value),
    Column("status", String(20), nullable=False, server_default=GrievanceStatus.open.value),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    _one_of("category", GrievanceCategory),
    _one_of("status", GrievanceStatus),
    _one_of("assigned_to", GrievanceAssignee),
)

kudos = Table(
    "kudos", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("giver_name", String(100), nullable=False),
    Column("receiver_name", String(100), nullable=False),
    Column("reason_category", String(50), nullable=False),
    Column("reason_text", Text, nullable=False),
    Column("points_awarded", Integer, nullable=False, server_default="0"),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)

analytics = Table(
    "analytics", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("attrition_prediction", Text, nullable=False),
    Column("burnout_heatmap", Text, nullable=False),
    Column("salary_benchmarks", Text, nullable=False),
    Column("key_insights", Text, nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)
