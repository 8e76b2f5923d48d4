"""
Records Service - raw SQL access to the relational tables.

One repository per table. Every method opens its own session via
get_db_session(), so each call is one short transaction.

The SQL sticks to what PostgreSQL and SQLite both accept:
RETURNING, ON CONFLICT, LOWER(..) LIKE LOWER(..) instead of ILIKE,
CASE instead of GREATEST.
"""

import secrets
from typing import Optional, List, Dict, Any, Iterable

from sqlalchemy import text

from hr360.core.errors import RecordNotFoundError
from hr360.db.postgres import get_db_session
from hr360.schemas.schemas import (
    ApplicantStatus, AssignedTest, CollegeStatus, DocumentStatus,
    GrievanceCategory, GrievanceAssignee, GrievanceStatus, JobStatus, UserRole
)


def _rows(result) -> List[Dict[str, Any]]:
    columns = list(result.keys())
    return [dict(zip(columns, row)) for row in result.fetchall()]


def _row(result) -> Optional[Dict[str, Any]]:
    columns = list(result.keys())
    row = result.fetchone()
    return dict(zip(columns, row)) if row else None


def _value(v):
    """Enum members are stored by value."""
    return getattr(v, "value", v)


class _Repository:
    table: str = ""
    key: str = "id"
    order_by: str = "created_at DESC, id DESC"
    # Columns that may be written through update()
    updatable: Iterable[str] = ()

    def get(self, record_id) -> Dict[str, Any]:
        with get_db_session() as db:
            row = _row(db.execute(
                text(f"SELECT * FROM {self.table} WHERE {self.key} = :id"),
                {"id": record_id}
            ))
        if row is None:
            raise RecordNotFoundError(self.table, record_id)
        return row

    def _select(self, filters: Dict[str, Any], limit: Optional[int] = None, extra: str = "",
                params: Optional[dict] = None) -> List[Dict[str, Any]]:
        sql = f"SELECT * FROM {self.table} WHERE 1=1"
        params = dict(params or {})
        for column, value in filters.items():
            if value is not None:
                sql += f" AND {column} = :{column}"
                params[column] = _value(value)
        sql += extra
        sql += f" ORDER BY {self.order_by}"
        if limit:
            sql += " LIMIT :limit"
            params["limit"] = limit
        with get_db_session() as db:
            return _rows(db.execute(text(sql), params))

    def _insert(self, values: Dict[str, Any]) -> Dict[str, Any]:
        values = {k: _value(v) for k, v in values.items()}
        columns = ", ".join(values)
        placeholders = ", ".join(f":{k}" for k in values)
        with get_db_session() as db:
            return _row(db.execute(
                text(f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders}) RETURNING *"),
                values
            ))

    def _update(self, record_id, values: Dict[str, Any], set_sql: str = "") -> Dict[str, Any]:
        """UPDATE ... RETURNING *; raises RecordNotFoundError if nothing matched."""
        values = {k: _value(v) for k, v in values.items()}
        assignments = [f"{k} = :{k}" for k in values]
        if set_sql:
            assignments.append(set_sql)
        params = {**values, "id": record_id}
        with get_db_session() as db:
            row = _row(db.execute(
                text(f"UPDATE {self.table} SET {', '.join(assignments)} WHERE {self.key} = :id RETURNING *"),
                params
            ))
        if row is None:
            raise RecordNotFoundError(self.table, record_id)
        return row

    def update(self, record_id, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Partial update; unknown and None fields are ignored."""
        values = {k: v for k, v in fields.items() if k in self.updatable and v is not None}
        if not values:
            return self.get(record_id)
        return self._update(record_id, values)


# ============================================================
# HR STAFF ACCOUNTS
# ============================================================

class HRUserRepository(_Repository):
    table = "hr_users"
    key = "user_id"
    order_by = "created_at DESC, user_id DESC"

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        with get_db_session() as db:
            return _row(db.execute(
                text("SELECT * FROM hr_users WHERE LOWER(email) = LOWER(:email)"),
                {"email": email}
            ))

    def create(self, email: str, password_hash: str, full_name: Optional[str] = None) -> Dict[str, Any]:
        return self._insert({
            "email": email,
            "password_hash": password_hash,
            "full_name": full_name,
            "role": UserRole.hr,
        })


# ============================================================
# APPLICANTS
# ============================================================

class ApplicantRepository(_Repository):
    table = "applicants"
    updatable = ("full_name", "phone", "college", "role", "resume_text", "resume_summary", "hr_notes")

    def list(self, status: Optional[ApplicantStatus] = None, search: Optional[str] = None,
             limit: int = 100) -> List[Dict[str, Any]]:
        extra, params = "", {}
        if search:
            extra = " AND (LOWER(full_name) LIKE LOWER(:search) OR LOWER(email) LIKE LOWER(:search))"
            params["search"] = f"%{search}%"
        return self._select({"status": status}, limit=limit, extra=extra, params=params)

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        with get_db_session() as db:
            return _row(db.execute(
                text("SELECT * FROM applicants WHERE LOWER(email) = LOWER(:email)"),
                {"email": email}
            ))

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(data)

    def set_status(self, applicant_id: int, status: ApplicantStatus, hr_notes: Optional[str] = None) -> Dict[str, Any]:
        values = {"status": status}
        if hr_notes is not None:
            values["hr_notes"] = hr_notes
        return self._update(applicant_id, values)

    def assign_test(self, applicant_id: int, test: AssignedTest) -> Dict[str, Any]:
        return self._update(applicant_id, {"assigned_test": test})

    def record_aptitude_result(self, applicant_id: int, score: str) -> Dict[str, Any]:
        """Store the 'c / t' score; the assignment is cleared once taken."""
        return self._update(applicant_id, {"aptitude_score": score}, set_sql="assigned_test = NULL")

    def record_typing_result(self, applicant_id: int, wpm: int, accuracy: int) -> Dict[str, Any]:
        return self._update(
            applicant_id,
            {"typing_wpm": wpm, "typing_accuracy": accuracy},
            set_sql="assigned_test = NULL"
        )

    def pipeline_counts(self) -> List[Dict[str, Any]]:
        """Applicant count per status, every status listed (zero included)."""
        with get_db_session() as db:
            result = db.execute(text("SELECT status, COUNT(*) AS count FROM applicants GROUP BY status"))
            counts = {row[0]: row[1] for row in result.fetchall()}
        return [{"status": s.value, "count": counts.get(s.value, 0)} for s in ApplicantStatus]


# ============================================================
# EMPLOYEES
# ============================================================

def _credit_points_by_name(db, name: str, points: int) -> int:
    """Credit every employee with this exact name; returns rows touched."""
    result = db.execute(
        text("UPDATE employees SET points = points + :points WHERE name = :name"),
        {"name": name, "points": points}
    )
    return result.rowcount


class EmployeeRepository(_Repository):
    table = "employees"
    order_by = "name ASC, id ASC"

    def list(self, status=None) -> List[Dict[str, Any]]:
        return self._select({"status": status})

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(data)

    def set_status(self, employee_id: int, status) -> Dict[str, Any]:
        return self._update(employee_id, {"status": status})

    def add_points(self, employee_id: int, points: int) -> Dict[str, Any]:
        """Adjust points; the balance never drops below zero."""
        with get_db_session() as db:
            row = _row(db.execute(
                text("""
                    UPDATE employees
                    SET points = CASE WHEN points + :points < 0 THEN 0 ELSE points + :points END
                    WHERE id = :id
                    RETURNING *
                """),
                {"id": employee_id, "points": points}
            ))
        if row is None:
            raise RecordNotFoundError(self.table, employee_id)
        return row

    def leaderboard(self, limit: int = 10) -> List[Dict[str, Any]]:
        with get_db_session() as db:
            return _rows(db.execute(
                text("SELECT * FROM employees ORDER BY points DESC, name ASC LIMIT :limit"),
                {"limit": limit}
            ))


# ============================================================
# JOBS
# ============================================================

class JobRepository(_Repository):
    table = "jobs"

    def list(self, status: Optional[JobStatus] = None, source=None) -> List[Dict[str, Any]]:
        return self._select({"status": status, "source": source})

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(data)

    def set_status(self, job_id: int, status: JobStatus) -> Dict[str, Any]:
        return self._update(job_id, {"status": status})

    def archive(self, job_id: int) -> Dict[str, Any]:
        return self.set_status(job_id, JobStatus.closed)

    def increment_applicants(self, job_id: int, count: int = 1) -> Dict[str, Any]:
        return self._update(job_id, {}, set_sql=f"applicants_count = applicants_count + {int(count)}")


# ============================================================
# COLLEGES
# ============================================================

class CollegeRepository(_Repository):
    table = "colleges"
    order_by = "name ASC"

    def list(self, status: Optional[CollegeStatus] = None) -> List[Dict[str, Any]]:
        return self._select({"status": status})

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert({**data, "status": CollegeStatus.invited, "resumes_received": 0})

    def set_status(self, college_id: int, status: CollegeStatus) -> Dict[str, Any]:
        return self._update(college_id, {"status": status})

    def add_resumes(self, college_id: int, count: int) -> Dict[str, Any]:
        return self._update(college_id, {}, set_sql=f"resumes_received = resumes_received + {int(count)}")


# ============================================================
# DOCUMENTS
# ============================================================

class DocumentRepository(_Repository):
    table = "documents"

    def list(self, status: Optional[DocumentStatus] = None, type=None) -> List[Dict[str, Any]]:
        return self._select({"status": status, "type": type})

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = {**data, "status": DocumentStatus.draft, "acknowledgement_percentage": 0}
        if values.get("expiry_date") is not None:
            values["expiry_date"] = values["expiry_date"].isoformat()
        return self._insert(values)

    def set_status(self, document_id: int, status: DocumentStatus) -> Dict[str, Any]:
        return self._update(document_id, {"status": status})

    def set_acknowledgement(self, document_id: int, percentage: int) -> Dict[str, Any]:
        if not 0 <= percentage <= 100:
            raise ValueError("acknowledgement_percentage must be between 0 and 100")
        return self._update(document_id, {"acknowledgement_percentage": percentage})


# ============================================================
# GRIEVANCES
# ============================================================

LEGAL_CATEGORIES = {GrievanceCategory.policy, GrievanceCategory.facilities}


def new_ticket_id() -> str:
    """e.g. TKT-3F9A0C"""
    return f"TKT-{secrets.token_hex(3).upper()}"


def assignee_for(category: GrievanceCategory) -> GrievanceAssignee:
    return GrievanceAssignee.legal if GrievanceCategory(category) in LEGAL_CATEGORIES else GrievanceAssignee.hr


class GrievanceRepository(_Repository):
    table = "grievances"
    key = "ticket_id"
    order_by = "created_at DESC, ticket_id DESC"

    def list(self, status: Optional[GrievanceStatus] = None) -> List[Dict[str, Any]]:
        return self._select({"status": status})

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert({
            **data,
            "ticket_id": new_ticket_id(),
            "assigned_to": assignee_for(data["category"]),
            "status": GrievanceStatus.open,
        })

    def set_status(self, ticket_id: str, status: GrievanceStatus) -> Dict[str, Any]:
        return self._update(ticket_id, {"status": status})


# ============================================================
# KUDOS
# ============================================================

class KudoRepository(_Repository):
    table = "kudos"

    def list(self, limit: int = 50) -> List[Dict[str, Any]]:
        return self._select({}, limit=limit)

    def give(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert the kudo and credit the receiver in one transaction."""
        with get_db_session() as db:
            row = _row(db.execute(
                text("""
                    INSERT INTO kudos (giver_name, receiver_name, reason_category, reason_text, points_awarded)
                    VALUES (:giver_name, :receiver_name, :reason_category, :reason_text, :points_awarded)
                    RETURNING *
                """),
                data
            ))
            if data["points_awarded"]:
                _credit_points_by_name(db, data["receiver_name"], data["points_awarded"])
        return row


# ============================================================
# ANALYTICS
# ============================================================

class AnalyticsRepository(_Repository):
    table = "analytics"

    def latest(self) -> Optional[Dict[str, Any]]:
        rows = self._select({}, limit=1)
        return rows[0] if rows else None

    def insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert({
            "attrition_prediction": data["attrition_prediction"],
            "burnout_heatmap": data["burnout_heatmap"],
            "salary_benchmarks": data["salary_benchmarks"],
            "key_insights": data["key_insights"],
        })
