"""
Pydantic Schemas - Request/Response Validation

All record-level API request and response schemas in one file for simplicity.
AI flow input/output schemas live in flow_schemas.py.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any
from datetime import datetime, date
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    """Dashboard accounts are HR staff; candidates never hold a token."""
    hr = "hr"


class ApplicantStatus(str, Enum):
    new = "New"
    pending_review = "Pending Review"
    screening = "Screening"
    interview_scheduled = "Interview Scheduled"
    offer_extended = "Offer Extended"
    hired = "Hired"
    rejected = "Rejected"
    applied = "Applied"


class AssignedTest(str, Enum):
    aptitude = "aptitude"
    typing = "typing"


class EmployeeStatus(str, Enum):
    remote = "Remote"
    office = "Office"
    leave = "Leave"
    probation = "Probation"


class JobStatus(str, Enum):
    accepting = "Accepting Applications"
    screening = "Screening"
    interviewing = "Interviewing"
    offer_extended = "Offer Extended"
    closed = "Closed"


class JobSource(str, Enum):
    linkedin = "LinkedIn"
    company_website = "Company Website"
    indeed = "Indeed"
    naukri = "Naukri"
    other = "Other"
    walk_in = "Walk-in"


class CollegeStatus(str, Enum):
    invited = "Invited"
    confirmed = "Confirmed"
    screening = "Screening"
    scheduled = "Scheduled"


class DocumentStatus(str, Enum):
    active = "Active"
    draft = "Draft"
    archived = "Archived"


class DocumentType(str, Enum):
    policy = "Policy"
    training = "Training"
    manual = "Manual"


class GrievanceCategory(str, Enum):
    payroll = "Payroll"
    facilities = "Facilities"
    interpersonal = "Interpersonal"
    policy = "Policy"
    feedback = "Feedback"
    other = "Other"


class GrievanceStatus(str, Enum):
    open = "Open"
    in_progress = "In Progress"
    resolved = "Resolved"
    closed = "Closed"


class GrievanceAssignee(str, Enum):
    hr = "HR"
    legal = "Legal"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    """Self-service HR staff sign-up. The role is always hr."""
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = Field(None, max_length=100)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: int
    role: UserRole

class UserResponse(BaseModel):
    user_id: int
    email: str
    full_name: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime


# ============================================================
# APPLICANT SCHEMAS
# ============================================================

class WalkInRegistration(BaseModel):
    """Kiosk self-registration. Role/source/status are fixed server-side."""
    full_name: str = Field(..., min_length=2)
    email: EmailStr
    phone: str = Field(..., min_length=10)
    resume_text: Optional[str] = None
    resume_summary: Optional[str] = None

class ApplicantCreate(BaseModel):
    full_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)
    college: Optional[str] = None
    role: str = Field(..., min_length=2, max_length=100)
    source: str = "Other"
    status: ApplicantStatus = ApplicantStatus.new
    resume_text: Optional[str] = None
    resume_summary: Optional[str] = None

class ApplicantUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    college: Optional[str] = None
    role: Optional[str] = None
    resume_text: Optional[str] = None
    resume_summary: Optional[str] = None
    hr_notes: Optional[str] = None

class ApplicantStatusUpdate(BaseModel):
    status: ApplicantStatus
    hr_notes: Optional[str] = None

class AssignTestRequest(BaseModel):
    test: AssignedTest

class ApplicantResponse(BaseModel):
    id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    college: Optional[str] = None
    role: str
    source: str
    status: ApplicantStatus
    resume_text: Optional[str] = None
    resume_summary: Optional[str] = None
    assigned_test: Optional[AssignedTest] = None
    aptitude_score: Optional[str] = None
    typing_wpm: Optional[int] = None
    typing_accuracy: Optional[int] = None
    hr_notes: Optional[str] = None
    created_at: datetime

class PipelineCount(BaseModel):
    status: ApplicantStatus
    count: int


# ============================================================
# EMPLOYEE SCHEMAS
# ============================================================

class EmployeeCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    role: str
    status: EmployeeStatus = EmployeeStatus.office
    points: int = Field(0, ge=0)
    avatar_url: Optional[str] = None

class EmployeeStatusUpdate(BaseModel):
    status: EmployeeStatus

class PointsAdjustment(BaseModel):
    points: int

class EmployeeResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    status: EmployeeStatus
    points: int
    avatar_url: Optional[str] = None
    created_at: datetime


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    department: str
    location: str
    source: JobSource = JobSource.other
    status: JobStatus = JobStatus.accepting

class JobStatusUpdate(BaseModel):
    status: JobStatus

class JobResponse(BaseModel):
    id: int
    title: str
    department: str
    location: str
    source: JobSource
    status: JobStatus
    applicants_count: int
    created_at: datetime


# ============================================================
# COLLEGE SCHEMAS
# ============================================================

class CollegeCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=200)
    location: str
    contact_email: Optional[EmailStr] = None

class CollegeStatusUpdate(BaseModel):
    status: CollegeStatus

class ResumesReceived(BaseModel):
    count: int = Field(..., ge=1)

class CollegeResponse(BaseModel):
    id: int
    name: str
    location: str
    contact_email: Optional[str] = None
    status: CollegeStatus
    resumes_received: int
    created_at: datetime


# ============================================================
# DOCUMENT SCHEMAS
# ============================================================

class DocumentCreate(BaseModel):
    name: str = Field(..., min_length=3, max_length=200)
    type: DocumentType = DocumentType.policy
    version: str = Field("v1.0", min_length=1, max_length=20)
    expiry_date: Optional[date] = None

class DocumentStatusUpdate(BaseModel):
    status: DocumentStatus

class AcknowledgementUpdate(BaseModel):
    acknowledgement_percentage: int = Field(..., ge=0, le=100)

class DocumentResponse(BaseModel):
    id: int
    name: str
    type: DocumentType
    version: str
    status: DocumentStatus
    acknowledgement_percentage: int
    expiry_date: Optional[date] = None
    created_at: datetime


# ============================================================
# GRIEVANCE SCHEMAS
# ============================================================

class GrievanceCreate(BaseModel):
    title: str = Field(..., min_length=5, max_length=200)
    description: Optional[str] = None
    category: GrievanceCategory = GrievanceCategory.other
    is_anonymous: bool = False

class GrievanceStatusUpdate(BaseModel):
    status: GrievanceStatus

class GrievanceResponse(BaseModel):
    ticket_id: str
    title: str
    description: Optional[str] = None
    category: GrievanceCategory
    is_anonymous: bool
    assigned_to: GrievanceAssignee
    status: GrievanceStatus
    created_at: datetime


# ============================================================
# KUDOS SCHEMAS
# ============================================================

class KudoCreate(BaseModel):
    giver_name: str = Field(..., min_length=2)
    receiver_name: str = Field(..., min_length=2)
    reason_category: str = Field(..., min_length=2)
    reason_text: str = Field(..., min_length=3)
    points_awarded: int = Field(0, ge=0, le=1000)

class KudoResponse(BaseModel):
    id: int
    giver_name: str
    receiver_name: str
    reason_category: str
    reason_text: str
    points_awarded: int
    created_at: datetime


# ============================================================
# ANALYTICS SCHEMAS
# ============================================================

class AnalyticsResponse(BaseModel):
    id: int
    attrition_prediction: str
    burnout_heatmap: str
    salary_benchmarks: str
    key_insights: str
    created_at: datetime


# ============================================================
# ASSESSMENT / PORTAL SCHEMAS
# ============================================================

class PublicQuestion(BaseModel):
    """A question as shown to the candidate (no answer key)."""
    question_text: str
    question_image: Optional[str] = None
    options: List[str]

class AptitudeSessionResponse(BaseModel):
    session_id: str
    test_name: str
    test_instructions: str
    time_limit_minutes: int
    questions: List[PublicQuestion]

class AptitudeSubmission(BaseModel):
    session_id: str
    answers: List[str]

class AptitudeResult(BaseModel):
    correct: int
    total: int
    score: str
    explanations: List[str] = []

class TypingSessionResponse(BaseModel):
    session_id: str
    test_content: str
    duration_seconds: int

class TypingSubmission(BaseModel):
    session_id: Optional[str] = None
    typed_text: str
    elapsed_seconds: Optional[float] = Field(None, ge=0)

class TypingResult(BaseModel):
    wpm: int
    accuracy: int
    correct_chars: int
    typed_chars: int
    elapsed_seconds: float

class PortalResponse(BaseModel):
    applicant: ApplicantResponse
    has_pending_test: bool


# ============================================================
# HIRING DRIVE SCHEMAS
# ============================================================

class HiringDriveStatus(BaseModel):
    running: bool
    interval_seconds: float
    refresh_count: int
    last_refreshed_at: Optional[datetime] = None
    snapshot: Optional[Dict[str, Any]] = None
