"""
AI Flow Schemas - input/output contracts for every flow.

Each flow validates its input against an *Input model before the prompt is
rendered, and the model's JSON reply against the matching *Output model.
Field descriptions are included in the prompt so the model knows the shape.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Dict, Literal

from hr360.utils.data_uri import parse_data_uri


def _decodable_data_uri(v: str) -> str:
    """Reject a data URI whose base64 body does not decode."""
    parse_data_uri(v)
    return v


# ============================================================
# EMAIL COMPOSER
# ============================================================

class EmailComposerInput(BaseModel):
    applicant_name: str = Field(..., min_length=1, description="The name of the job applicant.")
    job_title: str = Field(..., min_length=1, description="The title of the job being applied for.")
    company_name: str = Field(..., min_length=1, description="The name of the company.")
    recipient_email: EmailStr = Field(..., description="The email address of the applicant.")
    communication_context: Literal[
        "Invitation to Interview", "Polite Rejection", "Request for Information"
    ] = Field(..., description="The context of the communication.")

class EmailComposerOutput(BaseModel):
    email_content: str = Field(..., description="The complete content of the email, including a subject line.")


# ============================================================
# APTITUDE TEST
# ============================================================

class AptitudeTestInput(BaseModel):
    topic: Literal["Logical", "English", "Comprehensive"]
    role: Optional[str] = Field(None, description="Job role, for role-specific questions.")
    num_questions: int = Field(..., ge=5, le=20)
    time_limit_minutes: int = Field(..., ge=5, le=60)
    difficulty: Literal["easy", "medium", "hard"]

class AptitudeQuestionDraft(BaseModel):
    """First-step question: may carry a text-to-image prompt instead of an image."""
    question_text: str
    image_prompt: Optional[str] = Field(None, description="Text-to-image prompt for a picture puzzle.")
    options: List[str]
    correct_answer: str
    explanation: str

class AptitudeTestDraft(BaseModel):
    test_name: str
    questions: List[AptitudeQuestionDraft]
    cheating_prevention_tips: List[str]
    test_instructions: str

class AptitudeQuestion(BaseModel):
    question_text: str
    question_image: Optional[str] = Field(None, description="Base64 data URI of the puzzle image.")
    options: List[str]
    correct_answer: str
    explanation: str

class AptitudeTestOutput(BaseModel):
    test_name: str
    questions: List[AptitudeQuestion]
    cheating_prevention_tips: List[str]
    test_instructions: str


# ============================================================
# CAREER GROWTH
# ============================================================

class CareerGrowthInput(BaseModel):
    current_role: str = Field(..., min_length=2, description="The employee's current role.")
    skills: List[str] = Field(..., min_length=1, description="The employee's current skills.")
    performance_review: str = Field(..., min_length=10, description="Summary of the latest performance review.")
    career_aspirations: str = Field(..., min_length=10, description="The employee's stated career aspirations.")

class PredictedStep(BaseModel):
    role: str
    timeline: str = Field(..., description="Estimated timeline, e.g. '1-2 years'.")
    required_skills: List[str]
    suggested_mentor: str

class CareerGrowthOutput(BaseModel):
    predicted_path: List[PredictedStep]


# ============================================================
# CULTURE FIT
# ============================================================

class CultureFitInput(BaseModel):
    candidate_behavior: str = Field(..., min_length=10, description="Observed candidate behavior.")
    pre_hire_answers: str = Field(..., min_length=10, description="Answers to values-based questions.")
    company_values: str = Field(..., min_length=10, description="The company values.")

class CultureFitOutput(BaseModel):
    culture_fit_score: float = Field(..., ge=0, le=1, description="Likelihood of culture fit, 0 to 1.")
    justification: str


# ============================================================
# DOCUMENT GENERATOR
# ============================================================

class DocumentGeneratorInput(BaseModel):
    document_type: Literal["offerLetter", "memo"]
    template_data: Dict[str, str] = Field(..., description="Values to populate the document with.")
    additional_instructions: Optional[str] = None

class DocumentGeneratorOutput(BaseModel):
    document_content: str


# ============================================================
# MATCH SCORE
# ============================================================

class MatchScoreInput(BaseModel):
    job_description: str = Field(..., min_length=20)
    resume: str = Field(..., min_length=20)

class MatchScoreOutput(BaseModel):
    match_category: Literal["Perfect Match", "Good Fit", "Low Match"]
    match_score: float = Field(..., ge=0, le=100)
    reasoning: str


# ============================================================
# INTERVIEW BOT
# ============================================================

class InterviewBotInput(BaseModel):
    job_description: str = Field(..., min_length=50)
    candidate_resume: str = Field(..., min_length=50)
    candidate_response: Optional[str] = Field(None, description="Answer to the video question, if any.")

class InterviewBotOutput(BaseModel):
    mcq_questions: List[str]
    video_question: str
    evaluation: Optional[str] = None


# ============================================================
# PREDICTIVE ANALYTICS
# ============================================================

class PredictiveAnalyticsInput(BaseModel):
    company_data: str = Field(..., min_length=10)
    industry_benchmarks: str = Field(..., min_length=10)
    economic_indicators: str = Field(..., min_length=10)

class PredictiveAnalyticsOutput(BaseModel):
    attrition_prediction: str
    burnout_heatmap: str
    salary_benchmarks: str
    key_insights: str


# ============================================================
# RESUME PROCESSOR
# ============================================================

class ResumeProcessorInput(BaseModel):
    resume_data_uri: str = Field(
        ...,
        pattern=r"^data:[\w.+-]+/[\w.+-]+;base64,",
        description="Resume file as 'data:<mimetype>;base64,<encoded_data>'."
    )

    @field_validator("resume_data_uri")
    @classmethod
    def resume_must_decode(cls, v: str) -> str:
        return _decodable_data_uri(v)

class ResumeProcessorOutput(BaseModel):
    full_name: str
    email: str
    phone: str
    summary: str = Field(..., description="Two-sentence profile summary.")
    raw_text: str


# ============================================================
# SENTIMENT ANALYZER
# ============================================================

class SentimentAnalyzerInput(BaseModel):
    text: str = Field(..., min_length=1)

class SentimentAnalyzerOutput(BaseModel):
    overall_sentiment: str
    morale_score: float = Field(..., ge=0, le=100)
    burnout_indicators: str
    toxicity_level: str


# ============================================================
# RESUME BUILDER
# ============================================================

class ResumeBuilderInput(BaseModel):
    user_info: str = Field(..., min_length=20)
    format: Literal["pdf", "html"]

class ResumeBuilderOutput(BaseModel):
    resume_content: str


# ============================================================
# TYPING TEST
# ============================================================

class TypingTestInput(BaseModel):
    job_role: str = Field(..., min_length=2)

class TypingTestOutput(BaseModel):
    test_content: str = Field(..., min_length=1)


# ============================================================
# VIDEO ANALYZER
# ============================================================

class VideoAnalyzerInput(BaseModel):
    video_data_uri: str = Field(..., pattern=r"^data:video/[\w.+-]+;base64,")

    @field_validator("video_data_uri")
    @classmethod
    def video_must_decode(cls, v: str) -> str:
        return _decodable_data_uri(v)

class VideoAnalyzerOutput(BaseModel):
    confidence: float = Field(..., ge=0, le=1)
    clarity: float = Field(..., ge=0, le=1)
    tone: float = Field(..., ge=0, le=1)
    summary: str
