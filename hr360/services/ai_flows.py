"""
AI Flows - structured prompts against the hosted model.

Every flow follows the same steps:
1. Validate the input against the flow's input model
2. Fill the prompt template with the input values
3. Call the model (per-flow model id from settings)
4. Parse the JSON reply and validate it against the output model

A failure in steps 3-4 raises FlowError. There are no retries: the caller
shows a generic error and the user can simply try again.
"""
import json
from typing import Any, Callable, Dict, Optional, Type, Union

from openai import OpenAIError
from pydantic import BaseModel

from hr360.core.config import get_settings
from hr360.core.errors import FlowError
from hr360.core.logging_config import get_logger
from hr360.schemas import flow_schemas as fs
from hr360.services.llm_client import (
    LLMClient, UserContent, get_llm_client, text_part, media_part
)
from hr360.utils.data_uri import parse_data_uri, is_image
from hr360.utils.file_upload import extract_text, TEXT_MIME_TYPES

logger = get_logger("hr360.flows")

JSON_INSTRUCTIONS = """Return ONLY valid JSON, no explanation and no markdown.
The JSON must match this JSON schema:
{schema}"""


class Flow:
    """
    A named model call: input model + prompt template + output model.

    template is a str.format() template over the input fields. Pass
    `values` to reshape the input first (e.g. join a list into lines).
    """

    def __init__(
        self,
        name: str,
        input_model: Type[BaseModel],
        output_model: Type[BaseModel],
        system_prompt: str,
        template: str,
        values: Optional[Callable[[BaseModel], Dict[str, Any]]] = None,
        max_tokens: int = 1000
    ):
        self.name = name
        self.input_model = input_model
        self.output_model = output_model
        self.system_prompt = system_prompt
        self.template = template
        self.values = values
        self.max_tokens = max_tokens

    @property
    def reply_model(self) -> Type[BaseModel]:
        """Shape the model is asked to return (usually the output model)."""
        return self.output_model

    def full_system_prompt(self) -> str:
        schema = json.dumps(self.reply_model.model_json_schema())
        return f"{self.system_prompt}\n\n{JSON_INSTRUCTIONS.format(schema=schema)}"

    def render(self, data: BaseModel) -> UserContent:
        values = self.values(data) if self.values else data.model_dump()
        return self.template.format(**values)

    def finalize(self, data: BaseModel, reply: BaseModel, client: LLMClient) -> BaseModel:
        """Post-process the validated reply. Default: return it as-is."""
        return reply

    def run(self, payload: Union[BaseModel, dict], client: Optional[LLMClient] = None) -> BaseModel:
        """
        Run the flow once.

        Raises:
            pydantic.ValidationError if the payload does not fit input_model
            FlowError if the model call, JSON parse or output check fails
        """
        data = payload if isinstance(payload, self.input_model) else self.input_model.model_validate(payload)
        client = client or get_llm_client()
        model = get_settings().model_for_flow(self.name)

        logger.info(f"Running flow '{self.name}' with model '{model}'")
        try:
            raw = client.call(
                self.full_system_prompt(),
                self.render(data),
                model=model,
                max_tokens=self.max_tokens
            )
            reply = self.reply_model.model_validate(client.extract_json(raw))
        except (OpenAIError, ValueError) as e:
            # json.JSONDecodeError and pydantic.ValidationError are ValueErrors
            logger.error(f"Flow '{self.name}' failed: {e}")
            raise FlowError(self.name, str(e), cause=e) from e

        return self.finalize(data, reply, client)


# ============================================================
# FLOWS WITH CUSTOM STEPS
# ============================================================

class AptitudeTestFlow(Flow):
    """
    Two steps: the text model drafts the test (with an image prompt for
    picture puzzles), then each image prompt is rendered by IMAGE_MODEL.
    A failed image is skipped; the question is kept without it.
    """

    @property
    def reply_model(self) -> Type[BaseModel]:
        return fs.AptitudeTestDraft

    def render(self, data: fs.AptitudeTestInput) -> UserContent:
        if data.role:
            kind = f'role-specific {data.topic} aptitude test for a "{data.role}" position'
        else:
            kind = f"{data.topic} aptitude test"
        return self.template.format(
            kind=kind,
            num_questions=data.num_questions,
            time_limit_minutes=data.time_limit_minutes,
            difficulty=data.difficulty
        )

    def finalize(self, data, reply: fs.AptitudeTestDraft, client: LLMClient) -> fs.AptitudeTestOutput:
        image_model = get_settings().image_model
        questions = []
        for draft in reply.questions:
            image = None
            if draft.image_prompt and image_model:
                try:
                    image = client.generate_image(draft.image_prompt, image_model)
                except (OpenAIError, ValueError) as e:
                    logger.warning(f"Image generation failed for prompt '{draft.image_prompt}': {e}")
            questions.append(fs.AptitudeQuestion(
                question_text=draft.question_text,
                question_image=image,
                options=draft.options,
                correct_answer=draft.correct_answer,
                explanation=draft.explanation
            ))
        return fs.AptitudeTestOutput(
            test_name=reply.test_name,
            questions=questions,
            cheating_prevention_tips=reply.cheating_prevention_tips,
            test_instructions=reply.test_instructions
        )


class ResumeProcessorFlow(Flow):
    """
    Images (phone photos, scans) go to the model as-is.
    PDF/DOCX/TXT are converted to text here first.
    """

    def render(self, data: fs.ResumeProcessorInput) -> UserContent:
        mime_type, content = parse_data_uri(data.resume_data_uri)
        if is_image(mime_type):
            return [text_part(self.template.format(resume="(see attached image)")), media_part(data.resume_data_uri)]
        if mime_type in TEXT_MIME_TYPES:
            return self.template.format(resume=extract_text(content, mime_type))
        raise ValueError(f"Unsupported resume format '{mime_type}'")


class VideoAnalyzerFlow(Flow):

    def render(self, data: fs.VideoAnalyzerInput) -> UserContent:
        return [text_part(self.template), media_part(data.video_data_uri)]


# ============================================================
# PROMPTS
# ============================================================

def _bullets(items) -> str:
    return "\n".join(f"- {item}" for item in items)


email_composer = Flow(
    name="email_composer",
    input_model=fs.EmailComposerInput,
    output_model=fs.EmailComposerOutput,
    system_prompt="You are an expert HR communications assistant for a major multinational corporation.",
    template="""Draft a professional, clear and empathetic email to a job applicant on behalf of "{company_name}".

Context for the email: {communication_context}

Applicant Details:
- Name: {applicant_name}
- Applied for: {job_title}
- Recipient Email: {recipient_email}

Generate the full email content, including an appropriate subject line.
- 'Invitation to Interview': enthusiastic and clear, suggest next steps for scheduling.
- 'Polite Rejection': empathetic and respectful, thank them for their time, state clearly that they will not move forward. Do not give false hope.
- 'Request for Information': state clearly what additional information is needed."""
)

aptitude_test = AptitudeTestFlow(
    name="aptitude_test",
    input_model=fs.AptitudeTestInput,
    output_model=fs.AptitudeTestOutput,
    system_prompt="You are an expert in creating aptitude tests for job candidates.",
    template="""Generate a {kind} with the following specifications:

Number of Questions: {num_questions}
Time Limit: {time_limit_minutes} minutes
Difficulty: {difficulty}

Every question is multiple-choice with 4 options. correct_answer must be exactly one of the options.
Give a brief explanation for each question, general cheating prevention tips for the administrator,
and instructions for the test taker.

If the topic is 'Logical' or 'Comprehensive', include at least one picture puzzle. For a picture puzzle,
put a detailed text-to-image prompt for a simple black and white diagram in 'image_prompt'.
Leave 'image_prompt' null for non-visual questions.""",
    max_tokens=4000
)

career_growth = Flow(
    name="career_growth",
    input_model=fs.CareerGrowthInput,
    output_model=fs.CareerGrowthOutput,
    system_prompt="You are an expert career development advisor in a large tech MNC.",
    template="""Predict a realistic and ambitious career growth path within the company for the next 5-7 years.

Employee Details:
- Current Role: {current_role}
- Current Skills:
{skills}
- Latest Performance Review: {performance_review}
- Career Aspirations: {career_aspirations}

List 2-3 future roles, each with a timeline, the skills to acquire, and a suggested mentor.""",
    values=lambda data: {**data.model_dump(), "skills": _bullets(data.skills)},
    max_tokens=1500
)

culture_fit = Flow(
    name="culture_fit",
    input_model=fs.CultureFitInput,
    output_model=fs.CultureFitOutput,
    system_prompt="You are an expert HR consultant specializing in culture fit between candidates and companies.",
    template="""Determine a culture fit score (0-1) and justify your assessment.

Candidate Behavior: {candidate_behavior}
Pre-Hire Answers: {pre_hire_answers}
Company Values: {company_values}"""
)

document_generator = Flow(
    name="document_generator",
    input_model=fs.DocumentGeneratorInput,
    output_model=fs.DocumentGeneratorOutput,
    system_prompt="You are an expert HR document generator.",
    template="""Generate a document of the given type from the template data.

Document Type: {document_type}
Template Data:
{template_data}
Additional Instructions: {additional_instructions}""",
    values=lambda data: {
        "document_type": data.document_type,
        "template_data": _bullets(f"{key}: {value}" for key, value in data.template_data.items()),
        "additional_instructions": data.additional_instructions or "None",
    },
    max_tokens=2000
)

match_score = Flow(
    name="match_score",
    input_model=fs.MatchScoreInput,
    output_model=fs.MatchScoreOutput,
    system_prompt="You are an expert HR assistant responsible for matching resumes to job descriptions.",
    template="""Give a match_category of "Perfect Match", "Good Fit" or "Low Match" and a match_score between 0 and 100.
Consider skills and experience, education, keywords and overall fit, and explain your reasoning.

Job Description: {job_description}
Resume: {resume}"""
)

interview_bot = Flow(
    name="interview_bot",
    input_model=fs.InterviewBotInput,
    output_model=fs.InterviewBotOutput,
    system_prompt="You are an expert HR assistant specializing in conducting interviews.",
    template="""Generate multiple-choice questions and one video question for the candidate from their resume
and the job description. If a candidate response is given, evaluate it and give feedback in 'evaluation'.

Job Description: {job_description}
Candidate Resume: {candidate_resume}
Candidate Response: {candidate_response}""",
    values=lambda data: {**data.model_dump(), "candidate_response": data.candidate_response or "(none yet)"},
    max_tokens=2000
)

predictive_analytics = Flow(
    name="predictive_analytics",
    input_model=fs.PredictiveAnalyticsInput,
    output_model=fs.PredictiveAnalyticsOutput,
    system_prompt="You are an expert HR analyst.",
    template="""Generate a predictive analytics dashboard from the data below.

Company Data: {company_data}
Industry Benchmarks: {industry_benchmarks}
Economic Indicators: {economic_indicators}

- attrition_prediction: attrition rate for the next quarter and the key factors behind it.
- burnout_heatmap: burnout risk across departments or teams, highlighting problem areas.
- salary_benchmarks: company salaries against industry benchmarks, flag uncompetitive areas.
- key_insights: summary of insights and recommendations for HR.""",
    max_tokens=1500
)

resume_processor = ResumeProcessorFlow(
    name="resume_processor",
    input_model=fs.ResumeProcessorInput,
    output_model=fs.ResumeProcessorOutput,
    system_prompt=(
        "You are an expert HR data entry assistant. Resumes may be poor-quality images "
        "(skewed, poorly lit, background noise); read them as accurately as you can."
    ),
    template="""Extract the applicant's full name, email address and phone number, write a concise
two-sentence summary of their professional profile, and return the full raw text of the resume.
If a piece of information is not available, return an empty string for that field.

Resume Document:
{resume}""",
    max_tokens=4000
)

sentiment_analyzer = Flow(
    name="sentiment_analyzer",
    input_model=fs.SentimentAnalyzerInput,
    output_model=fs.SentimentAnalyzerOutput,
    system_prompt=(
        "You are an AI sentiment analysis expert specializing in detecting morale, "
        "burnout and toxicity in workplace communications."
    ),
    template="""Assess the overall sentiment, morale (0-100), burnout indicators and toxicity level of this text.
Consider tone, language, and any explicit mention of stress, negativity or conflict.

Text: {text}"""
)

resume_builder = Flow(
    name="resume_builder",
    input_model=fs.ResumeBuilderInput,
    output_model=fs.ResumeBuilderOutput,
    system_prompt="You are an expert resume writer specializing in ATS-optimized resumes.",
    template="""Write a well-structured resume from the user information below, using relevant keywords
and highlighting skills and experience.

User Information:
{user_info}

{format_instructions}""",
    values=lambda data: {
        "user_info": data.user_info,
        "format_instructions": (
            "Return the resume content as plain text suitable for conversion to PDF."
            if data.format == "pdf" else "Return the resume content as HTML."
        ),
    },
    max_tokens=3000
)

typing_test = Flow(
    name="typing_test",
    input_model=fs.TypingTestInput,
    output_model=fs.TypingTestOutput,
    system_prompt="You are an expert in creating professional skills assessments.",
    template="""Write a single coherent paragraph for a typing test, approximately 300-400 characters long.
Tailor it to the job role with terminology, concepts and scenarios from that role.
No markdown or special formatting.

Job Role: {job_role}""",
    max_tokens=400
)

video_analyzer = VideoAnalyzerFlow(
    name="video_analyzer",
    input_model=fs.VideoAnalyzerInput,
    output_model=fs.VideoAnalyzerOutput,
    system_prompt="You are an expert HR video resume analyzer.",
    template="""Rate the candidate's confidence, clarity and tone in this introductory video, each from 0 to 1.

Confidence: posture, eye contact, nervousness, overall self-assuredness.
Clarity: enunciation, pace, ability to articulate thoughts.
Tone: enthusiasm, warmth, ability to engage the viewer.

Then give a concise, actionable summary with areas for improvement."""
)


# ============================================================
# REGISTRY
# ============================================================

FLOWS: Dict[str, Flow] = {
    flow.name: flow for flow in (
        email_composer,
        aptitude_test,
        career_growth,
        culture_fit,
        document_generator,
        match_score,
        interview_bot,
        predictive_analytics,
        resume_processor,
        sentiment_analyzer,
        resume_builder,
        typing_test,
        video_analyzer,
    )
}


def get_flow(name: str) -> Flow:
    """Look up a flow by name. Raises KeyError for unknown names."""
    return FLOWS[name]
