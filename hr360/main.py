"""
HR360 - Main Application

FastAPI backend with:
- PostgreSQL for structured records
- MongoDB for documents (flow outputs, resumes, assessment sessions)
- Hosted LLM (OpenAI-compatible API) for the AI flows
- JWT authentication for HR staff

Run: uvicorn hr360.main:app --reload
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from hr360.api.routes import api_router
from hr360.core.config import get_settings
from hr360.core.errors import FlowError, RecordNotFoundError
from hr360.core.logging_config import setup_base_logging, get_logger
from hr360.db.postgres import init_schema, test_postgres_connection
from hr360.db.mongodb import init_mongo_indexes, test_mongo_connection
from hr360.services.hiring_drive import get_hiring_drive

settings = get_settings()
setup_base_logging()
logger = get_logger("hr360.app")

# Create FastAPI app
app = FastAPI(
    title="HR360",
    description="""
    Backend for the HR dashboard and the candidate portal.

    ## Features
    - **Applicants**: Pipeline, walk-in kiosk registration, resume extraction
    - **Assessments**: AI-generated aptitude and typing tests, scored server-side
    - **AI Flows**: Email composer, match score, interview bot, sentiment, ...
    - **People**: Employees, recognition, grievances, compliance documents
    - **Analytics**: Predictive analytics with a demo fallback
    - **Hiring Drive**: Live pipeline refresh
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# ============================================================
# ERROR HANDLERS
# ============================================================

def _field_errors(exc: RequestValidationError) -> dict:
    """{"email": ["value is not a valid email address: ..."], ...}"""
    details = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        details.setdefault(field, []).append(error["msg"])
    return details


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid input", "details": _field_errors(exc)}
    )


@app.exception_handler(RecordNotFoundError)
async def not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(FlowError)
async def flow_error_handler(request: Request, exc: FlowError):
    return JSONResponse(
        status_code=502,
        content={"error": "AI flow failed", "flow": exc.flow, "message": exc.message}
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Constraint violation on {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=409,
        content={"error": "Conflict", "message": "Record conflicts with an existing record"}
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Database error", "message": str(exc)}
    )


# ============================================================
# LIFECYCLE
# ============================================================

@app.on_event("startup")
async def startup_event():
    """Create tables and MongoDB indexes."""
    try:
        init_schema()
        logger.info("Database schema initialized")
    except SQLAlchemyError as e:
        logger.error(f"Database schema initialization failed: {e}")

    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except PyMongoError as e:
        logger.warning(f"MongoDB index initialization failed: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    """Stop the hiring drive poller if it is running."""
    await get_hiring_drive().stop()


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
