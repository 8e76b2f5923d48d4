"""
HR Staff Authentication Routes

POST /auth/register - Create an HR staff account
POST /auth/login - Exchange email/password for a bearer token
GET /auth/me - The signed-in HR staff member
"""

from fastapi import APIRouter, HTTPException, Depends

from hr360.core.auth import hash_password, authenticate, issue_token, get_current_hr_user
from hr360.core.config import get_settings
from hr360.core.logging_config import get_logger
from hr360.schemas.schemas import RegisterRequest, LoginRequest, TokenResponse, UserResponse
from hr360.services.records_service import HRUserRepository

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger("hr360.api")


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(request: RegisterRequest):
    """Every account created here has the hr role."""
    repo = HRUserRepository()
    if repo.get_by_email(request.email):
        raise HTTPException(status_code=409, detail="Email already registered")

    user = repo.create(request.email, hash_password(request.password), request.full_name)
    logger.info(f"HR account created: {user['email']}")
    return user


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """Send the token back as: Authorization: Bearer <token>"""
    user = authenticate(request.email, request.password)
    return TokenResponse(
        access_token=issue_token(user),
        expires_in=get_settings().jwt_expire_minutes * 60,
        user_id=user["user_id"],
        role=user["role"],
    )


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_hr_user)):
    return user
