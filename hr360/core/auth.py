"""
Dashboard authentication for HR staff.

Candidates never log in: the kiosk, portal and assessment center are open.
Everything under the dashboard requires a bearer token issued to an active
hr_users account with the hr role.
"""

from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext

from hr360.core.config import get_settings
from hr360.core.errors import RecordNotFoundError
from hr360.schemas.schemas import UserRole
from hr360.services.records_service import HRUserRepository

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer()


def _unauthorized(detail: str = "Invalid or expired token") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ============================================================
# TOKENS
# ============================================================

def issue_token(user: dict, lifetime: Optional[timedelta] = None) -> str:
    """Bearer token for an HR account; the role travels as a claim."""
    settings = get_settings()
    lifetime = lifetime or timedelta(minutes=settings.jwt_expire_minutes)
    claims = {
        "sub": str(user["user_id"]),
        "email": user["email"],
        "role": user["role"],
        "exp": datetime.utcnow() + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def read_token(token: str) -> dict:
    """Claims of a valid token; 401 for a bad signature, expiry or missing subject."""
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise _unauthorized()
    if not claims.get("sub"):
        raise _unauthorized()
    return claims


# ============================================================
# LOGIN
# ============================================================

def authenticate(email: str, password: str) -> dict:
    """
    Return the hr_users row for valid credentials.

    Unknown email and wrong password give the same 401.
    """
    user = HRUserRepository().get_by_email(email)
    if not user or not verify_password(password, user["password_hash"]):
        raise _unauthorized("Invalid email or password")
    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")
    return user


# ============================================================
# DEPENDENCIES
# ============================================================

async def get_current_hr_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    The signed-in HR staff member.

    The account is re-read on every request, so deactivating it or
    changing its role takes effect before the token expires.
    """
    claims = read_token(credentials.credentials)
    try:
        user = HRUserRepository().get(int(claims["sub"]))
    except (RecordNotFoundError, ValueError):
        raise _unauthorized()

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")
    if user["role"] != UserRole.hr.value or claims.get("role") != UserRole.hr.value:
        raise HTTPException(status_code=403, detail="HR staff only")

    user.pop("password_hash", None)
    return user
