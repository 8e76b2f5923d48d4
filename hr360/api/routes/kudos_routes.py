"""
Recognition Routes (HR only)

GET /kudos - Recent kudos, newest first
POST /kudos - Give kudos (credits the receiver's points)
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from hr360.core.auth import get_current_hr_user
from hr360.schemas.schemas import KudoCreate, KudoResponse
from hr360.services.records_service import KudoRepository

router = APIRouter(prefix="/kudos", tags=["Recognition"], dependencies=[Depends(get_current_hr_user)])


@router.get("", response_model=List[KudoResponse])
async def list_kudos(limit: int = Query(50, ge=1, le=200)):
    return KudoRepository().list(limit=limit)


@router.post("", response_model=KudoResponse, status_code=201)
async def give_kudos(kudo: KudoCreate):
    return KudoRepository().give(kudo.model_dump())
