"""
Hiring Drive Routes (HR only)

POST /hiring-drive/start - Begin refreshing the pipeline every interval
POST /hiring-drive/stop - Stop refreshing
GET /hiring-drive/status - Latest snapshot and poller state
"""

from fastapi import APIRouter, Depends

from hr360.core.auth import get_current_hr_user
from hr360.schemas.schemas import HiringDriveStatus
from hr360.services.hiring_drive import get_hiring_drive

router = APIRouter(prefix="/hiring-drive", tags=["Hiring Drive"], dependencies=[Depends(get_current_hr_user)])


@router.post("/start", response_model=HiringDriveStatus)
async def start_drive():
    drive = get_hiring_drive()
    await drive.start()
    return drive.status()


@router.post("/stop", response_model=HiringDriveStatus)
async def stop_drive():
    drive = get_hiring_drive()
    await drive.stop()
    return drive.status()


@router.get("/status", response_model=HiringDriveStatus)
async def drive_status():
    return get_hiring_drive().status()
