"""
Employee Routes (HR only)

GET /employees - List employees (remote status board)
GET /employees/leaderboard - Top employees by recognition points
GET /employees/{id} - Employee details
POST /employees - Add employee
PUT /employees/{id}/status - Set Remote/Office/Leave/Probation
POST /employees/{id}/points - Adjust recognition points
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from hr360.core.auth import get_current_hr_user
from hr360.schemas.schemas import (
    EmployeeCreate, EmployeeStatusUpdate, PointsAdjustment, EmployeeResponse, EmployeeStatus
)
from hr360.services.records_service import EmployeeRepository

router = APIRouter(prefix="/employees", tags=["Employees"], dependencies=[Depends(get_current_hr_user)])


@router.get("", response_model=List[EmployeeResponse])
async def list_employees(status: Optional[EmployeeStatus] = Query(None)):
    return EmployeeRepository().list(status=status)


@router.get("/leaderboard", response_model=List[EmployeeResponse])
async def leaderboard(limit: int = Query(10, ge=1, le=100)):
    return EmployeeRepository().leaderboard(limit)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(employee_id: int):
    return EmployeeRepository().get(employee_id)


@router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(employee: EmployeeCreate):
    return EmployeeRepository().create(employee.model_dump())


@router.put("/{employee_id}/status", response_model=EmployeeResponse)
async def update_status(employee_id: int, update: EmployeeStatusUpdate):
    return EmployeeRepository().set_status(employee_id, update.status)


@router.post("/{employee_id}/points", response_model=EmployeeResponse)
async def adjust_points(employee_id: int, adjustment: PointsAdjustment):
    """Positive adds, negative deducts; the balance stops at zero."""
    return EmployeeRepository().add_points(employee_id, adjustment.points)
