"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from hr360.api.routes.auth_routes import router as auth_router
from hr360.api.routes.applicant_routes import router as applicant_router
from hr360.api.routes.employee_routes import router as employee_router
from hr360.api.routes.job_routes import router as job_router
from hr360.api.routes.college_routes import router as college_router
from hr360.api.routes.document_routes import router as document_router
from hr360.api.routes.grievance_routes import router as grievance_router
from hr360.api.routes.kudos_routes import router as kudos_router
from hr360.api.routes.analytics_routes import router as analytics_router
from hr360.api.routes.ai_routes import router as ai_router
from hr360.api.routes.portal_routes import router as portal_router
from hr360.api.routes.assessment_routes import router as assessment_router
from hr360.api.routes.hiring_drive_routes import router as hiring_drive_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(applicant_router)
api_router.include_router(employee_router)
api_router.include_router(job_router)
api_router.include_router(college_router)
api_router.include_router(document_router)
api_router.include_router(grievance_router)
api_router.include_router(kudos_router)
api_router.include_router(analytics_router)
api_router.include_router(ai_router)
api_router.include_router(portal_router)
api_router.include_router(assessment_router)
api_router.include_router(hiring_drive_router)
