"""
Analytics Routes

GET /analytics - Latest predictive analytics (public, never fails)
POST /analytics/generate - Run predictive_analytics and store the result (HR only)

The dashboard must render in demo setups without a database, so GET falls
back to a fixed sample whenever the real row can't be read.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from hr360.core.auth import get_current_hr_user
from hr360.core.config import get_settings
from hr360.core.logging_config import get_logger
from hr360.schemas.schemas import AnalyticsResponse
from hr360.schemas.flow_schemas import PredictiveAnalyticsInput
from hr360.services.records_service import AnalyticsRepository
from hr360.services.flow_runner import run_flow

router = APIRouter(prefix="/analytics", tags=["Analytics"])
logger = get_logger("hr360.api")

MOCK_ANALYTICS = {
    "id": 1,
    "created_at": "2024-05-22T12:00:00.000Z",
    "attrition_prediction": (
        "Attrition is predicted to be low (2.1%) next quarter, driven by high employee "
        "sentiment scores and competitive compensation packages."
    ),
    "burnout_heatmap": (
        "The Engineering department shows a moderate risk of burnout due to the recent "
        "product launch crunch. Recommend monitoring workloads and encouraging PTO."
    ),
    "salary_benchmarks": (
        "Salaries are competitive across most roles. The Data Science team is slightly below "
        "market average (5-7%); recommend a market adjustment review."
    ),
    "key_insights": (
        "Overall company health is strong. Focus on targeted interventions for the Engineering "
        "team's workload and review Data Science compensation to maintain a competitive edge."
    ),
}


@router.get("", response_model=AnalyticsResponse)
async def get_analytics():
    """
    Latest analytics row, or the sample payload when there is no database
    configured, the query fails, or the table is empty.
    """
    if not get_settings().database_configured:
        logger.warning("No database credentials configured, returning mock analytics data")
        return MOCK_ANALYTICS

    try:
        row = AnalyticsRepository().latest()
    except SQLAlchemyError as e:
        logger.error(f"Analytics query failed: {e}")
        logger.warning("Returning mock analytics data due to database error")
        return MOCK_ANALYTICS

    if row is None:
        logger.warning("No analytics data found in database, returning mock data")
        return MOCK_ANALYTICS

    return row


@router.post("/generate", response_model=AnalyticsResponse, status_code=201)
async def generate_analytics(request: PredictiveAnalyticsInput, user: dict = Depends(get_current_hr_user)):
    """Run the predictive analytics flow and store it as the newest row."""
    result = await run_flow("predictive_analytics", request, user_id=user["user_id"])
    return AnalyticsRepository().insert(result.model_dump())
