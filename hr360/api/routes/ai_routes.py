"""
AI Flow Routes (HR only)

POST /ai/{flow} - Run one flow; the body is the flow's input schema
GET /ai/history/{flow} - Recent runs of a flow

One POST route is registered per entry in FLOWS, so each gets its own
request/response schema in the OpenAPI docs.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.errors import PyMongoError

from hr360.core.auth import get_current_hr_user
from hr360.core.logging_config import get_logger
from hr360.services.ai_flows import FLOWS, Flow
from hr360.services.flow_runner import run_flow
from hr360.services.mongo_service import FlowRunService

router = APIRouter(prefix="/ai", tags=["AI Flows"])
logger = get_logger("hr360.api")


@router.get("/history/{flow_name}", response_model=List[dict])
async def flow_history(
    flow_name: str,
    limit: int = Query(20, ge=1, le=100),
    user: dict = Depends(get_current_hr_user)
):
    if flow_name not in FLOWS:
        raise HTTPException(status_code=404, detail=f"Unknown flow '{flow_name}'")
    try:
        return FlowRunService().list_for_flow(flow_name, limit)
    except PyMongoError as e:
        logger.error(f"Could not read history for '{flow_name}': {e}")
        raise HTTPException(status_code=503, detail="Flow history is unavailable")


def _endpoint_for(flow: Flow):
    async def endpoint(payload: flow.input_model, user: dict = Depends(get_current_hr_user)):
        return await run_flow(flow.name, payload, user_id=user["user_id"])
    endpoint.__name__ = f"run_{flow.name}"
    return endpoint


for _flow in FLOWS.values():
    router.add_api_route(
        f"/{_flow.name}",
        _endpoint_for(_flow),
        methods=["POST"],
        response_model=_flow.output_model,
        summary=f"Run the {_flow.name.replace('_', ' ')} flow",
    )
