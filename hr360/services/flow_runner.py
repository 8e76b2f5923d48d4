"""
Run an AI flow from a request handler and keep a history entry.

Flows make blocking HTTP calls, so they run in the threadpool. The history
write is best-effort: a Mongo outage never fails a flow that succeeded.
"""
from typing import Optional, Union

from pydantic import BaseModel
from pymongo.errors import PyMongoError
from starlette.concurrency import run_in_threadpool

from hr360.core.config import get_settings
from hr360.core.logging_config import get_logger
from hr360.services.ai_flows import get_flow
from hr360.services.mongo_service import FlowRunService

logger = get_logger("hr360.flows")


def _redact(data: dict) -> dict:
    """Media payloads are not stored twice; keep only their size."""
    return {
        key: f"<data uri, {len(value)} chars>" if key.endswith("_data_uri") and isinstance(value, str) else value
        for key, value in data.items()
    }


async def run_flow(name: str, payload: Union[BaseModel, dict], user_id: Optional[int] = None) -> BaseModel:
    flow = get_flow(name)
    result = await run_in_threadpool(flow.run, payload)

    input_data = payload.model_dump(mode="json") if isinstance(payload, BaseModel) else dict(payload)
    try:
        FlowRunService().record(
            flow=name,
            model=get_settings().model_for_flow(name),
            input_data=_redact(input_data),
            output_data=result.model_dump(mode="json"),
            user_id=user_id
        )
    except PyMongoError as e:
        logger.warning(f"Could not record '{name}' run: {e}")

    return result
