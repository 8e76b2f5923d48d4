"""
Error types.

Two buckets only:
- validation failure: request schema mismatch (handled by FastAPI -> 400)
- operation failure: model/database errors (FlowError, SQLAlchemyError)
"""
from typing import Optional


class FlowError(Exception):
    """An AI flow call failed or its output did not match the output schema."""

    def __init__(self, flow: str, message: str, cause: Optional[Exception] = None):
        super().__init__(f"{flow}: {message}")
        self.flow = flow
        self.message = message
        self.cause = cause


class RecordNotFoundError(Exception):
    """Lookup by ID returned no row."""

    def __init__(self, table: str, record_id):
        super().__init__(f"{table} record {record_id} not found")
        self.table = table
        self.record_id = record_id
