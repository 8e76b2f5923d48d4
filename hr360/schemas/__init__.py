"""
Schemas module - Request/Response schemas for API endpoints.

- schemas.py: record-level API contract and enumerations
- flow_schemas.py: input/output contract of every AI flow
"""
