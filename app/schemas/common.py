"""Shared Pydantic schema base."""

from __future__ import annotations

from pydantic import BaseModel


class ApiModel(BaseModel):
    """All API schemas inherit from this; field names stay snake_case on the wire."""

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class HealthResponse(BaseModel):
    """Health-check response returned by /health."""
    status: str = "healthy"
    app: str
    env: str


class StatusResponse(BaseModel):
    """Acknowledgement for operations that return no resource."""
    status: str
