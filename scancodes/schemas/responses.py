"""
Scancodes — Pydantic Response Schemas
======================================

What:  Pydantic models defining the JSON bodies the API returns.
How:   FastAPI uses these models to serialize responses and generate the
       OpenAPI documentation. SVG and scan responses are not JSON and have
       no schema here.
"""

from typing import Optional

from pydantic import BaseModel, Field


class KeyValue(BaseModel):
    """
    What:  One selectable template.
    Who:   Returned as array items by GET /templates.

    Example:
        {"key": "template0001style1", "value": "Classic black on white"}
    """
    key: str = Field(description="Template identifier, usable as ?template= on /code/{id}")
    value: str = Field(description="Display name of the template")

    model_config = {"frozen": True}


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all JSON API errors.

    Example:
        {
            "error": "render_error",
            "message": "Unknown template 'template9999style1'",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    pipeline: str = Field(description="Pipeline state: loaded, missing")
    templates: int = Field(description="Number of templates the pipeline can render")
    scan_enabled: bool = Field(description="Whether POST /scan is mounted")
    uptime_seconds: float = Field(description="Seconds since service started")
