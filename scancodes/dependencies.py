"""
FastAPI dependencies exposing the startup-built state to route handlers.

The lifespan in main.py stores the blueprint, pipeline and template service
on app.state; these accessors are what routes declare with Depends().
"""

from fastapi import Request

from scancodes.config import settings
from scancodes.pipeline import Pipeline
from scancodes.services.scan_service import ScanService
from scancodes.services.template_service import TemplateService


def get_pipeline(request: Request) -> Pipeline:
    return request.app.state.pipeline


def get_template_service(request: Request) -> TemplateService:
    return request.app.state.template_service


def get_scan_service(request: Request) -> ScanService:
    return ScanService(
        pipeline=request.app.state.pipeline,
        max_upload_size=settings.max_upload_size,
    )
