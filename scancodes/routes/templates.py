"""
Scancodes — Template Listing Route
===================================

What:  GET /templates returns the selectable templates as [{key, value}].
How:   Served from TemplateService's cache after the first call.
"""

from typing import List

from fastapi import APIRouter, Depends

from scancodes.dependencies import get_template_service
from scancodes.schemas.responses import ErrorResponse, KeyValue
from scancodes.services.template_service import TemplateService

router = APIRouter(tags=["Templates"])


@router.get(
    "/templates",
    response_model=List[KeyValue],
    responses={
        200: {"description": "Templates in blueprint order"},
        500: {"description": "Blueprint has no usable template catalog", "model": ErrorResponse},
    },
    summary="List available templates",
)
async def list_templates(
    service: TemplateService = Depends(get_template_service),
) -> List[KeyValue]:
    return service.get_templates()
