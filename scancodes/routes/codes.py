"""
Scancodes — Code Rendering Route
=================================

What:  GET /code/{id} renders a scannable code for a numeric identifier as SVG.
How:   Accepts the identifier only as a plain digit string, picks the template (query or configured
       default) and delegates to the pipeline with an empty Skin.

Errors are not translated into client errors: an unknown template or an
unrenderable identifier surfaces as HTTP 500 via the global handlers.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from scancodes.config import settings
from scancodes.dependencies import get_pipeline
from scancodes.exceptions import RenderError
from scancodes.pipeline import Pipeline, Skin
from scancodes.schemas.responses import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Codes"])

SVG_MEDIA_TYPE = "image/svg+xml"

# Plain decimal digits; no sign, underscores, whitespace or fraction
DIGITS_PATTERN = r"^[0-9]+$"


@router.get(
    "/code/{code_id}",
    response_class=Response,
    responses={
        200: {"description": "SVG document", "content": {SVG_MEDIA_TYPE: {}}},
        500: {"description": "Unknown template or unrenderable identifier", "model": ErrorResponse},
    },
    summary="Render a code as SVG",
)
async def get_code(
    code_id: str = Path(
        ...,
        pattern=DIGITS_PATTERN,
        description="Non-negative identifier to encode, decimal digits only (any size)",
    ),
    template: Optional[str] = Query(
        default=None,
        description="Template identifier from GET /templates; defaults to the configured template",
    ),
    pipeline: Pipeline = Depends(get_pipeline),
) -> Response:
    template_id = template or settings.default_template

    try:
        identifier = int(code_id)
    except ValueError as e:
        # Past the interpreter's int-string digit limit
        raise RenderError(
            message="Identifier is too large to render",
            context={"digits": len(code_id), "reason": str(e)},
        ) from e

    # Rendering is CPU-bound; keep it off the event loop
    svg = await run_in_threadpool(pipeline.generate_svg, template_id, identifier, Skin())

    logger.debug("Rendered code %s with template %s", code_id, template_id)
    return Response(content=svg, media_type=SVG_MEDIA_TYPE)
