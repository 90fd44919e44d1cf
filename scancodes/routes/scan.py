"""
Scancodes — Scan Route
=======================

What:  POST /scan reads a code from an uploaded image.
How:   Parses the multipart body itself, picks the ``file`` field and
       delegates to ScanService in the threadpool.

Response contract:
    Always HTTP 200 text/plain. The body is the decoded number, or "N/A" for
    every failure (missing, malformed or bad upload, no code, scanner
    failure). The X-Scan-Status header carries the outcome (found, not_found,
    invalid_input, error) for callers that need to tell them apart.

The form is read inside the handler rather than through a ``File()``
parameter, so body parsing and field validation errors become invalid_input
instead of FastAPI's 400/422.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException

from scancodes.dependencies import get_scan_service
from scancodes.services.scan_service import ScanOutcome, ScanService, ScanStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scan"])

UPLOAD_FIELD = "file"

# Documents the multipart body that the handler parses by hand
_UPLOAD_REQUEST_BODY = {
    "required": False,
    "content": {
        "multipart/form-data": {
            "schema": {
                "type": "object",
                "properties": {
                    UPLOAD_FIELD: {
                        "type": "string",
                        "format": "binary",
                        "description": "Image to scan (any format OpenCV can decode)",
                    }
                },
            }
        }
    },
}


async def _read_upload(request: Request, service: ScanService) -> ScanOutcome:
    form = None
    try:
        form = await request.form()
        upload = form.get(UPLOAD_FIELD)

        if upload is None:
            return ScanOutcome.invalid_input("No 'file' field in upload")
        if not isinstance(upload, UploadFile):
            return ScanOutcome.invalid_input("'file' field is not a file upload")

        content = await upload.read()
        logger.info(
            "Received scan request: filename=%s, content_type=%s, size=%d bytes",
            upload.filename or "unknown",
            upload.content_type or "unknown",
            len(content),
        )
        return await run_in_threadpool(service.scan_upload, content)
    except HTTPException as e:
        # Starlette reports an unparseable multipart body this way
        logger.warning("Malformed scan request body: %s", e.detail)
        return ScanOutcome.invalid_input(f"Malformed request body: {e.detail}")
    except Exception as e:
        # Scanning must never fail the HTTP call
        logger.exception("Unexpected scan failure: %s", str(e))
        return ScanOutcome.error(str(e))
    finally:
        if form is not None:
            await form.close()


@router.post(
    "/scan",
    response_class=PlainTextResponse,
    responses={200: {"description": "Decoded number or N/A", "content": {"text/plain": {}}}},
    openapi_extra={"requestBody": _UPLOAD_REQUEST_BODY},
    summary="Scan an uploaded image for a code",
)
async def scan_file(
    request: Request,
    service: ScanService = Depends(get_scan_service),
) -> PlainTextResponse:
    outcome = await _read_upload(request, service)

    if outcome.status is ScanStatus.FOUND:
        logger.info("Scan found code %s", outcome.value)
    else:
        logger.warning("Scan returned %s: %s", outcome.status.value, outcome.detail)

    return PlainTextResponse(
        content=outcome.as_text(),
        headers={"X-Scan-Status": outcome.status.value},
    )
