"""
Scancodes — Scan Service
=========================

What:  Turns an uploaded image into a ScanOutcome.
How:   Decodes the upload with OpenCV into an 8-bit BGR raster, hands the raw
       pixel buffer to the pipeline, and classifies the result.
Who:   POST /scan.

Outcomes:
    found          → at least one tag; value is the first tag's data_long
    not_found      → the image decoded but held no readable code
    invalid_input  → empty, oversized, or undecodable upload
    error          → the pipeline failed while scanning

The HTTP boundary still answers every non-found outcome with "N/A"; the
status is only there so logs and the X-Scan-Status header can tell them apart.
"""

import logging
from enum import Enum
from typing import Optional

import cv2
import numpy as np
from pydantic import BaseModel

from scancodes.exceptions import ScanError
from scancodes.pipeline import ColorFormat, Pipeline

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


class ScanStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    ERROR = "error"


class ScanOutcome(BaseModel):
    status: ScanStatus
    value: Optional[int] = None
    detail: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def found(cls, value: int) -> "ScanOutcome":
        return cls(status=ScanStatus.FOUND, value=value)

    @classmethod
    def not_found(cls) -> "ScanOutcome":
        return cls(status=ScanStatus.NOT_FOUND, detail="No code found in image")

    @classmethod
    def invalid_input(cls, detail: str) -> "ScanOutcome":
        return cls(status=ScanStatus.INVALID_INPUT, detail=detail)

    @classmethod
    def error(cls, detail: str) -> "ScanOutcome":
        return cls(status=ScanStatus.ERROR, detail=detail)

    def as_text(self) -> str:
        """Response body: the decoded number, or "N/A" for anything else."""
        if self.status is ScanStatus.FOUND:
            return str(self.value)
        return NOT_AVAILABLE


class ScanService:
    """Decodes uploads and scans them with a pipeline."""

    def __init__(self, pipeline: Pipeline, max_upload_size: int):
        self.pipeline = pipeline
        self.max_upload_size = max_upload_size

    def decode_image(self, content: bytes) -> Optional[np.ndarray]:
        """8-bit BGR raster of the upload, or None when it is not an image."""
        buffer = np.frombuffer(content, dtype=np.uint8)
        try:
            return cv2.imdecode(buffer, cv2.IMREAD_COLOR)
        except cv2.error as e:
            logger.debug("cv2.imdecode raised: %s", str(e))
            return None

    def scan_upload(self, content: Optional[bytes]) -> ScanOutcome:
        if not content:
            return ScanOutcome.invalid_input("Empty upload")

        if len(content) > self.max_upload_size:
            return ScanOutcome.invalid_input(
                f"Upload of {len(content)} bytes exceeds {self.max_upload_size} bytes"
            )

        image = self.decode_image(content)
        if image is None:
            return ScanOutcome.invalid_input("Upload is not a decodable image")

        height, width = image.shape[:2]
        components = image.shape[2] if image.ndim == 3 else 1

        try:
            result = self.pipeline.scan_frame(
                image.tobytes(),
                ColorFormat.BGR,
                width,
                height,
                width * components,
            )
        except ScanError as e:
            logger.error("Scan failed: %s | Context: %s", e.message, e.context)
            return ScanOutcome.error(e.message)

        if not result.tags:
            return ScanOutcome.not_found()

        if len(result.tags) > 1:
            logger.info("Frame held %d codes; reporting the first", len(result.tags))
        return ScanOutcome.found(result.tags[0].data_long)
