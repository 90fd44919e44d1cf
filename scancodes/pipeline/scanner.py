"""
Frame scanning with OpenCV.

What:  Turns a raw pixel buffer into greyscale, runs the OpenCV QR detector
       over it and keeps the payloads that are decimal integers.
How:   numpy views the buffer as rows of ``row_stride`` bytes (padding at the
       end of each row is dropped), cv2.cvtColor collapses the channels, then
       detectAndDecodeMulti runs with a single-code detectAndDecode fallback.

A cv2.QRCodeDetector is created per call; detector instances are not safe to
share between threads.
"""

import logging
from typing import List, Optional, Tuple

import cv2
import numpy as np

from scancodes.exceptions import ScanError
from scancodes.pipeline.base import ColorFormat, ScanResult, Tag

logger = logging.getLogger(__name__)

_TO_GRAY = {
    ColorFormat.RGB: cv2.COLOR_RGB2GRAY,
    ColorFormat.BGR: cv2.COLOR_BGR2GRAY,
    ColorFormat.RGBA: cv2.COLOR_RGBA2GRAY,
    ColorFormat.BGRA: cv2.COLOR_BGRA2GRAY,
}

Corners = List[Tuple[float, float]]


def frame_to_gray(
    pixels: bytes,
    color_format: int,
    width: int,
    height: int,
    row_stride: int,
) -> np.ndarray:
    """
    Build a contiguous greyscale image from a strided pixel buffer.

    Raises:
        ScanError: unknown color format, or geometry that does not fit the buffer.
    """
    try:
        fmt = ColorFormat(color_format)
    except ValueError as e:
        raise ScanError(
            message=f"Unsupported color format {color_format}",
            context={"color_format": color_format},
        ) from e

    if width <= 0 or height <= 0:
        raise ScanError(
            message="Frame dimensions must be positive",
            context={"width": width, "height": height},
        )

    row_bytes = width * fmt.channels
    if row_stride < row_bytes:
        raise ScanError(
            message="Row stride is smaller than one row of pixels",
            context={"row_stride": row_stride, "row_bytes": row_bytes},
        )

    needed = row_stride * height
    if len(pixels) < needed:
        raise ScanError(
            message="Pixel buffer is shorter than the frame geometry requires",
            context={"buffer": len(pixels), "needed": needed},
        )

    rows = np.frombuffer(pixels, dtype=np.uint8, count=needed).reshape(height, row_stride)
    rows = rows[:, :row_bytes]

    if fmt is ColorFormat.GRAY:
        return np.ascontiguousarray(rows)

    frame = np.ascontiguousarray(rows).reshape(height, width, fmt.channels)
    return cv2.cvtColor(frame, _TO_GRAY[fmt])


def _corners(points: Optional[np.ndarray]) -> Corners:
    if points is None:
        return []
    return [(float(x), float(y)) for x, y in np.asarray(points).reshape(-1, 2)]


def detect_codes(gray: np.ndarray) -> List[Tuple[str, Corners]]:
    """Decoded text and outline of every QR code OpenCV finds in ``gray``."""
    detector = cv2.QRCodeDetector()
    found: List[Tuple[str, Corners]] = []

    try:
        ok, decoded, points, _ = detector.detectAndDecodeMulti(gray)
        if ok and decoded:
            for i, text in enumerate(decoded):
                if text:
                    found.append((text, _corners(points[i] if points is not None else None)))

        if not found:
            text, points, _ = detector.detectAndDecode(gray)
            if text:
                found.append((text, _corners(points)))
    except cv2.error as e:
        raise ScanError(
            message="QR detector failed",
            context={"error": str(e)},
        ) from e

    return found


def _as_tag(text: str, corners: Corners) -> Optional[Tag]:
    payload = text.strip()
    if not (payload.isascii() and payload.isdigit()):
        logger.debug("Ignoring non-numeric code payload (%d chars)", len(payload))
        return None
    try:
        value = int(payload)
    except ValueError:
        # Beyond the interpreter's int/str conversion digit limit
        logger.debug("Ignoring numeric payload with %d digits", len(payload))
        return None
    return Tag(data_long=value, data=payload, corners=corners)


class FrameScanner:
    """Scans frames and converts decoded payloads into tags."""

    def __init__(self, max_tags: Optional[int] = None):
        self.max_tags = max_tags

    def scan(
        self,
        pixels: bytes,
        color_format: int,
        width: int,
        height: int,
        row_stride: int,
    ) -> ScanResult:
        gray = frame_to_gray(pixels, color_format, width, height, row_stride)

        tags: List[Tag] = []
        seen = set()
        for text, corners in detect_codes(gray):
            tag = _as_tag(text, corners)
            if tag is None or tag.data in seen:
                continue
            seen.add(tag.data)
            tags.append(tag)

        if self.max_tags is not None:
            tags = tags[: self.max_tags]

        logger.debug("Scanned %dx%d frame: %d tag(s)", width, height, len(tags))
        return ScanResult(tags=tags)
