"""
Scancodes — Pipeline Interface
===============================

What:  The contract the HTTP layer relies on: render a code as SVG, scan a
       raw pixel frame for codes. Plus the value types crossing that contract.
How:   Concrete pipelines inherit from Pipeline and implement generate_svg()
       and scan_frame(). build_pipeline() in the package __init__ returns one.
Who:   Called by the /code and /scan routes (via the scan service).

Contract:
    - A pipeline is immutable after construction and safe to share between
      requests running on different worker threads.
    - generate_svg() raises RenderError (UnknownTemplateError for bad names).
    - scan_frame() raises ScanError; "nothing found" is an empty tag list,
      never an exception.
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class ColorFormat(IntEnum):
    """Pixel layouts accepted by Pipeline.scan_frame()."""

    GRAY = 0
    RGB = 1
    BGR = 2
    RGBA = 3
    BGRA = 4

    @property
    def channels(self) -> int:
        return _CHANNELS[self]


_CHANNELS = {
    ColorFormat.GRAY: 1,
    ColorFormat.RGB: 3,
    ColorFormat.BGR: 3,
    ColorFormat.RGBA: 4,
    ColorFormat.BGRA: 4,
}


class Skin(BaseModel):
    """
    Appearance overrides applied on top of a template's own colours.

    Every field is optional; an empty Skin() renders the template unchanged.
    Colours are anything segno accepts (#rgb, #rrggbb, names, None for
    transparent light modules).
    """

    dark: Optional[str] = Field(default=None, description="Dark module colour")
    light: Optional[str] = Field(default=None, description="Light module colour")
    finder_dark: Optional[str] = Field(default=None, description="Finder pattern colour")
    data_dark: Optional[str] = Field(default=None, description="Dark data module colour")

    model_config = {"frozen": True}

    def overrides(self) -> dict:
        """Only the colours that were explicitly set."""
        return self.model_dump(exclude_unset=True)


class Tag(BaseModel):
    """One decoded code found in a frame."""

    data_long: int = Field(description="Numeric payload carried by the code")
    data: str = Field(description="Raw decoded text")
    corners: List[Tuple[float, float]] = Field(
        default_factory=list,
        description="Code outline in frame pixel coordinates",
    )

    model_config = {"frozen": True}


class ScanResult(BaseModel):
    """Everything one scan_frame() call found, in detection order."""

    tags: List[Tag] = Field(default_factory=list)

    model_config = {"frozen": True}


class Pipeline(ABC):
    """Renders and scans visual codes for the templates of one blueprint."""

    @property
    @abstractmethod
    def template_ids(self) -> List[str]:
        """Identifiers of the templates this pipeline can render."""
        ...

    @abstractmethod
    def generate_svg(self, template: str, code_id: int, skin: Skin) -> str:
        """
        Render ``code_id`` under ``template`` as a standalone SVG document.

        Args:
            template: Template identifier declared in the blueprint.
            code_id:  Non-negative integer of any size.
            skin:     Colour overrides; Skin() keeps the template's colours.

        Raises:
            UnknownTemplateError: template is not declared.
            RenderError: code_id is negative or exceeds code capacity.
        """
        ...

    @abstractmethod
    def scan_frame(
        self,
        pixels: bytes,
        color_format: int,
        width: int,
        height: int,
        row_stride: int,
    ) -> ScanResult:
        """
        Find and decode codes in a raw 8-bit pixel frame.

        Args:
            pixels:       Row-major frame bytes, ``row_stride * height`` long.
            color_format: A ColorFormat value describing the pixel layout.
            width:        Frame width in pixels.
            height:       Frame height in pixels.
            row_stride:   Bytes per row, at least ``width * channels``.

        Raises:
            ScanError: invalid geometry/format or a decoder failure.
        """
        ...
