"""
Scancodes — Code Pipeline
==========================

What:  Builds the pipeline handle used by every request: render a code as SVG
       and scan raw frames for codes, for the templates of one blueprint.
How:   build_pipeline() validates the blueprint, resolves each template's
       render options once, and returns an immutable CodePipeline.
Who:   Called once by the application lifespan; the handle lives on app.state.

The HTTP layer only depends on the Pipeline interface in base.py.
"""

import logging
from typing import Dict, List

from pydantic import ValidationError

from scancodes.exceptions import PipelineBuildError, UnknownTemplateError
from scancodes.pipeline.base import ColorFormat, Pipeline, ScanResult, Skin, Tag
from scancodes.pipeline.blueprint import Blueprint, RenderOptions, parse_blueprint
from scancodes.pipeline.renderer import render_svg
from scancodes.pipeline.scanner import FrameScanner

logger = logging.getLogger(__name__)

__all__ = [
    "CodePipeline",
    "ColorFormat",
    "Pipeline",
    "ScanResult",
    "Skin",
    "Tag",
    "build_pipeline",
]


class CodePipeline(Pipeline):
    """QR pipeline backed by segno (rendering) and OpenCV (scanning)."""

    def __init__(self, blueprint: Blueprint):
        try:
            self._templates: Dict[str, RenderOptions] = blueprint.render_options()
        except ValidationError as e:
            raise PipelineBuildError(
                message="Template render options are invalid",
                context={"errors": e.errors(include_url=False)},
            ) from e
        self._scanner = FrameScanner(max_tags=blueprint.scanner.max_tags)

    @property
    def template_ids(self) -> List[str]:
        return list(self._templates)

    def generate_svg(self, template: str, code_id: int, skin: Skin) -> str:
        options = self._templates.get(template)
        if options is None:
            raise UnknownTemplateError(template)
        return render_svg(code_id, options, skin)

    def scan_frame(
        self,
        pixels: bytes,
        color_format: int,
        width: int,
        height: int,
        row_stride: int,
    ) -> ScanResult:
        return self._scanner.scan(pixels, color_format, width, height, row_stride)


def build_pipeline(blueprint_json: str) -> Pipeline:
    """
    Construct a pipeline from blueprint text.

    Raises:
        PipelineBuildError: malformed JSON, schema violation, or bad template options.
    """
    pipeline = CodePipeline(parse_blueprint(blueprint_json))
    logger.info("Pipeline built with %d template(s)", len(pipeline.template_ids))
    return pipeline
