"""
Blueprint schema for the code pipeline.

The blueprint is a JSON document. The pipeline reads three sections of it:

    {
        "version": 1,
        "defaults": {"error": "m", "scale": 8, "border": 4, "dark": "#000000"},
        "scanner":  {"max_tags": 8},
        "templates": [
            {"identifier": "template0001style1", "name": "Classic", "dark": "#1b1f3b"}
        ]
    }

Template entries inherit every render attribute they do not set from
``defaults``. Keys the pipeline does not know about are ignored.
"""

import json
import logging
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from scancodes.exceptions import PipelineBuildError

logger = logging.getLogger(__name__)

# Render attributes a template may override
STYLE_FIELDS = ("error", "scale", "border", "dark", "light", "finder_dark", "data_dark")


class RenderOptions(BaseModel):
    """Fully resolved render attributes for one template."""

    error: Literal["l", "m", "q", "h"] = "m"
    scale: int = Field(default=8, ge=1, le=64)
    border: int = Field(default=4, ge=0, le=32)
    dark: Optional[str] = "#000000"
    light: Optional[str] = "#ffffff"
    finder_dark: Optional[str] = None
    data_dark: Optional[str] = None

    model_config = {"frozen": True}


class TemplateSpec(BaseModel):
    identifier: str
    name: str
    error: Optional[Literal["l", "m", "q", "h"]] = None
    scale: Optional[int] = Field(default=None, ge=1, le=64)
    border: Optional[int] = Field(default=None, ge=0, le=32)
    dark: Optional[str] = None
    light: Optional[str] = None
    finder_dark: Optional[str] = None
    data_dark: Optional[str] = None

    model_config = {"coerce_numbers_to_str": True}

    def resolve(self, defaults: RenderOptions) -> RenderOptions:
        # Only explicitly present keys override; "light": null means transparent
        merged = defaults.model_dump()
        merged.update(
            {field: getattr(self, field) for field in STYLE_FIELDS if field in self.model_fields_set}
        )
        return RenderOptions(**merged)


class ScannerOptions(BaseModel):
    max_tags: Optional[int] = Field(default=None, ge=1)


class Blueprint(BaseModel):
    version: int = 1
    defaults: RenderOptions = Field(default_factory=RenderOptions)
    scanner: ScannerOptions = Field(default_factory=ScannerOptions)
    templates: List[TemplateSpec] = Field(min_length=1)

    @model_validator(mode="after")
    def check_unique_identifiers(self) -> "Blueprint":
        seen = set()
        for template in self.templates:
            if template.identifier in seen:
                raise ValueError(f"Duplicate template identifier '{template.identifier}'")
            seen.add(template.identifier)
        return self

    def render_options(self) -> Dict[str, RenderOptions]:
        """Map of template identifier to resolved options, in blueprint order."""
        return {t.identifier: t.resolve(self.defaults) for t in self.templates}


def parse_blueprint(blueprint_json: str) -> Blueprint:
    """
    Parse and validate blueprint text.

    Raises:
        PipelineBuildError: the text is not JSON or does not match the schema.
    """
    try:
        raw = json.loads(blueprint_json)
    except (TypeError, ValueError) as e:
        raise PipelineBuildError(
            message="Blueprint is not valid JSON",
            context={"error": str(e)},
        ) from e

    if not isinstance(raw, dict):
        raise PipelineBuildError(
            message="Blueprint must be a JSON object",
            context={"type": type(raw).__name__},
        )

    try:
        blueprint = Blueprint.model_validate(raw)
    except ValidationError as e:
        raise PipelineBuildError(
            message="Blueprint failed validation",
            context={"errors": e.errors(include_url=False)},
        ) from e

    logger.debug(
        "Parsed blueprint v%d with %d templates", blueprint.version, len(blueprint.templates)
    )
    return blueprint
