"""
Scancodes — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for blueprint, render and scan failures.
How:   Each exception carries a message and an optional context dict.
       Global handlers (registered in main.py) turn the request-time ones into
       structured JSON error responses.
Who:   Raised by the pipeline package and the services; caught by the global
       handlers or, for scanning, by the scan service.

Exception Hierarchy:
    ScanCodesError (base)
    ├── BlueprintError           → startup fatal / 500 on /templates
    ├── PipelineBuildError       → startup fatal
    ├── RenderError              → 500 on /code/{id}
    │   └── UnknownTemplateError → 500 on /code/{id}
    └── ScanError                → folded into a ScanOutcome, never reaches HTTP
"""

from typing import Any, Dict, Optional


class ScanCodesError(Exception):
    """
    Base exception for all scancodes errors.

    Attributes:
        message:  Error description (safe to return in an API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BlueprintError(ScanCodesError):
    """
    Raised when the blueprint cannot be read or lacks the expected structure.

    When:    Resource missing at startup, or the ``templates`` array is absent
             or malformed when the template list is first computed.
    HTTP:    500 Internal Server Error (no graceful degradation)
    """

    def __init__(
        self,
        message: str = "The blueprint configuration is invalid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PipelineBuildError(ScanCodesError):
    """
    Raised when a pipeline cannot be constructed from a blueprint.

    The lifespan lets this propagate, so the process never serves traffic
    with a half-built pipeline.
    """

    def __init__(
        self,
        message: str = "Failed to build the code pipeline",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RenderError(ScanCodesError):
    """
    Raised when a code cannot be rendered.

    When:    Negative identifier, or an identifier too large for any QR version.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Failed to render code",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnknownTemplateError(RenderError):
    """Raised when the requested template is not declared in the blueprint."""

    def __init__(
        self,
        template: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["template"] = template
        super().__init__(message=f"Unknown template '{template}'", context=ctx)
        self.template = template


class ScanError(ScanCodesError):
    """
    Raised when a frame cannot be scanned.

    When:    Unsupported color format, inconsistent geometry, short pixel buffer,
             or an OpenCV failure during detection.
    """

    def __init__(
        self,
        message: str = "Failed to scan frame",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
