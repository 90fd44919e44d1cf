"""
SVG rendering of numeric codes with segno.

Identifiers are encoded as decimal text, which segno packs in QR numeric mode.
Micro QR is never produced since common scanners (OpenCV included) cannot
read it.
"""

import io
import logging

import segno

from scancodes.exceptions import RenderError
from scancodes.pipeline.base import Skin
from scancodes.pipeline.blueprint import RenderOptions

logger = logging.getLogger(__name__)


def _colours(options: RenderOptions, skin: Skin) -> dict:
    colours = {"dark": options.dark, "light": options.light}
    # segno treats None as "transparent" for module types, so unset ones are omitted
    if options.finder_dark is not None:
        colours["finder_dark"] = options.finder_dark
    if options.data_dark is not None:
        colours["data_dark"] = options.data_dark
    colours.update(skin.overrides())
    return colours


def render_svg(code_id: int, options: RenderOptions, skin: Skin) -> str:
    """Render ``code_id`` as an SVG document starting with the <svg> root."""
    if code_id < 0:
        raise RenderError(
            message="Code identifiers must be non-negative",
            context={"code_id": str(code_id)},
        )

    try:
        qr = segno.make_qr(str(code_id), error=options.error, boost_error=False)
    except (segno.DataOverflowError, ValueError) as e:
        # ValueError also covers ints past the interpreter's str() digit limit
        raise RenderError(
            message="Code identifier is too large to encode",
            context={"bits": code_id.bit_length(), "error": str(e)},
        ) from e

    out = io.BytesIO()
    try:
        qr.save(
            out,
            kind="svg",
            scale=options.scale,
            border=options.border,
            xmldecl=False,
            **_colours(options, skin),
        )
    except ValueError as e:
        # segno rejects unparseable colour values here
        raise RenderError(
            message="Invalid colour in template or skin",
            context={"error": str(e)},
        ) from e

    logger.debug("Rendered code %s as QR version %s", code_id, qr.version)
    return out.getvalue().decode("utf-8")
