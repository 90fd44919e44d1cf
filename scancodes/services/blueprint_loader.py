"""
Scancodes — Blueprint Loader
=============================

What:  Reads the blueprint JSON text the pipeline and template list are built from.
How:   Async file read (aiofiles) of the packaged resource, or of the path in
       settings.blueprint_path when set.
When:  Once, from the application lifespan. Any failure aborts startup; there
       is no fallback blueprint and no partial configuration.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import aiofiles

from scancodes.config import settings
from scancodes.exceptions import BlueprintError

logger = logging.getLogger(__name__)

DEFAULT_BLUEPRINT = Path(__file__).resolve().parent.parent / "resources" / "blueprint_default.json"


def resolve_blueprint_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Explicit path, then settings.blueprint_path, then the packaged default."""
    if path is not None:
        return Path(path)
    if settings.blueprint_path:
        return Path(settings.blueprint_path)
    return DEFAULT_BLUEPRINT


async def load_blueprint(path: Optional[Union[str, Path]] = None) -> str:
    """
    Return the full blueprint text.

    The content is not validated here; build_pipeline() and the template
    service each check the parts they use.

    Raises:
        BlueprintError: the file is missing, unreadable, or not UTF-8.
    """
    source = resolve_blueprint_path(path)
    try:
        async with aiofiles.open(source, "r", encoding="utf-8") as f:
            text = await f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read blueprint %s: %s", source, str(e))
        raise BlueprintError(
            message="Blueprint resource could not be read",
            context={"path": str(source), "error": str(e)},
        ) from e

    logger.info("Loaded blueprint from %s (%d bytes)", source, len(text))
    return text
