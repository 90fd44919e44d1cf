"""
Scancodes — Template Service
=============================

What:  Derives the list of selectable templates from the blueprint.
How:   Parses the blueprint as plain JSON, projects each ``templates`` entry to
       a KeyValue(identifier, name) and memoizes the list under one constant
       key. No eviction, no expiry.
Who:   GET /templates.

Concurrency:
    The cache is filled once under a lock. Every fill from the same blueprint
    produces the same list, so readers never observe a partial value.
"""

import json
import logging
import threading
from typing import Any, Dict, List

from scancodes.exceptions import BlueprintError
from scancodes.schemas.responses import KeyValue

logger = logging.getLogger(__name__)

TEMPLATES_CACHE_KEY = "templates"


class TemplateService:
    """Cached view of the blueprint's template catalog."""

    def __init__(self, blueprint: str):
        self._blueprint = blueprint
        self._cache: Dict[str, List[KeyValue]] = {}
        self._lock = threading.Lock()

    def get_templates(self) -> List[KeyValue]:
        """
        Return (identifier, name) pairs in blueprint order.

        Raises:
            BlueprintError: ``templates`` is missing or an entry is malformed.
        """
        cached = self._cache.get(TEMPLATES_CACHE_KEY)
        if cached is not None:
            return list(cached)

        with self._lock:
            if TEMPLATES_CACHE_KEY not in self._cache:
                self._cache[TEMPLATES_CACHE_KEY] = self._extract_templates()
                logger.info(
                    "Template cache populated with %d entries",
                    len(self._cache[TEMPLATES_CACHE_KEY]),
                )
            return list(self._cache[TEMPLATES_CACHE_KEY])

    def _extract_templates(self) -> List[KeyValue]:
        try:
            document = json.loads(self._blueprint)
        except ValueError as e:
            raise BlueprintError(
                message="Blueprint is not valid JSON",
                context={"error": str(e)},
            ) from e

        templates = document.get("templates") if isinstance(document, dict) else None
        if not isinstance(templates, list):
            raise BlueprintError(
                message="Blueprint has no 'templates' array",
                context={"found": type(templates).__name__},
            )

        return [self._to_key_value(index, entry) for index, entry in enumerate(templates)]

    @staticmethod
    def _to_key_value(index: int, entry: Any) -> KeyValue:
        if not isinstance(entry, dict):
            raise BlueprintError(
                message=f"Template entry {index} is not an object",
                context={"index": index, "type": type(entry).__name__},
            )
        missing = [field for field in ("identifier", "name") if entry.get(field) is None]
        if missing:
            raise BlueprintError(
                message=f"Template entry {index} is missing {', '.join(missing)}",
                context={"index": index, "missing": missing},
            )
        return KeyValue(key=str(entry["identifier"]), value=str(entry["name"]))
