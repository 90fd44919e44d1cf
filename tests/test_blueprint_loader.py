"""
Scancodes — Blueprint Loader Tests
===================================

What:  Tests for reading the blueprint resource and its override path.
"""

import json

import pytest

from scancodes.config import settings
from scancodes.exceptions import BlueprintError
from scancodes.pipeline import build_pipeline
from scancodes.services.blueprint_loader import (
    DEFAULT_BLUEPRINT,
    load_blueprint,
    resolve_blueprint_path,
)


class TestResolvePath:

    def test_packaged_default(self, monkeypatch):
        monkeypatch.setattr(settings, "blueprint_path", None)
        assert resolve_blueprint_path() == DEFAULT_BLUEPRINT
        assert DEFAULT_BLUEPRINT.is_file()

    def test_settings_override(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "blueprint_path", str(tmp_path / "bp.json"))
        assert resolve_blueprint_path() == tmp_path / "bp.json"

    def test_explicit_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "blueprint_path", str(tmp_path / "ignored.json"))
        assert resolve_blueprint_path(tmp_path / "explicit.json") == tmp_path / "explicit.json"


class TestLoadBlueprint:

    @pytest.mark.asyncio
    async def test_packaged_blueprint_builds(self, monkeypatch):
        monkeypatch.setattr(settings, "blueprint_path", None)
        text = await load_blueprint()

        document = json.loads(text)
        assert document["templates"][0]["identifier"] == "template0001style1"

        pipeline = build_pipeline(text)
        assert "template0001style1" in pipeline.template_ids

    @pytest.mark.asyncio
    async def test_reads_text_verbatim(self, tmp_path, blueprint_text):
        path = tmp_path / "blueprint.json"
        path.write_text(blueprint_text, encoding="utf-8")
        assert await load_blueprint(path) == blueprint_text

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(BlueprintError, match="could not be read") as exc_info:
            await load_blueprint(tmp_path / "missing.json")
        assert exc_info.value.context["path"].endswith("missing.json")

    @pytest.mark.asyncio
    async def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"name": "\xff\xfe"}')
        with pytest.raises(BlueprintError):
            await load_blueprint(path)
