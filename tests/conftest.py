"""
Scancodes — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── blueprint_text: Small three-template blueprint
    ├── pipeline: Pipeline built from blueprint_text
    ├── make_code_png: Renders a numeric payload as PNG bytes (segno)
    ├── code_png: PNG of a code carrying 123
    ├── blank_png: White PNG with no code in it
    └── test_client: HTTPX AsyncClient with the app lifespan running
"""

import io
import json
import os

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SCAN_ENABLED"] = "true"
os.environ.pop("BLUEPRINT_PATH", None)

import cv2  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
import segno  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from scancodes.pipeline import build_pipeline  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Blueprint & Pipeline Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def blueprint_text():
    """
    A minimal blueprint with three templates.

    template0002style1 overrides the dark colour; template0003style1 sets
    error level and scale.
    """
    return json.dumps(
        {
            "version": 1,
            "defaults": {"error": "m", "scale": 6, "border": 4},
            "templates": [
                {"identifier": "template0001style1", "name": "Plain"},
                {"identifier": "template0002style1", "name": "Navy", "dark": "#1b1f3b"},
                {"identifier": "template0003style1", "name": "Rugged", "error": "h", "scale": 10},
            ],
            "unrelated": {"ignored": True},
        }
    )


@pytest.fixture
def pipeline(blueprint_text):
    return build_pipeline(blueprint_text)


# ══════════════════════════════════════════════════════════════════════════
# Image Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_code_png():
    """
    Returns a function rendering a payload as a clean QR PNG.

    Scale 10 with a 4-module quiet zone is comfortably inside what the
    OpenCV detector handles.
    """

    def _make(payload, scale=10, border=4):
        out = io.BytesIO()
        segno.make_qr(str(payload), error="m").save(out, kind="png", scale=scale, border=border)
        return out.getvalue()

    return _make


@pytest.fixture
def code_png(make_code_png):
    return make_code_png(123)


@pytest.fixture
def blank_png():
    ok, encoded = cv2.imencode(".png", np.full((200, 200, 3), 255, dtype=np.uint8))
    assert ok
    return encoded.tobytes()


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    ASGITransport does not send lifespan events, so the app's lifespan is
    entered here to build the pipeline from the packaged blueprint.
    """
    from scancodes.main import app

    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
