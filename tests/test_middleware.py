"""
Scancodes — Middleware Tests
=============================

What:  Tests for request ID acceptance and the access log line.
How:   Pure functions are tested directly; the access log is captured from a
       small app that only mounts the middleware.
"""

import logging

import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from httpx import ASGITransport, AsyncClient

from scancodes.middleware.logging import RequestLoggingMiddleware, access_level
from scancodes.middleware.request_id import RequestIDMiddleware, accept_request_id


class TestAcceptRequestId:

    def test_keeps_well_formed_id(self):
        assert accept_request_id("abc-123_x.y") == "abc-123_x.y"

    @pytest.mark.parametrize("supplied", [None, "", "has space", "line\nbreak", "x" * 65])
    def test_replaces_missing_or_unsafe_id(self, supplied):
        rid = accept_request_id(supplied)
        assert rid != supplied
        assert len(rid) == 8


class TestAccessLevel:

    def test_levels_by_status(self):
        assert access_level(500, None) == logging.ERROR
        assert access_level(422, None) == logging.WARNING
        assert access_level(200, None) == logging.INFO

    def test_failed_scan_is_warning(self):
        assert access_level(200, "error") == logging.WARNING

    def test_unread_scan_is_info(self):
        assert access_level(200, "not_found") == logging.INFO
        assert access_level(200, "invalid_input") == logging.INFO


def _logged_app() -> FastAPI:
    app = FastAPI()

    @app.post("/scan")
    async def scan():
        return PlainTextResponse("N/A", headers={"X-Scan-Status": "not_found"})

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    return app


class TestRequestLoggingMiddleware:

    @pytest.mark.asyncio
    async def test_scan_outcome_in_access_line(self, caplog):
        transport = ASGITransport(app=_logged_app())
        with caplog.at_level(logging.INFO, logger="scancodes.access"):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                await client.post("/scan", headers={"X-Request-ID": "scan0001"})

        records = [r for r in caplog.records if r.name == "scancodes.access"]
        assert len(records) == 1
        assert "scan=not_found" in records[0].getMessage()
        assert records[0].scan_status == "not_found"
        assert records[0].request_id == "scan0001"

    @pytest.mark.asyncio
    async def test_health_not_logged(self, caplog):
        transport = ASGITransport(app=_logged_app())
        with caplog.at_level(logging.INFO, logger="scancodes.access"):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                await client.get("/health")

        assert not [r for r in caplog.records if r.name == "scancodes.access"]
