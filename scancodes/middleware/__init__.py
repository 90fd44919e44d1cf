"""
Scancodes — Middleware Package
===============================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request ID is set before the logging middleware reads it, and the
    logged duration includes compression.
"""
