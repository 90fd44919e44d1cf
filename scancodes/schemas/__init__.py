"""Pydantic response schemas for the JSON endpoints."""
