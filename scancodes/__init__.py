"""
Scancodes — Application Package
================================

A small web service that renders numeric codes as SVG, lists the templates
they can be rendered with, and reads codes back out of uploaded images.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (templates, scanning)    │  ← caching, upload handling
    ├─────────────────────────────────────┤
    │     Pipeline (render / scan)        │  ← segno + OpenCV
    ├─────────────────────────────────────┤
    │   Blueprint (startup JSON config)   │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
