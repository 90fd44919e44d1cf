"""
Scancodes — API Routes Package
===============================

Route Inventory:
    - codes.py:      GET  /code/{id}    (render a code as SVG)
    - templates.py:  GET  /templates    (list selectable templates)
    - scan.py:       POST /scan         (read a code from an uploaded image)
    - health.py:     GET  /health       (service health check)

Routes stay thin: extract request data, call the pipeline or a service,
shape the response.
"""
