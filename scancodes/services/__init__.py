"""
Scancodes — Services Layer
===========================

Service Inventory:
    - blueprint_loader: Reads the blueprint text at startup
    - TemplateService:  Cached (identifier, name) list from the blueprint
    - ScanService:      Upload decoding and tagged scan outcomes
"""
