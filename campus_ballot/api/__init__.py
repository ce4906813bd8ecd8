"""
API layer - FastAPI adapter over the application services.

IMPORT RULES:
- CAN import from: application, domain, bootstrap
"""
