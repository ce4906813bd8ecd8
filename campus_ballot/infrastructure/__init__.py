"""
Infrastructure layer - Adapters for external systems.

This layer contains:
- PostgreSQL vote record store (adapters/persistence)
- In-memory stubs for every application port (stubs)
- Per-key lock manager (concurrency)
- Structured logging and correlation ids (observability)
- Prometheus metrics (monitoring)

IMPORT RULES:
- CAN import from: domain, application
- CANNOT import from: api
"""
