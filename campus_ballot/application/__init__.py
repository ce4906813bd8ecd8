"""
Application layer - Use cases and orchestration for Campus Ballot.

This layer contains:
- Application services (vote admission, turnout, session administration)
- Port definitions (abstract interfaces for infrastructure)

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, api
"""
