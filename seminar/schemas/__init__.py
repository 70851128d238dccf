"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; business rules live in services/

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
