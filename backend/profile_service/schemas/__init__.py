"""Pydantic Schemas — request validation rules and response shapes.

Invariants:
    - Schemas validate at system boundary (path, query, body)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
