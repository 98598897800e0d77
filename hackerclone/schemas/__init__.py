"""Pydantic Schemas — form validation and response shapes for the HTTP shell.

Invariants:
    - Forms validate shape at the boundary; the core receives already-parsed values
    - Response models never expose password hashes

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
