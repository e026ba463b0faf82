"""Pydantic Schemas — request bodies and the records services return.

Invariants:
    - Request schemas validate at the system boundary (length bounds, required fields)
    - Record schemas mirror table rows one-to-one and are what routes serialize

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
