"""Infrastructure Layer — database gateway and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Database failures are logged here and re-raised unchanged

Design Decisions:
    - Thin wrappers over SQLAlchemy and logging, no business rules
"""
