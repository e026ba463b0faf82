"""Core Layer — error taxonomy and domain types, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
"""
