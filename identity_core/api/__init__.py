"""API Layer — FastAPI routes, dependency wiring and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; all failures use the {name, message, action, status_code} envelope
"""
