"""Database Metadata — declarative base shared by models and migrations.

Invariants:
    - Schema changes reach the database only through migrations, never create_all in app code
"""
