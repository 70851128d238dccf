"""Database Package — declarative Base.

Invariants:
    - Base shared by all models and by alembic/env.py
"""
