"""Database Infrastructure — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Engine and pool live in infrastructure/database.py, never here
"""
