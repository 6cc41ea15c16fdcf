"""
tasksapi.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# All tenant data lives in shared tables keyed by namespace; no per-tenant DDL is ever issued.
