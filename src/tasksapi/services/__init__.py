"""
tasksapi.services

Service-layer package.

Responsibilities:
- Own transaction boundaries for multi-step account operations.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable against a throwaway SQLite database.
