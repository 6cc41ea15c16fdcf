"""
tasksapi.api

HTTP API package for the to-do service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, error translation and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth gate + delegation to repos/services.
