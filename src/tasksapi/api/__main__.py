"""
tasksapi.api.__main__

Entrypoint for running the FastAPI application via `python -m tasksapi.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from tasksapi.api.app import create_app
from tasksapi.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Set TASKS_JWT_SECRET (from the secret store) and TASKS_DATABASE_URL before running with TASKS_ENV=prod.
