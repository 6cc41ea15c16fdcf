"""
tasksapi.auth.deps

FastAPI dependency functions for authorization.

Responsibilities:
- Read the raw session token from the `Authorization` header (no scheme prefix).
- Run the authorization gate against the `{identity}` path segment.
- Hand the admitted identity to tenant-scoped routes, or raise the denial.
"""

from __future__ import annotations

from fastapi import Depends, Header, Path

from tasksapi.api.deps import ServiceContainer, container_dep
from tasksapi.observability.logging import get_logger

log = get_logger(__name__)


def require_tenant(
    identity: str = Path(min_length=1),
    authorization: str = Header(default=""),
    container: ServiceContainer = Depends(container_dep),
) -> str:
    decision = container.gate.evaluate(authorization, identity)
    if decision.error is not None:
        log.info(
            "gate_denied",
            target_identity=identity,
            reason=decision.error.code,
            stage=decision.denied_at,
        )
        raise decision.error
    return decision.target_identity


# --- Module Notes -----------------------------------------------------------
# Routes must use the identity returned here (not the raw path parameter) when
# addressing `TenantNamespaceRepo`.
