"""API dependencies — Engine injection, authentication and read-only mode."""

from __future__ import annotations

import hmac

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from docsearch.core.engine import DocSearchEngine
from docsearch.core.exceptions import ReadOnlyError, UnauthorizedError

DEFAULT_MAINTENANCE_MESSAGE = "The API is currently in read-only mode."

# Global engine instance (set during application lifespan)
_engine: DocSearchEngine | None = None

_basic = HTTPBasic(auto_error=False)


def set_engine(engine: DocSearchEngine | None) -> None:
    """Set the global engine instance (called during app lifespan)."""
    global _engine
    _engine = engine


def get_engine() -> DocSearchEngine:
    """Get the global docsearch engine instance.

    Raises:
        RuntimeError: If the engine is not initialized.
    """
    if _engine is None:
        raise RuntimeError("docsearch engine not initialized. Is the server running?")
    return _engine


def require_admin(
    credentials: HTTPBasicCredentials | None = Depends(_basic),
    engine: DocSearchEngine = Depends(get_engine),
) -> None:
    """Allow only the configured admin user."""
    admin = engine.settings.admin
    if (
        credentials is None
        or not admin.password
        or not hmac.compare_digest(credentials.username.encode(), admin.user.encode())
        or not hmac.compare_digest(credentials.password.encode(), admin.password.encode())
    ):
        raise UnauthorizedError("Unauthorized")


async def require_collection(
    credentials: HTTPBasicCredentials | None = Depends(_basic),
    engine: DocSearchEngine = Depends(get_engine),
) -> str:
    """Authenticate as a collection (``handle:token``) and return its handle."""
    if credentials is None or not await engine.collections.authenticate(credentials.username, credentials.password):
        raise UnauthorizedError("Unauthorized")
    return credentials.username


def require_updates_allowed(engine: DocSearchEngine = Depends(get_engine)) -> None:
    """Reject data-modifying requests while the service is read-only."""
    if not engine.settings.updates_allowed:
        raise ReadOnlyError(engine.settings.maintenance_message or DEFAULT_MAINTENANCE_MESSAGE)
