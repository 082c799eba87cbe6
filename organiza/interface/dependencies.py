"""FastAPI dependencies: injected repositories and the authentication guard."""

import logging
from typing import Annotated, NoReturn

from fastapi import Depends, Header, HTTPException, Request

from organiza.core.config import Settings
from organiza.core.db_client import Database
from organiza.core.errors import InvalidTokenError, OrganizaError
from organiza.domain.user import AuthContext
from organiza.services.session_service import SessionIssuer
from organiza.services.stats_service import StatsService
from organiza.services.task_service import TaskRepository
from organiza.services.user_service import UserRepository


logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session_issuer(request: Request) -> SessionIssuer:
    return request.app.state.session_issuer


def get_user_repository(
    db: Annotated[Database, Depends(get_database)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserRepository:
    return UserRepository(db, bcrypt_rounds=settings.bcrypt_rounds)


def get_task_repository(db: Annotated[Database, Depends(get_database)]) -> TaskRepository:
    return TaskRepository(db)


def get_stats_service(db: Annotated[Database, Depends(get_database)]) -> StatsService:
    return StatsService(db)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_PREFIX:
        return None
    return token.strip() or None


def raise_http_error(error: OrganizaError) -> NoReturn:
    """Convert a domain error into the HTTP error it maps to."""
    raise HTTPException(status_code=error.status_code, detail=error.message) from error


async def get_current_user(
    request: Request,
    issuer: Annotated[SessionIssuer, Depends(get_session_issuer)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthContext:
    """Guard for protected routes.

    Verifies the bearer token and confirms its user still exists. Handlers that
    depend on this only ever run with a verified identity.
    """
    try:
        auth = issuer.verify(extract_bearer_token(authorization))
        if await users.get_by_id(auth.id) is None:
            logger.warning("session_user_missing", extra={"user_id": auth.id, "path": request.url.path})
            raise InvalidTokenError
    except OrganizaError as e:
        logger.info("auth_guard_rejected", extra={"path": request.url.path, "code": e.code})
        raise_http_error(e)

    return auth


CurrentUser = Annotated[AuthContext, Depends(get_current_user)]
