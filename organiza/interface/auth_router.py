"""Registration, login and current-user routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from organiza.core.errors import DuplicateEmailError, InvalidCredentialsError, StorageError
from organiza.domain.user import LoginRequest, User, UserCreate
from organiza.interface.dependencies import (
    CurrentUser,
    get_session_issuer,
    get_user_repository,
    raise_http_error,
)
from organiza.models.service_models import LoginResponse
from organiza.services.session_service import SessionIssuer
from organiza.services.user_service import UserRepository


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> User:
    """Create an account. Does not log the user in."""
    try:
        return await users.register(payload)
    except DuplicateEmailError as e:
        raise_http_error(e)
    except StorageError as e:
        logger.error("register_storage_error", extra={"error": str(e)})
        raise_http_error(StorageError("Erro ao criar usuário"))


@router.post("/login")
async def login(
    payload: LoginRequest,
    users: Annotated[UserRepository, Depends(get_user_repository)],
    issuer: Annotated[SessionIssuer, Depends(get_session_issuer)],
) -> LoginResponse:
    """Exchange email and password for a session token."""
    try:
        user = await users.authenticate(payload.email, payload.password)
    except (InvalidCredentialsError, StorageError) as e:
        raise_http_error(e)

    return LoginResponse(token=issuer.issue(user), user=user)


@router.get("/me")
async def me(current_user: CurrentUser) -> User:
    """Return the identity behind the bearer token."""
    return User(id=current_user.id, name=current_user.name, email=current_user.email)
