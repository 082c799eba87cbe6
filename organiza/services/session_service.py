"""Session service: issues and verifies signed, time-bound session tokens.

Tokens are stateless. The server keeps no session table and no revocation
list; a token stays valid until its max age runs out.
"""

import logging

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from pydantic import ValidationError

from organiza.core.config import settings
from organiza.core.errors import InvalidTokenError, MissingTokenError
from organiza.domain.user import AuthContext, User


logger = logging.getLogger(__name__)

SESSION_SALT = "session"


class SessionIssuer:
    """Signs identities into bearer tokens and checks them back."""

    def __init__(self, secret_key: str | None = None, *, max_age_seconds: int | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key or settings.jwt_secret, salt=SESSION_SALT)
        self.max_age_seconds = max_age_seconds or settings.session_max_age_seconds

    def issue(self, user: User) -> str:
        """Return a signed token embedding the user's id, email and name."""
        token = self._serializer.dumps({"id": user.id, "email": user.email, "name": user.name})
        logger.info("session_issued", extra={"user_id": user.id})
        return token

    def verify(self, token: str | None) -> AuthContext:
        """Return the identity carried by a token.

        Raises:
            MissingTokenError: If no token was supplied
            InvalidTokenError: If the token is tampered, malformed or expired
        """
        if not token:
            raise MissingTokenError

        try:
            payload = self._serializer.loads(token, max_age=self.max_age_seconds)
        except SignatureExpired as e:
            logger.info("session_rejected", extra={"reason": "expired"})
            raise InvalidTokenError from e
        except BadSignature as e:
            logger.warning("session_rejected", extra={"reason": "bad_signature"})
            raise InvalidTokenError from e

        try:
            return AuthContext.model_validate(payload)
        except ValidationError as e:
            logger.warning("session_rejected", extra={"reason": "malformed_payload"})
            raise InvalidTokenError from e
