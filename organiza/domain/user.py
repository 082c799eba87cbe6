"""User domain models."""

import re

from pydantic import BaseModel, Field, field_validator

from organiza.core.config import constants


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    """Trim and lower-case an email, validating its basic shape."""
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Email inválido")
    return email


class User(BaseModel):
    """Public user data (never includes the password hash)."""

    id: int = Field(..., description="Unique user ID")
    name: str = Field(..., description="Display name of the user")
    email: str = Field(..., description="Unique email address")


class UserRecord(User):
    """User row as stored, including the password hash."""

    password: str = Field(..., description="bcrypt hash of the password")
    created_at: str | None = Field(default=None, description="Creation timestamp (UTC)")

    def to_public(self) -> User:
        return User(id=self.id, name=self.name, email=self.email)


class AuthContext(BaseModel):
    """Identity attached to a request once its session token has been verified."""

    id: int
    email: str
    name: str

    @property
    def user_id(self) -> int:
        return self.id


class UserCreate(BaseModel):
    """Registration payload."""

    name: str = Field(..., description="Display name of the user")
    email: str = Field(..., description="Email address used to log in")
    password: str = Field(..., description="Plaintext password (hashed before storage)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Nome é obrigatório")
        if len(v) > constants.MAX_NAME_LENGTH:
            raise ValueError(f"Nome muito longo (máximo {constants.MAX_NAME_LENGTH} caracteres)")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < constants.MIN_PASSWORD_LENGTH:
            raise ValueError(f"Senha deve ter pelo menos {constants.MIN_PASSWORD_LENGTH} caracteres")
        if len(v.encode("utf-8")) > constants.MAX_PASSWORD_BYTES:
            raise ValueError(f"Senha deve ter no máximo {constants.MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    """Login payload. Only shape is checked; wrong values surface as invalid credentials."""

    email: str
    password: str
