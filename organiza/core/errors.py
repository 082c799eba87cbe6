"""Domain errors and their HTTP mapping.

Services raise these; route handlers catch them at their own boundary and turn
them into ``HTTPException`` with the status carried by the error class.
"""

from pydantic import BaseModel


class ErrorCode:
    """Error codes for specific error conditions."""

    ERR_VALIDATION = "ERR_VALIDATION"
    ERR_DUPLICATE_EMAIL = "ERR_DUPLICATE_EMAIL"
    ERR_INVALID_CREDENTIALS = "ERR_INVALID_CREDENTIALS"
    ERR_MISSING_TOKEN = "ERR_MISSING_TOKEN"
    ERR_INVALID_TOKEN = "ERR_INVALID_TOKEN"
    ERR_NOT_FOUND = "ERR_NOT_FOUND"
    ERR_STORAGE = "ERR_STORAGE"


class ErrorResponse(BaseModel):
    """JSON body returned for every failed request."""

    error: str


class OrganizaError(Exception):
    """Base class for all domain errors."""

    code: str = ErrorCode.ERR_STORAGE
    status_code: int = 500
    default_message: str = "Erro interno"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(OrganizaError):
    """Missing or malformed input."""

    code = ErrorCode.ERR_VALIDATION
    status_code = 400
    default_message = "Dados inválidos"


class DuplicateEmailError(OrganizaError):
    """A user with this email is already registered."""

    code = ErrorCode.ERR_DUPLICATE_EMAIL
    status_code = 400
    default_message = "Email já cadastrado"


class InvalidCredentialsError(OrganizaError):
    """Unknown email or wrong password. Never says which."""

    code = ErrorCode.ERR_INVALID_CREDENTIALS
    status_code = 401
    default_message = "Credenciais inválidas"


class MissingTokenError(OrganizaError):
    """No bearer token on a protected request."""

    code = ErrorCode.ERR_MISSING_TOKEN
    status_code = 401
    default_message = "Token não fornecido"


class InvalidTokenError(OrganizaError):
    """Bad signature, malformed payload, expired token, or vanished user."""

    code = ErrorCode.ERR_INVALID_TOKEN
    status_code = 403
    default_message = "Token inválido"


class NotFoundError(OrganizaError):
    """Record does not exist or is not owned by the caller."""

    code = ErrorCode.ERR_NOT_FOUND
    status_code = 404
    default_message = "Tarefa não encontrada"


class StorageError(OrganizaError):
    """Any persistence failure not covered by a more specific error."""

    code = ErrorCode.ERR_STORAGE
    status_code = 500
    default_message = "Erro ao acessar o banco de dados"
