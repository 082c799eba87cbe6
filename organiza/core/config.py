"""Configuration management for organiza."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_JWT_SECRET = "organiza_plus_secret_key_123"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    sqlite_db_path: str = Field(default="database.db", description="SQLite database file (':memory:' allowed)")

    # Session Configuration
    jwt_secret: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="Secret used to sign session tokens (must be overridden in production)",
    )
    session_max_age_seconds: int = Field(default=86400, description="Session token lifetime in seconds")

    # Password Hashing
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, description="bcrypt cost factor for password hashes")

    # Server Configuration
    environment: str = Field(default="development", description="Deployment environment")
    host: str = Field(default="0.0.0.0", description="Bind address for the HTTP server")  # noqa: S104
    port: int = Field(default=3000, description="Bind port for the HTTP server")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    @property
    def is_production(self) -> bool:
        """Whether the app runs in production."""
        return self.environment.lower() == "production"

    @property
    def uses_default_secret(self) -> bool:
        """Whether session tokens are still signed with the built-in secret."""
        return self.jwt_secret == DEFAULT_JWT_SECRET

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Configuration
    API_PREFIX: str = "/api"
    SERVICE_NAME: str = "organiza"
    SERVICE_VERSION: str = "0.1.0"

    # Stats
    WEEKLY_STATS_WEEKS: int = 4  # Number of most recent weeks with completions

    # Validation
    MAX_NAME_LENGTH: int = 100
    MIN_PASSWORD_LENGTH: int = 6
    MAX_PASSWORD_BYTES: int = 72  # bcrypt input limit


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
