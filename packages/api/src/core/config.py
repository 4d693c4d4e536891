# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
Group related settings together; each group becomes a section future PRs extend.
"""

from decimal import Decimal
from pathlib import Path

from db.enums import DocumentType, UserRole
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[4]
_ENV_FILE = _PROJECT_ROOT / ".env"


def _default_required_documents() -> dict[UserRole, list[DocumentType]]:
    return {
        UserRole.CASH_BUYER: [DocumentType.ID, DocumentType.PROOF_OF_FUNDS],
        UserRole.WHOLESALER: [DocumentType.ID, DocumentType.CONTRACT],
        UserRole.ADMIN: [],
    }


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "wholesale-deals"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:5173"]

    # -- Auth --
    AUTH_DISABLED: bool = Field(
        default=False,
        description="Bypass token validation. Set True for local dev only.",
    )
    JWT_SECRET: str = Field(
        default="dev-only-jwt-secret-change-me-in-production",
        description="HMAC key for signing access tokens.",
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = Field(
        default=60 * 24,
        description="Access token lifetime in minutes (default 24 hours).",
    )
    BCRYPT_ROUNDS: int = Field(
        default=12,
        description="bcrypt cost factor for password hashes.",
    )

    # -- Admin console (separate trust domain from role=admin users) --
    ADMIN_CONSOLE_SECRET: str | None = Field(
        default=None,
        description="Shared secret for /api/console and /admin. Unset disables the console.",
    )
    SQLADMIN_SECRET_KEY: str = Field(
        default="dev-sqladmin-session-key",
        description="Signs the SQLAdmin login session cookie.",
    )

    # -- Marketplace rules --
    COMMISSION_RATE: Decimal = Field(
        default=Decimal("0.07"),
        description="Platform commission as a fraction of the assignment fee.",
    )
    REQUIRED_DOCUMENTS: dict[UserRole, list[DocumentType]] = Field(
        default_factory=_default_required_documents,
        description="Verification checklist per role. Override as JSON.",
    )

    # -- Uploads --
    STORAGE_BACKEND: str = Field(
        default="local",
        description="'local' writes under UPLOAD_DIR; 's3' uses the S3_* settings.",
    )
    UPLOAD_DIR: str = "uploads"
    UPLOAD_MAX_SIZE_MB: int = 10
    S3_ENDPOINT: str = "http://localhost:9090"
    S3_ACCESS_KEY: str = "minio"
    S3_SECRET_KEY: str = "miniosecret"
    S3_BUCKET: str = "documents"
    S3_REGION: str = "us-east-1"


settings = Settings()
