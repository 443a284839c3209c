from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file.

    Built once at process start and handed to ``create_app``; request
    handlers read it back from ``request.app.state.settings``.
    """

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3000

    # Service description
    service_name: str = "File Metadata Microservice"
    version: str = "1.0.0"

    # CORS settings
    cors_origins: str = "*"
    cors_allow_credentials: bool = False
    cors_allow_methods: str = "GET,POST,OPTIONS"
    cors_allow_headers: str = "*"

    # Upload settings
    upload_field: str = "upfile"
    max_upload_size: int = 10 * 1024 * 1024  # 10 MB, inclusive
    max_files: int = 1
    # Plain text fields sent alongside the file
    max_fields: int = 8
    max_field_size: int = 128 * 1024
    # Room for multipart boundaries and part headers
    body_overhead_allowance: int = 64 * 1024

    # Application settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def cors_methods_list(self) -> list[str]:
        """Parse CORS methods from comma-separated string."""
        if self.cors_allow_methods == "*":
            return ["*"]
        return [method.strip() for method in self.cors_allow_methods.split(",")]

    @property
    def cors_headers_list(self) -> list[str]:
        """Parse CORS headers from comma-separated string."""
        if self.cors_allow_headers == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allow_headers.split(",")]

    @property
    def max_body_size(self) -> int:
        """Largest request body the body guard lets through: the file, every text field, framing."""
        return (
            self.max_upload_size
            + self.max_fields * self.max_field_size
            + self.body_overhead_allowance
        )


# ──────────────────────────────────────────────
# Paths
# ──────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent                  # src/filemeta/
PUBLIC_DIR = BASE_DIR / "public"

# ──────────────────────────────────────────────
# Upload defaults
# ──────────────────────────────────────────────
DEFAULT_CONTENT_TYPE = "application/octet-stream"
READ_CHUNK_SIZE = 64 * 1024
