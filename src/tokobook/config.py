"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_UPLOAD_DIR = os.path.join("public", "uploads", "expenses")
DEFAULT_MAX_UPLOAD_BYTES = 4 * 1024 * 1024
DEFAULT_MAX_UPLOAD_FILES = 5
DEFAULT_ALLOWED_TYPES = ("image/jpeg", "image/png")
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got '{raw}'")


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        database_path: SQLite file; None lets the database factory pick its default
        upload_dir: Directory holding one sub-folder of attachments per expense
        max_upload_bytes: Per-file size limit for uploads
        max_upload_files: Maximum number of files per upload request
        allowed_upload_types: Accepted content types for uploads
        cors_origins: Origins allowed to call the API from a browser
        host: Bind address for ``tokobook serve``
        port: Bind port for ``tokobook serve``
    """

    database_path: Optional[str] = None
    upload_dir: Path = field(default_factory=lambda: Path(DEFAULT_UPLOAD_DIR))
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    max_upload_files: int = DEFAULT_MAX_UPLOAD_FILES
    allowed_upload_types: tuple[str, ...] = DEFAULT_ALLOWED_TYPES
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from TOKOBOOK_* environment variables."""
        origins = os.environ.get("TOKOBOOK_CORS_ORIGINS")
        return cls(
            database_path=os.environ.get("TOKOBOOK_DB_PATH") or None,
            upload_dir=Path(os.environ.get("TOKOBOOK_UPLOAD_DIR") or DEFAULT_UPLOAD_DIR),
            max_upload_bytes=_int_env("TOKOBOOK_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
            max_upload_files=_int_env("TOKOBOOK_MAX_UPLOAD_FILES", DEFAULT_MAX_UPLOAD_FILES),
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins
                else DEFAULT_CORS_ORIGINS
            ),
            host=os.environ.get("TOKOBOOK_HOST") or "127.0.0.1",
            port=_int_env("TOKOBOOK_PORT", 8000),
        )
