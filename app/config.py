# app/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./alarms.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 3004

    # ── Security ──────────────────────────────────────────────────────────
    ALLOWED_ORIGINS: str = "*"     # Comma separated, e.g. "https://panel.example.org,http://localhost:3000"

    # ── Media service (Cloudinary) ────────────────────────────────────────
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_UPLOAD_URL: str = "https://api.cloudinary.com/v1_1"
    MEDIA_UPLOAD_TIMEOUT_SECONDS: float = 15.0
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024    # 10 MB per photo

    # ── Alarm taxonomy ────────────────────────────────────────────────────
    PANIC_ALERT_TYPE_ID: int = 8     # tipo_alerta row used by the panic button
    DASHBOARD_SIREN_ID: int = 2      # Siren driven by POST /sirena_2/{id}

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_DIR: Optional[str] = None   # Defaults to <repo>/logs

    @property
    def allowed_origins(self) -> list:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()] or ["*"]

    @property
    def media_configured(self) -> bool:
        return bool(self.CLOUDINARY_CLOUD_NAME and self.CLOUDINARY_API_KEY and self.CLOUDINARY_API_SECRET)

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
