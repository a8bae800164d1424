"""
Application settings loaded from environment (and optional .env file).
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    PdfHelper settings.

    Every field can be overridden with a PDFHELPER_ prefixed environment
    variable, e.g. PDFHELPER_SAVE_PATH=/srv/pdf.
    """

    model_config = SettingsConfigDict(
        env_prefix="PDFHELPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=5000, description="Bind port")
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    max_body_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Largest accepted request body",
    )

    # Storage
    save_path: Path = Field(
        default=Path("storage"),
        description="Root directory generated documents are written under",
    )

    # Rendering (fixed per deployment, never taken from a request)
    paper_size: str = Field(default="A4", description="Chromium paper format")
    margin_top: str = "10mm"
    margin_right: str = "10mm"
    margin_bottom: str = "10mm"
    margin_left: str = "10mm"
    headless: bool = True
    browser_args: list[str] = Field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox"]
    )

    # Bulk generation
    max_generate_bulk: int = Field(default=50, ge=1, description="Largest accepted batch")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def margins(self) -> dict[str, str]:
        return {
            "top": self.margin_top,
            "right": self.margin_right,
            "bottom": self.margin_bottom,
            "left": self.margin_left,
        }


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def init_settings(settings: Settings) -> Settings:
    """Install an explicit settings object (used by build_app and tests)."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
