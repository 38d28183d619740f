"""
SeqFetch Configuration Settings.

Clean, validated configuration using pydantic-settings.
"""

from pathlib import Path
from typing import Literal

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class NCBISettings(BaseSettings):
    """NCBI Entrez E-utilities configuration."""

    efetch_url: str = Field(
        default="https://eutils.ncbi.nlm.nih.gov/entrez/eutils/efetch.fcgi",
        description="efetch endpoint",
    )
    tool: str = Field(
        default="antiSMASH downloader",
        description="Client identifier sent as the `tool` parameter",
    )
    api_key: str | None = Field(
        default=None,
        description="NCBI API key (optional, raises the rate limit)",
    )

    # Total budget for one fetch: connect, response and body
    timeout: float = Field(default=10.0, gt=0)

    model_config = ConfigDict(env_prefix="NCBI_")


class CallbackSettings(BaseSettings):
    """Completion callback configuration."""

    url: str = Field(default="http://127.0.0.1:5020/api/v1.0/downloaded")
    timeout: float | None = Field(
        default=None,
        description="Callback POST timeout in seconds (None waits indefinitely)",
    )

    model_config = ConfigDict(env_prefix="CALLBACK_")


class StorageSettings(BaseSettings):
    """Download storage configuration."""

    output_dir: Path = Field(
        default=Path("."),
        description="Root under which per-job directories are created",
    )
    chunk_size: int = Field(default=64 * 1024, ge=1024)

    model_config = ConfigDict(env_prefix="STORAGE_")


class DispatchSettings(BaseSettings):
    """Background job dispatch configuration."""

    max_pending_jobs: int = Field(
        default=0,
        ge=0,
        description="Maximum in-flight jobs (0 = unbounded)",
    )
    shutdown_grace_period: float = Field(
        default=30.0,
        ge=0,
        description="Seconds to wait for in-flight jobs on shutdown",
    )

    model_config = ConfigDict(env_prefix="DISPATCH_")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    env: Literal["development", "testing", "staging", "production"] = Field(
        default="development"
    )
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # App info
    app_name: str = Field(default="SeqFetch")
    app_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api/v1.0")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5021)

    # Subsettings
    ncbi: NCBISettings = Field(default_factory=NCBISettings)
    callback: CallbackSettings = Field(default_factory=CallbackSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    dispatch: DispatchSettings = Field(default_factory=DispatchSettings)

    def is_production(self) -> bool:
        return self.env == "production"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global instance
settings = Settings()
