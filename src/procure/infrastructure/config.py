"""Runtime settings, read from ``PROCURE_*`` environment variables or a
``.env`` file in the working directory."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PROCURE_",
        env_file=".env",
        extra="ignore",
    )

    data_dir: Path = _DEFAULT_DATA_DIR
    audit_file: str = "audit.jsonl"  # relative to data_dir
    log_level: str = "INFO"
    json_logs: bool = False
    default_source_system: str = Field(default="EXTERNAL_BILLING", max_length=50)
    actor: str | None = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def audit_path(self) -> Path:
        return self.data_dir / self.audit_file
