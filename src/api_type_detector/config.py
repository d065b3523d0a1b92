"""Configuration management using Pydantic settings with optional file persistence."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Paths ---

APP_NAME = "api-type-detector"


def get_config_dir() -> Path:
    """Get the configuration directory (e.g. ~/.config/api-type-detector)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / ".config")).expanduser()
    else:
        base = Path("~/.config").expanduser()

    return base / APP_NAME


def get_config_file() -> Path:
    return get_config_dir() / "config.json"


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load settings from the JSON config file if it exists."""
    path = path or get_config_file()
    if not path.exists():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        data = json.loads(text)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config_file(config_data: dict[str, Any], path: Path | None = None) -> Path:
    """Save settings to the JSON config file."""
    path = path or get_config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config_data, indent=2), encoding="utf-8")
    return path


class InferenceSettings(BaseSettings):
    """Schema inference configuration."""

    model_config = SettingsConfigDict(env_prefix="ATD_INFERENCE_")

    max_array_samples: int = Field(default=100, ge=1, description="Array elements classified when not analyzing all")
    analyze_all_array_elements: bool = Field(default=True, description="Classify every array element instead of a prefix")
    detect_dates: bool = Field(default=True, description="Recognize ISO-8601 date strings")
    max_depth: int = Field(default=64, ge=1, le=256, description="Maximum nesting depth before a sample is rejected")
    window_size: int = Field(default=10, ge=1, description="Most recent observations per route fed into synthesis")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="ATD_LOGGING_")

    level: str = Field(default="INFO")
    json_output: bool = Field(default=True, description="Emit JSON log lines instead of console output")


class StoreSettings(BaseSettings):
    """Declaration store configuration."""

    model_config = SettingsConfigDict(env_prefix="ATD_STORE_")

    directory: Optional[str] = Field(default=None, description="Directory for stored declarations")


class AppSettings(BaseSettings):
    """Root application settings.

    Priority: Environment Variables > Config File > Defaults
    """

    model_config = SettingsConfigDict(env_prefix="ATD_", extra="ignore")

    inference: InferenceSettings = Field(default_factory=InferenceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)

    def save(self, path: Path | None = None) -> Path:
        """Save current configuration to file."""
        return save_config_file(self.model_dump(mode="json", exclude_none=True), path)

    def get_store_dir(self) -> Path:
        """Get the declaration store directory."""
        if self.store.directory:
            return Path(self.store.directory).expanduser()
        return get_config_dir() / "declarations"


@dataclass(frozen=True, slots=True)
class InferenceOptions:
    """Engine-facing view of the inference settings."""

    max_array_samples: int = 100
    analyze_all_array_elements: bool = True
    detect_dates: bool = True
    max_depth: int = 64
    window_size: int = 10

    @classmethod
    def from_settings(cls, inference: InferenceSettings) -> "InferenceOptions":
        return cls(
            max_array_samples=inference.max_array_samples,
            analyze_all_array_elements=inference.analyze_all_array_elements,
            detect_dates=inference.detect_dates,
            max_depth=inference.max_depth,
            window_size=inference.window_size,
        )


def load_settings(path: Path | None = None) -> AppSettings:
    """Load settings with file config as base, env vars overlay."""
    file_data = load_config_file(path)
    # Pydantic will overlay env vars on top
    return AppSettings(**file_data)


settings = load_settings()
