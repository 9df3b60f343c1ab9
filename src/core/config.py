"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) away from the CLI.
- Lets the CLI and the services read the version threshold consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import VersionThreshold


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "state-probe"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "state-probe"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "state-probe"
    return Path.home() / ".config" / "state-probe"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# state-probe user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings."""

    model_config = SettingsConfigDict(
        env_prefix="STATE_PROBE_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    threshold_major: int = Field(
        default=1,
        ge=0,
        description="Highest major version still using the void-procedure protocol.",
    )
    threshold_minor: int = Field(
        default=8,
        ge=0,
        description="Highest minor version still using the void-procedure protocol.",
    )
    default_contexts: list[str] = Field(
        default_factory=lambda: ["world"],
        description="Contexts reported as active when the CLI is given none.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Root log level for the CLI (DEBUG, INFO, WARNING...).",
    )
    reports_dir: Path = Field(
        default=Path("reports"),
        description="Directory for exported resolution reports.",
    )

    def threshold(self) -> VersionThreshold:
        return VersionThreshold(major=self.threshold_major, minor=self.threshold_minor)
