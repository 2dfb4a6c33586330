"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Adapters (HTTP/Cloudflare) and services read one consistent settings object.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.logging_setup import LOG_DISABLED

# Severity names accepted in LOG_LEVEL, mapped onto stdlib levels.
LOG_LEVELS: dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "disabled": LOG_DISABLED,
}

# Numeric levels (-1 trace .. 5 panic); anything from 6 up filters everything.
_NUMERIC_LEVELS: dict[int, str] = {
    -1: "trace",
    0: "debug",
    1: "info",
    2: "warn",
    3: "error",
    4: "fatal",
    5: "panic",
}
_INT_RE = re.compile(r"[+-]?\d+")


def _level_name_from_number(text: str) -> str | None:
    if not _INT_RE.fullmatch(text):
        return None
    number = int(text)
    if not -128 <= number <= 127:
        return None
    if number < -1:
        return "trace"
    return _NUMERIC_LEVELS.get(number, "disabled")


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "cfddns"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "cfddns"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "cfddns"
    return Path.home() / ".config" / "cfddns"


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
    """Write/update variables in the user's global .env file."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# cfddns user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    # The file holds an API token.
    env_path.chmod(0o600)
    return env_path


class AppSettings(BaseSettings):
    """Application configuration, read once at startup.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars): a bad LOG_LEVEL fails before
      anything runs.
    - A single frozen contract shared by CLI, services and adapters.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    log_level: str = Field(
        default="info",
        description="Log severity (trace/debug/info/warn/error/fatal/panic).",
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log renderer: one JSON object per line, or a human console format.",
    )
    interval: str = Field(
        ...,
        description="Scheduler interval, e.g. '5m', '1h30m' or a number of seconds.",
    )
    run_on_start: bool = Field(
        default=False,
        description="Run the first cycle immediately instead of one interval after start.",
    )

    zone_name: str = Field(
        default="",
        description="Exact name of the Cloudflare zone to manage.",
    )
    cloudflare_api_token: str = Field(
        default="",
        repr=False,
        description="Cloudflare API token (bearer).",
    )
    cloudflare_api_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        min_length=8,
        description="Base URL of the Cloudflare v4 API.",
    )

    primary_echo_url: str = Field(
        default="https://ifconfig.me",
        min_length=8,
        description="First IP echo endpoint.",
    )
    secondary_echo_url: str = Field(
        default="https://ipecho.net/plain",
        min_length=8,
        description="Fallback IP echo endpoint.",
    )

    http_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="cfddns/0.1",
        min_length=1,
        description="User-Agent for outbound requests.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: object) -> str:
        text = str(value if value is not None else "").strip().lower()
        if not text:
            return "info"
        if text in LOG_LEVELS:
            return text
        name = _level_name_from_number(text)
        if name is None:
            raise ValueError(f"unknown level string: {value!r}")
        return name

    @property
    def log_level_number(self) -> int:
        return LOG_LEVELS[self.log_level]
