"""Configuration models for the storefront smoke harness."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://localhost:5173"


class BrowserConfig(BaseModel):
    """Settings for the browser backend."""

    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    no_sandbox: bool = True
    disable_dev_shm_usage: bool = True
    disable_gpu: bool = True
    window_width: int = Field(default=1920, gt=0)
    window_height: int = Field(default=1080, gt=0)
    implicit_timeout: float = Field(
        default=10.0,
        ge=0,
        description="Default timeout (in seconds) for element lookups made by the backend.",
    )
    wait_timeout: float = Field(
        default=15.0,
        ge=0,
        description="Timeout (in seconds) for explicit readiness waits.",
    )
    poll_interval: float = Field(default=0.25, gt=0)

    @model_validator(mode="before")
    @classmethod
    def _split_window_size(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "window_size" in data:
            data = dict(data)
            width, height = parse_window_size(data.pop("window_size"))
            data["window_width"] = width
            data["window_height"] = height
        return data

    @property
    def window_size(self) -> tuple[int, int]:
        return self.window_width, self.window_height

    def launch_args(self) -> list[str]:
        """Command line switches passed to the browser binary."""

        args: list[str] = []
        if self.no_sandbox:
            args.append("--no-sandbox")
        if self.disable_dev_shm_usage:
            args.append("--disable-dev-shm-usage")
        if self.disable_gpu:
            args.append("--disable-gpu")
        args.append(f"--window-size={self.window_width},{self.window_height}")
        return args


class NotificationConfig(BaseModel):
    """Notification channel settings."""

    channel: str = Field(default="console")


class SuiteConfig(BaseSettings):
    """Top-level configuration for a smoke suite run."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_SMOKE_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    base_url: str = Field(default=DEFAULT_BASE_URL)
    scenarios: Optional[list[str]] = Field(
        default=None,
        description="Scenario identifiers to run; all scenarios when unset.",
    )
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)

    @field_validator("base_url")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return value


def parse_window_size(value: object) -> tuple[int, int]:
    """Parse ``"WxH"`` (or ``"W,H"``) into a ``(width, height)`` pair."""

    if isinstance(value, (tuple, list)) and len(value) == 2:
        width, height = int(value[0]), int(value[1])
    elif isinstance(value, str):
        normalized = value.lower().replace(",", "x").replace(" ", "")
        parts = normalized.split("x")
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            raise ValueError(f"Invalid window size {value!r}; expected WIDTHxHEIGHT")
        width, height = int(parts[0]), int(parts[1])
    else:
        raise ValueError(f"Invalid window size {value!r}; expected WIDTHxHEIGHT")
    if width <= 0 or height <= 0:
        raise ValueError(f"Window size must be positive, got {value!r}")
    return width, height


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    **overrides: object,
) -> SuiteConfig:
    """Load configuration from an optional file and overrides."""

    data: dict[str, Any] = {}
    if path:
        import yaml

        data = yaml.safe_load(path.read_text()) or {}
    if overrides:
        _deep_update(data, overrides)
    settings_kwargs: dict[str, object] = {}
    if env_file is not None:
        settings_kwargs["_env_file"] = env_file
    config = SuiteConfig(**data, **settings_kwargs)
    if not data:
        return config

    merged = config.model_dump(mode="python")
    _deep_update(merged, data)
    return SuiteConfig.model_validate(merged)


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Recursively merge ``updates`` into ``target`` in-place."""

    for key, value in updates.items():
        if (
            isinstance(value, Mapping)
            and isinstance(existing := target.get(key), Mapping)
        ):
            nested: dict[str, Any]
            if isinstance(existing, dict):
                nested = existing
            else:
                nested = dict(existing)
            _deep_update(nested, value)
            target[key] = nested
        else:
            target[key] = value
