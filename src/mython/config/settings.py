"""Interpreter settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InterpreterSettings(BaseSettings):
    """Evaluator and logging settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MYTHON_",
        case_sensitive=False,
        extra="ignore",
    )

    log_filter: str = Field(default="info")
    log_profile: Literal["default", "console"] = Field(default="default")
    trace_calls: bool = Field(default=False)
    recursion_limit: int = Field(default=10000, ge=100)


def load_settings(**overrides: Any) -> InterpreterSettings:
    """Load settings from the environment, with explicit overrides on top."""
    return InterpreterSettings(**overrides)
