"""Configuration package."""

from mython.config.settings import InterpreterSettings, load_settings

__all__ = [
    "InterpreterSettings",
    "load_settings",
]
