"""Mython: evaluation core for a small class-based scripting language."""

__version__ = "0.1.0"

from mython.core.errors import (
    IncorrectOperation,
    MythonError,
    NoSuchMethod,
    NotAnInstance,
    ReturnOutsideMethod,
    UnknownName,
)
from mython.eval.machine import Evaluator
from mython.runtime.context import Context, DummyContext, SimpleContext

__all__ = [
    "Context",
    "DummyContext",
    "Evaluator",
    "IncorrectOperation",
    "MythonError",
    "NoSuchMethod",
    "NotAnInstance",
    "ReturnOutsideMethod",
    "SimpleContext",
    "UnknownName",
]
