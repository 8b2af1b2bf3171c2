"""Interpreter and evaluation rules."""

from mython.eval.machine import Evaluator, Returning, get_evaluator, reset_evaluator

__all__ = [
    "Evaluator",
    "Returning",
    "get_evaluator",
    "reset_evaluator",
]
