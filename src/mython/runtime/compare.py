"""Comparison predicates injected into Comparison nodes."""

from __future__ import annotations

from typing import Callable

from mython.core.errors import IncorrectOperation
from mython.runtime.context import Context
from mython.runtime.value import EQ_METHOD, LT_METHOD, VBool, VInstance, VNumber, VString, Value

Comparator = Callable[[Value, Value, Context], bool]

_PRIMITIVES = (VNumber, VString, VBool)


def _same_primitive(lhs: Value, rhs: Value) -> bool:
    return any(isinstance(lhs, kind) and isinstance(rhs, kind) for kind in _PRIMITIVES)


def _call_predicate(lhs: VInstance, method: str, rhs: Value, context: Context) -> bool:
    result = lhs.call(method, [rhs], context)
    if not isinstance(result, VBool):
        raise IncorrectOperation(f"{method} must return a Bool")
    return result.value


def equal(lhs: Value, rhs: Value, context: Context) -> bool:
    if lhs is None and rhs is None:
        return True
    if _same_primitive(lhs, rhs):
        return lhs.value == rhs.value
    if isinstance(lhs, VInstance) and lhs.has_method(EQ_METHOD, 1):
        return _call_predicate(lhs, EQ_METHOD, rhs, context)
    raise IncorrectOperation("Cannot compare objects for equality")


def less(lhs: Value, rhs: Value, context: Context) -> bool:
    if _same_primitive(lhs, rhs):
        return lhs.value < rhs.value
    if isinstance(lhs, VInstance) and lhs.has_method(LT_METHOD, 1):
        return _call_predicate(lhs, LT_METHOD, rhs, context)
    raise IncorrectOperation("Cannot compare objects for less")


def not_equal(lhs: Value, rhs: Value, context: Context) -> bool:
    return not equal(lhs, rhs, context)


def greater(lhs: Value, rhs: Value, context: Context) -> bool:
    return not less(lhs, rhs, context) and not equal(lhs, rhs, context)


def less_or_equal(lhs: Value, rhs: Value, context: Context) -> bool:
    return not greater(lhs, rhs, context)


def greater_or_equal(lhs: Value, rhs: Value, context: Context) -> bool:
    return not less(lhs, rhs, context)
