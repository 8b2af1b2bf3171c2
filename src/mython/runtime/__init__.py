"""Runtime object model: values, classes, contexts and comparators."""

from mython.runtime.compare import (
    Comparator,
    equal,
    greater,
    greater_or_equal,
    less,
    less_or_equal,
    not_equal,
)
from mython.runtime.context import Context, DummyContext, SimpleContext
from mython.runtime.value import (
    Closure,
    Method,
    VBool,
    VClass,
    VInstance,
    VNumber,
    VString,
    Value,
    render,
)

__all__ = [
    # Values
    "Value",
    "VNumber",
    "VString",
    "VBool",
    "VClass",
    "VInstance",
    "Method",
    "Closure",
    "render",
    # Contexts
    "Context",
    "SimpleContext",
    "DummyContext",
    # Comparators
    "Comparator",
    "equal",
    "not_equal",
    "less",
    "greater",
    "less_or_equal",
    "greater_or_equal",
]
