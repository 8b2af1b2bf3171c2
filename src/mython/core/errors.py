"""Runtime error types for the Mython evaluator."""

from typing import Any


class MythonError(RuntimeError):
    """Base class for runtime errors."""

    def __init__(self, message: str):
        super().__init__(message)


class UnknownName(MythonError):
    """Variable or field not bound."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown name: {name}")


class IncorrectOperation(MythonError):
    """Operator applied to operands it does not support."""

    def __init__(self, message: str = "Incorrect operation"):
        super().__init__(message)


class NoSuchMethod(MythonError):
    """No method with the requested name and arity on the class or its ancestors."""

    def __init__(self, class_name: str, method: str, argc: int):
        self.class_name = class_name
        self.method = method
        self.argc = argc
        super().__init__(f"Class {class_name} has no method {method} taking {argc} argument(s)")


class NotAnInstance(MythonError):
    """Expected a class instance but got some other value."""

    def __init__(self, value: Any, operation: str = ""):
        self.value = value
        self.operation = operation
        kind = "None" if value is None else type(value).__name__
        where = f" in {operation}" if operation else ""
        super().__init__(f"Expected a class instance{where}, got {kind}")


class ReturnOutsideMethod(MythonError):
    """A return escaped past every method body."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__("return outside of a method body")
