"""Value representations for the Mython runtime.

The Python ``None`` object stands for the language's None value. A name that
is not bound at all is simply absent from its Closure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Sequence, Union

from loguru import logger

from mython.core.errors import NoSuchMethod

if TYPE_CHECKING:
    from mython.core.ast import Statement
    from mython.runtime.context import Context

SELF_NAME = "self"
INIT_METHOD = "__init__"
ADD_METHOD = "__add__"
STR_METHOD = "__str__"
EQ_METHOD = "__eq__"
LT_METHOD = "__lt__"


@dataclass(frozen=True)
class VNumber:
    """Runtime integer value."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VString:
    """Runtime string value."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class VBool:
    """Runtime boolean value."""

    value: bool

    def __str__(self) -> str:
        return "True" if self.value else "False"


@dataclass(frozen=True)
class Method:
    """Class method: name, formal parameter names and body.

    The body is expected to be a MethodBody node so that return stops at the
    call boundary.
    """

    name: str
    formal_params: list[str]
    body: "Statement"


@dataclass(eq=False)
class VClass:
    """User-defined class. Shared by reference between all its instances."""

    name: str
    methods: Sequence[Method] = ()
    parent: Optional["VClass"] = None

    def get_method(self, name: str, argc: int | None = None) -> Method | None:
        """Find a method by name (and arity when given), falling back to ancestors."""
        cls: VClass | None = self
        while cls is not None:
            for method in cls.methods:
                if method.name == name and (argc is None or len(method.formal_params) == argc):
                    return method
            cls = cls.parent
        return None

    def has_method(self, name: str, argc: int) -> bool:
        return self.get_method(name, argc) is not None

    def __str__(self) -> str:
        return f"Class {self.name}"


@dataclass(eq=False)
class VInstance:
    """Instance of a user-defined class.

    Each instance owns its field mapping; aliases share the same object, so
    field writes are visible through every reference.
    """

    cls: VClass
    fields: dict[str, "Value"] = field(default_factory=dict)

    def has_method(self, name: str, argc: int) -> bool:
        return self.cls.has_method(name, argc)

    def resolve(self, name: str, argc: int) -> Method:
        method = self.cls.get_method(name, argc)
        if method is None:
            logger.debug("instance.resolve.no_method class={} method={} argc={}", self.cls.name, name, argc)
            raise NoSuchMethod(self.cls.name, name, argc)
        return method

    def bind(self, method: Method, args: Sequence["Value"]) -> "Closure":
        """Fresh closure for one invocation: self plus the formal parameters."""
        closure: Closure = {SELF_NAME: self}
        closure.update(zip(method.formal_params, args))
        return closure

    def call(self, name: str, args: Sequence["Value"], context: "Context") -> "Value":
        """Invoke a method with ``self`` bound to this instance.

        Dispatch goes through the evaluator currently running, so settings
        such as call tracing apply to ``__str__``/``__eq__``/``__lt__`` too.
        """
        from mython.eval.machine import get_evaluator

        return get_evaluator().call_method(self, name, args, context)

    def __str__(self) -> str:
        return f"<{self.cls.name} object at {id(self):#x}>"


# Sum type for all values; None is the language's None
Value = Union[VNumber, VString, VBool, VClass, VInstance, None]

# One scope: variable name -> value
Closure = dict[str, Value]


def render(value: Value, context: "Context") -> str:
    """Textual rendering used by print and str()."""
    match value:
        case None:
            return "None"
        case VInstance() if value.has_method(STR_METHOD, 0):
            return render(value.call(STR_METHOD, [], context), context)
        case _:
            return str(value)
