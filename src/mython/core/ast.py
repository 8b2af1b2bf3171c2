"""Statement and expression nodes for Mython programs.

Nodes are plain data. Their evaluation rules live in
:class:`mython.eval.machine.Evaluator`; ``Statement.execute`` is the entry
point callers use on any node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mython.runtime.compare import Comparator
    from mython.runtime.context import Context
    from mython.runtime.value import Closure, VClass, Value


class Statement:
    """Base class for executable nodes."""

    def execute(self, closure: "Closure", context: "Context") -> "Value":
        """Evaluate this node against a closure and execution context."""
        from mython.eval.machine import get_evaluator

        return get_evaluator().execute(self, closure, context)


@dataclass(frozen=True)
class NumericConst(Statement):
    """Integer literal."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StringConst(Statement):
    """String literal."""

    value: str

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class BoolConst(Statement):
    """Boolean literal."""

    value: bool

    def __str__(self) -> str:
        return "True" if self.value else "False"


@dataclass(frozen=True)
class NoneConst(Statement):
    """The None literal."""

    def __str__(self) -> str:
        return "None"


@dataclass(frozen=True)
class VariableValue(Statement):
    """Variable reference, possibly a dotted field chain: a.b.c

    The head is looked up in the closure; every following identifier is a
    field of the preceding instance.
    """

    dotted_ids: list[str]

    def __post_init__(self) -> None:
        if not self.dotted_ids:
            raise ValueError("VariableValue needs at least one identifier")

    @staticmethod
    def name(var_name: str) -> "VariableValue":
        return VariableValue([var_name])

    def __str__(self) -> str:
        return ".".join(self.dotted_ids)


@dataclass(frozen=True)
class Assignment(Statement):
    """Binding in the current closure: x = rv"""

    var_name: str
    rv: Statement

    def __str__(self) -> str:
        return f"{self.var_name} = {self.rv}"


@dataclass(frozen=True)
class FieldAssignment(Statement):
    """Field store: object.field_name = rv"""

    object: VariableValue
    field_name: str
    rv: Statement

    def __str__(self) -> str:
        return f"{self.object}.{self.field_name} = {self.rv}"


@dataclass(frozen=True)
class BinaryOperation(Statement):
    """Two-operand node; operands are evaluated left to right."""

    lhs: Statement
    rhs: Statement


@dataclass(frozen=True)
class Add(BinaryOperation):
    """Number sum, string concatenation, or lhs.__add__(rhs)."""

    def __str__(self) -> str:
        return f"({self.lhs} + {self.rhs})"


@dataclass(frozen=True)
class Sub(BinaryOperation):
    def __str__(self) -> str:
        return f"({self.lhs} - {self.rhs})"


@dataclass(frozen=True)
class Mult(BinaryOperation):
    def __str__(self) -> str:
        return f"({self.lhs} * {self.rhs})"


@dataclass(frozen=True)
class Div(BinaryOperation):
    def __str__(self) -> str:
        return f"({self.lhs} / {self.rhs})"


@dataclass(frozen=True)
class Or(BinaryOperation):
    """Short-circuit disjunction."""

    def __str__(self) -> str:
        return f"({self.lhs} or {self.rhs})"


@dataclass(frozen=True)
class And(BinaryOperation):
    """Short-circuit conjunction."""

    def __str__(self) -> str:
        return f"({self.lhs} and {self.rhs})"


@dataclass(frozen=True)
class Not(Statement):
    argument: Statement

    def __str__(self) -> str:
        return f"(not {self.argument})"


@dataclass(frozen=True)
class Comparison(Statement):
    """Relational operator; semantics come from the injected comparator."""

    comparator: "Comparator"
    lhs: Statement
    rhs: Statement

    def __str__(self) -> str:
        name = getattr(self.comparator, "__name__", "cmp")
        return f"{name}({self.lhs}, {self.rhs})"


@dataclass(frozen=True)
class Print(Statement):
    """print a, b, c

    ``argument`` is the single-expression form; ``args`` the list form.
    """

    args: list[Statement] = field(default_factory=list)
    argument: Optional[Statement] = None

    @staticmethod
    def variable(name: str) -> "Print":
        """Print the value of a single variable."""
        return Print(argument=VariableValue.name(name))

    def __str__(self) -> str:
        if self.argument is not None:
            return f"print {self.argument}"
        return "print " + ", ".join(str(arg) for arg in self.args)


@dataclass(frozen=True)
class MethodCall(Statement):
    """object.method(args...)"""

    object: Statement
    method: str
    args: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        args_str = ", ".join(str(arg) for arg in self.args)
        return f"{self.object}.{self.method}({args_str})"


@dataclass(frozen=True)
class Stringify(Statement):
    """str(argument)"""

    argument: Statement

    def __str__(self) -> str:
        return f"str({self.argument})"


@dataclass(frozen=True)
class Return(Statement):
    """Leave the enclosing method body with a value."""

    statement: Statement

    def __str__(self) -> str:
        return f"return {self.statement}"


@dataclass(frozen=True)
class IfElse(Statement):
    condition: Statement
    if_body: Statement
    else_body: Optional[Statement] = None

    def __str__(self) -> str:
        if self.else_body is None:
            return f"if {self.condition}: {self.if_body}"
        return f"if {self.condition}: {self.if_body} else: {self.else_body}"


@dataclass(frozen=True)
class Compound(Statement):
    """Statement sequence. Its own value is always None."""

    statements: list[Statement] = field(default_factory=list)

    def add_statement(self, stmt: Statement) -> None:
        self.statements.append(stmt)

    def __str__(self) -> str:
        return "{ " + "; ".join(str(stmt) for stmt in self.statements) + " }"


@dataclass(frozen=True)
class ClassDefinition(Statement):
    """Binds the class under its own name."""

    cls: "VClass"

    def __str__(self) -> str:
        return f"class {self.cls.name}"


@dataclass(frozen=True)
class NewInstance(Statement):
    """ClassName(args...)"""

    cls: "VClass"
    args: list[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        args_str = ", ".join(str(arg) for arg in self.args)
        return f"{self.cls.name}({args_str})"


@dataclass(frozen=True)
class MethodBody(Statement):
    """Call boundary for a function or method body; intercepts return."""

    body: Statement

    def __str__(self) -> str:
        return f"<body {self.body}>"
