"""Tree-walking evaluator for Mython statements and expressions."""

from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Sequence

from loguru import logger

from mython.config.settings import InterpreterSettings
from mython.core.ast import (
    Add,
    And,
    Assignment,
    BoolConst,
    ClassDefinition,
    Comparison,
    Compound,
    Div,
    FieldAssignment,
    IfElse,
    MethodBody,
    MethodCall,
    Mult,
    NewInstance,
    NoneConst,
    Not,
    NumericConst,
    Or,
    Print,
    Return,
    Statement,
    StringConst,
    Stringify,
    Sub,
    VariableValue,
)
from mython.core.errors import (
    IncorrectOperation,
    MythonError,
    NotAnInstance,
    ReturnOutsideMethod,
    UnknownName,
)
from mython.runtime.context import Context, DummyContext
from mython.runtime.value import (
    ADD_METHOD,
    INIT_METHOD,
    Closure,
    VBool,
    VInstance,
    VNumber,
    VString,
    Value,
    render,
)


@dataclass(frozen=True)
class Returning:
    """Marker produced by Return; carries the value up to the nearest MethodBody."""

    value: Value


Outcome = Value | Returning


class Evaluator:
    """Evaluates statement trees against a closure and an execution context."""

    def __init__(self, settings: InterpreterSettings | None = None) -> None:
        self.settings = settings if settings is not None else InterpreterSettings()

    def run(
        self,
        program: Statement,
        closure: Closure | None = None,
        context: Context | None = None,
    ) -> Context:
        """Evaluate a whole program and return the context it wrote to.

        Defaults to an empty closure and an in-memory context. The configured
        recursion limit is applied only for the duration of this call.
        """
        if closure is None:
            closure = {}
        if context is None:
            context = DummyContext()
        old_limit = sys.getrecursionlimit()
        if old_limit < self.settings.recursion_limit:
            sys.setrecursionlimit(self.settings.recursion_limit)
        logger.debug("eval.run.started root={}", type(program).__name__)
        try:
            self.execute(program, closure, context)
        finally:
            sys.setrecursionlimit(old_limit)
        logger.debug("eval.run.finished bindings={}", len(closure))
        return context

    def execute(self, stmt: Statement, closure: Closure, context: Context) -> Value:
        """Evaluate one node. A return that reaches this boundary is an error.

        While it runs, this evaluator is the one ``get_evaluator`` hands out.
        """
        token = _running.set(self) if _running.get() is not self else None
        try:
            outcome = self._exec(stmt, closure, context)
        finally:
            if token is not None:
                _running.reset(token)
        if isinstance(outcome, Returning):
            raise self._error(ReturnOutsideMethod(outcome.value))
        return outcome

    def call_method(self, instance: VInstance, name: str, args: Sequence[Value], context: Context) -> Value:
        """Dispatch a method by name and arity and run its body."""
        method = instance.resolve(name, len(args))
        if self.settings.trace_calls:
            logger.debug(
                "eval.call class={} method={} args=[{}]",
                instance.cls.name,
                name,
                ", ".join(render(arg, context) for arg in args),
            )
        return self.execute(method.body, instance.bind(method, args), context)

    def _exec(self, stmt: Statement, closure: Closure, context: Context) -> Outcome:
        match stmt:
            case NumericConst(value):
                return VNumber(value)

            case StringConst(value):
                return VString(value)

            case BoolConst(value):
                return VBool(value)

            case NoneConst():
                return None

            case VariableValue(dotted_ids):
                return self._resolve(dotted_ids, closure)

            case Assignment(var_name, rv):
                closure[var_name] = self._value(rv, closure, context)
                return closure[var_name]

            case FieldAssignment(target, field_name, rv):
                owner = self._value(target, closure, context)
                if not isinstance(owner, VInstance):
                    raise self._error(NotAnInstance(owner, f"assignment to field {field_name}"))
                value = self._value(rv, closure, context)
                owner.fields[field_name] = value
                return value

            case Add(lhs, rhs):
                return self._add(self._value(lhs, closure, context), self._value(rhs, closure, context), context)

            case Sub(lhs, rhs):
                left, right = self._numbers("-", lhs, rhs, closure, context)
                return VNumber(left - right)

            case Mult(lhs, rhs):
                left, right = self._numbers("*", lhs, rhs, closure, context)
                return VNumber(left * right)

            case Div(lhs, rhs):
                left, right = self._numbers("/", lhs, rhs, closure, context)
                if right == 0:
                    raise self._error(IncorrectOperation("Division by zero"))
                return VNumber(left // right)

            case Or(lhs, rhs):
                left = self._value(lhs, closure, context)
                if self._bool(left, "or"):
                    return left
                return self._value(rhs, closure, context)

            case And(lhs, rhs):
                left = self._value(lhs, closure, context)
                if not self._bool(left, "and"):
                    return left
                return self._value(rhs, closure, context)

            case Not(argument):
                return VBool(not self._bool(self._value(argument, closure, context), "not"))

            case Comparison(comparator, lhs, rhs):
                left = self._value(lhs, closure, context)
                right = self._value(rhs, closure, context)
                return VBool(comparator(left, right, context))

            case Print(args, argument):
                self._print(args, argument, closure, context)
                return None

            case MethodCall(target, method, args):
                receiver = self._value(target, closure, context)
                if not isinstance(receiver, VInstance):
                    raise self._error(NotAnInstance(receiver, f"call of method {method}"))
                arg_vals = [self._value(arg, closure, context) for arg in args]
                return self.call_method(receiver, method, arg_vals, context)

            case Stringify(argument):
                return self._stringify(self._value(argument, closure, context), context)

            case Return(statement):
                return Returning(self._value(statement, closure, context))

            case IfElse(condition, if_body, else_body):
                if self._bool(self._value(condition, closure, context), "if"):
                    return self._exec(if_body, closure, context)
                if else_body is not None:
                    return self._exec(else_body, closure, context)
                return None

            case Compound(statements):
                for sub in statements:
                    outcome = self._exec(sub, closure, context)
                    if isinstance(outcome, Returning):
                        return outcome
                return None

            case ClassDefinition(cls):
                logger.debug("eval.class.defined name={} methods={}", cls.name, len(cls.methods))
                closure[cls.name] = cls
                return cls

            case NewInstance(cls, args):
                instance = VInstance(cls)
                logger.debug("eval.instance.created class={}", cls.name)
                if cls.has_method(INIT_METHOD, len(args)):
                    arg_vals = [self._value(arg, closure, context) for arg in args]
                    self.call_method(instance, INIT_METHOD, arg_vals, context)
                return instance

            case MethodBody(body):
                outcome = self._exec(body, closure, context)
                if isinstance(outcome, Returning):
                    return outcome.value
                return None

            case _:
                raise RuntimeError(f"Unknown statement type: {type(stmt)}")

    def _value(self, stmt: Statement, closure: Closure, context: Context) -> Value:
        """Evaluate a node in expression position, where return cannot occur."""
        return self.execute(stmt, closure, context)

    def _resolve(self, dotted_ids: Sequence[str], closure: Closure) -> Value:
        head = dotted_ids[0]
        if head not in closure:
            raise self._error(UnknownName(head))
        value = closure[head]
        for depth, name in enumerate(dotted_ids[1:], start=1):
            if not isinstance(value, VInstance):
                raise self._error(NotAnInstance(value, f"access to field {name}"))
            if name not in value.fields:
                raise self._error(UnknownName(".".join(dotted_ids[: depth + 1])))
            value = value.fields[name]
        return value

    def _add(self, left: Value, right: Value, context: Context) -> Value:
        match left, right:
            case VNumber(a), VNumber(b):
                return VNumber(a + b)
            case VString(a), VString(b):
                return VString(a + b)
            case VInstance(), _ if left.has_method(ADD_METHOD, 1):
                return self.call_method(left, ADD_METHOD, [right], context)
            case _:
                raise self._error(IncorrectOperation(f"Unsupported operands for +: {_kind(left)} and {_kind(right)}"))

    def _numbers(
        self, op: str, lhs: Statement, rhs: Statement, closure: Closure, context: Context
    ) -> tuple[int, int]:
        left = self._value(lhs, closure, context)
        right = self._value(rhs, closure, context)
        if not isinstance(left, VNumber) or not isinstance(right, VNumber):
            raise self._error(
                IncorrectOperation(f"Unsupported operands for {op}: {_kind(left)} and {_kind(right)}")
            )
        return left.value, right.value

    def _bool(self, value: Value, op: str) -> bool:
        if not isinstance(value, VBool):
            raise self._error(IncorrectOperation(f"{op} expects a Bool, got {_kind(value)}"))
        return value.value

    def _print(
        self,
        args: Sequence[Statement],
        argument: Statement | None,
        closure: Closure,
        context: Context,
    ) -> None:
        out = context.output
        if argument is not None:
            out.write(render(self._value(argument, closure, context), context))
        for i, arg in enumerate(args):
            if i > 0:
                out.write(" ")
            out.write(render(self._value(arg, closure, context), context))
        out.write("\n")

    def _stringify(self, value: Value, context: Context) -> VString:
        match value:
            case VNumber(n):
                return VString(str(n))
            case VString(s):
                return VString(s)
            case VInstance():
                return VString(render(value, context))
            case _:
                return VString("None")

    def _error(self, err: MythonError) -> MythonError:
        logger.debug("eval.error kind={} detail={}", type(err).__name__, err)
        return err


def _kind(value: Value) -> str:
    return "None" if value is None else type(value).__name__


_default_evaluator: Evaluator | None = None

# Evaluator whose execute() is on the stack, if any
_running: ContextVar[Evaluator | None] = ContextVar("mython_running_evaluator", default=None)


def get_evaluator() -> Evaluator:
    """Get the evaluator currently running a program, else the shared one.

    ``Statement.execute`` and ``VInstance.call`` dispatch through this.
    """
    global _default_evaluator
    running = _running.get()
    if running is not None:
        return running
    if _default_evaluator is None:
        _default_evaluator = Evaluator()
    return _default_evaluator


def reset_evaluator(settings: InterpreterSettings | None = None) -> None:
    """Replace the shared evaluator (useful for testing)."""
    global _default_evaluator
    _default_evaluator = Evaluator(settings)
