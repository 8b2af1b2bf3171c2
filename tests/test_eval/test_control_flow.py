"""Tests for conditionals, blocks and the return transfer."""

import sys

import pytest

from mython.config.settings import InterpreterSettings
from mython.core.ast import (
    Assignment,
    BoolConst,
    Comparison,
    Compound,
    IfElse,
    MethodBody,
    NumericConst,
    Print,
    Return,
    StringConst,
    VariableValue,
)
from mython.core.errors import IncorrectOperation, ReturnOutsideMethod
from mython.eval.machine import Evaluator, Returning
from mython.runtime.value import VNumber, VString


def test_if_takes_true_branch(evalr, context):
    closure = {}
    node = IfElse(BoolConst(True), Assignment("x", NumericConst(1)), Assignment("y", NumericConst(2)))
    assert evalr.execute(node, closure, context) == VNumber(1)
    assert closure == {"x": VNumber(1)}


def test_if_takes_else_branch(evalr, context):
    closure = {}
    node = IfElse(BoolConst(False), Assignment("x", NumericConst(1)), Assignment("y", NumericConst(2)))
    assert evalr.execute(node, closure, context) == VNumber(2)
    assert closure == {"y": VNumber(2)}


def test_if_without_else_yields_none(evalr, context):
    closure = {}
    node = IfElse(BoolConst(False), Assignment("x", NumericConst(1)))
    assert evalr.execute(node, closure, context) is None
    assert closure == {}


def test_if_condition_must_be_bool(evalr, context):
    with pytest.raises(IncorrectOperation):
        evalr.execute(IfElse(NumericConst(1), NumericConst(2)), {}, context)


def test_compound_runs_in_order_and_yields_none(evalr, context):
    closure = {}
    block = Compound(
        [
            Assignment("x", NumericConst(1)),
            Print([VariableValue.name("x")]),
            Assignment("x", StringConst("two")),
            Print([VariableValue.name("x")]),
        ]
    )
    assert evalr.execute(block, closure, context) is None
    assert context.getvalue() == "1\ntwo\n"
    assert closure["x"] == VString("two")


def test_compound_add_statement(evalr, context):
    block = Compound()
    block.add_statement(Print([StringConst("a")]))
    block.add_statement(Print([StringConst("b")]))
    evalr.execute(block, {}, context)
    assert context.getvalue() == "a\nb\n"


def test_method_body_returns_value(evalr, context):
    body = MethodBody(Compound([Return(NumericConst(10))]))
    assert evalr.execute(body, {}, context) == VNumber(10)


def test_return_skips_rest_of_enclosing_blocks(evalr, context):
    closure = {}
    body = MethodBody(
        Compound(
            [
                Print([StringConst("before")]),
                IfElse(
                    BoolConst(True),
                    Compound(
                        [
                            Return(StringConst("early")),
                            Print([StringConst("inner after")]),
                        ]
                    ),
                ),
                Print([StringConst("outer after")]),
                Assignment("reached", BoolConst(True)),
            ]
        )
    )
    assert evalr.execute(body, closure, context) == VString("early")
    assert context.getvalue() == "before\n"
    assert "reached" not in closure


def test_method_body_without_return_yields_none(evalr, context):
    body = MethodBody(Compound([Assignment("x", NumericConst(1))]))
    assert evalr.execute(body, {}, context) is None


def test_method_body_ignores_last_expression_value(evalr, context):
    assert evalr.execute(MethodBody(NumericConst(5)), {}, context) is None


def test_return_outside_method_body(evalr, context):
    with pytest.raises(ReturnOutsideMethod) as exc_info:
        evalr.execute(Compound([Return(NumericConst(1))]), {}, context)
    assert exc_info.value.value == VNumber(1)


def test_return_inside_expression_position(evalr, context):
    with pytest.raises(ReturnOutsideMethod):
        evalr.execute(MethodBody(Print([Return(NumericConst(1))])), {}, context)


def test_return_marker_stays_internal(evalr, context):
    """A Returning marker never leaks out of a method body."""
    result = evalr.execute(MethodBody(Return(NumericConst(3))), {}, context)
    assert not isinstance(result, Returning)


def test_run_uses_fresh_dummy_context(evalr):
    ctx = evalr.run(Compound([Print([StringConst("hi")])]))
    assert ctx.getvalue() == "hi\n"


def test_run_uses_given_closure(evalr, context):
    closure = {}
    evalr.run(Assignment("answer", NumericConst(42)), closure, context)
    assert closure == {"answer": VNumber(42)}


def test_run_surfaces_stray_return(evalr):
    with pytest.raises(ReturnOutsideMethod):
        evalr.run(Compound([Return(NumericConst(1))]))


def test_run_wrapped_in_method_body(evalr, context):
    evalr.run(MethodBody(Compound([Return(NumericConst(1)), Print([StringConst("x")])])), {}, context)
    assert context.getvalue() == ""


def test_statement_execute_delegates(context):
    closure = {}
    Assignment("x", NumericConst(1)).execute(closure, context)
    assert closure == {"x": VNumber(1)}



def _limit_recorder(seen):
    """Comparator that records the interpreter recursion limit when called."""

    def record(lhs, rhs, ctx):
        seen.append(sys.getrecursionlimit())
        return True

    return record


def test_run_raises_and_restores_recursion_limit(context):
    old_limit = sys.getrecursionlimit()
    evalr = Evaluator(InterpreterSettings(_env_file=None, recursion_limit=old_limit + 500))
    seen = []
    evalr.run(Comparison(_limit_recorder(seen), NumericConst(1), NumericConst(2)), {}, context)
    assert seen == [old_limit + 500]
    assert sys.getrecursionlimit() == old_limit


def test_run_restores_recursion_limit_on_error(context):
    old_limit = sys.getrecursionlimit()
    evalr = Evaluator(InterpreterSettings(_env_file=None, recursion_limit=old_limit + 500))
    with pytest.raises(ReturnOutsideMethod):
        evalr.run(Compound([Return(NumericConst(1))]), {}, context)
    assert sys.getrecursionlimit() == old_limit


def test_execute_leaves_recursion_limit_alone(context):
    old_limit = sys.getrecursionlimit()
    evalr = Evaluator(InterpreterSettings(_env_file=None, recursion_limit=old_limit + 500))
    seen = []
    evalr.execute(Comparison(_limit_recorder(seen), NumericConst(1), NumericConst(2)), {}, context)
    assert seen == [old_limit]
