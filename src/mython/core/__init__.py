"""Core language: AST nodes and runtime errors."""

from mython.core.ast import (
    Add,
    And,
    Assignment,
    BinaryOperation,
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
    NoSuchMethod,
    NotAnInstance,
    ReturnOutsideMethod,
    UnknownName,
)

__all__ = [
    # AST
    "Statement",
    "NumericConst",
    "StringConst",
    "BoolConst",
    "NoneConst",
    "VariableValue",
    "Assignment",
    "FieldAssignment",
    "BinaryOperation",
    "Add",
    "Sub",
    "Mult",
    "Div",
    "Or",
    "And",
    "Not",
    "Comparison",
    "Print",
    "MethodCall",
    "Stringify",
    "Return",
    "IfElse",
    "Compound",
    "ClassDefinition",
    "NewInstance",
    "MethodBody",
    # Errors
    "MythonError",
    "UnknownName",
    "IncorrectOperation",
    "NoSuchMethod",
    "NotAnInstance",
    "ReturnOutsideMethod",
]
