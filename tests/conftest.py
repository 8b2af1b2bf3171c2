"""Test configuration and shared fixtures."""

import pytest

from mython.config.settings import InterpreterSettings
from mython.eval.machine import Evaluator, reset_evaluator
from mython.runtime.context import DummyContext


@pytest.fixture
def settings() -> InterpreterSettings:
    """Settings isolated from the environment and any .env file."""
    return InterpreterSettings(_env_file=None, trace_calls=True)


@pytest.fixture
def evalr(settings: InterpreterSettings) -> Evaluator:
    return Evaluator(settings)


@pytest.fixture
def context() -> DummyContext:
    return DummyContext()


@pytest.fixture(autouse=True)
def _fresh_shared_evaluator(settings: InterpreterSettings):
    """Give every test its own evaluator behind Statement.execute."""
    reset_evaluator(settings)
    yield
    reset_evaluator(settings)
