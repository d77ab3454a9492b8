import pytest

from minilisp.builtin.env_builtin import initial_context
from minilisp.evaluation.evaluator import evaluate_program
from minilisp.reader.parser import read_all

# Most tests evaluate source text on a fresh context with the builtin
# constants bound (no prelude). `run` returns the final Context so that
# tests can look at the value, the error carried, and the bindings.


@pytest.fixture
def context():
    return initial_context()


@pytest.fixture
def run(context):
    def _run(source, ctx=None):
        return evaluate_program(context if ctx is None else ctx, read_all(source))
    return _run


def read_one(source):
    (expr,) = read_all(source)
    return expr
