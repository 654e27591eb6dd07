import pytest

from bilisp.interpreter import Interpreter
from bilisp.types.value import allocations


@pytest.fixture
def interp():
    """Interpreter that echoes nothing; each test drives it through run()."""
    return Interpreter()


@pytest.fixture
def no_leaks():
    """Fail the test if it leaves any value unreleased."""
    before = allocations.live
    yield
    assert allocations.live == before, f"{allocations.live - before} value(s) leaked"
