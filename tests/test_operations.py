"""Test classes OperationRequest, OperationResult and the calculate binding."""
from pydantic import ValidationError
import pytest

from integer_calculator.common.operations import (
    OperationRequest,
    OperationResult,
    calculate,
    format_error,
)


def test_operation_request_valid() -> None:
    """Test that a valid OperationRequest can be created."""
    req = OperationRequest(expression="2 + 2 * 3")
    assert req.expression == "2 + 2 * 3"


def test_operation_request_invalid_type() -> None:
    """Test that non-string expressions raise a validation error."""
    with pytest.raises(ValidationError):
        OperationRequest(expression=123)


def test_operation_result_valid() -> None:
    """Test that a successful OperationResult can be created."""
    res = OperationResult(expression="2 + 2 * 3", result=8)
    assert res.result == 8
    assert res.ok
    assert res.describe() == "2 + 2 * 3 = 8"


def test_operation_result_error() -> None:
    """Test that a failed OperationResult renders its error."""
    res = OperationResult(expression="5 / 0", error="Division by zero")
    assert not res.ok
    assert res.describe() == "5 / 0 -> ERROR: Division by zero"


def test_operation_result_rejects_float_result() -> None:
    """Results are integers only."""
    with pytest.raises(ValidationError):
        OperationResult(expression="5 / 2", result=2.5)


@pytest.mark.parametrize("kwargs", [
    {},
    {"result": 4, "error": "Invalid expression"},
])
def test_operation_result_requires_exactly_one_outcome(kwargs) -> None:
    """A result holds a value or an error, never neither or both."""
    with pytest.raises(ValidationError):
        OperationResult(expression="2 + 2", **kwargs)


@pytest.mark.parametrize("expr,expected", [
    ("2 + 3 * 4", 14),
    ("(2 + 3) * 4", 20),
    ("-5 + 3", -2),
])
def test_calculate_success(expr, expected) -> None:
    outcome = calculate(expr)
    assert outcome.ok
    assert outcome.result == expected
    assert outcome.expression == expr


@pytest.mark.parametrize("expr,message", [
    ("5 / 0", "Division by zero"),
    ("2 + a", "Invalid character: a"),
    ("(2 + 3", "Mismatched parentheses"),
    ("2 +", "Invalid expression: not enough operands"),
    ("2 2", "Invalid expression"),
    ("", "Invalid expression"),
    ("2147483648", "Integer overflow"),
])
def test_calculate_never_raises_for_bad_input(expr, message) -> None:
    """Evaluation failures are folded into the result."""
    outcome = calculate(expr)
    assert outcome.result is None
    assert outcome.error == message


def test_format_error() -> None:
    assert format_error("Division by zero") == "Error: Division by zero"
