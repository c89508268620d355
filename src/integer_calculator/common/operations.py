"""Pydantic models for arithmetic operation requests and results."""
from typing import Optional

from pydantic import BaseModel, Field, StrictInt, model_validator

from integer_calculator.common.errors import EvaluationError
from integer_calculator.common.parser import ExpressionParser


class OperationRequest(BaseModel):
    """Represents a single arithmetic expression to evaluate."""

    expression: str = Field(..., description="Arithmetic expression as a string")


class OperationResult(BaseModel):
    """
    Represents the outcome of an evaluated arithmetic operation.

    Exactly one of ``result`` and ``error`` is set.
    """

    expression: str = Field(..., description="Original arithmetic expression")
    result: Optional[StrictInt] = Field(default=None, description="Evaluated integer result")
    error: Optional[str] = Field(default=None, description="Error message if evaluation failed")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "OperationResult":
        """Ensure that a result carries either a value or an error, never both."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of 'result' or 'error' must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def describe(self) -> str:
        """
        Render the result as one line of a batch results file.

        :return: "<expression> = <result>" or "<expression> -> ERROR: <error>"
        :rtype: str
        """
        if self.ok:
            return f"{self.expression} = {self.result}"
        return f"{self.expression} -> ERROR: {self.error}"


def format_error(message: str) -> str:
    """Format an evaluation failure the way it is shown to end users."""
    return f"Error: {message}"


def calculate(expression: str) -> OperationResult:
    """
    Evaluate an expression without raising on malformed input.

    :param str expression: Arithmetic expression string

    :return: Result holding either the integer value or the error message
    :rtype: OperationResult
    """
    try:
        value = ExpressionParser.evaluate(expression)
    except EvaluationError as exc:
        return OperationResult(expression=expression, error=str(exc))
    return OperationResult(expression=expression, result=value)
