"""Errors raised while evaluating integer arithmetic expressions."""
from typing import Optional


class EvaluationError(ValueError):
    """Base class for every failure of the expression evaluator."""

    message: str = "Evaluation failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class InvalidCharacterError(EvaluationError):
    """A scanned character is not a digit, an operator, a parenthesis or a blank."""

    def __init__(self, character: str):
        self.character = character
        super().__init__(f"Invalid character: {character}")


class MismatchedParenthesesError(EvaluationError):
    """A ')' has no matching '(' or a '(' is never closed."""

    message = "Mismatched parentheses"


class DivisionByZeroError(EvaluationError):
    """The right operand of '/' is zero."""

    message = "Division by zero"


class InvalidExpressionError(EvaluationError):
    """The operand stack does not reduce to exactly one value."""

    message = "Invalid expression"


class StackUnderflowError(InvalidExpressionError):
    """An operator is applied with fewer than two operands available."""

    message = "Invalid expression: not enough operands"


class UnknownOperatorError(EvaluationError):
    """An operator outside + - * / reached the applicator."""

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"Unknown operator: {operator}")


class IntegerOverflowError(EvaluationError):
    """A literal or an intermediate result does not fit in a signed 32-bit integer."""

    message = "Integer overflow"
