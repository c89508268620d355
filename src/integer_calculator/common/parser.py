"""Parse and evaluate integer arithmetic expressions in a single pass."""
from collections.abc import Callable as ABCCallable
from dataclasses import dataclass, field
from enum import Enum
import operator
from typing import Callable, Dict, List, Tuple

from integer_calculator.common.errors import (
    DivisionByZeroError,
    EvaluationError,
    IntegerOverflowError,
    InvalidCharacterError,
    InvalidExpressionError,
    MismatchedParenthesesError,
    StackUnderflowError,
    UnknownOperatorError,
)

# Results are checked against the signed 32-bit range
INT_MIN: int = -(2 ** 31)
INT_MAX: int = 2 ** 31 - 1

OPEN_PAREN = "("
CLOSE_PAREN = ")"


def _truncating_div(a: int, b: int) -> int:
    """
    Divide two integers, truncating the quotient toward zero.

    :param int a: Dividend
    :param int b: Divisor

    :return: Truncated quotient
    :rtype: int
    :raises DivisionByZeroError: If the divisor is zero
    """
    if b == 0:
        raise DivisionByZeroError()
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


# Type alias for operator functions (taking two ints, returning an int)
OperatorFn: ABCCallable[[int, int], int] = Callable[[int, int], int]

# Mapping of operator symbols to (precedence, function)
OPERATORS: Dict[str, Tuple[int, OperatorFn]] = {
    "+": (1, operator.add),
    "-": (1, operator.sub),
    "*": (2, operator.mul),
    "/": (2, _truncating_div),
}


class State(Enum):
    """Phases of a single evaluation."""

    SCANNING = "scanning"
    REDUCING = "reducing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class EvaluationContext:
    """
    Everything one evaluation reads and mutates.

    The context exclusively owns both stacks for the duration of one call and
    is discarded afterwards.

    :param str text: Expression being evaluated
    :param int cursor: Index of the next character to scan
    :param list operands: Operand stack
    :param list operators: Operator stack, '(' acting as a sentinel
    :param bool expect_operand: True when the next token must be a number
    :param State state: Current phase
    """

    text: str
    cursor: int = 0
    operands: List[int] = field(default_factory=list)
    operators: List[str] = field(default_factory=list)
    expect_operand: bool = True
    state: State = State.SCANNING

    @property
    def at_end(self) -> bool:
        return self.cursor >= len(self.text)

    @property
    def current(self) -> str:
        return self.text[self.cursor]


# str.isspace() also accepts the \x1c-\x1f separators, which are not white space
_SEPARATOR_CONTROLS = frozenset("\x1c\x1d\x1e\x1f")


def is_blank(char: str) -> bool:
    return char.isspace() and char not in _SEPARATOR_CONTROLS


def is_digit(char: str) -> bool:
    # str.isdigit() would accept superscripts and non-ASCII digits
    return "0" <= char <= "9"


def is_operator(char: str) -> bool:
    return char in OPERATORS


def precedence(symbol: str) -> int:
    """
    Return the precedence level of an operator symbol.

    :param str symbol: Operator symbol

    :return: 1 for + and -, 2 for * and /, 0 for anything else (the '(' sentinel)
    :rtype: int
    """
    return OPERATORS.get(symbol, (0,))[0]


def _checked(value: int) -> int:
    if not INT_MIN <= value <= INT_MAX:
        raise IntegerOverflowError()
    return value


def apply_operator(ctx: EvaluationContext) -> None:
    """
    Pop one operator and two operands, and push the combined result.

    :param EvaluationContext ctx: Evaluation context

    :raises StackUnderflowError: If fewer than two operands are available
    :raises UnknownOperatorError: If the popped symbol is not + - * /
    :raises DivisionByZeroError: If the right operand of / is zero
    :raises IntegerOverflowError: If the result leaves the 32-bit range
    """
    if len(ctx.operands) < 2:
        raise StackUnderflowError()

    symbol = ctx.operators.pop()
    if symbol not in OPERATORS:
        raise UnknownOperatorError(symbol)

    b = ctx.operands.pop()
    a = ctx.operands.pop()
    ctx.operands.append(_checked(OPERATORS[symbol][1](a, b)))


def scan_number(ctx: EvaluationContext) -> None:
    """
    Consume a run of decimal digits and push its value as an operand.

    :param EvaluationContext ctx: Evaluation context, cursor on the first digit

    :raises IntegerOverflowError: If the literal exceeds INT_MAX
    """
    value = 0
    while not ctx.at_end and is_digit(ctx.current):
        value = value * 10 + (ord(ctx.current) - ord("0"))
        if value > INT_MAX:
            raise IntegerOverflowError()
        ctx.cursor += 1

    ctx.operands.append(value)
    ctx.expect_operand = False


def open_parenthesis(ctx: EvaluationContext) -> None:
    ctx.operators.append(OPEN_PAREN)
    ctx.expect_operand = True


def close_parenthesis(ctx: EvaluationContext) -> None:
    """
    Reduce everything back to the nearest '(' and discard it.

    :param EvaluationContext ctx: Evaluation context

    :raises MismatchedParenthesesError: If no '(' is pending
    """
    ctx.state = State.REDUCING
    while ctx.operators and ctx.operators[-1] != OPEN_PAREN:
        apply_operator(ctx)

    if not ctx.operators:
        raise MismatchedParenthesesError()

    ctx.operators.pop()
    ctx.expect_operand = False
    ctx.state = State.SCANNING


def push_operator(ctx: EvaluationContext, symbol: str) -> None:
    """
    Push a binary operator, or a unary minus, onto the operator stack.

    A '-' met where an operand is expected is unary: it becomes ``0 - x`` by
    pushing a zero operand, and nothing is reduced before it. Any other
    operator first reduces every pending operator above the nearest '(' whose
    precedence is greater than or equal to its own, which makes equal
    precedence associate to the left.

    :param EvaluationContext ctx: Evaluation context
    :param str symbol: One of + - * /
    """
    if symbol == "-" and ctx.expect_operand:
        ctx.operands.append(0)
    else:
        ctx.state = State.REDUCING
        while (
            ctx.operators
            and ctx.operators[-1] != OPEN_PAREN
            and precedence(ctx.operators[-1]) >= precedence(symbol)
        ):
            apply_operator(ctx)
        ctx.state = State.SCANNING

    ctx.operators.append(symbol)
    ctx.expect_operand = True


def step(ctx: EvaluationContext) -> None:
    """
    Scan the token under the cursor and advance past it.

    :param EvaluationContext ctx: Evaluation context, cursor not at the end

    :raises InvalidCharacterError: If the character cannot start a token
    """
    char = ctx.current

    if is_blank(char):
        ctx.cursor += 1
        return

    if is_digit(char):
        # Advances the cursor by itself
        scan_number(ctx)
        return

    if char == OPEN_PAREN:
        open_parenthesis(ctx)
    elif char == CLOSE_PAREN:
        close_parenthesis(ctx)
    elif is_operator(char):
        push_operator(ctx, char)
    else:
        raise InvalidCharacterError(char)

    ctx.cursor += 1


def drain(ctx: EvaluationContext) -> None:
    """
    Apply every operator left once the input is exhausted.

    :param EvaluationContext ctx: Evaluation context

    :raises MismatchedParenthesesError: If a '(' was never closed
    """
    ctx.state = State.REDUCING
    while ctx.operators:
        if ctx.operators[-1] == OPEN_PAREN:
            raise MismatchedParenthesesError()
        apply_operator(ctx)


def finish(ctx: EvaluationContext) -> int:
    """
    Return the single remaining operand.

    :param EvaluationContext ctx: Fully drained evaluation context

    :return: Value of the expression
    :rtype: int
    :raises InvalidExpressionError: If zero or several operands remain
    """
    if len(ctx.operands) != 1:
        raise InvalidExpressionError()
    ctx.state = State.DONE
    return ctx.operands[0]


def run(ctx: EvaluationContext) -> int:
    """
    Drive a context from its first character to a result.

    The first error moves the context to ``State.FAILED`` and is re-raised;
    no partial result is ever returned.

    :param EvaluationContext ctx: Fresh evaluation context

    :return: Value of the expression
    :rtype: int
    """
    try:
        while not ctx.at_end:
            step(ctx)
        drain(ctx)
        return finish(ctx)
    except EvaluationError:
        ctx.state = State.FAILED
        raise


class ExpressionParser:
    """
    Evaluate integer arithmetic expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Scanning and reduction are fused into one left-to-right pass
        - No state survives between calls

    Algorithm (operator-precedence parsing on two stacks):
        1. Digits are accumulated into literals and pushed on the operand stack
        2. An operator first reduces pending operators of higher or equal
           precedence, then goes on the operator stack
        3. ')' reduces back to its matching '('
        4. At the end of input every pending operator is applied

    Examples:
        - "2 + 3 * 4" evaluates to 14
        - "(2 + 3) * 4" evaluates to 20
        - "-5 * -3" evaluates to 15
    """

    @staticmethod
    def evaluate(expr: str) -> int:
        """
        Evaluate an arithmetic expression.

        :param str expr: Arithmetic expression string

        :return: Computed integer result
        :rtype: int
        :raises EvaluationError: If the expression is invalid or cannot be computed
        """
        return run(EvaluationContext(text=expr))


evaluate_expression = ExpressionParser.evaluate
