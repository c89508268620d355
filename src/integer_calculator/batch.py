"""Evaluate a file of expressions, one per line."""
from multiprocessing import Pool
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from integer_calculator.common.logger import logger
from integer_calculator.common.operations import OperationResult, calculate


def read_expressions(input_file: Path) -> List[str]:
    """
    Read the non-blank lines of an expressions file.

    Bytes that are not valid UTF-8 become U+FFFD, so the line they sit on
    fails as an invalid character instead of aborting the whole file.

    :param Path input_file: Path to the expressions file

    :return: Stripped, non-empty lines
    :rtype: List[str]
    """
    text = input_file.read_bytes().decode("utf-8", errors="replace")
    return [line.strip() for line in text.splitlines() if line.strip()]


class BatchSummary(BaseModel):
    """Counts reported once a batch has been written."""

    evaluated: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)

    @property
    def ok(self) -> bool:
        return self.failed == 0


class BatchRunner(BaseModel):
    """
    Evaluate many expressions and write one result line per expression.

    With ``workers`` above one the expressions are spread over a process
    pool; output order always follows input order.
    """

    model_config = ConfigDict(frozen=True)

    workers: Optional[int] = Field(default=None, ge=1, description="Process pool size, None for in-process")

    def evaluate(self, expressions: List[str]) -> List[OperationResult]:
        """
        Evaluate every expression.

        :param list expressions: Expressions to evaluate

        :return: One result per expression, in input order
        :rtype: List[OperationResult]
        """
        if not self.workers or self.workers == 1 or len(expressions) < 2:
            return [calculate(expr) for expr in expressions]

        with Pool(processes=min(self.workers, len(expressions))) as pool:
            return pool.map(calculate, expressions)

    def run(self, input_file: Path, output_file: Path) -> BatchSummary:
        """
        Evaluate an expressions file and write the results file.

        :param Path input_file: File with one expression per line
        :param Path output_file: Destination of the "<expr> = <n>" lines

        :return: Number of evaluated and failed expressions
        :rtype: BatchSummary
        """
        expressions = read_expressions(input_file)
        logger.info(f"📥 Read {len(expressions)} expressions from {input_file}")

        results = self.evaluate(expressions)

        failed = 0
        with output_file.open("w", encoding="utf-8") as f_out:
            for line_number, outcome in enumerate(results, start=1):
                if not outcome.ok:
                    failed += 1
                    logger.error(f"❌ Line {line_number}: {outcome.error} ({outcome.expression!r})")
                f_out.write(outcome.describe() + "\n")

        logger.info(f"📄✅ {len(results) - failed}/{len(results)} results written to {output_file}")
        return BatchSummary(evaluated=len(results), failed=failed)
