"""
Command line entry point.

Two modes:
- ``-e EXPR`` evaluates a single expression and prints the integer result
- ``FILE`` evaluates every line of a text file and writes
  ``<name>_<ext>_results.txt`` next to it
"""

import argparse
from pathlib import Path
import sys
from typing import List, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError, model_validator

from integer_calculator.batch import BatchRunner
from integer_calculator.common.logger import logger
from integer_calculator.common.operations import calculate, format_error


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath, optional
        Path to the file containing arithmetic expressions.
    expression : str, optional
        Single expression to evaluate.
    workers : optional process pool size used in file mode.
    """

    file_path: Optional[FilePath] = None
    expression: Optional[str] = None
    workers: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def exactly_one_mode(self) -> "CliArgs":
        if (self.file_path is None) == (self.expression is None):
            raise ValueError("Provide either a file path or --expression, not both")
        return self


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param list argv: Arguments, defaults to sys.argv[1:]

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="integer-calculator",
        description="Evaluate integer arithmetic expressions",
    )

    parser.add_argument(
        "file_path",
        nargs="?",
        help="Path to a text file with one arithmetic expression per line",
    )
    parser.add_argument(
        "-e",
        "--expression",
        metavar="EXPR",
        help="Evaluate a single expression; attach expressions starting with '-' "
        "to the option, e.g. --expression=-5+3",
    )
    parser.add_argument("--workers", type=int, help="Evaluate a file with this many worker processes")

    args = parser.parse_args(argv)

    try:
        return CliArgs(file_path=args.file_path, expression=args.expression, workers=args.workers)
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path for an input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations_short.txt
    output: resources/operations_short_txt_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffixes = "".join(input_path.suffixes)
    base = input_path.name[: -len(suffixes)] if suffixes else input_path.name
    return input_path.with_name(f"{base}{suffixes.replace('.', '_')}_results.txt")


def evaluate_one(expression: str) -> int:
    """
    Print the value of one expression, or its error on stderr.

    :return: Process exit status
    :rtype: int
    """
    outcome = calculate(expression)
    if outcome.ok:
        print(outcome.result)
        return 0
    print(format_error(outcome.error), file=sys.stderr)
    return 1


def evaluate_file(cli_args: CliArgs) -> int:
    """
    Evaluate every expression of a file into its results file.

    :return: 0 when every line evaluated, 1 when at least one failed
    :rtype: int
    """
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = build_output_path(input_path)

    summary = BatchRunner(workers=cli_args.workers).run(input_path, output_path)
    logger.info(f"🏁 Done, {summary.failed} of {summary.evaluated} expressions failed")
    return 0 if summary.ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function executed by the console script.
    """
    cli_args = parse_args(argv)
    if cli_args.expression is not None:
        return evaluate_one(cli_args.expression)
    return evaluate_file(cli_args)


if __name__ == "__main__":
    sys.exit(main())
