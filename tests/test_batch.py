"""Test the file batch runner."""
from pathlib import Path

from pydantic import ValidationError
import pytest

from integer_calculator.batch import BatchRunner, BatchSummary, read_expressions


@pytest.fixture
def ops_file(tmp_path: Path) -> Path:
    """Create an expressions file mixing valid and invalid lines."""
    path = tmp_path / "ops.txt"
    path.write_text("2 + 3\n\n  4 * 5  \n5 / 0\n(1 + 2) * -3\n")
    return path


def test_read_expressions_skips_blank_lines(ops_file: Path) -> None:
    assert read_expressions(ops_file) == ["2 + 3", "4 * 5", "5 / 0", "(1 + 2) * -3"]


def test_read_expressions_tolerates_invalid_utf8(tmp_path: Path) -> None:
    """Undecodable bytes only spoil their own line."""
    path = tmp_path / "ops.txt"
    path.write_bytes(b"1 + 1\n\xff\xfe\n2 * 3\n")

    lines = read_expressions(path)

    assert lines[0] == "1 + 1"
    assert lines[1] == "��"
    assert lines[2] == "2 * 3"


def test_run_reports_undecodable_line_as_error(tmp_path: Path) -> None:
    input_file = tmp_path / "ops.txt"
    output_file = tmp_path / "results.txt"
    input_file.write_bytes(b"1 + 1\n\xff\xfe\n2 * 3\n")

    summary = BatchRunner().run(input_file, output_file)

    assert summary == BatchSummary(evaluated=3, failed=1)
    assert output_file.read_text(encoding="utf-8").splitlines() == [
        "1 + 1 = 2",
        "�� -> ERROR: Invalid character: �",
        "2 * 3 = 6",
    ]


@pytest.mark.parametrize("workers", [None, 1, 2])
def test_run_writes_results_in_input_order(ops_file: Path, tmp_path: Path, workers) -> None:
    output_file = tmp_path / "results.txt"

    summary = BatchRunner(workers=workers).run(ops_file, output_file)

    assert output_file.read_text().splitlines() == [
        "2 + 3 = 5",
        "4 * 5 = 20",
        "5 / 0 -> ERROR: Division by zero",
        "(1 + 2) * -3 = -9",
    ]
    assert summary.evaluated == 4
    assert summary.failed == 1
    assert not summary.ok


def test_evaluate_empty_batch() -> None:
    assert BatchRunner(workers=4).evaluate([]) == []


def test_run_all_valid_is_ok(tmp_path: Path) -> None:
    input_file = tmp_path / "ops.txt"
    input_file.write_text("1\n-1\n")

    summary = BatchRunner().run(input_file, tmp_path / "out.txt")

    assert summary.ok


def test_batch_runner_rejects_zero_workers() -> None:
    with pytest.raises(ValidationError):
        BatchRunner(workers=0)
