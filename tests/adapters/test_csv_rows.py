from __future__ import annotations

import csv
from typing import TYPE_CHECKING

import pytest

from bulkentry.adapters.csv_rows import (
    REJECTION_CODE_COLUMN,
    REJECTION_REASON_COLUMN,
    InputFileError,
    RejectedRowWriter,
    check_input_file,
    read_csv_rows,
)
from bulkentry.domain.validation import Rejection, RejectionCode

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_read_csv_rows_uses_first_line_as_headers(tmp_path: Path) -> None:
    path = _write(tmp_path / "entries.csv", "Task,Duration\nT1,0:30:00\n,\nT2,60\n")

    rows = list(read_csv_rows(path))

    assert rows == [
        {"Task": "T1", "Duration": "0:30:00"},
        {"Task": "T2", "Duration": "60"},
    ]


def test_read_csv_rows_with_explicit_headers(tmp_path: Path) -> None:
    path = _write(tmp_path / "entries.csv", "T1;0:30:00;extra\nT2\n")

    rows = list(read_csv_rows(path, headers=["Task", "Duration"], delimiter=";"))

    assert rows == [
        {"Task": "T1", "Duration": "0:30:00"},
        {"Task": "T2", "Duration": ""},
    ]


def test_read_csv_rows_strips_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "entries.csv"
    path.write_bytes("\ufeffTask\nT1\n".encode())

    assert list(read_csv_rows(path)) == [{"Task": "T1"}]


def test_read_csv_rows_is_lazy(tmp_path: Path) -> None:
    path = _write(tmp_path / "entries.csv", "Task\nT1\nT2\n")

    rows = read_csv_rows(path)

    assert next(rows) == {"Task": "T1"}
    rows.close()


def test_check_input_file_rejects_missing_path(tmp_path: Path) -> None:
    with pytest.raises(InputFileError):
        check_input_file(tmp_path / "missing.csv")


def test_check_input_file_rejects_directory(tmp_path: Path) -> None:
    with pytest.raises(InputFileError):
        check_input_file(tmp_path)


def test_rejected_row_writer_appends_reason(tmp_path: Path) -> None:
    output = tmp_path / "out" / "rejected.csv"
    rejection = Rejection(RejectionCode.EMAIL_MISMATCH, "email 'x' does not match")

    with RejectedRowWriter(output) as writer:
        writer({"Task": "T1", "Email": "x"}, rejection)
        writer({"Task": "T2", "Email": "y"}, rejection)

    assert writer.count == 2
    with output.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))
    assert rows[0] == {
        "Task": "T1",
        "Email": "x",
        REJECTION_CODE_COLUMN: "email_mismatch",
        REJECTION_REASON_COLUMN: "email 'x' does not match",
    }
    assert rows[1]["Task"] == "T2"


def test_rejected_row_writer_requires_context(tmp_path: Path) -> None:
    writer = RejectedRowWriter(tmp_path / "rejected.csv")

    with pytest.raises(RuntimeError):
        writer({"Task": "T1"}, Rejection(RejectionCode.TASK_NOT_FOUND, "missing"))
