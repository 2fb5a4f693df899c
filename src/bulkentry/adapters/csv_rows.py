"""CSV row source and rejected-row sink."""

from __future__ import annotations

import csv
import os
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence
    from pathlib import Path
    from types import TracebackType
    from typing import TextIO

    from bulkentry.domain.validation import Rejection

log = getLogger(__name__)

REJECTION_CODE_COLUMN = "rejection_code"
REJECTION_REASON_COLUMN = "rejection_reason"


class InputFileError(RuntimeError):
    """Raised when the input CSV file is missing or unreadable."""


def check_input_file(path: Path) -> Path:
    resolved = path.expanduser().resolve()
    if not resolved.is_file():
        raise InputFileError(f"No CSV file exists at the provided path: {str(resolved)!r}")
    if not os.access(resolved, os.R_OK):
        raise InputFileError(
            f"The CSV file at the provided path is not readable: {str(resolved)!r}"
        )
    return resolved


def read_csv_rows(
    path: Path,
    *,
    headers: Sequence[str] | None = None,
    delimiter: str = ",",
    encoding: str = "utf-8-sig",
) -> Iterator[dict[str, str]]:
    """Yield each data row as a header-to-value mapping.

    With explicit ``headers`` the first line is data; otherwise it names the columns.
    """

    resolved = check_input_file(path)
    with resolved.open(newline="", encoding=encoding) as handle:
        reader = csv.DictReader(
            handle,
            fieldnames=list(headers) if headers else None,
            delimiter=delimiter,
            restval="",
        )
        for row in reader:
            # surplus cells land under the None key
            extra = row.pop(None, None)  # type: ignore[call-overload]
            if extra:
                log.debug("Ignoring %s surplus cells on line %s", len(extra), reader.line_num)
            if not any(value.strip() for value in row.values() if value):
                continue
            yield row


class RejectedRowWriter:
    """Rejected-row observer that appends each row and its reason to a CSV file."""

    def __init__(self, path: Path, *, delimiter: str = ",") -> None:
        self.path = path
        self.delimiter = delimiter
        self.count = 0
        self._handle: TextIO | None = None
        self._writer: csv.DictWriter[str] | None = None

    def __enter__(self) -> RejectedRowWriter:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("w", newline="", encoding="utf-8")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __call__(self, row: Mapping[str, str], rejection: Rejection) -> None:
        if self._handle is None:
            raise RuntimeError("RejectedRowWriter must be used as a context manager")
        if self._writer is None:
            fieldnames = [*row.keys(), REJECTION_CODE_COLUMN, REJECTION_REASON_COLUMN]
            self._writer = csv.DictWriter(
                self._handle,
                fieldnames=fieldnames,
                delimiter=self.delimiter,
                extrasaction="ignore",
            )
            self._writer.writeheader()
        self._writer.writerow(
            {
                **row,
                REJECTION_CODE_COLUMN: str(rejection.code),
                REJECTION_REASON_COLUMN: rejection.message,
            }
        )
        self.count += 1
        log.warning("Rejected row written to %s: %s", self.path, rejection.message)
