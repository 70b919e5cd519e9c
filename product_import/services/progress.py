from __future__ import annotations

import sys
from typing import Any, TextIO

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.row_outcome import RowOutcome

"""Row progress display.

One progress marker per processed row:
- TTY: single tqdm bar (unit=row) with success/skipped postfix
- non-TTY (CI, redirected output): `[` + one `*` per row + `]`, so that the
  output stays free of ANSI control sequences and is easy to assert on
"""

__all__ = [
    "RowProgress",
    "is_tty_enabled",
]

MARKER = "*"


def is_tty_enabled(stream: TextIO | None = None) -> bool:
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class RowProgress:
    """Progress tracker for the rows of one import file.

    Usable as a context manager; `advance` matches the RowProcessor
    on_row callback signature.
    """

    def __init__(self, total_rows: int, *, description: str = "Importing", stream: TextIO | None = None) -> None:
        self.total_rows = total_rows
        self.description = description
        self.stream = stream if stream is not None else sys.stdout
        self.processed = 0
        self._closed = False
        self.successful = 0
        self.skipped = 0

        self.enabled = is_tty_enabled(self.stream)
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                file=self.stream,
                leave=True,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None
            self.stream.write("[")
            self.stream.flush()

    def advance(self, index: int, outcome: RowOutcome) -> None:
        self.processed += 1
        if outcome.is_successful:
            self.successful += 1
        else:
            self.skipped += 1

        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(success=self.successful, skipped=self.skipped)
        else:
            self.stream.write(MARKER)
            self.stream.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None
        else:
            self.stream.write("]\n")
            self.stream.flush()

    def __enter__(self) -> RowProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
