"""Ingest utilities shared by the CLI and workflows.

Exposes a single helper to load :class:`StatementRow` items from a bank CSV
statement whose first non-blank record is a header row.
"""

from __future__ import annotations

import csv
from collections.abc import Iterator
from os import PathLike
from pathlib import Path
from typing import IO

from ..logging_setup import get_logger
from ..models import StatementRow
from .adapters.bank_csv import to_statement_rows

_log = get_logger("ledger_reconcile.ingest")


def load_statement_rows(csv_path: str | PathLike[str]) -> list[StatementRow]:
    """Read a bank CSV statement and return its data rows.

    The header is assumed present and skipped (leading blank lines are
    ignored first). Malformed records are dropped; ``OSError`` from opening or
    reading the file propagates.
    """

    p = Path(csv_path)
    with p.open(encoding="utf-8", newline="") as f:
        records = _parsed_records(f, p)
        header = next((rec for rec in records if any(c.strip() for c in rec)), None)
        if header is None:
            _log.debug("no header row in %s", p)
            return []
        rows = list(to_statement_rows(records))
    _log.debug("loaded %d statement rows from %s", len(rows), p)
    return rows


def _parsed_records(f: IO[str], path: Path) -> Iterator[list[str]]:
    # A record the csv module rejects is skipped; reading resumes on the next line.
    reader = csv.reader(f)
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            _log.debug(
                "dropping unparsable record at line %d of %s: %s", reader.line_num, path, e
            )
            continue
        yield record


__all__ = ["load_statement_rows"]
