"""Adapter for mapping a bank CSV statement to :class:`StatementRow` items.

Columns are positional; the header names are not checked:

``<date>, <description>, <amount>[, ...ignored]``

Records with fewer than three columns, and fully blank records, are dropped.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from ...logging_setup import get_logger
from ...models import StatementRow

REQUIRED_COLUMNS = 3

_log = get_logger("ledger_reconcile.ingest.bank_csv")


def to_statement_rows(records: Iterable[Sequence[str]]) -> Iterator[StatementRow]:
    """Convert data records (header already consumed) to statement rows.

    Mapping rules:
    - ``index``: sequential 0..N-1 over the rows that were kept
    - ``date`` / ``description`` / ``amount``: columns 0/1/2, trimmed
    """

    idx = 0
    for rec_no, record in enumerate(records, start=1):
        if not any(cell.strip() for cell in record):
            continue
        if len(record) < REQUIRED_COLUMNS:
            _log.debug(
                "dropping data record %d: expected %d columns, got %d",
                rec_no,
                REQUIRED_COLUMNS,
                len(record),
            )
            continue
        yield StatementRow(
            index=idx,
            date=record[0].strip(),
            description=record[1].strip(),
            amount=record[2].strip(),
        )
        idx += 1
