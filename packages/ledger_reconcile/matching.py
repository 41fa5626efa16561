"""Substring matcher between statement rows and ledger blocks.

Both sides are normalized the same way (case-folded to lowercase, currency
symbols removed) and a block matches when it contains every required field of
the row as a plain substring. There is no tokenization, fuzzy scoring or date
parsing, and ties are not broken: every match is surfaced to the user.
"""

from __future__ import annotations

from collections.abc import Iterable

from .logging_setup import get_logger
from .models import MatchCandidate, MatchMode, StatementRow

CURRENCY_SYMBOLS = "$€£¥₹₩₽₺₪¢"

_STRIP_CURRENCY = str.maketrans("", "", CURRENCY_SYMBOLS)

_log = get_logger("ledger_reconcile.matching")


def normalize(text: str) -> str:
    """Lowercase ``text`` and drop currency symbols and surrounding whitespace."""

    return text.lower().translate(_STRIP_CURRENCY).strip()


def required_fields(row: StatementRow, mode: MatchMode = MatchMode.STRICT) -> tuple[str, ...]:
    """Return the normalized row fields a block must contain under ``mode``."""

    if mode is MatchMode.LOOSE:
        fields = (row.date, row.amount)
    else:
        fields = (row.date, row.description, row.amount)
    return tuple(normalize(f) for f in fields)


def find_matches(
    row: StatementRow,
    blocks: Iterable[tuple[int, str]],
    mode: MatchMode = MatchMode.STRICT,
) -> list[MatchCandidate]:
    """Return every block whose normalized text contains all required fields.

    ``blocks`` is an iterable of ``(index, text)`` pairs, typically
    :meth:`LedgerBuffer.candidate_blocks`. Results keep the input order.
    """

    needles = required_fields(row, mode)
    matches: list[MatchCandidate] = []
    for index, text in blocks:
        haystack = normalize(text)
        if all(n in haystack for n in needles):
            matches.append(MatchCandidate(index, text))
    _log.debug("row %d: %d candidate(s) for %r", row.index, len(matches), needles)
    return matches


__all__ = ["CURRENCY_SYMBOLS", "normalize", "required_fields", "find_matches"]
