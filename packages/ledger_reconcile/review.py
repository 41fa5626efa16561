"""Interactive resolver: walk statement rows and apply the user's decisions.

Per row the flow is a small state machine:

- no ledger block matches → ``Ignore`` / ``Add new expense entry`` / ``Exit``
- one or more blocks match → pick a block to clear, or ``Ignore this line``

Decisions mutate the in-memory :class:`LedgerBuffer`; the buffer is written
to the output path once at the end, or immediately when the user exits.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from os import PathLike
from typing import TypeAlias

from .ledger import LedgerBuffer, write_ledger
from .logging_setup import get_logger
from .matching import CURRENCY_SYMBOLS, find_matches
from .models import ReconcileSettings, ReconcileSummary, RowOutcome, StatementRow
from .term_ui import Selector

ACTION_IGNORE = "Ignore"
ACTION_ADD = "Add new expense entry"
ACTION_EXIT = "Exit"
NO_MATCH_ACTIONS: tuple[str, ...] = (ACTION_IGNORE, ACTION_ADD, ACTION_EXIT)

IGNORE_LINE = "Ignore this line"

_log = get_logger("ledger_reconcile.review")

Echo: TypeAlias = Callable[[str], None]


# ----------------------------------------------------------------------------
# Entry construction
# ----------------------------------------------------------------------------


def _signed_amount(amount: str) -> tuple[bool, str]:
    """Split ``amount`` into ``(negative, digits)`` without currency symbols."""

    s = amount.strip()
    for sym in CURRENCY_SYMBOLS:
        s = s.replace(sym, "")
    s = s.strip()
    negative = s.startswith("-")
    return negative, s.lstrip("+-").strip()


def build_entry(row: StatementRow, settings: ReconcileSettings) -> str:
    """Return a two-posting ledger entry for an unmatched statement row.

    The expense posting carries the row amount with its sign as the bank
    wrote it, and the asset posting the opposite sign, so the entry balances.
    A ``-4.50`` row therefore books ``-$4.50`` to the expense account and
    ``$4.50`` to the asset account.
    """

    negative, amount = _signed_amount(row.amount)
    c = settings.commodity
    expense_sign, asset_sign = ("-", "") if negative else ("", "-")
    header = " ".join(p for p in (row.date, row.description) if p)
    width = max(len(settings.expense_account), len(settings.asset_account)) + 4
    return "\n".join(
        [
            header,
            f"    {settings.expense_account:<{width}}{expense_sign}{c}{amount}",
            f"    {settings.asset_account:<{width}}{asset_sign}{c}{amount}",
        ]
    )


# ----------------------------------------------------------------------------
# Presentation helpers
# ----------------------------------------------------------------------------


def _print_row_header(row: StatementRow, echo: Echo) -> None:
    echo("")
    echo("--- CSV Transaction ---")
    echo(f"Date: {row.date}, Description: {row.description}, Amount: {row.amount}")
    echo("-----------------------")


# ----------------------------------------------------------------------------
# Per-row resolution
# ----------------------------------------------------------------------------


def resolve_row(
    buffer: LedgerBuffer,
    row: StatementRow,
    selector: Selector,
    *,
    settings: ReconcileSettings,
    echo: Echo = print,
) -> RowOutcome:
    """Resolve one statement row against the current buffer.

    Returns the outcome; on :attr:`RowOutcome.EXITED` the caller is expected to
    write the buffer and stop. Writing is left to :func:`reconcile` so this
    function only ever touches memory.
    """

    _print_row_header(row, echo)
    matches = find_matches(row, buffer.candidate_blocks(), settings.match_mode)

    if not matches:
        echo("No matching transaction found in ledger.")
        choice = selector.present(
            "What would you like to do?",
            list(NO_MATCH_ACTIONS),
            default=NO_MATCH_ACTIONS.index(ACTION_IGNORE),
        )
        action = NO_MATCH_ACTIONS[choice]
        if action == ACTION_ADD:
            entry = build_entry(row, settings)
            buffer.append_entry(entry)
            echo("Added new transaction to ledger:")
            echo(entry)
            _log.info("row %d: appended new entry", row.index)
            return RowOutcome.ADDED
        if action == ACTION_EXIT:
            echo("Exiting.")
            _log.info("row %d: exit requested", row.index)
            return RowOutcome.EXITED
        echo("Ignored this transaction.")
        _log.info("row %d: ignored (no match)", row.index)
        return RowOutcome.IGNORED

    options = [m.text for m in matches] + [IGNORE_LINE]
    choice = selector.present("Match a transaction:", options, default=len(options) - 1)
    if choice >= len(matches):
        echo("Skipped transaction.")
        _log.info("row %d: ignored (%d candidate(s))", row.index, len(matches))
        return RowOutcome.IGNORED

    picked = matches[choice]
    cleared = buffer.mark_cleared(picked.index)
    echo(f"Marked transaction as cleared: {cleared}")
    _log.info("row %d: cleared ledger line %d", row.index, picked.index)
    return RowOutcome.CLEARED


def reconcile(
    buffer: LedgerBuffer,
    rows: Iterable[StatementRow],
    selector: Selector,
    output_path: str | PathLike[str],
    *,
    settings: ReconcileSettings | None = None,
    echo: Echo = print,
) -> ReconcileSummary:
    """Resolve every row in order, then write the full buffer to ``output_path``.

    The input ledger is never touched; only ``output_path`` is written. An
    ``Exit`` choice writes immediately and skips the remaining rows. ``OSError``
    from writing propagates.
    """

    settings = settings or ReconcileSettings()
    items = list(rows)
    summary = ReconcileSummary(rows_total=len(items), output_path=str(output_path))

    for row in items:
        outcome = resolve_row(buffer, row, selector, settings=settings, echo=echo)
        summary.record(outcome)
        if outcome is RowOutcome.EXITED:
            break

    write_ledger(buffer, output_path)
    echo(f"Updated ledger written to {output_path}")
    return summary


__all__ = [
    "ACTION_IGNORE",
    "ACTION_ADD",
    "ACTION_EXIT",
    "NO_MATCH_ACTIONS",
    "IGNORE_LINE",
    "build_entry",
    "resolve_row",
    "reconcile",
]
