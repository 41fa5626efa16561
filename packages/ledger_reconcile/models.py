"""Data models for ``ledger_reconcile``.

The ledger itself has no parsed model: it stays a list of raw text lines (see
:mod:`ledger_reconcile.ledger`). The types here describe the statement rows,
the candidates the matcher surfaces, and the knobs and results of a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StatementRow:
    """A single data row of the bank CSV statement.

    Fields are positional (first three columns) and kept as trimmed strings.
    No date or amount validation happens here; the matcher works on raw text.
    """

    index: int
    date: str
    description: str
    amount: str


class MatchCandidate(NamedTuple):
    """A ledger block whose text contains every field of a statement row."""

    index: int
    """Buffer index of the first line of the block (the line that gets cleared)."""

    text: str
    """The joined block text shown to the user."""


class MatchMode(StrEnum):
    """Which statement fields must appear in a ledger block."""

    STRICT = "strict"
    """Date, description and amount."""

    LOOSE = "loose"
    """Date and amount only."""


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class ReconcileSettings(BaseModel):
    """Knobs for a reconcile run.

    The account names and commodity only affect entries appended for
    statement rows without a ledger match.
    """

    model_config = ConfigDict(strict=True, extra="forbid", str_strip_whitespace=True, frozen=True)

    expense_account: str = "Expenses:Miscellaneous"
    asset_account: str = "Assets:Bank"
    commodity: str = "$"
    match_mode: MatchMode = MatchMode.STRICT

    @field_validator("expense_account", "asset_account")
    @classmethod
    def _account_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("account name must be non-empty")
        # Two consecutive spaces end the account name in ledger syntax.
        if "  " in v or "\t" in v:
            raise ValueError(f"account name must not contain double spaces or tabs: {v!r}")
        return v

    @field_validator("commodity")
    @classmethod
    def _commodity_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("commodity must be non-empty")
        return v


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class RowOutcome(StrEnum):
    CLEARED = "cleared"
    ADDED = "added"
    IGNORED = "ignored"
    EXITED = "exited"


@dataclass(slots=True)
class ReconcileSummary:
    """Tally of a reconcile run, returned by :func:`ledger_reconcile.review.reconcile`."""

    rows_total: int
    output_path: str
    rows_processed: int = 0
    counts: dict[RowOutcome, int] = field(default_factory=lambda: {o: 0 for o in RowOutcome})

    def record(self, outcome: RowOutcome) -> None:
        self.counts[outcome] += 1
        self.rows_processed += 1

    @property
    def exited_early(self) -> bool:
        return self.counts[RowOutcome.EXITED] > 0

    @property
    def cleared(self) -> int:
        return self.counts[RowOutcome.CLEARED]

    @property
    def added(self) -> int:
        return self.counts[RowOutcome.ADDED]

    @property
    def ignored(self) -> int:
        return self.counts[RowOutcome.IGNORED]

    def describe(self) -> str:
        text = (
            f"{self.rows_processed}/{self.rows_total} rows: "
            f"{self.cleared} cleared, {self.added} added, {self.ignored} ignored"
        )
        if self.exited_early:
            text += " (exited early)"
        return text


__all__ = [
    "StatementRow",
    "MatchCandidate",
    "MatchMode",
    "ReconcileSettings",
    "RowOutcome",
    "ReconcileSummary",
]
