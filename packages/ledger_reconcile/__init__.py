"""Public interface for the ``ledger_reconcile`` package.

Re-exports the reconcile workflow, the building blocks it composes, and the
public models as the stable import surface. No runtime logic lives here.
"""

from .ingest import load_statement_rows
from .ledger import CLEARED_MARKER, LedgerBuffer, load_ledger, write_ledger
from .matching import find_matches, normalize
from .models import (
    MatchCandidate,
    MatchMode,
    ReconcileSettings,
    ReconcileSummary,
    RowOutcome,
    StatementRow,
)
from .review import build_entry, reconcile, resolve_row
from .term_ui import PromptSelector, Selector
from .workflows import reconcile_files

__all__ = [
    # Workflow
    "reconcile_files",
    "reconcile",
    "resolve_row",
    "build_entry",
    # Building blocks
    "LedgerBuffer",
    "CLEARED_MARKER",
    "load_ledger",
    "write_ledger",
    "load_statement_rows",
    "find_matches",
    "normalize",
    "Selector",
    "PromptSelector",
    # Models / types
    "StatementRow",
    "MatchCandidate",
    "MatchMode",
    "ReconcileSettings",
    "ReconcileSummary",
    "RowOutcome",
]
