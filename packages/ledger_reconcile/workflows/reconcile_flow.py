"""Workflow orchestrator: ledger + statement files → reviewed output file.

Composes the ledger loader, the statement ingest and the interactive resolver
behind one importable function so the CLI stays a thin argument layer.
"""

from __future__ import annotations

from collections.abc import Callable
from os import PathLike

from ..ingest.utils import load_statement_rows
from ..ledger import load_ledger
from ..models import ReconcileSettings, ReconcileSummary
from ..review import reconcile
from ..term_ui import PromptSelector, Selector


def reconcile_files(
    ledger_path: str | PathLike[str],
    csv_path: str | PathLike[str],
    output_path: str | PathLike[str],
    *,
    selector: Selector | None = None,
    settings: ReconcileSettings | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> ReconcileSummary:
    """End-to-end: read ledger and CSV, resolve rows interactively, write output.

    Parameters
    ----------
    ledger_path:
        Ledger/journal file to reconcile. Read only; never rewritten.
    csv_path:
        Bank CSV statement with a header row.
    output_path:
        Destination for the full updated ledger.
    selector:
        Selection capability; defaults to a :class:`PromptSelector` on the
        current terminal.
    settings:
        Matching mode and new-entry accounts; defaults to
        :class:`ReconcileSettings` defaults.
    on_progress:
        Callable receiving every user-facing line (defaults to ``print``).

    ``OSError`` raised while reading either input or writing the output
    propagates to the caller.
    """

    echo = on_progress or print
    buffer = load_ledger(ledger_path)
    rows = load_statement_rows(csv_path)
    if selector is None:
        selector = PromptSelector(echo=echo)
    return reconcile(
        buffer,
        rows,
        selector,
        output_path,
        settings=settings,
        echo=echo,
    )


__all__ = ["reconcile_files"]
