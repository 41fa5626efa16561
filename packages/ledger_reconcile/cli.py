"""CLI for the ``ledger_reconcile`` package.

Exposes a callable command handler (:func:`cmd_reconcile`) and a Typer-based
console interface around it. Environment variables (``LEDGER_FILE`` and
``LEDGER_RECONCILE_LOG_LEVEL``) may come from a local ``.env`` loaded with
``python-dotenv``; already-set variables win. Business logic lives in
``ledger_reconcile.workflows`` and the modules it composes.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from .logging_setup import configure_logging, get_logger
from .models import MatchMode, ReconcileSettings
from .term_ui import Selector
from .workflows.reconcile_flow import reconcile_files

LEDGER_FILE_ENV = "LEDGER_FILE"
DEFAULT_OUTPUT = "updated.ledger"
DEFAULT_JOURNAL_OUTPUT = "updated.journal"

_log = get_logger("ledger_reconcile.cli")


def resolve_ledger_path(explicit: str | os.PathLike[str] | None) -> str | None:
    """Return the ledger path from the flag, else ``LEDGER_FILE``, else ``None``."""

    if explicit is not None and str(explicit).strip():
        return os.fspath(explicit)
    env_val = os.getenv(LEDGER_FILE_ENV)
    if env_val and env_val.strip():
        return env_val.strip()
    return None


def default_output_for(ledger_path: str) -> str:
    # hledger users keep ``.journal`` files; mirror that in the output name.
    if Path(ledger_path).suffix.lower() == ".journal":
        return DEFAULT_JOURNAL_OUTPUT
    return DEFAULT_OUTPUT


def cmd_reconcile(
    csv_path: str,
    *,
    ledger_path: str | None = None,
    output_path: str | None = None,
    settings: ReconcileSettings | None = None,
    selector: Selector | None = None,
) -> int:
    """Reconcile a ledger against a CSV statement and write the updated ledger.

    Behavior
    --------
    - Resolves the ledger path from ``ledger_path`` or ``LEDGER_FILE``.
    - Walks the CSV rows interactively (see :mod:`ledger_reconcile.review`).
    - Writes the full updated ledger to ``output_path`` (default
      ``updated.ledger``, or ``updated.journal`` for ``.journal`` inputs).

    Errors are written to stderr and the function returns ``1``. On success,
    prints a one-line summary and returns ``0``.
    """

    resolved = resolve_ledger_path(ledger_path)
    if resolved is None:
        print(
            "Error: No ledger file specified and LEDGER_FILE environment variable is not set.",
            file=sys.stderr,
        )
        return 1

    output = output_path or default_output_for(resolved)
    _log.debug("ledger=%s csv=%s output=%s", resolved, csv_path, output)

    try:
        summary = reconcile_files(
            resolved,
            csv_path,
            output,
            selector=selector,
            settings=settings,
        )
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error processing files: {e}", file=sys.stderr)
        return 1

    print(summary.describe())
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    help=(
        "Mark ledger transactions as cleared by matching them to a bank CSV "
        "statement. Loads LEDGER_FILE from a local .env when present."
    ),
)


@app.command()
def reconcile_cmd(
    csv_path: Annotated[
        Path,
        typer.Option(
            "--csv",
            "-c",
            help="Path to the bank CSV statement (header row required).",
            dir_okay=False,
        ),
    ],
    ledger: Annotated[
        Path | None,
        typer.Option(
            "--ledger",
            "-l",
            help="Path to the ledger file (falls back to LEDGER_FILE).",
            dir_okay=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file for the updated ledger [default: updated.ledger].",
            dir_okay=False,
        ),
    ] = None,
    expense_account: Annotated[
        str, typer.Option(help="Expense account for entries added from unmatched rows.")
    ] = ReconcileSettings().expense_account,
    asset_account: Annotated[
        str, typer.Option(help="Offsetting asset account for added entries.")
    ] = ReconcileSettings().asset_account,
    commodity: Annotated[
        str, typer.Option(help="Commodity symbol written in front of added amounts.")
    ] = ReconcileSettings().commodity,
    match_mode: Annotated[
        MatchMode,
        typer.Option(
            case_sensitive=False,
            help="strict: date, description and amount must match; loose: date and amount.",
        ),
    ] = MatchMode.STRICT,
    log_level: Annotated[
        str | None,
        typer.Option(help="Log level (overrides LEDGER_RECONCILE_LOG_LEVEL)."),
    ] = None,
) -> None:
    """Reconcile a ledger against a CSV statement."""

    # Load environment from .env in CWD (override=False to keep existing env)
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)

    try:
        settings = ReconcileSettings(
            expense_account=expense_account,
            asset_account=asset_account,
            commodity=commodity,
            match_mode=MatchMode(match_mode),
        )
    except ValidationError as e:
        print(f"Error: invalid settings: {e}", file=sys.stderr)
        raise typer.Exit(1) from e

    code = cmd_reconcile(
        str(csv_path),
        ledger_path=str(ledger) if ledger is not None else None,
        output_path=str(output) if output is not None else None,
        settings=settings,
    )
    if code:
        raise typer.Exit(code)


def main() -> None:  # pragma: no cover - console script shim
    app()


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m ledger_reconcile.cli`
    main()
