"""Statement ingest: bank CSV → :class:`~ledger_reconcile.models.StatementRow`."""

from .utils import load_statement_rows

__all__ = ["load_statement_rows"]
