"""Pytest configuration for test isolation.

Two pieces of process state leak between tests unless reset:

- ``LEDGER_FILE`` / ``LEDGER_RECONCILE_LOG_LEVEL`` from the developer's shell
  (or a ``.env`` in the working tree) change CLI behavior.
- ``configure_logging`` binds a handler to whatever ``sys.stderr`` was at the
  time; ``CliRunner`` swaps that stream per invocation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from ledger_reconcile.logging_setup import reset_logging

from tests.helpers.samples import SAMPLE_CSV, SAMPLE_LEDGER


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run each test from its own directory with a clean environment."""

    for name in ("LEDGER_FILE", "LEDGER_RECONCILE_LOG_LEVEL"):
        # setenv first so teardown also removes values a test (or .env) adds.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def ledger_file(tmp_path: Path) -> Path:
    p = tmp_path / "test_ledger.ledger"
    p.write_text(SAMPLE_LEDGER, encoding="utf-8")
    return p


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    p = tmp_path / "test_transactions.csv"
    p.write_text(SAMPLE_CSV, encoding="utf-8")
    return p
