from pathlib import Path

import pytest

from ledger_reconcile.ledger import LedgerBuffer
from ledger_reconcile.models import MatchMode, ReconcileSettings, RowOutcome, StatementRow
from ledger_reconcile.review import (
    ACTION_ADD,
    ACTION_EXIT,
    ACTION_IGNORE,
    IGNORE_LINE,
    build_entry,
    reconcile,
    resolve_row,
)
from tests.helpers.samples import SAMPLE_LEDGER
from tests.helpers.selector_stub import ScriptedSelector

SETTINGS = ReconcileSettings()


def _row(date: str, desc: str, amount: str, index: int = 0) -> StatementRow:
    return StatementRow(index=index, date=date, description=desc, amount=amount)


def _quiet(_: str) -> None:
    return None


# ---- resolve_row -------------------------------------------------------------


def test_selecting_a_match_clears_its_header_line():
    buf = LedgerBuffer.from_text(SAMPLE_LEDGER)
    selector = ScriptedSelector(["2025-01-01 Groceries"])

    outcome = resolve_row(
        buf, _row("2025-01-01", "Groceries", "$50.00"), selector, settings=SETTINGS, echo=_quiet
    )

    assert outcome is RowOutcome.CLEARED
    assert buf[1] == "* 2025-01-01 Groceries"
    call = selector.calls[0]
    assert call["message"] == "Match a transaction:"
    assert call["options"][-1] == IGNORE_LINE
    assert call["default"] == len(call["options"]) - 1


def test_ignore_this_line_leaves_buffer_untouched():
    buf = LedgerBuffer.from_text(SAMPLE_LEDGER)
    before = list(buf.lines)

    outcome = resolve_row(
        buf,
        _row("2025-01-01", "Groceries", "$50.00"),
        ScriptedSelector([IGNORE_LINE]),
        settings=SETTINGS,
        echo=_quiet,
    )

    assert outcome is RowOutcome.IGNORED
    assert buf.lines == before


def test_selection_is_by_index_when_block_texts_are_identical():
    lines = ["2025-01-05 Coffee", "    Expenses:Coffee  $4.50", "    Assets:Bank  -$4.50"]
    buf = LedgerBuffer(lines + [""] + lines)
    selector = ScriptedSelector()

    # Candidates start at buffer lines 0, 2 and 4; pick the second header.
    def pick_second_header(message, options, *, default=0):
        selector.calls.append({"options": list(options)})
        headers = [i for i, o in enumerate(options) if o.startswith("2025-01-05 Coffee")]
        return headers[1]

    selector.present = pick_second_header  # type: ignore[method-assign]

    outcome = resolve_row(
        buf, _row("2025-01-05", "Coffee", "4.50"), selector, settings=SETTINGS, echo=_quiet
    )

    assert outcome is RowOutcome.CLEARED
    assert buf[0] == "2025-01-05 Coffee"
    assert buf[4] == "* 2025-01-05 Coffee"


def test_no_match_offers_ignore_add_exit_with_ignore_default():
    buf = LedgerBuffer.from_text(SAMPLE_LEDGER)
    selector = ScriptedSelector()

    outcome = resolve_row(
        buf, _row("2025-02-01", "Coffee", "$4.50"), selector, settings=SETTINGS, echo=_quiet
    )

    assert outcome is RowOutcome.IGNORED
    assert selector.calls[0]["options"] == [ACTION_IGNORE, ACTION_ADD, ACTION_EXIT]
    assert selector.calls[0]["default"] == 0


def test_add_appends_one_balanced_entry():
    buf = LedgerBuffer.from_text(SAMPLE_LEDGER)
    before = list(buf.lines)

    outcome = resolve_row(
        buf,
        _row("2025-02-01", "Coffee", "$4.50"),
        ScriptedSelector([ACTION_ADD]),
        settings=SETTINGS,
        echo=_quiet,
    )

    assert outcome is RowOutcome.ADDED
    assert len(buf) == len(before) + 1
    assert buf.lines[:-1] == before
    assert buf[len(before)] == (
        "2025-02-01 Coffee\n"
        "    Expenses:Miscellaneous    $4.50\n"
        "    Assets:Bank               -$4.50"
    )


def test_exit_returns_exited_without_touching_buffer():
    buf = LedgerBuffer.from_text(SAMPLE_LEDGER)
    before = list(buf.lines)

    outcome = resolve_row(
        buf,
        _row("2025-02-01", "Coffee", "$4.50"),
        ScriptedSelector([ACTION_EXIT]),
        settings=SETTINGS,
        echo=_quiet,
    )

    assert outcome is RowOutcome.EXITED
    assert buf.lines == before


def test_loose_mode_setting_is_honored():
    buf = LedgerBuffer.from_text(SAMPLE_LEDGER)
    selector = ScriptedSelector(["2025-01-01 Groceries"])

    outcome = resolve_row(
        buf,
        _row("2025-01-01", "SUPERMARKET #12", "50.00"),
        selector,
        settings=ReconcileSettings(match_mode=MatchMode.LOOSE),
        echo=_quiet,
    )

    assert outcome is RowOutcome.CLEARED
    assert buf[1] == "* 2025-01-01 Groceries"


# ---- build_entry -------------------------------------------------------------


def test_build_entry_keeps_row_sign_and_uses_settings():
    settings = ReconcileSettings(
        expense_account="Expenses:Food", asset_account="Liabilities:Card", commodity="EUR "
    )

    entry = build_entry(_row("2025-03-01", "Bakery", "-€7.20"), settings)

    assert entry == (
        "2025-03-01 Bakery\n"
        "    Expenses:Food       -EUR7.20\n"
        "    Liabilities:Card    EUR7.20"
    )


@pytest.mark.parametrize("amount", ["$25.00", "+25.00", " 25.00 "])
def test_build_entry_unsigned_or_plus_amount_debits_the_asset(amount: str):
    entry = build_entry(_row("2025-03-02", "Coffee", amount), SETTINGS)

    assert entry.splitlines()[1:] == [
        "    Expenses:Miscellaneous    $25.00",
        "    Assets:Bank               -$25.00",
    ]


def test_settings_reject_empty_account():
    with pytest.raises(ValueError):
        ReconcileSettings(expense_account="   ")


# ---- reconcile ---------------------------------------------------------------


def test_reconcile_writes_full_buffer_in_original_order(tmp_path: Path):
    buf = LedgerBuffer.from_text(SAMPLE_LEDGER)
    original = list(buf.lines)
    rows = [
        _row("2025-01-02", "Rent", "$1000.00", 0),
        _row("2025-02-01", "Coffee", "$4.50", 1),
        _row("2025-01-01", "Groceries", "$50.00", 2),
    ]
    selector = ScriptedSelector(["2025-01-02 Rent", ACTION_ADD, "2025-01-01 Groceries"])
    out = tmp_path / "updated.ledger"

    summary = reconcile(buf, rows, selector, out, echo=_quiet)

    text = out.read_text(encoding="utf-8")
    assert "* 2025-01-01 Groceries" in text
    assert "* 2025-01-02 Rent" in text
    assert text.endswith(
        "2025-02-01 Coffee\n"
        "    Expenses:Miscellaneous    $4.50\n"
        "    Assets:Bank               -$4.50\n"
    )
    # Every original line survives, in order, modulo the clearance prefix.
    written = text.split("\n")
    for i, line in enumerate(original):
        assert written[i].removeprefix("* ") == line.lstrip() or written[i] == line
    assert (summary.cleared, summary.added, summary.ignored) == (2, 1, 0)
    assert summary.rows_processed == summary.rows_total == 3
    assert not summary.exited_early


def test_reconcile_exit_writes_immediately_and_skips_remaining_rows(tmp_path: Path):
    buf = LedgerBuffer.from_text(SAMPLE_LEDGER)
    rows = [
        _row("2025-01-01", "Groceries", "$50.00", 0),
        _row("2025-02-01", "Coffee", "$4.50", 1),
        _row("2025-01-02", "Rent", "$1000.00", 2),
    ]
    selector = ScriptedSelector(["2025-01-01 Groceries", ACTION_EXIT, "2025-01-02 Rent"])
    out = tmp_path / "updated.ledger"

    summary = reconcile(buf, rows, selector, out, echo=_quiet)

    text = out.read_text(encoding="utf-8")
    assert "* 2025-01-01 Groceries" in text
    assert "* 2025-01-02 Rent" not in text
    assert selector.remaining == 1
    assert summary.exited_early
    assert summary.rows_processed == 2
    assert summary.describe() == "2/3 rows: 1 cleared, 0 added, 0 ignored (exited early)"


def test_reconcile_same_row_twice_never_doubles_marker(tmp_path: Path):
    buf = LedgerBuffer.from_text(SAMPLE_LEDGER)
    row = _row("2025-01-01", "Groceries", "$50.00")
    selector = ScriptedSelector(["2025-01-01 Groceries", 0])
    out = tmp_path / "updated.ledger"

    summary = reconcile(buf, [row, row], selector, out, echo=_quiet)

    # Second pass no longer offers the cleared header; nothing matches.
    assert selector.calls[1]["message"] == "What would you like to do?"
    assert buf[1] == "* 2025-01-01 Groceries"
    assert summary.cleared == 1
    assert summary.ignored == 1
