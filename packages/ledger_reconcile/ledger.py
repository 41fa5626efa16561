"""In-memory ledger buffer.

The journal is kept as an ordered list of raw text lines and edited in place.
There is no parsed transaction model: a "block" is just a line
joined with the lines that follow it, and matching runs on that joined text.
Entries the matcher never recognizes are carried through untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from os import PathLike
from pathlib import Path

from .logging_setup import get_logger

CLEARED_MARKER = "*"

# Header line plus the two postings of a typical entry.
BLOCK_WINDOW = 3

_log = get_logger("ledger_reconcile.ledger")


def is_cleared(line: str) -> bool:
    return line.lstrip().startswith(CLEARED_MARKER)


class LedgerBuffer:
    """Mutable list of ledger lines with the few edits reconciliation needs.

    The buffer never shrinks: lines are only rewritten (cleared) or appended.
    """

    def __init__(self, lines: list[str] | None = None, *, trailing_newline: bool = False) -> None:
        self.lines: list[str] = list(lines or [])
        self.trailing_newline = trailing_newline

    @classmethod
    def from_text(cls, text: str) -> LedgerBuffer:
        """Split ``text`` on ``\\n`` only, dropping one ``\\r`` per line.

        Other characters ``str.splitlines`` treats as breaks (form feed,
        U+2028 and friends) stay inside their line.
        """

        if not text:
            return cls()
        lines = text.split("\n")
        trailing = lines[-1] == ""
        if trailing:
            lines.pop()
        return cls([ln.removesuffix("\r") for ln in lines], trailing_newline=trailing)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]

    def candidate_blocks(self, window: int = BLOCK_WINDOW) -> Iterator[tuple[int, str]]:
        """Yield ``(index, text)`` for every uncleared, non-blank starting line.

        ``text`` is the starting line joined with up to ``window - 1``
        following lines, so an amount on a posting line is searchable
        alongside the date/description on its header. Windows near the end of
        the buffer are truncated instead of dropped.
        """

        lines = self.lines
        for i, line in enumerate(lines):
            if not line.strip() or is_cleared(line):
                continue
            yield i, "\n".join(lines[i : i + window])

    def mark_cleared(self, index: int) -> str:
        """Prefix line ``index`` with the clearance marker and return it.

        Leading whitespace is trimmed and the rest of the line kept verbatim.
        A line that is already cleared is returned unchanged.
        """

        line = self.lines[index]
        if is_cleared(line):
            _log.debug("line %d already cleared: %r", index, line)
            return line
        updated = f"{CLEARED_MARKER} {line.lstrip()}"
        self.lines[index] = updated
        return updated

    def append_entry(self, entry: str) -> int:
        """Append ``entry`` as a single buffer element and return its index."""

        self.lines.append(entry)
        return len(self.lines) - 1

    def render(self) -> str:
        text = "\n".join(self.lines)
        if self.trailing_newline and self.lines:
            text += "\n"
        return text


def load_ledger(path: str | PathLike[str]) -> LedgerBuffer:
    """Read a ledger/journal file as UTF-8. ``OSError`` propagates."""

    # newline="" hands raw "\r\n" and "\r" to from_text untranslated.
    with Path(path).open(encoding="utf-8", newline="") as f:
        text = f.read()
    buffer = LedgerBuffer.from_text(text)
    _log.debug("loaded %d ledger lines from %s", len(buffer), path)
    return buffer


def write_ledger(buffer: LedgerBuffer, path: str | PathLike[str]) -> None:
    """Write the full buffer to ``path`` (UTF-8). ``OSError`` propagates."""

    # newline="" keeps the "\n" separators exactly as rendered.
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(buffer.render())
    _log.info("wrote %d ledger lines to %s", len(buffer), path)


__all__ = [
    "CLEARED_MARKER",
    "BLOCK_WINDOW",
    "LedgerBuffer",
    "is_cleared",
    "load_ledger",
    "write_ledger",
]
