"""Terminal selection prompt (prompt_toolkit-based).

The resolver only needs one capability from the terminal: show a list of
options and get one back. That capability is the :class:`Selector` protocol;
:class:`PromptSelector` is the interactive implementation and tests swap in a
scripted one.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.validation import ValidationError, Validator

from .logging_setup import get_logger

_log = get_logger("ledger_reconcile.term_ui")


class Selector(Protocol):
    def present(self, message: str, options: Sequence[str], *, default: int = 0) -> int:
        """Show ``options`` and return the index of the chosen one."""
        ...


def _label_key(option: str) -> str:
    # Multi-line options (ledger blocks) are typed by their first line.
    first = option.splitlines()[0] if option else ""
    return first.strip().lower()


def resolve_choice(text: str, options: Sequence[str]) -> int | None:
    """Map typed input to an option index, or ``None`` when it names nothing.

    Accepts a 1-based option number or an option's first line (case-insensitive,
    first occurrence wins when two options share it).
    """

    s = text.strip()
    if not s:
        return None
    if s.isdigit():
        n = int(s)
        return n - 1 if 1 <= n <= len(options) else None
    key = s.lower()
    for i, opt in enumerate(options):
        if _label_key(opt) == key:
            return i
    return None


def _format_option(number: int, option: str) -> str:
    lines = option.splitlines() or [""]
    pad = " " * (len(str(number)) + 2)
    return "\n".join([f"{number}. {lines[0]}"] + [pad + ln for ln in lines[1:]])


class PromptSelector:
    """Numbered-list selector backed by a prompt_toolkit ``PromptSession``.

    Typing completes against the options' first lines; Enter on an empty
    input picks the default. Ctrl-C, Ctrl-D or a closed input stream also
    return the default rather than aborting the run.
    """

    def __init__(
        self,
        *,
        session: PromptSession | None = None,
        echo: Callable[[str], None] = print,
    ) -> None:
        self._session = session
        self._echo = echo

    def _make_session(self) -> PromptSession:
        if self._session is None:
            return PromptSession()
        return PromptSession(
            input=getattr(self._session, "input", None),
            output=getattr(self._session, "output", None),
        )

    def present(self, message: str, options: Sequence[str], *, default: int = 0) -> int:
        if not options:
            raise ValueError("present() requires at least one option")
        if not 0 <= default < len(options):
            raise ValueError(f"default index {default} out of range for {len(options)} options")

        for number, opt in enumerate(options, start=1):
            self._echo(_format_option(number, opt))

        words = [opt.splitlines()[0] if opt else "" for opt in options]
        completer = WordCompleter(words, ignore_case=True, match_middle=True, sentence=True)

        class _ChoiceValidator(Validator):
            def validate(self, document) -> None:
                if not document.text.strip():
                    return
                if resolve_choice(document.text, options) is None:
                    raise ValidationError(
                        message=f"Enter a number from 1 to {len(options)} or an option's text."
                    )

        prompt = f"{message} [1-{len(options)}, Enter for {default + 1}]: "
        try:
            answer = self._make_session().prompt(
                prompt,
                completer=completer,
                validator=_ChoiceValidator(),
                validate_while_typing=False,
            )
        except (EOFError, KeyboardInterrupt) as e:
            _log.debug("prompt interrupted (%s); using default option %d", type(e).__name__, default)
            return default

        choice = resolve_choice(answer, options)
        return default if choice is None else choice


__all__ = ["Selector", "PromptSelector", "resolve_choice"]
