"""Interactive prompts for collecting repository and task fields.

Thin wrappers around prompt_toolkit. Validation reuses the pure validators
from gittaskr_cli.utils.validators, so a value accepted here is accepted by
the services too.

Commands run inside an event loop, so the text prompts are coroutines built
on ``PromptSession.prompt_async``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import typer
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError as PromptValidationError
from prompt_toolkit.validation import Validator

Check = Callable[[str], str | None]


class ReasonValidator(Validator):
    """prompt_toolkit validator that reports the reason from a pure validator."""

    def __init__(self, check: Check):
        self.check = check

    def validate(self, document: Document) -> None:
        reason = self.check(document.text)
        if reason is not None:
            raise PromptValidationError(message=reason, cursor_position=len(document.text))


def choice_check(choices: Sequence[str]) -> Check:
    """Build a check accepting only one of ``choices``."""

    def _check(value: str) -> str | None:
        if value not in choices:
            return f"Choose one of: {', '.join(choices)}"
        return None

    return _check


async def ask_text(message: str, *, default: str = "", check: Check | None = None) -> str:
    """Prompt for a line of text.

    Args:
        message: Prompt shown to the user
        default: Pre-filled value, kept when the user just presses enter
        check: Optional validator; the prompt repeats until it passes

    Raises:
        KeyboardInterrupt: Ctrl-C
        EOFError: Ctrl-D
    """
    session: PromptSession[str] = PromptSession()
    validator = ReasonValidator(check) if check is not None else None
    return await session.prompt_async(
        f"{message} ",
        default=default,
        validator=validator,
        validate_while_typing=False,
    )


async def ask_choice(message: str, choices: Sequence[str], *, default: str) -> str:
    """Prompt for one value out of a closed set, with tab completion."""
    session: PromptSession[str] = PromptSession()
    return await session.prompt_async(
        f"{message} ({'/'.join(choices)}) ",
        default=default,
        completer=WordCompleter(list(choices)),
        validator=ReasonValidator(choice_check(choices)),
        validate_while_typing=False,
    )


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question."""
    return typer.confirm(message, default=default)
