"""User interaction abstraction for the CLI and for testing.

The orchestration logic never reads stdin directly. It asks an
InteractionHandler for a line, and the handler either returns it or raises
EndOfInputError when the stream is closed.

Example:
    >>> handler = CLIInteractionHandler()
    >>> choice = handler.read_line("Choose option (1-5): ")

    Testing example:
    >>> test_handler = ScriptedInteractionHandler(["5", "y", "n"])
    >>> test_handler.read_line("Choose option (1-5): ")
    '5'
    >>> test_handler.confirm("Update system? (y/n): ")
    True
"""

from typing import Protocol, runtime_checkable

import click

from devsetup.errors import EndOfInputError


def is_yes(answer: str) -> bool:
    """Return True only when the answer starts with 'y' or 'Y'.

    Only the first character counts, so "yes" and "Yep" are yes while
    " y", "", "n" and anything else are no.
    """
    return answer[:1] in ("y", "Y")


@runtime_checkable
class InteractionHandler(Protocol):
    """Protocol for operator interaction."""

    def read_line(self, message: str) -> str:
        """Show a prompt and return one line of input without the newline.

        Raises:
            EndOfInputError: If the input stream is closed
        """
        ...

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question.

        Returns:
            True only for answers starting with y/Y. Closed input is a "no".
        """
        ...

    def pause(self, message: str) -> None:
        """Wait for the operator to press Enter. Closed input does not block."""
        ...


class CLIInteractionHandler:
    """Terminal interaction handler built on input() and click styling."""

    def read_line(self, message: str) -> str:
        try:
            # click.echo drops the styling when stdout is not a terminal
            click.echo(click.style(message, bold=True), nl=False)
            return input()
        except EOFError as e:
            click.echo()
            raise EndOfInputError(f"Input closed while waiting for: {message.strip()}") from e

    def confirm(self, message: str) -> bool:
        try:
            return is_yes(self.read_line(message))
        except EndOfInputError:
            return False

    def pause(self, message: str) -> None:
        try:
            self.read_line(message)
        except EndOfInputError:
            pass


class ScriptedInteractionHandler:
    """Interaction handler for testing with pre-programmed answers.

    Answers are consumed in order. When they run out the handler behaves
    like a closed stdin. Every prompt shown is recorded in ``prompts``.

    Example:
        >>> handler = ScriptedInteractionHandler(["you@example.com"])
        >>> handler.read_line("Enter your GitHub email: ")
        'you@example.com'
        >>> handler.prompts
        ['Enter your GitHub email: ']
    """

    def __init__(self, answers: list[str] | None = None):
        self.answers = list(answers or [])
        self.prompts: list[str] = []
        self._index = 0

    def read_line(self, message: str) -> str:
        self.prompts.append(message)
        if self._index >= len(self.answers):
            raise EndOfInputError(f"No scripted answer for: {message.strip()}")
        answer = self.answers[self._index]
        self._index += 1
        return answer

    def confirm(self, message: str) -> bool:
        try:
            return is_yes(self.read_line(message))
        except EndOfInputError:
            return False

    def pause(self, message: str) -> None:
        try:
            self.read_line(message)
        except EndOfInputError:
            pass

    @property
    def remaining(self) -> int:
        return len(self.answers) - self._index


# Type alias for convenience
Handler = InteractionHandler

__all__ = [
    "CLIInteractionHandler",
    "Handler",
    "InteractionHandler",
    "ScriptedInteractionHandler",
    "is_yes",
]
