"""Credentials typed by the operator at the controlling terminal.

The username prompt is visible; password and token prompts are masked. An
empty username line is returned as ``""`` rather than ``None``: it means
"I want token authentication", which the chain must see as an answer.

Prompting is a one-time side effect from the operator's point of view, so
always wrap :class:`InteractiveProvider` with ``.memoize()`` before putting it
in a chain.
"""

import getpass
import logging
import sys
from typing import Protocol

from rundeck_client_core.auth.base import CredentialProvider

logger = logging.getLogger(__name__)

USERNAME_PROMPT = "Enter username (blank for token auth): "
PASSWORD_PROMPT = "Enter password: "
TOKEN_PROMPT = "Enter auth token: "


class Terminal(Protocol):
    """Access to the controlling terminal."""

    def is_available(self) -> bool:
        """Return ``True`` if an operator can be prompted."""
        ...

    def read_line(self, prompt: str) -> str | None:
        """Show ``prompt`` and read one visible line, or ``None`` at end of input."""
        ...

    def read_password(self, prompt: str) -> str | None:
        """Show ``prompt`` and read one line without echo, or ``None`` at end of input."""
        ...


class ConsoleTerminal:
    """:class:`Terminal` backed by the process's stdin/stdout."""

    def is_available(self) -> bool:
        stdin, stdout = sys.stdin, sys.stdout
        if stdin is None or stdout is None:
            return False
        return stdin.isatty() and stdout.isatty()

    def read_line(self, prompt: str) -> str | None:
        try:
            return input(prompt)
        except EOFError:
            return None

    def read_password(self, prompt: str) -> str | None:
        try:
            return getpass.getpass(prompt)
        except EOFError:
            return None


class InteractiveProvider(CredentialProvider):
    """Prompts the operator for each field it is asked about.

    Args:
        terminal: Terminal to prompt on. Defaults to :class:`ConsoleTerminal`.
    """

    def __init__(self, terminal: Terminal | None = None):
        self.terminal = terminal if terminal is not None else ConsoleTerminal()

    def lookup_username(self) -> str | None:
        logger.debug("Prompting for username")
        return self.terminal.read_line(USERNAME_PROMPT)

    def lookup_password(self) -> str | None:
        logger.debug("Prompting for password")
        return self.terminal.read_password(PASSWORD_PROMPT)

    def lookup_token(self) -> str | None:
        logger.debug("Prompting for auth token")
        return self.terminal.read_password(TOKEN_PROMPT)

    def __repr__(self) -> str:
        return f"InteractiveProvider({type(self.terminal).__name__})"
