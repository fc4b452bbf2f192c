"""Testing utilities for code built on rundeck-client-core.

Fakes that stand in for the terminal and for credential sources, so tests
never prompt a real operator or depend on the process environment.

Example:
    ```python
    from rundeck_client_core.auth import CredentialResolver, Env
    from rundeck_client_core.testing import FakeTerminal


    def test_prompts_for_token():
        terminal = FakeTerminal(lines=[""], passwords=["abc123"])
        resolver = CredentialResolver(env=Env({"RUNDECK_URL": "http://rd:4440"}), terminal=terminal)
        assert resolver.resolve().token == "abc123"
    ```
"""

from collections import Counter
from collections.abc import Iterable

from rundeck_client_core.auth.base import CredentialProvider

__all__ = ["CountingProvider", "FakeTerminal"]


class FakeTerminal:
    """Scripted terminal.

    Visible reads pop from ``lines`` and masked reads pop from ``passwords``;
    an exhausted script behaves like end of input (``None``). Every prompt
    shown is recorded in ``prompts``.
    """

    def __init__(self, lines: Iterable[str] = (), passwords: Iterable[str] = (), available: bool = True):
        self.lines = list(lines)
        self.passwords = list(passwords)
        self.available = available
        self.prompts: list[str] = []

    def is_available(self) -> bool:
        return self.available

    def read_line(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        return self.lines.pop(0) if self.lines else None

    def read_password(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        return self.passwords.pop(0) if self.passwords else None


FieldValue = str | list[str | None] | None


class CountingProvider(CredentialProvider):
    """Provider that records how often each lookup is called.

    Each field may be a single value or a list of values returned on
    successive calls (the last one repeats).
    """

    def __init__(
        self,
        username: FieldValue = None,
        password: FieldValue = None,
        token: FieldValue = None,
    ):
        self._values: dict[str, FieldValue] = {"username": username, "password": password, "token": token}
        self.calls: Counter[str] = Counter()

    def _next(self, field: str) -> str | None:
        self.calls[field] += 1
        value = self._values[field]
        if isinstance(value, list):
            return value[min(self.calls[field], len(value)) - 1]
        return value

    def lookup_username(self) -> str | None:
        return self._next("username")

    def lookup_password(self) -> str | None:
        return self._next("password")

    def lookup_token(self) -> str | None:
        return self._next("token")
