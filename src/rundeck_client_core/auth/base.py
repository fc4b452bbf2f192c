"""Credential provider capability and its two generic combinators.

A provider answers three questions, each with a string or ``None`` when it
has no opinion: what is the username, the password, the token. Concrete
sources (environment, properties file, terminal) implement the lookups they
know about; :class:`ChainProvider` and :class:`MemoizingProvider` implement
the same interface, so providers compose recursively.

Example:
    ```python
    provider = (
        PropertiesFileProvider(rdeck_base)
        .chain(EnvironmentProvider(env))
        .chain(InteractiveProvider(terminal).memoize())
    )
    if provider.is_token_auth():
        token = provider.lookup_token()
    ```
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass


def is_blank(value: str | None) -> bool:
    """Return ``True`` for ``None``, the empty string, or whitespace only."""
    return value is None or not value.strip()


def normalize(value: str | None) -> str | None:
    """Map blank values to ``None`` so static sources never report ``""``."""
    return None if is_blank(value) else value


class CredentialProvider:
    """Base class for credential sources.

    Every lookup defaults to ``None``; subclasses override the ones their
    source can answer.
    """

    def lookup_username(self) -> str | None:
        return None

    def lookup_password(self) -> str | None:
        return None

    def lookup_token(self) -> str | None:
        return None

    def is_token_auth(self) -> bool:
        """Return ``True`` if this provider selects token authentication.

        Token mode holds when this provider's username is blank and its
        token is not. A username of any non-blank value selects password
        mode even when a token is available.
        """
        if not is_blank(self.lookup_username()):
            return False
        return not is_blank(self.lookup_token())

    def chain(self, fallback: "CredentialProvider") -> "ChainProvider":
        """Return a provider that consults ``self`` first, then ``fallback``."""
        return ChainProvider([self, fallback])

    def memoize(self) -> "MemoizingProvider":
        """Return a provider that calls each lookup of ``self`` at most once."""
        return MemoizingProvider(self)


class StaticProvider(CredentialProvider):
    """Provider answering from values given in code.

    Blank values are treated as absent.
    """

    def __init__(self, username: str | None = None, password: str | None = None, token: str | None = None):
        self._username = normalize(username)
        self._password = normalize(password)
        self._token = normalize(token)

    def lookup_username(self) -> str | None:
        return self._username

    def lookup_password(self) -> str | None:
        return self._password

    def lookup_token(self) -> str | None:
        return self._token

    def __repr__(self) -> str:
        return f"StaticProvider(username={self._username!r})"


class ChainProvider(CredentialProvider):
    """Ordered composition of providers; the first non-``None`` answer wins.

    Providers after the first one that answers a field are not consulted for
    that field. An empty string counts as an answer.

    Args:
        providers: Providers in precedence order (highest first).
    """

    def __init__(self, providers: Iterable[CredentialProvider]):
        self.providers = list(providers)

    def lookup_username(self) -> str | None:
        return self._find_first(lambda p: p.lookup_username())

    def lookup_password(self) -> str | None:
        return self._find_first(lambda p: p.lookup_password())

    def lookup_token(self) -> str | None:
        return self._find_first(lambda p: p.lookup_token())

    def _find_first(self, lookup: Callable[[CredentialProvider], str | None]) -> str | None:
        for provider in self.providers:
            value = lookup(provider)
            if value is not None:
                return value
        return None

    def __repr__(self) -> str:
        return f"ChainProvider({self.providers!r})"


@dataclass
class MemoCell:
    """Cached result of one lookup.

    ``computed`` distinguishes "not asked yet" from "asked, and absent".
    """

    computed: bool = False
    value: str | None = None


class MemoizingProvider(CredentialProvider):
    """Decorator that evaluates each lookup of the wrapped provider at most once.

    Absent results are cached as well: a provider that had no token is never
    asked for one again.

    Args:
        provider: The provider to wrap.
    """

    def __init__(self, provider: CredentialProvider):
        self.provider = provider
        self._username = MemoCell()
        self._password = MemoCell()
        self._token = MemoCell()

    def lookup_username(self) -> str | None:
        return self._memoized(self._username, self.provider.lookup_username)

    def lookup_password(self) -> str | None:
        return self._memoized(self._password, self.provider.lookup_password)

    def lookup_token(self) -> str | None:
        return self._memoized(self._token, self.provider.lookup_token)

    @staticmethod
    def _memoized(cell: MemoCell, lookup: Callable[[], str | None]) -> str | None:
        if not cell.computed:
            cell.value = lookup()
            cell.computed = True
        return cell.value

    def memoize(self) -> "MemoizingProvider":
        return self

    def __repr__(self) -> str:
        return f"MemoizingProvider({self.provider!r})"
