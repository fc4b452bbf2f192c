"""Resolution of the credential the Rundeck client authenticates with.

Sources are consulted in precedence order, first answer wins per field:

1. Explicitly provided values
2. ``$RDECK_BASE/etc/framework.properties`` (when ``RDECK_BASE`` is set),
   which also supplies the server URL
3. Environment variables ``RUNDECK_USER``, ``RUNDECK_PASSWORD``, ``RUNDECK_TOKEN``
4. Terminal prompts (when ``RD_AUTH_PROMPT`` is not false and a terminal exists)

The base URL comes from the properties file or, failing that, ``RUNDECK_URL``.

Example:
    ```python
    from rundeck_client_core.auth import resolve_credentials

    credential = resolve_credentials()
    if credential.is_token_auth:
        print("token auth against", credential.base_url)
    ```

Security Considerations:
    - Credential values are never logged (masked with ***)
    - Only source information is logged (env var name, file path, prompt)
    - Secrets are excluded from ``repr(ResolvedCredential)``
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rundeck_client_core.auth.base import CredentialProvider, StaticProvider, is_blank
from rundeck_client_core.auth.env import Env
from rundeck_client_core.auth.environment import ENV_PASSWORD, ENV_TOKEN, ENV_USER, EnvironmentProvider
from rundeck_client_core.auth.exceptions import CredentialError, CredentialNotFoundError
from rundeck_client_core.auth.interactive import ConsoleTerminal, InteractiveProvider, Terminal
from rundeck_client_core.auth.properties import PropertiesFileProvider

logger = logging.getLogger(__name__)

ENV_URL = "RUNDECK_URL"
ENV_AUTH_PROMPT = "RD_AUTH_PROMPT"

BASE_URL_HELP = "Please specify the Rundeck base URL, e.g. http://host:port or http://host:port/api/14"


@dataclass(frozen=True)
class ResolvedCredential:
    """The authentication decision handed to the HTTP client.

    Exactly one mode holds: token mode (``token`` set) or password mode
    (``username`` and ``password`` set).

    Attributes:
        base_url: Base URL of the Rundeck server.
        token: API token, in token mode.
        username: Login name, in password mode.
        password: Password, in password mode.
    """

    base_url: str
    token: str | None = field(default=None, repr=False)
    username: str | None = None
    password: str | None = field(default=None, repr=False)

    def __post_init__(self):
        if self.token is not None:
            if self.username is not None or self.password is not None:
                raise ValueError("A token credential cannot also carry a username or password")
        elif self.username is None or self.password is None:
            raise ValueError("A credential needs either a token or both username and password")

    @classmethod
    def for_token(cls, base_url: str, token: str) -> "ResolvedCredential":
        return cls(base_url=base_url, token=token)

    @classmethod
    def for_password(cls, base_url: str, username: str, password: str) -> "ResolvedCredential":
        return cls(base_url=base_url, username=username, password=password)

    @property
    def is_token_auth(self) -> bool:
        return self.token is not None


class ResolverState(Enum):
    """Progress of a :class:`CredentialResolver`."""

    UNRESOLVED = "unresolved"
    EVALUATING_TOKEN_MODE = "evaluating_token_mode"
    TOKEN_RESOLVED = "token_resolved"
    PASSWORD_PENDING = "password_pending"
    PASSWORD_RESOLVED = "password_resolved"
    FAILED = "failed"


class CredentialResolver:
    """Assemble the provider chain and decide how to authenticate.

    A resolver resolves once. Later calls to :meth:`resolve` return the same
    credential, or raise the same error, without consulting any source again.

    Args:
        env: Environment accessor. Defaults to a snapshot of ``os.environ``.
        terminal: Terminal used for prompts. Defaults to :class:`ConsoleTerminal`.
        username: Explicit username, taking precedence over every source.
        password: Explicit password, taking precedence over every source.
        token: Explicit token, taking precedence over every source.
        prompt: Allow terminal prompts. Defaults to ``RD_AUTH_PROMPT`` (true when unset).

    Example:
        ```python
        resolver = CredentialResolver(env=Env({"RUNDECK_URL": url, "RUNDECK_TOKEN": token}))
        credential = resolver.resolve()
        assert resolver.state is ResolverState.TOKEN_RESOLVED
        ```
    """

    def __init__(
        self,
        env: Env | None = None,
        terminal: Terminal | None = None,
        *,
        username: str | None = None,
        password: str | None = None,
        token: str | None = None,
        prompt: bool | None = None,
    ):
        self.env = env if env is not None else Env()
        self.terminal = terminal if terminal is not None else ConsoleTerminal()
        self.prompt = prompt if prompt is not None else self.env.get_bool(ENV_AUTH_PROMPT, True)
        self._explicit = StaticProvider(username=username, password=password, token=token)
        self.state = ResolverState.UNRESOLVED
        self._credential: ResolvedCredential | None = None
        self._error: CredentialError | None = None

    def build_chain(self) -> tuple[CredentialProvider, str]:
        """Build the provider chain in precedence order and find the base URL.

        Returns:
            The assembled provider and the base URL.

        Raises:
            ConfigurationError: If no base URL is configured anywhere.
        """
        provider: CredentialProvider = self._explicit
        base_url = None

        if PropertiesFileProvider.is_available(self.env):
            properties = PropertiesFileProvider.from_env(self.env)
            provider = provider.chain(properties)
            base_url = properties.get_base_url()
            logger.debug(f"Using credentials from {properties.path}")

        provider = provider.chain(EnvironmentProvider(self.env))

        if self.prompt and self.terminal.is_available():
            provider = provider.chain(InteractiveProvider(self.terminal).memoize())
            logger.debug("Terminal prompts enabled")

        if base_url is None:
            base_url = self.env.require(ENV_URL, BASE_URL_HELP)
        else:
            logger.debug(f"Using base URL from properties file: {base_url}")

        return provider, base_url

    def resolve(self) -> ResolvedCredential:
        """Resolve the credential.

        Returns:
            A token-mode or password-mode :class:`ResolvedCredential`.

        Raises:
            ConfigurationError: If no base URL is configured.
            CredentialNotFoundError: If neither a token nor a username and
                password could be resolved.
        """
        if self._credential is not None:
            return self._credential
        if self._error is not None:
            raise self._error

        try:
            self._credential = self._resolve()
        except CredentialError as e:
            self.state = ResolverState.FAILED
            self._error = e
            logger.debug(f"Credential resolution failed: {e}")
            raise
        return self._credential

    def _resolve(self) -> ResolvedCredential:
        provider, base_url = self.build_chain()

        self.state = ResolverState.EVALUATING_TOKEN_MODE
        if provider.is_token_auth():
            credential = ResolvedCredential.for_token(base_url, provider.lookup_token())
            self.state = ResolverState.TOKEN_RESOLVED
            logger.debug(f"Resolved token credential for {base_url}: ***")
            return credential

        self.state = ResolverState.PASSWORD_PENDING
        username = provider.lookup_username()
        if is_blank(username):
            raise CredentialNotFoundError(
                f"Username or token must be entered, or use environment variable {ENV_USER} or {ENV_TOKEN}",
                env_var_name=f"{ENV_USER} or {ENV_TOKEN}",
                field="username",
            )
        password = provider.lookup_password()
        if is_blank(password):
            raise CredentialNotFoundError(
                f"Password must be entered, or use environment variable {ENV_PASSWORD}",
                env_var_name=ENV_PASSWORD,
                field="password",
            )

        credential = ResolvedCredential.for_password(base_url, username, password)
        self.state = ResolverState.PASSWORD_RESOLVED
        logger.debug(f"Resolved password credential for user {username!r} at {base_url}: ***")
        return credential


def resolve_credentials(
    env: Env | None = None,
    terminal: Terminal | None = None,
    dotenv_path: str | Path | None = None,
    **kwargs,
) -> ResolvedCredential:
    """Resolve the credential with a fresh :class:`CredentialResolver`.

    Args:
        env: Environment accessor. Defaults to a snapshot of ``os.environ``.
        terminal: Terminal used for prompts.
        dotenv_path: ``.env`` file overlaid under the process environment when
            ``env`` is not given. No ``.env`` file is read unless one is named.
        **kwargs: Optional ``username``, ``password``, ``token`` or ``prompt``
            arguments for :class:`CredentialResolver`.
    """
    if env is None:
        env = Env(dotenv_path=dotenv_path)
    return CredentialResolver(env=env, terminal=terminal, **kwargs).resolve()
