"""Client settings read from the environment."""

from dataclasses import dataclass

from rundeck_client_core.auth.credentials import ENV_AUTH_PROMPT
from rundeck_client_core.auth.env import Env

ENV_DEBUG = "DEBUG"
ENV_HTTP_TIMEOUT = "RD_HTTP_TIMEOUT"
ENV_CONNECT_RETRY = "RD_CONNECT_RETRY"


@dataclass(frozen=True)
class ClientSettings:
    """HTTP client behaviour.

    Attributes:
        debug_level: 0 is quiet, 1 logs requests, 2 also logs responses.
        http_timeout: Per-request timeout in seconds, ``None`` for the httpx default.
        retry_connect: Retry requests whose connection could not be established.
        auth_prompt: Allow prompting for credentials on the terminal.
    """

    debug_level: int = 0
    http_timeout: float | None = None
    retry_connect: bool = True
    auth_prompt: bool = True

    @classmethod
    def from_env(cls, env: Env | None = None) -> "ClientSettings":
        """Read settings from ``DEBUG``, ``RD_HTTP_TIMEOUT``, ``RD_CONNECT_RETRY`` and ``RD_AUTH_PROMPT``.

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed.
        """
        env = env if env is not None else Env()
        return cls(
            debug_level=env.get_int(ENV_DEBUG, 0),
            http_timeout=env.get_float(ENV_HTTP_TIMEOUT),
            retry_connect=env.get_bool(ENV_CONNECT_RETRY, True),
            auth_prompt=env.get_bool(ENV_AUTH_PROMPT, True),
        )
