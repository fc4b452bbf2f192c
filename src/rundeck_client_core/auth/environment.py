"""Credentials from ``RUNDECK_USER``, ``RUNDECK_PASSWORD`` and ``RUNDECK_TOKEN``."""

from rundeck_client_core.auth.base import CredentialProvider, normalize
from rundeck_client_core.auth.env import Env

ENV_USER = "RUNDECK_USER"
ENV_PASSWORD = "RUNDECK_PASSWORD"
ENV_TOKEN = "RUNDECK_TOKEN"


class EnvironmentProvider(CredentialProvider):
    """Reads the three credential variables on every call.

    Blank values are reported as absent.

    Args:
        env: Environment accessor. Defaults to a snapshot of ``os.environ``.
    """

    def __init__(self, env: Env | None = None):
        self.env = env if env is not None else Env()

    def lookup_username(self) -> str | None:
        return normalize(self.env.get_string(ENV_USER))

    def lookup_password(self) -> str | None:
        return normalize(self.env.get_string(ENV_PASSWORD))

    def lookup_token(self) -> str | None:
        return normalize(self.env.get_string(ENV_TOKEN))

    def __repr__(self) -> str:
        return "EnvironmentProvider()"
