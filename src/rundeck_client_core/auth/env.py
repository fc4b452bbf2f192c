"""Read-only access to the process environment.

Every component that needs an environment variable reads it through an
:class:`Env` instance instead of ``os.environ``. Tests pass a plain mapping,
so no real process state has to be mutated.

Example:
    ```python
    from rundeck_client_core.auth.env import Env

    env = Env()  # snapshot of os.environ
    env = Env({"RUNDECK_TOKEN": "abc123"})  # fixed values
    env = Env(dotenv_path="~/.rd/.env")  # os.environ overlaid on a .env file

    prompt = env.get_bool("RD_AUTH_PROMPT", True)
    url = env.require("RUNDECK_URL", "Please specify the Rundeck base URL")
    ```
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

from rundeck_client_core.auth.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset(["true", "1", "yes", "on"])


class Env:
    """Typed getters over an immutable snapshot of environment variables.

    Args:
        environ: Variables to expose. Defaults to a copy of ``os.environ``.
        dotenv_path: Optional ``.env`` file whose values fill in variables
            missing from ``environ``. Real variables always win.
    """

    def __init__(self, environ: Mapping[str, str] | None = None, dotenv_path: str | Path | None = None):
        values: dict[str, str] = {}

        if dotenv_path is not None:
            path = Path(os.path.expanduser(str(dotenv_path)))
            if path.is_file():
                values.update({k: v for k, v in dotenv_values(path, interpolate=False).items() if v is not None})
                logger.debug(f"Loaded environment overrides from {path}")
            else:
                logger.debug(f"No .env file at {path}")

        values.update(os.environ if environ is None else environ)
        self._values = values

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def get_string(self, name: str, default: str | None = None) -> str | None:
        """Return the variable, or ``default`` when it is unset."""
        return self._values.get(name, default)

    def get_bool(self, name: str, default: bool) -> bool:
        """Return the variable as a boolean.

        ``true``, ``1``, ``yes`` and ``on`` (any case) are true; any other set
        value is false. An unset variable yields ``default``.
        """
        value = self._values.get(name)
        if value is None:
            return default
        return value.strip().lower() in _TRUE_VALUES

    def get_int(self, name: str, default: int) -> int:
        value = self._values.get(name)
        if value is None or not value.strip():
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(
                f"Environment variable {name} must be an integer, got {value!r}", env_var_name=name
            ) from None

    def get_float(self, name: str, default: float | None = None) -> float | None:
        value = self._values.get(name)
        if value is None or not value.strip():
            return default
        try:
            return float(value)
        except ValueError:
            raise ConfigurationError(
                f"Environment variable {name} must be a number, got {value!r}", env_var_name=name
            ) from None

    def require(self, name: str, description: str) -> str:
        """Return a non-blank variable or raise.

        Args:
            name: Environment variable name.
            description: Message explaining what to set, used in the error.

        Raises:
            ConfigurationError: If the variable is unset or blank.
        """
        value = self._values.get(name)
        if value is None or not value.strip():
            raise ConfigurationError(f"{description} (environment variable {name})", env_var_name=name)
        return value
