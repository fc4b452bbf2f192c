"""Credentials from a Rundeck installation's ``framework.properties``.

When ``RDECK_BASE`` points at a Rundeck server directory, the client can
reuse the server URL and credentials configured in
``$RDECK_BASE/etc/framework.properties``:

    framework.server.url = http://localhost:4440
    framework.server.username = admin
    framework.server.password = admin

The file uses Java properties syntax (``=`` or ``:`` separators, backslash
escapes, line continuations, ``#`` and ``!`` comments) and is decoded as
ISO-8859-1 like the server does. It is read once, on first access to any
field. A missing or unreadable file is logged and treated as "not
configured": every field is then absent.
"""

import logging
from pathlib import Path

import javaproperties

from rundeck_client_core.auth.base import CredentialProvider, normalize
from rundeck_client_core.auth.env import Env

logger = logging.getLogger(__name__)

ENV_RDECK_BASE = "RDECK_BASE"

PROPERTIES_PATH = Path("etc") / "framework.properties"

PROP_SERVER_URL = "framework.server.url"
PROP_SERVER_USERNAME = "framework.server.username"
PROP_SERVER_PASSWORD = "framework.server.password"


class PropertiesFileProvider(CredentialProvider):
    """Reads the server URL, username and password from ``framework.properties``.

    Never supplies a token.

    Args:
        rdeck_base: The Rundeck base directory containing ``etc/framework.properties``.
    """

    def __init__(self, rdeck_base: str | Path):
        self.rdeck_base = Path(rdeck_base)
        self._properties: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        return self.rdeck_base / PROPERTIES_PATH

    @classmethod
    def is_available(cls, env: Env) -> bool:
        """Return ``True`` if ``RDECK_BASE`` is set."""
        return env.get_string(ENV_RDECK_BASE) is not None

    @classmethod
    def from_env(cls, env: Env) -> "PropertiesFileProvider":
        """Build the provider for the directory named by ``RDECK_BASE``.

        Call :meth:`is_available` first; an unset variable raises ``KeyError``.
        """
        rdeck_base = env.get_string(ENV_RDECK_BASE)
        if rdeck_base is None:
            raise KeyError(ENV_RDECK_BASE)
        return cls(rdeck_base)

    def get_base_url(self) -> str | None:
        return self._get(PROP_SERVER_URL)

    def lookup_username(self) -> str | None:
        return self._get(PROP_SERVER_USERNAME)

    def lookup_password(self) -> str | None:
        return self._get(PROP_SERVER_PASSWORD)

    def _get(self, key: str) -> str | None:
        return normalize(self._load().get(key))

    def _load(self) -> dict[str, str]:
        if self._properties is not None:
            return self._properties

        path = self.path
        self._properties = {}
        try:
            if not path.is_file():
                raise FileNotFoundError(path)
            with path.open("rb") as fp:
                values = javaproperties.load(fp)
        except FileNotFoundError:
            logger.warning(f"Properties file not found: {path}")
        except PermissionError:
            logger.warning(f"Permission denied reading properties file: {path}")
        except (OSError, ValueError) as e:
            logger.warning(f"Error reading properties file {path}: {e}")
        else:
            self._properties = dict(values)
            logger.debug(f"Loaded {len(self._properties)} properties from {path}")

        return self._properties

    def __repr__(self) -> str:
        return f"PropertiesFileProvider({str(self.rdeck_base)!r})"
