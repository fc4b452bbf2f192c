"""Credential resolution for the Rundeck command-line client.

This module provides:
- A credential provider capability with chain and memoize combinators
- Providers for explicit values, environment variables, framework.properties
  and terminal prompts
- A resolver that picks token or username/password authentication

Example:
    ```python
    from rundeck_client_core.auth import resolve_credentials

    credential = resolve_credentials()
    ```
"""

from rundeck_client_core.auth.base import ChainProvider, CredentialProvider, MemoizingProvider, StaticProvider
from rundeck_client_core.auth.credentials import (
    CredentialResolver,
    ResolvedCredential,
    ResolverState,
    resolve_credentials,
)
from rundeck_client_core.auth.env import Env
from rundeck_client_core.auth.environment import EnvironmentProvider
from rundeck_client_core.auth.exceptions import ConfigurationError, CredentialError, CredentialNotFoundError
from rundeck_client_core.auth.interactive import ConsoleTerminal, InteractiveProvider, Terminal
from rundeck_client_core.auth.properties import PropertiesFileProvider

__all__ = [
    "ChainProvider",
    "ConfigurationError",
    "ConsoleTerminal",
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialProvider",
    "CredentialResolver",
    "Env",
    "EnvironmentProvider",
    "InteractiveProvider",
    "MemoizingProvider",
    "PropertiesFileProvider",
    "ResolvedCredential",
    "ResolverState",
    "StaticProvider",
    "Terminal",
    "resolve_credentials",
]
