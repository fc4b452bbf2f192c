"""Rundeck Client Core - credential resolution and HTTP client setup for the Rundeck CLI.

This library provides:
- Precedence-ordered credential resolution (framework.properties, environment,
  terminal prompts) with at-most-once prompting
- Token or username/password authentication decisions
- An httpx client factory with connect-failure retry

Example:
    ```python
    from rundeck_client_core.auth import resolve_credentials
    from rundeck_client_core.client import create_client
    from rundeck_client_core.config import ClientSettings

    credential = resolve_credentials()
    client = create_client(credential, ClientSettings.from_env())
    ```
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
