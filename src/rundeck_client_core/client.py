"""HTTP client construction for the Rundeck API."""

import logging
from pathlib import Path

import httpx

from rundeck_client_core.auth.credentials import CredentialResolver, ResolvedCredential
from rundeck_client_core.auth.env import Env
from rundeck_client_core.auth.interactive import Terminal
from rundeck_client_core.config import ClientSettings
from rundeck_client_core.transport.retry import ConnectRetry

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Rundeck-Auth-Token"


async def _log_request(request: httpx.Request) -> None:
    logger.debug(f"--> {request.method} {request.url}")


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug(f"<-- {response.status_code} {request.method} {request.url}")


def create_client(
    credential: ResolvedCredential,
    settings: ClientSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build an async HTTP client authenticated with ``credential``.

    Token credentials are sent in the ``X-Rundeck-Auth-Token`` header;
    username/password credentials use HTTP basic auth.

    Args:
        credential: The resolved credential.
        settings: Timeout, retry and debug settings. Defaults to ``ClientSettings()``.
        transport: Base transport to send requests with. Defaults to
            ``httpx.AsyncHTTPTransport()``; wrapped in :class:`ConnectRetry`
            when ``settings.retry_connect`` is set.

    Returns:
        An ``httpx.AsyncClient`` whose ``base_url`` is the credential's base URL.
    """
    settings = settings if settings is not None else ClientSettings()
    transport = transport if transport is not None else httpx.AsyncHTTPTransport()
    if settings.retry_connect:
        transport = ConnectRetry(wrapped_transport=transport)

    headers = {"Accept": "application/json"}
    auth = None
    if credential.is_token_auth:
        headers[TOKEN_HEADER] = credential.token
    else:
        auth = httpx.BasicAuth(credential.username, credential.password)

    event_hooks: dict[str, list] = {"request": [], "response": []}
    if settings.debug_level >= 1:
        event_hooks["request"].append(_log_request)
    if settings.debug_level >= 2:
        event_hooks["response"].append(_log_response)

    client_kwargs = {}
    if settings.http_timeout is not None:
        client_kwargs["timeout"] = httpx.Timeout(settings.http_timeout)

    return httpx.AsyncClient(
        base_url=credential.base_url,
        headers=headers,
        auth=auth,
        transport=transport,
        event_hooks=event_hooks,
        **client_kwargs,
    )


def create_client_from_env(
    env: Env | None = None,
    terminal: Terminal | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    dotenv_path: str | Path | None = None,
) -> httpx.AsyncClient:
    """Read settings, resolve credentials and build the client in one step.

    Settings and credentials come from ``env``, or from the process
    environment overlaid on ``dotenv_path`` when ``env`` is not given.

    Raises:
        CredentialError: If the base URL or credentials cannot be resolved.
    """
    env = env if env is not None else Env(dotenv_path=dotenv_path)
    settings = ClientSettings.from_env(env)
    credential = CredentialResolver(env=env, terminal=terminal, prompt=settings.auth_prompt).resolve()
    return create_client(credential, settings, transport=transport)
