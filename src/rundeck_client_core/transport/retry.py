"""Retry transport for requests that never reached the server.

``ConnectRetry`` retries only when the connection could not be established
(``httpx.ConnectError``, ``httpx.ConnectTimeout``). No request bytes have
been sent in that case, so every method is safe to retry, including POST.
Responses, even 5xx ones, are returned as-is.

## Example

```python
from rundeck_client_core.transport.retry import ConnectRetry
import httpx

retry_transport = ConnectRetry(
    wrapped_transport=httpx.AsyncHTTPTransport(),
    max_retries=3,
)

async with httpx.AsyncClient(transport=retry_transport) as client:
    response = await client.get("http://rundeck:4440/api/14/system/info")
```
"""

import asyncio
import logging

import httpx

logger = logging.getLogger(__name__)


class ConnectRetry(httpx.AsyncBaseTransport):
    """Retry transport that retries connection failures with exponential backoff.

    Args:
        wrapped_transport: The underlying transport to wrap
        max_retries: Maximum number of retry attempts (default: 3)
        backoff_factor: Multiplier for exponential backoff (default: 0.5)

    Example:
        ```python
        transport = ConnectRetry(
            wrapped_transport=httpx.AsyncHTTPTransport(),
            max_retries=3,
        )
        ```
    """

    RETRY_EXCEPTIONS: tuple[type[Exception], ...] = (httpx.ConnectError, httpx.ConnectTimeout)

    def __init__(
        self,
        *,
        wrapped_transport: httpx.AsyncBaseTransport,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor

    async def __aenter__(self):
        """Enter async context, delegating to wrapped transport."""
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context, delegating to wrapped transport."""
        return await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request, retrying while the connection cannot be established.

        Args:
            request: The HTTP request to send

        Returns:
            The first HTTP response received

        Raises:
            httpx.ConnectError: If every attempt failed to connect.
            httpx.ConnectTimeout: If every attempt timed out while connecting.
        """
        retries = 0

        while True:
            try:
                return await self._wrapped_transport.handle_async_request(request)
            except self.RETRY_EXCEPTIONS as e:
                if retries >= self.max_retries:
                    raise

                retries += 1
                delay = self._calculate_backoff_delay(retries)

                logger.warning(
                    f"Request {request.method} {request.url} failed with {e!r}, "
                    f"retrying in {delay}s (attempt {retries}/{self.max_retries})"
                )

                await asyncio.sleep(delay)

    def _calculate_backoff_delay(self, retry_number: int) -> float:
        """Calculate exponential backoff delay.

        Uses formula: backoff_factor * (2 ** (retry_number - 1))
        Default backoff sequence: 0.5, 1, 2 seconds

        Args:
            retry_number: Current retry attempt (1-indexed)

        Returns:
            Delay in seconds
        """
        return self.backoff_factor * (2 ** (retry_number - 1))
