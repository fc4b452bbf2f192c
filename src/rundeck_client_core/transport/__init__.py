"""Transport layer components for the Rundeck HTTP client.

Transport layers wrap httpx's AsyncHTTPTransport to add behaviour below the
client, such as retrying requests whose connection could not be established.

Example:
    ```python
    import httpx

    from rundeck_client_core.transport import ConnectRetry

    transport = ConnectRetry(wrapped_transport=httpx.AsyncHTTPTransport())
    ```
"""

from rundeck_client_core.transport.retry import ConnectRetry

__all__ = ["ConnectRetry"]
