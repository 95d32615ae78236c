"""Default backend: a long-lived httpx.Client."""

import logging

import httpx

log = logging.getLogger(__name__)


class HttpBackend:
    """Backend that sends requests over a single reusable httpx.Client.

    Timeouts travel with each request (see PostmarkClient), so the
    underlying client is created without one.
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._client = httpx.Client(transport=transport)

    def send(self, request: httpx.Request) -> httpx.Response:
        response = self._client.send(request)
        log.debug(
            "%s %s -> %d (%d bytes)",
            request.method,
            request.url,
            response.status_code,
            len(response.content),
        )
        return response

    def close(self) -> None:
        self._client.close()
