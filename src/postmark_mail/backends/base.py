"""Backend protocol for PostmarkClient."""

from typing import Protocol

import httpx


class PostmarkBackend(Protocol):
    """Anything that can execute a prepared request.

    ``httpx.Client`` satisfies this protocol directly, so a preconfigured
    client (custom transport, proxies, event hooks) can be passed in as-is.
    """

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send the request and return the fully read response."""
        ...

    def close(self) -> None:
        """Release any pooled connections."""
        ...
