"""PostmarkClient - send single and batch messages through the Postmark API."""

import json
import logging
from typing import Any

import httpx

from postmark_mail.backends.base import PostmarkBackend
from postmark_mail.config import DEFAULT_HOST, load_config
from postmark_mail.errors import BatchRejectedError, MarshalError, ResponseDecodeError
from postmark_mail.models import Message, Result
from postmark_mail.wire import message_to_wire, result_from_wire

log = logging.getLogger(__name__)

TOKEN_HEADER = "X-Postmark-Server-Token"


class PostmarkClient:
    """Client for the Postmark transactional email API.

    Usage:
        client = PostmarkClient(api_key="server-token")

        result = client.send(Message(
            from_address="Sender <sender@example.com>",
            to=[("Recipient", "user@example.com")],
            subject="Hello",
            text_body="World",
        ))
        if not result.ok:
            print(result.error_code, result.message)

    Vendor-side rejections (bad token, inactive recipient, ...) come back as a
    Result with a non-zero error_code; only marshalling, transport and
    response-decoding failures raise.  The client holds no per-call state and
    may be shared between threads.
    """

    def __init__(
        self,
        api_key: str,
        secure: bool = True,
        host: str | None = None,
        timeout: float = 30.0,
        backend: PostmarkBackend | None = None,
    ) -> None:
        self.api_key = api_key
        self.secure = secure
        self.host = host or DEFAULT_HOST
        self.timeout = timeout
        if backend is None:
            from postmark_mail.backends.http import HttpBackend

            self.backend: PostmarkBackend = HttpBackend()
            self._owns_backend = True
        else:
            self.backend = backend
            self._owns_backend = False

    @classmethod
    def from_config(cls, ini_file: str, backend: PostmarkBackend | None = None) -> "PostmarkClient":
        """Create a client from the [postmark] section of an INI file."""
        values = load_config(ini_file)
        return cls(
            api_key=str(values["postmark.api_key"]),
            secure=bool(values["postmark.secure"]),
            host=str(values["postmark.host"]),
            timeout=float(values["postmark.timeout"]),
            backend=backend,
        )

    def endpoint(self, path: str) -> str:
        """Absolute URL for an API path such as ``email/batch``."""
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.host}/{path.lstrip('/')}"

    def send(self, message: Message) -> Result:
        """Send a single message, or a template message when template_id is set."""
        body = self._encode(message_to_wire(message))
        path = "email/withTemplate" if message.is_template else "email"

        response = self._post(path, body)
        result = self._decode_result(response, self._decode_json(response))
        if not result.ok:
            log.warning(
                "Postmark rejected message to %s: [%d] %s",
                result.to or "(unknown)",
                result.error_code,
                result.message,
            )
        return result

    def send_batch(self, messages: list[Message]) -> list[Result]:
        """Send messages in one request; results are in input order."""
        if not messages:
            return []

        body = self._encode([message_to_wire(m) for m in messages])
        response = self._post("email/batch", body)
        data = self._decode_json(response)

        if isinstance(data, dict):
            raise BatchRejectedError(self._decode_result(response, data))
        if not isinstance(data, list):
            raise ResponseDecodeError(
                f"Expected a JSON array from batch endpoint, got {type(data).__name__}",
                response.status_code,
                response.text,
            )

        if len(data) != len(messages):
            raise ResponseDecodeError(
                f"Batch endpoint returned {len(data)} result(s) for {len(messages)} message(s)",
                response.status_code,
                response.text,
            )

        results = [self._decode_result(response, item) for item in data]
        rejected = sum(1 for r in results if not r.ok)
        if rejected:
            log.warning("Postmark rejected %d of %d batch message(s)", rejected, len(results))
        return results

    def close(self) -> None:
        """Close the backend if this client created it."""
        if self._owns_backend:
            self.backend.close()

    def __enter__(self) -> "PostmarkClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -----------------------------------------------------------------------

    def _encode(self, doc: Any) -> bytes:
        try:
            return json.dumps(doc).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise MarshalError(f"Message is not JSON serializable: {exc}") from exc

    def _post(self, path: str, body: bytes) -> httpx.Response:
        url = self.endpoint(path)
        request = httpx.Request(
            "POST",
            url,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                TOKEN_HEADER: self.api_key,
            },
            content=body,
            extensions={"timeout": httpx.Timeout(self.timeout).as_dict()},
        )
        log.debug("POST %s (%d bytes)", url, len(body))
        return self.backend.send(request)

    def _decode_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseDecodeError(
                f"Invalid JSON in response (HTTP {response.status_code})",
                response.status_code,
                response.text,
            ) from exc

    def _decode_result(self, response: httpx.Response, data: Any) -> Result:
        try:
            return result_from_wire(data)
        except (TypeError, ValueError) as exc:
            raise ResponseDecodeError(
                f"Unexpected response shape (HTTP {response.status_code}): {exc}",
                response.status_code,
                response.text,
            ) from exc
