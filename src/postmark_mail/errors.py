"""Exception hierarchy for the Postmark client library."""

from postmark_mail.models import Result


class PostmarkError(Exception):
    """Base class for errors raised by this library."""


class ConfigError(PostmarkError):
    """A configuration value is missing or cannot be parsed."""


class MarshalError(PostmarkError):
    """A message could not be converted into its JSON request body."""


class StreamConsumedError(MarshalError):
    """A stream-backed body or attachment was already drained."""


class ResponseDecodeError(PostmarkError):
    """The API answered with a body that is not the expected JSON shape."""

    def __init__(self, message: str, status_code: int, body: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class BatchRejectedError(PostmarkError):
    """The batch endpoint rejected the whole request with a single error object."""

    def __init__(self, result: Result) -> None:
        super().__init__(f"Batch rejected: [{result.error_code}] {result.message}")
        self.result = result
