"""Postmark Mail - a small client for the Postmark transactional email API."""

from postmark_mail.client import PostmarkClient
from postmark_mail.errors import (
    BatchRejectedError,
    ConfigError,
    MarshalError,
    PostmarkError,
    ResponseDecodeError,
    StreamConsumedError,
)
from postmark_mail.models import Attachment, Message, Result

__all__ = [
    "PostmarkClient",
    "Message",
    "Attachment",
    "Result",
    "PostmarkError",
    "ConfigError",
    "MarshalError",
    "StreamConsumedError",
    "ResponseDecodeError",
    "BatchRejectedError",
]
