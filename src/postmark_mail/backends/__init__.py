"""HTTP backends used by PostmarkClient to issue requests."""

from postmark_mail.backends.base import PostmarkBackend
from postmark_mail.backends.http import HttpBackend

__all__ = ["PostmarkBackend", "HttpBackend"]
