"""Dataclasses describing outgoing messages and API results."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from email.headerregistry import Address
from typing import IO, Any

import mistune

# "a@x.com", "Name <a@x.com>", ("Name", "a@x.com") or email.headerregistry.Address
AddressLike = str | tuple[str, str] | Address

# Streams are owned by the message: drained once, then closed.
Body = str | bytes | IO[bytes] | IO[str]

Headers = Mapping[str, str | Sequence[str]] | Iterable[tuple[str, str]]


@dataclass
class Attachment:
    name: str
    content: bytes | IO[bytes]
    content_type: str = "application/octet-stream"


@dataclass
class Message:
    from_address: AddressLike
    to: list[AddressLike] = field(default_factory=list)
    cc: list[AddressLike] = field(default_factory=list)
    bcc: list[AddressLike] = field(default_factory=list)
    subject: str = ""
    tag: str = ""
    html_body: Body | None = None
    text_body: Body | None = None
    template_id: int = 0
    template_model: dict[str, Any] | None = None
    reply_to: AddressLike | None = None
    headers: Headers | None = None
    attachments: list[Attachment] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Iterables of pairs may be one-shot generators
        if self.headers is not None and not isinstance(self.headers, Mapping):
            self.headers = list(self.headers)

    @property
    def is_template(self) -> bool:
        return self.template_id != 0

    def set_markdown_body(self, source: str) -> None:
        """Use Markdown source as the text body and its rendering as the HTML body."""
        self.text_body = source
        self.html_body = str(mistune.html(source))


@dataclass(frozen=True)
class Result:
    error_code: int = 0
    message: str = ""
    message_id: str = ""
    submitted_at: str = ""
    to: str = ""

    @property
    def ok(self) -> bool:
        return self.error_code == 0
