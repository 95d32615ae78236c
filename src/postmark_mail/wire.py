"""Conversion between model objects and the API's JSON documents.

Each entity has an explicit ``*_to_wire`` / ``*_from_wire`` function; the
client composes them into request bodies and never relies on implicit
serialization hooks.
"""

import base64
import re
from collections.abc import Iterable, Mapping
from email.header import Header
from email.headerregistry import Address
from email.utils import getaddresses
from typing import Any

from postmark_mail.errors import MarshalError, StreamConsumedError
from postmark_mail.models import AddressLike, Attachment, Body, Headers, Message, Result

# ---------------------------------------------------------------------------
# Addresses and headers
# ---------------------------------------------------------------------------


# Characters that force a display name into a quoted-string
_SPECIALS = re.compile(r'[][\\()<>@,:;".]')
_ESCAPES = re.compile(r'[\\"]')


def _display_name(name: str) -> str:
    if not name.isascii():
        return Header(name, "utf-8").encode()
    if _SPECIALS.search(name):
        return '"{}"'.format(_ESCAPES.sub(r"\\\g<0>", name))
    return name


def format_address(address: AddressLike) -> str:
    """Render an address as ``Name <email>``, or the bare email without a name.

    Non-ASCII display names are RFC 2047 encoded; the mailbox itself is kept
    as UTF-8.  A string must hold exactly one address.
    """
    if isinstance(address, Address):
        name, email = address.display_name, address.addr_spec
    elif isinstance(address, tuple):
        name, email = address
    else:
        parsed = getaddresses([address])
        if len(parsed) != 1 or not parsed[0][1]:
            raise MarshalError(f"Expected exactly one address, got {address!r}")
        name, email = parsed[0]
    return f"{_display_name(name)} <{email}>" if name else email


def format_address_list(addresses: Iterable[AddressLike]) -> str:
    return ", ".join(format_address(a) for a in addresses)


def header_pairs(headers: Headers | None) -> list[dict[str, str]]:
    """Expand a multi-valued header mapping into one Name/Value entry per value."""
    if not headers:
        return []
    if isinstance(headers, Mapping):
        items: Iterable[tuple[str, Any]] = headers.items()
    else:
        items = headers

    pairs = []
    for name, values in items:
        if isinstance(values, str):
            values = [values]
        for value in values:
            pairs.append({"Name": name, "Value": value})
    return pairs


# ---------------------------------------------------------------------------
# Streams
# ---------------------------------------------------------------------------


def _drain(source: Body, what: str) -> bytes | str:
    """Read a stream to the end and close it; pass str/bytes through."""
    if isinstance(source, (str, bytes)):
        return source

    if getattr(source, "closed", False):
        raise StreamConsumedError(f"{what} stream was already consumed")
    try:
        data = source.read()
    except (OSError, ValueError) as exc:
        raise MarshalError(f"Failed to read {what}: {exc}") from exc
    finally:
        close = getattr(source, "close", None)
        if close is not None:
            close()
    return data


def read_text(source: Body, what: str) -> str:
    data = _drain(source, what)
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def read_bytes(source: Body, what: str) -> bytes:
    data = _drain(source, what)
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


def attachment_to_wire(attachment: Attachment) -> dict[str, str]:
    content = read_bytes(attachment.content, f"attachment {attachment.name!r}")
    return {
        "Name": attachment.name,
        "Content": base64.b64encode(content).decode("ascii"),
        "ContentType": attachment.content_type,
    }


def message_to_wire(message: Message) -> dict[str, Any]:
    """Flatten a Message into the document the email endpoints expect.

    Stream-backed bodies and attachments are drained and closed, so a message
    carrying streams can be marshalled only once.
    """
    doc: dict[str, Any] = {
        "From": format_address(message.from_address),
        "To": format_address_list(message.to),
        "Cc": format_address_list(message.cc),
        "Bcc": format_address_list(message.bcc),
    }
    if message.subject:
        doc["Subject"] = message.subject
    doc["Tag"] = message.tag

    if message.html_body is not None:
        html = read_text(message.html_body, "HTML body")
        if html:
            doc["HtmlBody"] = html
    if message.text_body is not None:
        text = read_text(message.text_body, "text body")
        if text:
            doc["TextBody"] = text

    if message.is_template:
        doc["TemplateId"] = message.template_id
        doc["TemplateModel"] = dict(message.template_model or {})

    doc["ReplyTo"] = format_address(message.reply_to) if message.reply_to is not None else ""
    doc["Headers"] = header_pairs(message.headers)

    if message.attachments:
        doc["Attachments"] = [attachment_to_wire(a) for a in message.attachments]

    return doc


def result_from_wire(data: Any) -> Result:
    """Build a Result from one decoded response object.

    Raises TypeError/ValueError if ``data`` is not a response object; the
    client turns those into ResponseDecodeError.
    """
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return Result(
        error_code=int(data.get("ErrorCode") or 0),
        message=str(data.get("Message") or ""),
        message_id=str(data.get("MessageID") or ""),
        submitted_at=str(data.get("SubmittedAt") or ""),
        to=str(data.get("To") or ""),
    )
