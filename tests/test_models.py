"""Unit tests - model helpers."""

from postmark_mail import Message, Result
from postmark_mail.wire import message_to_wire


def test_result_ok_follows_error_code() -> None:
    assert Result().ok
    assert not Result(error_code=406, message="Inactive recipient").ok


def test_is_template() -> None:
    assert not Message(from_address="a@x.com").is_template
    assert Message(from_address="a@x.com", template_id=3).is_template


def test_markdown_body_sets_both_parts() -> None:
    msg = Message(from_address="a@x.com", to=["b@x.com"])
    msg.set_markdown_body("# Welcome\n\nThanks for **signing up**.")

    doc = message_to_wire(msg)

    assert doc["TextBody"].startswith("# Welcome")
    assert "<h1>Welcome</h1>" in doc["HtmlBody"]
    assert "<strong>signing up</strong>" in doc["HtmlBody"]
