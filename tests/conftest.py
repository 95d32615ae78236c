import httpx
import pytest

from postmark_mail import Message, PostmarkClient


@pytest.fixture
def message() -> Message:
    return Message(
        from_address="a@x.com",
        to=[("B", "b@x.com")],
        subject="Hi",
        text_body="hello",
    )


@pytest.fixture
def client():
    with PostmarkClient(api_key="k", secure=True) as c:
        yield c


class RecordingBackend:
    """Backend double that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []
        self.closed = False

    def send(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        response.request = request
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def recording_backend():
    return RecordingBackend
