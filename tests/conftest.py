import io
import logging

import pytest

import shuttle

logging.basicConfig(level="DEBUG")


class UnseekableBytesIO(io.BytesIO):
    def seekable(self) -> bool:
        return False


class RecordingTransport(shuttle.Transport):
    __slots__ = ("_debug", "_response", "requests")

    def __init__(self, response: shuttle.Response | None = None) -> None:
        self._response = response or shuttle.Response(200)
        self._debug = False
        self.requests: list[shuttle.Request] = []

    def execute(self, request: shuttle.Request) -> shuttle.Response:
        self.requests.append(request)
        return self._response

    def set_debug(self, enabled: bool) -> "RecordingTransport":
        self._debug = enabled
        return self

    @property
    def debug(self) -> bool:
        return self._debug


class RecordingMiddleware(shuttle.Middleware):
    __slots__ = ("_calls", "_name")

    def __init__(self, name: str, calls: list[str]) -> None:
        self._name = name
        self._calls = calls

    def process(self, request: shuttle.Request, next: shuttle.NextFunc) -> shuttle.Response:
        self._calls.append(f"{self._name}:request")
        response = next(request)
        self._calls.append(f"{self._name}:response")
        return response


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


def text_response(status: int = 200, text: str = "OK") -> shuttle.Response:
    return shuttle.Response(status, shuttle.BufferStream(text), {"Content-Type": "text/plain"})
