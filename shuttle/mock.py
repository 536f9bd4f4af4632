import collections
import collections.abc
from typing import Self

from .base import QueueExhaustedError, Request, Response
from .transport import Transport

MockEntry = Response | collections.abc.Callable[[Request], Response]


class MockTransport(Transport):
    """Replays queued responses in FIFO order instead of touching the network.

    A queued callable is invoked with the incoming request and its result is
    returned as the response. The debug flag is only recorded.
    """

    __slots__ = ("__debug", "__responses")

    def __init__(self, responses: collections.abc.Iterable[MockEntry] = ()) -> None:
        self.__responses = collections.deque[MockEntry](responses)
        self.__debug = False

    def execute(self, request: Request) -> Response:
        if not self.__responses:
            raise QueueExhaustedError("No more responses available in MockTransport response queue")

        entry = self.__responses.popleft()
        if isinstance(entry, Response):
            return entry
        return entry(request)

    def append(self, *responses: MockEntry) -> None:
        self.__responses.extend(responses)

    def set_debug(self, enabled: bool) -> Self:
        self.__debug = enabled
        return self

    @property
    def debug(self) -> bool:
        return self.__debug

    def __len__(self) -> int:
        return len(self.__responses)
