import collections.abc
import json
import urllib.parse
from typing import Any

from .stream import BufferStream


class Body(BufferStream):
    """In-memory stream declaring the Content-Type it should be sent with."""

    __slots__ = ("content_type",)

    def __init__(self, data: bytes | str, content_type: str) -> None:
        super().__init__(data)
        self.content_type = content_type


class BufferBody(Body):
    __slots__ = ()

    def __init__(self, data: bytes | str, content_type: str = "text/plain") -> None:
        super().__init__(data, content_type)


class JsonBody(Body):
    __slots__ = ()

    def __init__(
        self,
        data: Any,
        *,
        encoding: str = "utf-8",
        dumps: collections.abc.Callable[[Any], str] = json.dumps,
        content_type: str = "application/json",
    ) -> None:
        super().__init__(dumps(data).encode(encoding), content_type)


class FormBody(Body):
    __slots__ = ()

    def __init__(
        self,
        fields: collections.abc.Mapping[str, Any] | collections.abc.Iterable[tuple[str, Any]],
        *,
        content_type: str = "application/x-www-form-urlencoded",
    ) -> None:
        super().__init__(urllib.parse.urlencode(fields, doseq=True), content_type)
