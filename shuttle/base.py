import collections.abc
import enum
import json
import re
from typing import Any, Self

import httpx
import multidict
import yarl

from .stream import BufferStream, Stream

EMPTY_HEADERS = multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str]())


class Method:
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class Header:
    AUTHORIZATION = multidict.istr("Authorization")
    CONTENT_TYPE = multidict.istr("Content-Type")
    CONTENT_LENGTH = multidict.istr("Content-Length")
    LOCATION = multidict.istr("Location")
    RETRY_AFTER = multidict.istr("Retry-After")
    USER_AGENT = multidict.istr("User-Agent")


class ShuttleError(Exception):
    """Base class of every error raised by shuttle"""


class ConfigurationError(ShuttleError, ValueError):
    """Client or transport was configured with an invalid value"""


class UnknownVersionError(ConfigurationError):
    """HTTP protocol version is not one of 1.0, 1.1 or 2"""


class TransportError(ShuttleError):
    """Transport failed to obtain a response"""


class QueueExhaustedError(ShuttleError):
    """Mock transport has no queued responses left"""


class UnexpectedContentTypeError(ShuttleError):
    """ContentType is unexpected"""


class HttpVersion(enum.StrEnum):
    HTTP_10 = "1.0"
    HTTP_11 = "1.1"
    HTTP_2 = "2"

    @staticmethod
    def parse(value: "HttpVersion | str | float") -> "HttpVersion":
        if isinstance(value, HttpVersion):
            return value
        if isinstance(value, bool):
            raise UnknownVersionError(f"Unknown HTTP version {value!r}")
        if isinstance(value, int | float):
            value = str(float(value))
        normalized = value.strip().upper().removeprefix("HTTP/")
        normalized = _VERSION_ALIASES.get(normalized, normalized)
        try:
            return HttpVersion(normalized)
        except ValueError:
            raise UnknownVersionError(f"Unknown HTTP version {value!r}") from None


_VERSION_ALIASES = {"1": "1.0", "2.0": "2"}


_MultiDict = (
    collections.abc.Mapping[str | multidict.istr, str] | multidict.CIMultiDictProxy[str] | multidict.CIMultiDict[str]
)

Headers = _MultiDict
HeaderValue = str | collections.abc.Sequence[str]

json_re = re.compile(r"^application/(?:[\w.+-]+?\+)?json", re.RegexFlag.IGNORECASE)


def is_expected_content_type(response_content_type: str, expected_content_type: str) -> bool:
    if expected_content_type == "application/json":
        return bool(json_re.match(response_content_type))
    return expected_content_type in response_content_type


def get_reason_phrase(status: int) -> str:
    return httpx.codes.get_reason_phrase(status)


def _freeze_headers(headers: Headers | None) -> multidict.CIMultiDictProxy[str]:
    if headers is None:
        return EMPTY_HEADERS
    if isinstance(headers, multidict.CIMultiDictProxy):
        return headers
    return multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str](headers))


def _values(value: HeaderValue) -> list[str]:
    if isinstance(value, str):
        return [value]
    return list(value)


class Message:
    """Shared header and body behaviour of requests and responses.

    Instances never change after construction; every ``with_*`` method
    returns a copy carrying the change.
    """

    __slots__ = ("__body", "__headers", "__version")

    def __init__(
        self,
        *,
        headers: Headers | None,
        body: Stream | None,
        version: HttpVersion | str | float,
    ) -> None:
        self.__headers = _freeze_headers(headers)
        self.__body = body
        self.__version = HttpVersion.parse(version)

    @property
    def headers(self) -> multidict.CIMultiDictProxy[str]:
        return self.__headers

    @property
    def body(self) -> Stream | None:
        return self.__body

    @property
    def version(self) -> HttpVersion:
        return self.__version

    def _replace(self, **changes: Any) -> Self:
        raise NotImplementedError

    def has_header(self, name: str) -> bool:
        return name in self.__headers

    def get_header(self, name: str) -> list[str]:
        return self.__headers.getall(name, [])

    def get_header_line(self, name: str) -> str:
        return ", ".join(self.get_header(name))

    def with_version(self, version: HttpVersion | str | float) -> Self:
        return self._replace(version=version)

    def with_body(self, body: Stream | None) -> Self:
        return self._replace(body=body)

    def with_header(self, name: str, value: HeaderValue) -> Self:
        headers = multidict.CIMultiDict[str](self.__headers)
        headers.popall(name, None)
        for v in _values(value):
            headers.add(name, v)
        return self._replace(headers=headers)

    def with_added_header(self, name: str, value: HeaderValue) -> Self:
        headers = multidict.CIMultiDict[str](self.__headers)
        for v in _values(value):
            headers.add(name, v)
        return self._replace(headers=headers)

    def without_header(self, name: str) -> Self:
        if name not in self.__headers:
            return self
        headers = multidict.CIMultiDict[str](self.__headers)
        headers.popall(name, None)
        return self._replace(headers=headers)

    def update_headers(self, headers: Headers) -> Self:
        updated_headers = multidict.CIMultiDict[str](self.__headers)
        for name in set(multidict.istr(k) for k in headers.keys()):
            updated_headers.popall(name, None)
        updated_headers.extend(headers)
        return self._replace(headers=updated_headers)

    def extend_headers(self, headers: Headers) -> Self:
        updated_headers = multidict.CIMultiDict[str](self.__headers)
        updated_headers.extend(headers)
        return self._replace(headers=updated_headers)

    @property
    def content_type(self) -> str | None:
        return self.__headers.get(Header.CONTENT_TYPE)

    @property
    def is_json(self) -> bool:
        return bool(json_re.match(self.content_type or ""))


class Request(Message):
    __slots__ = ("__method", "__url")

    def __init__(
        self,
        method: str,
        url: str | yarl.URL,
        body: Stream | None = None,
        headers: Headers | None = None,
        version: HttpVersion | str | float = HttpVersion.HTTP_11,
    ) -> None:
        if not method:
            raise ValueError("method cannot be empty")

        super().__init__(headers=headers, body=body, version=version)
        self.__method = method.upper()
        self.__url = yarl.URL(url) if isinstance(url, str) else url

    @property
    def method(self) -> str:
        return self.__method

    @property
    def url(self) -> yarl.URL:
        return self.__url

    def with_method(self, method: str) -> "Request":
        return self._replace(method=method)

    def with_url(self, url: str | yarl.URL) -> "Request":
        return self._replace(url=url)

    def _replace(self, **changes: Any) -> "Request":
        arguments: dict[str, Any] = dict(
            method=self.method,
            url=self.url,
            body=self.body,
            headers=self.headers,
            version=self.version,
        )
        arguments.update(changes)
        return Request(**arguments)

    def __repr__(self) -> str:
        return f"<Request [{self.method} {self.url}]>"


class Response(Message):
    __slots__ = ("__reason", "__status")

    def __init__(
        self,
        status: int = 200,
        body: Stream | None = None,
        headers: Headers | None = None,
        version: HttpVersion | str | float = HttpVersion.HTTP_11,
        reason: str | None = None,
    ) -> None:
        if not 100 <= status <= 599:
            raise ValueError(f"Status code should be between 100 and 599, got {status}")

        super().__init__(headers=headers, body=body if body is not None else BufferStream(), version=version)
        self.__status = status
        self.__reason = reason if reason is not None else get_reason_phrase(status)

    @property
    def status(self) -> int:
        return self.__status

    @property
    def reason(self) -> str:
        return self.__reason

    def with_status(self, status: int, reason: str | None = None) -> "Response":
        return self._replace(status=status, reason=reason)

    def _replace(self, **changes: Any) -> "Response":
        arguments: dict[str, Any] = dict(
            status=self.status,
            body=self.body,
            headers=self.headers,
            version=self.version,
            reason=self.reason,
        )
        arguments.update(changes)
        return Response(**arguments)

    def is_successful(self) -> bool:
        return 100 <= self.status < 400

    def is_informational(self) -> bool:
        return 100 <= self.status < 200

    def is_redirection(self) -> bool:
        return 300 <= self.status < 400

    def is_client_error(self) -> bool:
        return 400 <= self.status < 500

    def is_server_error(self) -> bool:
        return 500 <= self.status < 600

    def read(self) -> bytes:
        body = self.body
        if body is None:
            return b""
        if body.seekable():
            body.rewind()
        return body.read()

    def text(self, encoding: str | None = None) -> str:
        return self.read().decode(encoding or _charset(self.content_type) or "utf-8")

    def json(
        self,
        *,
        encoding: str | None = None,
        loads: collections.abc.Callable[[str], Any] = json.loads,
        content_type: str | None = "application/json",
    ) -> Any:
        if content_type is not None:
            response_content_type = (self.content_type or "").lower()
            if not is_expected_content_type(response_content_type, content_type):
                raise UnexpectedContentTypeError(f"Expected {content_type}, actual {response_content_type}")

        text = self.text(encoding=encoding)
        if not text:
            return None
        return loads(text)

    def __repr__(self) -> str:
        return f"<Response [{self.status} {self.reason}]>"


def _charset(content_type: str | None) -> str | None:
    if not content_type:
        return None
    for parameter in content_type.split(";")[1:]:
        name, _, value = parameter.strip().partition("=")
        if name.lower() == "charset" and value:
            return value.strip("\"'")
    return None
