import dataclasses
import logging
import sys
from typing import Any, Self, TextIO

import httpx
import multidict

from .base import HttpVersion, Method, Request, Response, TransportError, UnknownVersionError
from .stream import DEFAULT_MAX_MEMORY, TempStream
from .transport import Transport
from .utils import perf_counter, perf_counter_elapsed

logger = logging.getLogger(__package__)

ALLOWED_SCHEMES = ("http", "https")
BODYLESS_METHODS = frozenset({Method.GET, Method.HEAD, Method.OPTIONS, "TRACE"})
MAX_REDIRECTS = 10
CONNECT_TIMEOUT = 120.0

ENGINE_HTTP_VERSIONS = {
    HttpVersion.HTTP_10: "HTTP/1.0",
    HttpVersion.HTTP_11: "HTTP/1.1",
    HttpVersion.HTTP_2: "HTTP/2",
}
RESPONSE_HTTP_VERSIONS = {v: k for k, v in ENGINE_HTTP_VERSIONS.items()}


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class TransportOptions:
    method: str
    url: str
    port: int | None
    http_version: str
    headers: tuple[str, ...]
    content: bytes | None
    follow_redirects: bool
    max_redirects: int
    connect_timeout: float
    timeout: float | None
    verify: bool
    protocols: tuple[str, ...]
    verbose: bool

    @property
    def http2(self) -> bool:
        return self.http_version == ENGINE_HTTP_VERSIONS[HttpVersion.HTTP_2]


def build_http_version(request: Request) -> str:
    try:
        return ENGINE_HTTP_VERSIONS[request.version]
    except KeyError:
        raise UnknownVersionError(f"Unknown HTTP version {request.version!r}") from None


def build_request_headers(request: Request) -> list[str]:
    return [f"{name}: {value}" for name, value in request.headers.items()]


def build_request_content(request: Request) -> bytes | None:
    body = request.body
    if body is None or request.method in BODYLESS_METHODS:
        return None
    if body.seekable():
        body.rewind()
    return body.read()


class HttpxTransport(Transport):
    """Sends requests over the network with httpx.

    Every call gets its own ``httpx.Client``, so nothing is shared between
    calls except the settings below. Response bodies are kept in memory up to
    ``max_response_body_memory`` bytes and spill to a temporary file above it.

    Only the request's own headers are sent, plus the ``Host`` and
    ``Content-Length`` that httpx derives from the url and body. Response
    bodies are kept as received; a ``Content-Encoding`` is not decoded.

    HTTP/1.0 requests are labelled ``HTTP/1.0`` and never negotiate HTTP/2,
    but httpx frames them as HTTP/1.1 on the wire.
    """

    __slots__ = (
        "__connect_timeout",
        "__debug",
        "__debug_stream",
        "__follow_redirects",
        "__max_redirects",
        "__max_response_body_memory",
        "__timeout",
        "__transport",
        "__verify",
    )

    def __init__(
        self,
        *,
        max_response_body_memory: int = DEFAULT_MAX_MEMORY,
        follow_redirects: bool = True,
        max_redirects: int = MAX_REDIRECTS,
        connect_timeout: float = CONNECT_TIMEOUT,
        timeout: float | None = None,
        verify: bool = True,
        debug: bool = False,
        debug_stream: TextIO | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if max_response_body_memory < 0:
            raise ValueError("max_response_body_memory cannot be negative")
        if max_redirects < 0:
            raise ValueError("max_redirects cannot be negative")
        if connect_timeout <= 0:
            raise ValueError("connect_timeout should be positive")

        self.__max_response_body_memory = max_response_body_memory
        self.__follow_redirects = follow_redirects
        self.__max_redirects = max_redirects
        self.__connect_timeout = connect_timeout
        self.__timeout = timeout
        self.__verify = verify
        self.__debug = debug
        self.__debug_stream = debug_stream
        self.__transport = transport

    @property
    def debug(self) -> bool:
        return self.__debug

    def set_debug(self, enabled: bool) -> Self:
        self.__debug = enabled
        return self

    @property
    def max_response_body_memory(self) -> int:
        return self.__max_response_body_memory

    def set_max_response_body_memory(self, max_memory: int) -> Self:
        if max_memory < 0:
            raise ValueError("max_memory cannot be negative")
        self.__max_response_body_memory = max_memory
        return self

    def make_response_body_stream(self) -> TempStream:
        return TempStream(self.__max_response_body_memory)

    def build_options(self, request: Request) -> TransportOptions:
        url = request.url if request.url.raw_path else request.url.with_path("/")
        return TransportOptions(
            method=request.method,
            url=str(url),
            port=url.port,
            http_version=build_http_version(request),
            headers=tuple(build_request_headers(request)),
            content=build_request_content(request),
            follow_redirects=self.__follow_redirects,
            max_redirects=self.__max_redirects,
            connect_timeout=self.__connect_timeout,
            timeout=self.__timeout,
            verify=self.__verify,
            protocols=ALLOWED_SCHEMES,
            verbose=self.__debug,
        )

    def execute(self, request: Request) -> Response:
        if not request.url.is_absolute() or request.url.scheme not in ALLOWED_SCHEMES:
            raise TransportError(f"Unsupported protocol or relative url: {request.url}")

        options = self.build_options(request)
        logger.debug(
            "Sending request %s %s",
            options.method,
            options.url,
            extra={
                "request_method": options.method,
                "request_url": options.url,
            },
        )

        started_at = perf_counter()
        builder = _ResponseBuilder(self.make_response_body_stream(), request.version)
        try:
            with self.__open_client(options) as client:
                client_request = httpx.Request(
                    options.method,
                    options.url,
                    headers=[_parse_header_line(line) for line in options.headers],
                    content=options.content,
                    extensions={"trace": self.__trace} if options.verbose else None,
                )
                client_response = client.send(client_request, stream=True, follow_redirects=options.follow_redirects)
                try:
                    builder.status_line(
                        client_response.http_version, client_response.status_code, client_response.reason_phrase
                    )
                    for raw_name, raw_value in client_response.headers.raw:
                        builder.header(raw_name.decode("latin-1"), raw_value.decode("latin-1"))
                    for chunk in client_response.iter_raw():
                        builder.write(chunk)
                finally:
                    client_response.close()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            builder.discard()
            logger.warning(
                "Request %s %s has failed: %s",
                options.method,
                options.url,
                e,
                exc_info=True,
                extra={
                    "request_method": options.method,
                    "request_url": options.url,
                },
            )
            raise TransportError(str(e) or type(e).__name__) from e

        response = builder.build()
        elapsed = perf_counter_elapsed(started_at)
        logger.debug(
            "Request %s %s has completed with %s in %.3fs",
            options.method,
            options.url,
            response.status,
            elapsed,
            extra={
                "request_method": options.method,
                "request_url": options.url,
                "response_status": response.status,
                "elapsed": elapsed,
            },
        )
        return response

    def __open_client(self, options: TransportOptions) -> httpx.Client:
        return httpx.Client(
            http2=options.http2,
            verify=options.verify,
            timeout=httpx.Timeout(options.timeout, connect=options.connect_timeout),
            max_redirects=options.max_redirects,
            event_hooks=(
                {"request": [self.__debug_request], "response": [self.__debug_response]} if options.verbose else None
            ),
            transport=self.__transport,
        )

    def __write_debug(self, line: str) -> None:
        stream = self.__debug_stream or sys.stderr
        stream.write(line + "\n")

    def __trace(self, event_name: str, info: dict[str, Any]) -> None:
        self.__write_debug(f"* {event_name}")

    def __debug_request(self, request: httpx.Request) -> None:
        self.__write_debug(f"> {request.method} {request.url.raw_path.decode('ascii')}")
        for raw_name, raw_value in request.headers.raw:
            self.__write_debug(f"> {raw_name.decode('latin-1')}: {raw_value.decode('latin-1')}")

    def __debug_response(self, response: httpx.Response) -> None:
        self.__write_debug(f"< {response.http_version} {response.status_code} {response.reason_phrase}")
        for raw_name, raw_value in response.headers.raw:
            self.__write_debug(f"< {raw_name.decode('latin-1')}: {raw_value.decode('latin-1')}")


class _ResponseBuilder:
    """Collects status line, headers and body chunks into a Response."""

    __slots__ = ("__body", "__headers", "__reason", "__status", "__version")

    def __init__(self, body: TempStream, version: HttpVersion) -> None:
        self.__body = body
        self.__version = version
        self.__status: int | None = None
        self.__reason: str | None = None
        self.__headers = multidict.CIMultiDict[str]()

    def status_line(self, http_version: str, status: int, reason: str) -> None:
        # headers belong to the latest status line
        self.__version = RESPONSE_HTTP_VERSIONS.get(http_version, self.__version)
        self.__status = status
        self.__reason = reason or None
        self.__headers = multidict.CIMultiDict[str]()

    def header(self, name: str, value: str) -> None:
        self.__headers.add(name, value)

    def write(self, chunk: bytes) -> int:
        return self.__body.write(chunk)

    def discard(self) -> None:
        self.__body.close()

    def build(self) -> Response:
        if self.__status is None:
            raise TransportError("No response received")
        if not 100 <= self.__status <= 599:
            raise TransportError(f"Invalid status code {self.__status}")

        self.__body.rewind()
        return Response(
            status=self.__status,
            body=self.__body,
            headers=multidict.CIMultiDictProxy[str](self.__headers),
            version=self.__version,
            reason=self.__reason,
        )


def _parse_header_line(line: str) -> tuple[str, str]:
    name, _, value = line.partition(":")
    return name, value.strip()
