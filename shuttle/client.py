import collections.abc
import dataclasses
import platform

import yarl

from .base import (
    ConfigurationError,
    Header,
    Headers,
    HttpVersion,
    Method,
    Request,
    Response,
)
from .httpx import HttpxTransport
from .pipeline import Middleware, build_pipeline
from .stream import Stream
from .transport import Transport

SHUTTLE_USER_AGENT = "Shuttle/1.0"
DEFAULT_USER_AGENT = f"{SHUTTLE_USER_AGENT} {platform.python_implementation()}/{platform.python_version()}"


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class ClientOptions:
    handler: Transport
    http_version: HttpVersion = HttpVersion.HTTP_11
    base_url: str | None = None
    headers: tuple[tuple[str, str], ...] = ()
    middleware: tuple[Middleware, ...] = ()
    debug: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.handler, Transport):
            raise ConfigurationError(
                f"handler must be an instance of {Transport.__qualname__}, got {type(self.handler).__qualname__}"
            )
        for middleware in self.middleware:
            if not isinstance(middleware, Middleware):
                raise ConfigurationError(
                    f"middleware must be instances of {Middleware.__qualname__}, got {type(middleware).__qualname__}"
                )


class Client:
    __slots__ = ("__options", "__send_request")

    def __init__(
        self,
        *,
        handler: Transport | None = None,
        http_version: HttpVersion | str | float = HttpVersion.HTTP_11,
        base_url: str | None = None,
        headers: Headers | None = None,
        middleware: collections.abc.Iterable[Middleware] = (),
        debug: bool = False,
    ) -> None:
        self.__options = ClientOptions(
            handler=handler if handler is not None else HttpxTransport(),
            http_version=HttpVersion.parse(http_version),
            base_url=base_url,
            headers=tuple(headers.items()) if headers is not None else (),
            middleware=tuple(middleware),
            debug=debug,
        )

        handler = self.__options.handler
        if debug:
            handler.set_debug(True)

        self.__send_request = build_pipeline(self.__options.middleware, handler.execute)

    @property
    def config(self) -> ClientOptions:
        return self.__options

    def get_handler(self) -> Transport:
        return self.__options.handler

    def send_request(self, request: Request) -> Response:
        return self.__send_request(request)

    def request(
        self,
        method: str,
        url: str | yarl.URL,
        body: Stream | None = None,
        *,
        headers: Headers | None = None,
    ) -> Response:
        if isinstance(url, str):
            url = yarl.URL((self.__options.base_url or "") + url)

        request = Request(method, url, version=self.__options.http_version)

        for name, value in self.__options.headers:
            request = request.with_added_header(name, value)

        if not request.has_header(Header.USER_AGENT):
            request = request.with_header(Header.USER_AGENT, DEFAULT_USER_AGENT)

        if body is not None:
            request = request.with_body(body)
            if body.content_type:
                request = request.with_header(Header.CONTENT_TYPE, body.content_type)

        if headers:
            request = request.update_headers(headers)

        return self.send_request(request)

    def get(self, url: str | yarl.URL, *, headers: Headers | None = None) -> Response:
        return self.request(Method.GET, url, headers=headers)

    def post(self, url: str | yarl.URL, body: Stream | None = None, *, headers: Headers | None = None) -> Response:
        return self.request(Method.POST, url, body, headers=headers)

    def put(self, url: str | yarl.URL, body: Stream | None = None, *, headers: Headers | None = None) -> Response:
        return self.request(Method.PUT, url, body, headers=headers)

    def patch(self, url: str | yarl.URL, body: Stream | None = None, *, headers: Headers | None = None) -> Response:
        return self.request(Method.PATCH, url, body, headers=headers)

    def delete(self, url: str | yarl.URL, *, headers: Headers | None = None) -> Response:
        return self.request(Method.DELETE, url, headers=headers)

    def head(self, url: str | yarl.URL, *, headers: Headers | None = None) -> Response:
        return self.request(Method.HEAD, url, headers=headers)

    def options(self, url: str | yarl.URL, *, headers: Headers | None = None) -> Response:
        return self.request(Method.OPTIONS, url, headers=headers)

    def __repr__(self) -> str:
        return f"<Client [{type(self.get_handler()).__name__}]>"
