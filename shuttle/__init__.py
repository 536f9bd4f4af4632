import re
import sys
from typing import NamedTuple

from .base import (
    ConfigurationError,
    Header,
    Headers,
    HttpVersion,
    Method,
    QueueExhaustedError,
    Request,
    Response,
    ShuttleError,
    TransportError,
    UnexpectedContentTypeError,
    UnknownVersionError,
    get_reason_phrase,
)
from .body import Body, BufferBody, FormBody, JsonBody
from .client import DEFAULT_USER_AGENT, SHUTTLE_USER_AGENT, Client, ClientOptions
from .delays_provider import DelaysProvider, constant_delays, exponential_backoff_delays, linear_backoff_delays
from .httpx import HttpxTransport, TransportOptions, build_http_version, build_request_headers
from .middleware import LoggingMiddleware, RetryMiddleware
from .mock import MockTransport
from .pipeline import Middleware, NextFunc, build_pipeline
from .response_classifier import DefaultResponseClassifier, ResponseClassifier, ResponseVerdict
from .stream import BufferStream, Stream, TempStream
from .transport import Transport

__all__: tuple[str, ...] = (
    "Body",
    "BufferBody",
    "BufferStream",
    "Client",
    "ClientOptions",
    "ConfigurationError",
    "DEFAULT_USER_AGENT",
    "DefaultResponseClassifier",
    "DelaysProvider",
    "FormBody",
    "Header",
    "Headers",
    "HttpVersion",
    "HttpxTransport",
    "JsonBody",
    "LoggingMiddleware",
    "Method",
    "Middleware",
    "MockTransport",
    "NextFunc",
    "QueueExhaustedError",
    "Request",
    "Response",
    "ResponseClassifier",
    "ResponseVerdict",
    "RetryMiddleware",
    "SHUTTLE_USER_AGENT",
    "ShuttleError",
    "Stream",
    "TempStream",
    "Transport",
    "TransportError",
    "TransportOptions",
    "UnexpectedContentTypeError",
    "UnknownVersionError",
    "build_http_version",
    "build_pipeline",
    "build_request_headers",
    "constant_delays",
    "exponential_backoff_delays",
    "get_reason_phrase",
    "linear_backoff_delays",
)

__version__ = "1.0.0"

version = f"{__version__}, Python {sys.version}"


class VersionInfo(NamedTuple):
    major: int
    minor: int
    micro: int
    release_level: str
    serial: int


def _parse_version(v: str) -> VersionInfo:
    version_re = r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<micro>\d+)((?P<release_level>[a-z]+)(?P<serial>\d+)?)?$"
    match = re.match(version_re, v)
    if not match:
        raise ImportError(f"Invalid package version {v}")
    try:
        major = int(match.group("major"))
        minor = int(match.group("minor"))
        micro = int(match.group("micro"))
        levels = {"rc": "candidate", "a": "alpha", "b": "beta", None: "final"}
        release_level = levels[match.group("release_level")]
        serial = int(match.group("serial")) if match.group("serial") else 0
        return VersionInfo(major, minor, micro, release_level, serial)
    except Exception as e:
        raise ImportError(f"Invalid package version {v}") from e


version_info = _parse_version(__version__)
