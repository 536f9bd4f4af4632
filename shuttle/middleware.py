import collections.abc
import logging
import time

from .base import Header, Method, Request, Response, TransportError
from .delays_provider import DelaysProvider, linear_backoff_delays
from .pipeline import Middleware, NextFunc
from .response_classifier import DefaultResponseClassifier, ResponseClassifier, ResponseVerdict
from .utils import perf_counter, perf_counter_elapsed, try_parse_float

logger = logging.getLogger(__package__)


class LoggingMiddleware(Middleware):
    __slots__ = ("__level", "__logger")

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.__logger = logger or logging.getLogger(__package__)
        self.__level = level

    def process(self, request: Request, next: NextFunc) -> Response:
        started_at = perf_counter()
        self.__logger.log(
            self.__level,
            "Sending request %s %s",
            request.method,
            request.url,
            extra={
                "request_method": request.method,
                "request_url": request.url,
            },
        )
        try:
            response = next(request)
        except Exception:
            self.__logger.warning(
                "Request %s %s has failed",
                request.method,
                request.url,
                exc_info=True,
                extra={
                    "request_method": request.method,
                    "request_url": request.url,
                    "elapsed": perf_counter_elapsed(started_at),
                },
            )
            raise

        elapsed = perf_counter_elapsed(started_at)
        self.__logger.log(
            self.__level,
            "Request %s %s has completed with %s in %.3fs",
            request.method,
            request.url,
            response.status,
            elapsed,
            extra={
                "request_method": request.method,
                "request_url": request.url,
                "response_status": response.status,
                "elapsed": elapsed,
            },
        )
        return response


class RetryMiddleware(Middleware):
    """Calls next again after a transport error or a rejected response.

    Only requests with a listed method and a rewindable (or absent) body are
    retried. The last attempt's outcome is returned or raised as is.
    """

    __slots__ = ("__attempts_count", "__delays_provider", "__methods", "__response_classifier", "__sleep")

    def __init__(
        self,
        *,
        attempts_count: int = 3,
        delays_provider: DelaysProvider = linear_backoff_delays(),
        response_classifier: ResponseClassifier | None = None,
        methods: collections.abc.Iterable[str] = (Method.GET, Method.HEAD, Method.OPTIONS),
        sleep: collections.abc.Callable[[float], None] = time.sleep,
    ) -> None:
        if attempts_count < 1:
            raise ValueError("attempts_count must be at least 1")

        self.__attempts_count = attempts_count
        self.__delays_provider = delays_provider
        self.__response_classifier = response_classifier or DefaultResponseClassifier()
        self.__methods = frozenset(m.upper() for m in methods)
        self.__sleep = sleep

    def process(self, request: Request, next: NextFunc) -> Response:
        if request.method not in self.__methods or not _is_replayable(request):
            return next(request)

        attempt = 0
        while True:
            last_attempt = attempt + 1 >= self.__attempts_count
            try:
                response = next(request)
            except TransportError:
                if last_attempt:
                    raise
                delay = self.__delays_provider(attempt)
                logger.warning(
                    "Request %s %s has failed, retrying in %.3fs",
                    request.method,
                    request.url,
                    delay,
                    exc_info=True,
                    extra={
                        "request_method": request.method,
                        "request_url": request.url,
                    },
                )
            else:
                if last_attempt or self.__response_classifier.classify(response) == ResponseVerdict.ACCEPT:
                    return response
                delay = try_parse_float(response.headers.get(Header.RETRY_AFTER)) or self.__delays_provider(attempt)
                logger.info(
                    "Request %s %s has been rejected with %s, retrying in %.3fs",
                    request.method,
                    request.url,
                    response.status,
                    delay,
                    extra={
                        "request_method": request.method,
                        "request_url": request.url,
                        "response_status": response.status,
                    },
                )

            if delay > 0:
                self.__sleep(delay)
            if request.body is not None:
                request.body.rewind()
            attempt += 1


def _is_replayable(request: Request) -> bool:
    return request.body is None or request.body.seekable()
