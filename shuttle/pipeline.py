import abc
import collections.abc

from .base import Request, Response

NextFunc = collections.abc.Callable[[Request], Response]


class Middleware(abc.ABC):
    __slots__ = ()

    @abc.abstractmethod
    def process(self, request: Request, next: NextFunc) -> Response: ...


def build_pipeline(middleware: collections.abc.Sequence[Middleware], kernel: NextFunc) -> NextFunc:
    """Compose middleware around kernel.

    The first middleware is the outermost frame: it runs first with the request
    and sees the response last.
    """

    def _process_middleware(m: Middleware, n: NextFunc) -> NextFunc:
        return lambda r: m.process(r, n)

    pipeline: NextFunc = kernel
    for m in reversed(middleware):
        pipeline = _process_middleware(m, pipeline)
    return pipeline
