import abc
from typing import Self

from .base import Request, Response


class Transport(abc.ABC):
    __slots__ = ()

    @abc.abstractmethod
    def execute(self, request: Request) -> Response: ...

    @abc.abstractmethod
    def set_debug(self, enabled: bool) -> Self: ...

    @property
    @abc.abstractmethod
    def debug(self) -> bool: ...
