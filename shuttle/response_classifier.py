import abc
import enum

from .base import Response


class ResponseVerdict(enum.Enum):
    ACCEPT = enum.auto()
    REJECT = enum.auto()


class ResponseClassifier(abc.ABC):
    __slots__ = ()

    @abc.abstractmethod
    def classify(self, response: Response) -> ResponseVerdict: ...


class DefaultResponseClassifier(ResponseClassifier):
    __slots__ = ("__verdict_for_status",)

    def __init__(self, verdict_for_status: dict[int, ResponseVerdict] | None = None):
        self.__verdict_for_status = verdict_for_status or {}

    def classify(self, response: Response) -> ResponseVerdict:
        verdict = self.__verdict_for_status.get(response.status)
        if verdict is not None:
            return verdict
        if response.is_server_error():
            return ResponseVerdict.REJECT
        if response.status == 408:
            return ResponseVerdict.REJECT
        if response.status == 429:
            return ResponseVerdict.REJECT
        return ResponseVerdict.ACCEPT
