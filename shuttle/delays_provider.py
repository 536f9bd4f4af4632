import collections.abc
import random

DelaysProvider = collections.abc.Callable[[int], float]


def constant_delays(*, delay: float = 0) -> DelaysProvider:
    if delay < 0:
        raise ValueError("delay cannot be negative")

    return lambda _: delay


def _with_jitter(delay: float, jitter: float) -> float:
    jitter_amount = delay * random.random() * jitter
    if random.random() < 0.5:
        jitter_amount = -jitter_amount
    return delay + jitter_amount


def linear_backoff_delays(
    *, min_delay_seconds: float = 0, delay_multiplier: float = 0.05, jitter: float = 0.2
) -> DelaysProvider:
    return lambda attempt: _with_jitter(min_delay_seconds + attempt * delay_multiplier, jitter)


def exponential_backoff_delays(
    *, base_delay_seconds: float = 0.05, max_delay_seconds: float = 5.0, jitter: float = 0.2
) -> DelaysProvider:
    return lambda attempt: _with_jitter(min(base_delay_seconds * 2**attempt, max_delay_seconds), jitter)
