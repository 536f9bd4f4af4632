import time

perf_counter = time.perf_counter


def perf_counter_elapsed(started_at: float) -> float:
    return perf_counter() - started_at


def try_parse_float(value: str | None) -> float | None:
    if value is None:
        return None

    try:
        return float(value)
    except ValueError:
        return None
