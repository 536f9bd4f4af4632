import pytest

import shuttle


def test_constant() -> None:
    delays_provider = shuttle.constant_delays(delay=42)
    assert delays_provider(0) == 42
    assert delays_provider(1) == 42
    assert delays_provider(2) == 42


def test_constant_negative() -> None:
    with pytest.raises(ValueError):
        shuttle.constant_delays(delay=-1)


def test_linear_backoff() -> None:
    delays_provider = shuttle.linear_backoff_delays(min_delay_seconds=1, delay_multiplier=2, jitter=0)
    assert delays_provider(0) == 1
    assert delays_provider(1) == 3
    assert delays_provider(2) == 5


def test_linear_backoff_jitter_bounds() -> None:
    delays_provider = shuttle.linear_backoff_delays(min_delay_seconds=1, delay_multiplier=0, jitter=0.5)
    for _ in range(100):
        assert 0.5 <= delays_provider(3) <= 1.5


def test_exponential_backoff() -> None:
    delays_provider = shuttle.exponential_backoff_delays(base_delay_seconds=1, max_delay_seconds=5, jitter=0)
    assert [delays_provider(attempt) for attempt in range(5)] == [1, 2, 4, 5, 5]
