import pytest

import shuttle
from shuttle import _parse_version  # pyright: ignore[reportPrivateUsage]


def test_alpha() -> None:
    assert _parse_version("0.1.2a2") == (0, 1, 2, "alpha", 2)
    assert _parse_version("1.2.3a") == (1, 2, 3, "alpha", 0)


def test_rc() -> None:
    assert _parse_version("0.1.2rc5") == (0, 1, 2, "candidate", 5)


def test_final() -> None:
    assert _parse_version("0.1.2") == (0, 1, 2, "final", 0)


def test_invalid() -> None:
    pytest.raises(ImportError, _parse_version, "0.1")
    pytest.raises(ImportError, _parse_version, "0.1.1z2")


def test_package_version_info() -> None:
    assert shuttle.version_info[:3] == tuple(int(p) for p in shuttle.__version__.split("."))
    assert shuttle.version.startswith(shuttle.__version__)
