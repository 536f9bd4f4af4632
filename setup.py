import re
from pathlib import Path

from setuptools import setup

install_requires = [
    "httpx[http2]>=0.27,<1.0",
    "multidict>=6.0,<7.0",
    "yarl>=1.9,<2.0",
]

extras_require = {
    "test": [
        "pytest>=8.0",
        "pytest-httpbin>=2.0",
    ],
}


def read(*parts):
    return Path(__file__).resolve().parent.joinpath(*parts).read_text().strip()


def read_version():
    regexp = re.compile(r"^__version__\W*=\W*\"([\d.abrc]+)\"")
    for line in read("shuttle", "__init__.py").splitlines():
        match = regexp.match(line)
        if match is not None:
            return match.group(1)
    else:
        raise RuntimeError("Cannot find version in shuttle/__init__.py")


setup(
    name="shuttle-http",
    version=read_version(),
    description="Synchronous HTTP client with a middleware pipeline and replaceable transports",
    long_description=read("README.md"),
    long_description_content_type="text/markdown",
    platforms=["macOS", "POSIX", "Windows"],
    python_requires=">=3.11",
    project_urls={},
    license="MIT",
    packages=["shuttle"],
    package_dir={"shuttle": "./shuttle"},
    package_data={"shuttle": ["py.typed"]},
    install_requires=install_requires,
    extras_require=extras_require,
    include_package_data=True,
)
