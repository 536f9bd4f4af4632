import io
import os
import tempfile
from typing import IO, Any

DEFAULT_MAX_MEMORY = 2 * 1024 * 1024


class Stream:
    """Byte source/sink holding a request or response body.

    Streams are read from the current position; a seekable stream can be
    rewound and read again.
    """

    __slots__ = ("__file",)

    content_type: str | None = None

    def __init__(self, file: IO[bytes]) -> None:
        self.__file = file

    def read(self, size: int = -1) -> bytes:
        return self.__file.read(size)

    def write(self, data: bytes) -> int:
        return self.__file.write(data)

    def seekable(self) -> bool:
        return self.__file.seekable()

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self.__file.seek(offset, whence)

    def tell(self) -> int:
        return self.__file.tell()

    def rewind(self) -> None:
        self.seek(0)

    @property
    def size(self) -> int | None:
        if not self.seekable():
            return None
        position = self.tell()
        try:
            return self.seek(0, os.SEEK_END)
        finally:
            self.seek(position)

    def get_contents(self) -> bytes:
        return self.read()

    @property
    def closed(self) -> bool:
        return self.__file.closed

    def close(self) -> None:
        self.__file.close()

    def __enter__(self) -> "Stream":
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    def __bytes__(self) -> bytes:
        if self.seekable():
            self.rewind()
        return self.read()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} [size={self.size}]>"


class BufferStream(Stream):
    __slots__ = ()

    def __init__(self, data: bytes | str = b"") -> None:
        super().__init__(io.BytesIO(data.encode() if isinstance(data, str) else data))


class TempStream(Stream):
    """Stays in memory up to ``max_memory`` bytes, then spills to a temporary file."""

    __slots__ = ("__max_memory", "__rolled_over")

    def __init__(self, max_memory: int = DEFAULT_MAX_MEMORY) -> None:
        if max_memory < 0:
            raise ValueError("max_memory cannot be negative")

        self.__max_memory = max_memory
        self.__rolled_over = False
        super().__init__(tempfile.SpooledTemporaryFile(max_size=max_memory))  # type: ignore[arg-type]

    @property
    def max_memory(self) -> int:
        return self.__max_memory

    @property
    def rolled_over(self) -> bool:
        return self.__rolled_over

    def write(self, data: bytes) -> int:
        written = super().write(data)
        # a zero max_memory never spills
        if self.__max_memory and self.tell() > self.__max_memory:
            self.__rolled_over = True
        return written
