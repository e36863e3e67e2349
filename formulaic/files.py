"""Upload sources: an in-memory buffer or a path on disk."""

from __future__ import annotations

import io
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

from .exceptions import InvalidFileTypeError


@dataclass(frozen=True)
class BytesSource:
    """File contents already held in memory."""

    data: bytes

    def open(self) -> BinaryIO:
        return io.BytesIO(self.data)


@dataclass(frozen=True)
class PathSource:
    """File read from the local file system at upload time."""

    path: Path

    def open(self) -> BinaryIO:
        return open(self.path, "rb")


FileSource = Union[BytesSource, PathSource]


def as_file_source(file: object) -> FileSource:
    """Resolve an upload argument into a :data:`FileSource`.

    Accepts bytes-like buffers, ``str``/``os.PathLike`` paths, or an existing
    source. Anything else raises :class:`InvalidFileTypeError`.
    """
    if isinstance(file, (BytesSource, PathSource)):
        return file
    if isinstance(file, (bytes, bytearray, memoryview)):
        return BytesSource(bytes(file))
    if isinstance(file, (str, os.PathLike)):
        return PathSource(Path(file))
    raise InvalidFileTypeError(
        f"Invalid file type: expected bytes or a file path, got {type(file).__name__}"
    )
