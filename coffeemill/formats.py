"""File-name helpers and format dispatch for trajectory readers and writers."""

from __future__ import annotations

import os

from coffeemill.trajio import TrajectoryFormatError, TrajectoryReader, TrajectoryWriter
from coffeemill.xyz import XYZReader, XYZWriter

_READERS = {".xyz": XYZReader}
_WRITERS = {".xyz": XYZWriter}


def extension_of(path: str | os.PathLike[str]) -> str:
    """Return the extension of ``path`` including the dot, or an empty string."""
    return os.path.splitext(os.fspath(path))[1]


def base_name_of(path: str | os.PathLike[str]) -> str:
    """Return ``path`` without its extension."""
    return os.path.splitext(os.fspath(path))[0]


def is_writable_extension(extension: str) -> bool:
    """Whether a writer exists for files with ``extension``."""
    return extension in _WRITERS


def reader(path: str | os.PathLike[str]) -> TrajectoryReader:
    """Open a reader chosen by the extension of ``path``."""
    extension = extension_of(path)
    try:
        factory = _READERS[extension]
    except KeyError:
        raise TrajectoryFormatError(
            f"unsupported trajectory format to read: {extension!r} ({os.fspath(path)})"
        ) from None
    return factory(path)


def writer(path: str | os.PathLike[str]) -> TrajectoryWriter:
    """Open a writer chosen by the extension of ``path``."""
    extension = extension_of(path)
    try:
        factory = _WRITERS[extension]
    except KeyError:
        raise TrajectoryFormatError(
            f"unsupported trajectory format to write: {extension!r} ({os.fspath(path)})"
        ) from None
    return factory(path)