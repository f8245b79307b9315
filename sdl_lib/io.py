# -*- coding: utf-8 -*-
"""File I/O helpers for SDL files.

Thin wrappers around `SDLFeatureReader` for the common cases:

    from sdl_lib.io import read_sdl_file

    features = read_sdl_file(Path("parcels.sdl"), srs="EPSG:28992")
    broken = [f for f in features if f.parse_error]

For large files prefer `iter_sdl_records()`, which never holds more than
one record in memory.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

from sdl_lib.constants import SDL_ENCODING
from sdl_lib.models import SDLFeature
from sdl_lib.reader import SDLFeatureReader
from sdl_lib.reader import SDLSource

DEFAULT_ENCODING = SDL_ENCODING

__all__ = [
    "DEFAULT_ENCODING",
    "CancellationToken",
    "ProgressCallback",
    "iter_sdl_records",
    "open_sdl",
    "read_sdl_file",
]


class ProgressCallback(Protocol):
    """Protocol for progress callbacks."""

    def __call__(
        self,
        message: str | None = None,
        completed: int | None = None,
        total: int | None = None,
    ) -> None:
        """Report progress."""
        ...


class CancellationToken:
    """Token for checking if an operation should be cancelled."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        """Check if cancellation was requested."""
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True


def open_sdl(
    source: SDLSource,
    srs: str | None = None,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> SDLFeatureReader:
    """Open an SDL source for streaming.

    Args:
        source: Path, URL or binary stream
        srs: Optional CRS override (e.g. ``"EPSG:28992"``)
        encoding: Character encoding (default: Windows-1252)

    Returns:
        An open reader; the caller is responsible for closing it
    """
    return SDLFeatureReader(source, srs=srs, encoding=encoding)


def iter_sdl_records(
    source: SDLSource,
    srs: str | None = None,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> Iterator[SDLFeature]:
    """Yield the features of an SDL source, closing it when done."""
    with open_sdl(source, srs, encoding=encoding) as reader:
        yield from reader


def read_sdl_file(
    path: Path,
    srs: str | None = None,
    *,
    encoding: str = DEFAULT_ENCODING,
    on_progress: ProgressCallback | None = None,
    cancellation: CancellationToken | None = None,
) -> list[SDLFeature]:
    """Read all features of an SDL file.

    Args:
        path: Path to the .sdl file
        srs: Optional CRS override
        encoding: Character encoding (default: Windows-1252)
        on_progress: Optional progress callback, fed with bytes read
        cancellation: Optional cancellation token

    Returns:
        List of features, malformed records included (``parse_error == 1``)

    Raises:
        InterruptedError: If cancellation was requested
    """
    total = path.stat().st_size
    if on_progress:
        on_progress(message=f"Reading {path}", completed=0, total=total)

    features: list[SDLFeature] = []
    with open_sdl(path, srs, encoding=encoding) as reader:
        while reader.has_next():
            if cancellation and cancellation.cancelled:
                raise InterruptedError("Operation cancelled")

            feature = reader.next()
            if feature is None:
                break
            features.append(feature)

            if on_progress:
                on_progress(completed=reader.byte_count, total=total)

    return features
