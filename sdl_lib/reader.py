# -*- coding: utf-8 -*-
"""Streaming feature reader for SDL files.

`SDLFeatureReader` is the main entry point of the library. Opening a reader
parses the header, resolves the coordinate reference system and builds the
feature type; records are then read lazily, one per call:

    with SDLFeatureReader(Path("parcels.sdl"), srs="EPSG:28992") as reader:
        schema = reader.feature_type
        while reader.has_next():
            feature = reader.next()
            if feature.parse_error:
                print(feature.entry_line_number, feature.error)

The reader is forward-only and must not be shared between threads.
"""

from __future__ import annotations

import contextlib
import io
import logging
from pathlib import Path
from typing import BinaryIO
from urllib.parse import urlparse
from urllib.request import urlopen

from pydantic import ValidationError
from pyproj import CRS

from sdl_lib.constants import SDL_ENCODING
from sdl_lib.constants import UNKNOWN_TYPE_NAME
from sdl_lib.crs import resolve_crs
from sdl_lib.entry import SDLEntryParser
from sdl_lib.enums import FileExtension
from sdl_lib.errors import SDLError
from sdl_lib.errors import SDLSchemaError
from sdl_lib.errors import SDLStreamError
from sdl_lib.errors import describe_errors
from sdl_lib.geometry import assemble_geometry
from sdl_lib.header import parse_header
from sdl_lib.models import SDLEntry
from sdl_lib.models import SDLFeature
from sdl_lib.models import SDLFeatureType
from sdl_lib.models import SDLHeader
from sdl_lib.scanner import RecordScanner

logger = logging.getLogger(__name__)

SDLSource = str | Path | BinaryIO


def get_type_name(source: SDLSource) -> str:
    """Derive a feature type name from a path, URL or stream.

    The file name is used without its ``.sdl`` extension (case-insensitive);
    ``unknown_sdl`` is returned when there is no file name.
    """
    if isinstance(source, Path):
        file = source.name
    elif isinstance(source, str):
        file = urlparse(source).path if _is_url(source) else source
        file = file.replace("\\", "/").rsplit("/", 1)[-1]
    else:
        name = getattr(source, "name", None)
        file = Path(name).name if isinstance(name, str) else ""

    if not file:
        return UNKNOWN_TYPE_NAME
    if file.lower().endswith(FileExtension.SDL.value):
        file = file[: -len(FileExtension.SDL.value)]
    return file or UNKNOWN_TYPE_NAME


def _is_url(source: str) -> bool:
    # single letter schemes are Windows drive letters
    return len(urlparse(source).scheme) > 1


def open_stream(source: SDLSource) -> tuple[BinaryIO, str]:
    """Open a path, URL or binary stream for reading.

    Returns:
        Tuple of (binary stream, source identifier)

    Raises:
        SDLStreamError: If the source cannot be opened
    """
    if isinstance(source, (str, Path)):
        try:
            if isinstance(source, str) and _is_url(source):
                return urlopen(source), source  # noqa: S310
            return Path(source).open(mode="rb"), str(source)
        except OSError as e:
            raise SDLStreamError(f"Error opening {source}: {e}") from e

    if not hasattr(source, "read"):
        raise TypeError(f"Unsupported SDL source: {source!r}")
    return source, str(getattr(source, "name", "<stream>"))


class SDLFeatureReader:
    """Lazy, forward-only reader of the features in an SDL source.

    Construction opens the source and reads everything that precedes the
    first record. Any failure at that point (unreadable stream, invalid
    CRS, schema failure) is raised and the stream is closed again.

    Attributes:
        source: Source identifier
        header: Version and metadata blocks of the file
    """

    def __init__(
        self,
        source: SDLSource,
        type_name: str | None = None,
        srs: str | None = None,
        *,
        encoding: str = SDL_ENCODING,
    ) -> None:
        stream, self.source = open_stream(source)
        self._scanner = RecordScanner(stream, self.source, encoding=encoding)
        self._entry_parser = SDLEntryParser(self._scanner)
        self._next_fid = 0

        try:
            self.header: SDLHeader = parse_header(self._scanner)
            crs = resolve_crs(srs, self.header.metadata)
            self._feature_type = self._create_feature_type(
                type_name or get_type_name(source), crs
            )
        except Exception:
            # the original error wins over a failure to close
            with contextlib.suppress(SDLError):
                self._scanner.close()
            raise

        logger.debug(
            "Opened %s: version=%s, metadata blocks=%s, crs=%s",
            self.source,
            self.header.version,
            sorted(self.header.metadata),
            crs.name if crs is not None else None,
        )

    @classmethod
    def from_string(
        cls,
        data: str,
        type_name: str | None = None,
        srs: str | None = None,
        *,
        encoding: str = SDL_ENCODING,
    ) -> SDLFeatureReader:
        """Read SDL content held in memory.

        Args:
            data: SDL file content
            type_name: Feature type name (default: ``unknown_sdl``)
            srs: Optional CRS override
            encoding: Encoding used to round-trip `data` through bytes
        """
        stream = io.BytesIO(data.encode(encoding, errors="replace"))
        return cls(stream, type_name=type_name, srs=srs, encoding=encoding)

    @staticmethod
    def _create_feature_type(type_name: str, crs: CRS | None) -> SDLFeatureType:
        try:
            return SDLFeatureType.build(type_name, crs)
        except ValidationError as e:
            raise SDLSchemaError(f"Error creating feature type {type_name!r}") from e

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def feature_type(self) -> SDLFeatureType:
        return self._feature_type

    @property
    def crs(self) -> CRS | None:
        return self._feature_type.crs

    @property
    def byte_count(self) -> int:
        """Bytes consumed from the source so far, for progress reporting."""
        return self._scanner.byte_count

    @property
    def line_number(self) -> int:
        return self._scanner.line_number

    @property
    def closed(self) -> bool:
        return self._scanner.closed

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    def has_next(self) -> bool:
        """Whether another record follows. Consumes no record.

        Raises:
            SDLStreamError: If the stream failed or was closed
        """
        return self._scanner.has_more()

    def next(self) -> SDLFeature | None:
        """Read the next record.

        Returns:
            The next feature, or None when the source is exhausted

        Raises:
            SDLStreamError: If the stream failed or was closed
        """
        entry = self._entry_parser.parse_entry()
        if entry is None:
            return None
        return self._build_feature(entry)

    def _build_feature(self, entry: SDLEntry) -> SDLFeature:
        errors = list(entry.errors)
        geometry = None
        if entry.kind is not None:
            assembled = assemble_geometry(entry.kind, entry.parts)
            geometry = assembled.geometry
            errors.extend(assembled.errors)

        feature = SDLFeature(
            fid=self._next_fid,
            geometry=geometry,
            name=entry.name,
            key=entry.key,
            url_link=entry.url_link,
            entry_line_number=entry.line_number,
            parse_error=1 if errors else 0,
            error=describe_errors(errors),
        )
        self._next_fid += 1
        return feature

    def __iter__(self) -> SDLFeatureReader:
        return self

    def __next__(self) -> SDLFeature:
        feature = self.next()
        if feature is None:
            raise StopIteration
        return feature

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the stream. Safe to call more than once."""
        self._scanner.close()

    def __enter__(self) -> SDLFeatureReader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
