# -*- coding: utf-8 -*-
"""Read-only data store facade over an SDL source.

A single SDL file can contain point, line and polygon records. Knowing
which kinds a file holds would require reading it entirely, which is not
an option for a streaming reader. The store therefore always exposes one
feature type whose geometry attribute accepts any geometry: points, multi
line strings (possibly with a single component) and multi polygons
(possibly with a single polygon, possibly with holes).

Polygons in particular can be flagged with parse errors because of
randomly duplicated coordinates; see `sdl_lib.geometry`.

Every write, lock or schema mutation raises `ReadOnlyOperationError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sdl_lib.errors import ReadOnlyOperationError
from sdl_lib.errors import SDLError
from sdl_lib.models import SDLFeatureType
from sdl_lib.reader import SDLFeatureReader
from sdl_lib.reader import SDLSource
from sdl_lib.reader import get_type_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceInfo:
    """Description of the data store."""

    title: str
    source: str


class SDLDataStore:
    """Data store exposing the single feature type of one SDL source.

    The feature reader is opened on first use and shared by later calls,
    like the schema it carries.
    """

    def __init__(self, source: SDLSource, srs: str | None = None) -> None:
        self.source = source
        self.srs = srs
        self.type_name = get_type_name(source)
        self._reader: SDLFeatureReader | None = None

    @property
    def type_names(self) -> list[str]:
        return [self.type_name]

    @property
    def names(self) -> list[str]:
        return [self.get_schema().type_name]

    @property
    def info(self) -> ServiceInfo:
        return ServiceInfo(title="SDL DataStore", source=str(self.source))

    def get_schema(self, type_name: str | None = None) -> SDLFeatureType:
        """Return the feature type; there is only one, `type_name` is ignored."""
        return self.get_feature_reader().feature_type

    def get_feature_reader(self, type_name: str | None = None) -> SDLFeatureReader:
        """Return the feature reader, opening it on first use.

        Raises:
            SDLStreamError: If the source cannot be read
            SDLConfigurationError: If the CRS cannot be decoded
        """
        if self._reader is None:
            self._reader = SDLFeatureReader(
                self.source, type_name=self.type_name, srs=self.srs
            )
        return self._reader

    def dispose(self) -> None:
        """Close the feature reader, if any. Never raises."""
        if self._reader is not None:
            try:
                self._reader.close()
            except SDLError:
                logger.debug("Problem closing feature reader", exc_info=True)
        self._reader = None

    # -------------------------------------------------------------------------
    # Unsupported operations
    # -------------------------------------------------------------------------

    def get_feature_source(self, type_name: str | None = None):
        raise ReadOnlyOperationError("get_feature_source")

    def create_schema(self, feature_type: SDLFeatureType) -> None:
        raise ReadOnlyOperationError("create_schema")

    def update_schema(self, type_name: str, feature_type: SDLFeatureType) -> None:
        raise ReadOnlyOperationError("update_schema")

    def remove_schema(self, type_name: str) -> None:
        raise ReadOnlyOperationError("remove_schema")

    def get_feature_writer(self, type_name: str | None = None, transaction=None):
        raise ReadOnlyOperationError("get_feature_writer")

    def get_feature_writer_append(
        self,
        type_name: str | None = None,
        transaction=None,
    ):
        raise ReadOnlyOperationError("get_feature_writer_append")

    @property
    def locking_manager(self):
        raise ReadOnlyOperationError("locking_manager")

    def __enter__(self) -> SDLDataStore:
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()
