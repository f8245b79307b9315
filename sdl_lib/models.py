# -*- coding: utf-8 -*-
"""Data models for SDL files.

This module contains the Pydantic models produced while reading an SDL file:
- SDLHeader: version and metadata blocks from the leading header
- SDLEntry: one record as parsed from text, before geometry assembly
- SDLAttribute / SDLFeatureType: the fixed schema shared by all records
- SDLFeature: one output record (geometry plus attributes)

Geometries are shapely objects and coordinate reference systems are pyproj
objects, hence ``arbitrary_types_allowed`` on the models that hold them.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pyproj import CRS
from shapely.geometry.base import BaseGeometry

from sdl_lib.constants import COORDINATE_SYSTEM_METADATA
from sdl_lib.constants import ENTRY_LINE_NUMBER_ATTRIBUTE
from sdl_lib.constants import ERROR_ATTRIBUTE
from sdl_lib.constants import GEOMETRY_ATTRIBUTE
from sdl_lib.constants import KEY_ATTRIBUTE
from sdl_lib.constants import NAME_ATTRIBUTE
from sdl_lib.constants import PARSE_ERROR_ATTRIBUTE
from sdl_lib.constants import URL_LINK_ATTRIBUTE
from sdl_lib.enums import GeometryKind
from sdl_lib.errors import SDLParseError
from sdl_lib.errors import describe_errors

Coordinate = tuple[float, float]


class SDLHeader(BaseModel):
    """Leading header block of an SDL file.

    Metadata block names are lower-cased when stored, so lookups through
    `get_metadata()` are case-insensitive.
    """

    model_config = ConfigDict(frozen=True)

    version: str | None = None
    metadata: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    def get_metadata(self, name: str) -> tuple[str, ...] | None:
        return self.metadata.get(name.lower())

    @property
    def coordinate_system_wkt(self) -> str | None:
        """First line of the coordinate system metadata block, if any."""
        block = self.get_metadata(COORDINATE_SYSTEM_METADATA)
        return block[0] if block else None


class SDLEntry(BaseModel):
    """A single record as read from the data section.

    ``parts`` holds one coordinate sequence per geometry block of the
    record. When the record is malformed, it holds whatever was read before
    the fault and ``errors`` explains what went wrong.
    """

    key: str | None = None
    name: str | None = None
    url_link: str | None = None
    line_number: int = Field(ge=1)
    kind: GeometryKind | None = None
    parts: list[list[Coordinate]] = Field(default_factory=list)
    errors: list[SDLParseError] = Field(default_factory=list)

    @property
    def parse_error(self) -> bool:
        return bool(self.errors)

    @property
    def error_description(self) -> str | None:
        return describe_errors(self.errors)

    @property
    def coordinate_count(self) -> int:
        return sum(len(part) for part in self.parts)


class SDLAttribute(BaseModel):
    """Descriptor of one attribute of the feature type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    binding: type
    nillable: bool = True


class SDLFeatureType(BaseModel):
    """The fixed schema of every record read from one SDL source."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type_name: str = Field(min_length=1)
    crs: CRS | None = None
    attributes: tuple[SDLAttribute, ...]

    @classmethod
    def build(cls, type_name: str, crs: CRS | None = None) -> SDLFeatureType:
        """Build the standard SDL feature type."""
        return cls(
            type_name=type_name,
            crs=crs,
            attributes=(
                SDLAttribute(name=GEOMETRY_ATTRIBUTE, binding=BaseGeometry),
                SDLAttribute(name=NAME_ATTRIBUTE, binding=str),
                SDLAttribute(name=KEY_ATTRIBUTE, binding=str),
                SDLAttribute(name=URL_LINK_ATTRIBUTE, binding=str),
                SDLAttribute(
                    name=ENTRY_LINE_NUMBER_ATTRIBUTE, binding=int, nillable=False
                ),
                SDLAttribute(name=PARSE_ERROR_ATTRIBUTE, binding=int, nillable=False),
                SDLAttribute(name=ERROR_ATTRIBUTE, binding=str),
            ),
        )

    @property
    def attribute_names(self) -> list[str]:
        return [attribute.name for attribute in self.attributes]

    @property
    def geometry_attribute(self) -> SDLAttribute:
        return self.attributes[0]

    def get_attribute(self, name: str) -> SDLAttribute | None:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


class SDLFeature(BaseModel):
    """One output record.

    Attribute names follow the feature type (``urlLink``,
    ``entryLineNumber``, ``parseError``); the snake_case names are accepted
    on construction as well.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    fid: int = Field(ge=0)
    geometry: BaseGeometry | None = None
    name: str | None = None
    key: str | None = None
    url_link: str | None = Field(default=None, alias=URL_LINK_ATTRIBUTE)
    entry_line_number: int = Field(alias=ENTRY_LINE_NUMBER_ATTRIBUTE, ge=1)
    parse_error: int = Field(default=0, alias=PARSE_ERROR_ATTRIBUTE, ge=0, le=1)
    error: str | None = None

    @property
    def geometry_type(self) -> str | None:
        return self.geometry.geom_type if self.geometry is not None else None

    @property
    def attributes(self) -> dict[str, object]:
        """Attribute values keyed by feature type attribute name."""
        return {
            GEOMETRY_ATTRIBUTE: self.geometry,
            NAME_ATTRIBUTE: self.name,
            KEY_ATTRIBUTE: self.key,
            URL_LINK_ATTRIBUTE: self.url_link,
            ENTRY_LINE_NUMBER_ATTRIBUTE: self.entry_line_number,
            PARSE_ERROR_ATTRIBUTE: self.parse_error,
            ERROR_ATTRIBUTE: self.error,
        }

    def properties(self) -> dict[str, object]:
        """Non-geometry attributes, as used for GeoJSON properties."""
        values = self.attributes
        del values[GEOMETRY_ATTRIBUTE]
        return values
