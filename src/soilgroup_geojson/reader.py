"""Shapefile reader producing GeoJSON features from in-memory component bytes."""

from __future__ import annotations

import io
import struct
from typing import Any

import shapefile

from .errors import ParseError
from .models import ShapefileComponents


def read_features(components: ShapefileComponents, *, encoding: str) -> list[dict[str, Any]]:
    """Read every record of a complete component set as a GeoJSON feature, in file order.

    Attribute text is decoded strictly with ``encoding``; a record that fails
    to decode fails the whole set.
    """
    if not components.is_complete:
        raise ParseError("Shapefile needs both .shp and .dbf components")

    files = {"shp": io.BytesIO(components.shp), "dbf": io.BytesIO(components.dbf)}
    if components.shx is not None:
        files["shx"] = io.BytesIO(components.shx)

    try:
        with shapefile.Reader(encoding=encoding, **files) as sf:
            return [_to_feature(sr) for sr in sf.iterShapeRecords()]
    except (shapefile.ShapefileException, UnicodeDecodeError, LookupError, struct.error, ValueError) as exc:
        raise ParseError(f"Cannot read shapefile: {exc}") from exc


def _to_feature(shape_record: shapefile.ShapeRecord) -> dict[str, Any]:
    shape = shape_record.shape
    geometry = None
    # NULL shapes and empty points have no GeoJSON geometry
    if shape.shapeType != shapefile.NULL and shape.points:
        geometry = shape.__geo_interface__
    return {
        "type": "Feature",
        "properties": shape_record.record.as_dict(date_strings=True),
        "geometry": geometry,
    }
