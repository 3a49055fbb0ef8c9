"""Projection detection from .prj text and reprojection of GeoJSON geometries to WGS84."""

from __future__ import annotations

import math
from functools import lru_cache
from numbers import Real
from typing import Any

from pyproj import Transformer
from pyproj.exceptions import ProjError

from .errors import ParseError

UTM_ZONE_47N = "+proj=utm +zone=47 +datum=WGS84 +units=m +no_defs"
UTM_ZONE_48N = "+proj=utm +zone=48 +datum=WGS84 +units=m +no_defs"
WGS84 = "EPSG:4326"

# Checked in order; first marker found wins.
PRJ_MARKERS: list[tuple[tuple[str, ...], str]] = [
    (("UTM_Zone_47", "UTM Zone 47"), UTM_ZONE_47N),
    (("UTM_Zone_48", "UTM Zone 48"), UTM_ZONE_48N),
    (("GCS_WGS_1984", "WGS 84"), WGS84),
]

# Nesting depth of ``coordinates`` above the [x, y] pair, per geometry type.
GEOMETRY_DEPTH: dict[str, int] = {
    "Point": 0,
    "LineString": 1,
    "MultiPoint": 1,
    "Polygon": 2,
    "MultiLineString": 2,
    "MultiPolygon": 3,
}


def resolve_projection(prj: bytes | None) -> str | None:
    """Map .prj content to a known CRS identifier.

    Returns None when there is no .prj, and the raw text when no known
    marker is present.
    """
    if prj is None:
        return None

    text = prj.decode("utf-8", errors="replace")
    for markers, crs in PRJ_MARKERS:
        if any(marker in text for marker in markers):
            return crs
    return text


def transform_geometry(geometry: dict[str, Any], source_crs: str | None) -> dict[str, Any]:
    """Return a copy of ``geometry`` with coordinates reprojected from ``source_crs`` to WGS84.

    Geometry types outside ``GEOMETRY_DEPTH`` are returned as they are.
    """
    if not source_crs or source_crs == WGS84:
        return geometry

    depth = GEOMETRY_DEPTH.get(geometry.get("type"))
    if depth is None:
        return geometry

    transformer = _transformer_for(source_crs)
    transformed = dict(geometry)
    transformed["coordinates"] = _transform_coords(transformer, geometry["coordinates"], depth)
    return transformed


@lru_cache(maxsize=16)
def _transformer_for(source_crs: str) -> Transformer:
    try:
        return Transformer.from_crs(source_crs, WGS84, always_xy=True)
    except ProjError as exc:
        raise ParseError(f"Cannot build projection from {source_crs[:80]!r}: {exc}") from exc


def _transform_coords(transformer: Transformer, coords: Any, depth: int) -> list:
    if not isinstance(coords, (list, tuple)):
        raise ParseError(f"Expected a coordinate array at depth {depth}, got {type(coords).__name__}")

    if depth == 0:
        if len(coords) < 2 or not all(_is_number(c) for c in coords[:2]):
            raise ParseError(f"Expected an [x, y] pair, got {coords!r}")
        try:
            x, y = transformer.transform(coords[0], coords[1], errcheck=True)
        except ProjError as exc:
            raise ParseError(f"Cannot reproject {coords!r}: {exc}") from exc
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ParseError(f"Reprojecting {coords!r} gave a non-finite result")
        return [x, y]

    return [_transform_coords(transformer, c, depth - 1) for c in coords]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)
