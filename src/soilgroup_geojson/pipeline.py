"""Archive-to-GeoJSON conversion: fetch, extract, read, reproject, simplify, write."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from shapely.errors import ShapelyError
from shapely.geometry import mapping, shape

from .archive import extract_members, fetch_archive, group_components
from .config import ConversionConfig
from .errors import ParseError, WriteError
from .models import FeatureCollection, NamedOutput, ShapefileComponents, SingleOutput
from .projection import resolve_projection, transform_geometry
from .reader import read_features

logger = logging.getLogger(__name__)

SIMPLIFIED_TYPES = {"Polygon", "MultiPolygon", "LineString", "MultiLineString"}


def convert(
    source: str,
    output_path: str | Path,
    config: ConversionConfig | None = None,
    *,
    client: httpx.Client | None = None,
) -> SingleOutput | NamedOutput:
    """Download (or read) one archive and write its shapefiles as GeoJSON to ``output_path``."""
    config = config or ConversionConfig()
    data = fetch_archive(source, client=client, timeout=config.timeout)
    output = convert_archive(data, config)
    write_output(output, output_path)
    logger.info("success! file path: %s", output_path)
    return output


def convert_archive(data: bytes, config: ConversionConfig | None = None) -> SingleOutput | NamedOutput:
    """Convert every complete shapefile in an archive.

    One shapefile gives a ``SingleOutput``; any other count gives a
    ``NamedOutput`` keyed by base filename.
    """
    config = config or ConversionConfig()
    groups = group_components(extract_members(data))

    collections = [
        convert_components(name, components, config)
        for name, components in groups.items()
        if components.is_complete
    ]
    if not collections:
        logger.warning("no shapefile with both .shp and .dbf found in archive")

    if len(collections) == 1:
        return SingleOutput(collection=collections[0])
    return NamedOutput(collections={fc.name: fc for fc in collections})


def convert_components(name: str, components: ShapefileComponents, config: ConversionConfig) -> FeatureCollection:
    """Read one component set and reproject/simplify each feature to WGS84."""
    logger.info("converting: %s", name)

    source_crs = resolve_projection(components.prj)
    if source_crs is None:
        logger.info("  - no .prj file, assuming UTM Zone 47N")
        source_crs = config.default_crs
    else:
        logger.info("  - reprojecting to WGS84 (EPSG:4326)")

    features = read_features(components, encoding=config.encoding)

    original_size = 0
    simplified_size = 0
    for feature in features:
        geometry = feature["geometry"]
        if geometry is None:
            continue
        geometry = transform_geometry(geometry, source_crs)
        original_size += _json_size(geometry)
        if config.enable_simplify and geometry["type"] in SIMPLIFIED_TYPES:
            geometry = simplify_geometry(geometry, config.simplify_tolerance)
        simplified_size += _json_size(geometry)
        feature["geometry"] = geometry

    logger.info("  - converted: %d features", len(features))
    if config.enable_simplify and original_size:
        reduction = (1 - simplified_size / original_size) * 100
        logger.info(
            "  - geometry reduced by %.2f%% (%.2f KB -> %.2f KB)",
            reduction,
            original_size / 1024,
            simplified_size / 1024,
        )

    return FeatureCollection(name=name, features=features)


def simplify_geometry(geometry: dict[str, Any], tolerance: float) -> dict[str, Any]:
    """Douglas-Peucker simplification that keeps polygons valid."""
    try:
        simplified = shape(geometry).simplify(tolerance, preserve_topology=True)
    except (ShapelyError, ValueError) as exc:
        raise ParseError(f"Cannot simplify {geometry.get('type')} geometry: {exc}") from exc
    return mapping(simplified)


def write_output(output: SingleOutput | NamedOutput, output_path: str | Path) -> None:
    """Write the JSON payload as UTF-8 with 2-space indentation."""
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(output.to_payload(), indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Cannot write {path}: {exc}") from exc


def _json_size(geometry: dict[str, Any]) -> int:
    return len(json.dumps(geometry))
