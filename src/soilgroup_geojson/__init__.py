"""Convert LDD soil-group shapefile archives to WGS84 GeoJSON."""

from .archive import extract_members, fetch_archive, group_components
from .batch import run_batch
from .config import DEFAULT_SOURCES, ConversionConfig, load_sources
from .errors import ConversionError, ExtractionError, FetchError, ParseError, WriteError
from .models import (
    BatchOutcome,
    BatchSource,
    FeatureCollection,
    NamedOutput,
    ShapefileComponents,
    SingleOutput,
)
from .pipeline import convert, convert_archive
from .projection import UTM_ZONE_47N, UTM_ZONE_48N, WGS84, resolve_projection, transform_geometry
from .reader import read_features

__all__ = [
    "BatchOutcome",
    "BatchSource",
    "ConversionConfig",
    "ConversionError",
    "DEFAULT_SOURCES",
    "ExtractionError",
    "FeatureCollection",
    "FetchError",
    "NamedOutput",
    "ParseError",
    "ShapefileComponents",
    "SingleOutput",
    "UTM_ZONE_47N",
    "UTM_ZONE_48N",
    "WGS84",
    "WriteError",
    "convert",
    "convert_archive",
    "extract_members",
    "fetch_archive",
    "group_components",
    "load_sources",
    "read_features",
    "resolve_projection",
    "run_batch",
    "transform_geometry",
]
