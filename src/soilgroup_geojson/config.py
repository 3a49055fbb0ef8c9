"""Conversion settings and the default list of soil-group archives."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter

from .models import BatchSource
from .projection import UTM_ZONE_47N

LDD_BASE_URL = "https://tswc.ldd.go.th/DownloadGIS/web_Soilgroup/DataSoilgroup"
OUTPUT_DIR = Path("output")

DEFAULT_SOURCES = [
    BatchSource(url=f"{LDD_BASE_URL}/E/sg_pri.rar", output_path=str(OUTPUT_DIR / "soilgroup_pri.json")),
    BatchSource(url=f"{LDD_BASE_URL}/C/sg_sbr.rar", output_path=str(OUTPUT_DIR / "soilgroup_sbr.json")),
    BatchSource(url=f"{LDD_BASE_URL}/S/sg_plg.rar", output_path=str(OUTPUT_DIR / "soilgroup_plg.json")),
    BatchSource(url=f"{LDD_BASE_URL}/N/sg_nan.rar", output_path=str(OUTPUT_DIR / "soilgroup_nan.json")),
]

_SOURCES_ADAPTER = TypeAdapter(list[BatchSource])


class ConversionConfig(BaseModel):
    """Settings applied to every shapefile in a conversion."""

    # In degrees, applied after reprojection. 0.0001 keeps fine detail, 0.01 is coarse.
    simplify_tolerance: float = Field(0.001, ge=0)
    enable_simplify: bool = True
    # LDD attribute tables are Thai Windows-874, a superset of TIS-620 that adds
    # NBSP and punctuation in 0x80-0xA0. Decoding them as UTF-8 garbles the text.
    encoding: str = "cp874"
    # Used when a shapefile ships without a .prj
    default_crs: str = UTM_ZONE_47N
    timeout: float | None = 300.0


def load_sources(path: str | Path) -> list[BatchSource]:
    """Read a JSON list of ``{"url": ..., "output_path": ...}`` entries."""
    return _SOURCES_ADAPTER.validate_json(Path(path).read_bytes())
