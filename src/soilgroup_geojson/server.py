"""FastAPI server converting uploaded shapefile archives to GeoJSON."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query, UploadFile

from .config import ConversionConfig
from .errors import ExtractionError, ParseError
from .models import NamedOutput
from .pipeline import convert_archive

app = FastAPI(title="Soil-group GeoJSON converter", version="0.1.0")


@app.post("/convert")
async def convert_upload(
    file: UploadFile,
    tolerance: float | None = Query(None, ge=0),
    simplify: bool = Query(True),
):
    """Convert an uploaded .rar or .zip archive of shapefiles.

    Returns the same JSON the batch writes: a FeatureCollection when the
    archive holds one shapefile, otherwise a mapping of base name to
    FeatureCollection.
    """
    config = ConversionConfig(enable_simplify=simplify)
    if tolerance is not None:
        config.simplify_tolerance = tolerance

    content = await file.read()
    try:
        output = convert_archive(content, config)
    except ExtractionError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    if isinstance(output, NamedOutput) and not output.collections:
        raise HTTPException(status_code=400, detail="No shapefile with .shp and .dbf found in archive")

    return output.to_payload()
