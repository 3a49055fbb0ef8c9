"""Pydantic data models for the soil-group conversion pipeline."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class ShapefileComponents(BaseModel):
    """The component files of one shapefile, keyed by a shared base name."""

    shp: bytes | None = None
    shx: bytes | None = None
    dbf: bytes | None = None
    prj: bytes | None = None
    cpg: bytes | None = None

    @property
    def is_complete(self) -> bool:
        return self.shp is not None and self.dbf is not None


class FeatureCollection(BaseModel):
    """Features read from one component set, in source order."""

    name: str
    features: list[dict[str, Any]]

    def to_geojson(self) -> dict[str, Any]:
        return {"type": "FeatureCollection", "features": self.features}


class SingleOutput(BaseModel):
    """Archive held exactly one shapefile: written as a bare FeatureCollection."""

    kind: Literal["single"] = "single"
    collection: FeatureCollection

    def to_payload(self) -> dict[str, Any]:
        return self.collection.to_geojson()


class NamedOutput(BaseModel):
    """Archive held zero or several shapefiles: written as ``{name: FeatureCollection}``."""

    kind: Literal["named"] = "named"
    collections: dict[str, FeatureCollection]

    def to_payload(self) -> dict[str, Any]:
        return {name: fc.to_geojson() for name, fc in self.collections.items()}


ConversionOutput = Annotated[Union[SingleOutput, NamedOutput], Field(discriminator="kind")]


class BatchSource(BaseModel):
    """One archive to download and the file its GeoJSON goes to."""

    url: str
    output_path: str


class BatchOutcome(BaseModel):
    """Result of one batch item."""

    url: str
    output_path: str
    status: Literal["pending", "success", "failed"] = "pending"
    error: str | None = None

    def mark_success(self) -> None:
        self._finish("success")

    def mark_failed(self, error: str) -> None:
        self._finish("failed")
        self.error = error

    def _finish(self, status: str) -> None:
        if self.status != "pending":
            raise RuntimeError(f"Outcome for {self.url} is already {self.status}")
        self.status = status
