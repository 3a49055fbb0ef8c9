"""Tests for the FastAPI conversion endpoint."""

import pytest
import shapefile
from httpx import ASGITransport, AsyncClient

from soilgroup_geojson.server import app

from sampledata import BANGKOK_UTM47, dense_square


@pytest.fixture
def client():
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


def _upload(name: str, content: bytes) -> dict:
    return {"file": (name, content, "application/octet-stream")}


@pytest.mark.asyncio
class TestConvertUpload:
    async def test_single_shapefile(self, client, make_shapefile, make_zip):
        resp = await client.post("/convert", files=_upload("sg_pri.zip", make_zip(make_shapefile("sg_pri"))))
        assert resp.status_code == 200
        data = resp.json()
        assert data["type"] == "FeatureCollection"
        lon, lat = data["features"][0]["geometry"]["coordinates"]
        assert 97 < lon < 106 and 5 < lat < 21

    async def test_several_shapefiles(self, client, make_shapefile, make_zip):
        archive = make_zip({**make_shapefile("sg_pri"), **make_shapefile("sg_sbr")})
        resp = await client.post("/convert", files=_upload("sg.zip", archive))
        assert resp.status_code == 200
        assert set(resp.json()) == {"sg_pri", "sg_sbr"}

    async def test_simplify_can_be_disabled(self, client, make_shapefile, make_zip):
        ring = dense_square(*BANGKOK_UTM47)
        archive = make_zip(make_shapefile("sg_pri", shape_type=shapefile.POLYGON, shapes=[[ring]]))

        full = await client.post("/convert?simplify=false", files=_upload("sg.zip", archive))
        simplified = await client.post("/convert?tolerance=0.001", files=_upload("sg.zip", archive))

        assert len(full.json()["features"][0]["geometry"]["coordinates"][0]) == len(ring)
        assert len(simplified.json()["features"][0]["geometry"]["coordinates"][0]) < len(ring)

    async def test_corrupt_archive_returns_400(self, client):
        resp = await client.post("/convert", files=_upload("broken.rar", b"not an archive"))
        assert resp.status_code == 400

    async def test_no_shapefile_returns_400(self, client, make_zip):
        resp = await client.post("/convert", files=_upload("docs.zip", make_zip({"readme.txt": b"hi"})))
        assert resp.status_code == 400

    async def test_bad_projection_returns_422(self, client, make_shapefile, make_zip):
        archive = make_zip(make_shapefile("sg_pri", prj=b"not a projection definition"))
        resp = await client.post("/convert", files=_upload("sg.zip", archive))
        assert resp.status_code == 422

    async def test_negative_tolerance_rejected(self, client, make_shapefile, make_zip):
        archive = make_zip(make_shapefile("sg_pri"))
        resp = await client.post("/convert?tolerance=-1", files=_upload("sg.zip", archive))
        assert resp.status_code == 422
