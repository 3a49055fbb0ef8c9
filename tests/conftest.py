import io
import zipfile

import pytest
import shapefile

from sampledata import BANGKOK_UTM47, THAI_SOIL_GROUP


@pytest.fixture
def make_shapefile(tmp_path):
    """Write a Thai (cp874) shapefile and return its components as ``{filename: bytes}``.

    ``shapes`` holds one entry per record: an (x, y) tuple for POINT, a list of
    rings for POLYGON, a list of parts for POLYLINE, or None for a null shape.
    """

    def _make(name, shape_type=shapefile.POINT, shapes=(BANGKOK_UTM47,), records=None, prj=None, shx=True):
        records = records or [[THAI_SOIL_GROUP, 1]] * len(shapes)
        target = tmp_path / name
        with shapefile.Writer(str(target), shapeType=shape_type, encoding="cp874") as w:
            w.field("SOIL_GROUP", "C", size=40)
            w.field("GROUP_NO", "N", size=4)
            for geom, rec in zip(shapes, records):
                if geom is None:
                    w.null()
                elif shape_type == shapefile.POINT:
                    w.point(*geom)
                elif shape_type == shapefile.POLYGON:
                    w.poly(geom)
                else:
                    w.line(geom)
                w.record(*rec)

        exts = ["shp", "dbf"] + (["shx"] if shx else [])
        files = {f"{name}.{ext}": (tmp_path / f"{name}.{ext}").read_bytes() for ext in exts}
        if prj is not None:
            files[f"{name}.prj"] = prj
        return files

    return _make


@pytest.fixture
def make_zip():
    def _make(members: dict[str, bytes]) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zf:
            for name, content in members.items():
                zf.writestr(name, content)
        return buf.getvalue()

    return _make
