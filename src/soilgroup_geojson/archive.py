"""Archive retrieval, extraction, and grouping of shapefile components.

The LDD server publishes RAR archives. ZIP archives are accepted as well
since they are the more common way shapefiles are shipped elsewhere.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path, PurePosixPath

import httpx
import rarfile

from .errors import ExtractionError, FetchError
from .models import ShapefileComponents

logger = logging.getLogger(__name__)

COMPONENT_EXTS = {".shp", ".shx", ".dbf", ".prj", ".cpg"}


def fetch_archive(
    source: str,
    *,
    client: httpx.Client | None = None,
    timeout: float | None = None,
) -> bytes:
    """Return the archive bytes for an HTTP(S) URL or a local file path."""
    if not source.startswith(("http://", "https://")):
        try:
            return Path(source).read_bytes()
        except OSError as exc:
            raise FetchError(f"Cannot read {source}: {exc}") from exc

    logger.info("downloading: %s", source)
    try:
        if client is None:
            response = httpx.get(source, follow_redirects=True, timeout=timeout)
        else:
            response = client.get(source, follow_redirects=True, timeout=timeout)
    except httpx.HTTPError as exc:
        raise FetchError(f"Request to {source} failed: {exc}") from exc

    if not response.is_success:
        raise FetchError(f"HTTP error! status: {response.status_code}", status_code=response.status_code)
    return response.content


def extract_members(data: bytes) -> list[tuple[str, bytes]]:
    """Decompress an archive into ``(member name, bytes)`` pairs, in archive order."""
    try:
        if _is_zip(data):
            return _extract_zip(data)
        return _extract_rar(data)
    except (rarfile.Error, zipfile.BadZipFile, OSError, EOFError) as exc:
        raise ExtractionError(f"Cannot extract archive: {exc}") from exc


def group_components(members: list[tuple[str, bytes]]) -> dict[str, ShapefileComponents]:
    """Group shapefile component members by base filename.

    Directories inside the archive are ignored, so ``a/x.shp`` and ``b/x.dbf``
    land in the same set ``x``.
    """
    groups: dict[str, ShapefileComponents] = {}
    for name, content in members:
        filename = PurePosixPath(name.replace("\\", "/")).name
        suffix = PurePosixPath(filename).suffix
        ext = suffix.lower()
        if ext not in COMPONENT_EXTS:
            continue
        base = filename[: -len(suffix)]
        components = groups.setdefault(base, ShapefileComponents())
        setattr(components, ext[1:], content)
    return groups


def _is_zip(data: bytes) -> bool:
    return data[:4] == b"PK\x03\x04"


def _extract_zip(data: bytes) -> list[tuple[str, bytes]]:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return [(info.filename, zf.read(info)) for info in zf.infolist() if not info.is_dir()]


def _extract_rar(data: bytes) -> list[tuple[str, bytes]]:
    with rarfile.RarFile(io.BytesIO(data)) as rf:
        return [(info.filename, rf.read(info)) for info in rf.infolist() if not info.is_dir()]
