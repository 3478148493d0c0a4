"""
io.py

Reading and writing feature collections.

Public functions:
- `read_shapefile_zip(path)` -> (FeatureCollection, prj_text)
- `read_geojson(path)` / `write_geojson(collection, path)`
- `write_shapefile_zip(collection, path, base_name=None)`
- `load_collection(path)` -> (FeatureCollection, prj_text) by file suffix

Everything read is returned in lon/lat (EPSG:4326); everything written is
declared as WGS 84.
"""
import json
import logging
import tempfile
import zipfile
from pathlib import Path
from typing import Optional, Tuple

import geopandas as gpd

from areascale.config import GEOGRAPHIC_CRS, WGS84_PRJ_WKT
from areascale.features import FeatureCollection, is_polygonal

logger = logging.getLogger(__name__)

_SHAPEFILE_PARTS = (".shp", ".shx", ".dbf", ".prj", ".cpg")


def extract_prj_text(zip_path) -> Optional[str]:
    """Return the text of the first `.prj` member of a zip, if any."""
    with zipfile.ZipFile(zip_path) as zf:
        for name in zf.namelist():
            if name.lower().endswith(".prj"):
                return zf.read(name).decode("utf-8", errors="replace")
    return None


def read_shapefile_zip(zip_path) -> Tuple[FeatureCollection, Optional[str]]:
    """Read the first shapefile inside `zip_path`.

    Raises ValueError when the archive holds no shapefile or no features.
    """
    zip_path = Path(zip_path)
    prj_text = extract_prj_text(zip_path)
    with tempfile.TemporaryDirectory() as tmp:
        with zipfile.ZipFile(zip_path) as zf:
            zf.extractall(tmp)
        shp_files = sorted(p for p in Path(tmp).rglob("*") if p.suffix.lower() == ".shp")
        if not shp_files:
            raise ValueError(f"Failed to read shapefile: no .shp found in {zip_path.name}")
        if len(shp_files) > 1:
            logger.warning("%s holds %d shapefiles; reading %s", zip_path.name, len(shp_files), shp_files[0].name)
        gdf = gpd.read_file(shp_files[0])

    if gdf.empty:
        raise ValueError("No features found in shapefile.")
    if gdf.crs is not None and not gdf.crs.equals(GEOGRAPHIC_CRS, ignore_axis_order=True):
        logger.info("reprojecting %s from %s to %s", zip_path.name, gdf.crs.to_string(), GEOGRAPHIC_CRS)
        gdf = gdf.to_crs(GEOGRAPHIC_CRS)

    collection = FeatureCollection.from_geodataframe(gdf)
    logger.info("read %d features from %s", len(collection), zip_path.name)
    return collection, prj_text


def read_geojson(path) -> FeatureCollection:
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    collection = FeatureCollection.from_geojson(data)
    if not len(collection):
        raise ValueError(f"No features found in {path.name}.")
    logger.info("read %d features from %s", len(collection), path.name)
    return collection


def write_geojson(collection: FeatureCollection, path) -> Path:
    path = Path(path)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(collection.to_geojson(), fh, default=str, allow_nan=False)
    logger.info("wrote %d features to %s", len(collection), path)
    return path


def write_shapefile_zip(collection: FeatureCollection, path, base_name: Optional[str] = None) -> Path:
    """Write the polygonal features as a zipped WGS 84 shapefile."""
    path = Path(path)
    base_name = base_name or path.stem
    polys = FeatureCollection.from_features(f for f in collection if is_polygonal(f.geometry))
    skipped = len(collection) - len(polys)
    if skipped:
        logger.warning("skipping %d non-polygon features in shapefile export", skipped)
    if not len(polys):
        raise ValueError("Nothing to export: collection has no Polygon/MultiPolygon features.")

    gdf = polys.to_geodataframe()
    with tempfile.TemporaryDirectory() as tmp:
        shp_path = Path(tmp) / f"{base_name}.shp"
        gdf.to_file(shp_path, driver="ESRI Shapefile")
        # declare plain WGS 84 regardless of what the driver wrote
        shp_path.with_suffix(".prj").write_text(WGS84_PRJ_WKT, encoding="utf-8")
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for part in sorted(Path(tmp).iterdir()):
                if part.suffix.lower() in _SHAPEFILE_PARTS:
                    zf.write(part, arcname=part.name)
    logger.info("wrote %d features to %s", len(polys), path)
    return path


def load_collection(path) -> Tuple[FeatureCollection, Optional[str]]:
    """Read a `.zip` shapefile or a `.geojson`/`.json` file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".zip":
        return read_shapefile_zip(path)
    if suffix in (".geojson", ".json"):
        return read_geojson(path), None
    raise ValueError(f"Unsupported input format: {path.name} (expected .zip, .geojson or .json)")


def save_collection(collection: FeatureCollection, path) -> Path:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".zip":
        return write_shapefile_zip(collection, path)
    if suffix in (".geojson", ".json"):
        return write_geojson(collection, path)
    raise ValueError(f"Unsupported output format: {path.name} (expected .zip, .geojson or .json)")
