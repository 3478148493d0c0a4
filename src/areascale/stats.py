"""
stats.py

Inspection statistics for a loaded collection: attribute summary, lon/lat
extent, geodesic (WGS84 ellipsoid) size/area/perimeter and the planar OSS
area and extent used by the scaler.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import shapely
from pyproj import Geod
from shapely.geometry.polygon import orient

from areascale.area import geometry_area
from areascale.bounds import compute_bounds
from areascale.config import GEODESIC_ELLIPSOID
from areascale.crs import guess_epsg, parse_prj
from areascale.features import FeatureCollection, is_polygonal
from areascale.projection import Projector, default_projector

logger = logging.getLogger(__name__)


@dataclass
class InspectResult:
    file_name: str
    prj_text: Optional[str]
    crs_type: str
    projection_name: Optional[str]
    datum_name: Optional[str]
    unit_name: Optional[str]
    epsg_guess: Optional[str]

    feature_count: int
    geometry_types: List[str]
    field_names: List[str]

    bbox: Tuple[float, float, float, float]   # lon/lat
    width_degrees: float
    height_degrees: float
    width_meters: float                        # geodesic, across bbox mid-lines
    height_meters: float

    oss_width_meters: float
    oss_height_meters: float

    total_area_sqm: float                      # geodesic (ellipsoid)
    total_area_oss_sqm: float                  # planar EPSG:3857
    total_perimeter_m: float

    vertex_count: int = 0
    collection: Optional[FeatureCollection] = field(default=None, repr=False)


def _lonlat_bbox(collection: FeatureCollection) -> Tuple[float, float, float, float]:
    geoms = [g for g in collection.geometries if g is not None and not g.is_empty]
    if not geoms:
        return (0.0, 0.0, 0.0, 0.0)
    minx, miny, maxx, maxy = shapely.total_bounds(geoms)
    return (float(minx), float(miny), float(maxx), float(maxy))


def _geodesic_area_perimeter(geod: Geod, geometry) -> Tuple[float, float]:
    # Geod returns signed areas; orient each part so a clockwise part does
    # not cancel a counter-clockwise one
    parts = getattr(geometry, "geoms", [geometry])
    area = 0.0
    perimeter = 0.0
    for part in parts:
        a, p = geod.geometry_area_perimeter(orient(part, sign=1.0))
        area += max(0.0, a)
        perimeter += p
    return area, perimeter


def build_stats(
    file_name: str,
    collection: FeatureCollection,
    prj_text: Optional[str] = None,
    projector: Optional[Projector] = None,
) -> InspectResult:
    """Summarise `collection` for display."""
    projector = projector or default_projector()
    geod = Geod(ellps=GEODESIC_ELLIPSOID)
    crs = parse_prj(prj_text)

    geometry_types: List[str] = []
    field_set = set()
    for f in collection:
        if f.geometry is not None and f.geometry.geom_type not in geometry_types:
            geometry_types.append(f.geometry.geom_type)
        field_set.update(f.properties.keys())

    minx, miny, maxx, maxy = _lonlat_bbox(collection)
    mid_x = (minx + maxx) / 2.0
    mid_y = (miny + maxy) / 2.0
    _, _, width_m = geod.inv(minx, mid_y, maxx, mid_y)
    _, _, height_m = geod.inv(mid_x, miny, mid_x, maxy)

    total_area = 0.0
    total_area_oss = 0.0
    total_perimeter = 0.0
    vertex_count = 0
    for idx, f in enumerate(collection):
        g = f.geometry
        if not is_polygonal(g):
            continue
        vertex_count += int(shapely.get_num_coordinates(g))
        total_area_oss += geometry_area(g, projector)
        try:
            area, perimeter = _geodesic_area_perimeter(geod, g)
        except (ValueError, TypeError) as exc:
            logger.warning("feature %d: geodesic measurement failed: %s", idx, exc)
            continue
        total_area += area
        total_perimeter += perimeter

    oss = compute_bounds(collection, projector)

    return InspectResult(
        file_name=file_name,
        prj_text=prj_text,
        crs_type=crs.crs_type,
        projection_name=crs.projection_name,
        datum_name=crs.datum_name,
        unit_name=crs.unit_name,
        epsg_guess=guess_epsg(prj_text),
        feature_count=len(collection),
        geometry_types=geometry_types,
        field_names=sorted(field_set, key=str),
        bbox=(minx, miny, maxx, maxy),
        width_degrees=maxx - minx,
        height_degrees=maxy - miny,
        width_meters=float(abs(width_m)),
        height_meters=float(abs(height_m)),
        oss_width_meters=oss.width,
        oss_height_meters=oss.height,
        total_area_sqm=float(total_area),
        total_area_oss_sqm=float(total_area_oss),
        total_perimeter_m=float(total_perimeter),
        vertex_count=vertex_count,
        collection=collection,
    )


def format_report(result: InspectResult, digits: int = 2) -> str:
    """Plain-text report, one `label: value` per line."""

    def fmt(v) -> str:
        if v is None:
            return "-"
        if isinstance(v, float):
            return f"{v:,.{digits}f}" if np.isfinite(v) else "-"
        return str(v)

    rows = [
        ("File", result.file_name),
        ("CRS type", result.crs_type),
        ("Projection", result.projection_name),
        ("Datum", result.datum_name),
        ("Unit", result.unit_name),
        ("EPSG guess", result.epsg_guess),
        ("Features", result.feature_count),
        ("Geometry types", ", ".join(result.geometry_types) or "-"),
        ("Fields", ", ".join(map(str, result.field_names)) or "-"),
        ("Vertices", result.vertex_count),
        ("BBox (lon/lat)", ", ".join(f"{v:.6f}" for v in result.bbox)),
        ("Width (m)", result.width_meters),
        ("Height (m)", result.height_meters),
        ("Area (m², geodesic)", result.total_area_sqm),
        ("Perimeter (m)", result.total_perimeter_m),
        ("OSS area (m², EPSG:3857)", result.total_area_oss_sqm),
        ("OSS width (m)", result.oss_width_meters),
        ("OSS height (m)", result.oss_height_meters),
    ]
    return "\n".join(f"{label}: {fmt(value)}" for label, value in rows)
