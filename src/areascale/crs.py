"""
crs.py

Human-readable description of the coordinate system found in a shapefile's
`.prj` text. Purely informational: the area core always measures in the
fixed Web-Mercator projection regardless of what is reported here.

Public functions:
- `parse_prj(prj_text)` -> `CrsInfo`
- `guess_epsg(prj_text)` -> label string or None
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional

from pyproj import CRS
from pyproj.exceptions import CRSError

logger = logging.getLogger(__name__)

_UTM_RE = re.compile(r"UTM[\s_]*zone[\s_]*(\d{1,2})([NS])?", re.IGNORECASE)


@dataclass(frozen=True)
class CrsInfo:
    crs_type: str = "Unknown"          # "Projected" | "Geographic" | "Unknown"
    projection_name: Optional[str] = None
    datum_name: Optional[str] = None
    unit_name: Optional[str] = None


def _crs_type_from_text(prj_text: str) -> str:
    raw = prj_text.strip().upper()
    if raw.startswith("PROJCS["):
        return "Projected"
    if raw.startswith("GEOGCS["):
        return "Geographic"
    return "Unknown"


def parse_prj(prj_text: Optional[str]) -> CrsInfo:
    """Describe the CRS in `prj_text` (WKT1 / ESRI WKT)."""
    if not prj_text or not prj_text.strip():
        return CrsInfo()

    crs_type = _crs_type_from_text(prj_text)
    try:
        crs = CRS.from_wkt(prj_text)
    except CRSError as exc:
        logger.debug("could not parse .prj WKT: %s", exc)
        return CrsInfo(crs_type=crs_type)

    # PROJCS/GEOGCS name first, projection method only when unnamed
    projection_name = crs.name
    if not projection_name and crs.coordinate_operation is not None:
        projection_name = crs.coordinate_operation.method_name
    datum_name = crs.datum.name if crs.datum is not None else None
    unit_name = crs.axis_info[0].unit_name if crs.axis_info else None
    return CrsInfo(
        crs_type=crs_type,
        projection_name=projection_name,
        datum_name=datum_name,
        unit_name=unit_name,
    )


def guess_epsg(prj_text: Optional[str]) -> Optional[str]:
    """Best-effort EPSG label from keywords in the `.prj` text."""
    if not prj_text:
        return None
    t = prj_text.lower()

    if "geogcs" in t and ("wgs_1984" in t or "wgs 84" in t) and "projcs" not in t:
        return "EPSG:4326 (WGS 84)"
    if "web_mercator" in t or "pseudo-mercator" in t or "popular visualisation pseudo-mercator" in t:
        return "EPSG:3857 (Web Mercator)"

    m = _UTM_RE.search(prj_text)
    if m:
        zone = int(m.group(1))
        hemi = (m.group(2) or "").upper()
        if 1 <= zone <= 60:
            if hemi == "S":
                return f"EPSG:327{zone:02d} (WGS 84 / UTM zone {zone}S)"
            if hemi == "N":
                return f"EPSG:326{zone:02d} (WGS 84 / UTM zone {zone}N)"
            return f"UTM zone {zone} (hemisphere unknown)"
    return "Unknown (could not reliably infer EPSG from .prj)"
