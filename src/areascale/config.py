# -*- coding: utf-8 -*-

"""
areascale/config.py

Central place for the constants shared by the area, scaling and I/O modules.

Contents:
---------
1. PROJECTION:
   - `ProjectionConfig` describes the single planar projection used for every
     "OSS" area measurement: a spherical Mercator on one reference radius
     (the EPSG:3857 / Web-Mercator sphere).
   - `WEB_MERCATOR` is the one instance the package builds its default
     `Projector` from. It is frozen; pass a different config to `Projector`
     instead of editing this one.

2. MATCHING DEFAULTS:
   - Display precision (decimal places) and the iteration cap used by
     `areascale.matcher.match_area`.

3. OUTPUT / GEODESY:
   - WKT written next to exported shapefiles and the ellipsoid used for the
     geodesic statistics.

Usage:
------
    from areascale.config import WEB_MERCATOR, DEFAULT_DECIMALS
"""
from dataclasses import dataclass

# ───────────────────────────────────────────────────────────────────────────────
# 1) PROJECTION
# ───────────────────────────────────────────────────────────────────────────────
GEOGRAPHIC_CRS = "EPSG:4326"


@dataclass(frozen=True)
class ProjectionConfig:
    """Spherical Mercator parameters (metres, degrees)."""

    name: str
    radius: float = 6378137.0           # reference sphere radius (m)
    max_latitude: float = 85.0511287798  # |lat| beyond this leaves the square map

    @property
    def definition(self) -> str:
        """PROJ string of the planar CRS."""
        r = repr(float(self.radius))
        return (
            f"+proj=merc +a={r} +b={r} +lat_ts=0 +lon_0=0 "
            "+x_0=0 +y_0=0 +k=1 +units=m +no_defs +type=crs"
        )

    @property
    def geographic_definition(self) -> str:
        """PROJ string of lon/lat on the same sphere as `definition`."""
        r = repr(float(self.radius))
        return f"+proj=longlat +a={r} +b={r} +no_defs +type=crs"


WEB_MERCATOR = ProjectionConfig(name="EPSG:3857 (Web Mercator)")

# ───────────────────────────────────────────────────────────────────────────────
# 2) MATCHING DEFAULTS
# ───────────────────────────────────────────────────────────────────────────────
DEFAULT_DECIMALS = 2     # rounding precision of the area comparison
DEFAULT_MAX_ITER = 10    # measure/scale rounds before giving up

# ───────────────────────────────────────────────────────────────────────────────
# 3) OUTPUT / GEODESY
# ───────────────────────────────────────────────────────────────────────────────
GEODESIC_ELLIPSOID = "WGS84"

WGS84_PRJ_WKT = (
    'GEOGCS["WGS 84",DATUM["WGS_1984",'
    'SPHEROID["WGS 84",6378137,298.257223563]],'
    'PRIMEM["Greenwich",0],UNIT["degree",0.0174532925199433]]'
)
