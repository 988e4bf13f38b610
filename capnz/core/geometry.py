from __future__ import annotations

import math
from typing import Any, List, Optional

from capnz.core.contracts import CapCircle
from capnz.core.errors import PolygonParseError


def _safe_float(x: Any) -> Optional[float]:
    try:
        f = float(x)
        if math.isfinite(f):
            return f
    except Exception:
        return None
    return None


def _in_range(lat: float, lon: float) -> bool:
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def parse_cap_polygon(polygon_str: str) -> List[List[List[float]]]:
    """
    CAP polygon "lat,lon lat,lon ..." → GeoJSON Polygon coordinates [[[lon,lat], ...]].

    Strict: a single bad pair fails the whole ring rather than being dropped.
    The ring is closed if the source did not repeat its first vertex.
    """
    if not isinstance(polygon_str, str) or not polygon_str.strip():
        raise PolygonParseError("Empty or invalid polygon string")

    points: List[List[float]] = []
    invalid: List[str] = []

    for pair in polygon_str.split():
        parts = pair.split(",")
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
            invalid.append(pair)
            continue

        lat = _safe_float(parts[0])
        lon = _safe_float(parts[1])
        if lat is None or lon is None or not _in_range(lat, lon):
            invalid.append(pair)
            continue

        points.append([lon, lat])

    if invalid:
        more = "..." if len(invalid) > 3 else ""
        raise PolygonParseError(f"Invalid coordinate pairs: {', '.join(invalid[:3])}{more}")

    if len(points) < 3:
        raise PolygonParseError(f"Insufficient valid points: {len(points)} (minimum 3 required)")

    if points[0] != points[-1]:
        points.append(list(points[0]))

    return [points]


def parse_cap_circle(circle_str: str) -> Optional[CapCircle]:
    """
    CAP circle "lat,lon radius" → center [lon, lat] + radius (km).

    Returns None for anything unusable; a bad circle is not an error.
    """
    if not isinstance(circle_str, str):
        return None

    bits = circle_str.split()
    if len(bits) < 2:
        return None

    coords = bits[0].split(",")
    if len(coords) < 2 or not coords[0] or not coords[1]:
        return None

    lat = _safe_float(coords[0])
    lon = _safe_float(coords[1])
    radius = _safe_float(bits[1])
    if lat is None or lon is None or radius is None:
        return None
    if not _in_range(lat, lon) or radius <= 0:
        return None

    return CapCircle(center=[lon, lat], radius=radius)


def polygon_centroid(coordinates: List[List[List[float]]]) -> List[float]:
    """
    Area centroid of the outer ring (shoelace), [lon, lat].

    Degenerate rings (|area| < 1e-10) fall back to
    the vertex average.
    """
    points = coordinates[0]
    if len(points) < 3:
        return [0.0, 0.0]

    area = 0.0
    cx = 0.0
    cy = 0.0
    for i in range(len(points) - 1):
        x0, y0 = points[i][0], points[i][1]
        x1, y1 = points[i + 1][0], points[i + 1][1]
        a = x0 * y1 - x1 * y0
        area += a
        cx += (x0 + x1) * a
        cy += (y0 + y1) * a

    area *= 0.5
    if abs(area) < 1e-10:
        n = len(points)
        return [sum(p[0] for p in points) / n, sum(p[1] for p in points) / n]

    return [cx / (6.0 * area), cy / (6.0 * area)]
