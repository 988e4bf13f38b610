from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from capnz.core.code_tables import category_label, event_icon, event_label
from capnz.core.contracts import (
    CapAlert,
    FeatureLink,
    FeatureMetadata,
    FeatureProperties,
    FeatureStyle,
    OutputFeature,
    PointGeometry,
    PolygonGeometry,
)
from capnz.core.errors import PolygonParseError
from capnz.core.geometry import parse_cap_circle, parse_cap_polygon, polygon_centroid
from capnz.core.settings import settings
from capnz.core.time import format_local, to_iso_z

logger = logging.getLogger(__name__)


FEATURE_TYPE = "a-f-X-i"
DEFAULT_CALLSIGN = "CAP Alert"

POLYGON_STROKE_OPACITY = 0.5
POLYGON_FILL_OPACITY = 0.4
# 128/255: the TAK client's half-alpha
POINT_STYLE_OPACITY = 0.5019607843137255
STROKE_WIDTH = 3


# ──────────────────────────────────────────────────────────────
# Property builders
# ──────────────────────────────────────────────────────────────

def _timestamps(alert: CapAlert) -> Tuple[str, str, Optional[str]]:
    """(time, start, stale). Malformed dates raise ValueError."""
    time = to_iso_z(alert.sent)
    start = to_iso_z(alert.info.onset) if alert.info.onset else time
    stale = to_iso_z(alert.info.expires) if alert.info.expires else None
    return time, start, stale


def _metadata(alert: CapAlert, *, is_center: Optional[bool] = None) -> FeatureMetadata:
    info = alert.info
    return FeatureMetadata(
        sender=alert.sender,
        sent=alert.sent,
        status=alert.status,
        msgType=alert.msgType,
        scope=alert.scope,
        category=info.category,
        event=info.event,
        urgency=info.urgency,
        severity=info.severity,
        certainty=info.certainty,
        senderName=info.senderName,
        headline=info.headline,
        description=info.description,
        instruction=info.instruction,
        responseType=info.responseType,
        onset=info.onset,
        expires=info.expires,
        web=info.web,
        areaDesc=info.area.areaDesc,
        isCenter=is_center,
    )


def build_remarks(alert: CapAlert, *, tz_name: str, tz_label: str) -> str:
    info = alert.info
    lines: List[str] = [
        f"Description: {info.description}",
        f"Instruction: {info.instruction}",
        f"Category: {category_label(info.category)}",
        f"Event: {event_label(info.event)}",
        f"Urgency: {info.urgency or 'Unknown'}",
        f"Severity: {info.severity or 'Unknown'}",
        f"Certainty: {info.certainty or 'Unknown'}",
        f"Response: {info.responseType or 'Unknown'}",
    ]
    if info.onset:
        lines.append(f"Onset: {format_local(info.onset, tz_name)} {tz_label}")
    if info.expires:
        lines.append(f"Expires: {format_local(info.expires, tz_name)} {tz_label}")

    sig = alert.signature
    if sig:
        lines.extend([
            "",
            "Digital Signature",
            f"Name: {sig.subject or 'Unknown'}",
            f"Issuer: {sig.issuer or 'Unknown'}",
            f"Valid Until: {sig.validUntil or 'Unknown'}",
            f"Fingerprint: {sig.fingerprint or 'Unknown'}",
        ])

    return "\n".join(ln for ln in lines if ln.strip())


def _links(uid: str, web: str) -> Optional[List[FeatureLink]]:
    if not web:
        return None
    return [FeatureLink(uid=uid, url=web)]


def _polygon_style(color: Optional[str]) -> Dict[str, object]:
    if not color:
        return {}
    return {
        "stroke": color,
        "stroke_opacity": POLYGON_STROKE_OPACITY,
        "stroke_width": STROKE_WIDTH,
        "stroke_style": "solid",
        "fill_opacity": POLYGON_FILL_OPACITY,
        "fill": color,
    }


def _point_style(color: Optional[str]) -> Optional[FeatureStyle]:
    if not color:
        return None
    return FeatureStyle(
        stroke=color,
        stroke_opacity=POINT_STYLE_OPACITY,
        stroke_width=STROKE_WIDTH,
        stroke_style="solid",
        fill_opacity=POINT_STYLE_OPACITY,
        fill=color,
    )


# ──────────────────────────────────────────────────────────────
# Assembly
# ──────────────────────────────────────────────────────────────

def assemble_features(
    alert: CapAlert,
    *,
    tz_name: Optional[str] = None,
    tz_label: Optional[str] = None,
    fallback: Optional[List[float]] = None,
) -> List[OutputFeature]:
    """
    One CAP alert → map features.

    polygon(s): a Polygon per ring plus a "-center" Point carrying the icon;
                the circle is ignored for such alerts.
    circle:     a Point at the circle center (radius is not drawn).
    neither:    a Point at the home-region fallback.

    Raises PolygonParseError if any ring is invalid (no partial output for
    the alert) and ValueError for malformed sent/onset/expires.
    """
    tz_name = tz_name or settings.local_timezone
    tz_label = tz_label or settings.local_timezone_label
    if fallback is None:
        fallback = [settings.fallback_lon, settings.fallback_lat]

    info = alert.info
    time, start, stale = _timestamps(alert)
    remarks = build_remarks(alert, tz_name=tz_name, tz_label=tz_label)
    callsign = info.headline or DEFAULT_CALLSIGN
    icon = event_icon(info.event, info.category)

    polygons = info.area.polygon_list()
    if polygons:
        logger.info("capnz_polygons alert=%s count=%d", alert.identifier, len(polygons))

        rings = []
        for i, poly in enumerate(polygons):
            try:
                rings.append(parse_cap_polygon(poly))
            except PolygonParseError as e:
                raise PolygonParseError(f"polygon {i + 1}/{len(polygons)}: {e}") from e

        out: List[OutputFeature] = []
        for i, coordinates in enumerate(rings):
            polygon_id = f"{alert.identifier}-{i}" if len(rings) > 1 else alert.identifier
            center_id = f"{polygon_id}-center"

            out.append(
                OutputFeature(
                    id=polygon_id,
                    properties=FeatureProperties(
                        callsign=callsign,
                        type=FEATURE_TYPE,
                        time=time,
                        start=start,
                        stale=stale,
                        metadata=_metadata(alert),
                        remarks=remarks,
                        links=_links(polygon_id, info.web),
                        **_polygon_style(info.colorCode),
                    ),
                    geometry=PolygonGeometry(coordinates=coordinates),
                )
            )

            centroid = polygon_centroid(coordinates)
            logger.debug("capnz_center id=%s at=%s", center_id, centroid)
            out.append(
                OutputFeature(
                    id=center_id,
                    properties=FeatureProperties(
                        callsign=callsign,
                        type=FEATURE_TYPE,
                        time=time,
                        start=start,
                        stale=stale,
                        icon=icon,
                        metadata=_metadata(alert, is_center=True),
                        remarks=remarks,
                        links=_links(center_id, info.web),
                    ),
                    geometry=PointGeometry(coordinates=centroid),
                )
            )
        return out

    circle = parse_cap_circle(info.area.circle) if info.area.circle else None
    coordinates = list(circle.center) if circle else list(fallback)

    return [
        OutputFeature(
            id=alert.identifier,
            properties=FeatureProperties(
                callsign=callsign,
                type=FEATURE_TYPE,
                time=time,
                start=start,
                stale=stale,
                icon=icon,
                metadata=_metadata(alert),
                remarks=remarks,
                links=_links(alert.identifier, info.web),
                style=_point_style(info.colorCode),
            ),
            geometry=PointGeometry(coordinates=coordinates),
        )
    ]
