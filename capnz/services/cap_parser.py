from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional

from capnz.core.contracts import CapAlert, CapArea, CapInfo, CapSignature
from capnz.services.signature import extract_signature

logger = logging.getLogger(__name__)


COLOUR_CODES: Dict[str, str] = {
    "Red": "#FF0000",
    "Orange": "#FF8918",
    "Yellow": "#FFFF00",
    "Green": "#00FF00",
    "Blue": "#0000FF",
}


# ══════════════════════════════════════════════════════════════
# XML helpers (namespace-agnostic: CAP 1.2 feeds mix default and ds: prefixes)
# ══════════════════════════════════════════════════════════════

def _localname(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _children(el: ET.Element, name: str) -> List[ET.Element]:
    return [ch for ch in el if _localname(ch.tag) == name]


def _child(el: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if el is None:
        return None
    for ch in el:
        if _localname(ch.tag) == name:
            return ch
    return None


def _text(el: Optional[ET.Element], name: str) -> str:
    ch = _child(el, name)
    if ch is None:
        return ""
    return (ch.text or "").strip()


def _path(el: Optional[ET.Element], *names: str) -> Optional[ET.Element]:
    for name in names:
        el = _child(el, name)
    return el


# ══════════════════════════════════════════════════════════════
# Field extraction
# ══════════════════════════════════════════════════════════════

def _color_code(info: ET.Element) -> Optional[str]:
    """ColourCodeHex wins; otherwise map a named ColourCode."""
    params = [(_text(p, "valueName"), _text(p, "value")) for p in _children(info, "parameter")]

    for name, value in params:
        if name == "ColourCodeHex":
            return value
    for name, value in params:
        if name == "ColourCode":
            return COLOUR_CODES.get(value)
    return None


def _area(info: ET.Element) -> CapArea:
    areas = _children(info, "area")
    descs = [d for d in (_text(a, "areaDesc") for a in areas) if d]

    polygons: List[str] = []
    circle = ""
    for a in areas:
        for p in _children(a, "polygon"):
            txt = (p.text or "").strip()
            if txt:
                polygons.append(txt)
        if not circle:
            circle = _text(a, "circle")

    return CapArea(
        areaDesc="; ".join(descs),
        polygon=polygons[0] if len(polygons) == 1 else (polygons or ""),
        circle=circle,
    )


def _signature(alert: ET.Element) -> Optional[CapSignature]:
    cert = _path(alert, "Signature", "KeyInfo", "X509Data", "X509Certificate")
    raw = (cert.text or "").strip() if cert is not None else ""
    if not raw:
        return None
    return extract_signature(raw)


# ══════════════════════════════════════════════════════════════
# CAP document → CapAlert
# ══════════════════════════════════════════════════════════════

def parse_cap_alert(xml_text: str) -> Optional[CapAlert]:
    """
    Parse one CAP document.

    Returns None (no error) when the document is not a usable alert: not
    XML, no <alert> root, no <info>, or an empty identifier/sender/sent.
    Only the first <info> block is used.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        logger.warning("capnz_cap_xml_invalid err=%s", e)
        return None

    if _localname(root.tag) != "alert":
        logger.info("capnz_cap_no_alert_element root=%s", _localname(root.tag))
        return None
    alert = root

    identifier = _text(alert, "identifier")
    sender = _text(alert, "sender")
    sent = _text(alert, "sent")

    info = _child(alert, "info")
    if info is None:
        return None
    if not identifier or not sender or not sent:
        return None

    return CapAlert(
        identifier=identifier,
        sender=sender,
        sent=sent,
        status=_text(alert, "status"),
        msgType=_text(alert, "msgType"),
        scope=_text(alert, "scope"),
        info=CapInfo(
            category=_text(info, "category"),
            event=_text(info, "event"),
            urgency=_text(info, "urgency"),
            severity=_text(info, "severity"),
            certainty=_text(info, "certainty"),
            senderName=_text(info, "senderName"),
            headline=_text(info, "headline"),
            description=_text(info, "description"),
            instruction=_text(info, "instruction"),
            responseType=_text(info, "responseType"),
            onset=_text(info, "onset"),
            expires=_text(info, "expires"),
            web=_text(info, "web"),
            area=_area(info),
            colorCode=_color_code(info),
        ),
        signature=_signature(alert),
    )
