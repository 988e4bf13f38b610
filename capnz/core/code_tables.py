# capnz/core/code_tables.py
"""
CAP category/event lookup tables.

Labels follow the CAP 1.2 category list and the CAP-NZ event code list.
Icons are paths inside the TAK public iconset, referenced by iconset UID.
"""
from __future__ import annotations

from typing import Dict, Optional


CATEGORY_LABELS: Dict[str, str] = {
    "Geo": "Geophysical (including landslide)",
    "Met": "Meteorological (including flood)",
    "Safety": "General emergency and public safety",
    "Security": "Law enforcement, military, homeland and local/private security",
    "Rescue": "Rescue and recovery",
    "Fire": "Fire suppression and rescue",
    "Health": "Medical and public health",
    "Env": "Pollution and other environmental hazards",
    "Transport": "Public and private transportation",
    "Infra": "Utility, telecommunication, other non-transport infrastructure",
    "CBRNE": "Chemical, Biological, Radiological, Nuclear or High-Yield Explosive threat or attack",
    "Other": "Other events",
}

EVENT_LABELS: Dict[str, str] = {
    "storm": "Storm",
    "hail": "Hail",
    "rainfall": "Rainfall",
    "snowfall": "Snowfall",
    "thunderstorm": "Thunderstorm",
    "tornado": "Tornado",
    "tropCyclone": "Tropical Cyclone",
    "tropStorm": "Tropical Storm",
    "winterStorm": "Winter Storm",
    "weather": "Weather",
    "temperature": "Temperature",
    "coldOutbreak": "Cold Outbreak",
    "heatWave": "Heat Wave",
    "frost": "Frost",
    "windChill": "Wind Chill",
    "wind": "Wind",
    "avLightning": "Airport Lightning Threat",
    "avThunder": "Airport Thunder Threat",
    "fireWeather": "Fire Weather",
    "flood": "Flood",
    "flashFlood": "Flash Flood",
    "highWater": "High Water Level",
    "stormSurge": "Storm Surge",
    "riverFlood": "River Flood",
    "earthquake": "Earthquake",
    "tsunami": "Tsunami",
    "landTsunami": "Land Threat Tsunami",
    "beachTsunami": "Beach Threat Tsunami",
    "marine": "Marine",
    "galeWind": "Gale Wind",
    "hurricFrcWnd": "Hurricane Force Wind",
    "iceberg": "Iceberg",
    "largeSurf": "Large Coastal Surf",
    "largeSwell": "Large Swell Waves",
    "squall": "Squall",
    "stormFrcWind": "Storm Force Wind",
    "strongWind": "Strong Wind",
    "waterspout": "Waterspout",
    "snow": "Snow",
}

ICONSET_UID = "bb4df0a6-ca8d-4ba8-bb9e-3deb97ff015e"

HEALTH_ICON = "Incidents/INC.60.GHS08.HealthHazard.png"
FIRE_ICON = "Incidents/INC.35.Fire.png"
DEFAULT_ICON = "Incidents/INC.38.NaturalDisaster3.InformationOnly.png"

_SNOW = "NaturalHazards/NH.07.Snow.png"
_RAIN = "NaturalHazards/NH.05.HeavyRain.png"
_WIND = "NaturalHazards/NH.04.StrongWind.png"
_ELECTRICAL = "NaturalHazards/NH.06.ElectricalStorm.png"
_TORNADO = "NaturalHazards/NH.16.Tornado.png"
_CYCLONE = "NaturalHazards/NH.09.TropicalCyclone.png"
_FLOOD = "NaturalHazards/NH.01.Flood.png"
_TSUNAMI = "NaturalHazards/NH.03.Tsunami.png"
_ICE = "NaturalHazards/NH.08.Ice.png"
_MARINE = "Incidents/INC.24.Marine.png"
_URGENT = "Incidents/INC.38.NaturalDisaster1.Urgent.png"

EVENT_ICONS: Dict[str, str] = {
    "snow": _SNOW,
    "snowfall": _SNOW,
    "winterStorm": _SNOW,
    "rain": _RAIN,
    "rainfall": _RAIN,
    "wind": _WIND,
    "galeWind": _WIND,
    "hurricFrcWnd": _WIND,
    "squall": _WIND,
    "stormFrcWind": _WIND,
    "strongWind": _WIND,
    "storm": _ELECTRICAL,
    "thunderstorm": _ELECTRICAL,
    "hail": _ELECTRICAL,
    "avLightning": _ELECTRICAL,
    "avThunder": _ELECTRICAL,
    "tornado": _TORNADO,
    "waterspout": _TORNADO,
    "tropCyclone": _CYCLONE,
    "tropStorm": _CYCLONE,
    "flood": _FLOOD,
    "flashFlood": _FLOOD,
    "highWater": _FLOOD,
    "riverFlood": _FLOOD,
    "earthquake": "NaturalHazards/NH.24.Earthquake.png",
    "tsunami": _TSUNAMI,
    "landTsunami": _TSUNAMI,
    "beachTsunami": _TSUNAMI,
    "marine": _MARINE,
    "iceberg": _MARINE,
    "largeSurf": _MARINE,
    "largeSwell": _MARINE,
    "fire": FIRE_ICON,
    "fireWeather": "Incidents/INC.37.Fire.Vegetation.png",
    "landslide": "NaturalHazards/NH.18.Landslide.png",
    "stormSurge": "NaturalHazards/NH.02.StormSurge.png",
    "ice": _ICE,
    "coldOutbreak": _ICE,
    "frost": _ICE,
    "windChill": _ICE,
    "drought": "NaturalHazards/NH.22.Drought.png",
    "biosecurity": "NaturalHazards/NH.23.Biosecurity.png",
    "weather": _URGENT,
    "temperature": _URGENT,
    "heatWave": _URGENT,
}


def category_label(code: str) -> str:
    """
    >>> category_label("Met")
    'Meteorological (including flood)'
    >>> category_label("")
    'Unknown'
    """
    return CATEGORY_LABELS.get(code) or code or "Unknown"


def event_label(code: str) -> str:
    return EVENT_LABELS.get(code) or code or "Unknown"


def icon_ref(path: str) -> str:
    return f"{ICONSET_UID}:{path}"


def event_icon(event: str, category: Optional[str] = None) -> str:
    """Iconset reference for an alert; category wins for Health and Fire."""
    if category == "Health":
        return icon_ref(HEALTH_ICON)
    if category == "Fire":
        return icon_ref(FIRE_ICON)
    return icon_ref(EVENT_ICONS.get(event) or DEFAULT_ICON)
