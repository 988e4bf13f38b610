from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ──────────────────────────────────────────────────────────────
# Normalized CAP alert
# ──────────────────────────────────────────────────────────────

class CapArea(BaseModel):
    model_config = ConfigDict(frozen=True)

    areaDesc: str = ""
    # CAP allows several <polygon> rings per area: str for one, list for many
    polygon: Union[str, List[str]] = ""
    circle: str = ""

    def polygon_list(self) -> List[str]:
        if isinstance(self.polygon, list):
            return [p for p in self.polygon if p]
        return [self.polygon] if self.polygon else []


class CapInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str = ""
    event: str = ""
    urgency: str = ""
    severity: str = ""
    certainty: str = ""
    senderName: str = ""
    headline: str = ""
    description: str = ""
    instruction: str = ""
    responseType: str = ""
    onset: str = ""
    expires: str = ""
    web: str = ""
    area: CapArea = Field(default_factory=CapArea)
    colorCode: Optional[str] = None  # "#RRGGBB"


class CapSignature(BaseModel):
    model_config = ConfigDict(frozen=True)

    issuer: str
    subject: str
    validUntil: str
    fingerprint: str


class CapAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str
    sender: str
    sent: str
    status: str = ""
    msgType: str = ""
    scope: str = ""
    info: CapInfo
    signature: Optional[CapSignature] = None


# ──────────────────────────────────────────────────────────────
# Geometry
# ──────────────────────────────────────────────────────────────

class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float]  # [lon, lat]


class PolygonGeometry(BaseModel):
    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]]  # [ring], ring = [[lon, lat], ...] closed


Geometry = Union[PointGeometry, PolygonGeometry]


class CapCircle(BaseModel):
    center: List[float]  # [lon, lat]
    radius: float        # km, CAP units


# ──────────────────────────────────────────────────────────────
# Output features
# ──────────────────────────────────────────────────────────────

class FeatureLink(BaseModel):
    uid: str
    relation: str = "r-u"
    mime: str = "text/html"
    url: str
    remarks: str = "CAP Alert Details"


class FeatureStyle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stroke: str
    stroke_opacity: float = Field(alias="stroke-opacity")
    stroke_width: int = Field(default=3, alias="stroke-width")
    stroke_style: str = Field(default="solid", alias="stroke-style")
    fill_opacity: float = Field(alias="fill-opacity")
    fill: str


class FeatureMetadata(BaseModel):
    sender: str
    sent: str
    status: str
    msgType: str
    scope: str
    category: str
    event: str
    urgency: str
    severity: str
    certainty: str
    senderName: str
    headline: str
    description: str
    instruction: str
    responseType: str
    onset: str
    expires: str
    web: str
    areaDesc: str
    isCenter: Optional[bool] = None


class FeatureProperties(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    callsign: str
    type: str
    time: str
    start: str
    stale: Optional[str] = None
    icon: Optional[str] = None
    metadata: FeatureMetadata
    remarks: str
    links: Optional[List[FeatureLink]] = None

    # Polygon fill/stroke, flattened onto the properties
    stroke: Optional[str] = None
    stroke_opacity: Optional[float] = Field(default=None, alias="stroke-opacity")
    stroke_width: Optional[int] = Field(default=None, alias="stroke-width")
    stroke_style: Optional[str] = Field(default=None, alias="stroke-style")
    fill_opacity: Optional[float] = Field(default=None, alias="fill-opacity")
    fill: Optional[str] = None

    # Point style, nested
    style: Optional[FeatureStyle] = None

    archived: bool = False


class OutputFeature(BaseModel):
    id: str
    type: Literal["Feature"] = "Feature"
    properties: FeatureProperties
    geometry: Geometry


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[OutputFeature] = Field(default_factory=list)

    def to_geojson(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
