from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from capnz.core.contracts import FeatureCollection
from capnz.core.errors import FeedFetchError, PolygonParseError, bad_request, service_unavailable
from capnz.services.capnz import CapNz

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/capnz")


def get_capnz_service() -> CapNz:
    return CapNz()


class CapParseRequest(BaseModel):
    xml: str


@router.get("/features")
async def capnz_features(svc: CapNz = Depends(get_capnz_service)) -> dict:
    try:
        run = await svc.poll()
    except FeedFetchError as e:
        logger.error("capnz_feed_unavailable err=%s", e)
        service_unavailable("capnz_feed_unavailable", str(e))
    return run.collection.to_geojson()


@router.post("/parse")
def capnz_parse(req: CapParseRequest, svc: CapNz = Depends(get_capnz_service)) -> dict:
    if not req.xml.strip():
        bad_request("bad_cap_request", "xml is required")
    try:
        features = svc.features_for_document(req.xml)
    except PolygonParseError as e:
        bad_request("invalid_polygon", str(e))
    except ValueError as e:
        bad_request("invalid_cap_alert", str(e))
    if not features:
        bad_request("invalid_cap_alert", "document is not a usable CAP alert")
    return FeatureCollection(features=features).to_geojson()
