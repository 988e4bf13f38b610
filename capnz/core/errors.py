from __future__ import annotations

from fastapi import HTTPException


class PolygonParseError(ValueError):
    """A CAP <polygon> string that cannot become a valid ring."""


class FeedFetchError(RuntimeError):
    """The alert feed itself could not be fetched; the run cannot continue."""


def bad_request(code: str, message: str):
    raise HTTPException(status_code=400, detail={"code": code, "message": message})


def service_unavailable(code: str, message: str):
    raise HTTPException(status_code=503, detail={"code": code, "message": message})
