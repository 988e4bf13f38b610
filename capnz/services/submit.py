from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx
import orjson

from capnz.core.contracts import FeatureCollection
from capnz.core.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitResult:
    target: str
    count: int
    bytes_total: int


def collection_bytes(collection: FeatureCollection) -> bytes:
    return orjson.dumps(collection.to_geojson())


async def submit_collection(
    collection: FeatureCollection,
    *,
    client: Optional[httpx.AsyncClient] = None,
    submit_url: Optional[str] = None,
    submit_path: Optional[str] = None,
) -> SubmitResult:
    """
    Hand the run's FeatureCollection to the sink.

    SUBMIT_URL set → POST as JSON (non-2xx raises). Otherwise → write the
    GeoJSON to SUBMIT_PATH, creating parent directories.
    """
    url = submit_url if submit_url is not None else settings.submit_url
    blob = collection_bytes(collection)
    count = len(collection.features)

    if url:
        headers = {"Content-Type": "application/json"}
        if client is None:
            async with httpx.AsyncClient(timeout=settings.feed_timeout_s) as c:
                r = await c.post(url, content=blob, headers=headers)
        else:
            r = await client.post(url, content=blob, headers=headers)
        r.raise_for_status()
        logger.info("capnz_submitted url=%s features=%d bytes=%d", url, count, len(blob))
        return SubmitResult(target=url, count=count, bytes_total=len(blob))

    p = Path(submit_path or settings.submit_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(blob)
    logger.info("capnz_written path=%s features=%d bytes=%d", p, count, len(blob))
    return SubmitResult(target=str(p), count=count, bytes_total=len(blob))
