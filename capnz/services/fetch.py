from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import httpx

logger = logging.getLogger(__name__)


async def fetch_text(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    retries: int = 2,
    base_sleep_s: float = 1.0,
) -> str:
    """
    GET url and return the body text, retrying on any failure.

    retries=2 means up to 3 attempts; the wait grows linearly
    (base, 2*base, ...). The last error is re-raised.
    """
    attempts = max(0, int(retries)) + 1
    last_exc: Optional[Exception] = None

    for i in range(attempts):
        try:
            r = await client.get(url, headers=headers or {})
            r.raise_for_status()
            return r.text
        except httpx.HTTPError as e:
            last_exc = e
            if i == attempts - 1:
                break
            logger.info("capnz_fetch_retry url=%s attempt=%d err=%s", url, i + 1, e)
            await asyncio.sleep(base_sleep_s * (i + 1))

    if last_exc:
        raise last_exc
    raise RuntimeError("capnz_fetch_failed")
