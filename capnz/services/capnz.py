# capnz/services/capnz.py
"""
CAP-NZ run orchestrator.

One run:
  feed → alert links → (per link, in feed order) fetch → parse → assemble
  → FeatureCollection → sink.

Each alert is isolated: a failed fetch, an unusable document or a bad
polygon costs that alert only. Failing to fetch the feed itself aborts the
run (FeedFetchError).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import httpx

from capnz.core.contracts import CapAlert, FeatureCollection, OutputFeature
from capnz.core.errors import FeedFetchError, PolygonParseError
from capnz.core.settings import Settings, settings as default_settings
from capnz.services.cap_parser import parse_cap_alert
from capnz.services.feed import extract_alert_links
from capnz.services.features import assemble_features
from capnz.services.fetch import fetch_text
from capnz.services.submit import SubmitResult, submit_collection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlertOutcome:
    url: str
    features: List[OutputFeature] = field(default_factory=list)
    skipped: Optional[str] = None  # reason, None on success

    @property
    def ok(self) -> bool:
        return self.skipped is None


@dataclass
class CapNzRun:
    feed_url: str
    links: List[str]
    outcomes: List[AlertOutcome]
    collection: FeatureCollection

    @property
    def skipped(self) -> List[AlertOutcome]:
        return [o for o in self.outcomes if not o.ok]


class CapNz:
    def __init__(
        self,
        *,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or default_settings
        # Injected in tests; production uses httpx's default transport
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.feed_timeout_s,
            follow_redirects=True,
            transport=self.transport,
        )

    async def _fetch(self, client: httpx.AsyncClient, url: str, headers: Dict[str, str]) -> str:
        return await fetch_text(
            client,
            url,
            headers=headers,
            retries=self.config.feed_retries,
            base_sleep_s=self.config.feed_retry_base_s,
        )

    def features_for_alert(self, alert: CapAlert) -> List[OutputFeature]:
        features = assemble_features(
            alert,
            tz_name=self.config.local_timezone,
            tz_label=self.config.local_timezone_label,
            fallback=[self.config.fallback_lon, self.config.fallback_lat],
        )
        for f in features:
            logger.debug("capnz_feature id=%s geom=%s", f.id, f.geometry.type)
        return features

    def features_for_document(self, xml_text: str) -> List[OutputFeature]:
        """Features for one CAP document; [] when the document is not a usable alert."""
        alert = parse_cap_alert(xml_text)
        if alert is None:
            return []
        return self.features_for_alert(alert)

    async def _process_alert(self, client: httpx.AsyncClient, url: str, headers: Dict[str, str]) -> AlertOutcome:
        try:
            xml_text = await self._fetch(client, url, headers)
            alert = parse_cap_alert(xml_text)
            if alert is None:
                return AlertOutcome(url=url, skipped="not a usable CAP alert")
            features = self.features_for_alert(alert)
            return AlertOutcome(url=url, features=features)
        except PolygonParseError as e:
            logger.warning("capnz_invalid_polygon url=%s err=%s", url, e)
            return AlertOutcome(url=url, skipped=f"invalid polygon: {e}")
        except Exception as e:
            logger.error("capnz_alert_failed url=%s err=%s", url, e)
            return AlertOutcome(url=url, skipped=str(e) or e.__class__.__name__)

    async def poll(self) -> CapNzRun:
        feed_url = self.config.rss_url
        headers = self.config.header_dict()

        async with self._client() as client:
            try:
                feed_text = await self._fetch(client, feed_url, headers)
            except Exception as e:
                raise FeedFetchError(f"feed fetch failed for {feed_url}: {e}") from e

            links = extract_alert_links(feed_text)
            logger.info("capnz_feed links=%d url=%s", len(links), feed_url)

            outcomes: List[AlertOutcome] = []
            collection = FeatureCollection()
            for url in links:
                outcome = await self._process_alert(client, url, headers)
                outcomes.append(outcome)
                collection.features.extend(outcome.features)

        logger.info(
            "capnz_run features=%d alerts=%d skipped=%d",
            len(collection.features),
            len(links),
            sum(1 for o in outcomes if not o.ok),
        )
        return CapNzRun(feed_url=feed_url, links=links, outcomes=outcomes, collection=collection)

    async def run(self) -> SubmitResult:
        result = await self.poll()
        async with self._client() as client:
            return await submit_collection(
                result.collection,
                client=client,
                submit_url=self.config.submit_url or "",
                submit_path=self.config.submit_path,
            )
