#!/usr/bin/env python3
"""
scripts/run_capnz.py

One-shot CAP-NZ run: fetch the feed, convert every alert, submit the
FeatureCollection (SUBMIT_URL, else SUBMIT_PATH).

  python scripts/run_capnz.py
  python scripts/run_capnz.py --feed https://alerts.metservice.com/cap/rss --dry-run
  python scripts/run_capnz.py --cap-file alert.xml
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import orjson
from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from capnz.core.contracts import FeatureCollection
from capnz.core.errors import FeedFetchError
from capnz.core.settings import Settings
from capnz.services.capnz import CapNz

logger = logging.getLogger("capnz")


def _print_collection(collection: FeatureCollection) -> None:
    sys.stdout.write(orjson.dumps(collection.to_geojson(), option=orjson.OPT_INDENT_2).decode("utf-8"))
    sys.stdout.write("\n")


async def _run(args: argparse.Namespace) -> int:
    overrides = {}
    if args.feed:
        overrides["RSS_URL"] = args.feed
    if args.out:
        overrides["SUBMIT_PATH"] = args.out
    config = Settings(**overrides)
    svc = CapNz(config=config)

    if args.cap_file:
        xml_text = Path(args.cap_file).read_text(encoding="utf-8")
        try:
            features = svc.features_for_document(xml_text)
        except ValueError as e:
            # PolygonParseError or a malformed date
            logger.error("capnz_cap_file_invalid path=%s err=%s", args.cap_file, e)
            return 1
        _print_collection(FeatureCollection(features=features))
        return 0

    try:
        if args.dry_run:
            run = await svc.poll()
            for o in run.skipped:
                logger.warning("skipped %s: %s", o.url, o.skipped)
            _print_collection(run.collection)
            return 0

        result = await svc.run()
    except FeedFetchError as e:
        logger.error("%s", e)
        return 1

    print(f"[capnz] ✅ {result.count} features ({result.bytes_total:,} bytes) → {result.target}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Convert CAP-NZ alerts into map features")
    parser.add_argument("--feed", help="RSS/Atom feed URL (default: RSS_URL)")
    parser.add_argument("--out", help="Output GeoJSON path when SUBMIT_URL is unset (default: SUBMIT_PATH)")
    parser.add_argument("--dry-run", action="store_true", help="Print the FeatureCollection instead of submitting")
    parser.add_argument("--cap-file", help="Convert a single local CAP document and print its features")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()

    level = (args.log_level or Settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
