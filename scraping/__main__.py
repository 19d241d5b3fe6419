"""Command line entry point: ``python -m scraping``."""

from __future__ import annotations
from tracking import t

import argparse
import asyncio
import logging
import sys
from datetime import date, timedelta
from typing import List, Optional

import logging_config  # noqa: F401  (configures handlers on import)
from automation.errors import ScraperEnvironmentError
from infrastructure.constants import ALL_REGIONS

from .orchestrator import ScrapeOrchestrator

logger = logging.getLogger('Main')


def _parse_date(value: str) -> date:
    t('scraping.__main__._parse_date')
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


def build_parser() -> argparse.ArgumentParser:
    t('scraping.__main__.build_parser')
    parser = argparse.ArgumentParser(description="Scrape tennis court availability")
    parser.add_argument("--date", type=_parse_date, help="Target date (YYYY-MM-DD); defaults to tomorrow")
    parser.add_argument("--region", default=ALL_REGIONS, help="Region filter (default: all regions)")
    parser.add_argument("--venue", help="Scrape a single venue key and print its result")
    parser.add_argument("--list-regions", action="store_true", help="Print selectable regions and exit")
    parser.add_argument("--list-venues", action="store_true", help="Print venues for --region and exit")
    return parser


async def run(args: argparse.Namespace) -> int:
    t('scraping.__main__.run')
    orchestrator = ScrapeOrchestrator()

    if args.list_regions:
        for region in orchestrator.available_regions():
            print(region)
        return 0

    if args.list_venues:
        for venue in orchestrator.list_venues(args.region):
            print(f"{venue.key}\t{venue.family.value}\t{orchestrator.region_of(venue)}\t{venue.name}")
        return 0

    target = args.date or orchestrator.now().date() + timedelta(days=1)

    if args.venue:
        if args.venue not in orchestrator.catalog:
            logger.error("Unknown venue key: %s", args.venue)
            return 2
        result = await orchestrator.scrape_venue(args.venue, target)
        print(f"{result.venue.name}: {len(result.slots)} slots" + ("" if result.success else f" ({result.error})"))
        for slot in result.slots:
            print(f"  {slot.time}  {slot.court}")
        return 0 if result.success else 1

    try:
        snapshot = await orchestrator.scrape_all(target, args.region)
    except ScraperEnvironmentError as exc:
        logger.error("❌ %s", exc)
        return 3

    for result in snapshot.results:
        status = "✅" if result.success else "❌"
        print(f"{status} {result.venue.name}: {len(result.slots)} slots")
    print(f"Total: {snapshot.total_slots} slots across {snapshot.success_count}/{len(snapshot.results)} venues")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point used by both CLI script and module execution."""
    t('scraping.__main__.main')
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("✅ Stopped by user (Ctrl+C)")
        return 130


if __name__ == "__main__":
    sys.exit(main())
