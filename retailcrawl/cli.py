"""Command-line crawler runner.

Prints one JSON object per record to stdout; logs go to stderr.

Usage:
    retailcrawl --list
    retailcrawl --retailer tesco
    retailcrawl --retailer tesco --max-pages 2
    retailcrawl --retailer asda --url https://groceries.asda.com/aisle/pet-shop/dog/dog-food
    retailcrawl --url https://www.amazon.co.uk/dp/B000000000
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional, TextIO

import structlog

from retailcrawl.config import settings
from retailcrawl.core.exceptions import RetailCrawlException
from retailcrawl.crawler.factory import ExtractorRegistry
from retailcrawl.crawler.http_client import HttpFetcher
from retailcrawl.crawler.register_retailers import register_all_retailers
from retailcrawl.crawler.runner import CrawlRunner
from retailcrawl.crawler.utils.proxy_manager import build_proxy_adapter
from retailcrawl.logging_config import configure_logging


logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retailcrawl",
        description="Crawl retailer listing and product pages into JSON records.",
    )
    parser.add_argument("--retailer", help="Retailer slug (see --list)")
    parser.add_argument(
        "--url",
        action="append",
        default=[],
        help="Page to crawl; repeatable. With --retailer, replaces the starting URLs",
    )
    parser.add_argument("--max-pages", type=int, default=None, help="Page cap per starting URL")
    parser.add_argument("--list", action="store_true", help="List registered retailers and exit")
    parser.add_argument("--json-logs", action="store_true", help="Write logs as JSON")
    parser.add_argument("--log-level", default=None, help="Log level (defaults to LOG_LEVEL)")
    return parser


def list_retailers(registry: ExtractorRegistry, out: TextIO) -> None:
    for profile in registry.get_profiles():
        out.write(f"{profile.slug:<16} {profile.name:<16} {', '.join(profile.domains)}\n")


async def run(args: argparse.Namespace, registry: ExtractorRegistry, out: TextIO) -> int:
    """Run the crawl described by the parsed arguments.

    Returns:
        Number of records written
    """
    count = 0
    async with HttpFetcher(proxy=build_proxy_adapter()) as fetcher:
        runner = CrawlRunner(registry, fetcher, max_pages=args.max_pages)

        if args.retailer:
            records = runner.run_retailer(args.retailer, start_urls=args.url or None)
            async for record in records:
                out.write(json.dumps(record.to_dict(), ensure_ascii=False, default=str) + "\n")
                count += 1
        else:
            for url in args.url:
                async for record in runner.run_url(url):
                    out.write(json.dumps(record.to_dict(), ensure_ascii=False, default=str) + "\n")
                    count += 1

        for summary in runner.summaries:
            logger.info("run_summary", **summary.to_dict())

    return count


def main(argv: Optional[List[str]] = None) -> int:
    """Console script entry point.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or settings.LOG_LEVEL, args.json_logs or settings.LOG_JSON)
    registry = register_all_retailers(ExtractorRegistry())

    if args.list:
        list_retailers(registry, sys.stdout)
        return 0

    if not args.retailer and not args.url:
        parser.error("one of --retailer, --url or --list is required")

    if args.max_pages is not None and args.max_pages < 1:
        parser.error("--max-pages must be at least 1")

    try:
        count = asyncio.run(run(args, registry, sys.stdout))
    except RetailCrawlException as e:
        logger.error("crawl_failed", error=e.message)
        return 1
    except KeyboardInterrupt:
        logger.warning("crawl_interrupted")
        return 130

    logger.info("crawl_complete", records=count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
