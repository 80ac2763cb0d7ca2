"""
Command-line interface for JobSweep.

Usage:
    jobsweep https://example.com/careers --keywords engineer,developer
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from jobsweep.models import (
    MODE_EXTRACT_ALL,
    MODE_JOBS,
    ScrapeOptions,
    SelectorConfig,
    now_utc_iso,
    split_keywords,
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="jobsweep",
        description="Scrape job listings from any careers page or job board",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic scrape
  jobsweep https://example.com/careers

  # Only keep matching jobs
  jobsweep https://example.com/careers --keywords "python,backend" --limit 50

  # Help the detector with site-specific selectors
  jobsweep https://example.com/jobs --selector container=.posting --selector title=.posting-name

  # Lazy-loading pages: scroll three screens, wait longer
  jobsweep https://example.com/jobs --scroll-pages 3 --wait 5000

  # Server-rendered page, no browser
  jobsweep https://example.com/jobs --static

  # Several sites from a JSON file (list of {"url": ..., "keywords": [...], ...})
  jobsweep --bulk websites.json --output results.json

  # Inspect what generic selectors match on a page
  jobsweep https://example.com/jobs --extract-all
""",
    )

    parser.add_argument(
        "url",
        nargs="?",
        help="Page to scrape",
    )
    parser.add_argument(
        "--bulk", "-b",
        default=None,
        help="JSON file with a list of websites to scrape one after another",
    )

    parser.add_argument(
        "--keywords", "-k",
        default="",
        help="Only keep jobs mentioning at least one of these (comma-separated)",
    )
    parser.add_argument(
        "--selector", "-s",
        action="append",
        default=[],
        metavar="FIELD=CSS",
        help="Selector override, e.g. container=.job-row or title=h3 (repeatable)",
    )
    parser.add_argument(
        "--limit", "-n",
        type=int,
        default=20,
        help="Max jobs per website (default: 20)",
    )
    parser.add_argument(
        "--wait",
        type=int,
        default=3000,
        help="Wait after page load in milliseconds (default: 3000)",
    )
    parser.add_argument(
        "--scroll-pages",
        type=int,
        default=1,
        help="Screens to load by scrolling; 1 means no scrolling (default: 1)",
    )
    parser.add_argument(
        "--static",
        action="store_true",
        help="Fetch with plain HTTP instead of a headless browser",
    )
    parser.add_argument(
        "--extract-all",
        action="store_true",
        help="Report samples of generic selectors instead of jobs",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write JSON to this file instead of stdout",
    )

    # Verbosity
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress messages",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress all output except errors",
    )

    args = parser.parse_args(argv)
    if not args.url and not args.bulk:
        parser.error("a URL or --bulk FILE is required")
    return args


def parse_selectors(items: List[str]) -> SelectorConfig:
    """Turn ["container=.job", "title=h3"] into a SelectorConfig."""
    data: Dict[str, str] = {}
    for item in items:
        name, sep, css = item.partition("=")
        if not sep or not name.strip() or not css.strip():
            raise ValueError(f"Selector must look like FIELD=CSS, got {item!r}")
        data[name.strip()] = css.strip()
    return SelectorConfig.from_mapping(data)


def build_options(args: argparse.Namespace) -> ScrapeOptions:
    """Build ScrapeOptions for the single-URL mode."""
    return ScrapeOptions(
        url=args.url,
        keywords=split_keywords(args.keywords),
        selectors=parse_selectors(args.selector),
        limit=args.limit,
        wait_time_ms=args.wait,
        scroll_pages=args.scroll_pages,
        use_browser=not args.static,
        mode=MODE_EXTRACT_ALL if args.extract_all else MODE_JOBS,
    )


def load_bulk(path: str, args: argparse.Namespace) -> List[ScrapeOptions]:
    """Read a bulk file. Per-site keys fall back to the command-line values."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("websites", [])
    if not isinstance(data, list) or not data:
        raise ValueError(f"{path}: expected a non-empty list of websites")

    websites = []
    for entry in data:
        if isinstance(entry, str):
            entry = {"url": entry}
        keywords = entry.get("keywords", split_keywords(args.keywords))
        if isinstance(keywords, str):
            keywords = split_keywords(keywords)
        websites.append(ScrapeOptions(
            url=entry["url"],
            keywords=keywords,
            selectors=entry.get("selectors") or parse_selectors(args.selector),
            limit=entry.get("limit", args.limit),
            wait_time_ms=entry.get("waitTime", args.wait),
            scroll_pages=entry.get("scrollPages", args.scroll_pages),
            use_browser=entry.get("useBrowser", not args.static),
            mode=entry.get("mode", MODE_EXTRACT_ALL if args.extract_all else MODE_JOBS),
        ))
    return websites


def configure_logging(args: argparse.Namespace) -> None:
    if args.quiet:
        level = logging.ERROR
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def write_output(payload: Dict[str, Any], path: Optional[str]) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        print(text)


async def async_main(args: argparse.Namespace) -> int:
    """Async entry point."""
    from jobsweep.orchestrator import bulk_scrape, scrape_website

    log = print if not args.quiet else (lambda x: None)

    try:
        if args.bulk:
            websites = load_bulk(args.bulk, args)
            # Progress lines would corrupt JSON printed to stdout
            results = await bulk_scrape(websites, log_fn=log if args.output else None)
            payload = {
                "success": True,
                "totalWebsites": len(websites),
                "successfulScrapes": sum(1 for r in results if r.success),
                "results": [r.to_dict() for r in results],
            }
        else:
            options = build_options(args)
            result = await scrape_website(options)
            payload = {
                "success": True,
                "url": options.url,
                "keywords": options.keywords,
                "totalJobs": len(result.jobs),
                "scrapedAt": now_utc_iso(),
                "jobs": [job.to_dict() for job in result.jobs],
            }
            if result.samples is not None:
                payload["samples"] = result.samples

        write_output(payload, args.output)
        if args.output and not args.quiet:
            print(f"Wrote {args.output}")
        return 0

    except KeyboardInterrupt:
        if not args.quiet:
            print("\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args)
    return asyncio.run(async_main(args))


if __name__ == "__main__":
    sys.exit(main())
