#!/usr/bin/env python3
"""
CLI: extract readable text for a URL through the extraction backend and print it.

Usage:
  CONTENT_API_URL=https://api.example.com python main.py https://en.wikipedia.org/wiki/Speed_reading
  python main.py https://example.com/article --api-url http://localhost:8888 --user-id u1 --no-increment
"""

import argparse
import logging
import sys

from config import API_BASE, LOG_LEVEL
from article_client import extract_content_from_url
from models import ExtractionResult, ProtectionError


def print_result(result: ExtractionResult) -> None:
    print(f"\n--- {result.title} ---")
    print(f"Source: {result.source_url}\n")
    print(result.content)
    print()


def print_upgrade_prompt(err: ProtectionError) -> None:
    """Tell the user the site is protected and which tier unlocks it."""
    details = err.details
    print(f"{details.message} (protection: {details.protection_type})", file=sys.stderr)
    if details.upgrade_required:
        print(f"Upgrade to the {details.required_tier} tier to read content from this site.", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract article text from a URL")
    parser.add_argument("url", help="Page to extract")
    parser.add_argument("--api-url", default=None, help=f"Extraction backend base URL (default: CONTENT_API_URL={API_BASE!r})")
    parser.add_argument("--user-id", default=None, help="User id for usage tracking")
    parser.add_argument("--no-increment", action="store_true", help="Don't count this extraction against usage (re-reading from history)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    url = args.url.strip()
    if not url:
        print("Error: url is required", file=sys.stderr)
        return 1

    try:
        result = extract_content_from_url(
            url,
            user_id=args.user_id,
            increment_usage=not args.no_increment,
            api_base=args.api_url,
        )
    except ProtectionError as e:
        print_upgrade_prompt(e)
        return 2

    print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
