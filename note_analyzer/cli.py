#!/usr/bin/env python3
"""
CLI for the structured note analyzer - run the pipeline without the server

Usage:
  note-analyzer locate 48136H7D4                                  # Most recent filing for a CUSIP
  note-analyzer locate 48136H7D4 --backend edgar                  # Scan EDGAR submissions instead
  note-analyzer fetch 0001213900-25-104551 19617                  # Primary HTML of a filing
  note-analyzer extract 48136H7D4 0001213900-25-104551 19617      # Extract note terms

Prints the same JSON payloads the HTTP endpoints return.
Configuration comes from the environment (see note_analyzer.config).
"""

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from typing import Any

from .adapters.http import HTTPHandlers
from .config import LOCATOR_BACKENDS, load_settings
from .container import Container


def print_result(status: int, body: dict[str, Any]) -> int:
    print(json.dumps(body, indent=2))
    if status >= 400:
        print(f"HTTP {status}", file=sys.stderr)
        return 1
    return 0


async def locate_command(cusip: str, backend: str | None) -> int:
    """Locate the most recent filing for a CUSIP"""
    settings = load_settings()
    if backend:
        settings = replace(settings, locator_backend=backend)
    handlers = HTTPHandlers(Container(settings))

    status, body = await handlers.analyze_cusip(cusip)
    return print_result(status, body)


async def fetch_command(accession_number: str, cik: str) -> int:
    """Fetch a filing's primary HTML document"""
    handlers = HTTPHandlers(Container(load_settings()))

    status, body = await handlers.filing_html(accession_number, cik)
    return print_result(status, body)


async def extract_command(cusip: str, accession_number: str, cik: str) -> int:
    """Extract note terms from a filing"""
    handlers = HTTPHandlers(Container(load_settings()))

    status, body = await handlers.parse_filing(cusip, accession_number, cik)
    return print_result(status, body)


def main() -> int:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Locate structured-note filings by CUSIP and extract their terms"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # locate command
    locate_parser = subparsers.add_parser("locate", help="Find the most recent filing for a CUSIP")
    locate_parser.add_argument("cusip", help="CUSIP (e.g., 48136H7D4)")
    locate_parser.add_argument("--backend", choices=LOCATOR_BACKENDS,
                               help="Locator backend (default: LOCATOR_BACKEND or sec-api)")

    # fetch command
    fetch_parser = subparsers.add_parser("fetch", help="Fetch a filing's primary HTML document")
    fetch_parser.add_argument("accession_no", help="Accession number (e.g., 0001213900-25-104551)")
    fetch_parser.add_argument("cik", help="Issuer CIK (e.g., 19617)")

    # extract command
    extract_parser = subparsers.add_parser("extract", help="Extract note terms from a filing")
    extract_parser.add_argument("cusip", help="CUSIP (e.g., 48136H7D4)")
    extract_parser.add_argument("accession_no", help="Accession number")
    extract_parser.add_argument("cik", help="Issuer CIK")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "locate":
        return asyncio.run(locate_command(args.cusip, args.backend))
    elif args.command == "fetch":
        return asyncio.run(fetch_command(args.accession_no, args.cik))
    elif args.command == "extract":
        return asyncio.run(extract_command(args.cusip, args.accession_no, args.cik))
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
