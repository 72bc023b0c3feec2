#!/usr/bin/env python3
"""
Salesforce Case Importer — Command-line entry point.

Runs the import pipeline outside the host platform, for checking settings and
previewing what an import would produce. Nothing is written anywhere.

Usage:
    python run.py --list-filters                       # Declared filters
    python run.py --filter-values listViewId           # Values for one filter
    python run.py --filter listViewId=00B5e000001      # List candidate cases
    python run.py --filter caseStatus=open --strategy static_category
    python run.py --filter listViewId=00B5e000001 --render
    python run.py --filter listViewId=00B5e000001 --preview-import 5005e000
    python run.py --debug                              # Verbose logging
    python run.py --env /path/.env                     # Alternate .env file
"""

import sys
import json
import argparse
import logging
import os
from pathlib import Path

from config import DEFAULT_SETTINGS
from core import CaseImporter, CaseImportError, ConnectivityError

VERSION_FILE = Path(__file__).resolve().parent / "VERSION"
VERSION = VERSION_FILE.read_text().strip() if VERSION_FILE.exists() else "unknown"


def parse_filters(pairs):
    """Turn ["name=value", ...] into a dict."""
    filters = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"Filter must be NAME=VALUE, got '{pair}'")
        filters[name.strip()] = value.strip()
    return filters


def banner(title):
    print(f"\n{'='*60}")
    print(title)
    print("="*60)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Salesforce Case Importer - List and preview Salesforce cases for import"
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument(
        "--strategy",
        choices=["saved_view", "static_category"],
        help="Filter strategy (overrides QUERY_STRATEGY)",
    )
    parser.add_argument("--list-filters", action="store_true", help="Show declared filters")
    parser.add_argument("--filter-values", metavar="NAME", help="Show values for a filter")
    parser.add_argument(
        "--filter", "-f", action="append", metavar="NAME=VALUE", help="Filter selection (repeatable)"
    )
    parser.add_argument("--render", action="store_true", help="Print the HTML card of each candidate")
    parser.add_argument(
        "--preview-import", metavar="CASE_ID", help="Show the description an import would write"
    )
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    args = parser.parse_args(argv)

    if args.version:
        print(f"salesforce-case-import {VERSION}")
        return 0

    try:
        filters = parse_filters(args.filter)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    if args.preview_import and not filters:
        parser.error("--preview-import needs at least one --filter to list candidates from")

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(name)s - %(levelname)s - %(message)s'
    )

    try:
        importer = CaseImporter.from_env(env_file=args.env, strategy=args.strategy)
    except ValueError as e:
        print(f"\nConfiguration Errors:\n  - {e}")
        return 1

    # DEBUG from .env is only visible once from_env() has loaded it
    if os.getenv("DEBUG", str(DEFAULT_SETTINGS["DEBUG"])).lower() == "true":
        logging.getLogger().setLevel(logging.DEBUG)

    print(f"\n{'='*60}")
    print("SALESFORCE CASE IMPORTER")
    print("="*60)
    print(f"Domain: {importer.client.domain or '(not set)'}")
    print(f"Strategy: {importer.strategy.value}")

    if not importer.validate_config():
        return 1

    try:
        if args.list_filters:
            banner("FILTERS")
            print(json.dumps(importer.list_filters(), indent=2))

        if args.filter_values:
            banner(f"VALUES: {args.filter_values}")
            values = importer.filter_values(args.filter_values)
            for value in values:
                print(f"  {value.value}  {value.text}")
            print(f"  ({len(values)} values)")

        if filters:
            banner("CANDIDATES")
            candidates = importer.list_candidates(filters)
            for candidate in candidates:
                print(f"  {candidate.case_number:<10} {candidate.status or '-':<12} {candidate.name}")
                if args.render:
                    print(importer.render_record(candidate))
            print(f"  ({len(candidates)} cases)")

            if args.preview_import:
                banner(f"IMPORT PREVIEW: {args.preview_import}")
                match = next((c for c in candidates if c.unique_id == args.preview_import), None)
                if match is None:
                    print(f"  Case {args.preview_import} is not in the candidate list")
                    return 1
                print(importer.import_handler.compose(match))

    except ConnectivityError as e:
        print(f"\n  ERROR: {e.display_error()}")
        return 1
    except CaseImportError as e:
        print(f"\n  ERROR: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
