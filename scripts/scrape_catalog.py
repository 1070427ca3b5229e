#!/usr/bin/env python3
"""
Catalog Scrape Script

Scrapes the full catalog (categories, stores, items) of one merchant and
exports it as a JSON feed and/or CSV tables.

Settings come from config/merchants.yaml; a .env file at the project root
may override them (GROCERYSCRAPER_IKI_BASE_URL, GROCERYSCRAPER_MAX_WORKERS).

Usage:
    python3 scripts/scrape_catalog.py --merchant iki
    python3 scripts/scrape_catalog.py --merchant iki --json output/iki/shopItems.json
    python3 scripts/scrape_catalog.py --merchant iki --csv-dir output/iki --workers 4
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import requests
from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from groceryscraper.common.config_loader import load_merchant_config
from groceryscraper.common.log_config import setup_logging
from groceryscraper.export import CatalogCSVExporter, export_json
from groceryscraper.scraper import CatalogScraper
from groceryscraper.sources import create_source, get_supported_merchants

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Scrape a grocery merchant catalog and export it"
    )
    parser.add_argument(
        "--merchant", "-m",
        default="iki",
        choices=get_supported_merchants(),
        help="Merchant to scrape (default: iki)"
    )
    parser.add_argument(
        "--json", "-j",
        help="Output JSON feed (default: output/{merchant}/shopItems.json)"
    )
    parser.add_argument(
        "--csv-dir",
        help="Also export categories/items/stores CSV tables to this directory"
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        help="Concurrent category requests (default: from config, 1 = sequential)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    settings = load_merchant_config(args.merchant)
    max_workers = args.workers or settings.get("max_workers", 1)
    output_json = args.json or f"output/{args.merchant}/shopItems.json"

    print("=" * 60)
    print("Catalog Scrape")
    print("=" * 60)
    print(f"  Merchant:         {args.merchant}")
    print(f"  API:              {settings['base_url']}")
    print(f"  Workers:          {max_workers}")
    print(f"  JSON output:      {output_json}")
    if args.csv_dir:
        print(f"  CSV output:       {args.csv_dir}")

    with CatalogScraper(create_source(args.merchant, settings), max_workers=max_workers) as scraper:
        try:
            snapshot = scraper.scrape()
        except requests.RequestException as e:
            logger.error("Scrape failed: %s", e)
            sys.exit(1)
        stats = scraper.stats

    export_json(snapshot, output_json)
    if args.csv_dir:
        CatalogCSVExporter().export(snapshot, args.csv_dir, prefix=f"{args.merchant}_")

    print("\n" + "=" * 60)
    print("Scrape Summary")
    print("=" * 60)
    print(f"  Categories:         {len(snapshot.all_categories)} ({len(snapshot.categories)} leaves)")
    print(f"  Stores:             {len(snapshot.stores)}")
    print(f"  Items:              {len(snapshot.items)}")
    print(f"  Rows received:      {stats.rows_received}")
    print(f"  Duplicates dropped: {stats.duplicates_dropped}")
    if stats.zero_price_kept:
        print(f"  Kept at price 0:    {stats.zero_price_kept} (a dropped duplicate had a price)")
    print("=" * 60)


if __name__ == "__main__":
    main()
