"""
Grocery Catalog Scraper

Modules:
    models         - Data models (Category, Store, Item, CatalogSnapshot)
    common         - Shared utilities (config loader, logging, constants)
    normalization  - Price, unit of measure and image URL normalization
    merge          - Add-if-absent and update-or-append merge policies
    sources        - Per-merchant catalog sources (network + parsing)
    scraper        - Merchant-agnostic scraping orchestrator
    export         - Snapshot export to JSON feed and CSV tables
"""
