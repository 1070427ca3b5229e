"""
Scraper error types.

Transport failures are not wrapped: requests exceptions propagate as-is.
"""


class ScraperError(Exception):
    """Base class for catalog scraping errors."""


class ScraperStateError(ScraperError, RuntimeError):
    """Operation called before the scraper was initialized."""


class InvalidFetchArgumentsError(ScraperError, ValueError):
    """Item fetch called without exactly one of category_id / store_id."""


class UnsupportedFetchModeError(ScraperError, NotImplementedError):
    """Item fetch mode the merchant source does not implement."""


class CatalogParseError(ScraperError, ValueError):
    """A required field is missing or malformed in a merchant response."""


class UnknownCategoryError(ScraperError, LookupError):
    """Category internal ID is not present in the loaded category tree."""
