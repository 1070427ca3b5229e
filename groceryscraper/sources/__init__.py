"""
Merchant catalog sources.

Modules:
    base - MerchantCatalogSource interface and InitialData
    iki  - IkiCatalogSource for the IKI e-shop API
"""

from typing import Any, Mapping, Optional

from ..common.config_loader import load_merchant_config
from .base import InitialData, MerchantCatalogSource
from .iki import IkiCatalogSource

# Registry of supported merchant sources
MERCHANT_SOURCES = {
    'iki': IkiCatalogSource,
}


def get_source_for_merchant(merchant: str):
    """
    Get the catalog source class for a merchant.

    Args:
        merchant: Merchant key (e.g., "iki")

    Returns:
        Source class (e.g., IkiCatalogSource)

    Raises:
        ValueError: If merchant is not supported
    """
    key = merchant.lower().strip()
    if key in MERCHANT_SOURCES:
        return MERCHANT_SOURCES[key]

    supported = ', '.join(MERCHANT_SOURCES.keys())
    raise ValueError(f"Unsupported merchant: {merchant}. Supported: {supported}")


def create_source(merchant: str, settings: Optional[Mapping[str, Any]] = None) -> MerchantCatalogSource:
    """Instantiate the merchant's source from merchants.yaml (or given settings)."""
    source_class = get_source_for_merchant(merchant)
    if settings is None:
        settings = load_merchant_config(merchant)
    return source_class.from_config(settings)


def get_supported_merchants() -> list:
    """Return list of supported merchant keys."""
    return list(MERCHANT_SOURCES.keys())


__all__ = [
    'MerchantCatalogSource',
    'InitialData',
    'IkiCatalogSource',
    'MERCHANT_SOURCES',
    'get_source_for_merchant',
    'create_source',
    'get_supported_merchants',
]
