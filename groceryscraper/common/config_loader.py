"""
Configuration Loader

Loads YAML configuration files for merchant endpoints and scraping settings.
Values can be overridden through environment variables
(GROCERYSCRAPER_<MERCHANT>_BASE_URL, GROCERYSCRAPER_MAX_WORKERS).
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .constants import ENV_PREFIX


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'merchants.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_merchant_config(
    merchant: str,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Load settings for a single merchant.

    Args:
        merchant: Merchant key as used in merchants.yaml (e.g., 'iki')
        environ: Environment to read overrides from (default: os.environ)

    Returns:
        Dictionary with base_url, locale, page_size, timeout, max_workers, ...

    Raises:
        KeyError: If the merchant is not configured

    Example:
        {
            'base_url': 'https://eparduotuve.iki.lt',
            'locale': 'lt',
            'page_size': 60,
            'timeout': 30,
            'max_workers': 1,
        }
    """
    if environ is None:
        environ = os.environ

    key = merchant.lower().strip()
    merchants = load_config('merchants.yaml').get('merchants', {})
    if key not in merchants:
        configured = ', '.join(sorted(merchants))
        raise KeyError(f"Merchant not configured: {merchant}. Configured: {configured}")

    settings = dict(merchants[key])

    base_url = environ.get(f"{ENV_PREFIX}_{key.upper()}_BASE_URL")
    if base_url:
        settings['base_url'] = base_url.rstrip('/')

    max_workers = environ.get(f"{ENV_PREFIX}_MAX_WORKERS")
    if max_workers:
        settings['max_workers'] = int(max_workers)

    return settings
