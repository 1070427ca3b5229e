"""
Image URL Resolution

Parses candidate image fields in order and keeps the first valid URL.
"""

from typing import Any, Mapping, Optional, Sequence
from urllib.parse import urlparse


def parse_image_url(value: Any) -> Optional[str]:
    """Return value if it is an absolute http(s) URL, else None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    try:
        parsed = urlparse(value)
    except ValueError:
        return None
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        return None
    return value


def first_valid_url(row: Mapping[str, Any], fields: Sequence[str]) -> Optional[str]:
    """
    Resolve an image URL from the first field holding a valid URL.

    Args:
        row: Raw merchant record
        fields: Candidate field names, most preferred first

    Returns:
        URL string, or None if no field holds a valid URL
    """
    for name in fields:
        url = parse_image_url(row.get(name))
        if url:
            return url
    return None
