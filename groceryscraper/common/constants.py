"""
Shared constants for the project.
"""

# Price fields are stored in minor currency units (cents)
MINOR_UNITS_PER_MAJOR = 100

# Accept header the merchant APIs expect on every request
JSON_ACCEPT = "application/json, text/plain, */*"

USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

# Environment variable prefix for config overrides
ENV_PREFIX = "GROCERYSCRAPER"
