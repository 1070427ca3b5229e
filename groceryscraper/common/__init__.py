# Common utilities
from .config_loader import load_config, load_merchant_config
from .log_config import setup_logging
