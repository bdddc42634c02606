"""
Configuration settings for data generation
"""
import os
from datetime import date, datetime
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file (for local development)
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(dotenv_path=env_path, override=False)


def _optional_int(name):
    """Read an integer environment variable, None when unset or blank."""
    value = os.getenv(name, '').strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {value}")


# Default seed handed to the seed resolver when a document neither declares
# nor inherits one. None means such documents are rejected.
SITE_SEED = _optional_int('DATAGEN_SITE_SEED')

# Directory holding catalogs.yaml and the optional generator documents
CONFIG_DIR = Path(os.getenv('DATAGEN_CONFIG_DIR', 'config'))

# Print resolver decisions and per-generator progress bars
VERBOSE = os.getenv('DATAGEN_VERBOSE', 'false').lower() in ('1', 'true', 'yes')

# Identifiers
PRODUCT_ID_PREFIX = 'datagen'
EMAIL_DOMAIN = os.getenv('DATAGEN_EMAIL_DOMAIN', 'varmail.net')

# Random attribute ids: redraws before falling back to numeric suffixes
MAX_ATTRIBUTE_ID_DRAWS = 64

# Random DATE attributes are drawn from [RANDOM_DATE_MIN, RANDOM_DATE_MAX)
RANDOM_DATE_MIN = date(1970, 1, 1)
RANDOM_DATE_MAX = date(2017, 1, 1)

# Fixed allocation timestamp so inventory output is reproducible
ALLOCATION_DATETIME = datetime(2017, 1, 1, 0, 0, 0)

# Category forest defaults
CATEGORY_COUNT = 50
CATEGORY_TREE_DEPTH = 5
CATEGORY_TREE_BREADTH = 10

# Catalog defaults
CATALOG_COUNT = 5
PRODUCTS_PER_CATALOG = 100
MASTER_PRODUCTS_PER_CONFIG = 100
BUNDLES_PER_CATALOG = 10
PRODUCT_SETS_PER_CATALOG = 20
GENERATED_ATTRIBUTE_COUNT = 10

# Sale price books take this much off the parent price
SALE_DISCOUNT = 0.10

# Exchange rates relative to USD (prices are configured in USD)
EXCHANGE_RATES = {
    'USD': 1.0,
    'EUR': 0.85,
    'GBP': 0.75,
    'CAD': 1.27,
    'AUD': 1.33,
    'JPY': 110.0,
    'CNY': 6.45,
    'RUB': 73.5,
}
DEFAULT_CURRENCIES = ('USD',)

# Localized content: region name -> (Faker locale, rendered locale id)
REGIONS = {
    'Generic': ('en_US', 'x-default'),
    'German': ('de_DE', 'de'),
    'Chinese': ('zh_CN', 'zh'),
    'Russian': ('ru_RU', 'ru'),
}
DEFAULT_REGIONS = ('Generic',)
