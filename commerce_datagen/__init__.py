"""
Deterministic commerce dataset generation package
"""

from .main import (
    GeneratedSite,
    generate_site,
)

# Re-export the building blocks for convenience
from .config.loader import SiteConfiguration, load_site
from .errors import SpecificationError
from .generators.catalogs import CatalogAssembler
from .generators.product_ids import ProductIdSequencer
from .session import GenerationSession

__all__ = [
    # Main functions
    'GeneratedSite',
    'generate_site',
    # Configuration
    'SiteConfiguration',
    'load_site',
    # Generators
    'CatalogAssembler',
    'ProductIdSequencer',
    'GenerationSession',
    # Errors
    'SpecificationError',
]
