"""
Domain objects produced by the generators
"""

from .attributes import AttributeDefinition, CustomAttribute, RandomAttributeRegistry
from .catalogs import MasterCatalog, NavigationCatalog
from .categories import Category, CategoryAssignment
from .products import BundleProduct, MasterProduct, Product, ProductSet, StandardProduct, VariationProduct

__all__ = [
    'AttributeDefinition',
    'CustomAttribute',
    'RandomAttributeRegistry',
    'MasterCatalog',
    'NavigationCatalog',
    'Category',
    'CategoryAssignment',
    'Product',
    'StandardProduct',
    'MasterProduct',
    'VariationProduct',
    'BundleProduct',
    'ProductSet',
]
