"""
Loads configuration documents into typed, seeded configuration objects.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml

from commerce_datagen.config import settings
from commerce_datagen.config.models import (
    AttributeConfig,
    BundleProductConfiguration,
    CatalogListConfiguration,
    CategoryConfiguration,
    CounterConfig,
    DataType,
    GeneratedAttributeConfig,
    GenerationStrategy,
    InventoryConfiguration,
    InventoryRecordConfiguration,
    NavigationCatalogConfiguration,
    OrderPromotionConfiguration,
    PricebookConfiguration,
    ProductConfiguration,
    ProductOptionConfiguration,
    ProductPromotionConfiguration,
    ProductSetConfiguration,
    PromotionConfiguration,
    RedirectUrlConfiguration,
    VariationAttributeConfiguration,
    VariationProductConfiguration,
)
from commerce_datagen.config.seed_inheritance import SEED_KEY, resolve_seeds
from commerce_datagen.errors import SpecificationError
from commerce_datagen.utils.logging_utils import log_progress
from commerce_datagen.utils.random_data import Region

CATALOGS_FILE = 'catalogs.yaml'
SITE_FILE = 'site.yaml'
OPTIONAL_FILES = {
    'navigation': 'navigation-catalog.yaml',
    'inventory': 'inventories.yaml',
    'pricebooks': 'pricebooks.yaml',
    'promotions': 'promotions.yaml',
    'redirects': 'redirect-urls.yaml',
}


def load_document(path):
    """Decode a YAML (or ``.json``) file."""
    path = Path(path)
    with open(path, encoding='utf-8') as f:
        if path.suffix == '.json':
            return json.load(f)
        return yaml.safe_load(f)


def _kwargs(raw, mapping):
    """Pick the present document keys of mapping (document key -> field name)."""
    return {field_name: raw[key] for key, field_name in mapping.items() if raw.get(key) is not None}


def _enum_value(enum_cls, value, what):
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        raise SpecificationError(f"Unknown {what}: {value}")


def build_attribute_config(raw) -> AttributeConfig:
    """
    Build one custom attribute definition.

    Document keys: ``type``, ``data`` (generation strategy), ``searchable`` and
    the strategy payload ``staticValue``, ``counter`` or ``list``.
    """
    counter = raw.get('counter')
    if counter is not None:
        counter = CounterConfig(**_kwargs(counter, {'offset': 'offset', 'increment': 'increment'}))
    return AttributeConfig(
        type=_enum_value(DataType, raw.get('type', 'string'), 'data type'),
        generation_strategy=_enum_value(GenerationStrategy, raw.get('data', 'random'), 'generation strategy'),
        searchable=bool(raw.get('searchable', False)),
        static_value=None if raw.get('staticValue') is None else str(raw['staticValue']),
        counter=counter,
        values=tuple(str(v) for v in raw.get('list') or ()),
    )


def _custom_attributes(raw):
    return tuple((key, build_attribute_config(value or {})) for key, value in (raw or {}).items())


def _generated_attributes(raw) -> Optional[GeneratedAttributeConfig]:
    if raw is None:
        return None
    return GeneratedAttributeConfig(**_kwargs(raw, {
        'elementCount': 'element_count',
        'thereofSearchable': 'thereof_searchable',
    }))


def _extension(raw):
    return {
        'custom_attributes': _custom_attributes(raw.get('customAttributes')),
        'generated_attributes': _generated_attributes(raw.get('generatedAttributes')),
    }


def _categories(raw) -> CategoryConfiguration:
    return CategoryConfiguration(**_kwargs(raw or {}, {
        'elementCount': 'element_count',
        'categoryTreeDepth': 'tree_depth',
        'categoryTreeBreadth': 'tree_breadth',
        'template': 'template',
    }))


def _options(raw) -> Optional[ProductOptionConfiguration]:
    if raw is None:
        return None
    return ProductOptionConfiguration(**_kwargs(raw, {
        'elementCount': 'element_count',
        'minValues': 'min_values',
        'maxValues': 'max_values',
        'minPrice': 'min_price',
        'maxPrice': 'max_price',
        'probability': 'probability',
    }))


def _variation_attribute(raw) -> VariationAttributeConfiguration:
    if 'name' not in raw:
        raise SpecificationError("Variation attribute needs a name")
    return VariationAttributeConfiguration(
        name=str(raw['name']),
        values=tuple(str(v) for v in raw.get('values') or ()),
        probability=float(raw.get('probability', 1.0)),
    )


def build_catalog_config(raw) -> CatalogListConfiguration:
    """
    Build the catalog list configuration from a seed-resolved document.

    Args:
        raw: Document after ``resolve_seeds``.

    Returns:
        CatalogListConfiguration: Typed configuration.
    """
    products = raw.get('products')
    product_config = None
    if products is not None:
        product_config = ProductConfiguration(
            initial_seed=products[SEED_KEY],
            options=_options(products.get('options')),
            **_kwargs(products, {'elementCount': 'element_count'}),
            **_extension(products),
        )

    variation_products = tuple(
        VariationProductConfiguration(
            local_variation_attributes=tuple(
                _variation_attribute(a) for a in item.get('localVariationAttributes') or ()
            ),
            shared_variation_attributes=tuple(str(name) for name in item.get('sharedVariationAttributes') or ()),
            **_kwargs(item, {'elementCount': 'element_count'}),
        )
        for item in raw.get('variationProducts') or ()
    )

    bundles = raw.get('bundleConfig')
    product_sets = raw.get('productSets')
    return CatalogListConfiguration(
        initial_seed=raw[SEED_KEY],
        categories=_categories(raw.get('categories')),
        products=product_config,
        variation_products=variation_products,
        bundle_config=None if bundles is None else BundleProductConfiguration(**_kwargs(bundles, {
            'elementCount': 'element_count',
            'minBundledProducts': 'min_bundled_products',
            'maxBundledProducts': 'max_bundled_products',
            'minQuantity': 'min_quantity',
            'maxQuantity': 'max_quantity',
        })),
        product_sets=None if product_sets is None else ProductSetConfiguration(**_kwargs(product_sets, {
            'elementCount': 'element_count',
            'minSetProducts': 'min_set_products',
            'maxSetProducts': 'max_set_products',
        })),
        shared_variation_attributes=tuple(
            _variation_attribute(a) for a in raw.get('sharedVariationAttributes') or ()
        ),
        shared_options=_options(raw.get('sharedOptions')),
        **_kwargs(raw, {'elementCount': 'element_count'}),
        **_extension(raw),
    )


def build_navigation_config(raw) -> NavigationCatalogConfiguration:
    return NavigationCatalogConfiguration(
        initial_seed=raw[SEED_KEY],
        categories=_categories(raw.get('categories')),
        **_kwargs(raw, {'coverage': 'coverage', 'productSetCoverage': 'product_set_coverage'}),
        **_extension(raw),
    )


def build_inventory_config(raw) -> InventoryConfiguration:
    records = raw.get('inventoryRecords')
    record_config = None
    if records is not None:
        record_config = InventoryRecordConfiguration(
            initial_seed=records[SEED_KEY],
            **_kwargs(records, {'minCount': 'min_count', 'maxCount': 'max_count'}),
            **_extension(records),
        )
    return InventoryConfiguration(
        initial_seed=raw[SEED_KEY],
        inventory_records=record_config,
        **_kwargs(raw, {'coverage': 'coverage', 'elementCount': 'element_count'}),
        **_extension(raw),
    )


def build_pricebook_config(raw, sales=False) -> PricebookConfiguration:
    """Build one price book; ``children`` are built as sale books."""
    if 'id' not in raw:
        raise SpecificationError("Pricebook configuration needs an id")
    currencies = raw.get('currencies')
    return PricebookConfiguration(
        id=str(raw['id']),
        initial_seed=raw[SEED_KEY],
        currencies=None if currencies is None else tuple(str(c) for c in currencies),
        sales=bool(raw.get('sales', sales)),
        children=tuple(build_pricebook_config(child, sales=True) for child in raw.get('children') or ()),
        **_kwargs(raw, {
            'coverage': 'coverage',
            'minAmount': 'min_amount',
            'maxAmount': 'max_amount',
            'minAmountCount': 'min_amount_count',
            'maxAmountCount': 'max_amount_count',
            'elementCount': 'element_count',
        }),
        **_extension(raw),
    )


def build_promotion_config(raw) -> PromotionConfiguration:
    product_raw = raw.get('productConfig')
    order_raw = raw.get('orderConfig')
    discounts = {'elementCount': 'element_count', 'minDiscount': 'min_discount', 'maxDiscount': 'max_discount'}
    return PromotionConfiguration(
        initial_seed=raw[SEED_KEY],
        product_config=None if product_raw is None else ProductPromotionConfiguration(
            initial_seed=product_raw[SEED_KEY],
            **_kwargs(product_raw, {**discounts, 'coverage': 'coverage'}),
            **_extension(product_raw),
        ),
        order_config=None if order_raw is None else OrderPromotionConfiguration(
            initial_seed=order_raw[SEED_KEY],
            **_kwargs(order_raw, {**discounts, 'minThreshold': 'min_threshold', 'maxThreshold': 'max_threshold'}),
            **_extension(order_raw),
        ),
    )


def build_redirect_config(raw) -> RedirectUrlConfiguration:
    return RedirectUrlConfiguration(
        initial_seed=raw[SEED_KEY],
        **_kwargs(raw, {
            'elementCount': 'element_count',
            'productRedirects': 'product_redirects',
            'categoryRedirects': 'category_redirects',
        }),
    )


@dataclass(frozen=True)
class SiteConfiguration:
    """All configuration documents of one site directory."""

    name: str
    currencies: Tuple[str, ...]
    regions: Tuple[Region, ...]
    catalogs: CatalogListConfiguration
    navigation: Optional[NavigationCatalogConfiguration] = None
    inventory: Optional[InventoryConfiguration] = None
    pricebooks: Tuple[PricebookConfiguration, ...] = ()
    promotions: Optional[PromotionConfiguration] = None
    redirects: Optional[RedirectUrlConfiguration] = None


_BUILDERS = {
    'navigation': build_navigation_config,
    'inventory': build_inventory_config,
    'pricebooks': build_pricebook_config,
    'promotions': build_promotion_config,
    'redirects': build_redirect_config,
}


def load_site(config_dir=None, default_seed=None) -> SiteConfiguration:
    """
    Load a site directory.

    ``catalogs.yaml`` is required. ``site.yaml`` (name, currencies, regions)
    and the generator documents are optional; a missing generator document
    disables that generator. Each document is resolved in its own seed
    inheritance session.

    Args:
        config_dir: Directory holding the documents (settings.CONFIG_DIR by default).
        default_seed: Seed for nodes that neither declare nor inherit one
            (settings.SITE_SEED by default).

    Returns:
        SiteConfiguration: The typed site configuration.
    """
    config_dir = Path(config_dir or settings.CONFIG_DIR)
    if default_seed is None:
        default_seed = settings.SITE_SEED

    catalogs_path = config_dir / CATALOGS_FILE
    if not catalogs_path.exists():
        raise SpecificationError(f"Missing required configuration file: {catalogs_path}")
    catalogs = build_catalog_config(resolve_seeds(load_document(catalogs_path) or {}, default_seed))

    site_path = config_dir / SITE_FILE
    site_raw = (load_document(site_path) or {}) if site_path.exists() else {}

    documents = {}
    for key, filename in OPTIONAL_FILES.items():
        path = config_dir / filename
        if not path.exists():
            log_progress('Configuration', f"{filename} not found, skipping {key}")
            continue
        resolved = resolve_seeds(load_document(path) or {}, default_seed)
        if key == 'pricebooks':
            items = resolved if isinstance(resolved, list) else [resolved]
            documents[key] = tuple(build_pricebook_config(item) for item in items)
        else:
            documents[key] = _BUILDERS[key](resolved)

    return SiteConfiguration(
        name=str(site_raw.get('name', 'Site')),
        currencies=tuple(str(c) for c in site_raw.get('currencies') or settings.DEFAULT_CURRENCIES),
        regions=tuple(Region.parse(r) for r in site_raw.get('regions') or settings.DEFAULT_REGIONS),
        catalogs=catalogs,
        **documents,
    )
