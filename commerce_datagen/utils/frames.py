"""
Tabular (pandas) views of generated objects.

One row per object; localized texts are taken in the first region of the
object. Empty inputs give empty frames with the expected columns.
"""

from typing import Dict, Iterable, Sequence

import pandas as pd

from commerce_datagen.models.attributes import AttributeDefinition
from commerce_datagen.models.catalogs import MasterCatalog
from commerce_datagen.models.categories import CategoryAssignment
from commerce_datagen.models.inventory import Inventory
from commerce_datagen.models.pricebooks import Pricebook
from commerce_datagen.models.products import BundleProduct, ProductSet, StandardProduct
from commerce_datagen.models.promotions import OrderPromotion, ProductPromotion, Promotion
from commerce_datagen.models.redirects import RedirectUrl

PRODUCT_COLUMNS = ['catalog_id', 'product_id', 'kind', 'master_id', 'name', 'page_title', 'option_count',
                   'item_count']
CATEGORY_COLUMNS = ['catalog_id', 'category_id', 'parent_id', 'level', 'name', 'description']
ASSIGNMENT_COLUMNS = ['catalog_id', 'product_id', 'category_id']
INVENTORY_COLUMNS = ['list_id', 'product_id', 'allocation', 'ats', 'allocation_datetime']
PRICE_COLUMNS = ['pricebook_id', 'parent_id', 'currency', 'product_id', 'quantity', 'amount']
PROMOTION_COLUMNS = ['promotion_id', 'kind', 'catalog_id', 'name', 'category_id', 'discount', 'threshold',
                     'product_count']
REDIRECT_COLUMNS = ['kind', 'source_uri', 'destination_type', 'destination_id', 'destination_url', 'status_code']
ATTRIBUTE_COLUMNS = ['object_type', 'attribute_id', 'path', 'display_name', 'type', 'generation_strategy',
                     'searchable']


def _first(localized: Dict) -> str:
    return next(iter(localized.values()), None)


def _product_row(catalog_id, product, master_id=None):
    row = {
        'catalog_id': catalog_id,
        'product_id': product.id,
        'kind': product.kind,
        'master_id': master_id,
        'name': _first(product.name),
        'page_title': _first(product.page_title),
        'option_count': 0,
        'item_count': 0,
    }
    match product:
        case StandardProduct():
            row['option_count'] = len(product.shared_options) + len(product.local_options)
        case BundleProduct():
            row['item_count'] = len(product.bundled_products)
        case ProductSet():
            row['item_count'] = len(product.products)
    return row


def products_frame(catalogs: Sequence[MasterCatalog]) -> pd.DataFrame:
    """
    All products of the catalogs: standard, masters, variants, bundles, sets.

    Args:
        catalogs: Master catalogs.

    Returns:
        pd.DataFrame: One row per product, variants reference their master.
    """
    rows = []
    for catalog in catalogs:
        rows.extend(_product_row(catalog.id, p) for p in catalog.products)
        for master in catalog.master_products:
            rows.append(_product_row(catalog.id, master))
            rows.extend(_product_row(catalog.id, v, master.id) for v in master.variants)
        rows.extend(_product_row(catalog.id, p) for p in catalog.bundles)
        rows.extend(_product_row(catalog.id, p) for p in catalog.product_sets)
    return pd.DataFrame(rows, columns=PRODUCT_COLUMNS)


def categories_frame(catalogs) -> pd.DataFrame:
    rows = [
        {
            'catalog_id': catalog.id,
            'category_id': category.id,
            'parent_id': category.parent_id,
            'level': category.level,
            'name': _first(category.name),
            'description': _first(category.description),
        }
        for catalog in catalogs
        for category in catalog.categories
    ]
    return pd.DataFrame(rows, columns=CATEGORY_COLUMNS)


def category_assignments_frame(catalog_id: str, assignments: Iterable[CategoryAssignment]) -> pd.DataFrame:
    rows = [
        {'catalog_id': catalog_id, 'product_id': a.product.id, 'category_id': a.category.id}
        for a in assignments
    ]
    return pd.DataFrame(rows, columns=ASSIGNMENT_COLUMNS)


def inventory_records_frame(inventories: Iterable[Inventory]) -> pd.DataFrame:
    rows = [
        {
            'list_id': inventory.list_id,
            'product_id': record.product_id,
            'allocation': record.allocation,
            'ats': record.ats,
            'allocation_datetime': record.allocation_datetime,
        }
        for inventory in inventories
        for record in inventory.records
    ]
    return pd.DataFrame(rows, columns=INVENTORY_COLUMNS)


def price_tables_frame(pricebooks: Iterable[Pricebook]) -> pd.DataFrame:
    rows = [
        {
            'pricebook_id': pricebook.id,
            'parent_id': pricebook.parent_id,
            'currency': pricebook.currency,
            'product_id': table.product_id,
            'quantity': amount.quantity,
            'amount': amount.amount,
        }
        for pricebook in pricebooks
        for table in pricebook.price_tables
        for amount in table.amounts
    ]
    return pd.DataFrame(rows, columns=PRICE_COLUMNS)


def _promotion_row(promotion: Promotion):
    row = {
        'promotion_id': promotion.id,
        'kind': promotion.kind,
        'catalog_id': promotion.catalog_id,
        'name': promotion.name,
        'category_id': None,
        'discount': None,
        'threshold': None,
        'product_count': 0,
    }
    match promotion:
        case ProductPromotion():
            row.update(category_id=promotion.discounted_category, discount=promotion.discount,
                       product_count=len(promotion.product_ids))
        case OrderPromotion():
            row.update(category_id=promotion.qualifying_category, discount=promotion.discount,
                       threshold=promotion.threshold)
    return row


def promotions_frame(promotions: Iterable[Promotion]) -> pd.DataFrame:
    return pd.DataFrame([_promotion_row(p) for p in promotions], columns=PROMOTION_COLUMNS)


def redirect_urls_frame(redirects: Iterable[RedirectUrl]) -> pd.DataFrame:
    rows = [
        {
            'kind': r.kind,
            'source_uri': r.source_uri,
            'destination_type': r.destination_type,
            'destination_id': r.destination_id,
            'destination_url': r.destination_url,
            'status_code': r.status_code,
        }
        for r in redirects
    ]
    return pd.DataFrame(rows, columns=REDIRECT_COLUMNS)


def attribute_definitions_frame(metadata: Dict[str, Sequence[AttributeDefinition]]) -> pd.DataFrame:
    rows = [
        {
            'object_type': object_type,
            'attribute_id': d.id,
            'path': d.path,
            'display_name': d.display_name,
            'type': str(d.data_type),
            'generation_strategy': d.generation_strategy.value,
            'searchable': d.searchable,
        }
        for object_type, definitions in metadata.items()
        for d in definitions
    ]
    return pd.DataFrame(rows, columns=ATTRIBUTE_COLUMNS)
