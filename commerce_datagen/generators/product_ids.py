"""
Product id sequencing and coverage sampling.

Generators that reference products (inventories, price books, promotions)
re-derive product ids from the catalog configuration with the same seed
formulas the catalog model uses, without building catalogs.
"""

from typing import List, Sequence, Tuple

from commerce_datagen.config.models import CatalogListConfiguration
from commerce_datagen.errors import SpecificationError
from commerce_datagen.models.products import (
    MasterProduct,
    bundle_seed,
    generate_id,
    master_product_seed,
    product_set_seed,
    standard_product_seed,
)
from commerce_datagen.session import GenerationSession
from commerce_datagen.utils.random_data import Region
from commerce_datagen.utils.seeding import SeedContext, SeededRandom


def catalog_seeds(config: CatalogListConfiguration) -> List[int]:
    """Seeds of the configured catalogs, in catalog order."""
    return SeedContext(config.initial_seed).materialize(config.element_count)


def catalog_product_ids(catalog_seed: int, config: CatalogListConfiguration) -> List[str]:
    """
    Ids of one catalog's products: standard, variants, bundles, sets.

    Args:
        catalog_seed: Seed of the catalog.
        config: Catalog list configuration.

    Returns:
        List[str]: Product ids in catalog order.
    """
    ids = [generate_id(standard_product_seed(catalog_seed, idx))
           for idx in range(1, config.products.element_count + 1)]

    for variation_config in config.variation_products:
        for idx in range(1, variation_config.element_count + 1):
            master = MasterProduct(master_product_seed(catalog_seed, idx, variation_config),
                                   (Region.GENERIC,), variation_config)
            ids.extend(variant.id for variant in master.variants)

    if config.bundle_config is not None:
        ids.extend(generate_id(bundle_seed(catalog_seed, idx))
                   for idx in range(1, config.bundle_config.element_count + 1))
    if config.product_sets is not None:
        ids.extend(generate_id(product_set_seed(catalog_seed, idx))
                   for idx in range(1, config.product_sets.element_count + 1))
    return ids


def sample_coverage(seed: int, items: Sequence, coverage: float) -> list:
    """
    Contiguous window covering the share ``coverage`` of items.

    ``coverage >= 1`` returns every item. Otherwise the window holds
    ``int(len * coverage)`` items and starts at a seeded offset below
    ``int(len * (1 - coverage))``.

    Raises:
        SpecificationError: If coverage is not positive.
    """
    if coverage <= 0:
        raise SpecificationError(f"coverage must be greater than 0, got {coverage}")
    items = list(items)
    if coverage >= 1:
        return items
    total = len(items)
    skip_bound = int(total * (1 - coverage))
    skip = SeededRandom(seed).next_int(skip_bound) if skip_bound > 0 else 0
    take = int(total * coverage)
    return items[skip:skip + take]


class ProductIdSequencer:
    """
    Product ids of a catalog configuration, memoized in the generation session.

    Every generator of a session asking for the same configuration gets the
    same tuple.
    """

    def __init__(self, session: GenerationSession):
        self.session = session

    def product_ids(self, config: CatalogListConfiguration) -> Tuple[str, ...]:
        return self.session.cached_product_ids(
            config,
            lambda: [pid for seed in catalog_seeds(config) for pid in catalog_product_ids(seed, config)],
        )

    def total_product_count(self, config: CatalogListConfiguration) -> int:
        return len(self.product_ids(config))

    def covered_product_ids(self, config: CatalogListConfiguration, seed: int, coverage: float) -> List[str]:
        """The coverage window of the configuration's product ids."""
        return sample_coverage(seed, self.product_ids(config), coverage)
