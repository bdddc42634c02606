"""
Master and navigation catalogs.
"""

from functools import cached_property
from typing import Dict, List, Sequence, Tuple

from commerce_datagen.config.models import (
    CatalogListConfiguration,
    CategoryConfiguration,
    NavigationCatalogConfiguration,
)
from commerce_datagen.generators.categories import build_category_tree
from commerce_datagen.models.attributes import AttributeDefinition
from commerce_datagen.models.categories import Category, CategoryAssignment, construct_category_assignments
from commerce_datagen.models.options import ProductOption, generate_product_options
from commerce_datagen.models.products import (
    BundleProduct,
    MasterProduct,
    Product,
    ProductSet,
    StandardProduct,
    bundle_seed,
    master_product_seed,
    product_set_seed,
    standard_product_seed,
    variation_attribute_definition,
)
from commerce_datagen.utils.random_data import Region, random_noun
from commerce_datagen.utils.seeding import SeededRandom, derive_seed


class Catalog:
    """Common part of master and navigation catalogs: identity, name and category forest."""

    def __init__(self, seed: int, categories_config: CategoryConfiguration, catalog_index: int,
                 regions: Sequence[Region], category_attributes: Sequence[AttributeDefinition] = ()):
        self.seed = seed
        self.categories_config = categories_config
        self.catalog_index = catalog_index
        self.regions = tuple(regions)
        self.category_attributes = tuple(category_attributes)

    @property
    def id(self) -> str:
        return f"{type(self).__name__}_{abs(derive_seed(self.seed, 'catalogId'))}"

    @property
    def name(self) -> Dict[Region, str]:
        seed = derive_seed(self.seed, 'name')
        return {region: random_noun(seed, region) for region in self.regions}

    @cached_property
    def categories(self) -> Tuple[Category, ...]:
        config = self.categories_config
        categories = []
        for node in build_category_tree(config.element_count, config.tree_depth, config.tree_breadth, self.seed):
            parent = categories[node.parent_index] if node.parent_index is not None else None
            categories.append(Category(
                parent, node.seed, self.catalog_index, node.index, node.level,
                config.template, self.regions, self.category_attributes,
            ))
        return tuple(categories)

    @property
    def category_assignments(self) -> List[CategoryAssignment]:
        raise NotImplementedError


class MasterCatalog(Catalog):
    """
    A catalog owning products.

    Args:
        seed: Catalog seed (drawn from the catalog list configuration's seed).
        config: Catalog list configuration.
        catalog_index: 1-based index of the catalog.
        currencies: Currencies option values are priced in.
        regions: Languages of the localized texts.
        product_attributes: Custom attribute definitions of standard products.
        category_attributes: Custom attribute definitions of categories.
    """

    def __init__(self, seed: int, config: CatalogListConfiguration, catalog_index: int,
                 currencies: Sequence[str], regions: Sequence[Region],
                 product_attributes: Sequence[AttributeDefinition] = (),
                 category_attributes: Sequence[AttributeDefinition] = ()):
        super().__init__(seed, config.categories, catalog_index, regions, category_attributes)
        self.config = config
        self.currencies = tuple(currencies)
        self.product_attributes = tuple(product_attributes)

    @cached_property
    def shared_options(self) -> Tuple[ProductOption, ...]:
        return generate_product_options(
            self.config.shared_options, self.currencies, derive_seed(self.seed, 'sharedOptions'),
        )

    @cached_property
    def products(self) -> Tuple[StandardProduct, ...]:
        """Standard products; option draws are materialized before products are built."""
        product_config = self.config.products
        shared_config = self.config.shared_options
        local_config = product_config.options

        rng = SeededRandom(self.seed)
        draws = []
        for _ in range(product_config.element_count):
            shared = (rng.next_float(), rng.next_int(len(self.shared_options) + 1)) if shared_config else (0.0, 0)
            local = (rng.next_float(), rng.next_long()) if local_config else (0.0, 0)
            draws.append((shared, local))

        products = []
        for idx, ((shared_draw, shared_count), (local_draw, local_seed)) in enumerate(draws):
            shared_options = ()
            if shared_config is not None and shared_draw < shared_config.probability:
                shared_options = self.shared_options[:shared_count]
            local_options = ()
            if local_config is not None and local_draw < local_config.probability:
                local_options = generate_product_options(local_config, self.currencies, local_seed)
            products.append(StandardProduct(
                standard_product_seed(self.seed, idx + 1), self.regions,
                shared_options, local_options, self.product_attributes,
            ))
        return tuple(products)

    @cached_property
    def master_products(self) -> Tuple[MasterProduct, ...]:
        return tuple(
            MasterProduct(master_product_seed(self.seed, idx, variation_config), self.regions, variation_config)
            for variation_config in self.config.variation_products
            for idx in range(1, variation_config.element_count + 1)
        )

    @cached_property
    def bundles(self) -> Tuple[BundleProduct, ...]:
        bundle_config = self.config.bundle_config
        if bundle_config is None:
            return ()
        return tuple(
            BundleProduct(bundle_seed(self.seed, idx), self.regions, bundle_config, self)
            for idx in range(1, bundle_config.element_count + 1)
        )

    @cached_property
    def product_sets(self) -> Tuple[ProductSet, ...]:
        set_config = self.config.product_sets
        if set_config is None:
            return ()
        return tuple(
            ProductSet(product_set_seed(self.seed, idx), self.regions, set_config, self)
            for idx in range(1, set_config.element_count + 1)
        )

    @property
    def shared_variation_attributes(self) -> List[AttributeDefinition]:
        return [variation_attribute_definition(a.name, a.values) for a in self.config.shared_variation_attributes]

    @cached_property
    def _sellable_products(self) -> Tuple[Product, ...]:
        variants = tuple(variant for master in self.master_products for variant in master.variants)
        return self.products + self.master_products + variants

    def all_products(self) -> List[Product]:
        """Standard products, masters and variants: the SKUs bundles and sets draw from."""
        return list(self._sellable_products)

    def assignable_products(self) -> List[Product]:
        """Standard, master, bundle and set products, in assignment order."""
        return list(self.products + self.master_products + self.bundles + self.product_sets)

    def all_product_ids(self) -> List[str]:
        """Standard, variant, bundle and set ids; the order the product id sequencer yields."""
        variants = [variant for master in self.master_products for variant in master.variants]
        return [product.id for product in (*self.products, *variants, *self.bundles, *self.product_sets)]

    @property
    def category_assignments(self) -> List[CategoryAssignment]:
        return construct_category_assignments(
            self.assignable_products(), self.categories, derive_seed(self.seed, 'categoryAssignments'),
        )


class NavigationCatalog(Catalog):
    """A site catalog with its own categories, assigning products of the master catalogs."""

    def __init__(self, seed: int, config: NavigationCatalogConfiguration, catalog_index: int,
                 master_catalogs: Sequence[MasterCatalog], site_name: str,
                 regions: Sequence[Region] = (Region.GENERIC,),
                 category_attributes: Sequence[AttributeDefinition] = ()):
        super().__init__(seed, config.categories, catalog_index, regions, category_attributes)
        self.config = config
        self.master_catalogs = list(master_catalogs)
        self.site_name = site_name

    @property
    def id(self) -> str:
        return f"{type(self).__name__}_{abs(derive_seed(self.seed, self.site_name))}"

    @property
    def category_assignments(self) -> List[CategoryAssignment]:
        products = [product for catalog in self.master_catalogs for product in catalog.assignable_products()]
        return construct_category_assignments(
            products, self.categories, derive_seed(self.seed, 'categoryAssignments'),
            self.config.coverage, self.config.product_set_coverage,
        )

    @property
    def assigned_products(self) -> List[Product]:
        return [assignment.product for assignment in self.category_assignments]
