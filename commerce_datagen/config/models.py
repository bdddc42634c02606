"""
Typed configuration nodes.

Every node is a frozen dataclass with tuple-valued collections, so two nodes
built from the same document compare (and hash) equal. ``fingerprint()`` is
the stable counterpart of ``hash()`` that generators mix into seeds and ids.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from commerce_datagen.config.settings import (
    BUNDLES_PER_CATALOG,
    CATALOG_COUNT,
    CATEGORY_COUNT,
    CATEGORY_TREE_BREADTH,
    CATEGORY_TREE_DEPTH,
    GENERATED_ATTRIBUTE_COUNT,
    MASTER_PRODUCTS_PER_CONFIG,
    PRODUCT_SETS_PER_CATALOG,
    PRODUCTS_PER_CATALOG,
)
from commerce_datagen.errors import SpecificationError
from commerce_datagen.utils.seeding import fnv1a_64


def _require_range(owner, min_name, min_value, max_name, max_value):
    if max_value < min_value:
        raise SpecificationError(
            f"{owner}: {max_name} ({max_value}) needs to be greater equal {min_name} ({min_value})"
        )


def _require_non_negative(owner, **values):
    for name, value in values.items():
        if value < 0:
            raise SpecificationError(f"{owner}: {name} must not be negative, got {value}")


def _require_coverage(owner, name, value):
    if value <= 0:
        raise SpecificationError(f"{owner}: {name} must be greater than 0, got {value}")


class ConfigNode:
    """Mixin for configuration dataclasses."""

    def fingerprint(self) -> int:
        """Stable 64-bit hash of the node's content (same in every process)."""
        return fnv1a_64(repr(self))


class DataType(Enum):
    BOOLEAN = 'boolean'
    STRING = 'string'
    DATE = 'date'
    EMAIL = 'email'

    def __str__(self):
        return self.value


class GenerationStrategy(Enum):
    LIST = 'list'
    RANDOM = 'random'
    STATIC = 'static'
    COUNTER = 'counter'


@dataclass(frozen=True)
class CounterConfig(ConfigNode):
    offset: int = 0
    increment: int = 1


@dataclass(frozen=True)
class AttributeConfig(ConfigNode):
    """
    A user-defined custom attribute.

    The payload field matching ``generation_strategy`` must be set:
    ``static_value`` for STATIC, ``counter`` for COUNTER and ``values`` for LIST.
    """

    type: DataType
    generation_strategy: GenerationStrategy
    searchable: bool = False
    static_value: Optional[str] = None
    counter: Optional[CounterConfig] = None
    values: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.generation_strategy is GenerationStrategy.STATIC and self.static_value is None:
            raise SpecificationError("static attribute needs a staticValue")
        if self.generation_strategy is GenerationStrategy.COUNTER and self.counter is None:
            raise SpecificationError("counter attribute needs a counter definition")
        if self.generation_strategy is GenerationStrategy.LIST and not self.values:
            raise SpecificationError("list attribute needs a non-empty list of values")


@dataclass(frozen=True)
class GeneratedAttributeConfig(ConfigNode):
    """
    Randomly generated custom attributes.

    Attributes:
        element_count: Number of attributes to generate.
        thereof_searchable: The first ``thereof_searchable`` of them are searchable.
    """

    element_count: int = GENERATED_ATTRIBUTE_COUNT
    thereof_searchable: int = 0

    def __post_init__(self):
        _require_non_negative('generatedAttributes', elementCount=self.element_count,
                              thereofSearchable=self.thereof_searchable)
        if self.thereof_searchable > self.element_count:
            raise SpecificationError(
                "searchable attributes count must be lower/equal than total number of attributes"
            )


CustomAttributes = Tuple[Tuple[str, AttributeConfig], ...]


@dataclass(frozen=True)
class CategoryConfiguration(ConfigNode):
    element_count: int = CATEGORY_COUNT
    tree_depth: int = CATEGORY_TREE_DEPTH
    tree_breadth: int = CATEGORY_TREE_BREADTH
    template: Optional[str] = None

    def __post_init__(self):
        _require_non_negative('categories', elementCount=self.element_count,
                              categoryTreeDepth=self.tree_depth, categoryTreeBreadth=self.tree_breadth)


@dataclass(frozen=True)
class ProductOptionConfiguration(ConfigNode):
    element_count: int = 10
    min_values: int = 1
    max_values: int = 5
    min_price: float = 0.01
    max_price: float = 500.0
    probability: float = 0.1

    def __post_init__(self):
        _require_range('options', 'minValues', self.min_values, 'maxValues', self.max_values)
        _require_range('options', 'minPrice', self.min_price, 'maxPrice', self.max_price)
        if not 0.0 <= self.probability <= 1.0:
            raise SpecificationError(f"options: probability must be in [0,1], got {self.probability}")


@dataclass(frozen=True)
class ProductConfiguration(ConfigNode):
    """Standard products (with options, no variants)."""

    initial_seed: int
    element_count: int = PRODUCTS_PER_CATALOG
    options: Optional[ProductOptionConfiguration] = None
    generated_attributes: Optional[GeneratedAttributeConfig] = None
    custom_attributes: CustomAttributes = ()


@dataclass(frozen=True)
class VariationAttributeConfiguration(ConfigNode):
    """
    One variation attribute.

    Attributes:
        name: Attribute key.
        values: Candidate values, in declaration order.
        probability: Chance of each value being offered by any given master product.
    """

    name: str
    values: Tuple[str, ...]
    probability: float = 1.0

    def __post_init__(self):
        if not 0.0 <= self.probability <= 1.0:
            raise SpecificationError(f"Probability for {self.name} must be in [0,1]")


@dataclass(frozen=True)
class VariationProductConfiguration(ConfigNode):
    """
    Variation master products.

    ``attributes`` holds the local attributes followed by the selected shared
    ones; it is filled in by the owning CatalogListConfiguration.
    """

    element_count: int = MASTER_PRODUCTS_PER_CONFIG
    local_variation_attributes: Tuple[VariationAttributeConfiguration, ...] = ()
    shared_variation_attributes: Tuple[str, ...] = ()
    attributes: Tuple[VariationAttributeConfiguration, ...] = ()


@dataclass(frozen=True)
class BundleProductConfiguration(ConfigNode):
    element_count: int = BUNDLES_PER_CATALOG
    min_bundled_products: int = 2
    max_bundled_products: int = 5
    min_quantity: int = 1
    max_quantity: int = 5

    def __post_init__(self):
        _require_range('bundles', 'minBundledProducts', self.min_bundled_products,
                       'maxBundledProducts', self.max_bundled_products)
        _require_range('bundles', 'minQuantity', self.min_quantity, 'maxQuantity', self.max_quantity)


@dataclass(frozen=True)
class ProductSetConfiguration(ConfigNode):
    element_count: int = PRODUCT_SETS_PER_CATALOG
    min_set_products: int = 2
    max_set_products: int = 10

    def __post_init__(self):
        _require_range('productSets', 'minSetProducts', self.min_set_products,
                       'maxSetProducts', self.max_set_products)


@dataclass(frozen=True)
class CatalogListConfiguration(ConfigNode):
    """
    Root configuration of the catalog generator.

    ``custom_attributes`` / ``generated_attributes`` extend categories; product
    attributes live on ``products``.
    """

    initial_seed: int
    element_count: int = CATALOG_COUNT
    categories: CategoryConfiguration = field(default_factory=CategoryConfiguration)
    products: Optional[ProductConfiguration] = None
    variation_products: Tuple[VariationProductConfiguration, ...] = ()
    bundle_config: Optional[BundleProductConfiguration] = None
    product_sets: Optional[ProductSetConfiguration] = None
    custom_attributes: CustomAttributes = ()
    generated_attributes: Optional[GeneratedAttributeConfig] = None
    shared_variation_attributes: Tuple[VariationAttributeConfiguration, ...] = ()
    shared_options: Optional[ProductOptionConfiguration] = None

    def __post_init__(self):
        if self.products is None:
            object.__setattr__(self, 'products', ProductConfiguration(initial_seed=self.initial_seed))

        shared_by_name = {attr.name: attr for attr in self.shared_variation_attributes}
        for variation_config in self.variation_products:
            unknown = [name for name in variation_config.shared_variation_attributes if name not in shared_by_name]
            if unknown:
                raise SpecificationError(f"Unknown shared variation attributes: {', '.join(unknown)}")
        resolved = tuple(
            replace(
                variation_config,
                attributes=variation_config.local_variation_attributes + tuple(
                    attr for attr in self.shared_variation_attributes
                    if attr.name in variation_config.shared_variation_attributes
                ),
            )
            for variation_config in self.variation_products
        )
        object.__setattr__(self, 'variation_products', resolved)


@dataclass(frozen=True)
class NavigationCatalogConfiguration(ConfigNode):
    """A site catalog assigning a coverage share of the master catalogs' products."""

    initial_seed: int
    coverage: float = 1.0
    product_set_coverage: float = 1.0
    categories: CategoryConfiguration = field(default_factory=CategoryConfiguration)
    custom_attributes: CustomAttributes = ()
    generated_attributes: Optional[GeneratedAttributeConfig] = None

    def __post_init__(self):
        _require_coverage('navigation-catalog', 'coverage', self.coverage)
        _require_coverage('navigation-catalog', 'productSetCoverage', self.product_set_coverage)


@dataclass(frozen=True)
class InventoryRecordConfiguration(ConfigNode):
    initial_seed: int
    min_count: int = 0
    max_count: int = 1000
    custom_attributes: CustomAttributes = ()
    generated_attributes: Optional[GeneratedAttributeConfig] = None

    def __post_init__(self):
        _require_range('inventoryRecords', 'minCount', self.min_count, 'maxCount', self.max_count)


@dataclass(frozen=True)
class InventoryConfiguration(ConfigNode):
    initial_seed: int
    inventory_records: Optional[InventoryRecordConfiguration] = None
    coverage: float = 1.0
    element_count: int = 1
    custom_attributes: CustomAttributes = ()
    generated_attributes: Optional[GeneratedAttributeConfig] = None

    def __post_init__(self):
        _require_coverage('inventories', 'coverage', self.coverage)
        if self.inventory_records is None:
            object.__setattr__(self, 'inventory_records', InventoryRecordConfiguration(initial_seed=self.initial_seed))


@dataclass(frozen=True)
class PricebookConfiguration(ConfigNode):
    """
    Price books; ``children`` are generated once per parent (as sale books).

    Attributes:
        coverage: ``>= 1`` prices every product, ``0.75`` prices a 75% window.
        currencies: Overrides the site currencies when set.
    """

    id: str
    initial_seed: int
    coverage: float = 1.0
    min_amount: float = 0.01
    max_amount: float = 2000.0
    min_amount_count: int = 1
    max_amount_count: int = 5
    currencies: Optional[Tuple[str, ...]] = None
    sales: bool = False
    custom_attributes: CustomAttributes = ()
    generated_attributes: Optional[GeneratedAttributeConfig] = None
    children: Tuple['PricebookConfiguration', ...] = ()
    element_count: int = 1

    def __post_init__(self):
        _require_coverage('pricebooks', 'coverage', self.coverage)
        _require_range('pricebooks', 'minAmount', self.min_amount, 'maxAmount', self.max_amount)
        _require_range('pricebooks', 'minAmountCount', self.min_amount_count,
                       'maxAmountCount', self.max_amount_count)


@dataclass(frozen=True)
class ProductPromotionConfiguration(ConfigNode):
    initial_seed: int
    element_count: int = 5
    min_discount: int = 1
    max_discount: int = 50
    coverage: float = 0.05
    custom_attributes: CustomAttributes = ()
    generated_attributes: Optional[GeneratedAttributeConfig] = None

    def __post_init__(self):
        _require_range('productConfig', 'minDiscount', self.min_discount, 'maxDiscount', self.max_discount)
        _require_coverage('productConfig', 'coverage', self.coverage)


@dataclass(frozen=True)
class OrderPromotionConfiguration(ConfigNode):
    initial_seed: int
    element_count: int = 5
    min_discount: int = 1
    max_discount: int = 50
    min_threshold: float = 10.0
    max_threshold: float = 500.0
    custom_attributes: CustomAttributes = ()
    generated_attributes: Optional[GeneratedAttributeConfig] = None

    def __post_init__(self):
        _require_range('orderConfig', 'minDiscount', self.min_discount, 'maxDiscount', self.max_discount)
        _require_range('orderConfig', 'minThreshold', self.min_threshold, 'maxThreshold', self.max_threshold)


@dataclass(frozen=True)
class PromotionConfiguration(ConfigNode):
    initial_seed: int
    product_config: Optional[ProductPromotionConfiguration] = None
    order_config: Optional[OrderPromotionConfiguration] = None


@dataclass(frozen=True)
class RedirectUrlConfiguration(ConfigNode):
    initial_seed: int
    element_count: int = 10
    product_redirects: int = 10
    category_redirects: int = 10

    def __post_init__(self):
        _require_non_negative('redirectUrls', elementCount=self.element_count,
                              productRedirects=self.product_redirects,
                              categoryRedirects=self.category_redirects)
