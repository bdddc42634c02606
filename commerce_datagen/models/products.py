"""
Product model.

A product is one of StandardProduct, MasterProduct, VariationProduct,
BundleProduct or ProductSet. Everything about a product derives from its
seed; the seed formulas below are shared by the catalog model and the
product id sequencer so both always agree.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Tuple

from commerce_datagen.config.models import (
    BundleProductConfiguration,
    DataType,
    GenerationStrategy,
    ProductSetConfiguration,
    VariationProductConfiguration,
)
from commerce_datagen.config.settings import PRODUCT_ID_PREFIX
from commerce_datagen.generators.variants import expand_variants
from commerce_datagen.models.attributes import AttributeDefinition, CustomAttribute
from commerce_datagen.models.options import ProductOption
from commerce_datagen.utils.random_data import Region, book_cite, random_noun
from commerce_datagen.utils.seeding import SeededRandom, derive_seed, fnv1a_64, wrap64


def generate_id(seed: int) -> str:
    return f"{PRODUCT_ID_PREFIX}-{abs(seed)}"


def standard_product_seed(catalog_seed: int, index: int) -> int:
    """Seed of the index-th (1-based) standard product of a catalog."""
    return derive_seed(catalog_seed, f"product{index}")


def master_product_seed(catalog_seed: int, index: int, variation_config: VariationProductConfiguration) -> int:
    return wrap64(catalog_seed + fnv1a_64(f"master{index}") + variation_config.fingerprint())


def bundle_seed(catalog_seed: int, index: int) -> int:
    return wrap64(catalog_seed * fnv1a_64(f"bundleProduct{index}"))


def product_set_seed(catalog_seed: int, index: int) -> int:
    return wrap64(catalog_seed * fnv1a_64(f"productSet{index}"))


def variation_attribute_definition(name: str, values: Tuple[str, ...]) -> AttributeDefinition:
    return AttributeDefinition(f"product.{name}", DataType.STRING, False, GenerationStrategy.LIST, tuple(values))


@dataclass(frozen=True)
class Product:
    """
    Base of all product kinds.

    Attributes:
        seed: Every property of the product derives from this.
        regions: Languages localized texts are generated for.
    """

    kind: ClassVar[str] = 'product'

    seed: int
    regions: Tuple[Region, ...]

    @property
    def id(self) -> str:
        return generate_id(self.seed)

    def _localized(self, label, generate) -> Dict[Region, str]:
        seed = derive_seed(self.seed, label)
        return {region: generate(seed, region) for region in self.regions}

    @property
    def name(self) -> Dict[Region, str]:
        return self._localized('name', random_noun)

    @property
    def short_description(self) -> Dict[Region, str]:
        return self._localized('shortDescription', lambda seed, region: book_cite(seed, 200, region))

    @property
    def long_description(self) -> Dict[Region, str]:
        return self._localized('longDescription', lambda seed, region: book_cite(seed, 1000, region))

    @property
    def page_title(self) -> Dict[Region, str]:
        return self._localized('pageTitle', random_noun)

    @property
    def page_description(self) -> Dict[Region, str]:
        return self._localized('pageDescription', lambda seed, region: book_cite(seed, 128, region))

    def has_options(self) -> bool:
        return False


@dataclass(frozen=True)
class StandardProduct(Product):
    kind: ClassVar[str] = 'standard'

    shared_options: Tuple[ProductOption, ...] = ()
    local_options: Tuple[ProductOption, ...] = ()
    attribute_definitions: Tuple[AttributeDefinition, ...] = ()

    @property
    def custom_attributes(self) -> List[CustomAttribute]:
        return [CustomAttribute(d, derive_seed(self.seed, d.id)) for d in self.attribute_definitions]

    def has_options(self) -> bool:
        return bool(self.shared_options or self.local_options)


@dataclass(frozen=True)
class VariationProduct(Product):
    """One variant of a master product; ``attributes`` holds its ``(name, value)`` pairs."""

    kind: ClassVar[str] = 'variation'

    attributes: Tuple[Tuple[str, str], ...] = ()

    @property
    def custom_attributes(self) -> List[CustomAttribute]:
        return [
            CustomAttribute(
                AttributeDefinition(f"product.{name}", DataType.STRING, False, GenerationStrategy.STATIC, value),
                0,
            )
            for name, value in self.attributes
        ]


@dataclass(frozen=True)
class MasterProduct(Product):
    """A variation master; its variants are recomputed on every access."""

    kind: ClassVar[str] = 'master'

    config: VariationProductConfiguration = None

    @property
    def variants(self) -> List[VariationProduct]:
        return [
            VariationProduct(variant_seed, self.regions, combination)
            for variant_seed, combination in expand_variants(self.seed, self.config.attributes)
        ]

    @property
    def local_variation_attributes(self) -> List[AttributeDefinition]:
        return [variation_attribute_definition(a.name, a.values) for a in self.config.local_variation_attributes]

    @property
    def shared_variation_attributes(self) -> List[AttributeDefinition]:
        local = set(self.config.local_variation_attributes)
        return [
            variation_attribute_definition(a.name, a.values)
            for a in self.config.attributes if a not in local
        ]


def _window(rng: SeededRandom, products: List[Product], min_count: int, max_count: int) -> List[Product]:
    """Contiguous slice of products, its size drawn from [min_count, max_count)."""
    count = rng.next_in_range(min_count, max_count)
    if len(products) <= count:
        return list(products)
    start = rng.next_int(len(products) - count)
    return products[start:start + count]


@dataclass(frozen=True)
class BundleProduct(Product):
    """A bundle of sibling products of the owning catalog, each with a quantity."""

    kind: ClassVar[str] = 'bundle'

    config: BundleProductConfiguration = None
    catalog: Any = field(default=None, compare=False, repr=False)

    @property
    def bundled_products(self) -> List[Tuple[Product, int]]:
        rng = SeededRandom(self.seed)
        products = _window(rng, self.catalog.all_products(),
                           self.config.min_bundled_products, self.config.max_bundled_products)
        return [
            (product, rng.next_in_range(self.config.min_quantity, self.config.max_quantity))
            for product in products
        ]


@dataclass(frozen=True)
class ProductSet(Product):
    """A set of sibling products of the owning catalog."""

    kind: ClassVar[str] = 'set'

    config: ProductSetConfiguration = None
    catalog: Any = field(default=None, compare=False, repr=False)

    @property
    def products(self) -> List[Product]:
        rng = SeededRandom(self.seed)
        return _window(rng, self.catalog.all_products(), self.config.min_set_products, self.config.max_set_products)
