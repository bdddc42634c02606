"""
Categories and product-to-category assignments.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from commerce_datagen.models.attributes import AttributeDefinition, CustomAttribute
from commerce_datagen.models.products import MasterProduct, Product, ProductSet
from commerce_datagen.utils.random_data import Region, random_noun, random_sentence
from commerce_datagen.utils.seeding import SeedContext, derive_seed


@dataclass(frozen=True)
class Category:
    """
    A node of a catalog's category forest.

    Attributes:
        parent: Parent category, None for roots.
        seed: Seed of the category.
        catalog_index: 1-based index of the owning catalog.
        category_index: 0-based position in the forest (breadth first).
        level: Depth in the forest, 0 for roots.
        template: Rendering template, if configured.
        regions: Languages of the localized texts.
        attribute_definitions: Category custom attribute definitions.
    """

    parent: Optional['Category'] = field(compare=False, repr=False)
    seed: int
    catalog_index: int
    category_index: int
    level: int = 0
    template: Optional[str] = None
    regions: Tuple[Region, ...] = (Region.GENERIC,)
    attribute_definitions: Tuple[AttributeDefinition, ...] = field(default=(), compare=False, repr=False)

    @property
    def id(self) -> str:
        first_name = random_noun(derive_seed(self.seed, 'name'), self.regions[0])
        return f"{first_name}_L{self.catalog_index}_{self.category_index}"

    @property
    def parent_id(self) -> Optional[str]:
        return self.parent.id if self.parent is not None else None

    def _localized(self, label, generate) -> Dict[Region, str]:
        seed = derive_seed(self.seed, label)
        return {region: generate(seed, region) for region in self.regions}

    @property
    def name(self) -> Dict[Region, str]:
        return self._localized('name', random_noun)

    @property
    def description(self) -> Dict[Region, str]:
        return self._localized('description', random_sentence)

    @property
    def page_title(self) -> Dict[Region, str]:
        return self._localized('pageTitle', random_noun)

    @property
    def page_description(self) -> Dict[Region, str]:
        return self._localized('pageDescription', random_sentence)

    @property
    def custom_attributes(self) -> List[CustomAttribute]:
        seed = derive_seed(self.seed, 'customAttribute')
        return [CustomAttribute(d, seed) for d in self.attribute_definitions]


@dataclass(frozen=True)
class CategoryAssignment:
    product: Product
    category: Category


def construct_category_assignments(products: Sequence[Product], categories: Sequence[Category], seed: int,
                                   coverage: float = 1.0,
                                   product_set_coverage: float = 1.0) -> List[CategoryAssignment]:
    """
    Assign products to random categories.

    Each product is skipped with probability ``1 - coverage``. A master product
    brings its variants, a product set brings the share
    ``product_set_coverage`` of its items (at least its first item); both are
    assigned to the same category as their owner. Empty product sets are
    skipped.

    Args:
        products: Standard, master, bundle and set products, in that order.
        categories: Target categories.
        seed: Seed of the assignment streams.
        coverage: Share of products to assign.
        product_set_coverage: Share of a product set's items to assign.

    Returns:
        List[CategoryAssignment]: Assignments in product order.
    """
    if not categories:
        return []
    context = SeedContext(seed)
    assignment_rng = context.derive('categoryAssignments').rng()
    product_set_rng = context.derive('productSetAssignments').rng()
    coverage_rng = context.derive('assignmentCoverage').rng()

    assignments = []
    for product in products:
        if coverage_rng.next_float() < 1 - coverage:
            continue
        category = categories[assignment_rng.next_int(len(categories))]

        if isinstance(product, MasterProduct):
            assignments.extend(CategoryAssignment(variant, category) for variant in product.variants)
        elif isinstance(product, ProductSet):
            items = product.products
            if not items:
                continue
            covered = [item for item in items if product_set_rng.next_float() < product_set_coverage]
            assignments.extend(CategoryAssignment(item, category) for item in covered or items[:1])

        assignments.append(CategoryAssignment(product, category))
    return assignments
