"""
Redirect URLs: static, to a product, or to a category.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

from commerce_datagen.models.categories import Category, CategoryAssignment
from commerce_datagen.utils.random_data import random_uri
from commerce_datagen.utils.seeding import SeededRandom, derive_seed

STATUS_CODE = 301


@dataclass(frozen=True)
class RedirectUrl:
    kind: ClassVar[str] = 'redirect'

    seed: int

    status_code = STATUS_CODE

    @property
    def source_uri(self) -> str:
        return random_uri(derive_seed(self.seed, 'sourceUri'))

    @property
    def destination_id(self) -> Optional[str]:
        return None

    @property
    def destination_type(self) -> Optional[str]:
        return None

    @property
    def destination_url(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class StaticRedirectUrl(RedirectUrl):
    """Redirect from one random URI to another."""

    kind: ClassVar[str] = 'static'

    @property
    def destination_url(self) -> str:
        return random_uri(derive_seed(self.seed, 'destinationUrl'))


@dataclass(frozen=True)
class ProductRedirectUrl(RedirectUrl):
    kind: ClassVar[str] = 'product'

    assignment: CategoryAssignment = None

    @property
    def product_category_id(self) -> str:
        return self.assignment.category.id

    @property
    def destination_id(self) -> str:
        return self.assignment.product.id

    @property
    def destination_type(self) -> str:
        return 'product'


@dataclass(frozen=True)
class CategoryRedirectUrl(RedirectUrl):
    kind: ClassVar[str] = 'category'

    categories: Tuple[Category, ...] = ()

    @property
    def destination_id(self) -> str:
        rng = SeededRandom(derive_seed(self.seed, 'destinationUrl'))
        return self.categories[rng.next_int(len(self.categories))].id

    @property
    def destination_type(self) -> str:
        return 'category'
