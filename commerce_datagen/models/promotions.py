"""
Product and order promotions.
"""

from dataclasses import dataclass
from typing import ClassVar, List, Optional, Tuple

from commerce_datagen.config.models import OrderPromotionConfiguration, ProductPromotionConfiguration
from commerce_datagen.config.settings import PRODUCT_ID_PREFIX
from commerce_datagen.models.attributes import AttributeDefinition, CustomAttribute
from commerce_datagen.utils.random_data import random_noun, random_sentence
from commerce_datagen.utils.seeding import SeededRandom, derive_seed


@dataclass(frozen=True)
class Promotion:
    kind: ClassVar[str] = 'promotion'

    seed: int
    catalog_id: str
    category_ids: Tuple[str, ...]
    attribute_definitions: Tuple[AttributeDefinition, ...]

    @property
    def id(self) -> str:
        return f"{PRODUCT_ID_PREFIX}-promotion-{abs(derive_seed(self.seed, 'promotionId'))}"

    @property
    def name(self) -> str:
        return random_noun(derive_seed(self.seed, 'promotionName'))

    @property
    def description(self) -> str:
        return random_sentence(derive_seed(self.seed, 'promotionDescription'))

    def _pick_category(self) -> Optional[str]:
        if not self.category_ids:
            return None
        return self.category_ids[SeededRandom(self.seed).next_int(len(self.category_ids))]

    def _discount(self, config) -> int:
        return SeededRandom(self.seed).next_in_range(config.min_discount, config.max_discount)

    @property
    def custom_attributes(self) -> List[CustomAttribute]:
        return [CustomAttribute(d, self.seed) for d in self.attribute_definitions]


@dataclass(frozen=True)
class ProductPromotion(Promotion):
    """Percentage off the products of one category and an explicit product window."""

    kind: ClassVar[str] = 'product'

    config: ProductPromotionConfiguration = None
    product_ids: Tuple[str, ...] = ()

    @property
    def discounted_category(self) -> Optional[str]:
        return self._pick_category()

    @property
    def discount(self) -> int:
        return self._discount(self.config)

    @property
    def callout_msg(self) -> str:
        return f"Get {self.discount}% off!"


@dataclass(frozen=True)
class OrderPromotion(Promotion):
    """Percentage off orders above a threshold containing a product of the qualifying category."""

    kind: ClassVar[str] = 'order'

    config: OrderPromotionConfiguration = None

    @property
    def discount(self) -> int:
        return self._discount(self.config)

    @property
    def threshold(self) -> float:
        draw = SeededRandom(self.seed).next_float()
        return round(draw * (self.config.max_threshold - self.config.min_threshold) + self.config.min_threshold, 2)

    @property
    def qualifying_category(self) -> Optional[str]:
        return self._pick_category()

    @property
    def callout_msg(self) -> str:
        return f"Get {self.discount}% off for your order!"
