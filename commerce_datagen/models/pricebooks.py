"""
Price books, price tables and quantity-tiered amounts.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from commerce_datagen.config.models import PricebookConfiguration
from commerce_datagen.config.settings import SALE_DISCOUNT
from commerce_datagen.models.attributes import AttributeDefinition, CustomAttribute
from commerce_datagen.models.options import exchange_rate
from commerce_datagen.utils.seeding import SeedContext, SeededRandom, wrap64


@dataclass(frozen=True)
class Amount:
    """Unit price of a product when ordering at least ``quantity`` items."""

    seed: int
    config: PricebookConfiguration
    quantity: int
    currency: str
    sale: bool = False

    @property
    def amount(self) -> float:
        draw = SeededRandom(self.seed).next_double()
        price = (self.config.min_amount + (self.config.max_amount - self.config.min_amount) * draw) / self.quantity
        price *= exchange_rate(self.currency)
        if self.sale:
            price *= 1 - SALE_DISCOUNT
        return round(price, 2)


@dataclass(frozen=True)
class PriceTable:
    product_id: str
    seed: int
    config: PricebookConfiguration
    currency: str
    sale: bool = False

    @property
    def amounts(self) -> List[Amount]:
        count = 1
        if self.config.max_amount_count > 1:
            count = SeededRandom(self.seed).next_in_range(self.config.min_amount_count, self.config.max_amount_count)
        return [Amount(self.seed, self.config, quantity, self.currency, self.sale)
                for quantity in range(1, count + 1)]


@dataclass(frozen=True)
class Pricebook:
    """
    Prices of a window of the catalog products in one currency.

    Attributes:
        config: Configuration of this price book (the child configuration for child books).
        currency: Currency of every price in the book.
        seed: Seed of the book; a child shares the seed of its parent.
        product_ids: Products priced by this book.
        index: 1-based position among the books of the configuration.
        catalog_fingerprint: Fingerprint of the catalog configuration.
        parent: Parent book, None for parent books.
    """

    config: PricebookConfiguration
    currency: str
    seed: int
    product_ids: Tuple[str, ...]
    index: int
    catalog_fingerprint: int
    attribute_definitions: Tuple[AttributeDefinition, ...] = ()
    parent: Optional['Pricebook'] = None

    @property
    def id(self) -> str:
        digest = abs(wrap64(self.config.fingerprint() * self.catalog_fingerprint))
        return f"{self.config.id}-{self.currency}-{digest}-{self.index}"

    @property
    def parent_id(self) -> Optional[str]:
        return self.parent.id if self.parent is not None else None

    @property
    def sale_price_book(self) -> bool:
        return self.parent is not None or self.config.sales

    @property
    def price_tables(self) -> List[PriceTable]:
        rng = SeededRandom(self.seed)
        return [PriceTable(product_id, rng.next_long(), self.config, self.currency, self.sale_price_book)
                for product_id in self.product_ids]

    @property
    def custom_attributes(self) -> List[CustomAttribute]:
        rng = SeedContext(self.seed).derive('customAttributes').rng()
        return [CustomAttribute(d, rng.next_long()) for d in self.attribute_definitions]
