"""
Inventory lists and their per-product records.
"""

from dataclasses import dataclass
from typing import List, Tuple

from commerce_datagen.config.models import InventoryConfiguration, InventoryRecordConfiguration
from commerce_datagen.config.settings import ALLOCATION_DATETIME
from commerce_datagen.models.attributes import AttributeDefinition, CustomAttribute
from commerce_datagen.utils.random_data import random_sentence
from commerce_datagen.utils.seeding import SeedContext, SeededRandom, derive_seed, wrap64


def _custom_attributes(seed, definitions):
    rng = SeedContext(seed).derive('customAttributes').rng()
    return [CustomAttribute(d, rng.next_long()) for d in definitions]


@dataclass(frozen=True)
class InventoryRecord:
    seed: int
    product_id: str
    config: InventoryRecordConfiguration
    attribute_definitions: Tuple[AttributeDefinition, ...] = ()

    perpetual = False

    @property
    def allocation(self) -> int:
        return SeededRandom(self.seed).next_in_range(self.config.min_count, self.config.max_count)

    @property
    def ats(self) -> int:
        """Available to sell; the same draw as the allocation."""
        return SeededRandom(self.seed).next_in_range(self.config.min_count, self.config.max_count)

    @property
    def allocation_datetime(self) -> str:
        return ALLOCATION_DATETIME.isoformat() + 'Z'

    @property
    def custom_attributes(self) -> List[CustomAttribute]:
        return _custom_attributes(self.seed, self.attribute_definitions)


@dataclass(frozen=True)
class Inventory:
    """
    One inventory list covering a window of the catalog product ids.

    Attributes:
        product_ids: Product ids with a record in this list.
        seed: Seed of the list.
        config: Inventory configuration.
        index: 0-based position of the list.
        catalog_fingerprint: Fingerprint of the catalog configuration the ids belong to.
    """

    product_ids: Tuple[str, ...]
    seed: int
    config: InventoryConfiguration
    index: int
    catalog_fingerprint: int
    list_attributes: Tuple[AttributeDefinition, ...] = ()
    record_attributes: Tuple[AttributeDefinition, ...] = ()

    default_instock = False

    @property
    def list_id(self) -> str:
        return f"inventory-{self.index}-{wrap64(self.config.fingerprint() + self.catalog_fingerprint)}"

    @property
    def description(self) -> str:
        return random_sentence(derive_seed(self.seed, 'inventoryDescription'))

    @property
    def custom_attributes(self) -> List[CustomAttribute]:
        return _custom_attributes(self.seed, self.list_attributes)

    @property
    def records(self) -> List[InventoryRecord]:
        rng = SeededRandom(self.seed)
        return [
            InventoryRecord(rng.next_long(), product_id, self.config.inventory_records, self.record_attributes)
            for product_id in self.product_ids
        ]
