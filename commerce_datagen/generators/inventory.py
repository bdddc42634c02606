"""
Generates inventory lists for the products of a catalog configuration.
"""

from typing import Dict, List, Tuple

from commerce_datagen.config import settings
from commerce_datagen.config.models import CatalogListConfiguration, InventoryConfiguration
from commerce_datagen.generators.product_ids import ProductIdSequencer
from commerce_datagen.models.attributes import AttributeDefinition, RandomAttributeRegistry
from commerce_datagen.models.inventory import Inventory
from commerce_datagen.session import GenerationSession
from commerce_datagen.utils.logging_utils import log_progress
from commerce_datagen.utils.seeding import SeedContext


class InventoryAssembler:
    """
    Inventory lists whose records reference the catalog's product ids.

    catalog_config must be the configuration the catalogs were generated
    from, or the record product ids will not match any product.
    """

    def __init__(self, config: InventoryConfiguration, catalog_config: CatalogListConfiguration,
                 session: GenerationSession):
        self.config = config
        self.catalog_config = catalog_config
        self.session = session
        registry = RandomAttributeRegistry(session)
        records = config.inventory_records
        self._list_attributes = registry.attribute_definitions(
            'ProductInventoryList', config.initial_seed, config.custom_attributes, config.generated_attributes,
        )
        self._record_attributes = registry.attribute_definitions(
            'ProductInventoryRecord', records.initial_seed, records.custom_attributes, records.generated_attributes,
        )

    @property
    def inventories(self) -> List[Inventory]:
        sequencer = ProductIdSequencer(self.session)
        seeds = SeedContext(self.config.initial_seed).materialize(self.config.element_count)
        inventories = []
        for idx, seed in enumerate(seeds):
            product_ids = sequencer.covered_product_ids(self.catalog_config, seed, self.config.coverage)
            if settings.VERBOSE:
                log_progress('Inventory', f"list {idx}: {len(product_ids)} records")
            inventories.append(Inventory(
                tuple(product_ids), seed, self.config, idx, self.catalog_config.fingerprint(),
                self._list_attributes, self._record_attributes,
            ))
        return inventories

    @property
    def metadata(self) -> Dict[str, Tuple[AttributeDefinition, ...]]:
        return {
            'ProductInventoryList': self._list_attributes,
            'ProductInventoryRecord': self._record_attributes,
        }
