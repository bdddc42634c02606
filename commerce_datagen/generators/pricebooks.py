"""
Generates price books for the products of a catalog configuration.
"""

from typing import Dict, List, Sequence, Tuple

from commerce_datagen.config import settings
from commerce_datagen.config.models import CatalogListConfiguration, PricebookConfiguration
from commerce_datagen.generators.product_ids import ProductIdSequencer, sample_coverage
from commerce_datagen.models.attributes import AttributeDefinition, RandomAttributeRegistry
from commerce_datagen.models.options import exchange_rate
from commerce_datagen.models.pricebooks import Pricebook
from commerce_datagen.session import GenerationSession
from commerce_datagen.utils.logging_utils import clear_progress_line, log_progress_bar
from commerce_datagen.utils.seeding import SeededRandom


class PricebookAssembler:
    """
    Parent price books per currency, each followed by one child book per child configuration.

    Children share their parent's seed and price a coverage window of the
    parent's products at the sale discount.
    """

    def __init__(self, config: PricebookConfiguration, catalog_config: CatalogListConfiguration,
                 session: GenerationSession, currencies: Sequence[str] = settings.DEFAULT_CURRENCIES):
        self.config = config
        self.catalog_config = catalog_config
        self.session = session
        self.currencies = tuple(config.currencies or currencies)
        for currency in self.currencies:
            exchange_rate(currency)
        self._attributes = RandomAttributeRegistry(session).attribute_definitions(
            'PriceBook', config.initial_seed, config.custom_attributes, config.generated_attributes,
        )

    @property
    def pricebooks(self) -> List[Pricebook]:
        sequencer = ProductIdSequencer(self.session)
        catalog_fingerprint = self.catalog_config.fingerprint()
        pricebooks = []
        for currency in self.currencies:
            rng = SeededRandom(self.config.initial_seed)
            for idx in range(1, self.config.element_count + 1):
                seed = rng.next_long()
                product_ids = tuple(sequencer.covered_product_ids(self.catalog_config, seed, self.config.coverage))
                parent = Pricebook(self.config, currency, seed, product_ids, idx, catalog_fingerprint, self._attributes)
                pricebooks.append(parent)
                for child_config in self.config.children:
                    pricebooks.append(Pricebook(
                        child_config, currency, seed, tuple(sample_coverage(seed, product_ids, child_config.coverage)),
                        idx, catalog_fingerprint, self._attributes, parent,
                    ))
                if settings.VERBOSE:
                    log_progress_bar(f"Pricebooks {currency}", idx, self.config.element_count)
            if settings.VERBOSE and self.config.element_count:
                clear_progress_line()
        return pricebooks

    @property
    def metadata(self) -> Dict[str, Tuple[AttributeDefinition, ...]]:
        return {'PriceBook': self._attributes}
