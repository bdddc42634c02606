"""
Assembles master catalogs, their attribute metadata and the optional
navigation catalog from a catalog list configuration.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from commerce_datagen.config import settings
from commerce_datagen.config.models import CatalogListConfiguration, NavigationCatalogConfiguration
from commerce_datagen.generators.product_ids import catalog_seeds
from commerce_datagen.models.attributes import AttributeDefinition, RandomAttributeRegistry
from commerce_datagen.models.catalogs import MasterCatalog, NavigationCatalog
from commerce_datagen.models.products import variation_attribute_definition
from commerce_datagen.session import GenerationSession
from commerce_datagen.utils.logging_utils import clear_progress_line, log_progress_bar
from commerce_datagen.utils.random_data import Region


class CatalogAssembler:
    """
    Builds the catalogs of one catalog list configuration.

    Catalog seeds are drawn the same way the product id sequencer draws them,
    so ``all_product_ids()`` equals the sequencer's ids for the same config.
    """

    def __init__(self, config: CatalogListConfiguration, session: GenerationSession,
                 currencies: Sequence[str] = settings.DEFAULT_CURRENCIES,
                 regions: Sequence[Region] = (Region.GENERIC,)):
        self.config = config
        self.session = session
        self.currencies = tuple(currencies)
        self.regions = tuple(regions)
        registry = RandomAttributeRegistry(session)
        products = config.products
        self.product_attributes = registry.attribute_definitions(
            'Product', products.initial_seed, products.custom_attributes, products.generated_attributes,
        )
        self.category_attributes = registry.attribute_definitions(
            'Category', config.initial_seed, config.custom_attributes, config.generated_attributes,
        )
        self._catalogs: Optional[List[MasterCatalog]] = None

    @property
    def catalogs(self) -> List[MasterCatalog]:
        if self._catalogs is None:
            seeds = catalog_seeds(self.config)
            catalogs = []
            for idx, seed in enumerate(seeds, start=1):
                catalogs.append(MasterCatalog(
                    seed, self.config, idx, self.currencies, self.regions,
                    self.product_attributes, self.category_attributes,
                ))
                if settings.VERBOSE:
                    log_progress_bar('Catalogs', idx, len(seeds))
            if settings.VERBOSE and seeds:
                clear_progress_line()
            self._catalogs = catalogs
        return list(self._catalogs)

    def all_product_ids(self) -> List[str]:
        return [pid for catalog in self.catalogs for pid in catalog.all_product_ids()]

    def navigation_catalog(self, config: NavigationCatalogConfiguration, site_name: str) -> NavigationCatalog:
        """Navigation catalog over all master catalogs, indexed after them."""
        category_attributes = RandomAttributeRegistry(self.session).attribute_definitions(
            'Category', config.initial_seed, config.custom_attributes, config.generated_attributes,
        )
        return NavigationCatalog(
            config.initial_seed, config, len(self.catalogs) + 1, self.catalogs, site_name,
            self.regions, category_attributes,
        )

    @property
    def metadata(self) -> Dict[str, Tuple[AttributeDefinition, ...]]:
        """
        Attribute definitions per extended object.

        Returns:
            Dict[str, Tuple[AttributeDefinition, ...]]: ``Product`` (custom, variation
            and option attributes) and ``Category`` definitions, without duplicates.
        """
        product_definitions = list(self.product_attributes)
        product_definitions.extend(
            variation_attribute_definition(a.name, a.values) for a in self._variation_attributes()
        )
        for catalog in self.catalogs:
            product_definitions.extend(option.definition for option in catalog.shared_options)
            for product in catalog.products:
                product_definitions.extend(option.definition for option in product.local_options)
        return {
            'Product': tuple(dict.fromkeys(product_definitions)),
            'Category': tuple(dict.fromkeys(self.category_attributes)),
        }

    def _variation_attributes(self):
        seen = {}
        for variation_config in self.config.variation_products:
            for attribute in variation_config.local_variation_attributes:
                seen.setdefault(attribute.name, attribute)
        for attribute in self.config.shared_variation_attributes:
            seen.setdefault(attribute.name, attribute)
        return list(seen.values())
