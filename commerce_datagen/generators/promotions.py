"""
Generates product and order promotions for a catalog.
"""

from typing import Dict, List, Tuple

from commerce_datagen.config.models import CatalogListConfiguration, PromotionConfiguration
from commerce_datagen.generators.product_ids import ProductIdSequencer
from commerce_datagen.models.attributes import AttributeDefinition, RandomAttributeRegistry
from commerce_datagen.models.catalogs import Catalog
from commerce_datagen.models.promotions import OrderPromotion, ProductPromotion, Promotion
from commerce_datagen.session import GenerationSession
from commerce_datagen.utils.seeding import SeedContext


class PromotionAssembler:
    """
    Promotions targeting the categories of catalog.

    Product promotions additionally cover a window of the product ids of
    catalog_config, taken with the product promotion's coverage.
    """

    def __init__(self, config: PromotionConfiguration, catalog: Catalog,
                 catalog_config: CatalogListConfiguration, session: GenerationSession):
        self.config = config
        self.catalog = catalog
        self.catalog_config = catalog_config
        self.session = session
        registry = RandomAttributeRegistry(session)
        self._product_attributes = ()
        self._order_attributes = ()
        if config.product_config is not None:
            pc = config.product_config
            self._product_attributes = registry.attribute_definitions(
                'Promotion', pc.initial_seed, pc.custom_attributes, pc.generated_attributes,
            )
        if config.order_config is not None:
            oc = config.order_config
            self._order_attributes = registry.attribute_definitions(
                'Promotion', oc.initial_seed, oc.custom_attributes, oc.generated_attributes,
            )

    @property
    def promotions(self) -> List[Promotion]:
        """Product promotions followed by order promotions."""
        category_ids = tuple(category.id for category in self.catalog.categories)
        seed = SeedContext(self.config.initial_seed)
        promotions = []

        product_config = self.config.product_config
        if product_config is not None:
            sequencer = ProductIdSequencer(self.session)
            for promotion_seed in seed.derive('productPromotions').materialize(product_config.element_count):
                product_ids = sequencer.covered_product_ids(self.catalog_config, promotion_seed,
                                                            product_config.coverage)
                promotions.append(ProductPromotion(
                    promotion_seed, self.catalog.id, category_ids, self._product_attributes,
                    product_config, tuple(product_ids),
                ))

        order_config = self.config.order_config
        if order_config is not None:
            for promotion_seed in seed.derive('orderPromotions').materialize(order_config.element_count):
                promotions.append(OrderPromotion(
                    promotion_seed, self.catalog.id, category_ids, self._order_attributes, order_config,
                ))
        return promotions

    @property
    def metadata(self) -> Dict[str, Tuple[AttributeDefinition, ...]]:
        return {'Promotion': tuple(dict.fromkeys(self._product_attributes + self._order_attributes))}
