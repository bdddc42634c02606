"""
Generation session: the caches shared by generators of one generation run.

A session replaces process-wide state. Generators that must agree with each
other (catalog, inventory, pricebook, promotion) have to be handed the same
session; separate sessions never observe each other's ids.
"""

from typing import Dict, Set, Tuple


class GenerationSession:
    """
    Caches for one generation run. Append-only, not synchronized.

    Attributes:
        product_ids: Catalog configuration -> ordered tuple of product ids.
        used_attribute_ids: Attribute paths already handed out, per extended object
            (the path embeds the object name).
        seen_attribute_seeds: ``"<extended object>:<seed>"`` pairs already generated.
        generated_attributes: (extended object, seed, config) -> generated definitions.
    """

    def __init__(self):
        self.product_ids: Dict[object, Tuple[str, ...]] = {}
        self.used_attribute_ids: Set[str] = set()
        self.seen_attribute_seeds: Set[str] = set()
        self.generated_attributes: Dict[tuple, tuple] = {}

    def cached_product_ids(self, catalog_config, compute) -> Tuple[str, ...]:
        """
        Return the memoized id tuple for catalog_config, computing it on first request.

        Args:
            catalog_config: Hashable catalog configuration (structural equality).
            compute: Zero-argument callable producing the ids.

        Returns:
            Tuple[str, ...]: Ordered product ids.
        """
        if catalog_config not in self.product_ids:
            self.product_ids[catalog_config] = tuple(compute())
        return self.product_ids[catalog_config]

    def mark_attribute_seed(self, extended_object: str, seed: int) -> bool:
        """Record (extended_object, seed); True if it had not been seen before."""
        key = f"{extended_object}:{seed}"
        if key in self.seen_attribute_seeds:
            return False
        self.seen_attribute_seeds.add(key)
        return True

    def claim_attribute_id(self, path: str) -> bool:
        """Claim path for its extended object; False if it is already taken."""
        if path in self.used_attribute_ids:
            return False
        self.used_attribute_ids.add(path)
        return True
