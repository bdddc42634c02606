"""
Variant expansion: which variation attribute values a master product offers,
and one variant per combination of them.
"""

from itertools import product
from typing import Iterable, List, Tuple

from commerce_datagen.config.models import VariationAttributeConfiguration
from commerce_datagen.utils.seeding import SeedContext

Combination = Tuple[Tuple[str, str], ...]


def expand_variants(master_seed: int,
                    attributes: Iterable[VariationAttributeConfiguration]) -> List[Tuple[int, Combination]]:
    """
    Expand a master product into its variants.

    Each value is offered with the attribute's probability (draw strictly below
    it), then every combination of offered values becomes one variant. An
    attribute with no offered value leaves the master without variants.

    Args:
        master_seed: Seed of the master product.
        attributes: Variation attributes in declaration order.

    Returns:
        List[Tuple[int, Combination]]: ``(variant seed, ((name, value), ...))``
        per variant, in cartesian-product order.
    """
    rng = SeedContext(master_seed).derive('variants').rng()

    offered = []
    for attribute in attributes:
        values = [value for value in attribute.values if rng.next_float() < attribute.probability]
        offered.append([(attribute.name, value) for value in values])

    if not offered:
        return []
    return [(rng.next_long(), combination) for combination in product(*offered)]
