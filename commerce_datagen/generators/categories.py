"""
Category tree shape: how many levels and children per node a forest of a
given size needs, and which node hangs under which.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from commerce_datagen.utils.seeding import SeedContext


@dataclass(frozen=True)
class CategoryNode:
    """
    One node of a category forest.

    Attributes:
        index: Position in breadth-first order (0-based).
        parent_index: Index of the parent node, None for roots.
        level: Depth of the node, 0 for roots.
        seed: Seed of the category.
    """

    index: int
    parent_index: Optional[int]
    level: int
    seed: int


def tree_capacity(depth: int, breadth: int) -> int:
    """Number of nodes in a forest ``depth`` levels deep with ``breadth`` children per node."""
    if depth <= 0 or breadth <= 0:
        return 0
    if breadth == 1:
        return depth
    return (breadth ** depth - 1) // (breadth - 1)


def grow_tree_shape(element_count: int, depth: int, breadth: int) -> Tuple[int, int]:
    """
    Grow depth, then breadth, alternately until the forest holds element_count nodes.

    Returns:
        Tuple[int, int]: ``(depth, breadth)``.
    """
    grow_depth = True
    while tree_capacity(depth, breadth) < element_count:
        if grow_depth:
            depth += 1
        else:
            breadth += 1
        grow_depth = not grow_depth
    return depth, breadth


def build_category_tree(element_count: int, depth: int, breadth: int, catalog_seed: int) -> List[CategoryNode]:
    """
    Lay out element_count categories breadth first.

    Level ``l`` holds up to ``breadth ** (l + 1)`` nodes; node ``i`` hangs
    under node ``i // breadth - 1`` (roots have no parent).

    Args:
        element_count: Number of categories.
        depth: Configured tree depth.
        breadth: Configured tree breadth.
        catalog_seed: Seed of the owning catalog.

    Returns:
        List[CategoryNode]: Exactly element_count nodes in breadth-first order.
    """
    if element_count <= 0:
        return []
    depth, breadth = grow_tree_shape(element_count, depth, breadth)

    seeds = SeedContext(catalog_seed).derive('categoryTree').materialize(element_count)
    nodes = []
    level = 0
    level_end = breadth
    for idx in range(element_count):
        if idx >= level_end:
            level += 1
            level_end += breadth ** (level + 1)
        parent_index = idx // breadth - 1
        nodes.append(CategoryNode(idx, parent_index if parent_index >= 0 else None, level, seeds[idx]))
    return nodes
