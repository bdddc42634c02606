"""
Seed inheritance for configuration documents.

A configuration node without an ``initialSeed`` inherits the seed of its
closest enclosing node that has one, falling back to a default. Nodes are
addressed by slash separated paths rooted at ``$`` (``$/products``,
``$/children/0``). Explicit seeds are recorded with a trailing slash.
"""

from typing import List, Optional, Tuple

from commerce_datagen.config import settings
from commerce_datagen.errors import SpecificationError
from commerce_datagen.utils.logging_utils import log_progress

SEED_KEY = 'initialSeed'
ROOT_PATH = '$'

# Keys whose mapping (or list of mappings) values are nested configuration nodes
SEEDED_KEYS = ('products', 'inventoryRecords', 'productConfig', 'orderConfig', 'children')


def _is_prefix(entry_path: str, path: str) -> bool:
    """True if entry_path addresses path itself or one of its ancestors."""
    entry_path = entry_path.rstrip('/')
    return path == entry_path or path.startswith(entry_path + '/')


class SeedInheritanceResolver:
    """
    Explicit stack of ``(path, seed)`` entries for one parse session.

    The resolver must see nodes in document order: explicit seeds when their
    key is reached, missing seeds when their node is closed.
    """

    def __init__(self, default_seed: Optional[int] = None):
        self.default_seed = default_seed
        self._stack: List[Tuple[str, int]] = []

    def declare(self, path: str, seed: int) -> int:
        """
        Record an explicit seed for the node at path.

        Args:
            path: Node path.
            seed: Declared seed.

        Returns:
            int: The declared seed.

        Raises:
            SpecificationError: If a descendant of path already resolved its seed.
        """
        base, _, last = path.rpartition('/')
        if last == '0' and self._stack and self._stack[-1][0].startswith(base + '/'):
            # First element of a list again: forget the previous iteration
            element_prefix = f"{base}/0/"
            while self._stack and self._stack[-1][0].startswith(element_prefix):
                self._stack.pop()

        if self._stack and self._stack[-1][0].startswith(path + '/'):
            raise SpecificationError(f"Must specify initialSeed before it is used ({path})")

        self._stack.append((path + '/', seed))
        if settings.VERBOSE:
            log_progress('Seeds', f"{path}: explicit initialSeed {seed}")
        return seed

    def inherit(self, path: str) -> int:
        """
        Resolve the seed of a node at path that declares none.

        Raises:
            SpecificationError: If no ancestor has a seed and no default was given.
        """
        while self._stack and not _is_prefix(self._stack[-1][0], path):
            self._stack.pop()

        if self._stack:
            seed = self._stack[-1][1]
        elif self.default_seed is not None:
            seed = self.default_seed
            if settings.VERBOSE:
                log_progress('Seeds', f"{path}: using default initialSeed {seed}")
        else:
            raise SpecificationError(f"Can not infer initialSeed and no default was given ({path})")

        self._stack.append((path, seed))
        return seed


def _parse_seed(value, path):
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise SpecificationError(f"{path}: initialSeed must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise SpecificationError(f"{path}: initialSeed must be an integer, got {value!r}")


def _resolve_node(node, path, resolver, seeded_keys):
    if not isinstance(node, dict):
        raise SpecificationError(f"{path}: configuration node must be a mapping, got {type(node).__name__}")

    resolved = {}
    for key, value in node.items():
        if key == SEED_KEY:
            if value is not None:
                resolved[key] = resolver.declare(path, _parse_seed(value, path))
        elif key in seeded_keys:
            resolved[key] = _resolve_value(value, f"{path}/{key}", resolver, seeded_keys)
        else:
            resolved[key] = value

    if SEED_KEY not in resolved:
        resolved[SEED_KEY] = resolver.inherit(path)
    return resolved


def _resolve_value(value, path, resolver, seeded_keys):
    if isinstance(value, dict):
        return _resolve_node(value, path, resolver, seeded_keys)
    if isinstance(value, list):
        return [
            _resolve_node(item, f"{path}/{idx}", resolver, seeded_keys) if isinstance(item, dict) else item
            for idx, item in enumerate(value)
        ]
    return value


def resolve_seeds(document, default_seed=None, seeded_keys=SEEDED_KEYS, resolver=None):
    """
    Fill in ``initialSeed`` on every configuration node of a decoded document.

    The root mapping (or every mapping of a root list) and every mapping found
    under one of seeded_keys is a configuration node. The input is not modified.

    Args:
        document: Decoded YAML/JSON document.
        default_seed: Seed used when neither the node nor an ancestor declares one.
        seeded_keys: Keys holding nested configuration nodes.
        resolver: Resolver to reuse; a fresh one is created when omitted.

    Returns:
        A copy of document with every configuration node's seed resolved.
    """
    if resolver is None:
        resolver = SeedInheritanceResolver(default_seed)
    if isinstance(document, list):
        return _resolve_value(document, ROOT_PATH, resolver, seeded_keys)
    return _resolve_node(document, ROOT_PATH, resolver, seeded_keys)
