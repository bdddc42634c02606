"""
Custom attribute definitions and values.

Definitions are either predefined (one per configured ``customAttributes``
entry) or generated at random by the RandomAttributeRegistry. Values are
computed on access from the attribute's own seed.
"""

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Optional, Tuple

from commerce_datagen.config.models import AttributeConfig, DataType, GeneratedAttributeConfig, GenerationStrategy
from commerce_datagen.config.settings import MAX_ATTRIBUTE_ID_DRAWS, RANDOM_DATE_MAX, RANDOM_DATE_MIN
from commerce_datagen.session import GenerationSession
from commerce_datagen.utils.random_data import random_email, random_noun, random_string
from commerce_datagen.utils.seeding import SeedContext, SeededRandom

# Order matters: random definitions pick DATA_TYPES[abs(next_long) % 4]
DATA_TYPES = (DataType.BOOLEAN, DataType.STRING, DataType.DATE, DataType.EMAIL)


class Counter:
    """Mutable counter owned by one COUNTER attribute definition."""

    def __init__(self, offset: int = 0, increment: int = 1):
        self.current = offset
        self.increment = increment

    def next(self) -> int:
        self.current += self.increment
        return self.current

    def __repr__(self):
        return f"Counter(current={self.current}, increment={self.increment})"


@dataclass(frozen=True)
class AttributeDefinition:
    """
    Definition of a custom attribute.

    Attributes:
        path: ``<extended object>.<id>``, e.g. ``product.color``.
        data_type: Value type.
        searchable: Whether the attribute is indexed for search.
        generation_strategy: How values are produced.
        data_store: Literal (STATIC), Counter (COUNTER), candidates (LIST), None (RANDOM).
    """

    path: str
    data_type: DataType
    searchable: bool
    generation_strategy: GenerationStrategy
    data_store: object = None

    @property
    def id(self) -> str:
        return self.path.rsplit('.', 1)[-1]

    @property
    def display_name(self) -> str:
        return self.id[:1].upper() + self.id[1:]

    @classmethod
    def from_config(cls, path: str, config: AttributeConfig) -> 'AttributeDefinition':
        match config.generation_strategy:
            case GenerationStrategy.STATIC:
                data_store = config.static_value
            case GenerationStrategy.COUNTER:
                data_store = Counter(config.counter.offset, config.counter.increment)
            case GenerationStrategy.LIST:
                data_store = config.values
            case _:
                data_store = None
        return cls(path, config.type, config.searchable, config.generation_strategy, data_store)


def _random_value(data_type: DataType, seed: int) -> str:
    match data_type:
        case DataType.BOOLEAN:
            return 'true' if SeededRandom(seed).next_bool() else 'false'
        case DataType.DATE:
            max_days = (RANDOM_DATE_MAX - RANDOM_DATE_MIN).days
            return (RANDOM_DATE_MAX - timedelta(days=SeededRandom(seed).next_int(max_days))).isoformat()
        case DataType.EMAIL:
            return random_email(seed)
        case _:
            return random_string(seed, 12)


@dataclass(frozen=True)
class CustomAttribute:
    """A definition bound to the seed of the object it extends."""

    definition: AttributeDefinition
    seed: int

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def value(self) -> str:
        """Attribute value; reading a COUNTER attribute advances its counter."""
        definition = self.definition
        match definition.generation_strategy:
            case GenerationStrategy.STATIC:
                return str(definition.data_store)
            case GenerationStrategy.COUNTER:
                return str(definition.data_store.next())
            case GenerationStrategy.LIST:
                candidates = definition.data_store
                return candidates[SeededRandom(self.seed).next_int(len(candidates))]
            case _:
                return _random_value(definition.data_type, self.seed)


def _clean_noun(noun: str) -> str:
    cleaned = re.sub(r'[^0-9A-Za-z]', '', noun)
    return cleaned or 'attribute'


class RandomAttributeRegistry:
    """
    Generates random attribute definitions with ids unique per extended object.

    Uniqueness is tracked in the session. Generating the same
    ``(extended_object, seed)`` twice reproduces the same definitions instead
    of drawing fresh ids.
    """

    def __init__(self, session: GenerationSession):
        self.session = session

    def _draw_path(self, extended_object, rng, enforce_unique):
        path = f"{extended_object}.{_clean_noun(random_noun(rng.next_long()))}"
        if not enforce_unique:
            return path
        draws = 1
        while not self.session.claim_attribute_id(path):
            if draws >= MAX_ATTRIBUTE_ID_DRAWS:
                return self._probe_suffix(path)
            path = f"{extended_object}.{_clean_noun(random_noun(rng.next_long()))}"
            draws += 1
        return path

    def _probe_suffix(self, path):
        suffix = 2
        while not self.session.claim_attribute_id(f"{path}{suffix}"):
            suffix += 1
        return f"{path}{suffix}"

    def generate(self, extended_object: str, config: GeneratedAttributeConfig,
                 seed: int) -> Tuple[AttributeDefinition, ...]:
        """
        Generate config.element_count random definitions for extended_object.

        Args:
            extended_object: Name of the extended object type, e.g. ``Product``.
            config: How many definitions, and how many of them searchable.
            seed: Seed of the owning configuration node.

        Returns:
            Tuple[AttributeDefinition, ...]: Definitions in generation order.
        """
        key = (extended_object, seed, config)
        if key in self.session.generated_attributes:
            return self.session.generated_attributes[key]

        rng = SeedContext(seed).derive('customAttributes').rng()
        is_new_seed = self.session.mark_attribute_seed(extended_object, seed)
        prefix = extended_object.lower()

        definitions = []
        for idx in range(config.element_count):
            path = self._draw_path(prefix, rng, is_new_seed)
            data_type = DATA_TYPES[abs(rng.next_long()) % len(DATA_TYPES)]
            definitions.append(AttributeDefinition(
                path, data_type, idx < config.thereof_searchable, GenerationStrategy.RANDOM,
            ))
        self.session.generated_attributes[key] = tuple(definitions)
        return self.session.generated_attributes[key]

    def attribute_definitions(self, extended_object: str, seed: int,
                              custom_attributes: Iterable[Tuple[str, AttributeConfig]] = (),
                              generated_attributes: Optional[GeneratedAttributeConfig] = None,
                              ) -> Tuple[AttributeDefinition, ...]:
        """Predefined definitions followed by generated ones."""
        prefix = extended_object.lower()
        predefined = tuple(
            AttributeDefinition.from_config(f"{prefix}.{key}", config) for key, config in custom_attributes
        )
        if generated_attributes is None:
            return predefined
        return predefined + self.generate(extended_object, generated_attributes, seed)
