"""
Product options: option attributes with priced values.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from commerce_datagen.config.models import DataType, GenerationStrategy, ProductOptionConfiguration
from commerce_datagen.config.settings import EXCHANGE_RATES, PRODUCT_ID_PREFIX
from commerce_datagen.errors import SpecificationError
from commerce_datagen.models.attributes import AttributeDefinition
from commerce_datagen.utils.random_data import random_noun
from commerce_datagen.utils.seeding import SeededRandom, derive_seed


def exchange_rate(currency: str) -> float:
    try:
        return EXCHANGE_RATES[currency]
    except KeyError:
        raise SpecificationError(f"Unsupported currency: {currency}")


@dataclass(frozen=True)
class OptionValue:
    seed: int
    config: ProductOptionConfiguration
    currencies: Tuple[str, ...]
    default: bool = False

    @property
    def id(self) -> str:
        return f"{PRODUCT_ID_PREFIX}-option-value-{abs(self.seed)}"

    @property
    def display_name(self) -> str:
        return random_noun(derive_seed(self.seed, 'optionValueName'))

    @property
    def prices(self) -> Dict[str, float]:
        """Price per currency; the same USD draw converted with the exchange rate."""
        draw = SeededRandom(self.seed).next_double()
        base = self.config.min_price + (self.config.max_price - self.config.min_price) * draw
        return {currency: round(base * exchange_rate(currency), 2) for currency in self.currencies}


@dataclass(frozen=True)
class ProductOption:
    """
    A product option (e.g. gift wrapping) offered with a list of values.

    The first value is the default one.
    """

    seed: int
    config: ProductOptionConfiguration
    currencies: Tuple[str, ...]

    @property
    def id(self) -> str:
        return f"{PRODUCT_ID_PREFIX}-option-{abs(self.seed)}"

    @property
    def path(self) -> str:
        return f"product.{self.id}"

    @property
    def display_name(self) -> str:
        return random_noun(derive_seed(self.seed, 'optionName'))

    @property
    def values(self) -> List[OptionValue]:
        rng = SeededRandom(self.seed)
        count = rng.next_in_range(self.config.min_values, self.config.max_values)
        return [OptionValue(rng.next_long(), self.config, self.currencies, idx == 0) for idx in range(count)]

    @property
    def definition(self) -> AttributeDefinition:
        """The option as a LIST attribute definition over its value ids."""
        return AttributeDefinition(
            self.path, DataType.STRING, False, GenerationStrategy.LIST,
            tuple(value.id for value in self.values),
        )


def generate_product_options(config: Optional[ProductOptionConfiguration], currencies: Sequence[str],
                             seed: int) -> Tuple[ProductOption, ...]:
    """Draw config.element_count options from seed; none when config is None."""
    if config is None:
        return ()
    rng = SeededRandom(seed)
    currencies = tuple(currencies)
    return tuple(ProductOption(rng.next_long(), config, currencies) for _ in range(config.element_count))
