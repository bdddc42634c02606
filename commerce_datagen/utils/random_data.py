"""
Seeded, localized content (nouns, sentences, text excerpts, strings) for generated objects.

Every helper takes the seed of the value it produces and reseeds its source on
each call, so values never depend on what was generated before them.
"""

import string
from enum import Enum

from faker import Faker

from commerce_datagen.config.settings import EMAIL_DOMAIN, REGIONS
from commerce_datagen.errors import SpecificationError
from commerce_datagen.utils.seeding import SeededRandom

_MASK_64 = 0xFFFFFFFFFFFFFFFF


class Region(Enum):
    """Content regions; the value is the configured region name."""

    GENERIC = 'Generic'
    GERMAN = 'German'
    CHINESE = 'Chinese'
    RUSSIAN = 'Russian'

    @property
    def locale(self) -> str:
        """Faker locale providing the words for this region."""
        return REGIONS[self.value][0]

    def __str__(self):
        return REGIONS[self.value][1]

    @classmethod
    def parse(cls, name: str) -> 'Region':
        for region in cls:
            if region.value.lower() == str(name).lower() or str(region) == name:
                return region
        raise SpecificationError(f"Unsupported region: {name}")


# One Faker instance per locale, reseeded on every call
_fakers = {}


def get_faker(region: Region = Region.GENERIC) -> Faker:
    if region not in _fakers:
        _fakers[region] = Faker(region.locale)
    return _fakers[region]


def _seeded_faker(seed: int, region: Region) -> Faker:
    fake = get_faker(region)
    fake.seed_instance(seed & _MASK_64)
    return fake


def random_noun(seed: int, region: Region = Region.GENERIC) -> str:
    """Return a single word for seed in the region's language."""
    return _seeded_faker(seed, region).word()


def random_sentence(seed: int, region: Region = Region.GENERIC) -> str:
    return _seeded_faker(seed, region).sentence()


def book_cite(seed: int, length: int = 1000, region: Region = Region.GENERIC) -> str:
    """
    Return a text excerpt of at most length characters.

    Args:
        seed: Seed of the excerpt.
        length: Maximum number of characters (at least 5).
        region: Language of the excerpt.

    Returns:
        str: Generated text.
    """
    return _seeded_faker(seed, region).text(max_nb_chars=max(length, 5))


def random_string(seed: int, length: int = 12, letters: bool = True, digits: bool = True) -> str:
    alphabet = (string.ascii_letters if letters else '') + (string.digits if digits else '')
    rng = SeededRandom(seed)
    return ''.join(alphabet[rng.next_int(len(alphabet))] for _ in range(length))


def random_email(seed: int) -> str:
    return f"{random_string(seed, 12, digits=False)}@{EMAIL_DOMAIN}"


def random_uri(seed: int) -> str:
    return f"/{random_string(seed, 15, digits=False)}"
