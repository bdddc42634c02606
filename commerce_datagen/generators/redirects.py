"""
Generates redirect URLs.
"""

from itertools import islice
from typing import Iterable, List, Sequence

from commerce_datagen.config.models import RedirectUrlConfiguration
from commerce_datagen.models.categories import Category, CategoryAssignment
from commerce_datagen.models.redirects import (
    CategoryRedirectUrl,
    ProductRedirectUrl,
    RedirectUrl,
    StaticRedirectUrl,
)
from commerce_datagen.utils.seeding import SeededRandom


class RedirectUrlAssembler:
    """
    Static redirects, then product redirects (one per leading category
    assignment), then category redirects. Category redirects need categories.
    """

    def __init__(self, config: RedirectUrlConfiguration, categories: Sequence[Category] = (),
                 category_assignments: Iterable[CategoryAssignment] = ()):
        self.config = config
        self.categories = tuple(categories)
        self.category_assignments = category_assignments

    @property
    def redirect_urls(self) -> List[RedirectUrl]:
        rng = SeededRandom(self.config.initial_seed)
        redirects: List[RedirectUrl] = [StaticRedirectUrl(rng.next_long()) for _ in range(self.config.element_count)]
        redirects.extend(
            ProductRedirectUrl(rng.next_long(), assignment)
            for assignment in islice(self.category_assignments, self.config.product_redirects)
        )
        if self.categories:
            redirects.extend(
                CategoryRedirectUrl(rng.next_long(), self.categories) for _ in range(self.config.category_redirects)
            )
        return redirects

    @property
    def metadata(self):
        return {}
