"""
Main entry point for site generation: loads the site configuration and runs every configured generator
"""
import sys
import time
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import pandas as pd

from commerce_datagen.config import settings
from commerce_datagen.config.loader import SiteConfiguration, load_site
from commerce_datagen.errors import SpecificationError
from commerce_datagen.generators.catalogs import CatalogAssembler
from commerce_datagen.generators.inventory import InventoryAssembler
from commerce_datagen.generators.pricebooks import PricebookAssembler
from commerce_datagen.generators.promotions import PromotionAssembler
from commerce_datagen.generators.redirects import RedirectUrlAssembler
from commerce_datagen.models.attributes import AttributeDefinition
from commerce_datagen.session import GenerationSession
from commerce_datagen.utils.frames import (
    attribute_definitions_frame,
    categories_frame,
    category_assignments_frame,
    inventory_records_frame,
    price_tables_frame,
    products_frame,
    promotions_frame,
    redirect_urls_frame,
)
from commerce_datagen.utils.logging_utils import (
    log_error,
    log_section_complete,
    log_section_start,
)


@dataclass
class GeneratedSite:
    """DataFrames per entity plus the attribute definitions per extended object."""

    frames: Dict[str, pd.DataFrame] = field(default_factory=dict)
    metadata: Dict[str, Tuple[AttributeDefinition, ...]] = field(default_factory=dict)

    def add_metadata(self, metadata):
        for object_type, definitions in metadata.items():
            merged = self.metadata.get(object_type, ()) + tuple(definitions)
            self.metadata[object_type] = tuple(dict.fromkeys(merged))


def generate_site(site: SiteConfiguration, session: Optional[GenerationSession] = None) -> GeneratedSite:
    """
    Run the catalog generator and every other configured generator.

    All generators share one session, so inventories, price books and
    promotions reference the ids of the generated catalog products.

    Args:
        site: Loaded site configuration.
        session: Generation session; a new one is created when omitted.

    Returns:
        GeneratedSite: Frames keyed by entity name and merged attribute metadata.
    """
    session = session or GenerationSession()
    result = GeneratedSite()

    log_section_start('Catalogs')
    catalog_assembler = CatalogAssembler(site.catalogs, session, site.currencies, site.regions)
    catalogs = catalog_assembler.catalogs
    result.frames['products'] = products_frame(catalogs)
    result.add_metadata(catalog_assembler.metadata)
    assignment_frames = [category_assignments_frame(c.id, c.category_assignments) for c in catalogs]

    # Promotions and redirects target the navigation catalog when there is one
    site_catalog = catalogs[0] if catalogs else None
    category_catalogs = list(catalogs)
    if site.navigation is not None:
        site_catalog = catalog_assembler.navigation_catalog(site.navigation, site.name)
        category_catalogs.append(site_catalog)
        assignment_frames.append(category_assignments_frame(site_catalog.id, site_catalog.category_assignments))
        result.add_metadata({'Category': site_catalog.category_attributes})
    result.frames['categories'] = categories_frame(category_catalogs)
    result.frames['category_assignments'] = pd.concat(assignment_frames, ignore_index=True) \
        if assignment_frames else category_assignments_frame('', [])
    log_section_complete('Catalogs', f"{len(catalogs):,} catalogs, {len(result.frames['products']):,} products")

    if site.inventory is not None:
        log_section_start('Inventories')
        inventory_assembler = InventoryAssembler(site.inventory, site.catalogs, session)
        result.frames['inventory_records'] = inventory_records_frame(inventory_assembler.inventories)
        result.add_metadata(inventory_assembler.metadata)
        log_section_complete('Inventories', f"{len(result.frames['inventory_records']):,} records")

    if site.pricebooks:
        log_section_start('Pricebooks')
        price_frames = []
        for pricebook_config in site.pricebooks:
            pricebook_assembler = PricebookAssembler(pricebook_config, site.catalogs, session, site.currencies)
            price_frames.append(price_tables_frame(pricebook_assembler.pricebooks))
            result.add_metadata(pricebook_assembler.metadata)
        result.frames['price_tables'] = pd.concat(price_frames, ignore_index=True)
        log_section_complete('Pricebooks', f"{len(result.frames['price_tables']):,} prices")

    if site.promotions is not None and site_catalog is not None:
        log_section_start('Promotions')
        promotion_assembler = PromotionAssembler(site.promotions, site_catalog, site.catalogs, session)
        result.frames['promotions'] = promotions_frame(promotion_assembler.promotions)
        result.add_metadata(promotion_assembler.metadata)
        log_section_complete('Promotions', f"{len(result.frames['promotions']):,} promotions")

    if site.redirects is not None:
        log_section_start('Redirect URLs')
        categories = site_catalog.categories if site_catalog is not None else ()
        assignments = site_catalog.category_assignments if site_catalog is not None else ()
        redirect_assembler = RedirectUrlAssembler(site.redirects, categories, assignments)
        result.frames['redirect_urls'] = redirect_urls_frame(redirect_assembler.redirect_urls)
        log_section_complete('Redirect URLs', f"{len(result.frames['redirect_urls']):,} redirects")

    result.frames['attribute_definitions'] = attribute_definitions_frame(result.metadata)
    return result


def main():
    """Generate the site configured in settings.CONFIG_DIR and print a summary."""
    print("=" * 70)
    print("SITE DATA GENERATION")
    print("=" * 70)
    print()

    try:
        start_time = time.time()
        site = load_site(settings.CONFIG_DIR, settings.SITE_SEED)
        print(f"  Site: {site.name}")
        print(f"  Currencies: {', '.join(site.currencies)}")
        print(f"  Regions: {', '.join(str(r) for r in site.regions)}")
        print()

        generated = generate_site(site)

        print()
        for name, frame in generated.frames.items():
            print(f"  {name}: {len(frame):,} rows")
        print("=" * 70)
        print("✓ Site generation completed successfully!")
        print(f"  Total time: {time.time() - start_time:.1f}s")
        print("=" * 70)

    except SpecificationError as e:
        log_error('Site generation', e)
        sys.exit(1)


if __name__ == '__main__':
    main()
