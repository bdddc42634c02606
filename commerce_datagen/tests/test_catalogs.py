"""
Unit tests for master catalogs, the catalog assembler and the navigation catalog.
"""

import pytest

from commerce_datagen.config.models import (
    AttributeConfig,
    BundleProductConfiguration,
    CatalogListConfiguration,
    CategoryConfiguration,
    DataType,
    GeneratedAttributeConfig,
    GenerationStrategy,
    NavigationCatalogConfiguration,
    ProductConfiguration,
    ProductOptionConfiguration,
    ProductSetConfiguration,
    VariationAttributeConfiguration,
    VariationProductConfiguration,
)
from commerce_datagen.errors import SpecificationError
from commerce_datagen.generators.catalogs import CatalogAssembler
from commerce_datagen.models.options import generate_product_options
from commerce_datagen.models.products import BundleProduct, MasterProduct, ProductSet, VariationProduct
from commerce_datagen.session import GenerationSession
from commerce_datagen.utils.random_data import Region


def _config(**overrides):
    settings = dict(
        initial_seed=31,
        element_count=2,
        categories=CategoryConfiguration(element_count=6, tree_depth=2, tree_breadth=3),
        products=ProductConfiguration(
            initial_seed=31,
            element_count=10,
            custom_attributes=(
                ('brand', AttributeConfig(DataType.STRING, GenerationStrategy.STATIC, static_value='ACME')),
            ),
            generated_attributes=GeneratedAttributeConfig(element_count=2, thereof_searchable=1),
        ),
        variation_products=(VariationProductConfiguration(
            element_count=2,
            local_variation_attributes=(VariationAttributeConfiguration('color', ('red', 'green')),),
        ),),
        bundle_config=BundleProductConfiguration(element_count=3),
        product_sets=ProductSetConfiguration(element_count=2, min_set_products=2, max_set_products=4),
        generated_attributes=GeneratedAttributeConfig(element_count=1),
    )
    settings.update(overrides)
    return CatalogListConfiguration(**settings)


def _snapshot(assembler):
    return [
        (catalog.id, catalog.all_product_ids(), [c.id for c in catalog.categories],
         [(a.product.id, a.category.id) for a in catalog.category_assignments])
        for catalog in assembler.catalogs
    ]


class TestCatalogAssembler:
    """Test catalog construction from a catalog list configuration."""

    def test_catalog_count_and_ids(self):
        """Test one master catalog per element, with distinct ids."""
        catalogs = CatalogAssembler(_config(), GenerationSession()).catalogs
        assert len(catalogs) == 2
        assert [c.catalog_index for c in catalogs] == [1, 2]
        assert all(c.id.startswith('MasterCatalog_') for c in catalogs)
        assert catalogs[0].id != catalogs[1].id

    def test_deterministic_across_sessions(self):
        """Test that separate runs produce identical catalogs."""
        first = _snapshot(CatalogAssembler(_config(), GenerationSession()))
        second = _snapshot(CatalogAssembler(_config(), GenerationSession()))
        assert first == second

    def test_different_seed_changes_output(self):
        """Test that the catalog seed drives the output."""
        first = _snapshot(CatalogAssembler(_config(), GenerationSession()))
        second = _snapshot(CatalogAssembler(_config(initial_seed=32), GenerationSession()))
        assert first != second

    def test_no_duplicate_product_ids(self):
        """Test product id uniqueness across catalogs."""
        ids = CatalogAssembler(_config(), GenerationSession()).all_product_ids()
        assert len(ids) == 2 * (10 + 2 * 2 + 3 + 2)
        assert len(ids) == len(set(ids))

    def test_product_kinds(self):
        """Test the product collections of a catalog."""
        catalog = CatalogAssembler(_config(), GenerationSession()).catalogs[0]
        assert len(catalog.products) == 10
        assert all(isinstance(p, MasterProduct) for p in catalog.master_products)
        assert all(isinstance(v, VariationProduct) for m in catalog.master_products for v in m.variants)
        assert all(isinstance(b, BundleProduct) for b in catalog.bundles)
        assert all(isinstance(s, ProductSet) for s in catalog.product_sets)
        assert len(catalog.assignable_products()) == 10 + 2 + 3 + 2

    def test_regions_localize_names(self):
        """Test that every product name is generated per region."""
        catalog = CatalogAssembler(_config(), GenerationSession(),
                                   regions=(Region.GENERIC, Region.GERMAN)).catalogs[0]
        assert set(catalog.products[0].name) == {Region.GENERIC, Region.GERMAN}
        assert set(catalog.name) == {Region.GENERIC, Region.GERMAN}

    def test_product_custom_attributes(self):
        """Test that standard products carry predefined then generated attributes."""
        catalog = CatalogAssembler(_config(), GenerationSession()).catalogs[0]
        attributes = catalog.products[0].custom_attributes
        assert len(attributes) == 3
        assert attributes[0].definition.path == 'product.brand'
        assert attributes[0].value == 'ACME'


class TestBundlesAndSets:
    """Test product windows of bundles and sets."""

    def test_bundle_window_and_quantities(self):
        """Test bundled product count and quantity ranges."""
        catalog = CatalogAssembler(_config(), GenerationSession()).catalogs[0]
        siblings = catalog.all_products()
        for bundle in catalog.bundles:
            bundled = bundle.bundled_products
            assert 2 <= len(bundled) < 5
            assert all(1 <= quantity < 5 for _, quantity in bundled)
            start = siblings.index(bundled[0][0])
            assert [p for p, _ in bundled] == siblings[start:start + len(bundled)]

    def test_set_window(self):
        """Test set product count and contiguity."""
        catalog = CatalogAssembler(_config(), GenerationSession()).catalogs[0]
        siblings = catalog.all_products()
        for product_set in catalog.product_sets:
            products = product_set.products
            assert 2 <= len(products) < 4
            start = siblings.index(products[0])
            assert products == siblings[start:start + len(products)]

    def test_small_catalog_bundles_everything(self):
        """Test that a bundle takes every sibling when there are too few."""
        config = _config(
            products=ProductConfiguration(initial_seed=31, element_count=1),
            variation_products=(),
            bundle_config=BundleProductConfiguration(element_count=1, min_bundled_products=3,
                                                     max_bundled_products=4),
        )
        catalog = CatalogAssembler(config, GenerationSession()).catalogs[0]
        assert [p for p, _ in catalog.bundles[0].bundled_products] == list(catalog.products)

    def test_bundles_recomputed_identically(self):
        """Test that bundle contents are the same on every access."""
        catalog = CatalogAssembler(_config(), GenerationSession()).catalogs[0]
        bundle = catalog.bundles[0]
        assert bundle.bundled_products == bundle.bundled_products


class TestProductOptions:
    """Test shared and local product options."""

    def test_option_values_and_prices(self):
        """Test value counts, the default value and currency conversion."""
        config = ProductOptionConfiguration(element_count=3, min_values=2, max_values=4,
                                            min_price=10.0, max_price=20.0)
        options = generate_product_options(config, ('USD', 'EUR'), 9)
        assert len(options) == 3
        for option in options:
            values = option.values
            assert 2 <= len(values) < 4
            assert [v.default for v in values] == [True] + [False] * (len(values) - 1)
            for value in values:
                usd = value.prices['USD']
                assert 10.0 <= usd <= 20.0
                assert value.prices['EUR'] == pytest.approx(usd * 0.85, abs=0.01)
            assert option.definition.data_store == tuple(v.id for v in values)

    def test_unknown_currency(self):
        """Test that pricing in an unknown currency fails."""
        option = generate_product_options(ProductOptionConfiguration(element_count=1), ('XYZ',), 9)[0]
        with pytest.raises(SpecificationError):
            option.values[0].prices

    def test_no_config_no_options(self):
        """Test that a missing option configuration yields no options."""
        assert generate_product_options(None, ('USD',), 9) == ()

    def test_products_with_options(self):
        """Test that probability 1 gives every product local and shared options."""
        config = _config(
            products=ProductConfiguration(
                initial_seed=31, element_count=5,
                options=ProductOptionConfiguration(element_count=2, probability=1.0),
            ),
            shared_options=ProductOptionConfiguration(element_count=3, probability=1.0),
        )
        catalog = CatalogAssembler(config, GenerationSession()).catalogs[0]
        assert len(catalog.shared_options) == 3
        for product in catalog.products:
            assert len(product.local_options) == 2
            assert product.shared_options == catalog.shared_options[:len(product.shared_options)]

    def test_products_without_option_probability(self):
        """Test that probability 0 gives products no options."""
        config = _config(products=ProductConfiguration(
            initial_seed=31, element_count=5, options=ProductOptionConfiguration(probability=0.0),
        ))
        catalog = CatalogAssembler(config, GenerationSession()).catalogs[0]
        assert not any(product.has_options() for product in catalog.products)


class TestMetadata:
    """Test attribute metadata of the catalog assembler."""

    def test_metadata_keys_and_contents(self):
        """Test product and category definitions."""
        metadata = CatalogAssembler(_config(), GenerationSession()).metadata
        assert set(metadata) == {'Product', 'Category'}
        product_paths = [d.path for d in metadata['Product']]
        assert product_paths[0] == 'product.brand'
        assert 'product.color' in product_paths
        assert len(product_paths) == len(set(product_paths))
        assert len(metadata['Category']) == 1

    def test_option_definitions_included(self):
        """Test that option attributes are listed with the product attributes."""
        config = _config(shared_options=ProductOptionConfiguration(element_count=2, probability=1.0))
        assembler = CatalogAssembler(config, GenerationSession())
        product_paths = {d.path for d in assembler.metadata['Product']}
        for option in assembler.catalogs[0].shared_options:
            assert option.path in product_paths


class TestNavigationCatalog:
    """Test the navigation catalog over the master catalogs."""

    def test_full_coverage_assigns_all_products(self):
        """Test that coverage 1 assigns every product of every master catalog."""
        assembler = CatalogAssembler(_config(), GenerationSession())
        navigation = assembler.navigation_catalog(
            NavigationCatalogConfiguration(initial_seed=8, categories=CategoryConfiguration(element_count=4)),
            'Outlet',
        )
        assert navigation.id.startswith('NavigationCatalog_')
        assert navigation.catalog_index == 3
        assigned = {p.id for p in navigation.assigned_products}
        expected = {p.id for c in assembler.catalogs for p in c.assignable_products()}
        assert expected <= assigned

    def test_partial_coverage(self):
        """Test that a low coverage assigns fewer products."""
        config = _config(products=ProductConfiguration(initial_seed=31, element_count=200),
                         variation_products=(), bundle_config=None, product_sets=None)
        assembler = CatalogAssembler(config, GenerationSession())
        navigation = assembler.navigation_catalog(
            NavigationCatalogConfiguration(initial_seed=8, coverage=0.3,
                                           categories=CategoryConfiguration(element_count=4)),
            'Outlet',
        )
        assert 0 < len(navigation.assigned_products) < 300

    def test_site_name_changes_id(self):
        """Test that the navigation catalog id depends on the site name."""
        assembler = CatalogAssembler(_config(), GenerationSession())
        config = NavigationCatalogConfiguration(initial_seed=8)
        assert assembler.navigation_catalog(config, 'A').id != assembler.navigation_catalog(config, 'B').id
