"""
Unit tests for configuration nodes and the configuration loader.
"""

from unittest.mock import patch

import pytest
import yaml

from commerce_datagen.config.loader import build_attribute_config, build_catalog_config, load_site
from commerce_datagen.config.models import (
    AttributeConfig,
    BundleProductConfiguration,
    CatalogListConfiguration,
    DataType,
    GeneratedAttributeConfig,
    GenerationStrategy,
    InventoryConfiguration,
    InventoryRecordConfiguration,
    NavigationCatalogConfiguration,
    PricebookConfiguration,
    ProductConfiguration,
    ProductOptionConfiguration,
    ProductSetConfiguration,
    VariationAttributeConfiguration,
    VariationProductConfiguration,
)
from commerce_datagen.config.seed_inheritance import resolve_seeds
from commerce_datagen.errors import SpecificationError
from commerce_datagen.utils.random_data import Region


def _write_yaml(path, document):
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(document, f)


class TestConfigValidation:
    """Test that invalid configurations are rejected on construction."""

    def test_searchable_count_above_element_count(self):
        """Test thereofSearchable > elementCount."""
        with pytest.raises(SpecificationError):
            GeneratedAttributeConfig(element_count=2, thereof_searchable=3)

    def test_searchable_count_equal_element_count(self):
        """Test that every generated attribute may be searchable."""
        assert GeneratedAttributeConfig(element_count=2, thereof_searchable=2).thereof_searchable == 2

    @pytest.mark.parametrize('factory', [
        lambda: BundleProductConfiguration(min_bundled_products=5, max_bundled_products=2),
        lambda: BundleProductConfiguration(min_quantity=3, max_quantity=1),
        lambda: ProductSetConfiguration(min_set_products=4, max_set_products=3),
        lambda: ProductOptionConfiguration(min_values=3, max_values=2),
        lambda: ProductOptionConfiguration(min_price=10.0, max_price=1.0),
        lambda: InventoryRecordConfiguration(initial_seed=1, min_count=10, max_count=5),
        lambda: PricebookConfiguration(id='pb', initial_seed=1, min_amount=5.0, max_amount=1.0),
        lambda: PricebookConfiguration(id='pb', initial_seed=1, min_amount_count=3, max_amount_count=2),
    ])
    def test_inverted_ranges(self, factory):
        """Test that max < min is rejected for every range."""
        with pytest.raises(SpecificationError):
            factory()

    @pytest.mark.parametrize('probability', [-0.1, 1.5])
    def test_variation_probability_outside_unit_interval(self, probability):
        """Test variation probability bounds."""
        with pytest.raises(SpecificationError):
            VariationAttributeConfiguration(name='color', values=('red',), probability=probability)

    @pytest.mark.parametrize('coverage', [0, -0.5])
    def test_non_positive_coverage(self, coverage):
        """Test that coverage must be positive."""
        with pytest.raises(SpecificationError):
            InventoryConfiguration(initial_seed=1, coverage=coverage)
        with pytest.raises(SpecificationError):
            NavigationCatalogConfiguration(initial_seed=1, coverage=coverage)

    def test_strategy_payload_required(self):
        """Test that STATIC, COUNTER and LIST attributes need their payload."""
        for strategy in (GenerationStrategy.STATIC, GenerationStrategy.COUNTER, GenerationStrategy.LIST):
            with pytest.raises(SpecificationError):
                AttributeConfig(type=DataType.STRING, generation_strategy=strategy)

    def test_unknown_shared_variation_attribute(self):
        """Test that a master config may only select declared shared attributes."""
        with pytest.raises(SpecificationError):
            CatalogListConfiguration(
                initial_seed=1,
                variation_products=(VariationProductConfiguration(shared_variation_attributes=('size',)),),
            )


class TestCatalogListConfiguration:
    """Test derived catalog configuration state."""

    def test_default_products_inherit_catalog_seed(self):
        """Test the default product configuration."""
        config = CatalogListConfiguration(initial_seed=77)
        assert config.products == ProductConfiguration(initial_seed=77)

    def test_variation_attributes_resolved(self):
        """Test local attributes followed by selected shared attributes."""
        color = VariationAttributeConfiguration(name='color', values=('red', 'blue'))
        size = VariationAttributeConfiguration(name='size', values=('S', 'M'))
        fit = VariationAttributeConfiguration(name='fit', values=('slim',))
        config = CatalogListConfiguration(
            initial_seed=1,
            shared_variation_attributes=(size, fit),
            variation_products=(VariationProductConfiguration(
                local_variation_attributes=(color,), shared_variation_attributes=('size',),
            ),),
        )
        assert config.variation_products[0].attributes == (color, size)

    def test_equal_configs_are_interchangeable(self):
        """Test structural equality, hashing and fingerprints."""
        a = CatalogListConfiguration(initial_seed=5, element_count=2)
        b = CatalogListConfiguration(initial_seed=5, element_count=2)
        assert a == b
        assert hash(a) == hash(b)
        assert a.fingerprint() == b.fingerprint()
        assert a.fingerprint() != CatalogListConfiguration(initial_seed=6, element_count=2).fingerprint()


class TestLoader:
    """Test document to configuration building."""

    def test_build_catalog_config(self):
        """Test a full catalog document."""
        document = {
            'initialSeed': 1234,
            'elementCount': 2,
            'categories': {'elementCount': 7, 'categoryTreeDepth': 2, 'categoryTreeBreadth': 3},
            'products': {
                'elementCount': 15,
                'options': {'elementCount': 2, 'probability': 0.5},
                'customAttributes': {
                    'brand': {'type': 'string', 'data': 'static', 'staticValue': 'ACME'},
                    'serial': {'type': 'string', 'data': 'counter', 'counter': {'offset': 100, 'increment': 2}},
                },
                'generatedAttributes': {'elementCount': 3, 'thereofSearchable': 1},
            },
            'sharedVariationAttributes': [{'name': 'size', 'values': ['S', 'M', 'L']}],
            'variationProducts': [{
                'elementCount': 4,
                'localVariationAttributes': [{'name': 'color', 'values': ['red', 'green'], 'probability': 0.5}],
                'sharedVariationAttributes': ['size'],
            }],
            'bundleConfig': {'elementCount': 3},
            'productSets': {'elementCount': 2, 'minSetProducts': 1, 'maxSetProducts': 3},
        }
        config = build_catalog_config(resolve_seeds(document))
        assert config.initial_seed == 1234
        assert config.element_count == 2
        assert config.categories.element_count == 7
        assert config.categories.tree_depth == 2
        assert config.products.initial_seed == 1234
        assert config.products.element_count == 15
        assert config.products.options.probability == 0.5
        assert dict(config.products.custom_attributes)['serial'].counter.offset == 100
        assert config.products.generated_attributes.thereof_searchable == 1
        assert [a.name for a in config.variation_products[0].attributes] == ['color', 'size']
        assert config.bundle_config.element_count == 3
        assert config.product_sets.max_set_products == 3

    def test_unknown_data_type(self):
        """Test that an unknown attribute type is rejected."""
        with pytest.raises(SpecificationError, match="Unknown data type"):
            build_attribute_config({'type': 'integer', 'data': 'random'})

    def test_unknown_generation_strategy(self):
        """Test that an unknown generation strategy is rejected."""
        with pytest.raises(SpecificationError, match="Unknown generation strategy"):
            build_attribute_config({'type': 'string', 'data': 'sequence'})

    def test_list_attribute(self):
        """Test list attribute parsing."""
        config = build_attribute_config({'type': 'string', 'data': 'list', 'list': ['a', 'b'], 'searchable': True})
        assert config.values == ('a', 'b')
        assert config.searchable is True


class TestLoadSite:
    """Test loading a site directory."""

    @patch('commerce_datagen.config.loader.log_progress')
    def test_missing_optional_files_are_skipped(self, mock_log, tmp_path):
        """Test that only catalogs.yaml is required."""
        _write_yaml(tmp_path / 'catalogs.yaml', {'initialSeed': 1, 'elementCount': 1})
        site = load_site(tmp_path)
        assert site.catalogs.initial_seed == 1
        assert site.inventory is None
        assert site.pricebooks == ()
        assert site.promotions is None
        assert site.redirects is None
        assert site.navigation is None
        assert mock_log.call_count == 5

    def test_missing_catalogs_file_raises(self, tmp_path):
        """Test that catalogs.yaml is required."""
        with pytest.raises(SpecificationError):
            load_site(tmp_path)

    @patch('commerce_datagen.config.loader.log_progress')
    def test_full_site(self, mock_log, tmp_path):
        """Test a site with every optional document."""
        _write_yaml(tmp_path / 'catalogs.yaml', {'elementCount': 1})
        _write_yaml(tmp_path / 'site.yaml', {'name': 'Outlet', 'currencies': ['USD', 'EUR'],
                                              'regions': ['Generic', 'German']})
        _write_yaml(tmp_path / 'inventories.yaml', {'initialSeed': 5, 'coverage': 0.5,
                                                    'inventoryRecords': {'maxCount': 10}})
        _write_yaml(tmp_path / 'pricebooks.yaml', [
            {'id': 'list-prices', 'children': [{'id': 'sale-prices', 'coverage': 0.5}]},
            {'id': 'other-prices', 'initialSeed': 3},
        ])
        _write_yaml(tmp_path / 'promotions.yaml', {'productConfig': {'elementCount': 2}, 'orderConfig': {}})
        _write_yaml(tmp_path / 'redirect-urls.yaml', {'elementCount': 3})
        _write_yaml(tmp_path / 'navigation-catalog.yaml', {'coverage': 0.5})

        site = load_site(tmp_path, default_seed=42)

        mock_log.assert_not_called()
        assert site.name == 'Outlet'
        assert site.currencies == ('USD', 'EUR')
        assert site.regions == (Region.GENERIC, Region.GERMAN)
        assert site.catalogs.initial_seed == 42
        assert site.inventory.initial_seed == 5
        assert site.inventory.inventory_records.initial_seed == 5
        assert site.inventory.inventory_records.max_count == 10
        assert [p.id for p in site.pricebooks] == ['list-prices', 'other-prices']
        assert site.pricebooks[0].initial_seed == 42
        assert site.pricebooks[0].children[0].sales is True
        assert site.pricebooks[0].children[0].initial_seed == 42
        assert site.pricebooks[1].initial_seed == 3
        assert site.promotions.product_config.element_count == 2
        assert site.promotions.order_config.initial_seed == 42
        assert site.redirects.element_count == 3
        assert site.navigation.coverage == 0.5
