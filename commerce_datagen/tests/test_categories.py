"""
Unit tests for category forest construction and category assignments.
"""

import re

import pytest

from commerce_datagen.config.models import CatalogListConfiguration, CategoryConfiguration, ProductConfiguration
from commerce_datagen.generators.categories import build_category_tree, grow_tree_shape, tree_capacity
from commerce_datagen.models.catalogs import MasterCatalog
from commerce_datagen.models.categories import construct_category_assignments
from commerce_datagen.models.products import StandardProduct
from commerce_datagen.utils.random_data import Region


class TestTreeShape:
    """Test capacity and growth of the category forest."""

    def test_capacity(self):
        """Test the geometric capacity formula and its degenerate cases."""
        assert tree_capacity(3, 2) == 7
        assert tree_capacity(2, 10) == 11
        assert tree_capacity(4, 1) == 4
        assert tree_capacity(0, 5) == 0
        assert tree_capacity(5, 0) == 0

    def test_configured_shape_kept_when_large_enough(self):
        """Test that a sufficient shape is not grown."""
        assert grow_tree_shape(50, 5, 10) == (5, 10)

    def test_growth_alternates_depth_then_breadth(self):
        """Test the growth order from an empty shape."""
        assert grow_tree_shape(10, 0, 0) == (3, 3)
        assert grow_tree_shape(2, 1, 1) == (2, 1)


class TestBuildCategoryTree:
    """Test breadth-first forest layout."""

    @pytest.mark.parametrize('count,depth,breadth', [
        (10, 0, 0), (1, 1, 1), (50, 5, 10), (33, 2, 3), (7, 1, 1), (100, 2, 2),
    ])
    def test_exact_count(self, count, depth, breadth):
        """Test that exactly element_count nodes are built."""
        assert len(build_category_tree(count, depth, breadth, 42)) == count

    def test_zero_categories(self):
        """Test an empty forest."""
        assert build_category_tree(0, 5, 10, 42) == []

    def test_parents_precede_children(self):
        """Test that every parent index points to an earlier node one level up."""
        nodes = build_category_tree(40, 3, 3, 7)
        for node in nodes:
            if node.parent_index is None:
                assert node.level == 0
            else:
                parent = nodes[node.parent_index]
                assert parent.index < node.index
                assert parent.level == node.level - 1

    def test_breadth_first_parent_formula(self):
        """Test roots and first children for breadth 3."""
        nodes = build_category_tree(13, 3, 3, 7)
        assert [n.parent_index for n in nodes[:3]] == [None, None, None]
        assert [n.parent_index for n in nodes[3:9]] == [0, 0, 0, 1, 1, 1]

    def test_deterministic_seeds(self):
        """Test that the same catalog seed gives the same forest."""
        assert build_category_tree(20, 2, 4, 99) == build_category_tree(20, 2, 4, 99)
        assert build_category_tree(20, 2, 4, 99) != build_category_tree(20, 2, 4, 100)


class TestCatalogCategories:
    """Test categories and assignments of a master catalog."""

    def _catalog(self, **categories):
        config = CatalogListConfiguration(
            initial_seed=5,
            categories=CategoryConfiguration(**categories),
            products=ProductConfiguration(initial_seed=5, element_count=20),
        )
        return MasterCatalog(123, config, 1, ('USD',), (Region.GENERIC,))

    def test_category_ids_unique(self):
        """Test that category ids never repeat within a catalog."""
        catalog = self._catalog(element_count=25, tree_depth=2, tree_breadth=4)
        ids = [c.id for c in catalog.categories]
        assert len(ids) == 25
        assert len(set(ids)) == 25
        assert all(re.search(r'_L1_\d+$', category_id) for category_id in ids)

    def test_parent_references(self):
        """Test that parents are category objects of the same catalog."""
        catalog = self._catalog(element_count=12, tree_depth=2, tree_breadth=3)
        for category in catalog.categories:
            if category.parent is not None:
                assert category.parent in catalog.categories
                assert category.parent_id == category.parent.id

    def test_full_coverage_assigns_every_product(self):
        """Test that coverage 1 assigns each product exactly once."""
        catalog = self._catalog(element_count=5, tree_depth=1, tree_breadth=5)
        assignments = catalog.category_assignments
        assert [a.product.id for a in assignments] == [p.id for p in catalog.products]
        assert all(a.category in catalog.categories for a in assignments)

    def test_assignments_are_deterministic(self):
        """Test that assignments are recomputed identically."""
        catalog = self._catalog(element_count=5, tree_depth=1, tree_breadth=5)
        first = [(a.product.id, a.category.id) for a in catalog.category_assignments]
        assert first == [(a.product.id, a.category.id) for a in catalog.category_assignments]

    def test_partial_coverage(self):
        """Test that a low coverage skips products."""
        products = [StandardProduct(seed, (Region.GENERIC,)) for seed in range(200)]
        catalog = self._catalog(element_count=3, tree_depth=1, tree_breadth=3)
        assignments = construct_category_assignments(products, catalog.categories, 11, coverage=0.25)
        assert 0 < len(assignments) < 100

    def test_no_categories_no_assignments(self):
        """Test that a catalog without categories assigns nothing."""
        catalog = self._catalog(element_count=0)
        assert catalog.category_assignments == []


