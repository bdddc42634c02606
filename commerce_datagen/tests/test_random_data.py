"""
Unit tests for seeded content helpers and logging utilities.
"""

import re
from unittest.mock import patch

import pytest

from commerce_datagen.errors import SpecificationError
from commerce_datagen.utils.logging_utils import log_progress_bar, log_section_complete
from commerce_datagen.utils.random_data import Region, book_cite, random_noun, random_string, random_uri


class TestRegion:
    """Test region parsing."""

    @pytest.mark.parametrize('name,region', [
        ('Generic', Region.GENERIC),
        ('german', Region.GERMAN),
        ('zh', Region.CHINESE),
        ('x-default', Region.GENERIC),
    ])
    def test_parse(self, name, region):
        """Test parsing by name (any case) or locale id."""
        assert Region.parse(name) is region

    def test_unknown_region(self):
        """Test that an unknown region is rejected."""
        with pytest.raises(SpecificationError):
            Region.parse('Klingon')

    def test_str_is_locale_id(self):
        """Test the rendered locale id."""
        assert str(Region.GERMAN) == 'de'
        assert str(Region.GENERIC) == 'x-default'


class TestSeededContent:
    """Test that content depends only on its seed."""

    def test_random_string(self):
        """Test length, alphabet and determinism."""
        value = random_string(42)
        assert re.fullmatch(r'[A-Za-z0-9]{12}', value)
        assert random_string(42) == value
        assert re.fullmatch(r'[0-9]{6}', random_string(42, 6, letters=False))

    def test_random_uri(self):
        """Test the URI shape."""
        assert re.fullmatch(r'/[A-Za-z]{15}', random_uri(3))

    def test_noun_independent_of_call_order(self):
        """Test that a value does not depend on previously generated values."""
        first = random_noun(10)
        random_noun(11)
        book_cite(12, 50)
        assert random_noun(10) == first

    def test_book_cite_length(self):
        """Test the excerpt length limit."""
        assert len(book_cite(5, 60)) <= 60

    def test_negative_seed(self):
        """Test that negative 64-bit seeds are accepted."""
        assert random_noun(-5) == random_noun(-5)


class TestLoggingUtils:
    """Test the console logging helpers."""

    @patch('commerce_datagen.utils.logging_utils._utc_timestamp', return_value='2024-01-01 00:00:00')
    def test_section_complete(self, mock_ts, capsys):
        """Test the completion line format."""
        log_section_complete('Catalogs', '2 catalogs')
        assert capsys.readouterr().out == "[2024-01-01 00:00:00] Completed: Catalogs - 2 catalogs\n"

    def test_progress_bar_skips_empty_total(self, capsys):
        """Test that a zero total prints nothing."""
        log_progress_bar('Catalogs', 0, 0)
        assert capsys.readouterr().out == ''
