"""Unit tests for core/utils/slug.py"""

import pytest

from mdedit.core.utils.slug import heading_slug, slugify


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("my_file_name", "my-file-name"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("multiple---hyphens", "multiple-hyphens"),
    ("Special! Ch@rs#", "special-chrs"),
    ("", ""),
])
def test_slugify_basic(text, expected):
    """slugify converts text to lowercase hyphenated slug."""
    assert slugify(text) == expected


@pytest.mark.parametrize("text,expected", [
    ("Getting Started", "getting-started"),
    ("API_v2 Reference", "api_v2-reference"),
    ("**Bold** heading!", "bold-heading"),
    ("Ünïcode Title", "ünïcode-title"),
])
def test_heading_slug(text, expected):
    """heading_slug keeps underscores and letters, drops other punctuation."""
    assert heading_slug(text) == expected
