"""Tests for half-written HTML tag removal"""

import pytest

from streammend import RepairOptions, repair
from streammend.repair.html import strip_incomplete_html_tag


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Hello <div", "Hello"),
        ("Hello <span class=\"x", "Hello"),
        ("Closing </di", "Closing"),
        ("<p", ""),
    ],
)
def test_incomplete_tag_is_stripped(text, expected):
    """Test stripping a tag that has not reached its >"""
    assert strip_incomplete_html_tag(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "<div>done",
        "a < b",
        "x <3",
        "see `<div",
        "```html\n<div cla",
    ],
)
def test_complete_tags_comparisons_and_code_unchanged(text):
    """Test that complete tags, comparisons and code are left alone"""
    assert strip_incomplete_html_tag(text) == text


def test_html_tags_are_opt_in_for_repair():
    """Test that repair only strips tags when enabled"""
    assert repair("Hello <div") == "Hello <div"
    assert repair("Hello <div", RepairOptions(html_tags=True)) == "Hello"
