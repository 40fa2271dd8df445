"""Tests for block math repair"""

import pytest

from streammend import RepairOptions, repair
from streammend.repair.math import count_block_math_delimiters, repair_block_math


@pytest.mark.parametrize(
    "text, expected",
    [
        ("$$\nx = 1\ny = 2", "$$\nx = 1\ny = 2\n$$"),
        ("$$\nx = 1\n", "$$\nx = 1\n$$"),
        ("$$x^2", "$$x^2$$"),
        ("$$$", "$$$$$"),
    ],
)
def test_open_block_math_is_closed(text, expected):
    """Test closing an open $$ block"""
    assert repair_block_math(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "$$$$",
        "$$block$$ and $inline",
        "Price is \\$100",
        "It costs $5 and $10",
        "Use `$$` to open math",
        "```\n$$\nstill code",
    ],
)
def test_balanced_currency_or_code_dollars_unchanged(text):
    """Test that single dollars, escaped dollars and code are left alone"""
    assert repair_block_math(text) == text


def test_escaped_double_dollar_not_counted():
    """Test escape awareness"""
    assert count_block_math_delimiters("\\$$ and $$x") == 1


def test_katex_switch():
    """Test disabling block math repair"""
    assert repair("$$x", RepairOptions(katex=False)) == "$$x"
