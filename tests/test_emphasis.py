"""Tests for emphasis repair"""

import pytest

from streammend import RepairOptions, repair
from streammend.repair.emphasis import (
    repair_bold,
    repair_bold_italic,
    repair_double_underscore,
    repair_single_asterisk,
    repair_single_underscore,
)


def test_bold_is_closed():
    """Test closing an open bold span"""
    assert repair_bold("This is **bold") == "This is **bold**"


def test_bold_italic_is_closed():
    """Test closing an open bold-italic span"""
    assert repair_bold_italic("***both") == "***both***"


def test_double_underscore_is_closed():
    """Test closing an open double-underscore span"""
    assert repair_double_underscore("Some __emphasis") == "Some __emphasis__"


def test_single_asterisk_is_closed():
    """Test closing an open single-asterisk span"""
    assert repair_single_asterisk("An *italic") == "An *italic*"


def test_single_underscore_is_closed_before_trailing_newlines():
    """Test that the closing underscore goes before trailing newlines"""
    assert repair_single_underscore("_italic\n") == "_italic_\n"
    assert repair_single_underscore("_incomplete\n\n") == "_incomplete_\n\n"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("**bold and *italic", "**bold and *italic*"),
        ("*italic with **bold", "*italic with **bold***"),
        ("**bold *italic `code ~~strike", "**bold *italic `code ~~strike*`~~"),
        ("**bold _und", "**bold _und**_"),
        ("~~strike with **bold", "~~strike with **bold**~~"),
        ("**bold with $x^2", "**bold with $x^2**"),
        ("***bold-italic with `code", "***bold-italic with `code***`"),
        ("*italic* **bold** ***both", "*italic* **bold** ***both***"),
    ],
)
def test_composition_of_open_constructs(text, expected):
    """Test the fixed handler order on several open constructs"""
    assert repair(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "**", "__", "***", "*", "_", "~~", "`",
        "** __", "\n** __\n", "* _ ~~ `",
        "** ", " **", "  **  ",
        "text**", "text*", "text`", "text$", "text~~",
        "text ***", "text ****", "****", "***start***end***",
    ],
)
def test_standalone_markers_unchanged(text):
    """Test that markers without content are never closed"""
    assert repair(text) == text


@pytest.mark.parametrize(
    "text",
    [
        "hello*world",
        "234234*123",
        "test*123*test",
        "abc*123",
        "café_price",
        "naïve_approach",
        "some_variable_name",
        "word_",
        "__init__ and __main__ are special",
        "1_000_000",
        '<div data_attribute="value">',
    ],
)
def test_word_internal_delimiters_ignored(text):
    """Test that delimiters between word characters are not emphasis"""
    assert repair(text) == text


def test_word_internal_asterisks_do_not_hide_real_italic():
    """Test an open italic next to word-internal asterisks"""
    text = "*italic with some*var*name inside"

    assert repair(text) == text + "*"


def test_leading_underscore_identifier_is_closed():
    """Test that a leading underscore opens italic"""
    assert repair("_privateVariable") == "_privateVariable_"


def test_escaped_markers_are_not_counted():
    """Test that escaped delimiters are neither counted nor re-escaped"""
    assert repair("\\*escaped asterisk and *italic") == "\\*escaped asterisk and *italic*"
    assert repair("Cost \\$100 with _incomplete") == "Cost \\$100 with _incomplete_"


def test_list_bullets_are_not_emphasis():
    """Test list bullets with asterisks"""
    assert repair("* Item 1\n* Item 2") == "* Item 1\n* Item 2"
    assert repair("*\tItem with tab") == "*\tItem with tab"
    assert repair("* Item with *incomplete italic\n* Another item") == (
        "* Item with *incomplete italic\n* Another item*"
    )


def test_bold_in_list_and_table_is_closed():
    """Test bold closing inside list items and table cells"""
    assert repair("- Item 1\n- Item 2 with **bol") == "- Item 1\n- Item 2 with **bol**"
    table = "| Col1 | Col2 |\n|------|------|\n| **dat"
    assert repair(table) == table + "**"


def test_bold_opened_on_bullet_line_and_continued_is_left_open():
    """Test that scope spanning past a bullet line is not guessed"""
    text = "- **start\nof a list"

    assert repair_bold(text) == text


def test_underscores_inside_math_are_skipped():
    """Test the math and underscore interaction"""
    assert repair("Math expression $x_") == "Math expression $x_"
    assert repair("$$formula_") == "$$formula_$$"
    assert repair("Start _italic with $x_1$") == "Start _italic with $x_1$_"


def test_half_typed_bold_closer_is_completed():
    """Test that a single trailing asterisk after bold content finishes the closer"""
    assert repair("**xxx*") == "**xxx**"
    assert repair("**bold text*") == "**bold text**"


def test_emphasis_inside_open_fence_is_untouched():
    """Test fence sanctity"""
    text = "```python\nx = a ** b * c _d"

    assert repair(text) == text


def test_emphasis_after_closed_fence_is_repaired():
    """Test that delimiters inside a closed fence are not counted"""
    text = "```\nx ** y\n```\nthen **bold"

    assert repair(text) == text + "**"


def test_thematic_break_is_not_italic():
    """Test that a horizontal rule does not count as emphasis"""
    text = "above\n\n* * *\n\nbelow *it"

    assert repair(text) == text + "*"


def test_disabled_constructs_are_skipped():
    """Test per-construct switches"""
    assert repair("**bold", RepairOptions(bold=False)) == "**bold"
    assert repair("*it", RepairOptions(italic=False)) == "*it"
    assert repair("***both", RepairOptions(bold_italic=False)) == "***both"


@pytest.mark.parametrize("text", ["Let $a__ + b$ hold", "$$\nx__ + y\n$$\nmore text"])
def test_double_underscores_inside_math_are_skipped(text):
    """Test that __ inside inline or block math is not emphasis"""
    assert repair_double_underscore(text) == text
    assert repair(text) == text


def test_double_underscore_after_math_is_closed():
    """Test that __ outside math is still closed"""
    assert repair("Given $x_1$ and __strong") == "Given $x_1$ and __strong__"


@pytest.mark.parametrize(
    "text",
    [
        "See [Python](https://en.wikipedia.org/wiki/Python_(programming_language)) for more.",
        "Check [docs](https://ex.com/_private) now",
        "See ![img](https://ex.com/*x.png) ok",
        "Use [__init__](https://ex.com/__init__.py) here",
    ],
)
def test_markers_inside_link_destinations_are_ignored(text):
    """Test that complete links and images are not read as emphasis"""
    assert repair(text) == text


def test_emphasis_after_link_is_still_closed():
    """Test that only the destination is masked"""
    text = "Check [docs](https://ex.com/_private) and *more"

    assert repair(text) == text + "*"
