"""Tests for the streaming session"""

import pytest

from streammend import MarkdownStream, RepairOptions
from streammend.rendering import BoundedCache


def test_feed_returns_repaired_snapshot():
    """Test that the trailing block is repaired and stable blocks are not"""
    stream = MarkdownStream()
    stream.feed("# Title\n\n")
    snapshot = stream.feed("Some **bo")

    assert snapshot.stable_blocks == ["# Title\n\n"]
    assert snapshot.trailing_block == "Some **bo"
    assert snapshot.repaired_block == "Some **bo**"
    assert snapshot.markdown == "# Title\n\nSome **bo**"


def test_text_accumulates_raw_chunks():
    """Test that the raw document is kept as received"""
    stream = MarkdownStream()
    for chunk in ["He", "llo *wo", "rld"]:
        stream.feed(chunk)

    assert stream.text == "Hello *world"
    assert stream.snapshot().repaired_block == "Hello *world*"


def test_trailing_repair_is_memoised_in_injected_cache():
    """Test that replaying the same tail hits the cache"""
    cache = BoundedCache(max_entries=4)
    stream = MarkdownStream(cache=cache)

    stream.feed("a *b")
    stream.snapshot()

    assert cache.misses == 1
    assert cache.hits == 1


def test_finish_returns_unrepaired_document():
    """Test that finishing yields the document exactly as streamed"""
    stream = MarkdownStream()
    stream.feed("Ends with **open")

    assert stream.finish() == "Ends with **open"
    with pytest.raises(ValueError):
        stream.feed("more")


def test_feed_rejects_non_string_chunks():
    """Test chunk type checking"""
    with pytest.raises(TypeError):
        MarkdownStream().feed(b"bytes")


def test_options_are_applied_to_trailing_block():
    """Test stream-level repair options"""
    stream = MarkdownStream(options=RepairOptions(bold=False))

    assert stream.feed("**x").repaired_block == "**x"


def test_render_html_marks_incomplete_links():
    """Test rendering of a stream with an open link"""
    stream = MarkdownStream()
    stream.feed("# Title\n\nSee [docs")
    html = stream.render_html()

    assert "<h1>Title</h1>" in html
    assert 'data-incomplete="true"' in html
    assert "href=" not in html


def test_render_html_caches_stable_blocks():
    """Test that stable blocks are rendered once"""
    cache = BoundedCache(max_entries=8)
    stream = MarkdownStream(cache=cache)
    stream.feed("Para one.\n\nPara **two")

    first = stream.render_html()
    second = stream.render_html()

    assert first == second
    assert ("html", "Para one.\n\n") in cache
    assert "<strong>two</strong>" in first


def test_open_fence_in_trailing_block_is_untouched():
    """Test that a half-typed list item in an open fence is passed through"""
    snapshot = MarkdownStream().feed("Intro\n\n```yaml\nitems:\n-")

    assert snapshot.trailing_block == "```yaml\nitems:\n-"
    assert snapshot.repaired_block == "```yaml\nitems:\n-"


def test_carriage_return_stream_repairs_trailing_block():
    """Test streaming text with bare \\r line endings"""
    snapshot = MarkdownStream().feed("a\r\rb\r\r**c")

    assert snapshot.trailing_block == "**c"
    assert snapshot.repaired_block == "**c**"
