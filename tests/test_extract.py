"""Tests for text extraction and bounding."""

import pytest

from linkless.extract import (
    Extractor,
    body_text,
    bound_text,
    normalize_whitespace,
    utf16_length,
    utf16_prefix,
)


class TestExtractorGetText:
    @pytest.fixture
    def html(self):
        return """
        <!DOCTYPE html>
        <html>
        <head>
            <title>Test Page</title>
            <style>body { color: red; }</style>
            <script>var tracking = "should not appear";</script>
        </head>
        <body>
            <h1>Main Title</h1>
            <p>Paragraph <b>one</b>, continued.</p>
            <script>document.write("hidden");</script>
            <noscript>Enable JavaScript</noscript>
            <ul><li>First</li><li>Second</li></ul>
        </body>
        </html>
        """

    def test_returns_body_text(self, html):
        """get_text should return the visible body text."""
        text = Extractor(html).get_text()
        assert text == "Main Title Paragraph one, continued. First Second"

    def test_excludes_head(self, html):
        """Head content such as the title should not be included."""
        assert "Test Page" not in Extractor(html).get_text()

    def test_excludes_scripts_and_styles(self, html):
        """Script, style and noscript content should not be included."""
        text = Extractor(html).get_text()
        assert "tracking" not in text
        assert "hidden" not in text
        assert "color" not in text
        assert "JavaScript" not in text

    def test_inline_elements_do_not_add_spaces(self):
        """Inline markup should not split words from punctuation."""
        assert body_text("<body><p>Hello <em>world</em>!</p></body>") == "Hello world!"

    def test_block_elements_separate_words(self):
        """Adjacent blocks should not run together."""
        assert body_text("<body><p>a</p><p>b</p><div>c</div>d<br>e</body>") == "a b c d e"

    def test_legacy_and_form_blocks_separate_words(self):
        """Centers, captions and select options also render as blocks."""
        html = (
            "<body><center>a</center><center>b</center>"
            "<table><caption>c</caption><tr><td>d</td></tr></table>"
            "<select><option>e</option><option>f</option></select></body>"
        )
        assert body_text(html) == "a b c d e f"

    def test_plain_text_document(self):
        """Plain text should come through as-is."""
        assert body_text("just some text") == "just some text"

    def test_document_without_body_text(self):
        """A document with only a head has no text."""
        assert body_text("<html><head><title>Only a title</title></head></html>") == ""

    def test_decodes_entities(self):
        """HTML entities should be rendered."""
        assert body_text("<body>Fish &amp; Chips</body>") == "Fish & Chips"


class TestNormalizeWhitespace:
    def test_collapses_runs(self):
        """Runs of whitespace become one space."""
        assert normalize_whitespace("a \n\t b") == "a b"

    def test_strips_ends(self):
        """Leading and trailing whitespace is removed."""
        assert normalize_whitespace("  a  ") == "a"


class TestBoundText:
    def test_short_text_unchanged(self):
        """Text within the limit should not be touched."""
        assert bound_text("hello", 1200) == "hello"

    def test_text_at_limit_unchanged(self):
        """Text of exactly the limit gets no marker."""
        text = "x" * 1200
        assert bound_text(text, 1200) == text

    def test_one_over_limit(self):
        """1201 characters should become 1200 plus the marker."""
        text = "a" * 1200 + "b"
        result = bound_text(text, 1200)
        assert len(result) == 1203
        assert result.endswith("...")
        assert result[:1200] == text[:1200]

    def test_long_text(self):
        """Any longer text is cut to the same length."""
        result = bound_text("y" * 5000, 1200)
        assert len(result) == 1203

    def test_hard_cap(self):
        """With hard_cap the marker fits inside the limit."""
        result = bound_text("z" * 5000, 1200, hard_cap=True)
        assert len(result) == 1200
        assert result == "z" * 1197 + "..."

    def test_emoji_counts_as_two_units(self):
        """Characters outside the BMP count as two units toward the limit."""
        result = bound_text("\U0001F600" * 1201, 1200)
        assert utf16_length(result) == 1203
        assert result == "\U0001F600" * 600 + "..."

    def test_cut_inside_surrogate_pair_backs_off(self):
        """A cut that would split an emoji drops the whole emoji."""
        result = bound_text("a" + "\U0001F600" * 700, 1200)
        assert result == "a" + "\U0001F600" * 599 + "..."
        assert utf16_length(result) == 1202

    def test_hard_cap_with_emoji(self):
        """The hard cap holds for text outside the BMP."""
        result = bound_text("\U0001F600" * 1000, 1200, hard_cap=True)
        assert utf16_length(result) <= 1200
        assert result.endswith("...")


class TestUtf16:
    def test_length(self):
        """BMP characters count once, others twice."""
        assert utf16_length("abc") == 3
        assert utf16_length("é\U0001F600") == 3

    def test_prefix(self):
        """A prefix is cut at the requested number of units."""
        assert utf16_prefix("abcdef", 4) == "abcd"
        assert utf16_prefix("ab", 10) == "ab"

    def test_prefix_never_splits_pair(self):
        """The prefix backs off rather than leave half a surrogate pair."""
        assert utf16_prefix("a\U0001F600b", 2) == "a"
        assert utf16_prefix("a\U0001F600b", 3) == "a\U0001F600"
