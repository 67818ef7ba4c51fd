"""Plain-text rendering of HTML documents."""

import re

from selectolax.parser import HTMLParser

TRUNCATION_MARKER = "..."

# Elements whose content is never rendered as page text
SKIPPED_TAGS = ["script", "style", "noscript", "template", "svg", "iframe"]

BLOCK_TAGS = (
    "address|article|aside|audio|blockquote|br|canvas|caption|center|dd|details|dialog|"
    "div|dl|dt|fieldset|figcaption|figure|footer|form|h[1-6]|header|hr|legend|li|"
    "main|menu|nav|noframes|object|ol|optgroup|option|p|pre|section|summary|table|"
    "tbody|td|tfoot|th|thead|tr|ul|video"
)

# A space before every block boundary keeps "<p>a</p><p>b</p>" from reading "ab"
_BLOCK_BOUNDARY = re.compile(rf"<(/?)({BLOCK_TAGS})(?=[\s/>])", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


class Extractor:
    """Extract readable text from an HTML document."""

    def __init__(self, html: str):
        self.tree = HTMLParser(_BLOCK_BOUNDARY.sub(r" <\1\2", html))
        self.tree.strip_tags(SKIPPED_TAGS)

    def get_text(self) -> str:
        """Get the visible text of the body with whitespace normalized."""
        if self.tree.body is None:
            return ""
        text = self.tree.body.text(deep=True, separator="")
        return normalize_whitespace(text)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space."""
    return _WHITESPACE.sub(" ", text).strip()


def body_text(html: str) -> str:
    """Render the body of an HTML document as a single line of text."""
    return Extractor(html).get_text()


def utf16_length(text: str) -> int:
    """Length in UTF-16 code units; characters outside the BMP count twice."""
    return len(text.encode("utf-16-le")) // 2


def utf16_prefix(text: str, units: int) -> str:
    """
    First ``units`` UTF-16 code units of text.

    A cut that would split a surrogate pair backs off by one unit, so the
    prefix may be one unit short of ``units``.
    """
    data = text.encode("utf-16-le")[: max(units, 0) * 2]
    if data and 0xD800 <= int.from_bytes(data[-2:], "little") <= 0xDBFF:
        data = data[:-2]
    return data.decode("utf-16-le")


def bound_text(text: str, limit: int = 1200, hard_cap: bool = False) -> str:
    """
    Bound text to ``limit`` UTF-16 code units.

    Text longer than the limit is cut and ``"..."`` is appended, so the
    result is ``limit + 3`` units long. With ``hard_cap`` the cut is made
    early enough that the marker fits inside the limit.
    """
    if utf16_length(text) <= limit:
        return text
    if hard_cap:
        return utf16_prefix(text, limit - len(TRUNCATION_MARKER)) + TRUNCATION_MARKER
    return utf16_prefix(text, limit) + TRUNCATION_MARKER
