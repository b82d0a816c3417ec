"""
HTML -> MARKDOWN v1.0
=====================
Converts the article HTML subset into Markdown with ordered regex passes.

Supported tags: h1-h4, strong/b, em/i, a, img, ul/ol/li, p.
Anything else is stripped in the final pass. Malformed markup never raises:
a tag that does not match its pass survives until the strip pass and is
dropped there, leaving its inner text.

Pass order matters: headings and inline emphasis are resolved before links,
lists and paragraphs, and tag stripping always runs last.

Exported functions:
    html_to_markdown(html: str) -> str
"""

import re

_FLAGS = re.IGNORECASE

_HEADING_PATTERNS = [
    (re.compile(r"<h1(?:\s[^>]*)?>(.*?)</h1>", _FLAGS), r"# \1\n\n"),
    (re.compile(r"<h2(?:\s[^>]*)?>(.*?)</h2>", _FLAGS), r"## \1\n\n"),
    (re.compile(r"<h3(?:\s[^>]*)?>(.*?)</h3>", _FLAGS), r"### \1\n\n"),
    (re.compile(r"<h4(?:\s[^>]*)?>(.*?)</h4>", _FLAGS), r"#### \1\n\n"),
]

_EMPHASIS_PATTERNS = [
    (re.compile(r"<strong(?:\s[^>]*)?>(.*?)</strong>", _FLAGS), r"**\1**"),
    (re.compile(r"<b(?:\s[^>]*)?>(.*?)</b>", _FLAGS), r"**\1**"),
    (re.compile(r"<em(?:\s[^>]*)?>(.*?)</em>", _FLAGS), r"*\1*"),
    (re.compile(r"<i(?:\s[^>]*)?>(.*?)</i>", _FLAGS), r"*\1*"),
]

_LINK_RE = re.compile(r"<a\s[^>]*?href=\"([^\"]*)\"[^>]*>(.*?)</a>", _FLAGS)
_IMG_RE = re.compile(r"<img\b[^>]*>", _FLAGS)
_SRC_RE = re.compile(r"\bsrc=\"([^\"]*)\"", _FLAGS)
_ALT_RE = re.compile(r"\balt=\"([^\"]*)\"", _FLAGS)

_LIST_CONTAINER_RE = re.compile(r"</?(?:ul|ol)(?:\s[^>]*)?>", _FLAGS)
_LIST_ITEM_RE = re.compile(r"<li(?:\s[^>]*)?>(.*?)</li>", _FLAGS)
_PARAGRAPH_RE = re.compile(r"<p(?:\s[^>]*)?>(.*?)</p>", _FLAGS)
_ANY_TAG_RE = re.compile(r"<[^>]*>")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def convert_headings(html: str) -> str:
    for pattern, replacement in _HEADING_PATTERNS:
        html = pattern.sub(replacement, html)
    return html


def convert_emphasis(html: str) -> str:
    for pattern, replacement in _EMPHASIS_PATTERNS:
        html = pattern.sub(replacement, html)
    return html


def convert_links(html: str) -> str:
    return _LINK_RE.sub(lambda m: f"[{m.group(2)}]({m.group(1)})", html)


def _image_to_markdown(match: re.Match) -> str:
    tag = match.group(0)
    src = _SRC_RE.search(tag)
    if not src:
        # No source to point at; the strip pass removes the tag
        return tag
    alt = _ALT_RE.search(tag)
    return f"![{alt.group(1) if alt else ''}]({src.group(1)})"


def convert_images(html: str) -> str:
    """<img src="U" alt="A"> -> ![A](U). Attribute order does not matter."""
    return _IMG_RE.sub(_image_to_markdown, html)


def convert_lists(html: str) -> str:
    html = _LIST_CONTAINER_RE.sub("\n", html)
    return _LIST_ITEM_RE.sub(r"- \1\n", html)


def convert_paragraphs(html: str) -> str:
    return _PARAGRAPH_RE.sub(r"\1\n\n", html)


def strip_remaining_tags(html: str) -> str:
    return _ANY_TAG_RE.sub("", html)


def normalize_whitespace(markdown: str) -> str:
    return _EXCESS_NEWLINES_RE.sub("\n\n", markdown).strip()


CONVERSION_PASSES = (
    convert_headings,
    convert_emphasis,
    convert_links,
    convert_images,
    convert_lists,
    convert_paragraphs,
    strip_remaining_tags,
    normalize_whitespace,
)


def html_to_markdown(html: str) -> str:
    """Run every conversion pass over the article HTML, in order."""
    markdown = html or ""
    for conversion in CONVERSION_PASSES:
        markdown = conversion(markdown)
    return markdown
