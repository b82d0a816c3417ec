"""
Tests for html_to_markdown: each pass on its own, then the full pipeline.

    pytest test_html_to_markdown.py -v
"""

from html_to_markdown import (
    convert_emphasis,
    convert_headings,
    convert_images,
    convert_links,
    convert_lists,
    convert_paragraphs,
    html_to_markdown,
    normalize_whitespace,
    strip_remaining_tags,
)


class TestPasses:
    def test_headings(self):
        assert convert_headings("<h1>A</h1><h2>B</h2><h3>C</h3><h4>D</h4>") == (
            "# A\n\n## B\n\n### C\n\n#### D\n\n"
        )

    def test_headings_case_insensitive(self):
        assert convert_headings("<H2 id='x'>Title</H2>") == "## Title\n\n"

    def test_emphasis(self):
        assert convert_emphasis("<strong>a</strong> <b>b</b> <em>c</em> <i>d</i>") == "**a** **b** *c* *d*"

    def test_bold_does_not_match_br_or_blockquote(self):
        html = "line<br>next <blockquote>q</blockquote>"
        assert convert_emphasis(html) == html

    def test_links(self):
        assert convert_links('<a href="https://x.com/p" target="_blank">Buy</a>') == "[Buy](https://x.com/p)"

    def test_link_with_attributes_before_href(self):
        assert convert_links('<a class="affiliate-link" href="https://a.b">Go</a>') == "[Go](https://a.b)"

    def test_images_src_then_alt(self):
        assert convert_images('<img src="u.png" alt="Alt">') == "![Alt](u.png)"

    def test_images_alt_then_src(self):
        assert convert_images('<img alt="Alt" src="u.png" loading="lazy" />') == "![Alt](u.png)"

    def test_image_without_alt(self):
        assert convert_images('<img src="u.png">') == "![](u.png)"

    def test_image_without_src_left_for_strip_pass(self):
        assert convert_images('<img alt="x">') == '<img alt="x">'

    def test_lists(self):
        assert convert_lists("<ul><li>a</li><li>b</li></ul>") == "\n- a\n- b\n\n"

    def test_paragraphs(self):
        assert convert_paragraphs("<p>One</p><p class='x'>Two</p>") == "One\n\nTwo\n\n"

    def test_strip_remaining(self):
        assert strip_remaining_tags("<div><span>text</span></div>") == "text"

    def test_normalize_whitespace(self):
        assert normalize_whitespace("\n\na\n\n\n\nb\n\n\n") == "a\n\nb"


class TestHtmlToMarkdown:
    def test_reference_example(self):
        assert html_to_markdown("<h1>Title</h1><p>Body <strong>bold</strong></p>") == "# Title\n\nBody **bold**"

    def test_full_article(self):
        html = (
            "<h1>Guide</h1>\n"
            "<p>Intro with <a href=\"https://shop.example\">a link</a>.</p>\n"
            "<h2>Steps</h2>\n"
            "<ol><li>First</li><li><em>Second</em></li></ol>\n"
            "<figure class=\"article-image\">\n"
            "  <img src=\"https://img/1.png\" alt=\"Image 1\" loading=\"lazy\" />\n"
            "  <figcaption>Figure 1</figcaption>\n"
            "</figure>\n"
        )
        markdown = html_to_markdown(html)
        assert markdown.startswith("# Guide\n\nIntro with [a link](https://shop.example).")
        assert "## Steps" in markdown
        assert "- First\n- *Second*" in markdown
        assert "![Image 1](https://img/1.png)" in markdown
        assert "\n\n\n" not in markdown
        assert "<" not in markdown

    def test_malformed_markup_degrades_to_text(self):
        assert html_to_markdown("<h2>Open heading <p>text") == "Open heading text"

    def test_empty(self):
        assert html_to_markdown("") == ""
        assert html_to_markdown(None) == ""
