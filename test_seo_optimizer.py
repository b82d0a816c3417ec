"""
Tests for seo_optimizer: meta tags, helpers and the weighted score.

    pytest test_seo_optimizer.py -v
"""

import pytest

import seo_optimizer
from seo_optimizer import (
    CHECK_WEIGHTS,
    assess_readability,
    build_description,
    build_title,
    count_keyword,
    extract_top_words,
    keyword_density,
    optimize_seo,
    parse_keywords,
    trim_at_word,
)


@pytest.fixture
def easy_readability(monkeypatch):
    monkeypatch.setattr(seo_optimizer.textstat, "flesch_reading_ease", lambda text: 70.0)


def _article(keyword="running shoes", filler_words=320):
    filler = " ".join(["stride"] * filler_words)
    intro = (
        f"Good {keyword} make every kilometre lighter and this guide explains how to "
        f"pick a pair that fits your feet, your pace and your budget for the season."
    )
    return (
        f"<h1>The complete guide to {keyword} this year</h1>"
        f"<p>{intro}</p>"
        f"<h2>Cushioning</h2><p>{filler} {keyword}</p>"
        f"<h2>Fit</h2><p>{keyword} should feel snug.</p>"
        f'<img src="a.png" alt="A runner">'
    )


class TestHelpers:
    def test_parse_keywords_string(self):
        assert parse_keywords(" shoes, Running ,shoes,, SHOES ") == ["shoes", "Running"]

    def test_parse_keywords_list_and_empty(self):
        assert parse_keywords(["a", "b"]) == ["a", "b"]
        assert parse_keywords("") == []
        assert parse_keywords(None) == []

    def test_trim_at_word(self):
        assert trim_at_word("short", 60) == "short"
        assert trim_at_word("one two three four", 10) == "one two"
        assert trim_at_word("one two three four", 12, ellipsis="...") == "one two..."

    def test_count_keyword_whole_phrase(self):
        text = "Running shoes and running shoestrings. RUNNING SHOES!"
        assert count_keyword(text, "running shoes") == 2

    def test_keyword_density(self):
        text = " ".join(["word"] * 98 + ["seo", "tips"])
        assert keyword_density(text, "seo tips") == 2.0
        assert keyword_density("", "seo") == 0.0

    def test_extract_top_words(self):
        text = "coffee coffee coffee beans beans brew the and 2024 2024 2024"
        assert extract_top_words(text, 2) == ["coffee", "beans"]

    def test_readability_error_is_none(self, monkeypatch):
        def boom(text):
            raise ValueError("bad text")

        monkeypatch.setattr(seo_optimizer.textstat, "flesch_reading_ease", boom)
        assert assess_readability("anything") is None


class TestMetaTags:
    def test_title_from_h1(self):
        assert build_title("<h2>Sub</h2><h1>Main <em>title</em></h1>", []) == "Main title"

    def test_title_falls_back_to_h2_then_keyword(self):
        assert build_title("<h2>Sub</h2>", ["kw"]) == "Sub"
        assert build_title("<p>x</p>", ["kw"]) == "kw"

    def test_title_trimmed_to_60(self):
        long_title = " ".join(["word"] * 20)
        assert len(build_title(f"<h1>{long_title}</h1>", [])) <= 60

    def test_description_first_non_empty_paragraph(self):
        assert build_description("<p> </p><p>First real paragraph.</p><p>Second.</p>") == "First real paragraph."

    def test_description_trimmed_with_ellipsis(self):
        description = build_description("<p>" + " ".join(["lorem"] * 60) + "</p>")
        assert len(description) <= 160
        assert description.endswith("...")


class TestOptimizeSeo:
    def test_weights_sum_to_100(self):
        assert sum(CHECK_WEIGHTS.values()) == 100

    def test_well_formed_article_scores_high(self, easy_readability):
        result = optimize_seo(_article(), "running shoes, trail", "en-US", "US")
        passed = {c["name"] for c in result.checks if c["passed"]}
        assert {"has_h1", "keyword_in_title", "keyword_in_intro", "h2_structure",
                "word_count", "image_alt_text", "readability"} <= passed
        assert result.score == sum(c["weight"] for c in result.checks if c["passed"])
        assert 0 <= result.score <= 100
        assert result.meta_tags["keywords"] == "running shoes, trail"
        assert result.meta_tags["title"] == "The complete guide to running shoes this year"

    def test_missing_alt_fails_check(self, easy_readability):
        html = _article().replace('alt="A runner"', 'alt=""')
        checks = {c["name"]: c["passed"] for c in optimize_seo(html, "running shoes").checks}
        assert checks["image_alt_text"] is False

    def test_without_keywords_uses_top_words(self, easy_readability):
        result = optimize_seo(_article(), "")
        assert result.keywords[0] == "stride"
        checks = {c["name"]: c["passed"] for c in result.checks}
        assert checks["keyword_in_title"] is False
        assert checks["keyword_density"] is False

    def test_readability_failure_is_soft(self, monkeypatch):
        def boom(text):
            raise RuntimeError("no syllables")

        monkeypatch.setattr(seo_optimizer.textstat, "flesch_reading_ease", boom)
        result = optimize_seo(_article(), "running shoes")
        checks = {c["name"]: c["passed"] for c in result.checks}
        assert checks["readability"] is False

    def test_empty_html(self):
        result = optimize_seo("", "")
        assert result.score >= 0
        assert result.title == ""
        assert result.keywords == []
