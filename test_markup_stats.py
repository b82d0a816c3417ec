"""
Tests for markup_stats: word count, reading time, heading and image counts.

    pytest test_markup_stats.py -v
"""

import pytest

from markup_stats import (
    ArticleStats,
    calculate_article_stats,
    count_headings,
    count_images,
    count_words,
    reading_time_minutes,
    strip_tags,
)


class TestStripTags:
    def test_tags_become_single_spaces(self):
        assert strip_tags("<p>Hello</p><p>world</p>") == "Hello world"

    def test_whitespace_collapsed_and_trimmed(self):
        assert strip_tags("  <h1>  A \n\n B </h1>  ") == "A B"

    def test_none_is_empty(self):
        assert strip_tags(None) == ""


class TestWordCount:
    def test_counts_tokens_after_stripping(self):
        assert count_words("<h1>Title here</h1><p>One <strong>two</strong> three.</p>") == 5

    def test_adjacent_tags_split_words(self):
        assert count_words("<p>one</p><p>two</p>") == 2

    def test_empty_markup_is_zero(self):
        assert count_words("") == 0

    def test_tag_only_markup_is_zero(self):
        assert count_words("<p></p><br/><div> </div>") == 0


class TestReadingTime:
    @pytest.mark.parametrize("words,minutes", [(0, 0), (1, 1), (200, 1), (201, 2), (1500, 8)])
    def test_ceil_of_words_per_minute(self, words, minutes):
        assert reading_time_minutes(words) == minutes


class TestHeadingAndImageCounts:
    def test_counts_every_heading_level(self):
        html = "".join(f"<h{i}>H{i}</h{i}>" for i in range(1, 7))
        assert count_headings(html) == 6

    def test_headings_case_insensitive_with_attributes(self):
        assert count_headings('<H2 class="x">A</H2><h3 id="b">B</h3>') == 2

    def test_closing_tags_and_hr_not_counted(self):
        assert count_headings("<hr><header>x</header><h7>y</h7>") == 0

    def test_image_count(self):
        assert count_images('<img src="a.png"><IMG src="b.png" /><p>no</p>') == 2


class TestArticleStats:
    def test_calculate(self):
        words = " ".join(["word"] * 250)
        html = f"<h1>Title</h1><p>{words}</p><h2>Sub</h2><img src=\"x.png\" alt=\"x\">"
        stats = calculate_article_stats(html)
        assert stats == ArticleStats(word_count=252, reading_time_minutes=2, heading_count=2, image_count=1)

    def test_to_dict_uses_camel_case_and_label(self):
        stats = ArticleStats(word_count=400, reading_time_minutes=2, heading_count=3, image_count=1)
        assert stats.to_dict() == {
            "wordCount": 400,
            "readingTimeMinutes": 2,
            "readingTime": "2 min",
            "headingCount": 3,
            "imageCount": 1,
        }

    def test_empty_markup(self):
        assert calculate_article_stats("").to_dict()["wordCount"] == 0
