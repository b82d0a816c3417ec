"""
Tests for article_pipeline with fake services.

    pytest test_article_pipeline.py -v
"""

import pytest

from article_models import ArticleRequest
from article_pipeline import generate_article
from conftest import FakeImageGenerator, FakeLLM, FakeScraper, FakeSpellChecker, make_services
from html_to_markdown import html_to_markdown
from image_generator import ImageGenerationError
from llm_client import LLMGenerationError
from markup_stats import calculate_article_stats
from product_scraper import ProductScrapeError

RESPONSE_KEYS = {
    "html", "markdown", "metaTags", "seoScore", "stats", "spellingErrors",
    "affiliateLinks", "discoveryMetadata", "productData", "generatedAt",
}


def _request(**fields):
    payload = {"topic": "X", "articleType": "informational", "wordCount": 500,
               "includeImages": False, "affiliateLinks": {}}
    payload.update(fields)
    return ArticleRequest.from_json(payload)


class TestEndToEnd:
    def test_minimal_request(self, services):
        result = generate_article(_request(), services)
        assert set(result) == RESPONSE_KEYS
        assert result["html"]
        assert result["markdown"] == html_to_markdown(result["html"])
        assert result["affiliateLinks"] == []
        assert result["productData"] is None
        assert result["stats"] == calculate_article_stats(result["html"]).to_dict()
        assert result["generatedAt"].endswith("Z")
        assert set(result["metaTags"]) == {"title", "description", "keywords"}
        assert 0 <= result["seoScore"] <= 100

    def test_max_tokens_follow_word_count(self, services):
        generate_article(_request(wordCount=500), services)
        assert services.llm.calls[0]["max_tokens"] == 1000

    def test_cta_markers_resolved_without_links(self, services):
        result = generate_article(_request(), services)
        assert "[CTA]" not in result["html"]
        assert "See today's price" in result["html"]


class TestImages:
    def test_images_generated_and_placed(self, services):
        result = generate_article(_request(includeImages=True, imageCount=3), services)
        assert len(services.image_generator.prompts) == 3
        assert result["stats"]["imageCount"] == 3
        assert result["discoveryMetadata"]["imageUrl"] == "https://img.example/0.png"

    def test_image_failure_is_soft(self):
        services = make_services(image_generator=FakeImageGenerator(error=ImageGenerationError("quota")))
        result = generate_article(_request(includeImages=True, imageCount=2), services)
        assert result["stats"]["imageCount"] == 0
        assert result["html"]

    def test_images_skipped_when_disabled(self, services):
        generate_article(_request(includeImages=True, imageCount=0), services)
        assert services.image_generator.prompts == []


class TestAffiliateLinks:
    def test_counts_per_platform(self, services):
        links = {"amazon": "https://amzn.to/a", "shopee": "https://shope.ee/b", "magalu": ""}
        result = generate_article(_request(affiliateLinks=links), services)
        assert result["affiliateLinks"] == [
            {"platform": "amazon", "count": 1},
            {"platform": "shopee", "count": 1},
        ]
        assert 'class="affiliate-link"' in result["html"]


class TestProductScrape:
    def test_scraped_for_review_with_url(self):
        scraper = FakeScraper()
        services = make_services(scraper=scraper)
        result = generate_article(_request(articleType="review", productUrl="https://shop/p"), services)
        assert scraper.urls == ["https://shop/p"]
        assert result["productData"]["name"] == "Runner X"
        assert "Runner X" in services.llm.calls[0]["system"]

    def test_not_scraped_for_other_types(self):
        scraper = FakeScraper()
        generate_article(_request(productUrl="https://shop/p"), make_services(scraper=scraper))
        assert scraper.urls == []

    def test_scrape_failure_is_soft(self):
        services = make_services(scraper=FakeScraper(error=ProductScrapeError("HTTP 403")))
        result = generate_article(_request(articleType="review", productUrl="https://shop/p"), services)
        assert result["productData"] is None
        assert result["html"]


class TestSpelling:
    def test_truncated_to_twenty(self, spelling_errors):
        services = make_services(spell_checker=FakeSpellChecker(errors=spelling_errors))
        result = generate_article(_request(), services)
        assert len(result["spellingErrors"]) == 20
        assert result["spellingErrors"][0] == {"word": "wrd0", "suggestions": ["word"]}

    def test_spell_failure_is_soft(self):
        services = make_services(spell_checker=FakeSpellChecker(error=RuntimeError("LT down")))
        assert generate_article(_request(), services)["spellingErrors"] == []


class TestFatal:
    def test_llm_failure_propagates(self):
        services = make_services(llm=FakeLLM(error=LLMGenerationError("rate limited")))
        with pytest.raises(LLMGenerationError):
            generate_article(_request(), services)


class SignedUrlImageGenerator(FakeImageGenerator):
    def generate(self, prompts):
        self.prompts = list(prompts)
        return [f"https://blob.example/img-{i}.png?st=1&se=2&sig=abc" for i in range(len(prompts))]


class TestSignedImageUrls:
    def test_discovery_metadata_keeps_raw_url(self):
        services = make_services(image_generator=SignedUrlImageGenerator())
        result = generate_article(_request(includeImages=True, imageCount=2), services)
        url = "https://blob.example/img-0.png?st=1&se=2&sig=abc"
        discovery = result["discoveryMetadata"]
        assert discovery["imageUrl"] == url
        assert discovery["openGraph"]["og:image"] == url
        assert discovery["structuredData"]["image"] == [url]
        assert 'src="https://blob.example/img-0.png?st=1&amp;se=2&amp;sig=abc"' in result["html"]
