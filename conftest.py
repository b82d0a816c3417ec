"""
Shared fixtures: fake outbound services and a Flask test client.
No test touches the network.
"""

import pytest

from article_pipeline import ArticleServices
from product_scraper import ProductData
from spell_checker import SpellingError


SAMPLE_ARTICLE = (
    "<h1>Best Running Shoes</h1>"
    "<p>Choosing running shoes is easier than it looks.</p>"
    "<h2>Cushioning</h2><p>[CTA]See today's price[/CTA]</p>"
    "<h2>Fit</h2><p>Try them on in the afternoon.</p>"
)


class FakeLLM:
    def __init__(self, text=SAMPLE_ARTICLE, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def complete(self, system_prompt, user_prompt, max_tokens=4000):
        self.calls.append({"system": system_prompt, "user": user_prompt, "max_tokens": max_tokens})
        if self.error:
            raise self.error
        return self.text


class FakeImageGenerator:
    def __init__(self, error=None):
        self.error = error
        self.prompts = []

    def generate(self, prompts):
        self.prompts = list(prompts)
        if self.error:
            raise self.error
        return [f"https://img.example/{i}.png" for i in range(len(prompts))]


class FakeScraper:
    def __init__(self, product=None, error=None):
        self.product = product or ProductData(name="Runner X", description="Light shoe", price="BRL 399")
        self.error = error
        self.urls = []

    def __call__(self, url):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.product


class FakeSpellChecker:
    def __init__(self, errors=None, error=None):
        self.errors = errors if errors is not None else []
        self.error = error

    def __call__(self, html, language):
        if self.error:
            raise self.error
        return self.errors


def make_services(**overrides):
    services = {
        "llm": FakeLLM(),
        "image_generator": FakeImageGenerator(),
        "scraper": FakeScraper(),
        "spell_checker": FakeSpellChecker(),
    }
    services.update(overrides)
    return ArticleServices(**services)


@pytest.fixture
def services():
    return make_services()


@pytest.fixture
def client(services):
    from app import create_app

    app = create_app(services)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def spelling_errors():
    return [SpellingError(word=f"wrd{i}", suggestions=["word"]) for i in range(25)]
