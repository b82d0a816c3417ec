"""
===============================================================================
🛒 PRODUCT SCRAPER v1.0: product facts for review articles
===============================================================================
Fetches a product page and extracts what the review prompt needs:
name, description, features, technical specs, price and rating.

Source priority:
1. JSON-LD Product (schema.org), published by most stores
2. Open Graph / product:* meta tags
3. Plain page structure (<h1>, meta description, feature lists, spec tables)

Raises ProductScrapeError on any fetch or parse failure; the pipeline treats
that as a soft failure.
===============================================================================
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

import requests
from bs4 import BeautifulSoup

from article_config import SCRAPER_TIMEOUT, SCRAPER_USER_AGENT

logger = logging.getLogger(__name__)

MAX_FEATURES = 15
MAX_SPECS = 30
MAX_HTML_SIZE = 1_500_000


class ProductScrapeError(Exception):
    """Raised when a product page cannot be fetched or parsed."""


@dataclass
class ProductData:
    name: str = ""
    description: str = ""
    features: List[str] = field(default_factory=list)
    specs: Dict[str, str] = field(default_factory=dict)
    price: Optional[str] = None
    rating: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "features": self.features,
            "specs": self.specs,
            "price": self.price,
            "rating": self.rating,
        }


# ================================================================
# 🔗 FETCH
# ================================================================

def fetch_page(url: str, timeout: int = SCRAPER_TIMEOUT) -> str:
    try:
        response = requests.get(
            url,
            timeout=timeout,
            headers={"User-Agent": SCRAPER_USER_AGENT, "Accept-Language": "en,pt;q=0.8,es;q=0.6"},
            allow_redirects=True,
        )
    except requests.exceptions.Timeout as e:
        raise ProductScrapeError(f"Timeout fetching {url} (>{timeout}s)") from e
    except requests.RequestException as e:
        raise ProductScrapeError(f"Fetch error for {url}: {e}") from e

    if response.status_code != 200:
        raise ProductScrapeError(f"HTTP {response.status_code} for {url}")
    return response.text[:MAX_HTML_SIZE]


# ================================================================
# 📦 JSON-LD
# ================================================================

def _iter_json_ld(soup: BeautifulSoup):
    for script in soup.find_all("script", type="application/ld+json"):
        raw = script.string or script.get_text() or ""
        try:
            data = json.loads(raw)
        except ValueError:
            continue
        stack = data if isinstance(data, list) else [data]
        while stack:
            item = stack.pop(0)
            if not isinstance(item, dict):
                continue
            if "@graph" in item and isinstance(item["@graph"], list):
                stack.extend(item["@graph"])
            yield item


def _is_product(item: dict) -> bool:
    item_type = item.get("@type", "")
    if isinstance(item_type, list):
        return "Product" in item_type
    return item_type == "Product"


def _offer_price(offers) -> Optional[str]:
    if isinstance(offers, list):
        offers = offers[0] if offers else {}
    if not isinstance(offers, dict):
        return None
    price = offers.get("price") or offers.get("lowPrice")
    if price in (None, ""):
        return None
    currency = offers.get("priceCurrency", "")
    return f"{currency} {price}".strip()


def extract_json_ld_product(soup: BeautifulSoup) -> ProductData:
    for item in _iter_json_ld(soup):
        if not _is_product(item):
            continue
        rating = item.get("aggregateRating") or {}
        rating_value = rating.get("ratingValue") if isinstance(rating, dict) else None
        return ProductData(
            name=str(item.get("name") or "").strip(),
            description=_clean_text(str(item.get("description") or "")),
            price=_offer_price(item.get("offers")),
            rating=str(rating_value) if rating_value not in (None, "") else None,
        )
    return ProductData()


# ================================================================
# 🏷️ META TAGS + PAGE STRUCTURE
# ================================================================

def _meta(soup: BeautifulSoup, *names: str) -> str:
    for name in names:
        tag = soup.find("meta", attrs={"property": name}) or soup.find("meta", attrs={"name": name})
        if tag and tag.get("content"):
            return tag["content"].strip()
    return ""


def _clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def extract_features(soup: BeautifulSoup) -> List[str]:
    """List items under the first element whose id/class mentions features."""
    pattern = re.compile(r"feature|benefit|highlight|caracter", re.IGNORECASE)
    containers = soup.find_all(id=pattern) + soup.find_all(class_=pattern)
    for container in containers:
        items = [_clean_text(li.get_text(" ", strip=True)) for li in container.find_all("li")]
        items = [item for item in items if 3 <= len(item) <= 300]
        if items:
            return items[:MAX_FEATURES]
    return []


def extract_specs(soup: BeautifulSoup) -> Dict[str, str]:
    """Two-column table rows (th/td or td/td) as key -> value."""
    specs = {}
    for row in soup.find_all("tr"):
        cells = row.find_all(["th", "td"])
        if len(cells) != 2:
            continue
        key = _clean_text(cells[0].get_text(" ", strip=True)).rstrip(":")
        value = _clean_text(cells[1].get_text(" ", strip=True))
        if key and value and len(key) <= 80 and key not in specs:
            specs[key] = value
        if len(specs) >= MAX_SPECS:
            break
    return specs


def parse_product_page(html: str) -> ProductData:
    soup = BeautifulSoup(html, "lxml")
    product = extract_json_ld_product(soup)

    if not product.name:
        h1 = soup.find("h1")
        product.name = _meta(soup, "og:title") or (_clean_text(h1.get_text(" ", strip=True)) if h1 else "")
    if not product.description:
        product.description = _meta(soup, "og:description", "description")
    if not product.price:
        amount = _meta(soup, "product:price:amount", "og:price:amount")
        currency = _meta(soup, "product:price:currency", "og:price:currency")
        product.price = f"{currency} {amount}".strip() if amount else None

    product.features = extract_features(soup)
    product.specs = extract_specs(soup)
    return product


def scrape_product(url: str) -> ProductData:
    """Fetch and parse a product page. Raises ProductScrapeError."""
    html = fetch_page(url)
    try:
        product = parse_product_page(html)
    except Exception as e:
        raise ProductScrapeError(f"Could not parse product page {url}: {e}") from e

    if not product.name:
        raise ProductScrapeError(f"No product name found at {url}")

    logger.info(
        f"[SCRAPER] ✅ {product.name[:60]}: {len(product.features)} features, "
        f"{len(product.specs)} specs, price={product.price}"
    )
    return product
