"""
AFFILIATE LINK INJECTOR v1.0
============================
Turns call-to-action markers written by the model into affiliate anchors.

Marker syntax (requested in the system prompt):
    [CTA]Check the price[/CTA]              -> next active platform, round-robin
    [CTA:amazon]See it on Amazon[/CTA]      -> that platform only

Markers for inactive platforms (or any marker when no platform is active)
collapse to their plain label. Active platforms that received no anchor get a
CTA paragraph in a closing block so every configured link appears at least
once.
"""

import html as html_lib
import itertools
import logging
import re
from dataclasses import dataclass
from typing import Dict, List

from article_config import AFFILIATE_PLATFORMS

logger = logging.getLogger(__name__)

_CTA_RE = re.compile(
    r"\[CTA(?::\s*(?P<platform>[\w-]+))?\s*\](?P<label>.*?)\[/CTA\]",
    re.IGNORECASE | re.DOTALL,
)


@dataclass(frozen=True)
class AffiliateLink:
    platform: str
    url: str

    @property
    def display_name(self) -> str:
        return platform_display_name(self.platform)


def platform_display_name(platform: str) -> str:
    if platform in AFFILIATE_PLATFORMS:
        return AFFILIATE_PLATFORMS[platform]
    return platform[:1].upper() + platform[1:]


def active_affiliate_links(affiliate_links: Dict[str, str]) -> List[AffiliateLink]:
    """Non-empty {platform: url} entries, in request order."""
    links = []
    for platform, url in (affiliate_links or {}).items():
        url = (url or "").strip() if isinstance(url, str) else ""
        if url:
            links.append(AffiliateLink(platform=platform, url=url))
    return links


def build_anchor(link: AffiliateLink, label: str) -> str:
    href = link.url.replace('"', "%22")
    return (
        f'<a href="{href}" class="affiliate-link" '
        f'data-platform="{html_lib.escape(link.platform, quote=True)}" '
        f'target="_blank" rel="nofollow sponsored noopener">{label}</a>'
    )


def _fallback_block(links: List[AffiliateLink]) -> str:
    paragraphs = "\n".join(
        f"  <p>{build_anchor(link, f'Check the best price on {link.display_name}')}</p>"
        for link in links
    )
    return f'\n<div class="affiliate-links">\n{paragraphs}\n</div>\n'


def inject_affiliate_links(html: str, links: List[AffiliateLink]) -> str:
    """Replace CTA markers with anchors and guarantee one anchor per platform."""
    html = html or ""
    by_platform = {link.platform.lower(): link for link in links}
    rotation = itertools.cycle(links) if links else None
    used = set()

    def replace(match: re.Match) -> str:
        label = match.group("label").strip()
        platform = match.group("platform")
        if platform:
            link = by_platform.get(platform.lower())
        else:
            link = next(rotation) if rotation else None
        if link is None:
            return label
        used.add(link.platform)
        return build_anchor(link, label)

    html = _CTA_RE.sub(replace, html)

    missing = [link for link in links if link.platform not in used]
    if missing:
        html = html.rstrip() + _fallback_block(missing)

    if links:
        logger.info(
            f"[AFFILIATE] {len(used)} platform(s) linked from markers, "
            f"{len(missing)} appended in closing block"
        )
    return html


def count_platform_links(html: str, links: List[AffiliateLink]) -> List[Dict[str, object]]:
    """Literal occurrences of each platform URL in the final HTML."""
    return [{"platform": link.platform, "count": html.count(link.url)} for link in links]
