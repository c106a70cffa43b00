"""
SEO analyzer: title, meta description, H1 structure, image alt text, internal links.
"""
from __future__ import annotations

from urllib.parse import urlparse

import tldextract

from analyzers.base import BaseAnalyzer, PageContext, Rule, capped, when
from config import MIN_INTERNAL_LINKS, SEO_ALT_PENALTY_CAP, SEO_ALT_PENALTY_PER_IMAGE, TITLE_MAX_CHARS
from crawler.parser import attr_text
from models import Difficulty, Priority, Recommendation

# Bundled public-suffix snapshot only; never fetch the list over the network
_extract = tldextract.TLDExtract(suffix_list_urls=())

ADD_TITLE = Recommendation(
    title="Add a Page Title",
    description=(
        "The title tag is one of the most important SEO elements. "
        "It appears in search results and browser tabs."
    ),
    priority=Priority.HIGH,
    impact=10,
    difficulty=Difficulty.EASY,
    estimated_time="15 minutes",
    steps=(
        "Add a descriptive <title> tag in your HTML head section",
        "Keep your title between 50-60 characters for best display",
        "Include your main keyword naturally in the title",
        "Make each page title unique and descriptive",
    ),
)

WRITE_DESCRIPTION = Recommendation(
    title="Write a Meta Description",
    description=(
        "Meta descriptions appear below your title in search results and "
        "influence whether people click through to your site."
    ),
    priority=Priority.HIGH,
    impact=8,
    difficulty=Difficulty.EASY,
    estimated_time="20 minutes",
    steps=(
        "Add a meta description tag to your HTML head section",
        "Write a compelling 150-160 character description of your page",
        "Include your main keyword naturally",
        "Make it sound appealing to encourage clicks",
    ),
)

ADD_ALT_TEXT = Recommendation(
    title="Add Alt Text to Images",
    description=(
        "Alt text helps search engines understand your images and improves "
        "accessibility for visually impaired users."
    ),
    priority=Priority.MEDIUM,
    impact=6,
    difficulty=Difficulty.EASY,
    estimated_time="30 minutes",
    steps=(
        "Add descriptive alt attributes to all meaningful images",
        "Describe what the image shows, not just what it is",
        "Keep descriptions concise but informative",
        'Use empty alt="" for purely decorative images',
    ),
)


def count_images_without_alt(ctx: PageContext) -> int:
    """Images whose alt attribute is absent or empty."""
    return sum(1 for img in ctx.document.select("img") if not attr_text(img, "alt"))


def is_internal_link(href: str, final_url: str) -> bool:
    """Root-relative, containing the page URL, or on the same registered domain."""
    if href.startswith("/") or (final_url and final_url in href):
        return True
    parsed = urlparse(href)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return False
    page_host = urlparse(final_url).hostname or ""
    site = _extract(page_host).registered_domain
    return bool(site) and _extract(parsed.hostname).registered_domain == site


def _missing_title(ctx: PageContext):
    text = ctx.document.text_of("title")
    return when(text is None or not text.strip())


def _long_title(ctx: PageContext):
    text = ctx.document.text_of("title")
    if text is None or not text.strip():
        return None
    return when(len(text) > TITLE_MAX_CHARS, length=len(text))


def _missing_description(ctx: PageContext):
    return when(not ctx.document.first_attr('meta[name="description"]', "content"))


def _missing_h1(ctx: PageContext):
    return when(ctx.document.count("h1") == 0)


def _multiple_h1(ctx: PageContext):
    n = ctx.document.count("h1")
    return when(n > 1, count=n)


def _missing_alt(ctx: PageContext):
    n = count_images_without_alt(ctx)
    return when(n > 0, count=n)


def _few_internal_links(ctx: PageContext):
    internal = [
        a for a in ctx.document.select("a[href]")
        if is_internal_link(attr_text(a, "href").strip(), ctx.final_url)
    ]
    return when(len(internal) < MIN_INTERNAL_LINKS, count=len(internal))


class SEOAnalyzer(BaseAnalyzer):
    category = "seo"

    def rules(self) -> list[Rule]:
        return [
            Rule(
                "missing-title", Priority.HIGH, _missing_title, 25,
                "Your page is missing a title tag, which is crucial for search engine rankings",
                ADD_TITLE,
            ),
            Rule(
                "long-title", Priority.MEDIUM, _long_title, 10,
                "Your title is {length} characters long - search engines may cut it off",
            ),
            Rule(
                "missing-meta-description", Priority.HIGH, _missing_description, 20,
                "Your page is missing a meta description, which appears in search results",
                WRITE_DESCRIPTION,
            ),
            Rule(
                "missing-h1", Priority.MEDIUM, _missing_h1, 15,
                "Your page doesn't have an H1 heading, which helps search engines understand your content",
            ),
            Rule(
                "multiple-h1", Priority.MEDIUM, _multiple_h1, 10,
                "You have {count} H1 headings - it's best practice to use only one per page",
            ),
            Rule(
                "missing-alt-text", Priority.MEDIUM, _missing_alt,
                capped(SEO_ALT_PENALTY_PER_IMAGE, SEO_ALT_PENALTY_CAP),
                "{count} of your images are missing alt text, which helps search engines understand them",
                ADD_ALT_TEXT,
            ),
            Rule(
                "few-internal-links", Priority.LOW, _few_internal_links, 10,
                "Your page has limited internal links, which could help visitors explore more of your site",
            ),
        ]
