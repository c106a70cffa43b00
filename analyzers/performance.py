"""
Performance analyzer: load time, page weight, caching and compression headers.
"""
from __future__ import annotations

from analyzers.base import BaseAnalyzer, PageContext, Rule, when
from config import LARGE_PAGE_SIZE_BYTES, MODERATE_LOAD_TIME_MS, SLOW_LOAD_TIME_MS
from models import Difficulty, Priority, Recommendation

SPEED_UP = Recommendation(
    title="Speed Up Your Website",
    description=(
        "Slow loading times hurt both user experience and search rankings. "
        "Most visitors expect pages to load in under 3 seconds."
    ),
    priority=Priority.HIGH,
    impact=9,
    difficulty=Difficulty.MEDIUM,
    estimated_time="2-4 hours",
    steps=(
        "Compress and optimize your images",
        "Minify your CSS and JavaScript files",
        "Enable browser caching on your server",
        "Consider using a Content Delivery Network (CDN)",
    ),
)

REDUCE_WEIGHT = Recommendation(
    title="Reduce Page Weight",
    description="Large pages take longer to download, especially on mobile devices with slower connections.",
    priority=Priority.MEDIUM,
    impact=7,
    difficulty=Difficulty.EASY,
    estimated_time="1-2 hours",
    steps=(
        "Compress images using tools like TinyPNG or ImageOptim",
        "Remove any unused CSS and JavaScript code",
        "Enable GZIP compression on your web server",
        "Consider lazy loading for images below the fold",
    ),
)

ENABLE_CACHING = Recommendation(
    title="Enable Browser Caching",
    description="Browser caching helps returning visitors load your site faster by storing certain files locally.",
    priority=Priority.LOW,
    impact=6,
    difficulty=Difficulty.EASY,
    estimated_time="30 minutes",
    steps=(
        "Configure your server to send Cache-Control headers",
        "Set appropriate cache times for different file types",
        "Add ETags for better cache validation",
        "Test caching with browser developer tools",
    ),
)


def _slow_load(ctx: PageContext):
    return when(ctx.load_time_ms > SLOW_LOAD_TIME_MS, seconds=ctx.load_time_ms / 1000)


def _moderate_load(ctx: PageContext):
    t = ctx.load_time_ms
    return when(MODERATE_LOAD_TIME_MS < t <= SLOW_LOAD_TIME_MS, seconds=t / 1000)


def _large_page(ctx: PageContext):
    size = ctx.size_bytes
    return when(size > LARGE_PAGE_SIZE_BYTES, megabytes=size / 1024 / 1024)


def _no_cache_headers(ctx: PageContext):
    cache_control = ctx.headers.get("cache-control", "")
    return when("max-age" not in cache_control)


def _no_compression(ctx: PageContext):
    return when(not ctx.headers.get("content-encoding"))


class PerformanceAnalyzer(BaseAnalyzer):
    category = "performance"

    def rules(self) -> list[Rule]:
        return [
            Rule(
                "slow-load-time", Priority.HIGH, _slow_load, 30,
                "Your website loads in {seconds:.2f} seconds, which may frustrate visitors",
                SPEED_UP,
            ),
            Rule(
                "moderate-load-time", Priority.MEDIUM, _moderate_load, 15,
                "Your website loads in {seconds:.2f} seconds - there's room for improvement",
            ),
            Rule(
                "large-page-size", Priority.MEDIUM, _large_page, 20,
                "Your page is {megabytes:.2f}MB, which may slow down loading on mobile connections",
                REDUCE_WEIGHT,
            ),
            Rule(
                "no-cache-headers", Priority.LOW, _no_cache_headers, 10,
                "Your website isn't telling browsers to cache content, missing a speed optimization",
                ENABLE_CACHING,
            ),
            Rule(
                "no-compression", Priority.MEDIUM, _no_compression, 15,
                "Your website content isn't compressed, making it larger than necessary",
            ),
        ]
