"""
Mobile analyzer: viewport, responsive CSS, tap-target font sizes.
"""
from __future__ import annotations

import re

from analyzers.base import BaseAnalyzer, PageContext, Rule, when
from config import DEFAULT_FONT_PX, SMALL_FONT_PX, SMALL_TARGET_RATIO
from crawler.parser import attr_text
from models import Difficulty, Priority, Recommendation

_FONT_SIZE_PX = re.compile(r"font-size:\s*(\d+)px")

ADD_VIEWPORT = Recommendation(
    title="Add Mobile Viewport Settings",
    description="The viewport meta tag is essential for making your website display properly on mobile devices.",
    priority=Priority.HIGH,
    impact=9,
    difficulty=Difficulty.EASY,
    estimated_time="5 minutes",
    steps=(
        'Add <meta name="viewport" content="width=device-width, initial-scale=1"> to your HTML head',
        "Test your site on different mobile devices",
        "Ensure content scales properly on small screens",
    ),
)

GO_RESPONSIVE = Recommendation(
    title="Make Your Site Mobile-Friendly",
    description="Responsive design ensures your website looks and works great on phones, tablets, and desktops.",
    priority=Priority.HIGH,
    impact=9,
    difficulty=Difficulty.HARD,
    estimated_time="4-8 hours",
    steps=(
        "Use CSS media queries to adapt your layout for different screen sizes",
        "Implement a flexible grid system",
        "Use relative units (%, em, rem) instead of fixed pixel sizes",
        "Test your site on various devices and screen sizes",
    ),
)


def is_small_target(style: str) -> bool:
    """Inline style sets a pixel font size below the readable minimum."""
    if "font-size" not in style or "px" not in style:
        return False
    match = _FONT_SIZE_PX.search(style)
    size = int(match.group(1)) if match else DEFAULT_FONT_PX
    return size < SMALL_FONT_PX


def _missing_viewport(ctx: PageContext):
    return when(not ctx.document.exists('meta[name="viewport"]'))


def _no_media_queries(ctx: PageContext):
    return when("@media" not in ctx.body)


def _small_targets(ctx: PageContext):
    targets = ctx.document.select('button, a, input[type="submit"]')
    if not targets:
        return None
    small = sum(1 for el in targets if is_small_target(attr_text(el, "style")))
    return when(small > len(targets) * SMALL_TARGET_RATIO, count=small, total=len(targets))


class MobileAnalyzer(BaseAnalyzer):
    category = "mobile"

    def rules(self) -> list[Rule]:
        return [
            Rule(
                "missing-viewport", Priority.HIGH, _missing_viewport, 30,
                "Your website is missing mobile optimization settings",
                ADD_VIEWPORT,
            ),
            Rule(
                "no-responsive-design", Priority.HIGH, _no_media_queries, 25,
                "Your website doesn't appear to have responsive design for different screen sizes",
                GO_RESPONSIVE,
            ),
            Rule(
                "small-touch-targets", Priority.MEDIUM, _small_targets, 15,
                "Some of your buttons and links may be too small for mobile users to tap easily",
            ),
        ]
