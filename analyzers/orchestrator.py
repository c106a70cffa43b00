"""
Runs the six category analyzers over one fetched page and collects their
results keyed by category.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from analyzers.accessibility import AccessibilityAnalyzer
from analyzers.base import BaseAnalyzer, PageContext
from analyzers.best_practices import BestPracticesAnalyzer
from analyzers.mobile import MobileAnalyzer
from analyzers.performance import PerformanceAnalyzer
from analyzers.security import SecurityAnalyzer
from analyzers.seo import SEOAnalyzer
from config import CATEGORY_ORDER
from crawler.parser import parse_document
from models import CategoryResult, FetchResult

logger = logging.getLogger(__name__)

# Analyzers hold no state, so one shared instance each is enough
ANALYZERS: dict[str, BaseAnalyzer] = {
    a.category: a
    for a in (
        PerformanceAnalyzer(),
        SEOAnalyzer(),
        SecurityAnalyzer(),
        MobileAnalyzer(),
        AccessibilityAnalyzer(),
        BestPracticesAnalyzer(),
    )
}


def build_context(fetched: FetchResult) -> PageContext:
    body = fetched.body or ""
    return PageContext(
        document=parse_document(body),
        body=body,
        headers=dict(fetched.headers),
        final_url=fetched.final_url,
        load_time_ms=fetched.elapsed_ms,
    )


def run_all_analyzers(ctx: PageContext) -> dict[str, CategoryResult]:
    """
    Run every analyzer concurrently and wait for all of them. The returned
    dict is keyed by category in CATEGORY_ORDER regardless of finish order.
    Any analyzer exception propagates; there are no partial results.
    """
    with ThreadPoolExecutor(max_workers=len(ANALYZERS)) as executor:
        futures = {
            category: executor.submit(ANALYZERS[category].analyze, ctx)
            for category in CATEGORY_ORDER
        }
        results = {category: futures[category].result() for category in CATEGORY_ORDER}

    logger.debug(
        "Category scores: "
        + ", ".join(f"{c}={r.score}" for c, r in results.items())
    )
    return results
