"""
Aggregator.

Scoring model:
- The overall score is a fixed weighted sum of the six category scores,
  rounded half-up. Weights live in config.SCORING_WEIGHTS and sum to 1.0.
- Issues and recommendations are concatenated in CATEGORY_ORDER.
- Recommendations are ranked by priority, then impact, and sorted into
  quick-win / medium-term / long-term buckets of at most three titles.
  An empty bucket is filled from a fixed fallback list.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from config import (
    BUCKET_SIZE,
    CATEGORY_ORDER,
    FALLBACK_LONG_TERM_GOALS,
    FALLBACK_MEDIUM_TERM_GOALS,
    FALLBACK_QUICK_WINS,
    LONG_TERM_TIME_MARKER,
    MEDIUM_TERM_IMPACT_RANGE,
    PRIORITY_RANK,
    QUICK_WIN_MIN_IMPACT,
    SCORING_WEIGHTS,
)
from models import (
    AuditReport,
    CategoryResult,
    CompetitiveContext,
    Difficulty,
    FetchResult,
    Issue,
    Recommendation,
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def overall_score(scores: dict[str, int]) -> int:
    total = sum(scores[category] * weight for category, weight in SCORING_WEIGHTS.items())
    return round_half_up(total)


def rank_recommendations(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Stable sort: priority high > medium > low, then descending impact."""
    return sorted(
        recommendations,
        key=lambda r: (-PRIORITY_RANK.get(r.priority, 0), -r.impact),
    )


def _is_quick_win(rec: Recommendation) -> bool:
    return rec.difficulty == Difficulty.EASY and rec.impact >= QUICK_WIN_MIN_IMPACT


def _is_medium_term(rec: Recommendation) -> bool:
    low, high = MEDIUM_TERM_IMPACT_RANGE
    return rec.difficulty == Difficulty.MEDIUM or low <= rec.impact < high


def _is_long_term(rec: Recommendation) -> bool:
    return rec.difficulty == Difficulty.HARD or LONG_TERM_TIME_MARKER in rec.estimated_time


def _bucket(ranked: list[Recommendation], predicate, fallback: list[str]) -> tuple[str, ...]:
    titles = [r.title for r in ranked if predicate(r)][:BUCKET_SIZE]
    return tuple(titles or fallback)


def action_items(recommendations: list[Recommendation]) -> tuple[tuple[str, ...], tuple[str, ...], tuple[str, ...]]:
    """Returns (quick_wins, medium_term_goals, long_term_goals); none is ever empty."""
    ranked = rank_recommendations(recommendations)
    return (
        _bucket(ranked, _is_quick_win, FALLBACK_QUICK_WINS),
        _bucket(ranked, _is_medium_term, FALLBACK_MEDIUM_TERM_GOALS),
        _bucket(ranked, _is_long_term, FALLBACK_LONG_TERM_GOALS),
    )


def aggregate(
    results: dict[str, CategoryResult],
    fetched: FetchResult,
    website_url: str,
    audit_duration_ms: int = 0,
    competitive: Optional[CompetitiveContext] = None,
    timestamp: Optional[str] = None,
) -> AuditReport:
    """Combine per-category results into the final, immutable AuditReport."""
    missing = [c for c in CATEGORY_ORDER if c not in results]
    if missing:
        raise ValueError(f"Missing category results: {', '.join(missing)}")

    scores = {c: results[c].score for c in CATEGORY_ORDER}
    issues: list[Issue] = []
    recommendations: list[Recommendation] = []
    for category in CATEGORY_ORDER:
        issues.extend(results[category].issues)
        recommendations.extend(results[category].recommendations)

    quick, medium, long_ = action_items(recommendations)

    return AuditReport(
        website_url=website_url,
        final_url=fetched.final_url,
        load_time_ms=fetched.elapsed_ms,
        audit_duration_ms=audit_duration_ms,
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        scores=scores,
        overall_score=overall_score(scores),
        issues=tuple(issues),
        recommendations=tuple(recommendations),
        quick_wins=quick,
        medium_term_goals=medium,
        long_term_goals=long_,
        competitive=competitive,
    )


def score_label(score: float) -> str:
    if score >= 90:
        return "Excellent"
    elif score >= 75:
        return "Good"
    elif score >= 50:
        return "Needs Work"
    else:
        return "Poor"


def score_color(score: float) -> str:
    if score >= 90:
        return "#00C851"
    elif score >= 75:
        return "#FFD700"
    elif score >= 50:
        return "#FF8800"
    else:
        return "#FF4444"
