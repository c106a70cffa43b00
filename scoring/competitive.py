"""
Competitive context: places an overall score against an industry average.
"""
from __future__ import annotations

from typing import Optional

from config import DEFAULT_INDUSTRY_AVERAGE, INDUSTRY_AVERAGES, PERCENTILE_BOUNDS
from models import CompetitiveContext
from scoring.scorer import round_half_up


def industry_average(business_type: str) -> int:
    key = (business_type or "").strip().lower()
    return INDUSTRY_AVERAGES.get(key, DEFAULT_INDUSTRY_AVERAGE)


def competitive_context(overall: int, business_type: Optional[str]) -> Optional[CompetitiveContext]:
    """None when no business category was supplied."""
    if not business_type:
        return None

    avg = industry_average(business_type)
    low, high = PERCENTILE_BOUNDS
    percentile = min(high, max(low, round_half_up((overall / avg) * 50 + 25)))

    return CompetitiveContext(
        avg_industry_score=avg,
        percentile=percentile,
        ranking="above average" if overall > avg else "below average",
    )
