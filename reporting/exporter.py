"""
Converts an AuditReport to Pandas DataFrames and CSV bytes for export.
"""
from __future__ import annotations

import io

import pandas as pd

from config import CATEGORY_LABELS, CATEGORY_ORDER, SCORING_WEIGHTS
from models import AuditReport, Issue, Priority, Recommendation

_PRIORITY_ORDER = {p: i for i, p in enumerate(Priority.ALL)}


# ── Issues DataFrame ───────────────────────────────────────────────────────────

def issues_to_df(issues: list[Issue]) -> pd.DataFrame:
    if not issues:
        return pd.DataFrame(columns=["Priority", "Category", "Issue", "Description"])

    rows = []
    for issue in issues:
        rows.append({
            "Priority":    issue.priority.upper(),
            "Category":    CATEGORY_LABELS.get(issue.category, issue.category),
            "Issue":       _humanize(issue.id),
            "Description": issue.description,
        })

    df = pd.DataFrame(rows)

    # Priority sort order; stable so category order survives within a priority
    df["_order"] = df["Priority"].str.lower().map(_PRIORITY_ORDER)
    df = df.sort_values("_order", kind="stable").drop(columns=["_order"])
    return df.reset_index(drop=True)


# ── Recommendations DataFrame ──────────────────────────────────────────────────

def recommendations_to_df(recommendations: list[Recommendation]) -> pd.DataFrame:
    if not recommendations:
        return pd.DataFrame(columns=["Title", "Priority", "Impact", "Difficulty", "Estimated Time", "Steps"])

    rows = []
    for rec in recommendations:
        rows.append({
            "Title":          rec.title,
            "Priority":       rec.priority.capitalize(),
            "Impact":         rec.impact,
            "Difficulty":     rec.difficulty.capitalize(),
            "Estimated Time": rec.estimated_time,
            "Description":    rec.description,
            "Steps":          " | ".join(rec.steps),
        })
    return pd.DataFrame(rows)


# ── Scores table ───────────────────────────────────────────────────────────────

def scores_to_df(report: AuditReport) -> pd.DataFrame:
    """One row per category plus its weighted contribution to the overall score."""
    rows = []
    for category in CATEGORY_ORDER:
        score = report.scores.get(category, 0)
        weight = SCORING_WEIGHTS[category]
        rows.append({
            "Category":     CATEGORY_LABELS[category],
            "Score":        score,
            "Weight":       weight,
            "Contribution": round(score * weight, 2),
        })
    return pd.DataFrame(rows)


# ── CSV export ─────────────────────────────────────────────────────────────────

def to_csv_bytes(df: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


# ── Helpers ────────────────────────────────────────────────────────────────────

def _humanize(slug: str) -> str:
    """Convert kebab-case issue ids to Title Case for display."""
    return slug.replace("-", " ").title()
