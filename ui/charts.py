"""
Plotly chart builders for the audit dashboard.
All functions return plotly Figure objects.
"""
from __future__ import annotations

import plotly.graph_objects as go

from config import CATEGORY_LABELS, CATEGORY_ORDER, MODERATE_LOAD_TIME_MS, SLOW_LOAD_TIME_MS
from models import AuditReport, Issue, Priority
from scoring.scorer import score_color

_BG = "#1A1D27"
_PAPER = "#0E1117"
_GRID = "#2A2D3A"
_TEXT = "#FAFAFA"


def _base_layout(**kwargs) -> dict:
    return {
        "paper_bgcolor": _PAPER,
        "plot_bgcolor":  _BG,
        "font": {"color": _TEXT, "family": "sans-serif"},
        "margin": {"l": 20, "r": 20, "t": 40, "b": 20},
        **kwargs,
    }


def _title(text: str) -> dict:
    return {"text": text, "x": 0.5, "xanchor": "center", "font": {"size": 14, "color": _TEXT}}


# ── Overall score gauge ────────────────────────────────────────────────────────

def overall_score_gauge(score: float) -> go.Figure:
    color = score_color(score)
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=score,
        domain={"x": [0, 1], "y": [0, 1]},
        number={"font": {"size": 48, "color": color}},
        gauge={
            "axis": {"range": [0, 100], "tickcolor": _TEXT, "tickfont": {"color": _TEXT}},
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": _BG,
            "borderwidth": 2,
            "bordercolor": _GRID,
            "steps": [
                {"range": [0, 50],  "color": "#3A1A1A"},
                {"range": [50, 75], "color": "#3A2E1A"},
                {"range": [75, 90], "color": "#2A3A1A"},
                {"range": [90, 100], "color": "#1A3A1A"},
            ],
            "threshold": {
                "line": {"color": color, "width": 4},
                "thickness": 0.8,
                "value": score,
            },
        },
    ))
    fig.update_layout(**_base_layout(height=260), title=_title("Overall Score"))
    return fig


# ── Category scores (horizontal bar) ───────────────────────────────────────────

def category_scores_bar(report: AuditReport) -> go.Figure:
    cats = [c for c in CATEGORY_ORDER if c in report.scores]
    if not cats:
        return _empty_chart("No scores")

    values = [report.scores[c] for c in cats]
    fig = go.Figure(go.Bar(
        y=[CATEGORY_LABELS[c] for c in cats],
        x=values,
        orientation="h",
        marker_color=[score_color(v) for v in values],
        hovertemplate="<b>%{y}</b><br>Score: %{x}<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=max(300, len(cats) * 38 + 80)),
        title=_title("Scores by Category"),
        xaxis={"title": "Score", "range": [0, 100], "gridcolor": _GRID, "color": _TEXT},
        yaxis={"gridcolor": _GRID, "color": _TEXT, "automargin": True, "autorange": "reversed"},
        showlegend=False,
    )
    return fig


# ── Issues by priority donut ───────────────────────────────────────────────────

def issues_by_priority_donut(issues: list[Issue]) -> go.Figure:
    counts = {p: 0 for p in Priority.ALL}
    for issue in issues:
        counts[issue.priority] = counts.get(issue.priority, 0) + 1

    if not any(counts.values()):
        return _empty_chart("No issues found")

    labels = [p.capitalize() for p in Priority.ALL]
    values = [counts[p] for p in Priority.ALL]
    colors = [Priority.COLORS[p] for p in Priority.ALL]

    fig = go.Figure(go.Pie(
        labels=labels,
        values=values,
        hole=0.6,
        marker={"colors": colors, "line": {"color": _BG, "width": 2}},
        hovertemplate="<b>%{label}</b>: %{value} issues<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=260),
        title=_title("Issues by Priority"),
        annotations=[{
            "text": f"<b>{sum(values)}</b><br>Total",
            "x": 0.5, "y": 0.5,
            "font_size": 18,
            "font_color": _TEXT,
            "showarrow": False,
        }],
        legend={"font": {"color": _TEXT}},
        showlegend=True,
    )
    return fig


# ── Load time against thresholds ───────────────────────────────────────────────

def load_time_bar(load_time_ms: int) -> go.Figure:
    if load_time_ms > SLOW_LOAD_TIME_MS:
        color = "#FF4B4B"
    elif load_time_ms > MODERATE_LOAD_TIME_MS:
        color = "#FFA500"
    else:
        color = "#00C851"

    fig = go.Figure(go.Bar(
        x=[load_time_ms],
        y=["Load time"],
        orientation="h",
        marker_color=color,
        hovertemplate="<b>%{x} ms</b><extra></extra>",
    ))
    fig.add_vline(x=MODERATE_LOAD_TIME_MS, line_dash="dash", line_color="#FFA500",
                  annotation_text="1.5s", annotation_font_color="#FFA500")
    fig.add_vline(x=SLOW_LOAD_TIME_MS, line_dash="dash", line_color="#FF4B4B",
                  annotation_text="3s", annotation_font_color="#FF4B4B")
    fig.update_layout(
        **_base_layout(height=180),
        title=_title("Load Time"),
        xaxis={"title": "ms", "range": [0, max(load_time_ms, SLOW_LOAD_TIME_MS) * 1.2],
               "gridcolor": _GRID, "color": _TEXT},
        yaxis={"gridcolor": _GRID, "color": _TEXT},
        showlegend=False,
    )
    return fig


# ── Helper ─────────────────────────────────────────────────────────────────────

def _empty_chart(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, x=0.5, y=0.5, showarrow=False, font={"color": _TEXT, "size": 14})
    fig.update_layout(**_base_layout(height=260))
    return fig
