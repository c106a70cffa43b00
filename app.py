"""
Website Audit: Streamlit application
Single-page quality audit: performance, SEO, security, mobile,
accessibility and best practices.
"""
from __future__ import annotations

import logging
from datetime import datetime
from urllib.parse import urlparse

import pandas as pd
import streamlit as st

from config import CATEGORY_LABELS, CATEGORY_ORDER, INDUSTRY_AVERAGES
from engine import check_business_type, check_eligibility, run_audit
from models import AuditError, AuditReport, Issue, Priority
from reporting.exporter import issues_to_df, recommendations_to_df, scores_to_df, to_csv_bytes
from scoring.scorer import score_color, score_label
from ui.charts import category_scores_bar, issues_by_priority_donut, load_time_bar, overall_score_gauge

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# ── Page config ────────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Website Audit",
    page_icon="🔍",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Custom CSS ─────────────────────────────────────────────────────────────────
st.markdown("""
<style>
.block-container { padding-top: 1rem; }

.metric-card {
    background: #1A1D27;
    border-radius: 10px;
    padding: 1rem 1.2rem;
    margin-bottom: 0.5rem;
    border-left: 4px solid;
}
.metric-card.high    { border-color: #FF4B4B; }
.metric-card.medium  { border-color: #FFA500; }
.metric-card.low     { border-color: #4B9EFF; }
.metric-card.success { border-color: #00C851; }
.metric-card.neutral { border-color: #6C63FF; }

.metric-val  { font-size: 2rem; font-weight: 700; margin: 0; }
.metric-lbl  { font-size: 0.8rem; color: #888; text-transform: uppercase; letter-spacing: 0.05em; }

.sidebar-logo { font-size: 1.5rem; font-weight: 800; color: #6C63FF; margin-bottom: 0.5rem; }
</style>
""", unsafe_allow_html=True)

_NO_BUSINESS_TYPE = "(none)"


# ── State helpers ──────────────────────────────────────────────────────────────

def _clear_results():
    st.session_state.pop("audit_report", None)


def _has_result() -> bool:
    return st.session_state.get("audit_report") is not None


# ── Sidebar ────────────────────────────────────────────────────────────────────

def render_sidebar() -> tuple[str, str | None] | None:
    with st.sidebar:
        st.markdown('<div class="sidebar-logo">🔍 Website Audit</div>', unsafe_allow_html=True)
        st.caption("Single-page quality audit")
        st.divider()

        st.subheader("Target")
        url = st.text_input(
            "Website URL",
            placeholder="https://example.com",
            help="Full URL including https://",
        )
        business = st.selectbox(
            "Business type (optional)",
            options=[_NO_BUSINESS_TYPE] + sorted(INDUSTRY_AVERAGES.keys()),
            index=0,
            help="Adds an industry comparison to the report",
        )

        st.divider()

        if _has_result():
            if st.button("🔄 New Audit", type="primary", use_container_width=True):
                _clear_results()
                st.rerun()
            st.divider()

        start = st.button("Start Audit", type="primary", use_container_width=True)

        if not _has_result():
            st.divider()
            st.caption("Enter a URL and click **Start Audit** to analyze the page.")

    if start and url:
        url = url.strip()
        if not urlparse(url).scheme:
            url = "https://" + url
        return url, (None if business == _NO_BUSINESS_TYPE else business)

    return None


# ── Run audit ──────────────────────────────────────────────────────────────────

def run(url: str, business_type: str | None) -> None:
    with st.status("Running audit…", expanded=True) as status_widget:
        st.write(f"Checking **{url}**…")

        verdict = check_eligibility(url)
        if not verdict.eligible:
            status_widget.update(label="Not eligible", state="error")
            st.error(verdict.reason)
            return

        if business_type:
            gate = check_business_type(business_type)
            if not gate.eligible:
                status_widget.update(label="Not eligible", state="error")
                st.error(gate.reason)
                return

        st.write("Analysing page…")
        try:
            report = run_audit(url, business_type=business_type)
        except AuditError as exc:
            status_widget.update(label="Audit failed", state="error")
            st.error(exc.message)
            return

        st.write(f"Found **{len(report.issues)}** issues.")
        status_widget.update(label="Audit complete!", state="complete")

    st.session_state.audit_report = report
    st.rerun()


# ── Dashboard: Overview ────────────────────────────────────────────────────────

def render_overview(report: AuditReport) -> None:
    by_priority = report.issues_by_priority
    n_high   = len(by_priority.get(Priority.HIGH, []))
    n_medium = len(by_priority.get(Priority.MEDIUM, []))
    n_low    = len(by_priority.get(Priority.LOW, []))

    col_gauge, col_stats = st.columns([1, 2])

    with col_gauge:
        st.plotly_chart(overall_score_gauge(report.overall_score), use_container_width=True)
        label = score_label(report.overall_score)
        color = score_color(report.overall_score)
        st.markdown(
            f'<div style="text-align:center;font-size:1.1rem;font-weight:700;color:{color}">{label}</div>',
            unsafe_allow_html=True,
        )

    with col_stats:
        c1, c2, c3, c4 = st.columns(4)
        _metric_card(c1, "Load Time",       f"{report.load_time_ms} ms", "neutral")
        _metric_card(c2, "High Priority",   n_high,   "high")
        _metric_card(c3, "Medium Priority", n_medium, "medium")
        _metric_card(c4, "Low Priority",    n_low,    "low")

        if report.competitive is not None:
            comp = report.competitive
            c5, c6, c7 = st.columns(3)
            _metric_card(c5, "Industry Average", comp.avg_industry_score, "neutral")
            _metric_card(c6, "Percentile",       comp.percentile,         "neutral")
            _metric_card(c7, "Ranking",          comp.ranking.title(),
                         "success" if comp.ranking == "above average" else "medium")

    st.divider()
    c_left, c_right = st.columns(2)
    with c_left:
        st.plotly_chart(category_scores_bar(report), use_container_width=True)
    with c_right:
        st.plotly_chart(issues_by_priority_donut(list(report.issues)), use_container_width=True)

    st.plotly_chart(load_time_bar(report.load_time_ms), use_container_width=True)

    st.divider()
    st.subheader("Action Plan")
    c1, c2, c3 = st.columns(3)
    _action_list(c1, "Quick Wins",        report.quick_wins)
    _action_list(c2, "Medium-Term Goals", report.medium_term_goals)
    _action_list(c3, "Long-Term Goals",   report.long_term_goals)


# ── Dashboard: Issues by Category ─────────────────────────────────────────────

def render_by_category(report: AuditReport) -> None:
    by_cat = report.issues_by_category
    if not by_cat:
        st.success("No issues found!")
        return

    for category in CATEGORY_ORDER:
        cat_issues = by_cat.get(category, [])
        label = CATEGORY_LABELS[category]
        score = report.scores.get(category, 0)
        with st.expander(f"**{label}** — score {score} · {len(cat_issues)} issue(s)", expanded=False):
            if cat_issues:
                _render_issue_table(cat_issues)
            else:
                st.success(f"No {label.lower()} issues.")


# ── Dashboard: Recommendations ────────────────────────────────────────────────

def render_recommendations(report: AuditReport) -> None:
    if not report.recommendations:
        st.success("No recommendations — nothing to fix!")
        return

    for rec in report.recommendations:
        with st.expander(f"**{rec.title}** — impact {rec.impact}/10 · {rec.difficulty} · {rec.estimated_time}"):
            st.markdown(rec.description)
            for i, step in enumerate(rec.steps, 1):
                st.markdown(f"{i}. {step}")


# ── Dashboard: Export ─────────────────────────────────────────────────────────

def render_export(report: AuditReport) -> None:
    st.subheader("Export Data")
    host = urlparse(report.final_url).hostname or "site"
    stamp = datetime.now().strftime("%Y%m%d_%H%M")

    col1, col2, col3 = st.columns(3)

    with col1:
        df_issues = issues_to_df(list(report.issues))
        st.download_button(
            "Download Issues (CSV)",
            data=to_csv_bytes(df_issues),
            file_name=f"issues_{host}_{stamp}.csv",
            mime="text/csv",
            use_container_width=True,
        )
        st.caption(f"{len(df_issues)} issues")

    with col2:
        df_recs = recommendations_to_df(list(report.recommendations))
        st.download_button(
            "Download Recommendations (CSV)",
            data=to_csv_bytes(df_recs),
            file_name=f"recommendations_{host}_{stamp}.csv",
            mime="text/csv",
            use_container_width=True,
        )
        st.caption(f"{len(df_recs)} recommendations")

    with col3:
        df_scores = scores_to_df(report)
        st.download_button(
            "Download Scores (CSV)",
            data=to_csv_bytes(df_scores),
            file_name=f"scores_{host}_{stamp}.csv",
            mime="text/csv",
            use_container_width=True,
        )

    st.divider()
    st.subheader("Category Scores")
    st.dataframe(scores_to_df(report), use_container_width=True)


# ── Helpers ────────────────────────────────────────────────────────────────────

def _metric_card(col, label: str, value, card_class: str = "neutral") -> None:
    with col:
        st.markdown(
            f'<div class="metric-card {card_class}">'
            f'<div class="metric-lbl">{label}</div>'
            f'<div class="metric-val">{value}</div>'
            f'</div>',
            unsafe_allow_html=True,
        )


def _action_list(col, title: str, items) -> None:
    with col:
        st.markdown(f"**{title}**")
        for item in items:
            st.markdown(f"- {item}")


def _render_issue_table(issues: list[Issue]) -> None:
    df = pd.DataFrame([
        {"Priority": i.priority.upper(), "Issue": i.id, "Description": i.description}
        for i in issues
    ])
    st.dataframe(
        df,
        use_container_width=True,
        height=min(600, len(df) * 36 + 60),
        column_config={
            "Priority":    st.column_config.TextColumn("Priority", width="small"),
            "Issue":       st.column_config.TextColumn("Issue", width="medium"),
            "Description": st.column_config.TextColumn("Description", width="large"),
        },
    )


# ── Landing / empty state ──────────────────────────────────────────────────────

def render_landing() -> None:
    st.markdown("""
    <div style="text-align:center; padding: 4rem 2rem;">
        <div style="font-size:4rem">🔍</div>
        <h1 style="font-size:2.5rem; font-weight:800; color:#6C63FF; margin:0.5rem 0">Website Audit</h1>
        <p style="font-size:1.1rem; color:#888; max-width:600px; margin:0 auto 2rem">
            Fetches a single page and scores it across six categories, with a
            prioritised action plan of quick wins and longer-term goals.
        </p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    _feature_card(col1, "⚡", "Performance & SEO", "Load time, page weight, caching, titles, headings, links")
    _feature_card(col2, "🔐", "Security", "HTTPS and security response headers")
    _feature_card(col3, "📱", "Mobile & Accessibility", "Viewport, responsive CSS, alt text, form labels")


def _feature_card(col, icon: str, title: str, desc: str) -> None:
    with col:
        st.markdown(
            f'<div class="metric-card neutral" style="text-align:center">'
            f'<div style="font-size:2rem">{icon}</div>'
            f'<div style="font-weight:700;margin:0.5rem 0">{title}</div>'
            f'<div style="font-size:0.85rem;color:#888">{desc}</div>'
            f'</div>',
            unsafe_allow_html=True,
        )


# ── Main ───────────────────────────────────────────────────────────────────────

def main():
    request = render_sidebar()

    if request is not None:
        _clear_results()
        run(*request)
        return

    if not _has_result():
        render_landing()
        return

    report: AuditReport = st.session_state.audit_report

    st.title(f"Audit: {report.final_url}")
    st.caption(
        f"Analysed in {report.audit_duration_ms} ms · "
        f"Score: **{report.overall_score}/100** · "
        f"{len(report.issues)} issue(s)"
    )

    tabs = st.tabs(["Overview", "Issues by Category", "Recommendations", "Export"])

    with tabs[0]:
        render_overview(report)

    with tabs[1]:
        render_by_category(report)

    with tabs[2]:
        render_recommendations(report)

    with tabs[3]:
        render_export(report)


if __name__ == "__main__":
    main()
