"""
Tests for the aggregator, action-item buckets and competitive context.
"""
import math

import pytest

from config import (
    CATEGORY_ORDER,
    FALLBACK_LONG_TERM_GOALS,
    FALLBACK_MEDIUM_TERM_GOALS,
    FALLBACK_QUICK_WINS,
    SCORING_WEIGHTS,
)
from conftest import make_fetch
from models import CategoryResult, Difficulty, Issue, Priority, Recommendation
from scoring.competitive import competitive_context, industry_average
from scoring.scorer import (
    action_items,
    aggregate,
    overall_score,
    rank_recommendations,
    round_half_up,
    score_label,
)


def _rec(title, priority=Priority.MEDIUM, impact=5, difficulty=Difficulty.MEDIUM, estimated_time="1 hour"):
    return Recommendation(
        title=title,
        description=f"{title} description",
        priority=priority,
        impact=impact,
        difficulty=difficulty,
        estimated_time=estimated_time,
        steps=("step one",),
    )


def _scores(**overrides):
    scores = {c: 100 for c in CATEGORY_ORDER}
    scores.update(overrides)
    return scores


def _results(scores=None, issues=None, recs=None):
    scores = scores or _scores()
    issues = issues or {}
    recs = recs or {}
    return {
        c: CategoryResult(c, scores[c], tuple(issues.get(c, ())), tuple(recs.get(c, ())))
        for c in CATEGORY_ORDER
    }


class TestOverallScore:

    def test_weights_cover_every_category_and_sum_to_one(self):
        assert set(SCORING_WEIGHTS) == set(CATEGORY_ORDER)
        assert math.fsum(SCORING_WEIGHTS.values()) == 1.0

    def test_extremes(self):
        assert overall_score({c: 100 for c in CATEGORY_ORDER}) == 100
        assert overall_score({c: 0 for c in CATEGORY_ORDER}) == 0

    def test_mixed_scores(self):
        scores = {
            "performance": 80, "seo": 55, "security": 60,
            "mobile": 100, "accessibility": 95, "bestPractices": 100,
        }
        # 20 + 13.75 + 12 + 15 + 9.5 + 5 = 75.25
        assert overall_score(scores) == 75

    def test_halves_round_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2
        assert overall_score(_scores(performance=0, seo=0, security=0, mobile=0,
                                     accessibility=0, bestPractices=10)) == 1
        assert overall_score(_scores(performance=10, seo=0, security=0, mobile=0,
                                     accessibility=0, bestPractices=0)) == 3

    @pytest.mark.parametrize("score, label", [(95, "Excellent"), (80, "Good"), (60, "Needs Work"), (10, "Poor")])
    def test_score_label(self, score, label):
        assert score_label(score) == label


class TestRanking:

    def test_priority_then_impact(self):
        recs = [
            _rec("low-9", Priority.LOW, 9),
            _rec("high-6", Priority.HIGH, 6),
            _rec("medium-8", Priority.MEDIUM, 8),
            _rec("high-10", Priority.HIGH, 10),
        ]
        assert [r.title for r in rank_recommendations(recs)] == ["high-10", "high-6", "medium-8", "low-9"]

    def test_ties_keep_input_order(self):
        recs = [_rec("first", Priority.HIGH, 7), _rec("second", Priority.HIGH, 7), _rec("third", Priority.HIGH, 7)]
        assert [r.title for r in rank_recommendations(recs)] == ["first", "second", "third"]


class TestActionItems:

    def test_no_recommendations_uses_every_fallback(self):
        quick, medium, long_ = action_items([])
        assert list(quick) == FALLBACK_QUICK_WINS
        assert list(medium) == FALLBACK_MEDIUM_TERM_GOALS
        assert list(long_) == FALLBACK_LONG_TERM_GOALS

    def test_quick_wins_need_easy_and_impact_seven(self):
        recs = [
            _rec("easy-7", difficulty=Difficulty.EASY, impact=7, estimated_time="30 minutes"),
            _rec("easy-6", difficulty=Difficulty.EASY, impact=6, estimated_time="30 minutes"),
            _rec("medium-9", difficulty=Difficulty.MEDIUM, impact=9, estimated_time="30 minutes"),
        ]
        quick, _, _ = action_items(recs)
        assert quick == ("easy-7",)

    def test_medium_term_by_difficulty_or_impact_band(self):
        recs = [
            _rec("easy-5", difficulty=Difficulty.EASY, impact=5, estimated_time="30 minutes"),
            _rec("easy-7", difficulty=Difficulty.EASY, impact=7, estimated_time="30 minutes"),
            _rec("medium-9", difficulty=Difficulty.MEDIUM, impact=9, estimated_time="30 minutes"),
        ]
        _, medium, _ = action_items(recs)
        assert medium == ("medium-9", "easy-5")

    def test_long_term_by_difficulty_or_hours(self):
        recs = [
            _rec("hard", difficulty=Difficulty.HARD, impact=9, estimated_time="2 days"),
            _rec("hours", difficulty=Difficulty.MEDIUM, impact=8, estimated_time="1-2 hours"),
            _rec("one-hour", difficulty=Difficulty.MEDIUM, impact=7, estimated_time="1 hour"),
        ]
        _, _, long_ = action_items(recs)
        assert long_ == ("hard", "hours")

    def test_buckets_hold_at_most_three_in_ranked_order(self):
        recs = [
            _rec(f"easy-{i}", Priority.LOW if i < 3 else Priority.HIGH, 7 + i % 3,
                 Difficulty.EASY, "15 minutes")
            for i in range(5)
        ]
        quick, _, _ = action_items(recs)
        assert quick == ("easy-4", "easy-3", "easy-2")

    def test_only_empty_buckets_fall_back(self):
        # Medium difficulty, impact 9, "2-4 hours": medium-term and long-term, never a quick win
        speed_up = _rec("Speed Up", Priority.HIGH, 9, Difficulty.MEDIUM, "2-4 hours")
        quick, medium, long_ = action_items([speed_up])
        assert list(quick) == FALLBACK_QUICK_WINS
        assert medium == ("Speed Up",)
        assert long_ == ("Speed Up",)

    def test_one_recommendation_can_land_in_several_buckets(self):
        rec = _rec("Responsive", Priority.HIGH, 9, Difficulty.HARD, "4-8 hours")
        quick, medium, long_ = action_items([rec])
        assert "Responsive" not in quick
        assert "Responsive" not in medium
        assert long_ == ("Responsive",)


class TestAggregate:

    def test_perfect_results(self):
        report = aggregate(_results(), make_fetch("<p>x</p>", elapsed_ms=321), "example.com")

        assert report.overall_score == 100
        assert report.issues == ()
        assert report.recommendations == ()
        assert list(report.quick_wins) == FALLBACK_QUICK_WINS
        assert report.website_url == "example.com"
        assert report.final_url == "https://example.com/"
        assert report.load_time_ms == 321
        assert report.timestamp
        assert report.competitive is None

    def test_issues_and_recommendations_follow_category_order(self):
        issues = {
            "bestPractices": [Issue("bp", "bestPractices", Priority.LOW, "bp")],
            "performance": [Issue("perf", "performance", Priority.HIGH, "perf")],
            "mobile": [Issue("mob", "mobile", Priority.MEDIUM, "mob")],
        }
        recs = {
            "security": [_rec("sec")],
            "performance": [_rec("perf")],
        }
        report = aggregate(_results(issues=issues, recs=recs), make_fetch(""), "https://example.com/")

        assert [i.id for i in report.issues] == ["perf", "mob", "bp"]
        assert [r.title for r in report.recommendations] == ["perf", "sec"]
        assert list(report.scores) == list(CATEGORY_ORDER)

    def test_issue_grouping_helpers(self):
        issues = {
            "seo": [Issue("a", "seo", Priority.HIGH, "a"), Issue("b", "seo", Priority.LOW, "b")],
            "security": [Issue("c", "security", Priority.HIGH, "c")],
        }
        report = aggregate(_results(issues=issues), make_fetch(""), "https://example.com/")

        assert [i.id for i in report.issues_by_category["seo"]] == ["a", "b"]
        assert [i.id for i in report.issues_by_priority[Priority.HIGH]] == ["a", "c"]

    def test_fixed_timestamp_is_kept(self):
        report = aggregate(_results(), make_fetch(""), "x", timestamp="2024-01-01T00:00:00+00:00")
        assert report.timestamp == "2024-01-01T00:00:00+00:00"

    def test_missing_category_is_rejected(self):
        results = _results()
        del results["mobile"]
        with pytest.raises(ValueError, match="mobile"):
            aggregate(results, make_fetch(""), "x")


class TestCompetitiveContext:

    def test_above_average(self):
        ctx = competitive_context(84, "technology")
        assert ctx.avg_industry_score == 78
        assert ctx.percentile == 79
        assert ctx.ranking == "above average"

    def test_equal_to_average_is_below(self):
        ctx = competitive_context(70, "education")
        assert ctx.percentile == 75
        assert ctx.ranking == "below average"

    @pytest.mark.parametrize("overall, business_type, expected", [
        (100, "restaurant", 95),
        (0, "technology", 25),
        (55, "restaurant", 67),
    ])
    def test_percentile_is_bounded(self, overall, business_type, expected):
        assert competitive_context(overall, business_type).percentile == expected

    def test_unknown_type_uses_default_average(self):
        assert industry_average("spaceships") == 70
        assert industry_average("  Technology ") == 78

    @pytest.mark.parametrize("business_type", [None, ""])
    def test_absent_without_business_type(self, business_type):
        assert competitive_context(90, business_type) is None
