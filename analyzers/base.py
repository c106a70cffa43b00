"""
Base class for the category analyzers.

Each analyzer is a fixed, ordered table of Rules. A rule's `measure`
returns None when the page passes, or a dict of values describing the
failure; the dict feeds both the penalty and the issue description.
Deductions are subtractive and independent, and the final score is clamped
to [0, 100].
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from crawler.parser import Document
from models import CategoryResult, Issue, Recommendation

Finding = dict[str, Any]


@dataclass(frozen=True)
class PageContext:
    """Immutable input shared by all analyzers of one audit."""
    document: Document
    body: str
    headers: dict[str, str]
    final_url: str
    load_time_ms: int

    @property
    def size_bytes(self) -> int:
        return len(self.body.encode("utf-8"))


@dataclass(frozen=True)
class Rule:
    issue_id: str
    priority: str
    measure: Callable[[PageContext], Optional[Finding]]
    penalty: Union[int, Callable[[Finding], int]]
    description: str                      # str.format template over the finding
    recommendation: Optional[Recommendation] = None

    def deduction(self, finding: Finding) -> int:
        if callable(self.penalty):
            return self.penalty(finding)
        return self.penalty


class BaseAnalyzer(ABC):
    """All analyzers inherit from this class."""

    category: str = "uncategorized"

    @abstractmethod
    def rules(self) -> list[Rule]:
        """The ordered rule table for this category."""
        ...

    def analyze(self, ctx: PageContext) -> CategoryResult:
        score = 100
        issues: list[Issue] = []
        recommendations: list[Recommendation] = []

        for rule in self.rules():
            finding = rule.measure(ctx)
            if finding is None:
                continue
            score -= rule.deduction(finding)
            issues.append(Issue(
                id=rule.issue_id,
                category=self.category,
                priority=rule.priority,
                description=rule.description.format(**finding),
            ))
            if rule.recommendation is not None:
                recommendations.append(rule.recommendation)

        return CategoryResult(
            category=self.category,
            score=clamp_score(score),
            issues=tuple(issues),
            recommendations=tuple(recommendations),
        )


# ── Helpers shared by the rule tables ─────────────────────────────────────────

def clamp_score(score: int) -> int:
    return max(0, min(100, score))


def capped(per_item: int, cap: int, key: str = "count") -> Callable[[Finding], int]:
    """Penalty of `per_item` for each counted element, never more than `cap`."""
    return lambda finding: min(cap, finding[key] * per_item)


def when(condition: bool, **values: Any) -> Optional[Finding]:
    """Finding with `values` if `condition` holds, else None."""
    return values if condition else None
