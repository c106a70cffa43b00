"""
Core data models for the Website Audit Engine.
All modules import from here; nothing else is cross-imported at this level.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from config import FAILURE_MESSAGES


# ── Priority / difficulty ─────────────────────────────────────────────────────
class Priority:
    HIGH   = "high"
    MEDIUM = "medium"
    LOW    = "low"

    ALL = [HIGH, MEDIUM, LOW]

    COLORS = {
        HIGH:   "#FF4B4B",
        MEDIUM: "#FFA500",
        LOW:    "#4B9EFF",
    }


class Difficulty:
    EASY   = "easy"
    MEDIUM = "medium"
    HARD   = "hard"

    ALL = [EASY, MEDIUM, HARD]


# ── Failure taxonomy ──────────────────────────────────────────────────────────
class FailureReason(Enum):
    INVALID_URL       = "invalid_url"
    NOT_FOUND         = "not_found"
    BLOCKED           = "blocked"
    DOWN              = "down"
    BLOCKED_OR_RESET  = "blocked_or_reset"
    TIMED_OUT         = "timed_out"
    SERVER_ERROR      = "server_error"
    TOO_LARGE         = "too_large"
    REDIRECT_LOOP     = "redirect_loop"
    RESTRICTED_REDIRECT = "restricted_redirect"
    UNEXPECTED_STATUS = "unexpected_status"


class EligibilityRejection(Enum):
    INVALID_URL              = "invalid_url"
    BAD_SCHEME               = "bad_scheme"
    RESTRICTED_HOST          = "restricted_host"
    FETCH_FAILED             = "fetch_failed"
    UNSUPPORTED_CONTENT_TYPE = "unsupported_content_type"
    NOT_HTML_LIKE            = "not_html_like"
    TOO_LITTLE_CONTENT       = "too_little_content"
    RESTRICTED_BUSINESS      = "restricted_business"


# ── Fetch ─────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class FetchResult:
    url: str
    final_url: str = ""
    status_code: int = 0
    body: Optional[str] = None
    headers: dict[str, str] = field(default_factory=dict)
    elapsed_ms: int = 0
    size_bytes: int = 0
    redirect_chain: tuple[str, ...] = ()
    failure_reason: Optional[FailureReason] = None
    message: str = ""      # user-facing sentence for failures

    @property
    def succeeded(self) -> bool:
        return self.failure_reason is None

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "").lower()

    @classmethod
    def failure(
        cls,
        url: str,
        reason: FailureReason,
        status_code: int = 0,
        elapsed_ms: int = 0,
        redirect_chain: tuple[str, ...] = (),
        message: str = "",
    ) -> "FetchResult":
        if not message:
            message = FAILURE_MESSAGES[reason.value].format(status=status_code)
        return cls(
            url=url,
            final_url=url,
            status_code=status_code,
            elapsed_ms=elapsed_ms,
            redirect_chain=redirect_chain,
            failure_reason=reason,
            message=message,
        )


# ── Analyzer output ───────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Issue:
    id: str
    category: str
    priority: str          # Priority.HIGH / MEDIUM / LOW
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "priority": self.priority,
            "description": self.description,
        }


@dataclass(frozen=True)
class Recommendation:
    title: str
    description: str
    priority: str
    impact: int            # 0-10
    difficulty: str        # Difficulty.EASY / MEDIUM / HARD
    estimated_time: str
    steps: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "impact": self.impact,
            "difficulty": self.difficulty,
            "estimatedTime": self.estimated_time,
            "steps": list(self.steps),
        }


@dataclass(frozen=True)
class CategoryResult:
    category: str
    score: int
    issues: tuple[Issue, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()


# ── Competitive context ───────────────────────────────────────────────────────
@dataclass(frozen=True)
class CompetitiveContext:
    avg_industry_score: int
    percentile: int
    ranking: str           # "above average" / "below average"

    def to_dict(self) -> dict[str, Any]:
        return {
            "avgIndustryScore": self.avg_industry_score,
            "percentile": self.percentile,
            "ranking": self.ranking,
        }


# ── Top-level audit report ────────────────────────────────────────────────────
@dataclass(frozen=True)
class AuditReport:
    website_url: str
    final_url: str
    load_time_ms: int
    audit_duration_ms: int
    timestamp: str                      # ISO-8601, UTC
    scores: dict[str, int]
    overall_score: int
    issues: tuple[Issue, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()
    quick_wins: tuple[str, ...] = ()
    medium_term_goals: tuple[str, ...] = ()
    long_term_goals: tuple[str, ...] = ()
    competitive: Optional[CompetitiveContext] = None

    @property
    def issues_by_category(self) -> dict[str, list[Issue]]:
        out: dict[str, list[Issue]] = {}
        for issue in self.issues:
            out.setdefault(issue.category, []).append(issue)
        return out

    @property
    def issues_by_priority(self) -> dict[str, list[Issue]]:
        out: dict[str, list[Issue]] = {p: [] for p in Priority.ALL}
        for issue in self.issues:
            out.setdefault(issue.priority, []).append(issue)
        return out

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready payload handed to persistence and email collaborators."""
        payload = {
            "websiteUrl": self.website_url,
            "finalUrl": self.final_url,
            "loadTime": self.load_time_ms,
            "auditDuration": self.audit_duration_ms,
            "timestamp": self.timestamp,
            "scores": dict(self.scores),
            "overallScore": self.overall_score,
            "issues": [i.to_dict() for i in self.issues],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "quickWins": list(self.quick_wins),
            "mediumTermGoals": list(self.medium_term_goals),
            "longTermGoals": list(self.long_term_goals),
        }
        if self.competitive is not None:
            payload["competitive"] = self.competitive.to_dict()
        return payload


# ── Eligibility ───────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class EligibilityResult:
    eligible: bool
    reason: str
    rejection: Optional[EligibilityRejection] = None
    failure_reason: Optional[FailureReason] = None


# ── Caller metadata ───────────────────────────────────────────────────────────
@dataclass(frozen=True)
class AuditRequest:
    website_url: str
    email: str = ""
    client_ip: str = ""
    user_agent: str = ""
    business_type: Optional[str] = None


# ── Errors ────────────────────────────────────────────────────────────────────
class AuditError(Exception):
    """Base class for failures surfaced by run_audit."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchFailedError(AuditError):
    """The target page could not be fetched; no report is produced."""

    def __init__(self, result: FetchResult):
        super().__init__(result.message)
        self.result = result
        self.reason = result.failure_reason


class AuditFailedError(AuditError):
    """Unexpected internal fault; the original exception is chained as __cause__."""
