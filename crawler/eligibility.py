"""
Pre-flight eligibility check: decides whether a URL is worth a full audit.

Rejections are ordinary return values. An unexpected fault while fetching
fails open, since the audit itself is the authoritative gate.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional
from urllib.parse import urlparse

from config import (
    ELIGIBILITY_MESSAGES,
    EXCLUDED_CONTENT_TYPES,
    HTML_MARKERS,
    MIN_CONTENT_CHARS,
    RESTRICTED_BUSINESS_TYPES,
    TEXT_BODY_MIN_BYTES,
)
from crawler.fetcher import fetch, is_restricted_host
from models import EligibilityRejection, EligibilityResult, FailureReason, FetchResult

logger = logging.getLogger(__name__)

# Fetch failures with a dedicated pre-flight sentence; others reuse the fetch message
_FETCH_FAILURE_KEYS = {
    FailureReason.NOT_FOUND: "not_found",
    FailureReason.BLOCKED:   "blocked",
    FailureReason.TIMED_OUT: "timed_out",
    FailureReason.TOO_LARGE: "too_large",
}


def check_eligibility(
    url: str,
    fetcher: Callable[[str], FetchResult] = fetch,
) -> EligibilityResult:
    # ── Step 1: syntax / scheme ───────────────────────────────────────────────
    try:
        parsed = urlparse((url or "").strip())
        host = (parsed.hostname or "").lower()
    except ValueError:
        return _reject(EligibilityRejection.INVALID_URL, "invalid_url", url)

    if not parsed.scheme:
        return _reject(EligibilityRejection.INVALID_URL, "invalid_url", url)
    if parsed.scheme.lower() not in ("http", "https"):
        return _reject(EligibilityRejection.BAD_SCHEME, "bad_scheme", url)
    if not host:
        return _reject(EligibilityRejection.INVALID_URL, "invalid_url", url)

    # ── Step 2: restricted targets (no network) ───────────────────────────────
    if is_restricted_host(host):
        return _reject(EligibilityRejection.RESTRICTED_HOST, "restricted_host", url)

    # ── Step 3: live fetch ────────────────────────────────────────────────────
    try:
        fetched = fetcher(url)
    except Exception:
        logger.exception(f"Eligibility fetch for {url} raised; failing open")
        return EligibilityResult(eligible=True, reason=ELIGIBILITY_MESSAGES["fail_open"])

    if not fetched.succeeded:
        key = _FETCH_FAILURE_KEYS.get(fetched.failure_reason)
        reason = ELIGIBILITY_MESSAGES[key] if key else fetched.message
        logger.info(f"{url} not eligible: fetch failed ({fetched.failure_reason.value})")
        return EligibilityResult(
            eligible=False,
            reason=reason,
            rejection=EligibilityRejection.FETCH_FAILED,
            failure_reason=fetched.failure_reason,
        )

    content_type = fetched.content_type
    body = fetched.body or ""

    # ── Step 4: content type ──────────────────────────────────────────────────
    if any(t in content_type for t in EXCLUDED_CONTENT_TYPES):
        return _reject(EligibilityRejection.UNSUPPORTED_CONTENT_TYPE, "unsupported_content_type", url)

    # ── Step 6 (checked first): trivial content ───────────────────────────────
    if len(body.strip()) < MIN_CONTENT_CHARS:
        return _reject(EligibilityRejection.TOO_LITTLE_CONTENT, "too_little_content", url)

    # ── Step 5: HTML shape ────────────────────────────────────────────────────
    if not looks_like_html(body, content_type):
        return _reject(EligibilityRejection.NOT_HTML_LIKE, "not_html_like", url)

    logger.info(f"Website {url} is eligible for audit")
    return EligibilityResult(eligible=True, reason=ELIGIBILITY_MESSAGES["eligible"])


def check_business_type(business_type: Optional[str]) -> EligibilityResult:
    """Second gate applied once the caller knows the business category."""
    if business_type and business_type.strip().lower() in RESTRICTED_BUSINESS_TYPES:
        return EligibilityResult(
            eligible=False,
            reason=ELIGIBILITY_MESSAGES["restricted_business"],
            rejection=EligibilityRejection.RESTRICTED_BUSINESS,
        )
    return EligibilityResult(eligible=True, reason=ELIGIBILITY_MESSAGES["business_ok"])


def looks_like_html(body: str, content_type: str) -> bool:
    lower = body.lower()
    if any(marker in lower for marker in HTML_MARKERS):
        return True
    return len(body) > TEXT_BODY_MIN_BYTES and "text" in content_type


def _reject(rejection: EligibilityRejection, key: str, url: str) -> EligibilityResult:
    logger.info(f"{url} not eligible: {rejection.value}")
    return EligibilityResult(eligible=False, reason=ELIGIBILITY_MESSAGES[key], rejection=rejection)
