"""
Website Audit Engine entry points.

    check_eligibility(url)           -> EligibilityResult
    run_audit(url, business_type)    -> AuditReport   (raises AuditError)
"""
from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable, Optional

from analyzers.orchestrator import build_context, run_all_analyzers
from config import AUDIT_FAILED_MESSAGE
from crawler.eligibility import check_business_type, check_eligibility
from crawler.fetcher import fetch
from models import AuditFailedError, AuditReport, FetchFailedError, FetchResult
from scoring.competitive import competitive_context
from scoring.scorer import aggregate

logger = logging.getLogger(__name__)

__all__ = ["check_eligibility", "check_business_type", "run_audit"]


def run_audit(
    url: str,
    business_type: Optional[str] = None,
    fetcher: Callable[[str], FetchResult] = fetch,
) -> AuditReport:
    """
    Fetch `url`, run all six analyzers and aggregate the report.

    Raises FetchFailedError when the page can't be fetched and
    AuditFailedError for any other fault; never returns a partial report.
    """
    logger.info(f"Starting audit for: {url}")
    t0 = time.monotonic()

    try:
        fetched = fetcher(url)
    except Exception as exc:
        logger.exception(f"Fetch of {url} raised unexpectedly")
        raise AuditFailedError(AUDIT_FAILED_MESSAGE) from exc

    if not fetched.succeeded:
        logger.warning(f"Audit of {url} aborted: {fetched.failure_reason.value}")
        raise FetchFailedError(fetched)

    try:
        ctx = build_context(fetched)
        results = run_all_analyzers(ctx)
        duration_ms = int((time.monotonic() - t0) * 1000)
        report = aggregate(results, fetched, website_url=url, audit_duration_ms=duration_ms)
        competitive = competitive_context(report.overall_score, business_type)
        if competitive is not None:
            report = replace(report, competitive=competitive)
    except Exception as exc:
        logger.exception(f"Audit of {url} failed during analysis")
        raise AuditFailedError(AUDIT_FAILED_MESSAGE) from exc

    logger.info(
        f"Audit completed in {report.audit_duration_ms}ms. "
        f"Overall score: {report.overall_score}"
    )
    return report

