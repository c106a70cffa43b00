"""
Hand-off of a finished report to the storage and email collaborators.

The engine never persists or sends anything itself; callers plug concrete
implementations of ReportSink and ReportMailer in here.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from models import AuditReport, AuditRequest

logger = logging.getLogger(__name__)


class ReportSink(ABC):
    """Persists a finished report; owns its storage from then on."""

    @abstractmethod
    def save(self, report: AuditReport, request: AuditRequest) -> str:
        """Store the report with its request metadata and return its id."""
        ...


class ReportMailer(ABC):
    """Formats and sends a report; delivery may complete asynchronously."""

    @abstractmethod
    def send(self, recipient: str, report: AuditReport) -> None:
        ...


def deliver_report(
    report: AuditReport,
    request: AuditRequest,
    sink: ReportSink,
    mailer: Optional[ReportMailer] = None,
) -> str:
    """
    Persist first, then email. A storage failure propagates; a mail failure
    is logged and the stored id is still returned.
    """
    audit_id = sink.save(report, request)
    logger.info(f"Stored audit {audit_id} for {report.website_url}")

    if mailer is not None and request.email:
        try:
            mailer.send(request.email, report)
        except Exception:
            logger.exception(f"Failed to email audit {audit_id} to {request.email}")

    return audit_id
