"""
Tests for DataFrame export and report delivery.
"""
import logging

import pytest

from conftest import PERFECT_HTML, make_fetch
from engine import run_audit
from models import AuditRequest
from reporting.delivery import ReportMailer, ReportSink, deliver_report
from reporting.exporter import issues_to_df, recommendations_to_df, scores_to_df, to_csv_bytes

# Missing viewport and title, plain HTTP, no security headers
PROBLEM_HTML = "<html><body><h1>Hi</h1><img src='a.png'><p>" + "text " * 60 + "</p></body></html>"


@pytest.fixture
def report():
    return run_audit("http://example.com/", fetcher=lambda url: make_fetch(
        PROBLEM_HTML, headers={"content-type": "text/html"}, final_url="http://example.com/",
    ))


class TestExporter:

    def test_issues_sorted_by_priority_keeping_category_order(self, report):
        df = issues_to_df(list(report.issues))

        assert list(df.columns) == ["Priority", "Category", "Issue", "Description"]
        assert len(df) == len(report.issues)
        priorities = list(df["Priority"])
        assert priorities == sorted(priorities, key=["HIGH", "MEDIUM", "LOW"].index)
        high = df[df["Priority"] == "HIGH"]
        assert list(high["Issue"][:2]) == ["Missing Title", "Missing Meta Description"]
        assert "Security" in set(df["Category"])

    def test_empty_frames_keep_their_columns(self):
        assert list(issues_to_df([]).columns) == ["Priority", "Category", "Issue", "Description"]
        assert "Title" in recommendations_to_df([]).columns

    def test_recommendations_frame(self, report):
        df = recommendations_to_df(list(report.recommendations))
        assert list(df["Title"]) == [r.title for r in report.recommendations]
        assert df.loc[0, "Steps"].count(" | ") == len(report.recommendations[0].steps) - 1

    def test_scores_frame_contributions_sum_to_overall(self, report):
        df = scores_to_df(report)
        assert list(df["Category"]) == ["Performance", "SEO", "Security", "Mobile", "Accessibility", "Best Practices"]
        assert df["Weight"].sum() == pytest.approx(1.0)
        assert round(df["Contribution"].sum()) == report.overall_score

    def test_csv_bytes(self, report):
        data = to_csv_bytes(scores_to_df(report))
        assert data.startswith(b"Category,Score,Weight,Contribution")
        assert data.count(b"\n") == 7


class MemorySink(ReportSink):
    def __init__(self, fail=False):
        self.saved = []
        self.fail = fail

    def save(self, report, request):
        if self.fail:
            raise IOError("disk full")
        self.saved.append((report, request))
        return f"audit-{len(self.saved)}"


class MemoryMailer(ReportMailer):
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    def send(self, recipient, report):
        if self.fail:
            raise ConnectionError("smtp down")
        self.sent.append((recipient, report.overall_score))


class TestDelivery:

    def test_saves_then_emails(self):
        report = run_audit("https://example.com/", fetcher=lambda url: make_fetch(PERFECT_HTML))
        sink, mailer = MemorySink(), MemoryMailer()
        request = AuditRequest(website_url="https://example.com/", email="owner@example.com")

        audit_id = deliver_report(report, request, sink, mailer)

        assert audit_id == "audit-1"
        assert sink.saved == [(report, request)]
        assert mailer.sent == [("owner@example.com", 100)]

    def test_no_email_without_recipient(self, report):
        mailer = MemoryMailer()
        deliver_report(report, AuditRequest(website_url="http://example.com/"), MemorySink(), mailer)
        assert mailer.sent == []

    def test_storage_failure_propagates(self, report):
        mailer = MemoryMailer()
        with pytest.raises(IOError):
            deliver_report(report, AuditRequest("http://example.com/", email="a@b.c"), MemorySink(fail=True), mailer)
        assert mailer.sent == []

    def test_mail_failure_is_logged_and_id_returned(self, report, caplog):
        request = AuditRequest("http://example.com/", email="a@b.c")
        with caplog.at_level(logging.ERROR, logger="reporting.delivery"):
            audit_id = deliver_report(report, request, MemorySink(), MemoryMailer(fail=True))

        assert audit_id == "audit-1"
        assert "Failed to email audit audit-1" in caplog.text
