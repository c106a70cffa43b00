"""
Accessibility analyzer: image alt text, form labels, colour contrast review.
"""
from __future__ import annotations

from bs4 import Tag

from analyzers.base import BaseAnalyzer, PageContext, Rule, capped, when
from analyzers.seo import count_images_without_alt
from config import (
    A11Y_ALT_PENALTY_CAP,
    A11Y_ALT_PENALTY_PER_IMAGE,
    FORM_LABEL_PENALTY_CAP,
    FORM_LABEL_PENALTY_PER_FIELD,
)
from crawler.parser import Document, attr_text
from models import Difficulty, Priority, Recommendation

LABEL_FORM_FIELDS = Recommendation(
    title="Add Labels to Form Fields",
    description=(
        "Form labels help all users understand what information to enter, "
        "and are essential for screen reader users."
    ),
    priority=Priority.MEDIUM,
    impact=7,
    difficulty=Difficulty.EASY,
    estimated_time="30 minutes",
    steps=(
        "Add <label> elements for all form inputs",
        'Use the "for" attribute to connect labels with their inputs',
        "Consider using aria-label for inputs that don't need visible labels",
        "Test your forms with keyboard navigation",
    ),
)


def has_label(field: Tag, document: Document) -> bool:
    if attr_text(field, "aria-label") or attr_text(field, "aria-labelledby"):
        return True
    field_id = attr_text(field, "id")
    return bool(field_id) and document.find("label", **{"for": field_id}) is not None


def _missing_alt(ctx: PageContext):
    n = count_images_without_alt(ctx)
    return when(n > 0, count=n)


def _unlabelled_fields(ctx: PageContext):
    fields = ctx.document.select("input, textarea, select")
    n = sum(1 for f in fields if not has_label(f, ctx.document))
    return when(n > 0, count=n)


def _custom_colours(ctx: PageContext):
    doc = ctx.document
    styled = (
        doc.exists('[style*="color"]')
        or doc.exists("style")
        or doc.exists('link[rel~="stylesheet"]')
    )
    return when(styled)


class AccessibilityAnalyzer(BaseAnalyzer):
    category = "accessibility"

    def rules(self) -> list[Rule]:
        return [
            Rule(
                "accessibility-missing-alt", Priority.MEDIUM, _missing_alt,
                capped(A11Y_ALT_PENALTY_PER_IMAGE, A11Y_ALT_PENALTY_CAP),
                "{count} images don't have alt text, making them inaccessible to screen readers",
            ),
            Rule(
                "missing-form-labels", Priority.MEDIUM, _unlabelled_fields,
                capped(FORM_LABEL_PENALTY_PER_FIELD, FORM_LABEL_PENALTY_CAP),
                "{count} form fields are missing labels, making them hard to use with screen readers",
                LABEL_FORM_FIELDS,
            ),
            # Informational: styling is present, contrast needs a human check
            Rule(
                "color-contrast-warning", Priority.LOW, _custom_colours, 5,
                "Manual review recommended to ensure text has sufficient color contrast",
            ),
        ]
