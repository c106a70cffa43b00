"""
Best-practices analyzer: doctype, charset, document language, inline styles.
"""
from __future__ import annotations

from analyzers.base import BaseAnalyzer, PageContext, Rule, when
from config import MAX_INLINE_STYLED_ELEMENTS
from models import Priority


def _missing_doctype(ctx: PageContext):
    return when(not ctx.body.strip().lower().startswith("<!doctype html>"))


def _missing_charset(ctx: PageContext):
    doc = ctx.document
    declared = doc.exists("meta[charset]") or doc.exists('meta[http-equiv="content-type" i]')
    return when(not declared)


def _missing_lang(ctx: PageContext):
    return when(not ctx.document.first_attr("html", "lang"))


def _inline_styles(ctx: PageContext):
    n = ctx.document.count("[style]")
    return when(n > MAX_INLINE_STYLED_ELEMENTS, count=n)


class BestPracticesAnalyzer(BaseAnalyzer):
    category = "bestPractices"

    def rules(self) -> list[Rule]:
        return [
            Rule(
                "missing-doctype", Priority.LOW, _missing_doctype, 15,
                "Your HTML is missing the modern DOCTYPE declaration",
            ),
            Rule(
                "missing-charset", Priority.LOW, _missing_charset, 10,
                "Your website doesn't specify character encoding, which could cause display issues",
            ),
            Rule(
                "missing-lang", Priority.LOW, _missing_lang, 10,
                "Your HTML doesn't specify the page language, which helps search engines and screen readers",
            ),
            Rule(
                "excessive-inline-styles", Priority.LOW, _inline_styles, 15,
                "You have {count} elements with inline styles - external CSS is more maintainable",
            ),
        ]
