"""
Security analyzer: HTTPS and security response headers.
"""
from __future__ import annotations

from analyzers.base import BaseAnalyzer, PageContext, Rule, when
from config import EXPECTED_SECURITY_HEADERS, SECURITY_HEADER_PENALTY
from models import Difficulty, Priority, Recommendation

SWITCH_TO_HTTPS = Recommendation(
    title="Switch to HTTPS",
    description=(
        "HTTPS encrypts data between your website and visitors, protecting "
        "sensitive information and boosting SEO rankings."
    ),
    priority=Priority.HIGH,
    impact=10,
    difficulty=Difficulty.MEDIUM,
    estimated_time="1-2 hours",
    steps=(
        "Get an SSL certificate from your hosting provider (often free)",
        "Configure your server to use HTTPS",
        "Set up automatic redirects from HTTP to HTTPS",
        "Update all internal links to use HTTPS",
    ),
)

ADD_SECURITY_HEADERS = Recommendation(
    title="Add Security Headers",
    description=(
        "Security headers provide an extra layer of protection against "
        "common web vulnerabilities and attacks."
    ),
    priority=Priority.MEDIUM,
    impact=7,
    difficulty=Difficulty.MEDIUM,
    estimated_time="1 hour",
    steps=(
        "Configure X-Frame-Options to prevent your site being embedded maliciously",
        "Add X-Content-Type-Options to prevent MIME type confusion attacks",
        "Set up Content Security Policy (CSP) to prevent code injection",
        "Enable X-XSS-Protection for older browsers",
    ),
)


def missing_security_headers(headers: dict[str, str]) -> list[str]:
    """Descriptions of the expected headers that are absent or empty."""
    return [desc for name, desc in EXPECTED_SECURITY_HEADERS if not headers.get(name)]


def _not_https(ctx: PageContext):
    return when(not ctx.final_url.startswith("https://"))


def _missing_headers(ctx: PageContext):
    missing = missing_security_headers(ctx.headers)
    return when(bool(missing), count=len(missing), names=", ".join(missing))


class SecurityAnalyzer(BaseAnalyzer):
    category = "security"

    def rules(self) -> list[Rule]:
        return [
            Rule(
                "no-https", Priority.HIGH, _not_https, 40,
                "Your website isn't using HTTPS, which means data isn't encrypted",
                SWITCH_TO_HTTPS,
            ),
            Rule(
                "missing-security-headers", Priority.MEDIUM, _missing_headers,
                lambda finding: finding["count"] * SECURITY_HEADER_PENALTY,
                "Your website is missing {count} security headers that protect against common attacks",
                ADD_SECURITY_HEADERS,
            ),
        ]
