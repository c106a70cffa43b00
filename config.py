"""
Global configuration constants for the Website Audit Engine.
All tunable thresholds live here.

The deduction sizes, thresholds and weights are compatibility constants:
changing any of them changes every score the engine produces.
"""

# ── Fetcher ───────────────────────────────────────────────────────────────────
REQUEST_TIMEOUT_SECONDS = 30            # connect + full body read
MAX_REDIRECTS = 5
MAX_BODY_BYTES = 5 * 1024 * 1024        # 5 MiB
READ_CHUNK_BYTES = 16_384
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (compatible; N15Labs-AuditBot/1.0; +https://n15labs.com)"
)
REQUEST_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "identity",
    "Connection": "close",
    "Cache-Control": "no-cache",
}

# ── Performance thresholds ────────────────────────────────────────────────────
SLOW_LOAD_TIME_MS = 3000
MODERATE_LOAD_TIME_MS = 1500
LARGE_PAGE_SIZE_BYTES = 1024 * 1024     # 1 MiB

# ── SEO thresholds ────────────────────────────────────────────────────────────
TITLE_MAX_CHARS = 60
MIN_INTERNAL_LINKS = 3
SEO_ALT_PENALTY_PER_IMAGE = 3
SEO_ALT_PENALTY_CAP = 20

# ── Security headers expected ─────────────────────────────────────────────────
EXPECTED_SECURITY_HEADERS = [
    ("x-frame-options", "clickjacking protection"),
    ("x-content-type-options", "MIME type security"),
    ("strict-transport-security", "HTTPS enforcement"),
    ("x-xss-protection", "XSS attack prevention"),
]
SECURITY_HEADER_PENALTY = 10

# ── Mobile thresholds ─────────────────────────────────────────────────────────
SMALL_FONT_PX = 14
DEFAULT_FONT_PX = 16
SMALL_TARGET_RATIO = 0.3

# ── Accessibility thresholds ──────────────────────────────────────────────────
A11Y_ALT_PENALTY_PER_IMAGE = 5
A11Y_ALT_PENALTY_CAP = 25
FORM_LABEL_PENALTY_PER_FIELD = 8
FORM_LABEL_PENALTY_CAP = 20

# ── Best-practice thresholds ──────────────────────────────────────────────────
MAX_INLINE_STYLED_ELEMENTS = 5

# ── Scoring weights (sum to exactly 1.0) ──────────────────────────────────────
CATEGORY_ORDER = (
    "performance",
    "seo",
    "security",
    "mobile",
    "accessibility",
    "bestPractices",
)

SCORING_WEIGHTS: dict[str, float] = {
    "performance":   0.25,
    "seo":           0.25,
    "security":      0.20,
    "mobile":        0.15,
    "accessibility": 0.10,
    "bestPractices": 0.05,
}

CATEGORY_LABELS = {
    "performance":   "Performance",
    "seo":           "SEO",
    "security":      "Security",
    "mobile":        "Mobile",
    "accessibility": "Accessibility",
    "bestPractices": "Best Practices",
}

PRIORITY_RANK = {"high": 3, "medium": 2, "low": 1}

# ── Action-item buckets ───────────────────────────────────────────────────────
BUCKET_SIZE = 3
QUICK_WIN_MIN_IMPACT = 7
MEDIUM_TERM_IMPACT_RANGE = (5, 7)       # lower inclusive, upper exclusive
LONG_TERM_TIME_MARKER = "hours"

FALLBACK_QUICK_WINS = [
    "Optimize images for faster loading",
    "Add missing alt text to images",
    "Enable browser caching",
]
FALLBACK_MEDIUM_TERM_GOALS = [
    "Improve mobile responsiveness",
    "Enhance security headers",
    "Optimize content structure",
]
FALLBACK_LONG_TERM_GOALS = [
    "Implement comprehensive SEO strategy",
    "Redesign for better user experience",
    "Develop content marketing plan",
]

# ── Competitive context ───────────────────────────────────────────────────────
INDUSTRY_AVERAGES: dict[str, int] = {
    "ecommerce":   72,
    "service":     68,
    "restaurant":  65,
    "healthcare":  74,
    "technology":  78,
    "education":   70,
    "nonprofit":   66,
    "real-estate": 69,
    "automotive":  71,
    "other":       70,
}
DEFAULT_INDUSTRY_AVERAGE = 70
PERCENTILE_BOUNDS = (5, 95)

# ── Eligibility ───────────────────────────────────────────────────────────────
RESTRICTED_HOST_MARKERS = [
    "localhost", "127.0.0.1", "0.0.0.0",
    "file://", "ftp://",
    "data:", "javascript:",
    "about:", "chrome:", "chrome-extension:",
]

EXCLUDED_CONTENT_TYPES = [
    "application/pdf", "application/zip", "application/octet-stream",
    "image/", "video/", "audio/",
    "application/json", "application/xml",
]

HTML_MARKERS = [
    "<html", "<head", "<body", "<title", "<div", "<p>",
    "<h1", "<h2", "<h3", "<h4", "<h5", "<h6",
    "<nav", "<main", "<section", "<article", "<!doctype",
]
TEXT_BODY_MIN_BYTES = 1000
MIN_CONTENT_CHARS = 200

RESTRICTED_BUSINESS_TYPES = ["adult", "gambling", "illegal"]

# ── User-facing sentences ─────────────────────────────────────────────────────
FAILURE_MESSAGES = {
    "invalid_url":      "Invalid URL format",
    "not_found":        "Website not found - please check the domain name is correct",
    "blocked":          "Access denied - the website blocks automated requests",
    "down":             "Connection refused - the website may be down",
    "blocked_or_reset": "Connection was reset - the website may be blocking requests",
    "timed_out":        "Website took too long to respond - please try again later",
    "server_error":     "Server error - the website is experiencing technical difficulties",
    "too_large":        "Website content is too large to analyze",
    "redirect_loop":    "Too many redirects - the website may have a redirect loop",
    "restricted_redirect": "The website redirects to a local or private address, which cannot be audited",
    "unexpected_status": "Unable to access website (HTTP {status})",
}

PAGE_NOT_FOUND_MESSAGE = "Page not found - please check the URL is correct"

ELIGIBILITY_MESSAGES = {
    "invalid_url":      "Please enter a valid website URL (e.g., https://yoursite.com)",
    "bad_scheme":       "Only HTTP and HTTPS websites can be audited",
    "restricted_host":  "Local or system URLs cannot be audited",
    "not_found":        "We couldn't find this website. Please check the URL is correct.",
    "blocked":          "This website is blocking automated requests, so we can't audit it.",
    "timed_out":        "This website is taking too long to respond. Please try again later.",
    "too_large":        "This website's content is too large for our audit system to process.",
    "unsupported_content_type": "This URL appears to be a file download rather than a website page",
    "not_html_like":    "This doesn't appear to be a standard website page. Please check the URL.",
    "too_little_content": "This page appears to be empty or have very little content to analyze",
    "restricted_business": "This business type is not eligible for our audit service.",
    "eligible":         "Website is ready for analysis",
    "fail_open":        "Unable to pre-verify website, but will attempt audit",
    "business_ok":      "Website is eligible for audit",
}

AUDIT_FAILED_MESSAGE = "Audit failed - an unexpected error occurred while analyzing the website"
