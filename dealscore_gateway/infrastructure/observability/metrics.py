"""Prometheus metrics for monitoring grade distribution and input quality"""

from prometheus_client import Counter, Histogram

# Grading metrics
deal_grade_counter = Counter(
    "dealscore_deal_grade_total",
    "Deals graded, by overall letter",
    ["grade"],  # A | B | C | D | F
)

dealer_grade_counter = Counter(
    "dealscore_dealer_grade_total",
    "Dealers graded, by overall letter",
    ["grade"],  # A | B | C | D | F | N/A
)

deal_score_histogram = Histogram(
    "dealscore_deal_overall_score",
    "Overall deal score distribution",
    buckets=[60, 70, 80, 90, 100],
)

invalid_input_counter = Counter(
    "dealscore_invalid_input_total",
    "Grading requests rejected for malformed fee data",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_deal_grade(grade: str, overall_score: float) -> None:
    """Record a graded deal for letter distribution monitoring"""
    deal_grade_counter.labels(grade=grade).inc()
    deal_score_histogram.observe(overall_score)


def record_dealer_grade(grade: str) -> None:
    dealer_grade_counter.labels(grade=grade).inc()
