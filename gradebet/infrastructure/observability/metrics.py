"""Prometheus metrics for monitoring bets, results and award accuracy"""

from prometheus_client import Counter, Histogram

# Betting metrics
bet_counter = Counter(
    "gradebet_bets_total",
    "Total bets placed",
)

result_counter = Counter(
    "gradebet_results_total",
    "Total results submitted",
    ["has_bet"],  # yes | no
)

award_bucket_counter = Counter(
    "gradebet_award_bucket",
    "Awards granted by bucket",
    ["bucket"],  # 0, 1-4, 5-9, 10
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_result(has_bet: bool, award: int) -> None:
    """Record result metrics for monitoring how accurate bets are"""
    result_counter.labels(has_bet="yes" if has_bet else "no").inc()
    if not has_bet:
        return

    if award == 0:
        bucket = "0"
    elif award < 5:
        bucket = "1-4"
    elif award < 10:
        bucket = "5-9"
    else:
        bucket = "10"

    award_bucket_counter.labels(bucket=bucket).inc()
