"""Prometheus metrics for leaderboard usage, payoff projections and e-mandate activity"""

from prometheus_client import Counter, Histogram

# Leaderboard metrics
leaderboard_query_counter = Counter(
    "astha_leaderboard_queries_total",
    "Leaderboard computations",
    ["channel"],  # all | POS | E-COM | other
)

# Debt manager metrics
projection_counter = Counter(
    "astha_projection_total",
    "Payoff projections computed",
    ["outcome"],  # paid_off | beyond_horizon | empty
)

projection_months_histogram = Histogram(
    "astha_projection_months",
    "Months simulated per projection",
    buckets=[1, 3, 6, 12, 18, 24, 36, 60],
)

mandate_transition_counter = Counter(
    "astha_mandate_transitions_total",
    "E-mandate operations applied",
    ["operation", "state"],  # toggle|edit|revoke x off|active|paused|revoked
)

export_counter = Counter(
    "astha_csv_exports_total",
    "CSV exports served",
    ["export"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_leaderboard_query(channel: str) -> None:
    """Count a leaderboard query; unrecognized channel filters share the 'other' label"""
    if channel in ("POS", "E-COM"):
        label = channel
    elif channel.lower() == "all":
        label = "all"
    else:
        label = "other"

    leaderboard_query_counter.labels(channel=label).inc()


def record_projection(months: int, payoff_month: int | None) -> None:
    """Record how long a projection ran and whether it reached zero"""
    if months == 0:
        outcome = "empty"
    elif payoff_month is None:
        outcome = "beyond_horizon"
    else:
        outcome = "paid_off"

    projection_counter.labels(outcome=outcome).inc()
    projection_months_histogram.observe(months)
