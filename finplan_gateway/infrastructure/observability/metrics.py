"""Prometheus metrics for monitoring simulation outcomes and estimator usage"""

from prometheus_client import Counter, Histogram

# Simulation metrics
simulation_counter = Counter(
    "finplan_simulation_total",
    "Total debt repayment simulations run",
    ["strategy", "status"],  # avalanche | snowball; completed | insufficient_budget | period_limit
)

simulation_periods_histogram = Histogram(
    "finplan_simulation_periods",
    "Periods elapsed per debt repayment simulation",
    buckets=[1, 6, 12, 24, 36, 60, 120, 240, 600, 1200],
)

# Estimator metrics
savings_estimate_counter = Counter(
    "finplan_savings_estimate_total",
    "Savings goal estimates by outcome",
    ["outcome"],  # reached | unreachable
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_simulation(strategy: str, status: str, periods_elapsed: int) -> None:
    """Record outcome and length of a simulation run"""
    simulation_counter.labels(strategy=strategy, status=status).inc()
    simulation_periods_histogram.observe(periods_elapsed)


def record_estimate(reached: bool) -> None:
    outcome = "reached" if reached else "unreachable"
    savings_estimate_counter.labels(outcome=outcome).inc()
