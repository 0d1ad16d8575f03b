"""Prometheus metrics for the trade document gateway.

Defines operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram

# EDIFACT conversion metrics
edifact_messages_total = Counter(
    "tradedoc_edifact_messages_total",
    "Total EDIFACT ORDERS messages handled",
    ["direction", "outcome"]  # direction: encode|decode|validate, outcome: success|<error kind>
)

edifact_message_bytes = Histogram(
    "tradedoc_edifact_message_bytes",
    "Size of EDIFACT messages handled in bytes",
    ["direction"],
    buckets=[256, 1024, 4096, 16384, 65536, 262144, 1048576]
)

# Standards metrics
standards_checks_total = Counter(
    "tradedoc_standards_checks_total",
    "Total product identifier checks",
    ["standard", "result"]  # standard: gtin|gln|sscc|eclass, result: valid|invalid
)


def record_standards_check(standard: str, valid: bool) -> None:
    standards_checks_total.labels(
        standard=standard,
        result="valid" if valid else "invalid",
    ).inc()
