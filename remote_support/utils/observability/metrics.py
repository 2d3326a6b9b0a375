"""
Description: Prometheus metrics for card rendering
Main features:
    - Render outcome counter per card
    - Render duration histogram per card
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram


# ============================================
# region Metric definitions
# ============================================
CARD_RENDER_COUNT = Counter(
    "remote_support_card_renders_total",
    "Total card render outcomes",
    ["card", "status"],
)

CARD_RENDER_DURATION = Histogram(
    "remote_support_card_render_duration_seconds",
    "Card render duration in seconds",
    ["card"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05),
)
# endregion
# ============================================


# region Recording helpers
def record_card_render(card: str, status: str) -> None:
    """Record a render outcome (success/failed)"""
    CARD_RENDER_COUNT.labels(card=card, status=status).inc()


def observe_render_duration(card: str, duration: float) -> None:
    CARD_RENDER_DURATION.labels(card=card).observe(duration)
# endregion
