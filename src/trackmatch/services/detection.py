"""Carrier detection: registry fan-out followed by ranking."""

from trackmatch.carriers.base import TrackingMatch
from trackmatch.services.ranker import MatchRanker
from trackmatch.services.registry import ProviderRegistry, get_registry

ranker = MatchRanker()


def detect_carriers(
    tracking_number: str,
    shipping_from: str,
    shipping_to: str,
    registry: ProviderRegistry | None = None,
) -> list[TrackingMatch]:
    """Detect which carriers could have issued a tracking number, best first."""
    if registry is None:
        registry = get_registry()
    return ranker.rank(registry.match_all(tracking_number, shipping_from, shipping_to))


def best_carrier(
    tracking_number: str,
    shipping_from: str,
    shipping_to: str,
    registry: ProviderRegistry | None = None,
) -> TrackingMatch | None:
    """Most likely carrier for a tracking number, or None."""
    if registry is None:
        registry = get_registry()
    return ranker.best(registry.match_all(tracking_number, shipping_from, shipping_to))
