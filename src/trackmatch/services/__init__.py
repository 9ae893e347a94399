"""Services package."""

from trackmatch.services.carrier_loader import CarrierLoader
from trackmatch.services.detection import best_carrier, detect_carriers
from trackmatch.services.ranker import MatchRanker
from trackmatch.services.registry import ProviderRegistry, get_registry

__all__ = [
    "CarrierLoader",
    "MatchRanker",
    "ProviderRegistry",
    "best_carrier",
    "detect_carriers",
    "get_registry",
]
