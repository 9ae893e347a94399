"""Carrier adapters package."""

from trackmatch.carriers.base import BaseCarrier, CarrierConfig, TrackingMatch

__all__ = ["BaseCarrier", "CarrierConfig", "TrackingMatch"]
