"""Exceptions raised by trackmatch.

Unrecognised tracking numbers and unsupported routes are never errors; these
exceptions signal broken configuration or a caller asking for something that
does not exist.
"""


class TrackmatchError(Exception):
    """Base class for trackmatch errors."""


class CarrierConfigError(TrackmatchError, ValueError):
    """A carrier.yaml or country reference file is invalid."""


class UnknownCarrierError(TrackmatchError, KeyError):
    """Lookup of a carrier id that is not registered."""

    def __init__(self, carrier_id: str):
        super().__init__(carrier_id)
        self.carrier_id = carrier_id

    def __str__(self) -> str:
        return f"Unknown carrier: {self.carrier_id!r}"
