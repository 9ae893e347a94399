"""UPS carrier adapter."""

from trackmatch.carriers.base import BaseCarrier, CarrierConfig
from trackmatch.countries import normalise_country


class UPSCarrier(BaseCarrier):
    """UPS carrier adapter.

    Cross-border shipments only need both countries in the international
    network. Same-country shipments are limited to countries where UPS runs
    a domestic service, or where domestic parcels use international-style
    tracking numbers.
    """

    def __init__(self, config: CarrierConfig):
        super().__init__(config)
        self.domestic_countries = config.country_groups.get("domestic", frozenset())
        self.domestic_international_tracking = config.country_groups.get(
            "domestic_international_tracking", frozenset()
        )

    def can_ship_from_to(self, shipping_from: str, shipping_to: str) -> bool:
        """Check a route against the domestic or international network."""
        shipping_from = normalise_country(shipping_from)
        shipping_to = normalise_country(shipping_to)

        if shipping_from == shipping_to:
            return (
                shipping_from in self.domestic_countries
                or shipping_from in self.domestic_international_tracking
            )

        return super().can_ship_from_to(shipping_from, shipping_to)
