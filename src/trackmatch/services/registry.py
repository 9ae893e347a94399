"""Registry of carriers and the fan-out match query."""

from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache

from loguru import logger

from trackmatch.carriers.base import BaseCarrier, TrackingMatch, normalise_tracking_number
from trackmatch.config import settings
from trackmatch.exceptions import UnknownCarrierError
from trackmatch.services.carrier_loader import carrier_loader


class ProviderRegistry:
    """Holds every carrier and asks all of them about a tracking number.

    Carriers are stateless after construction, so a registry can be shared
    freely between threads and requests.
    """

    def __init__(
        self,
        carriers: Iterable[BaseCarrier],
        fanout_workers: int | None = None,
        max_tracking_number_length: int | None = None,
    ):
        self._carriers: dict[str, BaseCarrier] = {}
        for carrier in carriers:
            key = carrier.get_key()
            if key in self._carriers:
                raise ValueError(f"Duplicate carrier key: {key!r}")
            self._carriers[key] = carrier

        self.fanout_workers = settings.fanout_workers if fanout_workers is None else fanout_workers
        self.max_tracking_number_length = (
            settings.max_tracking_number_length
            if max_tracking_number_length is None
            else max_tracking_number_length
        )

    def __iter__(self) -> Iterator[BaseCarrier]:
        return iter(self._carriers.values())

    def __len__(self) -> int:
        return len(self._carriers)

    def __contains__(self, key: object) -> bool:
        return key in self._carriers

    def keys(self) -> list[str]:
        return list(self._carriers)

    def get_provider(self, key: str) -> BaseCarrier:
        """Get a carrier by key.

        Raises:
            UnknownCarrierError: If no carrier is registered under ``key``.
        """
        try:
            return self._carriers[key]
        except KeyError:
            raise UnknownCarrierError(key) from None

    def match_all(self, tracking_number: str, shipping_from: str, shipping_to: str) -> list[TrackingMatch]:
        """Collect every carrier's match for a tracking number.

        Args:
            tracking_number: Raw tracking number.
            shipping_from: ISO alpha-2 origin country.
            shipping_to: ISO alpha-2 destination country.

        Returns:
            Matches in registration order; carriers that do not recognise the
            number are left out.
        """
        normalised = normalise_tracking_number(tracking_number)
        if not normalised or len(normalised) > self.max_tracking_number_length:
            return []

        def query(carrier: BaseCarrier) -> TrackingMatch | None:
            return carrier.try_parse_tracking_number(normalised, shipping_from, shipping_to)

        carriers = list(self._carriers.values())
        if self.fanout_workers > 1:
            with ThreadPoolExecutor(max_workers=self.fanout_workers) as executor:
                results = list(executor.map(query, carriers))
        else:
            results = [query(carrier) for carrier in carriers]

        matches = [match for match in results if match is not None]
        logger.debug(
            "{} of {} carriers matched {} ({} -> {})",
            len(matches),
            len(carriers),
            normalised,
            shipping_from,
            shipping_to,
        )
        return matches


@lru_cache(maxsize=1)
def get_registry() -> ProviderRegistry:
    """Registry of all carriers shipped with the package."""
    return ProviderRegistry(carrier_loader.load_all().values())
