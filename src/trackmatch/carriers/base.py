"""Base classes for carrier adapters."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote

import yaml
from loguru import logger

from trackmatch.carriers.rules import Adjustment, PatternRule, Route, ServiceRule, compile_regex
from trackmatch.countries import CountrySets, expand_countries, normalise_country
from trackmatch.exceptions import CarrierConfigError

MIN_SCORE = 0
MAX_SCORE = 100


def normalise_tracking_number(tracking_number: str | None) -> str:
    """Remove all whitespace and uppercase a tracking number."""
    if not tracking_number:
        return ""
    return "".join(tracking_number.split()).upper()


@dataclass(frozen=True)
class TrackingMatch:
    """A carrier's claim on a tracking number."""

    provider_key: str
    tracking_url: str
    ambiguity_score: int
    description: str = ""
    service: str | None = None


@dataclass
class CarrierConfig:
    """Configuration loaded from carrier.yaml."""

    id: str
    name: str
    tracking_url_template: str
    icon: str = ""
    website: str = ""
    tracking_urls: list[dict[str, str]] = field(default_factory=list)
    shipping_from_countries: frozenset[str] = frozenset()
    shipping_to_countries: frozenset[str] = frozenset()
    country_groups: dict[str, frozenset[str]] = field(default_factory=dict)
    tracking_patterns: list[dict[str, Any]] = field(default_factory=list)
    services: list[dict[str, Any]] = field(default_factory=list)
    adjustments: list[dict[str, Any]] = field(default_factory=list)
    enabled: bool = True

    @classmethod
    def from_yaml(cls, yaml_path: Path, country_sets: CountrySets | None = None) -> "CarrierConfig":
        """Load carrier configuration from a YAML file.

        Args:
            yaml_path: Path to carrier.yaml.
            country_sets: Shared named country sets. The carrier's own
                ``country_groups`` are added on top and can be referenced
                as ``@name`` anywhere a country list is accepted.
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise CarrierConfigError(f"{yaml_path}: expected a mapping")

        missing = {"id", "name", "tracking_url_template"} - set(data)
        if missing:
            raise CarrierConfigError(f"{yaml_path}: missing {sorted(missing)}")

        source = data["id"]
        groups = dict(country_sets or {})
        for name, value in (data.get("country_groups") or {}).items():
            groups[name] = expand_countries(value, groups, f"{source}:{name}")

        return cls(
            id=data["id"],
            name=data["name"],
            tracking_url_template=data["tracking_url_template"],
            icon=data.get("icon", ""),
            website=data.get("website", ""),
            tracking_urls=data.get("tracking_urls", []),
            shipping_from_countries=expand_countries(
                data.get("shipping_from_countries"), groups, f"{source}:shipping_from_countries"
            ),
            shipping_to_countries=expand_countries(
                data.get("shipping_to_countries"), groups, f"{source}:shipping_to_countries"
            ),
            country_groups=groups,
            tracking_patterns=data.get("tracking_patterns", []),
            services=data.get("services", []),
            adjustments=data.get("adjustments", []),
            enabled=data.get("enabled", True),
        )


class BaseCarrier:
    """Tracking-number recognition for one carrier.

    The matching engine is the same for every carrier; carrier.yaml supplies
    the tables. To add a carrier:
    1. Create a directory in /carriers/ named after the carrier
    2. Add a carrier.yaml with its countries, URL template and patterns
    3. Optionally add a tracker.py with a BaseCarrier subclass when the
       carrier needs behaviour the tables cannot express
    """

    def __init__(self, config: CarrierConfig):
        self.config = config
        self._rules: list[PatternRule] = []
        self._services: list[ServiceRule] = []
        self._adjustments: list[Adjustment] = []
        self._url_routes: list[tuple[re.Pattern[str], str]] = []
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Pre-compile the pattern, service, adjustment and URL tables."""
        groups = self.config.country_groups
        source = self.config.id

        for pattern in self.config.tracking_patterns:
            try:
                self._rules.append(PatternRule.from_dict(pattern, groups, source))
            except CarrierConfigError as e:
                logger.warning("Skipping tracking pattern in {}: {}", source, e)

        for service in self.config.services:
            self._services.append(ServiceRule.from_dict(service, groups, source))

        for adjustment in self.config.adjustments:
            self._adjustments.append(Adjustment.from_dict(adjustment, groups, source))

        for route in self.config.tracking_urls:
            self._url_routes.append((compile_regex(route["regex"], source), route["template"]))

    @property
    def key(self) -> str:
        """Unique carrier identifier."""
        return self.config.id

    @property
    def display_name(self) -> str:
        """Human-readable carrier name."""
        return self.config.name

    @property
    def icon_path(self) -> str:
        """Icon file name for the carrier."""
        return self.config.icon

    def get_key(self) -> str:
        """Get the key the registry stores this carrier under."""
        return self.config.id

    def get_shipping_from_countries(self) -> frozenset[str]:
        """Get the origin countries this carrier serves."""
        return self.config.shipping_from_countries

    def get_shipping_to_countries(self) -> frozenset[str]:
        """Get the destination countries this carrier serves."""
        return self.config.shipping_to_countries

    def can_ship_from(self, country: str) -> bool:
        """Check whether parcels can start in a country."""
        return normalise_country(country) in self.get_shipping_from_countries()

    def can_ship_to(self, country: str) -> bool:
        """Check whether parcels can be delivered to a country."""
        return normalise_country(country) in self.get_shipping_to_countries()

    def can_ship_from_to(self, shipping_from: str, shipping_to: str) -> bool:
        """Check whether this carrier serves a route."""
        return self.can_ship_from(shipping_from) and self.can_ship_to(shipping_to)

    def get_tracking_url(self, tracking_number: str) -> str:
        """Get the URL to track a parcel on the carrier's website."""
        normalised = normalise_tracking_number(tracking_number)
        template = self.config.tracking_url_template
        for pattern, route_template in self._url_routes:
            if pattern.match(normalised):
                template = route_template
                break
        return template.format(tracking_number=quote(normalised, safe=""))

    def detect_service(self, tracking_number: str, route: Route) -> ServiceRule | None:
        """Return the first sub-service whose pattern matches, if any."""
        for service in self._services:
            if service.detects(tracking_number, route):
                return service
        return None

    def try_parse_tracking_number(
        self,
        tracking_number: str,
        shipping_from: str,
        shipping_to: str,
    ) -> TrackingMatch | None:
        """Try to claim a tracking number for this carrier.

        Args:
            tracking_number: Raw tracking number; whitespace and case are ignored.
            shipping_from: ISO alpha-2 origin country.
            shipping_to: ISO alpha-2 destination country.

        Returns:
            A TrackingMatch from the first matching pattern, or None if the
            route is not served or no pattern matches.
        """
        normalised = normalise_tracking_number(tracking_number)
        route = Route(normalise_country(shipping_from), normalise_country(shipping_to))

        if not normalised or not route.shipping_from or not route.shipping_to:
            return None
        if not self.can_ship_from_to(route.shipping_from, route.shipping_to):
            return None

        for rule in self._rules:
            if not rule.matches(normalised, route):
                continue

            score = rule.score(normalised, route)
            if score <= 0:
                continue

            service_name = None
            if rule.adjust:
                service = self.detect_service(normalised, route)
                if service is not None:
                    service_name = service.name
                    if service.score is not None:
                        score = service.score(normalised, route)
                for adjustment in self._adjustments:
                    score = adjustment.apply(score, normalised, route, service_name)

            return TrackingMatch(
                provider_key=self.key,
                tracking_url=self.get_tracking_url(normalised),
                ambiguity_score=max(MIN_SCORE, min(MAX_SCORE, score)),
                description=rule.description,
                service=service_name,
            )

        return None
