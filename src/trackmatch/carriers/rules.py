"""Compiled matching rules for carrier configurations.

carrier.yaml describes tracking numbers declaratively. This module turns
those descriptions into small callables the carrier engine evaluates:

* ``Condition`` - a predicate over the tracking number and route.
* score expressions - ``f(tracking_number, route) -> int``.
* ``PatternRule``, ``ServiceRule`` and ``Adjustment`` - the rows of a
  carrier's tables.

Score expressions take one of three forms::

    95                                           # constant
    {check: mod10, valid: 90, invalid: 80}       # check-digit branch
    {from: [US, CA], then: 85, else: 70}         # route/number condition

``then``/``else``/``valid``/``invalid`` are themselves score expressions, so
branches nest.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable

from trackmatch.checkdigits import CHECK_DIGIT_VALIDATORS
from trackmatch.countries import CountrySets, expand_countries
from trackmatch.exceptions import CarrierConfigError

CONDITION_KEYS = {"from", "to", "domestic", "match", "check", "service"}


@dataclass(frozen=True)
class Route:
    """Normalised origin and destination of a shipment."""

    shipping_from: str
    shipping_to: str

    @property
    def domestic(self) -> bool:
        """Whether origin and destination are the same country."""
        return self.shipping_from == self.shipping_to


Scorer = Callable[[str, Route], int]


def compile_regex(pattern: str, source: str) -> re.Pattern[str]:
    """Compile a configured pattern; classes like ``\\d`` only match ASCII."""
    try:
        return re.compile(pattern, re.ASCII)
    except re.error as e:
        raise CarrierConfigError(f"{source}: invalid regex {pattern!r} - {e}") from e


def get_validator(name: str, source: str) -> Callable[[str], bool]:
    """Look up a check-digit validator by its configured name."""
    try:
        return CHECK_DIGIT_VALIDATORS[name]
    except KeyError:
        raise CarrierConfigError(f"{source}: unknown check digit validator {name!r}") from None


@dataclass(frozen=True)
class Condition:
    """All configured predicates must hold; an empty condition always holds."""

    from_countries: frozenset[str] | None = None
    to_countries: frozenset[str] | None = None
    domestic: bool | None = None
    pattern: re.Pattern[str] | None = None
    check: Callable[[str], bool] | None = None
    service: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], sets: CountrySets, source: str) -> "Condition":
        return cls(
            from_countries=expand_countries(data["from"], sets, source) if "from" in data else None,
            to_countries=expand_countries(data["to"], sets, source) if "to" in data else None,
            domestic=data.get("domestic"),
            pattern=compile_regex(data["match"], source) if "match" in data else None,
            check=get_validator(data["check"], source) if "check" in data else None,
            service=data.get("service"),
        )

    def holds(self, tracking_number: str, route: Route, service: str | None = None) -> bool:
        """Check every configured predicate against a number, route and service."""
        if self.from_countries is not None and route.shipping_from not in self.from_countries:
            return False
        if self.to_countries is not None and route.shipping_to not in self.to_countries:
            return False
        if self.domestic is not None and route.domestic != self.domestic:
            return False
        if self.pattern is not None and not self.pattern.match(tracking_number):
            return False
        if self.service is not None and self.service != service:
            return False
        if self.check is not None and not self.check(tracking_number):
            return False
        return True


def compile_score(expr: Any, sets: CountrySets, source: str) -> Scorer:
    """Compile a score expression into a callable."""
    if isinstance(expr, bool):
        raise CarrierConfigError(f"{source}: score must be an integer or mapping, got {expr!r}")

    if isinstance(expr, int):
        if not 0 <= expr <= 100:
            raise CarrierConfigError(f"{source}: score {expr} outside 0-100")
        return lambda tracking_number, route: expr

    if not isinstance(expr, dict):
        raise CarrierConfigError(f"{source}: score must be an integer or mapping, got {expr!r}")

    if "then" in expr:
        unknown = set(expr) - CONDITION_KEYS - {"then", "else"}
        if unknown:
            raise CarrierConfigError(f"{source}: unexpected score keys {sorted(unknown)}")
        condition = Condition.from_dict(expr, sets, source)
        when_true = compile_score(expr["then"], sets, source)
        when_false = compile_score(expr.get("else", 0), sets, source)

        def conditional(tracking_number: str, route: Route) -> int:
            if condition.holds(tracking_number, route):
                return when_true(tracking_number, route)
            return when_false(tracking_number, route)

        return conditional

    if "check" in expr:
        if set(expr) != {"check", "valid", "invalid"}:
            raise CarrierConfigError(f"{source}: check scores need exactly check, valid and invalid")
        validator = get_validator(expr["check"], source)
        when_valid = compile_score(expr["valid"], sets, source)
        when_invalid = compile_score(expr["invalid"], sets, source)

        def checked(tracking_number: str, route: Route) -> int:
            if validator(tracking_number):
                return when_valid(tracking_number, route)
            return when_invalid(tracking_number, route)

        return checked

    raise CarrierConfigError(f"{source}: cannot interpret score {expr!r}")


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    return [value]


@dataclass(frozen=True)
class PatternRule:
    """One row of a carrier's tracking-number table."""

    patterns: tuple[re.Pattern[str], ...]
    score: Scorer
    description: str = ""
    origins: frozenset[str] | None = None
    adjust: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any], sets: CountrySets, source: str) -> "PatternRule":
        if "regex" not in data or "score" not in data:
            raise CarrierConfigError(f"{source}: tracking patterns need regex and score")
        return cls(
            patterns=tuple(compile_regex(p, source) for p in _as_list(data["regex"])),
            score=compile_score(data["score"], sets, source),
            description=data.get("description", ""),
            origins=expand_countries(data["origins"], sets, source) if "origins" in data else None,
            adjust=data.get("adjust", True),
        )

    def matches(self, tracking_number: str, route: Route) -> bool:
        if self.origins is not None and route.shipping_from not in self.origins:
            return False
        return any(pattern.match(tracking_number) for pattern in self.patterns)


@dataclass(frozen=True)
class ServiceRule:
    """Detects a sub-service from the shape of a tracking number."""

    name: str
    pattern: re.Pattern[str]
    origins: frozenset[str] | None = None
    score: Scorer | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], sets: CountrySets, source: str) -> "ServiceRule":
        return cls(
            name=data["name"],
            pattern=compile_regex(data["regex"], source),
            origins=expand_countries(data["origins"], sets, source) if "origins" in data else None,
            score=compile_score(data["score"], sets, source) if "score" in data else None,
        )

    def detects(self, tracking_number: str, route: Route) -> bool:
        if self.origins is not None and route.shipping_from not in self.origins:
            return False
        return bool(self.pattern.match(tracking_number))


@dataclass(frozen=True)
class Adjustment:
    """Raises a score by ``boost`` (never past ``cap``) when its condition holds.

    A score already above the cap is left alone; boosts never lower a score.
    """

    condition: Condition
    boost: int
    cap: int = 100

    @classmethod
    def from_dict(cls, data: dict[str, Any], sets: CountrySets, source: str) -> "Adjustment":
        unknown = set(data) - CONDITION_KEYS - {"boost", "cap"}
        if unknown:
            raise CarrierConfigError(f"{source}: unexpected adjustment keys {sorted(unknown)}")
        return cls(
            condition=Condition.from_dict(data, sets, source),
            boost=data["boost"],
            cap=data.get("cap", 100),
        )

    def apply(self, score: int, tracking_number: str, route: Route, service: str | None) -> int:
        if not self.condition.holds(tracking_number, route, service):
            return score
        return max(score, min(self.cap, score + self.boost))
