"""Country code normalisation and shared country-set reference data."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from trackmatch.exceptions import CarrierConfigError

CountrySets = Mapping[str, frozenset[str]]


def normalise_country(country: str | None) -> str:
    """Normalise a country code to uppercase ISO alpha-2 form ("" if missing)."""
    if not country:
        return ""
    return country.strip().upper()


def _tokens(value: Any, source: str) -> list[str]:
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list):
        tokens = []
        for item in value:
            if not isinstance(item, str):
                # Unquoted NO (Norway) becomes False in YAML 1.1
                raise CarrierConfigError(f"{source}: country entries must be strings, got {item!r}")
            tokens.extend(item.split())
        return tokens
    raise CarrierConfigError(f"{source}: expected a string or list of country codes, got {value!r}")


def expand_countries(value: Any, sets: CountrySets, source: str = "countries") -> frozenset[str]:
    """Expand a country expression into a set of codes.

    Args:
        value: Whitespace-separated string or list of codes. Entries of the
            form ``@name`` pull in a named set. A mapping with ``include``
            and ``exclude`` keys subtracts one expression from another.
        sets: Named sets available for ``@name`` references.
        source: Label used in error messages.

    Returns:
        The expanded set of uppercase country codes.
    """
    if value is None:
        return frozenset()

    if isinstance(value, dict):
        unknown = set(value) - {"include", "exclude"}
        if unknown:
            raise CarrierConfigError(f"{source}: unexpected keys {sorted(unknown)}")
        included = expand_countries(value.get("include"), sets, source)
        excluded = expand_countries(value.get("exclude"), sets, source)
        return included - excluded

    codes: set[str] = set()
    for token in _tokens(value, source):
        if token.startswith("@"):
            name = token[1:]
            if name not in sets:
                raise CarrierConfigError(f"{source}: unknown country set {token!r}")
            codes.update(sets[name])
        else:
            codes.add(normalise_country(token))
    return frozenset(codes)


def load_country_sets(path: Path) -> dict[str, frozenset[str]]:
    """Load named country sets from a YAML reference file."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise CarrierConfigError(f"{path}: expected a mapping of country sets")

    sets: dict[str, frozenset[str]] = {}
    for name, value in data.items():
        sets[name] = expand_countries(value, sets, source=f"{path.name}:{name}")
    return sets
