"""Service for loading carrier adapters."""

import importlib.util
from pathlib import Path

import yaml
from loguru import logger

from trackmatch.carriers.base import BaseCarrier, CarrierConfig
from trackmatch.config import settings
from trackmatch.countries import load_country_sets
from trackmatch.exceptions import CarrierConfigError


class CarrierLoader:
    """Loads carrier adapters from the carriers directory."""

    def __init__(self, carriers_dir: Path | None = None, countries_file: Path | None = None):
        self.carriers_dir = carriers_dir or settings.carriers_dir
        self.countries_file = countries_file or settings.countries_file
        self._carriers: dict[str, BaseCarrier] = {}
        self._country_sets: dict[str, frozenset[str]] | None = None

    @property
    def country_sets(self) -> dict[str, frozenset[str]]:
        if self._country_sets is None:
            self._country_sets = load_country_sets(self.countries_file)
        return self._country_sets

    def load_all(self) -> dict[str, BaseCarrier]:
        """Load all carrier adapters, in directory-name order."""
        if self._carriers:
            return self._carriers

        for carrier_dir in sorted(self.carriers_dir.iterdir()):
            if not carrier_dir.is_dir():
                continue
            if carrier_dir.name.startswith("_") or carrier_dir.name.startswith("."):
                continue

            self._load_carrier(carrier_dir)

        logger.info("Loaded {} carriers from {}", len(self._carriers), self.carriers_dir)
        return self._carriers

    def _load_carrier(self, carrier_dir: Path) -> None:
        """Load a single carrier adapter."""
        config_path = carrier_dir / "carrier.yaml"
        tracker_path = carrier_dir / "tracker.py"

        if not config_path.exists():
            logger.debug("Skipping {}: no carrier.yaml", carrier_dir.name)
            return

        try:
            config = CarrierConfig.from_yaml(config_path, self.country_sets)
        except (CarrierConfigError, yaml.YAMLError, OSError) as e:
            logger.error("Error loading config for {}: {}", carrier_dir.name, e)
            return

        if not config.enabled:
            logger.info("Skipping {}: disabled", carrier_dir.name)
            return

        if config.id in self._carriers:
            logger.error("Skipping {}: duplicate carrier id {!r}", carrier_dir.name, config.id)
            return

        carrier_class = BaseCarrier
        if tracker_path.exists():
            carrier_class = self._load_carrier_class(carrier_dir, tracker_path)
            if carrier_class is None:
                return

        try:
            carrier = carrier_class(config)
        except (CarrierConfigError, KeyError) as e:
            logger.error("Error building carrier {}: {}", config.id, e)
            return

        self._carriers[config.id] = carrier
        logger.debug("Loaded carrier: {}", config.name)

    def _load_carrier_class(self, carrier_dir: Path, tracker_path: Path) -> type[BaseCarrier] | None:
        """Import tracker.py and return the BaseCarrier subclass it defines."""
        try:
            # Dynamically load the tracker module
            spec = importlib.util.spec_from_file_location(
                f"trackmatch.carriers.{carrier_dir.name}.tracker",
                tracker_path,
            )
            if spec is None or spec.loader is None:
                logger.error("Error loading tracker for {}: invalid spec", carrier_dir.name)
                return None

            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        except Exception:
            logger.exception("Error loading tracker for {}", carrier_dir.name)
            return None

        # Find the carrier class (should be a subclass of BaseCarrier)
        for name in dir(module):
            obj = getattr(module, name)
            if isinstance(obj, type) and issubclass(obj, BaseCarrier) and obj is not BaseCarrier:
                return obj

        logger.error("No carrier class found in {}", tracker_path)
        return None


# Global carrier loader instance
carrier_loader = CarrierLoader()
