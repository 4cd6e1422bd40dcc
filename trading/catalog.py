#!/usr/bin/env python3
"""
Strategy Catalog

Static registry mapping each scanner strategy id to its earnings class and
the day offsets used to place entry and exit around the earnings date.
Offsets are signed days relative to the anchor (negative = before).

Pre-earnings calls/strangles open N days ahead of the report and close on the
earnings date itself, capturing the volatility run-up rather than the
reaction. Post-earnings strategies open on the reaction (day +0 or +1) and
close a strategy-specific number of days later.

The table is data: adding or tuning a strategy is an edit to
``DEFAULT_STRATEGY_TABLE`` or to a YAML override file, never to resolver code.
``config/strategies.yaml`` mirrors the built-in table for review.

Usage:
    from trading.catalog import StrategyCatalog

    catalog = StrategyCatalog.default()
    definition = catalog.lookup("call_7d_preearnings")
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

import yaml

from reliability.exceptions import (
    CatalogError,
    CatalogInvariantViolation,
    InputOutputError,
    UnknownStrategy,
)

logger = logging.getLogger(__name__)


class StrategyClass(Enum):
    """When a strategy trades relative to the earnings event."""
    PRE_EARNINGS = "pre"
    POST_EARNINGS = "post"


@dataclass(frozen=True)
class StrategyDefinition:
    """Catalog entry for one strategy id."""
    strategy_id: str
    strategy_class: StrategyClass
    entry_offset_days: int
    exit_offset_days: int

    @property
    def requires_earnings_result(self) -> bool:
        return self.strategy_class is StrategyClass.POST_EARNINGS

    def validate(self) -> None:
        if self.entry_offset_days > self.exit_offset_days:
            raise CatalogInvariantViolation(
                self.strategy_id,
                f"{self.entry_offset_days:+d}d",
                f"{self.exit_offset_days:+d}d",
            )


# strategy id -> (class, entry offset, exit offset)
DEFAULT_STRATEGY_TABLE = {
    # Pre-earnings: enter N days before, exit on the earnings date
    "call_3d_preearnings":          (StrategyClass.PRE_EARNINGS, -3, 0),
    "call_7d_preearnings":          (StrategyClass.PRE_EARNINGS, -7, 0),
    "call_14d_preearnings":         (StrategyClass.PRE_EARNINGS, -14, 0),
    "strangle_4d_preearnings":      (StrategyClass.PRE_EARNINGS, -4, 0),
    "strangle_7d_preearnings":      (StrategyClass.PRE_EARNINGS, -7, 0),
    "strangle_14d_preearnings":     (StrategyClass.PRE_EARNINGS, -14, 0),

    # Post-earnings: enter on the reaction, exit some days later
    "iron_condor_post_earnings":    (StrategyClass.POST_EARNINGS, 1, 8),
    "put_spread_post_earnings":     (StrategyClass.POST_EARNINGS, 1, 8),
    "long_straddle_post_earnings":  (StrategyClass.POST_EARNINGS, 0, 3),
    "long_call_post_earnings":      (StrategyClass.POST_EARNINGS, 1, 5),
    "long_put_post_earnings":       (StrategyClass.POST_EARNINGS, 1, 5),
}

STRATEGY_IDS = tuple(DEFAULT_STRATEGY_TABLE)


def _build_definitions(table: Mapping[str, tuple]) -> Dict[str, StrategyDefinition]:
    definitions = {}
    for strategy_id, (strategy_class, entry, exit_) in table.items():
        definition = StrategyDefinition(strategy_id, strategy_class, entry, exit_)
        definition.validate()
        definitions[strategy_id] = definition
    return definitions


class StrategyCatalog:
    """Immutable strategy id -> StrategyDefinition registry."""

    def __init__(self, definitions: Mapping[str, StrategyDefinition]):
        missing = set(STRATEGY_IDS) - set(definitions)
        if missing:
            raise CatalogError(f"catalog is missing strategies: {', '.join(sorted(missing))}")
        for definition in definitions.values():
            definition.validate()
        self._definitions = MappingProxyType(dict(definitions))

    @classmethod
    def default(cls) -> "StrategyCatalog":
        return cls(_build_definitions(DEFAULT_STRATEGY_TABLE))

    @classmethod
    def from_yaml(cls, path: Path) -> "StrategyCatalog":
        """
        Built-in catalog with per-strategy overrides from a YAML file.

        Expected shape::

            strategies:
              call_7d_preearnings:
                class: pre
                entry_offset_days: -7
                exit_offset_days: 0

        Only ids from the fixed strategy set may appear. Ids absent from the
        file keep their built-in definition.
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except OSError as e:
            raise InputOutputError(path, e.strerror or str(e)) from e
        except yaml.YAMLError as e:
            raise CatalogError(f"{path}: invalid YAML: {e}") from e

        overrides = parse_catalog_config(config, source=str(path))
        definitions = _build_definitions(DEFAULT_STRATEGY_TABLE)
        definitions.update(overrides)

        logger.info(f"Loaded {len(overrides)} strategy overrides from {path}")
        return cls(definitions)

    def lookup(self, strategy_id: str, line_number: Optional[int] = None) -> StrategyDefinition:
        try:
            return self._definitions[strategy_id]
        except KeyError:
            raise UnknownStrategy(strategy_id, line_number=line_number) from None

    def __contains__(self, strategy_id: object) -> bool:
        return strategy_id in self._definitions

    def __iter__(self) -> Iterator[StrategyDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def ids_for_class(self, strategy_class: StrategyClass) -> List[str]:
        return sorted(d.strategy_id for d in self if d.strategy_class is strategy_class)


def _parse_offset(value: Any, strategy_id: str, key: str, source: str) -> int:
    # bool is an int subclass; "true" offsets are a typo, not a day count
    if isinstance(value, bool) or not isinstance(value, int):
        raise CatalogError(f"{source}: {strategy_id}.{key} must be an integer, got {value!r}")
    return value


def parse_catalog_config(config: Any, source: str = "<catalog>") -> Dict[str, StrategyDefinition]:
    """Validate a loaded YAML document and return the strategy definitions it declares."""
    if not isinstance(config, dict) or not isinstance(config.get("strategies"), dict):
        raise CatalogError(f"{source}: expected a 'strategies' mapping")

    classes = {c.value: c for c in StrategyClass}
    definitions = {}

    for strategy_id, entry in config["strategies"].items():
        if strategy_id not in DEFAULT_STRATEGY_TABLE:
            raise CatalogError(f"{source}: unknown strategy id {strategy_id!r}")
        if not isinstance(entry, dict):
            raise CatalogError(f"{source}: {strategy_id} must be a mapping")

        class_name = str(entry.get("class", "")).lower()
        if class_name not in classes:
            raise CatalogError(
                f"{source}: {strategy_id}.class must be one of {sorted(classes)}, got {entry.get('class')!r}"
            )

        definition = StrategyDefinition(
            strategy_id=strategy_id,
            strategy_class=classes[class_name],
            entry_offset_days=_parse_offset(entry.get("entry_offset_days"), strategy_id, "entry_offset_days", source),
            exit_offset_days=_parse_offset(entry.get("exit_offset_days"), strategy_id, "exit_offset_days", source),
        )
        definition.validate()
        definitions[strategy_id] = definition

    return definitions
