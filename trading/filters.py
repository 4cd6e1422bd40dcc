#!/usr/bin/env python3
"""
Row Filter

User-driven predicates applied to scanner rows and resolved trades. All
criteria are optional and AND-combined:

- strategy allow-list: explicit ids; when given it takes precedence over the
  class flags
- class filter: pre-earnings or post-earnings strategies only
- date range: inclusive bounds on the earnings anchor date

Also home of the selection-mode default, the one piece of implicit policy in
the command line: ``--post`` implies ``--best``, anything else implies
``--all``, unless a mode was given explicitly.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Union

from earnings.scanner import InputRecord
from reliability.exceptions import UsageError
from trading.aggregator import SelectionMode
from trading.catalog import StrategyCatalog, StrategyClass
from trading.resolver import ScheduledTrade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterCriteria:
    """AND-combined row predicates; ``None`` means the criterion is not set."""
    strategies: Optional[frozenset] = None
    strategy_class: Optional[StrategyClass] = None
    start: Optional[date] = None
    end: Optional[date] = None

    def matches_strategy(self, strategy_id: str, strategy_class: StrategyClass) -> bool:
        if self.strategies is not None:
            return strategy_id in self.strategies
        if self.strategy_class is not None:
            return strategy_class is self.strategy_class
        return True

    def matches_date(self, anchor: date) -> bool:
        if self.start is not None and anchor < self.start:
            return False
        if self.end is not None and anchor > self.end:
            return False
        return True


def matches(item: Union[InputRecord, ScheduledTrade],
            criteria: FilterCriteria,
            catalog: StrategyCatalog) -> bool:
    """
    Check a scanner row or a resolved trade against the criteria.

    Rows are classified through the catalog, so an unknown strategy id raises
    UnknownStrategy here rather than being filtered away.

    The pipeline applies the same two predicates as separate stages so it can
    look up every row first and count rows surviving each stage.
    """
    if isinstance(item, ScheduledTrade):
        strategy_class = item.strategy_class
    else:
        strategy_class = catalog.lookup(item.strategy, line_number=item.line_number).strategy_class

    return criteria.matches_strategy(item.strategy, strategy_class) and criteria.matches_date(item.next_earnings)


def build_criteria(catalog: StrategyCatalog,
                   strategies: Optional[Iterable[str]] = None,
                   pre: bool = False,
                   post: bool = False,
                   start: Optional[date] = None,
                   end: Optional[date] = None) -> FilterCriteria:
    """Validate CLI filter options and assemble FilterCriteria."""
    if pre and post:
        raise UsageError("--pre and --post are mutually exclusive")

    if start is not None and end is not None and start > end:
        raise UsageError(f"--start {start} is after --end {end}")

    allow_list = None
    if strategies:
        allow_list = frozenset(strategies)
        unknown = sorted(s for s in allow_list if s not in catalog)
        if unknown:
            raise UsageError(f"unknown strategy id(s): {', '.join(unknown)}")

    strategy_class = None
    if pre:
        strategy_class = StrategyClass.PRE_EARNINGS
    elif post:
        strategy_class = StrategyClass.POST_EARNINGS

    if allow_list is not None and strategy_class is not None:
        logger.info("Explicit strategy list given; ignoring class filter")
    elif strategy_class is not None:
        logger.debug(
            f"{strategy_class.value}-earnings strategies: "
            f"{', '.join(catalog.ids_for_class(strategy_class))}"
        )

    return FilterCriteria(strategies=allow_list, strategy_class=strategy_class, start=start, end=end)


def resolve_selection_mode(all_flag: bool = False,
                           best_flag: bool = False,
                           pre: bool = False,
                           post: bool = False) -> SelectionMode:
    """
    Decide ALL vs BEST from the CLI flags.

    Explicit ``--all``/``--best`` wins. Otherwise ``--post`` selects BEST, and
    ``--pre`` or no class flag selects ALL.
    """
    if all_flag and best_flag:
        raise UsageError("--all and --best are mutually exclusive")
    if pre and post:
        raise UsageError("--pre and --post are mutually exclusive")

    if all_flag:
        return SelectionMode.ALL
    if best_flag:
        return SelectionMode.BEST
    if post:
        return SelectionMode.BEST
    return SelectionMode.ALL
