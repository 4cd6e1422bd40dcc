#!/usr/bin/env python3
"""
Aggregator

Orders resolved trades for output. In ALL mode every trade passes through;
in BEST mode each symbol keeps only its top-ranked trade, flagged ``best``.

Ranking, highest priority first:
    1. total_return, descending
    2. win_rate, descending
    3. backtest_length, descending (more history, more confidence)
    4. strategy id, ascending (deterministic final tie-break)
"""

import logging
from dataclasses import replace
from enum import Enum
from itertools import groupby
from operator import attrgetter
from typing import List, Sequence, Tuple

from trading.resolver import ScheduledTrade

logger = logging.getLogger(__name__)


class SelectionMode(Enum):
    """Emit every qualifying trade, or one winner per symbol."""
    ALL = "all"
    BEST = "best"


def output_order(trade: ScheduledTrade) -> Tuple:
    return (trade.symbol, trade.entry_date, trade.strategy)


def ranking_key(trade: ScheduledTrade) -> Tuple:
    """Sort key where the best candidate sorts first."""
    return (-trade.total_return, -trade.win_rate, -trade.backtest_length, trade.strategy)


def select_best(candidates: Sequence[ScheduledTrade]) -> ScheduledTrade:
    """Pick the top-ranked trade of one symbol and mark it."""
    winner = min(candidates, key=ranking_key)
    return replace(winner, best=True)


def aggregate(trades: Sequence[ScheduledTrade], mode: SelectionMode) -> List[ScheduledTrade]:
    """
    Apply the selection mode to resolved trades.

    Output is ordered by symbol; ALL mode further orders by entry date and
    strategy id. Empty input gives empty output.
    """
    ordered = sorted(trades, key=output_order)

    if mode is SelectionMode.ALL:
        return ordered

    winners = []
    for symbol, group in groupby(ordered, key=attrgetter("symbol")):
        candidates = list(group)
        winner = select_best(candidates)
        logger.debug(
            f"{symbol}: best of {len(candidates)} is {winner.strategy} (total_return {winner.total_return})"
        )
        winners.append(winner)

    return winners
