"""
Trading schedule package for earnings-driven options strategies.

This package turns backtest scanner rows into concrete entry/exit dates:
strategy catalog, schedule resolver, row filters, per-symbol aggregation
and report rendering.
"""

from .catalog import StrategyCatalog, StrategyClass, StrategyDefinition, STRATEGY_IDS
from .resolver import ScheduledTrade, ScheduleResolver, resolve
from .aggregator import SelectionMode, aggregate
from .filters import FilterCriteria, build_criteria, matches, resolve_selection_mode
from .pipeline import PipelineResult, build_schedule

__all__ = [
    'StrategyCatalog', 'StrategyClass', 'StrategyDefinition', 'STRATEGY_IDS',
    'ScheduledTrade', 'ScheduleResolver', 'resolve',
    'SelectionMode', 'aggregate',
    'FilterCriteria', 'build_criteria', 'matches', 'resolve_selection_mode',
    'PipelineResult', 'build_schedule',
]
