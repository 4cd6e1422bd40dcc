"""
Shared pytest fixtures for the earnings schedule tests.
"""
import logging
import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from earnings.scanner import InputRecord
from trading.catalog import StrategyCatalog


SCAN_HEADER = (
    "symbol,wins,losses,win_rate,avg_trade_return,total_return,"
    "backtest_length,next_earnings,prev_earnings_result,strategy"
)

SAMPLE_SCAN_ROWS = [
    "AAPL,30,10,0.75,0.05,1.50,40,2024-05-02,,call_7d_preearnings",
    "AAPL,25,15,0.625,0.02,0.80,40,2024-05-02,,strangle_14d_preearnings",
    "AAPL,12,8,0.60,0.04,0.90,20,2024-05-02,beat,long_call_post_earnings",
    "MSFT,20,10,0.6667,0.03,2.0,30,2024-06-10,,strangle_14d_preearnings",
    "MSFT,22,8,0.7333,0.05,3.5,30,2024-06-10,,call_3d_preearnings",
    "MSFT,9,11,0.45,-0.01,-0.20,20,2024-06-10,miss,put_spread_post_earnings",
    "NVDA,18,2,0.90,0.12,4.10,20,2024-05-22,beat,iron_condor_post_earnings",
    "NVDA,15,5,0.75,0.08,2.40,20,2024-05-22,beat,long_straddle_post_earnings",
]


class RecordFactory:
    """Builds InputRecords with sensible defaults for tests."""

    @staticmethod
    def create(**overrides) -> InputRecord:
        values = dict(
            symbol="AAPL",
            wins=30,
            losses=10,
            win_rate=Decimal("0.75"),
            avg_trade_return=Decimal("0.05"),
            total_return=Decimal("1.50"),
            backtest_length=40,
            next_earnings=date(2024, 5, 2),
            prev_earnings_result=None,
            strategy="call_7d_preearnings",
            line_number=None,
        )
        values.update(overrides)
        return InputRecord(**values)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to captured streams once a test finishes."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


@pytest.fixture
def temp_data_dir():
    """Temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def make_record():
    """InputRecord factory fixture."""
    return RecordFactory.create


@pytest.fixture
def catalog():
    """Built-in strategy catalog."""
    return StrategyCatalog.default()


@pytest.fixture
def sample_scan_text():
    """Sample scanner export with header."""
    return "\n".join([SCAN_HEADER] + SAMPLE_SCAN_ROWS) + "\n"


@pytest.fixture
def write_scan(temp_data_dir):
    """Write scanner rows to a CSV file and return its path."""
    def _write(rows, header=True, name="scan.csv"):
        lines = ([SCAN_HEADER] if header else []) + list(rows)
        path = temp_data_dir / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_scan_file(write_scan):
    """Sample scanner export on disk."""
    return write_scan(SAMPLE_SCAN_ROWS)
