"""
End-to-end pipeline tests over in-memory scanner rows.
"""
import pytest
from datetime import date

from earnings.scanner import read_scanner_rows
from reliability.exceptions import MissingEarningsResult, UnknownStrategy
from trading.aggregator import SelectionMode
from trading.filters import build_criteria, matches
from trading.pipeline import build_schedule


@pytest.fixture
def records(sample_scan_text):
    return read_scanner_rows(sample_scan_text.splitlines())


@pytest.mark.unit
class TestBuildSchedule:

    def test_all_mode_keeps_every_row(self, records, catalog):
        result = build_schedule(records, catalog, build_criteria(catalog), SelectionMode.ALL)

        assert result.rows_read == 8
        assert len(result.trades) == len(result.resolved) == 8
        assert [t.symbol for t in result.trades] == sorted(t.symbol for t in result.trades)

    def test_best_pre_mode(self, records, catalog):
        criteria = build_criteria(catalog, pre=True)
        result = build_schedule(records, catalog, criteria, SelectionMode.BEST)

        assert result.rows_after_strategy_filter == 4
        assert [(t.symbol, t.strategy) for t in result.trades] == [
            ("AAPL", "call_7d_preearnings"),
            ("MSFT", "call_3d_preearnings"),
        ]
        assert all(t.best for t in result.trades)
        assert len(result.resolved) == 4

    def test_post_mode_best_per_symbol(self, records, catalog):
        criteria = build_criteria(catalog, post=True)
        result = build_schedule(records, catalog, criteria, SelectionMode.BEST)

        assert {t.symbol: t.strategy for t in result.trades} == {
            "AAPL": "long_call_post_earnings",
            "MSFT": "put_spread_post_earnings",
            "NVDA": "iron_condor_post_earnings",
        }
        assert result.symbols == 3

    def test_date_range_drops_out_of_range_symbols(self, records, catalog):
        criteria = build_criteria(catalog, start=date(2024, 5, 1), end=date(2024, 5, 31))
        result = build_schedule(records, catalog, criteria, SelectionMode.ALL)

        assert {t.symbol for t in result.trades} == {"AAPL", "NVDA"}
        assert result.rows_after_date_filter == 5
        assert all(date(2024, 5, 1) <= t.next_earnings <= date(2024, 5, 31) for t in result.trades)

    @pytest.mark.parametrize("options", [
        dict(),
        dict(pre=True),
        dict(post=True, start=date(2024, 5, 10)),
        dict(strategies=["call_3d_preearnings", "iron_condor_post_earnings"], end=date(2024, 5, 31)),
    ])
    def test_stages_agree_with_row_predicate(self, records, catalog, options):
        criteria = build_criteria(catalog, **options)
        result = build_schedule(records, catalog, criteria, SelectionMode.ALL)

        expected = {(r.symbol, r.strategy) for r in records if matches(r, criteria, catalog)}
        assert {(t.symbol, t.strategy) for t in result.resolved} == expected
        assert result.rows_after_date_filter == len(expected)

    def test_out_of_range_rows_are_not_resolved(self, catalog, make_record):
        # would fail resolution, but its earnings date is outside the range
        stale = make_record(strategy="long_put_post_earnings", next_earnings=date(2023, 1, 10))
        criteria = build_criteria(catalog, start=date(2024, 1, 1))

        result = build_schedule([stale, make_record()], catalog, criteria, SelectionMode.ALL)
        assert len(result.trades) == 1

    def test_in_range_post_row_without_result_is_fatal(self, catalog, make_record):
        row = make_record(strategy="long_put_post_earnings")
        with pytest.raises(MissingEarningsResult):
            build_schedule([row], catalog, build_criteria(catalog), SelectionMode.ALL)

    def test_unknown_strategy_aborts_even_when_filtered(self, catalog, make_record):
        rows = [make_record(), make_record(strategy="bogus_strategy")]
        criteria = build_criteria(catalog, strategies=["call_7d_preearnings"])
        with pytest.raises(UnknownStrategy):
            build_schedule(rows, catalog, criteria, SelectionMode.ALL)

    def test_nothing_matches_is_not_an_error(self, records, catalog):
        criteria = build_criteria(catalog, start=date(2030, 1, 1))
        result = build_schedule(records, catalog, criteria, SelectionMode.BEST)

        assert result.trades == []
        assert "0 trades" in result.summary()
