"""
Strategy catalog tests.
"""
import pytest
import yaml

from config import DEFAULT_CATALOG_PATH
from reliability.exceptions import CatalogError, CatalogInvariantViolation, InputOutputError, UnknownStrategy
from trading.catalog import (
    DEFAULT_STRATEGY_TABLE,
    STRATEGY_IDS,
    StrategyCatalog,
    StrategyClass,
    StrategyDefinition,
    parse_catalog_config,
)


@pytest.mark.unit
class TestStrategyCatalog:
    """Lookups against the built-in table."""

    def test_catalog_covers_every_strategy_id(self, catalog):
        assert len(catalog) == 11
        for strategy_id in STRATEGY_IDS:
            assert catalog.lookup(strategy_id).strategy_id == strategy_id

    @pytest.mark.parametrize("strategy_id,entry", [
        ("call_3d_preearnings", -3),
        ("call_7d_preearnings", -7),
        ("call_14d_preearnings", -14),
        ("strangle_4d_preearnings", -4),
        ("strangle_7d_preearnings", -7),
        ("strangle_14d_preearnings", -14),
    ])
    def test_pre_earnings_exit_on_earnings_date(self, catalog, strategy_id, entry):
        definition = catalog.lookup(strategy_id)
        assert definition.strategy_class is StrategyClass.PRE_EARNINGS
        assert definition.entry_offset_days == entry
        assert definition.exit_offset_days == 0
        assert not definition.requires_earnings_result

    def test_post_earnings_enter_on_reaction(self, catalog):
        post = [d for d in catalog if d.strategy_class is StrategyClass.POST_EARNINGS]
        assert len(post) == 5
        for definition in post:
            assert definition.entry_offset_days in (0, 1)
            assert definition.exit_offset_days > definition.entry_offset_days
            assert definition.requires_earnings_result

    def test_unknown_strategy_raises(self, catalog):
        with pytest.raises(UnknownStrategy) as exc_info:
            catalog.lookup("bogus_strategy", line_number=4)
        assert exc_info.value.strategy == "bogus_strategy"
        assert "line 4" in str(exc_info.value)

    def test_lookup_is_case_sensitive(self, catalog):
        assert "CALL_7D_PREEARNINGS" not in catalog
        with pytest.raises(UnknownStrategy):
            catalog.lookup("CALL_7D_PREEARNINGS")

    def test_ids_for_class(self, catalog):
        pre = catalog.ids_for_class(StrategyClass.PRE_EARNINGS)
        assert pre == sorted(pre)
        assert "call_3d_preearnings" in pre
        assert "long_put_post_earnings" not in pre

    def test_definition_rejects_entry_after_exit(self):
        definition = StrategyDefinition("call_3d_preearnings", StrategyClass.PRE_EARNINGS, 2, 0)
        with pytest.raises(CatalogInvariantViolation):
            definition.validate()

    def test_incomplete_catalog_rejected(self):
        partial = {
            "call_3d_preearnings": StrategyDefinition("call_3d_preearnings", StrategyClass.PRE_EARNINGS, -3, 0)
        }
        with pytest.raises(CatalogError, match="missing strategies"):
            StrategyCatalog(partial)


@pytest.mark.unit
class TestCatalogYaml:
    """YAML overrides of the offset table."""

    def test_shipped_yaml_matches_builtin_table(self):
        config = yaml.safe_load(DEFAULT_CATALOG_PATH.read_text())
        definitions = parse_catalog_config(config)

        assert set(definitions) == set(DEFAULT_STRATEGY_TABLE)
        for strategy_id, (strategy_class, entry, exit_) in DEFAULT_STRATEGY_TABLE.items():
            definition = definitions[strategy_id]
            assert definition.strategy_class is strategy_class
            assert (definition.entry_offset_days, definition.exit_offset_days) == (entry, exit_)

    def test_override_replaces_only_listed_strategies(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "strategies:\n"
            "  long_call_post_earnings:\n"
            "    class: post\n"
            "    entry_offset_days: 0\n"
            "    exit_offset_days: 10\n"
        )

        catalog = StrategyCatalog.from_yaml(path)

        assert catalog.lookup("long_call_post_earnings").exit_offset_days == 10
        assert catalog.lookup("call_7d_preearnings").entry_offset_days == -7

    def test_override_with_unknown_id_rejected(self):
        config = {"strategies": {"covered_call_post_earnings": {
            "class": "post", "entry_offset_days": 0, "exit_offset_days": 5}}}
        with pytest.raises(CatalogError, match="unknown strategy id"):
            parse_catalog_config(config)

    def test_override_violating_invariant_rejected(self):
        config = {"strategies": {"call_3d_preearnings": {
            "class": "pre", "entry_offset_days": 3, "exit_offset_days": 0}}}
        with pytest.raises(CatalogInvariantViolation):
            parse_catalog_config(config)

    @pytest.mark.parametrize("entry", [
        {"class": "sideways", "entry_offset_days": 0, "exit_offset_days": 1},
        {"class": "post", "entry_offset_days": "one", "exit_offset_days": 1},
        {"class": "post", "entry_offset_days": True, "exit_offset_days": 1},
        {"class": "post", "exit_offset_days": 1},
    ])
    def test_malformed_entry_rejected(self, entry):
        with pytest.raises(CatalogError):
            parse_catalog_config({"strategies": {"long_put_post_earnings": entry}})

    def test_missing_strategies_key_rejected(self):
        with pytest.raises(CatalogError, match="'strategies' mapping"):
            parse_catalog_config({"offsets": {}})

    def test_invalid_yaml_rejected(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("strategies: [unclosed\n")
        with pytest.raises(CatalogError, match="invalid YAML"):
            StrategyCatalog.from_yaml(path)

    def test_missing_file_is_io_error(self, tmp_path):
        with pytest.raises(InputOutputError):
            StrategyCatalog.from_yaml(tmp_path / "nope.yaml")
