"""
Tests for the semantics registry lookups.

Validates that:
1. Every built-in indicator offers subjects, targets and operators
2. Unknown ids, subjects and targets give empty results (deny by default)
3. Duplicate MACD pairings are merged, not first-match
4. Price source never changes which targets are legal
5. Operator sets match the catalog exactly
"""

import pytest

from trade_semantics.rules.types import Operator, PriceSource
from trade_semantics.semantics.catalog import BUILTIN_INDICATOR_IDS
from trade_semantics.semantics.registry import (
    get_registry,
    get_semantics,
    get_valid_operators,
    get_valid_subjects,
    get_valid_targets,
)
from trade_semantics.semantics.variants import (
    ComponentTarget,
    DerivedSubject,
    IndicatorSubject,
    PriceSubject,
    ValueTarget,
    ZeroTarget,
)


ALL_OPERATORS = {
    Operator.GT, Operator.LT, Operator.GE, Operator.LE,
    Operator.EQ, Operator.NE, Operator.CROSSES_ABOVE, Operator.CROSSES_BELOW,
}


class TestClosure:
    """Every built-in indicator is fully populated."""

    @pytest.mark.parametrize("indicator_id", BUILTIN_INDICATOR_IDS)
    def test_every_indicator_has_subjects(self, registry, indicator_id):
        assert registry.get_valid_subjects(indicator_id)

    @pytest.mark.parametrize("indicator_id", BUILTIN_INDICATOR_IDS)
    def test_every_subject_reaches_targets_with_operators(self, registry, indicator_id):
        for subject in registry.get_valid_subjects(indicator_id):
            targets = registry.get_valid_targets(indicator_id, subject)
            assert targets, f"{indicator_id} {subject} has no targets"
            for target_rule in targets:
                assert target_rule.operators

    def test_registry_lists_the_seven_indicators_in_order(self, registry):
        assert registry.list_indicators() == ["RSI", "EMA", "BBANDS", "MACD", "ADX", "DI", "VWAP"]

    def test_subjects_are_distinct_after_normalization(self, registry):
        for indicator_id in registry.list_indicators():
            subjects = registry.get_valid_subjects(indicator_id)
            keys = [(s.kind, getattr(s, "component", None), getattr(s, "id", None)) for s in subjects]
            assert len(keys) == len(set(keys))


class TestUnknownIndicator:
    """Unknown ids resolve to not-found without raising."""

    def test_get_semantics_unknown_returns_none(self, registry):
        assert registry.get_semantics("UNKNOWN") is None

    def test_get_valid_subjects_unknown_is_empty(self, registry):
        assert registry.get_valid_subjects("UNKNOWN") == []

    def test_targets_and_operators_unknown_are_empty(self, registry):
        subject = IndicatorSubject("line")
        assert registry.get_valid_targets("UNKNOWN", subject) == []
        assert registry.get_valid_operators("UNKNOWN", subject, ZeroTarget()) == ()

    def test_lookup_is_case_sensitive(self, registry):
        assert registry.get_semantics("rsi") is None

    def test_non_string_id_returns_none(self, registry):
        assert registry.get_semantics(None) is None

    def test_known_indicator_is_distinguishable_from_unknown(self, registry):
        semantics = registry.get_semantics("RSI")
        assert semantics is not None
        assert semantics.id == "RSI"
        assert semantics.pairings


class TestDenyByDefault:
    """Subjects/targets outside the schema give nothing."""

    def test_ema_has_no_macd_subject(self, registry):
        assert registry.get_valid_targets("EMA", IndicatorSubject("macd")) == []

    def test_ema_has_no_derived_subject(self, registry):
        assert registry.get_valid_targets("EMA", DerivedSubject("%B", "%B")) == []

    def test_illegal_target_has_no_operators(self, registry):
        ops = registry.get_valid_operators("EMA", PriceSubject(), ComponentTarget("upper"))
        assert ops == ()

    def test_wrong_target_kind_has_no_operators(self, registry):
        ops = registry.get_valid_operators("ADX", IndicatorSubject("adx"), ZeroTarget())
        assert ops == ()


class TestUnionNotFirstMatch:
    """MACD's repeated subject collects targets from every pairing."""

    def test_macd_subject_reaches_signal_and_zero(self, registry):
        targets = [r.target for r in registry.get_valid_targets("MACD", IndicatorSubject("macd"))]
        assert ComponentTarget("signal") in targets
        assert ZeroTarget() in targets

    def test_macd_subject_keeps_component_zero_target(self, registry):
        targets = [r.target for r in registry.get_valid_targets("MACD", IndicatorSubject("macd"))]
        assert targets == [ComponentTarget("signal"), ComponentTarget("zero"), ZeroTarget()]

    def test_histogram_reaches_both_zero_forms(self, registry):
        targets = [r.target for r in registry.get_valid_targets("MACD", IndicatorSubject("histogram"))]
        assert targets == [ComponentTarget("zero"), ZeroTarget()]

    def test_macd_subjects_listed_once_in_declaration_order(self, registry):
        assert registry.get_valid_subjects("MACD") == [
            IndicatorSubject("macd"),
            IndicatorSubject("histogram"),
        ]

    def test_macd_vs_zero_operators(self, registry):
        ops = registry.get_valid_operators("MACD", IndicatorSubject("macd"), ZeroTarget())
        assert ops == (
            Operator.CROSSES_ABOVE, Operator.CROSSES_BELOW,
            Operator.GT, Operator.LT, Operator.GE, Operator.LE,
        )

    def test_rsi_line_merges_value_and_ema_targets(self, registry):
        targets = [r.target.kind for r in registry.get_valid_targets("RSI", IndicatorSubject("line"))]
        assert targets == ["value", "component"]


class TestSourceInsensitivity:
    """Price source selects a default, never legality."""

    def test_ema_open_and_close_targets_identical(self, registry):
        open_targets = registry.get_valid_targets("EMA", PriceSubject(PriceSource.OPEN))
        close_targets = registry.get_valid_targets("EMA", PriceSubject(PriceSource.CLOSE))
        assert open_targets == close_targets
        assert open_targets

    @pytest.mark.parametrize("source", list(PriceSource) + [None])
    def test_bbands_bands_reachable_from_any_source(self, registry, source):
        targets = registry.get_valid_targets("BBANDS", PriceSubject(source))
        assert [r.target for r in targets] == [
            ComponentTarget("upper"), ComponentTarget("middle"), ComponentTarget("lower"),
        ]


class TestOperatorScoping:
    """Operator sets per (subject, target) are exact."""

    def test_rsi_line_vs_value_allows_everything(self, registry):
        ops = registry.get_valid_operators(
            "RSI", IndicatorSubject("line"), ValueTarget(min=0, max=100)
        )
        assert set(ops) == ALL_OPERATORS

    def test_value_bounds_do_not_affect_matching(self, registry):
        a = registry.get_valid_operators("RSI", IndicatorSubject("line"), ValueTarget())
        b = registry.get_valid_operators("RSI", IndicatorSubject("line"), ValueTarget(min=5, max=6))
        assert a == b

    def test_ema_price_vs_line_excludes_equality(self, registry):
        ops = registry.get_valid_operators("EMA", PriceSubject(), ComponentTarget("line"))
        assert set(ops) == {
            Operator.CROSSES_ABOVE, Operator.CROSSES_BELOW,
            Operator.GT, Operator.LT, Operator.GE, Operator.LE,
        }
        assert Operator.EQ not in ops
        assert Operator.NE not in ops

    def test_rsi_ema_vs_value_has_no_crossing(self, registry):
        ops = registry.get_valid_operators("RSI", IndicatorSubject("ema"), ValueTarget())
        assert Operator.CROSSES_ABOVE not in ops
        assert set(ops) == ALL_OPERATORS - {Operator.CROSSES_ABOVE, Operator.CROSSES_BELOW}

    def test_bbands_percent_b_matches_on_id_not_label(self, registry):
        ops = registry.get_valid_operators("BBANDS", DerivedSubject("%B", "Percent B"), ValueTarget())
        assert ops == (
            Operator.CROSSES_ABOVE, Operator.CROSSES_BELOW,
            Operator.GT, Operator.LT, Operator.EQ, Operator.NE,
        )

    def test_di_plus_vs_minus(self, registry):
        ops = registry.get_valid_operators("DI", IndicatorSubject("+di"), ComponentTarget("-di"))
        assert Operator.CROSSES_ABOVE in ops
        assert registry.get_valid_operators("DI", IndicatorSubject("-di"), ComponentTarget("+di")) == ()


class TestDefaults:
    """Rule-builder starting selection."""

    def test_ema_default_is_close_crosses_above_line(self, registry):
        default = registry.get_default_condition("EMA")
        assert default.subject == PriceSubject()
        assert default.target == ComponentTarget("line")
        assert default.operator == Operator.CROSSES_ABOVE
        assert default.price_source == PriceSource.CLOSE

    def test_rsi_default_has_no_price_source(self, registry):
        default = registry.get_default_condition("RSI")
        assert default.subject == IndicatorSubject("line")
        assert default.operator == Operator.GT
        assert default.price_source is None

    def test_unknown_default_is_none(self, registry):
        assert registry.get_default_condition("UNKNOWN") is None

    def test_hint_for_price_subject(self, registry):
        assert registry.get_hint("VWAP", PriceSubject(PriceSource.HLC3)) == "Intraday price vs VWAP"
        assert registry.get_hint("RSI", IndicatorSubject("line")) == ""


class TestModuleFunctions:
    """Module-level API delegates to the shared registry or an injected one."""

    def test_shared_registry_is_cached(self):
        assert get_registry() is get_registry()

    def test_module_functions_use_builtin_registry(self):
        assert get_semantics("UNKNOWN") is None
        assert get_valid_subjects("UNKNOWN") == []
        assert get_valid_subjects("EMA") == [PriceSubject()]

    def test_injected_registry(self, synthetic_registry):
        assert get_semantics("RSI", registry=synthetic_registry) is None
        subjects = get_valid_subjects("OSC", registry=synthetic_registry)
        assert subjects == [IndicatorSubject("k")]
        targets = get_valid_targets("OSC", IndicatorSubject("k"), registry=synthetic_registry)
        assert [r.target.kind for r in targets] == ["component", "value", "zero"]
        ops = get_valid_operators(
            "OSC", IndicatorSubject("k"), ZeroTarget(), registry=synthetic_registry
        )
        assert ops == (Operator.GT,)
