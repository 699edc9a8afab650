"""
Tests for display labels and condition sentences.
"""

import pytest

from trade_semantics.rules.types import Operator, PriceSource
from trade_semantics.semantics.formatters import (
    describe_condition,
    get_operator_label,
    get_operator_symbol,
    get_subject_label,
    get_target_label,
)
from trade_semantics.semantics.variants import (
    ComponentTarget,
    DerivedSubject,
    IndicatorSubject,
    PriceSubject,
    ValueTarget,
    ZeroTarget,
)


class TestLabels:

    @pytest.mark.parametrize("subject,expected", [
        (PriceSubject(), "CLOSE"),
        (PriceSubject(PriceSource.HLC3), "HLC3"),
        (IndicatorSubject("histogram"), "HISTOGRAM"),
        (DerivedSubject("%B", "Percent B"), "Percent B"),
        (DerivedSubject("bw"), "bw"),
    ])
    def test_subject_labels(self, subject, expected):
        assert get_subject_label(subject) == expected

    @pytest.mark.parametrize("target,expected", [
        (ComponentTarget("signal"), "SIGNAL"),
        (ComponentTarget("zero"), "Zero line"),
        (ValueTarget(0, 100), "Value"),
        (ZeroTarget(), "0"),
    ])
    def test_target_labels(self, target, expected):
        assert get_target_label(target) == expected

    def test_operator_label_and_symbol(self):
        assert get_operator_label(Operator.GE) == "is greater than or equal to"
        assert get_operator_symbol("crossesBelow") == "↘"

    def test_unknown_operator_falls_back_to_text(self):
        assert get_operator_label("approx") == "approx"
        assert get_operator_symbol("approx") == "approx"


class TestDescribeCondition:

    def test_price_subject(self):
        sentence = describe_condition(
            "EMA", PriceSubject(PriceSource.CLOSE), Operator.CROSSES_ABOVE, ComponentTarget("line")
        )
        assert sentence == "CLOSE price crosses above EMA LINE"

    def test_value_target_with_threshold(self):
        sentence = describe_condition(
            "RSI", IndicatorSubject("line"), Operator.LT, ValueTarget(0, 100), 30.0
        )
        assert sentence == "RSI LINE is less than 30"

    def test_value_target_without_threshold(self):
        sentence = describe_condition("ADX", IndicatorSubject("adx"), ">", ValueTarget())
        assert sentence == "ADX ADX is greater than value"

    def test_fractional_threshold(self):
        sentence = describe_condition(
            "BBANDS", DerivedSubject("%B", "%B"), Operator.GT, ValueTarget(0, 1), 0.85
        )
        assert sentence == "BBANDS %B is greater than 0.85"

    @pytest.mark.parametrize("target", [ZeroTarget(), ComponentTarget("zero")])
    def test_both_zero_forms_read_the_same(self, target):
        sentence = describe_condition(
            "MACD", IndicatorSubject("histogram"), Operator.CROSSES_BELOW, target
        )
        assert sentence == "MACD HISTOGRAM crosses below zero line"
