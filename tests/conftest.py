"""
Pytest configuration for semantics tests.
"""

import pytest

from trade_semantics.rules.types import Operator
from trade_semantics.semantics.catalog import BUILTIN_SEMANTICS
from trade_semantics.semantics.registry import SemanticsRegistry
from trade_semantics.semantics.schema import IndicatorSemantics, pairing, rule
from trade_semantics.semantics.variants import (
    ComponentTarget,
    IndicatorSubject,
    PriceSubject,
    ValueTarget,
    ZeroTarget,
)
from trade_semantics.utils.logger import setup_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Console-only logger at WARNING so rejections don't flood test output."""
    setup_logger(log_dir=None, log_level="WARNING")
    yield


@pytest.fixture
def registry() -> SemanticsRegistry:
    """Fresh registry built from the built-in catalog."""
    return SemanticsRegistry(BUILTIN_SEMANTICS)


@pytest.fixture
def synthetic_registry() -> SemanticsRegistry:
    """Small two-indicator registry for isolated lookups."""
    return SemanticsRegistry([
        IndicatorSemantics(
            id="OSC",
            label="Oscillator",
            pairings=(
                pairing(
                    IndicatorSubject("k"),
                    rule(ComponentTarget("d"), Operator.CROSSES_ABOVE, Operator.CROSSES_BELOW),
                    rule(ValueTarget(min=0, max=100), Operator.GT, Operator.LT),
                ),
                pairing(IndicatorSubject("k"), rule(ZeroTarget(), Operator.GT)),
            ),
        ),
        IndicatorSemantics(
            id="MA",
            label="Moving Average",
            pairings=(
                pairing(PriceSubject(), rule(ComponentTarget("line"), Operator.CROSSES_ABOVE)),
            ),
        ),
    ])
