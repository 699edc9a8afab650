"""
Built-in indicator semantics.

This is the CANONICAL table of which comparisons the rule-builder may offer.
Declarations are raw: MACD repeats its "macd" and "histogram" subjects, and
SemanticsRegistry merges them into one pairing per subject at build time.
"""

from typing import Tuple

from ..rules.types import Operator, PriceSource
from .schema import IndicatorSemantics, PairingHint, pairing, rule
from .variants import (
    ComponentTarget,
    DerivedSubject,
    IndicatorSubject,
    PriceSubject,
    ValueTarget,
    ZeroTarget,
)

GT, LT, GE, LE, EQ, NE = (
    Operator.GT, Operator.LT, Operator.GE, Operator.LE, Operator.EQ, Operator.NE,
)
XA, XB = Operator.CROSSES_ABOVE, Operator.CROSSES_BELOW

# Operator groups reused across indicators
ALL_OPS = (GT, LT, GE, LE, EQ, NE, XA, XB)
COMPARE_OPS = (GT, LT, GE, LE, EQ, NE)
CROSS_AND_ORDER_OPS = (XA, XB, GT, LT, GE, LE)
CROSS_AND_STRICT_OPS = (XA, XB, GT, LT)

OSCILLATOR_RANGE = ValueTarget(min=0, max=100, step=0.1)
PERCENT_B_RANGE = ValueTarget(min=0, max=1, step=0.01)

BUILTIN_INDICATOR_IDS: Tuple[str, ...] = ("RSI", "EMA", "BBANDS", "MACD", "ADX", "DI", "VWAP")


BUILTIN_SEMANTICS: Tuple[IndicatorSemantics, ...] = (
    # -------------------------------------------------------------------------
    # RSI: line vs 0-100, line vs its EMA, EMA vs 0-100
    # -------------------------------------------------------------------------
    IndicatorSemantics(
        id="RSI",
        label="RSI",
        pairings=(
            pairing(IndicatorSubject("line"), rule(OSCILLATOR_RANGE, *ALL_OPS)),
            pairing(IndicatorSubject("line"), rule(ComponentTarget("ema"), GT, LT, GE, LE, XA, XB)),
            pairing(IndicatorSubject("ema"), rule(OSCILLATOR_RANGE, *COMPARE_OPS)),
        ),
    ),
    # -------------------------------------------------------------------------
    # EMA: price vs EMA only
    # -------------------------------------------------------------------------
    IndicatorSemantics(
        id="EMA",
        label="EMA",
        pairings=(
            pairing(
                PriceSubject(),
                rule(ComponentTarget("line"), *CROSS_AND_ORDER_OPS),
                ui=PairingHint(PriceSource.CLOSE, "Typical: Close crosses above EMA(50)"),
            ),
        ),
    ),
    # -------------------------------------------------------------------------
    # BBANDS: price vs bands, or %B vs value
    # -------------------------------------------------------------------------
    IndicatorSemantics(
        id="BBANDS",
        label="Bollinger Bands",
        pairings=(
            pairing(
                PriceSubject(),
                rule(ComponentTarget("upper"), *CROSS_AND_STRICT_OPS),
                rule(ComponentTarget("middle"), *CROSS_AND_STRICT_OPS),
                rule(ComponentTarget("lower"), *CROSS_AND_STRICT_OPS),
                ui=PairingHint(PriceSource.CLOSE, "Price vs Upper/Middle/Lower band"),
            ),
            pairing(
                DerivedSubject("%B", "%B"),
                rule(PERCENT_B_RANGE, XA, XB, GT, LT, EQ, NE),
            ),
        ),
    ),
    # -------------------------------------------------------------------------
    # MACD: MACD vs signal/zero, histogram vs zero
    # -------------------------------------------------------------------------
    IndicatorSemantics(
        id="MACD",
        label="MACD",
        pairings=(
            pairing(
                IndicatorSubject("macd"),
                rule(ComponentTarget("signal"), *CROSS_AND_ORDER_OPS),
                rule(ComponentTarget("zero"), *CROSS_AND_ORDER_OPS),
            ),
            pairing(IndicatorSubject("histogram"), rule(ComponentTarget("zero"), *CROSS_AND_ORDER_OPS)),
            pairing(IndicatorSubject("macd"), rule(ComponentTarget("signal"), *CROSS_AND_ORDER_OPS)),
            pairing(IndicatorSubject("macd"), rule(ZeroTarget(), *CROSS_AND_ORDER_OPS)),
            pairing(IndicatorSubject("histogram"), rule(ZeroTarget(), *CROSS_AND_ORDER_OPS)),
        ),
    ),
    # -------------------------------------------------------------------------
    # ADX: trend strength vs 0-100
    # -------------------------------------------------------------------------
    IndicatorSemantics(
        id="ADX",
        label="ADX",
        pairings=(
            pairing(IndicatorSubject("adx"), rule(OSCILLATOR_RANGE, *COMPARE_OPS)),
        ),
    ),
    # -------------------------------------------------------------------------
    # DI: +DI vs -DI
    # -------------------------------------------------------------------------
    IndicatorSemantics(
        id="DI",
        label="Directional Index",
        pairings=(
            pairing(IndicatorSubject("+di"), rule(ComponentTarget("-di"), *CROSS_AND_ORDER_OPS)),
        ),
    ),
    # -------------------------------------------------------------------------
    # VWAP: price vs VWAP
    # -------------------------------------------------------------------------
    IndicatorSemantics(
        id="VWAP",
        label="VWAP",
        pairings=(
            pairing(
                PriceSubject(),
                rule(ComponentTarget("line"), *CROSS_AND_ORDER_OPS),
                ui=PairingHint(PriceSource.CLOSE, "Intraday price vs VWAP"),
            ),
        ),
    ),
)
