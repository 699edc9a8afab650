"""Display labels for subjects, targets, operators and whole conditions."""

from __future__ import annotations

from typing import Optional

from ..rules.registry import get_operator_spec
from ..rules.types import Operator
from .variants import (
    ComponentTarget,
    DerivedSubject,
    IndicatorSubject,
    PriceSubject,
    Subject,
    Target,
    ValueTarget,
    ZeroTarget,
)


def get_subject_label(subject: Subject) -> str:
    if isinstance(subject, PriceSubject):
        return subject.source.value.upper() if subject.source else "CLOSE"
    if isinstance(subject, IndicatorSubject):
        return subject.component.upper()
    if isinstance(subject, DerivedSubject):
        return subject.label or subject.id
    return "Unknown"


def get_target_label(target: Target) -> str:
    if isinstance(target, ComponentTarget):
        # Older MACD declarations model the zero line as a component
        return "Zero line" if target.component == "zero" else target.component.upper()
    if isinstance(target, ValueTarget):
        return "Value"
    if isinstance(target, ZeroTarget):
        return "0"
    return "Unknown"


def get_operator_label(operator: "str | Operator") -> str:
    spec = get_operator_spec(operator)
    return spec.label if spec else str(operator)


def get_operator_symbol(operator: "str | Operator") -> str:
    spec = get_operator_spec(operator)
    return spec.symbol if spec else str(operator)


def _format_number(value: float) -> str:
    return f"{value:g}"


def describe_condition(
    indicator_id: str,
    subject: Subject,
    operator: "str | Operator",
    target: Target,
    value: Optional[float] = None,
) -> str:
    """
    Render a condition as a sentence.

    Examples:
        "CLOSE price crosses above EMA LINE"
        "RSI LINE is less than 30"
        "MACD MACD crosses above zero line"
    """
    if isinstance(subject, PriceSubject):
        left = f"{get_subject_label(subject)} price"
    else:
        left = f"{indicator_id} {get_subject_label(subject)}"

    if isinstance(target, ValueTarget):
        right = _format_number(value) if value is not None else "value"
    elif isinstance(target, ZeroTarget) or (
        isinstance(target, ComponentTarget) and target.component == "zero"
    ):
        right = "zero line"
    else:
        right = f"{indicator_id} {get_target_label(target)}"

    return f"{left} {get_operator_label(operator)} {right}"
