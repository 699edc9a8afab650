"""
Candidate condition validation.

A Condition is the tuple a bot's entry/exit rules persist:
(indicator, subject, target, operator, optional threshold value).
validate_condition() checks it against the registry step by step, in the
same order the rule-builder asks its questions, and reports the first
failing step with a ReasonCode and the legal alternatives.

Conditions can be loaded from YAML:

    conditions:
      - indicator: MACD
        subject: {kind: indicator-component, component: macd}
        operator: crosses-above
        target: {kind: component, component: signal}
      - indicator: RSI
        subject: {kind: indicator-component, component: line}
        operator: "<"
        target: {kind: value}
        value: 30
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import yaml

from ..rules.registry import OPERATOR_REGISTRY, resolve_operator
from ..rules.types import Operator, ReasonCode, ValidationResult
from .formatters import describe_condition, get_subject_label, get_target_label
from .registry import SemanticsRegistry, get_registry
from .variants import Subject, Target, ValueTarget, subject_from_dict, target_from_dict


@dataclass(frozen=True)
class Condition:
    """A candidate comparison expression."""
    indicator: str
    subject: Subject
    target: Target
    operator: Union[Operator, str]
    value: Optional[float] = None

    def describe(self) -> str:
        return describe_condition(
            self.indicator, self.subject, self.operator, self.target, self.value
        )

    def to_dict(self) -> dict:
        d = {
            "indicator": self.indicator,
            "subject": self.subject.to_dict(),
            "operator": str(self.operator),
            "target": self.target.to_dict(),
        }
        if self.value is not None:
            d["value"] = self.value
        return d


# =============================================================================
# Validation
# =============================================================================

def _reject(
    condition: Condition, reason: ReasonCode, message: str, suggestions: Sequence[str] = ()
) -> ValidationResult:
    from ..utils.logger import get_logger

    get_logger().rejection(
        str(condition.indicator),
        reason.name,
        subject=condition.subject.to_dict(),
        target=condition.target.to_dict(),
        operator=condition.operator,
    )
    return ValidationResult.failure(
        reason, message, indicator=condition.indicator, suggestions=list(suggestions)
    )


def validate_condition(
    condition: Condition, registry: Optional[SemanticsRegistry] = None
) -> ValidationResult:
    """
    Validate a candidate condition against the semantics registry.

    Checks, in order: indicator, operator spelling, subject, target,
    operator legality, threshold presence and bounds.

    Args:
        condition: Candidate condition
        registry: Registry to check against (default: built-in registry)

    Returns:
        ValidationResult (never raises for illegal conditions)
    """
    registry = registry or get_registry()
    indicator_id = condition.indicator

    if not registry.is_supported(indicator_id):
        return _reject(
            condition, ReasonCode.UNKNOWN_INDICATOR,
            f"Unknown indicator '{indicator_id}'",
            registry.list_indicators(),
        )

    operator = resolve_operator(condition.operator)
    if operator is None:
        return _reject(
            condition, ReasonCode.UNKNOWN_OPERATOR,
            f"Unknown operator '{condition.operator}'",
            [op.value for op in OPERATOR_REGISTRY],
        )

    targets = registry.get_valid_targets(indicator_id, condition.subject)
    if not targets:
        return _reject(
            condition, ReasonCode.INVALID_SUBJECT,
            f"{indicator_id} does not offer subject {get_subject_label(condition.subject)}",
            [get_subject_label(s) for s in registry.get_valid_subjects(indicator_id)],
        )

    target_rule = registry.get_target_rule(indicator_id, condition.subject, condition.target)
    if target_rule is None:
        return _reject(
            condition, ReasonCode.INVALID_TARGET,
            f"{indicator_id} {get_subject_label(condition.subject)} cannot be compared "
            f"with {get_target_label(condition.target)}",
            [get_target_label(r.target) for r in targets],
        )

    if not target_rule.allows(operator):
        return _reject(
            condition, ReasonCode.INVALID_OPERATOR,
            f"Operator '{operator.value}' is not allowed between "
            f"{get_subject_label(condition.subject)} and {get_target_label(condition.target)}",
            [op.value for op in target_rule.operators],
        )

    declared = target_rule.target
    if isinstance(declared, ValueTarget):
        value = condition.value
        if not isinstance(value, (int, float)) or isinstance(value, bool) or (
            isinstance(value, float) and math.isnan(value)
        ):
            return _reject(
                condition, ReasonCode.MISSING_VALUE,
                f"{indicator_id} value comparison requires a numeric value",
            )
        if not declared.contains(value):
            return _reject(
                condition, ReasonCode.VALUE_OUT_OF_RANGE,
                f"Value {value:g} outside [{declared.min}, {declared.max}] for {indicator_id}",
            )

    return ValidationResult.success(indicator_id, message=condition.describe())


def validate_conditions(
    conditions: Sequence[Condition],
    registry: Optional[SemanticsRegistry] = None,
    max_conditions: Optional[int] = None,
) -> List[ValidationResult]:
    """
    Validate a rule set.

    Returns one result per condition; when max_conditions is set and
    exceeded, a TOO_MANY_CONDITIONS failure is appended.
    """
    registry = registry or get_registry()
    results = [validate_condition(c, registry) for c in conditions]
    if max_conditions is not None and len(conditions) > max_conditions:
        results.append(ValidationResult.failure(
            ReasonCode.TOO_MANY_CONDITIONS,
            f"Too many conditions: {len(conditions)}/{max_conditions}",
        ))
    return results


# =============================================================================
# Parsing
# =============================================================================

def condition_from_dict(raw: Any, location: str = "condition") -> Condition:
    """
    Parse a condition mapping.

    Raises:
        ValueError: If required fields are missing or malformed
    """
    if not isinstance(raw, dict):
        raise ValueError(f"{location}: expected a mapping, got {type(raw).__name__}")

    for key in ("indicator", "subject", "target", "operator"):
        if key not in raw:
            raise ValueError(f"{location}: missing required field '{key}'")

    indicator = raw["indicator"]
    if not isinstance(indicator, str) or not indicator:
        raise ValueError(f"{location}: 'indicator' must be a non-empty string")

    value = raw.get("value")
    if value is not None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{location}: 'value' must be a number, got {value!r}")
        value = float(value)

    try:
        subject = subject_from_dict(raw["subject"])
        target = target_from_dict(raw["target"])
    except ValueError as e:
        raise ValueError(f"{location}: {e}") from None

    # Unknown operator spellings are kept so validation can report them
    operator = resolve_operator(raw["operator"]) or str(raw["operator"])

    return Condition(
        indicator=indicator,
        subject=subject,
        target=target,
        operator=operator,
        value=value,
    )


def load_conditions(path: Union[str, Path]) -> List[Condition]:
    """
    Load conditions from a YAML file with a top-level 'conditions' list.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML or any condition is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Condition file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from None

    if not raw:
        raise ValueError(f"Empty or invalid YAML in {path}")
    if not isinstance(raw, dict) or not isinstance(raw.get("conditions"), list):
        raise ValueError(f"{path}: expected a top-level 'conditions' list")

    return [
        condition_from_dict(item, location=f"{path.name}: conditions[{i}]")
        for i, item in enumerate(raw["conditions"])
    ]
