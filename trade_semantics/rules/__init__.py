"""
Operator and validation-outcome types for indicator conditions.

Design principles:
- One canonical Operator per comparison, aliases resolved at parse time
- ReasonCode for every validation outcome
- Absence of data is a deny, never an allow
"""

from .types import (
    Operator,
    PriceSource,
    ReasonCode,
    ValidationResult,
)
from .registry import (
    OperatorSpec,
    OPERATOR_REGISTRY,
    OPERATOR_ALIASES,
    CROSSING_OPERATORS,
    EQUALITY_OPERATORS,
    get_operator_spec,
    is_crossing_operator,
    resolve_operator,
)

__all__ = [
    # Types
    "Operator",
    "PriceSource",
    "ReasonCode",
    "ValidationResult",
    # Registry
    "OperatorSpec",
    "OPERATOR_REGISTRY",
    "OPERATOR_ALIASES",
    "CROSSING_OPERATORS",
    "EQUALITY_OPERATORS",
    "get_operator_spec",
    "is_crossing_operator",
    "resolve_operator",
]
