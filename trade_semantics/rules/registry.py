"""
Operator Registry - Single source of truth for operator metadata.

Used by:
- Condition parsing (resolve aliases to canonical operators)
- Sentence rendering (labels and symbols)
- Rule-builder grouping (crossing vs. point-in-time comparisons)

Design:
- Each operator has exactly one spec, keyed by its canonical value
- Aliases map onto canonical operators, never onto other aliases
- Adding new operators requires updating this registry
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from .types import Operator


@dataclass(frozen=True)
class OperatorSpec:
    """
    Specification for a single operator.

    Attributes:
        operator: Canonical operator
        label: Sentence fragment (e.g., "crosses above")
        symbol: Compact display symbol (e.g., "↗")
        is_crossing: Whether previous sample is needed (crossover)
        is_equality: Whether the operator tests exact (in)equality
    """
    operator: Operator
    label: str
    symbol: str
    is_crossing: bool = False
    is_equality: bool = False


# =============================================================================
# OPERATOR REGISTRY - Single Source of Truth
# =============================================================================

OPERATOR_REGISTRY: Dict[Operator, OperatorSpec] = {
    Operator.GT: OperatorSpec(Operator.GT, "is greater than", ">"),
    Operator.LT: OperatorSpec(Operator.LT, "is less than", "<"),
    Operator.GE: OperatorSpec(Operator.GE, "is greater than or equal to", "≥"),
    Operator.LE: OperatorSpec(Operator.LE, "is less than or equal to", "≤"),
    Operator.EQ: OperatorSpec(Operator.EQ, "equals", "=", is_equality=True),
    Operator.NE: OperatorSpec(Operator.NE, "does not equal", "≠", is_equality=True),
    Operator.CROSSES_ABOVE: OperatorSpec(
        Operator.CROSSES_ABOVE, "crosses above", "↗", is_crossing=True,
    ),
    Operator.CROSSES_BELOW: OperatorSpec(
        Operator.CROSSES_BELOW, "crosses below", "↘", is_crossing=True,
    ),
}

# Alternate spellings seen in persisted drafts and DSL files
OPERATOR_ALIASES: Dict[str, Operator] = {
    "gt": Operator.GT,
    "lt": Operator.LT,
    "ge": Operator.GE,
    "gte": Operator.GE,
    "le": Operator.LE,
    "lte": Operator.LE,
    "eq": Operator.EQ,
    "==": Operator.EQ,
    "ne": Operator.NE,
    "<>": Operator.NE,
    "crossesabove": Operator.CROSSES_ABOVE,
    "crosses_above": Operator.CROSSES_ABOVE,
    "cross_above": Operator.CROSSES_ABOVE,
    "crossesbelow": Operator.CROSSES_BELOW,
    "crosses_below": Operator.CROSSES_BELOW,
    "cross_below": Operator.CROSSES_BELOW,
}

CROSSING_OPERATORS: FrozenSet[Operator] = frozenset(
    spec.operator for spec in OPERATOR_REGISTRY.values() if spec.is_crossing
)

EQUALITY_OPERATORS: FrozenSet[Operator] = frozenset(
    spec.operator for spec in OPERATOR_REGISTRY.values() if spec.is_equality
)


def resolve_operator(operator: "str | Operator") -> Optional[Operator]:
    """
    Resolve an operator string (canonical or alias) to an Operator.

    Args:
        operator: Operator value, alias (case-insensitive), or Operator

    Returns:
        Operator if known, None if unknown
    """
    if isinstance(operator, Operator):
        return operator
    if not isinstance(operator, str):
        return None

    raw = operator.strip()
    try:
        return Operator(raw)
    except ValueError:
        pass
    return OPERATOR_ALIASES.get(raw.lower())


def get_operator_spec(operator: "str | Operator") -> Optional[OperatorSpec]:
    """
    Get operator specification from registry.

    Returns:
        OperatorSpec if known, None if unknown
    """
    op = resolve_operator(operator)
    return OPERATOR_REGISTRY.get(op) if op is not None else None


def is_crossing_operator(operator: "str | Operator") -> bool:
    """Check if operator compares two consecutive samples."""
    spec = get_operator_spec(operator)
    return spec is not None and spec.is_crossing
