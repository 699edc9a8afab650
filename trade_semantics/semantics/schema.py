"""
Schema types for indicator expression semantics.

An IndicatorSemantics lists Pairings; a Pairing says "for this subject,
these targets are reachable, and for each target these operators are legal".

normalize_pairings() enforces the schema invariants once, at registry
construction:
- one pairing per distinct subject (duplicates merged or rejected)
- every target rule has a non-empty, duplicate-free operator set
- value target bounds are coherent
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple

from ..rules.types import Operator, PriceSource
from .matching import subject_key, target_key
from .variants import Subject, Target, ValueTarget


class SchemaError(ValueError):
    """Raised when schema data violates an invariant."""


# How normalize_pairings treats two pairings with structurally equal subjects
class DuplicateSubjectPolicy:
    MERGE = "merge"  # Concatenate targets, union operators (default)
    ERROR = "error"  # Refuse the schema

    ALL = (MERGE, ERROR)


@dataclass(frozen=True)
class TargetRule:
    """One reachable target and the operators legal against it."""
    target: Target
    operators: Tuple[Operator, ...]

    def allows(self, operator: Operator) -> bool:
        return operator in self.operators

    def to_dict(self) -> dict:
        return {
            "target": self.target.to_dict(),
            "operators": [op.value for op in self.operators],
        }


@dataclass(frozen=True)
class PairingHint:
    """Rule-builder metadata for a pairing."""
    default_price_source: Optional[PriceSource] = None
    hint: str = ""


@dataclass(frozen=True)
class Pairing:
    """A schema row: one subject and its target rules."""
    subject: Subject
    targets: Tuple[TargetRule, ...]
    ui: Optional[PairingHint] = None

    def to_dict(self) -> dict:
        d = {
            "subject": self.subject.to_dict(),
            "targets": [rule.to_dict() for rule in self.targets],
        }
        if self.ui is not None:
            ui = {}
            if self.ui.default_price_source is not None:
                ui["default_price_source"] = self.ui.default_price_source.value
            if self.ui.hint:
                ui["hint"] = self.ui.hint
            d["ui"] = ui
        return d


@dataclass(frozen=True)
class IndicatorSemantics:
    """Top-level schema entry for one indicator."""
    id: str
    label: str
    pairings: Tuple[Pairing, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "pairings": [p.to_dict() for p in self.pairings],
        }


# =============================================================================
# Declaration helpers
# =============================================================================

def rule(target: Target, *operators: Operator) -> TargetRule:
    """Shorthand for declaring a TargetRule."""
    return TargetRule(target=target, operators=tuple(operators))


def pairing(subject: Subject, *targets: TargetRule, ui: Optional[PairingHint] = None) -> Pairing:
    """Shorthand for declaring a Pairing."""
    return Pairing(subject=subject, targets=tuple(targets), ui=ui)


# =============================================================================
# Invariant checks and normalization
# =============================================================================

def _check_rule(indicator_id: str, subject: Subject, target_rule: TargetRule) -> None:
    where = f"{indicator_id}: {subject.to_dict()} -> {target_rule.target.to_dict()}"

    if not target_rule.operators:
        raise SchemaError(f"{where} declares no operators")
    for op in target_rule.operators:
        if not isinstance(op, Operator):
            raise SchemaError(f"{where} has non-Operator entry {op!r}")
    if len(set(target_rule.operators)) != len(target_rule.operators):
        raise SchemaError(f"{where} lists an operator more than once: "
                          f"{[op.value for op in target_rule.operators]}")

    target = target_rule.target
    if isinstance(target, ValueTarget):
        if target.min is not None and target.max is not None and target.min > target.max:
            raise SchemaError(f"{where} has min {target.min} > max {target.max}")
        if target.step is not None and target.step <= 0:
            raise SchemaError(f"{where} has non-positive step {target.step}")


def _merge_operators(first: Tuple[Operator, ...], second: Tuple[Operator, ...]) -> Tuple[Operator, ...]:
    merged: List[Operator] = list(first)
    merged.extend(op for op in second if op not in merged)
    return tuple(merged)


def _merge_targets(rules: Iterable[TargetRule]) -> Tuple[TargetRule, ...]:
    """Concatenate target rules, folding structurally equal targets together."""
    merged: List[TargetRule] = []
    index: dict = {}
    for target_rule in rules:
        key = target_key(target_rule.target)
        pos = index.get(key)
        if pos is None:
            index[key] = len(merged)
            merged.append(target_rule)
        else:
            earlier = merged[pos]
            merged[pos] = replace(
                earlier, operators=_merge_operators(earlier.operators, target_rule.operators)
            )
    return tuple(merged)


def normalize_pairings(
    indicator_id: str,
    pairings: Iterable[Pairing],
    duplicate_subjects: str = DuplicateSubjectPolicy.MERGE,
) -> Tuple[Pairing, ...]:
    """
    Validate pairings and collapse them to one pairing per distinct subject.

    Merge rule: a repeated subject merges into the first pairing with that
    subject (keeping its position and ui hint); target lists concatenate in
    declaration order; a repeated target unions its operators into the
    earlier entry in first-seen order.

    Args:
        indicator_id: Owning indicator (for error messages)
        pairings: Declared pairings
        duplicate_subjects: "merge" or "error"

    Returns:
        Normalized pairings

    Raises:
        SchemaError: If an invariant is violated
    """
    from ..utils.logger import get_logger

    if duplicate_subjects not in DuplicateSubjectPolicy.ALL:
        raise ValueError(
            f"duplicate_subjects must be one of {DuplicateSubjectPolicy.ALL}, "
            f"got {duplicate_subjects!r}"
        )

    grouped: List[Tuple[Pairing, List[TargetRule]]] = []
    index: dict = {}

    for p in pairings:
        if not p.targets:
            raise SchemaError(f"{indicator_id}: {p.subject.to_dict()} declares no targets")
        for target_rule in p.targets:
            _check_rule(indicator_id, p.subject, target_rule)

        key = subject_key(p.subject)
        pos = index.get(key)
        if pos is None:
            index[key] = len(grouped)
            grouped.append((p, list(p.targets)))
            continue

        if duplicate_subjects == DuplicateSubjectPolicy.ERROR:
            raise SchemaError(
                f"{indicator_id}: subject {p.subject.to_dict()} is declared by more than one pairing"
            )
        get_logger().debug(
            f"{indicator_id}: merging duplicate pairing for subject {p.subject.to_dict()}"
        )
        grouped[pos][1].extend(p.targets)

    if not grouped:
        raise SchemaError(f"{indicator_id}: schema declares no pairings")

    return tuple(
        replace(first, targets=_merge_targets(rules)) for first, rules in grouped
    )
