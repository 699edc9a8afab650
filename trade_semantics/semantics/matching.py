"""
Structural matching rules for subjects and targets.

Matching is deliberately NOT dataclass equality:

- price subjects match regardless of source (source is a display default)
- indicator-component subjects match on component name
- derived subjects match on id (label is display only)
- component targets match on component name
- value targets match on kind alone (bounds are input-control metadata)
- zero targets match on kind alone

Each rule is a named function so it can be tested on its own.
"""

from __future__ import annotations

from typing import Callable, Dict

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


# =============================================================================
# Subject rules
# =============================================================================

def _price_subjects_match(a: PriceSubject, b: PriceSubject) -> bool:
    return True


def _indicator_subjects_match(a: IndicatorSubject, b: IndicatorSubject) -> bool:
    return a.component == b.component


def _derived_subjects_match(a: DerivedSubject, b: DerivedSubject) -> bool:
    return a.id == b.id


_SUBJECT_RULES: Dict[str, Callable[[Subject, Subject], bool]] = {
    PriceSubject.kind: _price_subjects_match,
    IndicatorSubject.kind: _indicator_subjects_match,
    DerivedSubject.kind: _derived_subjects_match,
}


def subjects_match(a: Subject, b: Subject) -> bool:
    """Check whether two subjects address the same schema row."""
    kind = getattr(a, "kind", None)
    if kind is None or kind != getattr(b, "kind", None):
        return False
    rule = _SUBJECT_RULES.get(kind)
    return rule is not None and rule(a, b)


# =============================================================================
# Target rules
# =============================================================================

def _component_targets_match(a: ComponentTarget, b: ComponentTarget) -> bool:
    return a.component == b.component


def _value_targets_match(a: ValueTarget, b: ValueTarget) -> bool:
    return True


def _zero_targets_match(a: ZeroTarget, b: ZeroTarget) -> bool:
    return True


_TARGET_RULES: Dict[str, Callable[[Target, Target], bool]] = {
    ComponentTarget.kind: _component_targets_match,
    ValueTarget.kind: _value_targets_match,
    ZeroTarget.kind: _zero_targets_match,
}


def targets_match(a: Target, b: Target) -> bool:
    """Check whether two targets address the same schema entry."""
    kind = getattr(a, "kind", None)
    if kind is None or kind != getattr(b, "kind", None):
        return False
    rule = _TARGET_RULES.get(kind)
    return rule is not None and rule(a, b)


def subject_key(subject: Subject) -> tuple:
    """Hashable identity consistent with subjects_match."""
    if isinstance(subject, IndicatorSubject):
        return (subject.kind, subject.component)
    if isinstance(subject, DerivedSubject):
        return (subject.kind, subject.id)
    return (subject.kind,)


def target_key(target: Target) -> tuple:
    """Hashable identity consistent with targets_match."""
    if isinstance(target, ComponentTarget):
        return (target.kind, target.component)
    return (target.kind,)
