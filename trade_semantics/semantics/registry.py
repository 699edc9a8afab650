"""
Semantics Registry: Single source of truth for legal indicator conditions.

The registry answers the rule-builder's questions in order:

    registry = get_registry()

    registry.get_valid_subjects("MACD")
    # [IndicatorSubject("macd"), IndicatorSubject("histogram")]

    registry.get_valid_targets("MACD", IndicatorSubject("macd"))
    # [TargetRule(ComponentTarget("signal"), ...), TargetRule(ComponentTarget("zero"), ...),
    #  TargetRule(ZeroTarget(), ...)]

    registry.get_valid_operators("MACD", IndicatorSubject("macd"), ZeroTarget())
    # (crosses-above, crosses-below, >, <, >=, <=)

Key Design Decisions:
1. All lookups are total. Unknown ids, subjects and targets give None or an
   empty result; an empty result means "not legal here", never "anything goes".

2. Definitions are validated and normalized at construction (see
   schema.normalize_pairings), so a broken table fails at startup rather than
   at lookup time.

3. The registry is immutable after construction and safe to share.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from ..config.config import get_config
from ..rules.types import Operator, PriceSource
from .catalog import BUILTIN_SEMANTICS
from .matching import subjects_match, targets_match
from .schema import (
    DuplicateSubjectPolicy,
    IndicatorSemantics,
    SchemaError,
    TargetRule,
    normalize_pairings,
)
from .variants import PriceSubject, Subject, Target


@dataclass(frozen=True)
class DefaultCondition:
    """Natural first choice for an indicator in the rule-builder."""
    subject: Subject
    target: Target
    operator: Operator
    price_source: Optional[PriceSource] = None


class SemanticsRegistry:
    """
    Registry of indicator expression semantics.

    Built once from IndicatorSemantics definitions; read-only afterwards.
    Pass an instance explicitly in tests to use synthetic schemas.
    """

    def __init__(
        self,
        definitions: Iterable[IndicatorSemantics],
        duplicate_subjects: str = DuplicateSubjectPolicy.MERGE,
    ):
        index = {}
        for definition in definitions:
            if definition.id in index:
                raise SchemaError(f"Indicator '{definition.id}' is defined more than once")
            index[definition.id] = IndicatorSemantics(
                id=definition.id,
                label=definition.label,
                pairings=normalize_pairings(
                    definition.id, definition.pairings, duplicate_subjects
                ),
            )
        self._semantics: Mapping[str, IndicatorSemantics] = MappingProxyType(index)

    # =========================================================================
    # Public API
    # =========================================================================

    def list_indicators(self) -> List[str]:
        """Get indicator ids in declaration order."""
        return list(self._semantics.keys())

    def is_supported(self, indicator_id: str) -> bool:
        """Check if an indicator id is known."""
        return indicator_id in self._semantics

    def get_semantics(self, indicator_id: str) -> Optional[IndicatorSemantics]:
        """
        Get the schema entry for an indicator.

        Returns:
            IndicatorSemantics, or None for an unknown id
        """
        if not isinstance(indicator_id, str):
            return None
        return self._semantics.get(indicator_id)

    def get_valid_subjects(self, indicator_id: str) -> List[Subject]:
        """
        Get the subjects an indicator offers, in declaration order.

        The first subject is the natural default. Unknown ids give [].
        """
        semantics = self.get_semantics(indicator_id)
        if semantics is None:
            return []
        return [p.subject for p in semantics.pairings]

    def get_valid_targets(self, indicator_id: str, subject: Subject) -> List[TargetRule]:
        """
        Get the targets reachable from a subject.

        Collects target rules from every pairing whose subject matches, so
        the result does not depend on which duplicate happens to come first.

        Returns:
            Target rules in declaration order, [] when nothing matches
        """
        semantics = self.get_semantics(indicator_id)
        if semantics is None:
            return []

        rules: List[TargetRule] = []
        for p in semantics.pairings:
            if subjects_match(p.subject, subject):
                rules.extend(p.targets)
        return rules

    def get_target_rule(
        self, indicator_id: str, subject: Subject, target: Target
    ) -> Optional[TargetRule]:
        """Get the rule for a (subject, target) pair, or None if illegal."""
        for target_rule in self.get_valid_targets(indicator_id, subject):
            if targets_match(target_rule.target, target):
                return target_rule
        return None

    def get_valid_operators(
        self, indicator_id: str, subject: Subject, target: Target
    ) -> Tuple[Operator, ...]:
        """
        Get the operators legal between a subject and a target.

        Returns:
            Operators in declaration order; () means the pair is illegal
        """
        target_rule = self.get_target_rule(indicator_id, subject, target)
        return target_rule.operators if target_rule is not None else ()

    def get_default_condition(self, indicator_id: str) -> Optional[DefaultCondition]:
        """
        Get the rule-builder's starting selection for an indicator.

        First pairing's subject, its first target, and that target's first
        operator. Price subjects also get a price source: the pairing's
        hint, otherwise the configured default.
        """
        semantics = self.get_semantics(indicator_id)
        if semantics is None:
            return None

        first = semantics.pairings[0]
        first_rule = first.targets[0]
        price_source = None
        if isinstance(first.subject, PriceSubject):
            price_source = (
                first.subject.source
                or (first.ui.default_price_source if first.ui else None)
                or get_config().semantics.default_price_source
            )
        return DefaultCondition(
            subject=first.subject,
            target=first_rule.target,
            operator=first_rule.operators[0],
            price_source=price_source,
        )

    def get_hint(self, indicator_id: str, subject: Subject) -> str:
        """Get the rule-builder hint for a subject, or ""."""
        semantics = self.get_semantics(indicator_id)
        if semantics is None:
            return ""
        for p in semantics.pairings:
            if subjects_match(p.subject, subject) and p.ui is not None:
                return p.ui.hint
        return ""


# =============================================================================
# Module-Level Convenience Functions
# =============================================================================

@lru_cache(maxsize=1)
def get_registry() -> SemanticsRegistry:
    """Get the process-wide registry built from the built-in catalog."""
    from ..utils.logger import get_logger

    # Built-in declarations repeat subjects (RSI, MACD), so they always merge
    registry = SemanticsRegistry(BUILTIN_SEMANTICS, duplicate_subjects=DuplicateSubjectPolicy.MERGE)
    get_logger().debug(
        f"Semantics registry built: {len(registry.list_indicators())} indicators"
    )
    return registry


def get_semantics(
    indicator_id: str, registry: Optional[SemanticsRegistry] = None
) -> Optional[IndicatorSemantics]:
    """Get the schema entry for an indicator, or None if unknown."""
    return (registry or get_registry()).get_semantics(indicator_id)


def get_valid_subjects(
    indicator_id: str, registry: Optional[SemanticsRegistry] = None
) -> List[Subject]:
    """Get an indicator's subjects in declaration order ([] if unknown)."""
    return (registry or get_registry()).get_valid_subjects(indicator_id)


def get_valid_targets(
    indicator_id: str, subject: Subject, registry: Optional[SemanticsRegistry] = None
) -> List[TargetRule]:
    """Get the target rules reachable from a subject ([] if none)."""
    return (registry or get_registry()).get_valid_targets(indicator_id, subject)


def get_valid_operators(
    indicator_id: str,
    subject: Subject,
    target: Target,
    registry: Optional[SemanticsRegistry] = None,
) -> Tuple[Operator, ...]:
    """Get the operators legal for (subject, target) (() if illegal)."""
    return (registry or get_registry()).get_valid_operators(indicator_id, subject, target)


def get_default_condition(
    indicator_id: str, registry: Optional[SemanticsRegistry] = None
) -> Optional[DefaultCondition]:
    """Get the rule-builder's starting selection, or None if unknown."""
    return (registry or get_registry()).get_default_condition(indicator_id)
