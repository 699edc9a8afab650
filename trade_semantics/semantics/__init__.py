"""
Indicator expression semantics.

Which subjects each indicator offers, which targets each subject reaches,
and which operators are legal between them.
"""

from .variants import (
    PriceSubject,
    IndicatorSubject,
    DerivedSubject,
    Subject,
    ComponentTarget,
    ValueTarget,
    ZeroTarget,
    Target,
    subject_from_dict,
    target_from_dict,
)
from .matching import (
    subjects_match,
    targets_match,
)
from .schema import (
    DuplicateSubjectPolicy,
    SchemaError,
    TargetRule,
    PairingHint,
    Pairing,
    IndicatorSemantics,
    normalize_pairings,
    pairing,
    rule,
)
from .catalog import (
    BUILTIN_INDICATOR_IDS,
    BUILTIN_SEMANTICS,
)
from .registry import (
    DefaultCondition,
    SemanticsRegistry,
    get_registry,
    get_semantics,
    get_valid_subjects,
    get_valid_targets,
    get_valid_operators,
    get_default_condition,
)
from .formatters import (
    get_subject_label,
    get_target_label,
    get_operator_label,
    get_operator_symbol,
    describe_condition,
)
from .conditions import (
    Condition,
    validate_condition,
    validate_conditions,
    condition_from_dict,
    load_conditions,
)

__all__ = [
    # Variants
    "PriceSubject",
    "IndicatorSubject",
    "DerivedSubject",
    "Subject",
    "ComponentTarget",
    "ValueTarget",
    "ZeroTarget",
    "Target",
    "subject_from_dict",
    "target_from_dict",
    # Matching
    "subjects_match",
    "targets_match",
    # Schema
    "DuplicateSubjectPolicy",
    "SchemaError",
    "TargetRule",
    "PairingHint",
    "Pairing",
    "IndicatorSemantics",
    "normalize_pairings",
    "pairing",
    "rule",
    # Catalog
    "BUILTIN_INDICATOR_IDS",
    "BUILTIN_SEMANTICS",
    # Registry
    "DefaultCondition",
    "SemanticsRegistry",
    "get_registry",
    "get_semantics",
    "get_valid_subjects",
    "get_valid_targets",
    "get_valid_operators",
    "get_default_condition",
    # Formatters
    "get_subject_label",
    "get_target_label",
    "get_operator_label",
    "get_operator_symbol",
    "describe_condition",
    # Conditions
    "Condition",
    "validate_condition",
    "validate_conditions",
    "condition_from_dict",
    "load_conditions",
]
