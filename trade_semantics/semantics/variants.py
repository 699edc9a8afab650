"""
Subject and target variants for indicator conditions.

A condition reads "<subject> <operator> <target>":

    PriceSubject(source=CLOSE)        crosses-above  ComponentTarget("line")
    IndicatorSubject("macd")          crosses-below  ZeroTarget()
    DerivedSubject("%B", "%B")        >              ValueTarget(0, 1, 0.01)

Each variant is a frozen dataclass with a ``kind`` tag. Dataclass equality is
NOT the matching rule; see matching.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from ..rules.types import PriceSource


# =============================================================================
# Subjects (left-hand side)
# =============================================================================

@dataclass(frozen=True)
class PriceSubject:
    """A price series. Source only affects display/defaults."""
    kind: ClassVar[str] = "price"
    source: Optional[PriceSource] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"kind": self.kind}
        if self.source is not None:
            d["source"] = self.source.value
        return d


@dataclass(frozen=True)
class IndicatorSubject:
    """A sub-component of the indicator (e.g., "line", "macd", "+di")."""
    kind: ClassVar[str] = "indicator-component"
    component: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "component": self.component}


@dataclass(frozen=True)
class DerivedSubject:
    """A metric derived from the indicator (e.g., Bollinger %B)."""
    kind: ClassVar[str] = "derived"
    id: str
    label: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "id": self.id, "label": self.label or self.id}


Subject = Union[PriceSubject, IndicatorSubject, DerivedSubject]


# =============================================================================
# Targets (right-hand side)
# =============================================================================

@dataclass(frozen=True)
class ComponentTarget:
    """Another component of the same indicator (e.g., "signal", "upper")."""
    kind: ClassVar[str] = "component"
    component: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "component": self.component}


@dataclass(frozen=True)
class ValueTarget:
    """A numeric threshold. Bounds configure the input control only."""
    kind: ClassVar[str] = "value"
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None

    def contains(self, value: float) -> bool:
        """Check value against the declared bounds (open when unset)."""
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"kind": self.kind}
        for name in ("min", "max", "step"):
            bound = getattr(self, name)
            if bound is not None:
                d[name] = bound
        return d


@dataclass(frozen=True)
class ZeroTarget:
    """The zero line."""
    kind: ClassVar[str] = "zero"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


Target = Union[ComponentTarget, ValueTarget, ZeroTarget]


# =============================================================================
# Parsing
# =============================================================================

# "indicator" is the spelling persisted by older drafts
_SUBJECT_KIND_ALIASES = {
    "indicator": IndicatorSubject.kind,
    "indicator_component": IndicatorSubject.kind,
}


def _require_str(raw: dict, key: str, what: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"{what} requires a non-empty '{key}' string, got {value!r}")
    return value


def _optional_float(raw: dict, key: str) -> Optional[float]:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"value target '{key}' must be a number, got {value!r}")
    return float(value)


def subject_from_dict(raw: Any) -> Subject:
    """
    Parse a subject mapping.

    Args:
        raw: e.g. {"kind": "price", "source": "open"}

    Returns:
        Subject variant

    Raises:
        ValueError: If the mapping is malformed
    """
    if not isinstance(raw, dict):
        raise ValueError(f"subject must be a mapping, got {type(raw).__name__}")
    kind = raw.get("kind")
    if isinstance(kind, str):
        kind = _SUBJECT_KIND_ALIASES.get(kind, kind)

    if kind == PriceSubject.kind:
        source = raw.get("source")
        if source is None:
            return PriceSubject()
        try:
            return PriceSubject(source=PriceSource(str(source).lower()))
        except ValueError:
            valid = [s.value for s in PriceSource]
            raise ValueError(f"Unknown price source '{source}'. Valid: {valid}") from None
    if kind == IndicatorSubject.kind:
        return IndicatorSubject(component=_require_str(raw, "component", "indicator subject"))
    if kind == DerivedSubject.kind:
        derived_id = _require_str(raw, "id", "derived subject")
        label = raw.get("label") or derived_id
        return DerivedSubject(id=derived_id, label=str(label))

    raise ValueError(
        f"Unknown subject kind {kind!r}. "
        f"Valid: {[PriceSubject.kind, IndicatorSubject.kind, DerivedSubject.kind]}"
    )


def target_from_dict(raw: Any) -> Target:
    """
    Parse a target mapping.

    Args:
        raw: e.g. {"kind": "value", "min": 0, "max": 100}

    Returns:
        Target variant

    Raises:
        ValueError: If the mapping is malformed
    """
    if not isinstance(raw, dict):
        raise ValueError(f"target must be a mapping, got {type(raw).__name__}")
    kind = raw.get("kind")

    if kind == ComponentTarget.kind:
        return ComponentTarget(component=_require_str(raw, "component", "component target"))
    if kind == ValueTarget.kind:
        return ValueTarget(
            min=_optional_float(raw, "min"),
            max=_optional_float(raw, "max"),
            step=_optional_float(raw, "step"),
        )
    if kind == ZeroTarget.kind:
        return ZeroTarget()

    raise ValueError(
        f"Unknown target kind {kind!r}. "
        f"Valid: {[ComponentTarget.kind, ValueTarget.kind, ZeroTarget.kind]}"
    )
