"""
Rule validation type definitions.

Enums and dataclasses for checking candidate conditions with strict typing.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto


class Operator(str, Enum):
    """Comparison and crossing operators a condition may use."""

    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    EQ = "="
    NE = "!="
    CROSSES_ABOVE = "crosses-above"
    CROSSES_BELOW = "crosses-below"

    def __str__(self) -> str:
        return self.value


class PriceSource(str, Enum):
    """Which price value a price subject reads."""

    CLOSE = "close"
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    HL2 = "hl2"
    HLC3 = "hlc3"
    OHLC4 = "ohlc4"

    def __str__(self) -> str:
        return self.value


class ReasonCode(IntEnum):
    """
    Reason codes for condition validation outcomes.

    Every validation returns a ReasonCode to explain why it passed or failed.
    These are machine-readable for logging/debugging.
    """

    # Success
    OK = 0

    # Lookup failures
    UNKNOWN_INDICATOR = auto()  # Indicator id outside the registry
    UNKNOWN_OPERATOR = auto()  # Operator string not recognized

    # Grammar failures
    INVALID_SUBJECT = auto()  # Subject has no pairing for this indicator
    INVALID_TARGET = auto()  # Target not reachable from this subject
    INVALID_OPERATOR = auto()  # Operator not legal for (subject, target)

    # Value failures
    MISSING_VALUE = auto()  # Value target without a threshold
    VALUE_OUT_OF_RANGE = auto()  # Threshold outside declared bounds

    # Rule set failures
    TOO_MANY_CONDITIONS = auto()


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of a condition validation.

    Contains:
    - ok: Whether the condition is legal
    - reason: Why it passed or failed
    - suggestions: Legal alternatives at the failing step
    """

    ok: bool
    reason: ReasonCode
    indicator: str | None = None
    message: str | None = None
    suggestions: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls, indicator: str, message: str | None = None) -> "ValidationResult":
        """Create a passing result."""
        return cls(ok=True, reason=ReasonCode.OK, indicator=indicator, message=message)

    @classmethod
    def failure(
        cls,
        reason: ReasonCode,
        message: str,
        indicator: str | None = None,
        suggestions: list[str] | tuple[str, ...] | None = None,
    ) -> "ValidationResult":
        """Create a failing result."""
        return cls(
            ok=False,
            reason=reason,
            indicator=indicator,
            message=message,
            suggestions=tuple(sorted(suggestions or ())),
        )

    def to_dict(self) -> dict:
        """Convert to dict for logging/serialization."""
        result = {
            "ok": self.ok,
            "reason": self.reason.name,
            "indicator": self.indicator,
            "message": self.message,
        }
        if self.suggestions:
            result["suggestions"] = list(self.suggestions)
        return result

    def __str__(self) -> str:
        s = f"[{self.reason.name}] {self.message or ''}".rstrip()
        if self.suggestions:
            s += f"\n  Suggestions: {list(self.suggestions)}"
        return s
