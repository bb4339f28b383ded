"""Validation results for move checking.

Illegal moves are reported as values, never raised: every check returns a
ValidationResult, and results combine by concatenating their violations
(the empty result is the identity), so one move can report several
problems at once.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional

from backgammon_rules.core.types import ForcedMoveInfo, HitInfo


class ErrorCode(Enum):
    """Categories of rule violations."""
    TURN_MISMATCH = "TURN_MISMATCH"
    NO_PIECE_AT_SOURCE = "NO_PIECE_AT_SOURCE"
    DIRECTION_VIOLATION = "DIRECTION_VIOLATION"
    DICE_MISMATCH = "DICE_MISMATCH"
    DICE_UNAVAILABLE = "DICE_UNAVAILABLE"
    BAR_REENTRY_REQUIRED = "BAR_REENTRY_REQUIRED"
    BAR_ENTRY_WRONG_POINT = "BAR_ENTRY_WRONG_POINT"
    BAR_ENTRY_BLOCKED = "BAR_ENTRY_BLOCKED"
    POINT_BLOCKED = "POINT_BLOCKED"
    BEAR_OFF_INELIGIBLE = "BEAR_OFF_INELIGIBLE"
    BEAR_OFF_UNDERSHOOT = "BEAR_OFF_UNDERSHOOT"
    BEAR_OFF_OVERSHOOT_DISALLOWED = "BEAR_OFF_OVERSHOOT_DISALLOWED"
    FORCED_MOVE_VIOLATION = "FORCED_MOVE_VIOLATION"
    HIGHER_DIE_REQUIRED = "HIGHER_DIE_REQUIRED"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RuleViolation:
    """A single broken rule.

    Attributes:
        code: Error category, suitable for clients to branch on
        message: Human-readable description
    """
    code: ErrorCode
    message: str

    def prefixed(self, prefix: str) -> "RuleViolation":
        """Copy with ``prefix`` prepended to the message."""
        return RuleViolation(code=self.code, message=f"{prefix}{self.message}")

    def __str__(self) -> str:
        return self.message


@dataclass
class ValidationResult:
    """Verdict for a move or a whole turn.

    Attributes:
        valid: True if no rule was violated
        violations: Every violated rule, in the order checks ran
        hit_info: Blot hit by the (last) accepted move, if any
        forced_move_info: Forced-move analysis, for turn verdicts
    """
    valid: bool = True
    violations: List[RuleViolation] = field(default_factory=list)
    hit_info: Optional[HitInfo] = None
    forced_move_info: Optional[ForcedMoveInfo] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a passing result."""
        return cls(valid=True)

    @classmethod
    def error(cls, code: ErrorCode, message: str) -> "ValidationResult":
        """Create a failing result with a single violation."""
        return cls(valid=False, violations=[RuleViolation(code, message)])

    @classmethod
    def failures(cls, violations: Iterable[RuleViolation]) -> "ValidationResult":
        """Create a result from a list of violations (valid if empty)."""
        violations = list(violations)
        return cls(valid=not violations, violations=violations)

    @classmethod
    def with_hit(cls, hit_info: HitInfo) -> "ValidationResult":
        """Create a passing result that reports a blot hit."""
        return cls(valid=True, hit_info=hit_info)

    @property
    def errors(self) -> List[str]:
        """Violation messages."""
        return [v.message for v in self.violations]

    @property
    def codes(self) -> List[ErrorCode]:
        return [v.code for v in self.violations]

    def add_hit_info(self, hit_info: Optional[HitInfo]) -> "ValidationResult":
        return replace(self, hit_info=hit_info)

    def add_forced_move_info(self, info: Optional[ForcedMoveInfo]) -> "ValidationResult":
        return replace(self, forced_move_info=info)

    def to_dict(self) -> Dict:
        """Serialize to the camelCase verdict shape."""
        result: Dict = {"valid": self.valid, "errors": self.errors}
        if self.hit_info is not None:
            result["hitInfo"] = self.hit_info.to_dict()
        if self.forced_move_info is not None:
            result["forcedMoveInfo"] = self.forced_move_info.to_dict()
        return result


def combine_results(results: Iterable[ValidationResult]) -> ValidationResult:
    """Combine results into one.

    - valid only if every result is valid
    - violations are concatenated in order
    - the last hit_info / forced_move_info present is carried forward
    """
    violations: List[RuleViolation] = []
    hit_info = None
    forced_move_info = None

    for result in results:
        violations.extend(result.violations)
        if result.hit_info is not None:
            hit_info = result.hit_info
        if result.forced_move_info is not None:
            forced_move_info = result.forced_move_info

    return ValidationResult(
        valid=not violations,
        violations=violations,
        hit_info=hit_info,
        forced_move_info=forced_move_info,
    )
