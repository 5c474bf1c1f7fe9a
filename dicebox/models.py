"""
Dice Models

Data models for parsed dice expressions and their rolled results.

Expression side (immutable, built by the parser):
- DiceTerm, ArithmeticTerm, Expression

Result side (built by the roller and evaluator):
- RerollRecord, Roll, Result
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class KeepDrop(Enum):
    """Keep/drop selection applied after all dice resolve."""
    NONE = ""
    KEEP_HIGH = "kh"
    KEEP_LOW = "kl"
    DROP_HIGH = "dh"
    DROP_LOW = "dl"

    @property
    def is_keep(self) -> bool:
        return self in (KeepDrop.KEEP_HIGH, KeepDrop.KEEP_LOW)

    @property
    def is_drop(self) -> bool:
        return self in (KeepDrop.DROP_HIGH, KeepDrop.DROP_LOW)

    @property
    def descending(self) -> bool:
        """Whether the sorted copy is ordered highest first."""
        return self in (KeepDrop.KEEP_HIGH, KeepDrop.DROP_HIGH)


class RerollMode(Enum):
    """Reroll behaviour for dice at or below the threshold."""
    NONE = ""
    ONCE = "r"
    RECURSIVE = "rr"


class Operator(Enum):
    """Arithmetic operators, applied strictly left to right."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    def apply(self, left: int, right: int) -> int:
        """
        Combine the running total with an operand.

        Division floors toward negative infinity, so -3 / 2 gives -2.
        """
        if self is Operator.ADD:
            return left + right
        if self is Operator.SUBTRACT:
            return left - right
        if self is Operator.MULTIPLY:
            return left * right
        return left // right


@dataclass(frozen=True)
class DiceTerm:
    """
    A single NdM unit with its modifiers.

    Attributes:
        count: Number of dice rolled (>= 1)
        faces: Faces per die (>= 1)
        keep_drop: Keep/drop selection, KeepDrop.NONE when absent
        modifier_count: How many dice keep/drop selects (1..count)
        explode: Roll an extra die whenever the maximum face comes up
        reroll: Reroll mode, RerollMode.NONE when absent
        reroll_threshold: Values at or below this are rerolled (1..faces-1)
        source: Substring of the expression this term was parsed from
    """
    count: int
    faces: int
    keep_drop: KeepDrop = KeepDrop.NONE
    modifier_count: int = 1
    explode: bool = False
    reroll: RerollMode = RerollMode.NONE
    reroll_threshold: int = 1
    source: str = field(default="", compare=False)


Operand = Union[DiceTerm, int]


@dataclass(frozen=True)
class ArithmeticTerm:
    """An operator and the term it applies to the running total."""
    operator: Operator
    operand: Operand


@dataclass(frozen=True)
class Expression:
    """A first term followed by (operator, term) pairs."""
    first: Operand
    tail: Tuple[ArithmeticTerm, ...] = ()

    @property
    def dice_terms(self) -> List[DiceTerm]:
        """All dice terms in evaluation order."""
        terms = [self.first] + [t.operand for t in self.tail]
        return [t for t in terms if isinstance(t, DiceTerm)]


@dataclass
class RerollRecord:
    """
    One replaced draw.

    Attributes:
        index: Position in Roll.raw_results the resolved value occupies
        original_value: Value that was discarded
        rerolled_value: Replacement drawn for it
    """
    index: int
    original_value: int
    rerolled_value: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "index": self.index,
            "original_value": self.original_value,
            "rerolled_value": self.rerolled_value,
        }


@dataclass
class Roll:
    """
    Outcome of rolling one DiceTerm.

    Attributes:
        faces: Faces per die
        raw_results: Resolved values in draw order, exploded extras included
        final_results: Values left after keep/drop
        total: Sum of final_results
        reroll_history: Every replaced draw, in draw order
    """
    faces: int
    raw_results: List[int]
    final_results: List[int]
    total: int
    reroll_history: List[RerollRecord] = field(default_factory=list)

    @property
    def selection_changed(self) -> bool:
        """Whether keep/drop removed any value."""
        return len(self.final_results) != len(self.raw_results)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict for NATS messages."""
        return {
            "faces": self.faces,
            "results": list(self.raw_results),
            "final_results": list(self.final_results),
            "total": self.total,
            "rerolls": [r.to_dict() for r in self.reroll_history],
        }


@dataclass
class Result:
    """
    Outcome of evaluating a whole expression.

    Attributes:
        expression: Expression text as supplied (stripped)
        rolls: One Roll per dice term, in evaluation order
        total: Final value after arithmetic
        detail: Trace of every term, e.g. "[4,5,3] + 2"
        parsed: Expression tree the result was evaluated from
    """
    expression: str
    rolls: List[Roll]
    total: int
    detail: str
    parsed: Optional[Expression] = field(default=None, repr=False, compare=False)

    @property
    def has_rerolls(self) -> bool:
        return any(roll.reroll_history for roll in self.rolls)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict for NATS messages."""
        return {
            "expression": self.expression,
            "total": self.total,
            "detail": self.detail,
            "rolls": [roll.to_dict() for roll in self.rolls],
        }
