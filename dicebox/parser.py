"""
Dice expression parser.

Grammar (case-insensitive, whitespace allowed around operators only):

    Expression := Term (Operator Term)*
    Term       := DiceTerm | Integer
    DiceTerm   := Integer? 'd' Integer (KeepDrop Integer?)? '!'? (RerollKind Integer?)?
    KeepDrop   := 'kh' | 'kl' | 'dh' | 'dl'
    RerollKind := 'rr' | 'r'

Omitted numbers default to 1 (dice count, keep/drop count, reroll
threshold). Every validation happens here, so an Expression returned by
parse() always evaluates without error.

Example:
    >>> expr = parse("4d6kh3+2")
    >>> expr.first.count, expr.first.keep_drop
    (4, <KeepDrop.KEEP_HIGH: 'kh'>)
    >>> expr.tail[0].operator, expr.tail[0].operand
    (<Operator.ADD: '+'>, 2)
"""

from typing import List, Optional

from .errors import (
    DivisionByZero,
    EmptyExpression,
    InvalidDiceCount,
    InvalidExplodeFaces,
    InvalidExpression,
    InvalidFaceCount,
    InvalidModifierCount,
    InvalidRerollThreshold,
    ModifierExceedsCount,
)
from .models import (
    ArithmeticTerm,
    DiceTerm,
    Expression,
    KeepDrop,
    Operand,
    Operator,
    RerollMode,
)


class DiceParser:
    """
    Hand-written scanner and recursive-descent parser for dice notation.

    One instance may parse many expressions, one at a time; scanner state
    is reset on every call to parse().
    """

    OPERATORS = {op.value: op for op in Operator}
    KEEP_DROP = {kd.value: kd for kd in KeepDrop if kd is not KeepDrop.NONE}
    WHITESPACE = " \t\r\n"
    DIGITS = "0123456789"

    def __init__(self) -> None:
        self._source = ""
        self._text = ""
        self._pos = 0

    def parse(self, expression: str) -> Expression:
        """
        Parse dice notation into an Expression.

        Args:
            expression: Dice notation string (e.g., "3d6+2", "4d6kh3", "d20!")

        Returns:
            Parsed Expression

        Raises:
            EmptyExpression: If expression is blank
            InvalidExpression: If the text does not match the grammar
            DiceError: Any other validation failure (see dicebox.errors)
        """
        if not expression or not expression.strip():
            raise EmptyExpression(
                "Dice expression cannot be empty", expression=expression or ""
            )

        self._source = expression
        self._text = expression.strip().lower()
        self._pos = 0

        first = self._parse_term()
        if first is None:
            raise InvalidExpression(
                f"Invalid dice expression: '{self._source.strip()}'",
                fragment=self._rest(),
                expression=self._source,
            )

        tail: List[ArithmeticTerm] = []
        while True:
            self._skip_whitespace()
            if self._at_end():
                break

            symbol = self._text[self._pos]
            operator = self.OPERATORS.get(symbol)
            if operator is None:
                raise InvalidExpression(
                    f"Unexpected '{self._rest()}' in dice expression",
                    fragment=self._rest(),
                    expression=self._source,
                )
            self._pos += 1
            self._skip_whitespace()

            operand = self._parse_term()
            if operand is None:
                raise InvalidExpression(
                    f"Expected a number or dice after '{symbol}'",
                    fragment=symbol + self._rest(),
                    expression=self._source,
                )
            if operator is Operator.DIVIDE:
                self._check_divisor(operand)
            tail.append(ArithmeticTerm(operator=operator, operand=operand))

        return Expression(first=first, tail=tuple(tail))

    # =========================================================================
    # Productions
    # =========================================================================

    def _parse_term(self) -> Optional[Operand]:
        """Term := DiceTerm | Integer. Returns None if neither matches."""
        start = self._pos
        count_digits = self._read_digits()

        if self._peek() == "d":
            self._pos += 1
            faces_digits = self._read_digits()
            if faces_digits:
                return self._parse_dice_modifiers(start, count_digits, faces_digits)
            # "2d" is not a dice term; fall back to the bare integer
            self._pos = start + len(count_digits)

        if count_digits:
            return int(count_digits)
        self._pos = start
        return None

    def _parse_dice_modifiers(
        self, start: int, count_digits: str, faces_digits: str
    ) -> DiceTerm:
        """Consume (KeepDrop Integer?)? '!'? (RerollKind Integer?)? and validate."""
        keep_drop = KeepDrop.NONE
        modifier_digits = ""
        token = self._text[self._pos:self._pos + 2]
        if token in self.KEEP_DROP:
            keep_drop = self.KEEP_DROP[token]
            self._pos += 2
            modifier_digits = self._read_digits()

        explode = False
        if self._peek() == "!":
            explode = True
            self._pos += 1

        reroll = RerollMode.NONE
        threshold_digits = ""
        if self._text.startswith("rr", self._pos):
            reroll = RerollMode.RECURSIVE
            self._pos += 2
        elif self._peek() == "r":
            reroll = RerollMode.ONCE
            self._pos += 1
        if reroll is not RerollMode.NONE:
            threshold_digits = self._read_digits()

        term = DiceTerm(
            count=int(count_digits) if count_digits else 1,
            faces=int(faces_digits),
            keep_drop=keep_drop,
            modifier_count=int(modifier_digits) if modifier_digits else 1,
            explode=explode,
            reroll=reroll,
            reroll_threshold=int(threshold_digits) if threshold_digits else 1,
            source=self._text[start:self._pos],
        )
        self._validate_dice(term)
        return term

    # =========================================================================
    # Validation
    # =========================================================================

    def _validate_dice(self, term: DiceTerm) -> None:
        """
        Check dice term invariants.

        Raises:
            InvalidDiceCount: count < 1
            InvalidFaceCount: faces < 1
            InvalidExplodeFaces: explode on a one-faced die
            InvalidModifierCount: keep/drop count < 1
            ModifierExceedsCount: keep/drop count > count
            InvalidRerollThreshold: threshold outside 1..faces-1
        """
        fragment = term.source

        if term.count < 1:
            raise InvalidDiceCount(
                "Must roll at least 1 die", fragment, self._source
            )

        if term.faces < 1:
            raise InvalidFaceCount(
                "Dice must have at least 1 face", fragment, self._source
            )

        if term.explode and term.faces == 1:
            raise InvalidExplodeFaces(
                "Exploding dice need at least 2 faces", fragment, self._source
            )

        if term.keep_drop is not KeepDrop.NONE:
            if term.modifier_count < 1:
                raise InvalidModifierCount(
                    "Keep/drop count must be at least 1", fragment, self._source
                )
            if term.modifier_count > term.count:
                raise ModifierExceedsCount(
                    f"Cannot keep or drop {term.modifier_count} of {term.count} dice",
                    fragment,
                    self._source,
                )

        if term.reroll is not RerollMode.NONE:
            if term.reroll_threshold < 1 or term.reroll_threshold >= term.faces:
                raise InvalidRerollThreshold(
                    f"Reroll threshold must be at least 1 and below {term.faces}",
                    fragment,
                    self._source,
                )

    def _check_divisor(self, operand: Operand) -> None:
        """Reject divisors that are or can become zero."""
        if isinstance(operand, int):
            if operand == 0:
                raise DivisionByZero(
                    "Cannot divide by zero", "/0", self._source
                )
            return

        # Dropping every die can leave nothing to sum
        if operand.keep_drop.is_drop and operand.modifier_count == operand.count:
            raise DivisionByZero(
                f"Divisor '{operand.source}' can total zero",
                operand.source,
                self._source,
            )

    # =========================================================================
    # Scanner
    # =========================================================================

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _at_end(self) -> bool:
        return self._pos >= len(self._text)

    def _rest(self) -> str:
        return self._text[self._pos:]

    def _read_digits(self) -> str:
        start = self._pos
        while self._pos < len(self._text) and self._text[self._pos] in self.DIGITS:
            self._pos += 1
        return self._text[start:self._pos]

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos] in self.WHITESPACE:
            self._pos += 1


def parse(expression: str) -> Expression:
    """Parse dice notation with a fresh DiceParser."""
    return DiceParser().parse(expression)
