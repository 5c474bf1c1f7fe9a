"""
Dice expression evaluation.

Terms combine strictly left to right with no operator precedence, so
"3d6+2*3" is (3d6+2)*3. Division floors toward negative infinity.
"""

import random
from typing import List, Optional

from .models import DiceTerm, Expression, Result, Roll
from .parser import DiceParser
from .roller import RandomSource, from_random, roll_term


def render_roll(roll: Roll) -> str:
    """
    Render a roll for the detail trace.

    Examples:
        "[15]"
        "[4,5,3,2]→[5]"
    """
    text = f"[{','.join(str(v) for v in roll.raw_results)}]"
    if roll.selection_changed:
        text += f"→[{','.join(str(v) for v in roll.final_results)}]"
    return text


class DiceRoller:
    """
    Evaluate dice expressions against a random source.

    Uses an injectable random source for testability. A roller holds no
    state between calls besides its source, so hosts evaluating in several
    threads can give each thread its own roller.
    """

    def __init__(
        self,
        source: Optional[RandomSource] = None,
        rng: Optional[random.Random] = None,
        parser: Optional[DiceParser] = None,
    ):
        """
        Initialize roller.

        Args:
            source: Random source returning [1, n] (takes precedence over rng)
            rng: Random number generator wrapped when no source is given
            parser: Dice parser (defaults to DiceParser)
        """
        self.source = source or from_random(rng)
        self.parser = parser or DiceParser()

    def roll_term(self, term: DiceTerm) -> Roll:
        """Roll a single dice term with this roller's source."""
        return roll_term(term, self.source)

    def evaluate(self, expression: str) -> Result:
        """
        Parse and evaluate a dice expression.

        Args:
            expression: Dice notation string (e.g., "3d6+2")

        Returns:
            Result with every roll, the total and the detail trace

        Raises:
            DiceError: If the expression is invalid (nothing is rolled)
        """
        parsed = self.parser.parse(expression)
        return self.evaluate_parsed(expression.strip(), parsed)

    def evaluate_parsed(self, expression: str, parsed: Expression) -> Result:
        """
        Evaluate an already parsed expression.

        Args:
            expression: Text to report as Result.expression
            parsed: Expression returned by the parser

        Returns:
            Result with every roll, the total and the detail trace
        """
        rolls: List[Roll] = []

        if isinstance(parsed.first, DiceTerm):
            roll = self.roll_term(parsed.first)
            rolls.append(roll)
            total = roll.total
            detail = render_roll(roll)
        else:
            total = parsed.first
            detail = str(parsed.first)

        for term in parsed.tail:
            if isinstance(term.operand, DiceTerm):
                roll = self.roll_term(term.operand)
                rolls.append(roll)
                total = term.operator.apply(total, roll.total)
                detail += f" {term.operator.value} {render_roll(roll)}"
            else:
                total = term.operator.apply(total, term.operand)
                detail += f" {term.operator.value} {term.operand}"

        return Result(
            expression=expression,
            rolls=rolls,
            total=total,
            detail=detail,
            parsed=parsed,
        )


def evaluate(expression: str, source: Optional[RandomSource] = None) -> Result:
    """
    Evaluate a dice expression.

    Args:
        expression: Dice notation string
        source: Random source (defaults to a fresh uniform generator)

    Returns:
        Result of the evaluation
    """
    return DiceRoller(source=source).evaluate(expression)
