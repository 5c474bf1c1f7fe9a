"""
dicebox

Dice notation engine: parse, roll and format dice expressions.

This package provides:
- parse / DiceParser: Dice notation into an Expression tree
- roll_term: Roll one dice term against a random source
- evaluate / DiceRoller: Parse, roll and combine a whole expression
- format_result: Render a Result for chat display
- Exception hierarchy for parse errors

Example:
    from dicebox import DiceRoller, format_result

    roller = DiceRoller()
    result = roller.evaluate("4d6kh3+2")
    print(format_result(result, description="Strength"))
    # Strength
    # 🎲 4d6kh3+2 = [4,6,2,5]→[6,5,4] + 2 = 17

Supported notation:
    d20, 3d6           - count and faces (count defaults to 1)
    4d6kh3, 4d6kl1     - keep highest/lowest N
    4d6dh1, 4d6dl1     - drop highest/lowest N
    d6!                - explode on the maximum face
    d10r2, d10rr2      - reroll at or below 2, once or until above
    3d6+2d4-1, d20*2   - +, -, * and floor division, left to right
"""

from .errors import (
    DiceError,
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
from .evaluator import DiceRoller, evaluate, render_roll
from .formatter import format_error, format_result, format_success
from .models import (
    ArithmeticTerm,
    DiceTerm,
    Expression,
    KeepDrop,
    Operator,
    RerollMode,
    RerollRecord,
    Result,
    Roll,
)
from .parser import DiceParser, parse
from .roller import RandomSource, from_random, roll_term, select

__all__ = [
    "ArithmeticTerm",
    "DiceError",
    "DiceParser",
    "DiceRoller",
    "DiceTerm",
    "DivisionByZero",
    "EmptyExpression",
    "Expression",
    "InvalidDiceCount",
    "InvalidExplodeFaces",
    "InvalidExpression",
    "InvalidFaceCount",
    "InvalidModifierCount",
    "InvalidRerollThreshold",
    "KeepDrop",
    "ModifierExceedsCount",
    "Operator",
    "RandomSource",
    "RerollMode",
    "RerollRecord",
    "Result",
    "Roll",
    "evaluate",
    "format_error",
    "format_result",
    "format_success",
    "from_random",
    "parse",
    "render_roll",
    "roll_term",
    "select",
]
__version__ = "1.0.0"
