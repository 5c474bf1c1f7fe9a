"""
dicebox/errors.py

Dice expression exceptions.

Every error is raised by the parser before any die is rolled. All of them
derive from ValueError so callers that already treat bad notation as a
ValueError keep working.
"""


class DiceError(ValueError):
    """
    Base exception for dice expression errors.

    Attributes:
        fragment: Offending substring of the expression
        expression: Full expression being parsed
    """

    def __init__(self, message: str, fragment: str = "", expression: str = ""):
        super().__init__(message)
        self.fragment = fragment
        self.expression = expression


class EmptyExpression(DiceError):
    """Expression is blank."""
    pass


class InvalidExpression(DiceError):
    """No production matches at the current position."""
    pass


class DivisionByZero(InvalidExpression):
    """Divisor can evaluate to zero."""
    pass


class InvalidDiceCount(DiceError):
    """Dice count below 1."""
    pass


class InvalidFaceCount(DiceError):
    """Face count below 1."""
    pass


class InvalidExplodeFaces(InvalidFaceCount):
    """Exploding die with a single face."""
    pass


class InvalidModifierCount(DiceError):
    """Keep/drop count below 1."""
    pass


class ModifierExceedsCount(DiceError):
    """Keep/drop count larger than the dice count."""
    pass


class InvalidRerollThreshold(DiceError):
    """Reroll threshold outside 1..faces-1."""
    pass
