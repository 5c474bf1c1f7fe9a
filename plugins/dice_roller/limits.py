"""
Host-side dice limits.

The engine itself accepts any valid expression; a chat host caps how much
work a single command may request.
"""

from dicebox import Expression


class DiceLimitError(ValueError):
    """Expression exceeds a configured limit."""
    pass


class DiceLimits:
    """
    Limits applied to a parsed expression before it is rolled.

    Limits (configurable):
        - max_dice: Maximum dice across all terms of one expression (default 100)
        - max_sides: Maximum faces per die (default 1000)
    """

    DEFAULT_MAX_DICE = 100
    DEFAULT_MAX_SIDES = 1000

    def __init__(
        self,
        max_dice: int = DEFAULT_MAX_DICE,
        max_sides: int = DEFAULT_MAX_SIDES,
    ):
        self.max_dice = max_dice
        self.max_sides = max_sides

    def check(self, expression: Expression) -> None:
        """
        Validate an expression against the limits.

        Args:
            expression: Parsed dice expression

        Raises:
            DiceLimitError: If any limit is exceeded
        """
        terms = expression.dice_terms

        if sum(term.count for term in terms) > self.max_dice:
            raise DiceLimitError(f"Maximum {self.max_dice} dice allowed")

        if any(term.faces > self.max_sides for term in terms):
            raise DiceLimitError(f"Maximum {self.max_sides} sides allowed")
