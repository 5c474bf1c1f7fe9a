"""
Dice Roller Plugin

Roll dice expressions in chat.

Commands:
    !roll <expression>                - Roll dice (e.g., 3d6+2, 4d6kh3, d20!)
    !rolld <expression> <description> - Roll with a description line
    !rollhelp [-d]                    - Brief or detailed help

Example usage:
    !roll d20          -> 🎲 d20 = [15] = 15
    !roll 3d6+2        -> 🎲 3d6+2 = [4,5,3] + 2 = 14
    !roll 4d6kh1       -> 🎲 4d6kh1 = [4,5,3,2]→[5] = 5
    !roll 2d10r2+5     -> 🎲 2d10r2+5 = [1→8,7] (rerolled 1→8) + 5 = 20
"""

from .limits import DiceLimitError, DiceLimits
from .plugin import DiceRollerPlugin

__all__ = ["DiceRollerPlugin", "DiceLimits", "DiceLimitError"]
__version__ = "1.0.0"
