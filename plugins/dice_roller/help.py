"""Help text for the dice commands."""

BRIEF_HELP = (
    "🎲 Dice help\n"
    "  !roll <expression>                - roll dice (e.g. !roll 3d6+2)\n"
    "  !rolld <expression> <description> - roll with a description\n"
    "  !rollhelp -d                      - detailed help"
)

DETAILED_HELP = """🎲 Dice help

Commands:
  !roll <expression>                - roll dice (e.g. !roll 3d6+2)
  !rolld <expression> <description> - roll with a description
  !rollhelp [-d]                    - this help

Expressions:
  d20                - one 20-sided die
  3d6                - three 6-sided dice
  2d10+5             - two 10-sided dice plus 5
  4d6kh1 / 4d6kl1    - keep the highest / lowest die
  4d6dh1 / 4d6dl1    - drop the highest / lowest die
  d20!               - exploding die: roll again on the maximum
  d10r2              - reroll once on 2 or less
  d10rr2             - reroll until above 2
  3d6+2d4-1          - combine terms

Operators (applied left to right, no precedence):
  +  addition
  -  subtraction
  *  multiplication
  /  division (rounded down)

Examples:
  !roll d20          - 🎲 d20 = [15] = 15
  !roll 3d6+2        - 🎲 3d6+2 = [4,5,3] + 2 = 14
  !roll 4d6kh1       - 🎲 4d6kh1 = [4,5,3,2]→[5] = 5
  !rolld 2d6 Damage  - Damage
                       🎲 2d6 = [4,3] = 7"""

ROLL_USAGE = (
    "Usage: !roll <expression>\n"
    "Examples: !roll d20, !roll 3d6+2, !roll 4d6kh3, !roll d10r1\n"
    "Use !rollhelp for more"
)

DESCRIBE_USAGE = (
    "Usage: !rolld <expression> <description>\n"
    "Example: !rolld 2d6 Attack damage"
)


def get_help(detailed: bool = False) -> str:
    """Return the brief or detailed help text."""
    return DETAILED_HELP if detailed else BRIEF_HELP
