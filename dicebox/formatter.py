"""
Dice result formatting for chat display.

Examples:
    "🎲 d20 = [15] = 15"
    "🎲 3d6+2 = [4,5,3] + 2 = 14"
    "🎲 4d6kh1 = [4,5,3,2]→[5] = 5"
    "🎲 2d10r2+5 = [1→8,7] (rerolled 1→8) + 5 = 20"
"""

from typing import Dict, List, Optional

from .models import DiceTerm, Result, Roll
from .parser import parse

DICE_EMOJI = "🎲 "
ERROR_EMOJI = "❌ "
SUCCESS_EMOJI = "✅ "


def format_result(
    result: Result,
    description: Optional[str] = None,
    show_emoji: bool = True,
) -> str:
    """
    Format a result for chat display.

    Results without rerolls use the detail trace as is. When any roll was
    rerolled, each dice term is rendered with its reroll chains and a
    summary of the replaced values.

    Args:
        result: Evaluated dice result
        description: Optional line printed above the roll
        show_emoji: Prefix the roll line with the dice emoji

    Returns:
        Formatted text, possibly spanning two lines

    Raises:
        ValueError: If a rerolled result's rolls do not match its dice terms
    """
    text = ""
    if description and description.strip():
        text += f"{description}\n"

    emoji = DICE_EMOJI if show_emoji else ""
    body = _render_with_rerolls(result) if result.has_rerolls else result.detail
    text += f"{emoji}{result.expression} = {body} = {result.total}"
    return text


def format_error(message: str, show_emoji: bool = True) -> str:
    """Format an error message."""
    return f"{ERROR_EMOJI if show_emoji else ''}{message}"


def format_success(message: str, show_emoji: bool = True) -> str:
    """Format a success message."""
    return f"{SUCCESS_EMOJI if show_emoji else ''}{message}"


def _render_with_rerolls(result: Result) -> str:
    parsed = result.parsed or parse(result.expression)
    if len(result.rolls) != len(parsed.dice_terms):
        raise ValueError(
            f"Result has {len(result.rolls)} rolls but '{result.expression}' "
            f"has {len(parsed.dice_terms)} dice terms"
        )
    rolls = iter(result.rolls)

    if isinstance(parsed.first, DiceTerm):
        text = render_reroll_roll(next(rolls))
    else:
        text = str(parsed.first)

    for term in parsed.tail:
        if isinstance(term.operand, DiceTerm):
            part = render_reroll_roll(next(rolls))
        else:
            part = str(term.operand)
        text += f" {term.operator.value} {part}"
    return text


def render_reroll_roll(roll: Roll) -> str:
    """
    Render one roll with its reroll provenance.

    Rerolled positions show every value they held, in draw order
    ("1→2→6"). A summary of all replacements follows when any occurred.
    """
    chains: Dict[int, List[int]] = {}
    for record in roll.reroll_history:
        chain = chains.setdefault(record.index, [record.original_value])
        chain.append(record.rerolled_value)

    cells = []
    for index, value in enumerate(roll.raw_results):
        if index in chains:
            cells.append("→".join(str(v) for v in chains[index]))
        else:
            cells.append(str(value))

    text = f"[{','.join(cells)}]"
    if roll.selection_changed:
        text += f"→[{','.join(str(v) for v in roll.final_results)}]"
    if roll.reroll_history:
        pairs = ", ".join(
            f"{r.original_value}→{r.rerolled_value}" for r in roll.reroll_history
        )
        text += f" (rerolled {pairs})"
    return text
