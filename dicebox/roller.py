"""
Dice term rolling.

This module provides:
- RandomSource: callable returning a uniform integer in [1, n]
- from_random: adapt a random.Random into a RandomSource
- roll_term: execute one DiceTerm against a RandomSource

Per die position the order is fixed: draw, reroll (if at or below the
threshold), record, then explode (if the resolved value is the maximum).
Keep/drop runs once, after every position has resolved.
"""

import random
from typing import Callable, List, Optional

from .models import DiceTerm, KeepDrop, RerollMode, RerollRecord, Roll

RandomSource = Callable[[int], int]


def from_random(rng: Optional[random.Random] = None) -> RandomSource:
    """
    Build a RandomSource from a random.Random instance.

    Args:
        rng: Random number generator (defaults to a fresh random.Random)

    Returns:
        Callable drawing uniformly from [1, n]
    """
    rng = rng or random.Random()

    def source(faces: int) -> int:
        return rng.randint(1, faces)

    return source


def roll_term(term: DiceTerm, source: RandomSource) -> Roll:
    """
    Roll a single dice term.

    Args:
        term: Validated dice term
        source: Random source drawing from [1, n]

    Returns:
        Roll with raw results, kept results, total and reroll history
    """
    raw: List[int] = []
    history: List[RerollRecord] = []

    for _ in range(term.count):
        value = source(term.faces)

        if term.reroll is not RerollMode.NONE and value <= term.reroll_threshold:
            value = _reroll(term, source, value, len(raw), history)

        raw.append(value)

        if term.explode and value == term.faces:
            extra = source(term.faces)
            raw.append(extra)
            while extra == term.faces:
                extra = source(term.faces)
                raw.append(extra)

    final = select(raw, term.keep_drop, term.modifier_count)
    return Roll(
        faces=term.faces,
        raw_results=raw,
        final_results=final,
        total=sum(final),
        reroll_history=history,
    )


def _reroll(
    term: DiceTerm,
    source: RandomSource,
    value: int,
    index: int,
    history: List[RerollRecord],
) -> int:
    """Replace a low draw, appending one RerollRecord per replacement."""
    if term.reroll is RerollMode.ONCE:
        replacement = source(term.faces)
        history.append(RerollRecord(index, value, replacement))
        return replacement

    # threshold < faces, so this terminates
    while value <= term.reroll_threshold:
        replacement = source(term.faces)
        history.append(RerollRecord(index, value, replacement))
        value = replacement
    return value


def select(results: List[int], keep_drop: KeepDrop, count: int) -> List[int]:
    """
    Apply a keep/drop selection.

    Sorting is stable, so equal values keep their draw order.

    Args:
        results: Raw results in draw order
        keep_drop: Selection to apply
        count: How many values keep/drop selects

    Returns:
        New list of selected values
    """
    if keep_drop is KeepDrop.NONE:
        return list(results)

    ordered = sorted(results, reverse=keep_drop.descending)
    if keep_drop.is_keep:
        return ordered[:count]
    return ordered[count:]
