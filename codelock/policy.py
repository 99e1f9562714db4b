"""
Optional "no repeated digits" input policy.

The solver never applies this on its own; a host that wants the player to
use each digit once filters input (and, if it likes, solutions) through here.
"""

from typing import List, Optional, Sequence, Set, Tuple

from .types import Code, Digit, PartialCode


def used_digits(partial: PartialCode, exclude_index: Optional[int] = None) -> Set[Digit]:
    """Digits already placed, ignoring the field currently being edited."""
    return {
        digit
        for index, digit in enumerate(partial)
        if digit is not None and index != exclude_index
    }


def can_place(partial: PartialCode, index: int, digit: Digit) -> bool:
    return digit not in used_digits(partial, exclude_index=index)


def place_digit(
    partial: PartialCode,
    index: int,
    digit: Optional[Digit],
    distinct: bool = True,
) -> Tuple[Optional[Digit], ...]:
    """
    Return a new partial code with `digit` at `index` (None clears it).
    Raises ValueError when `distinct` and the digit already sits elsewhere.
    """
    if not 0 <= index < len(partial):
        raise ValueError(f"Position {index} is outside a {len(partial)}-digit code.")
    if digit is not None and distinct and not can_place(partial, index, digit):
        raise ValueError(f"Digit {digit} is already used in another position.")
    updated = list(partial)
    updated[index] = digit
    return tuple(updated)


def has_repeated_digits(code: Sequence[Optional[Digit]]) -> bool:
    placed = [digit for digit in code if digit is not None]
    return len(set(placed)) != len(placed)


def distinct_only(solutions: Sequence[Code]) -> List[Code]:
    """Keep solutions with no repeated digit, order preserved."""
    return [code for code in solutions if not has_repeated_digits(code)]
