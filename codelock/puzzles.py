"""
Statically configured puzzles.
Clues are built once here and never mutated.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .engine import Clue
from .types import DEFAULT_CODE_LENGTH


@dataclass(frozen=True)
class Puzzle:
    name: str
    title: str
    clues: Tuple[Clue, ...]
    code_length: int = DEFAULT_CODE_LENGTH


COMBINATION_LOCK = Puzzle(
    name="combination-lock",
    title="Five-digit combination lock",
    clues=(
        Clue((8, 2, 6, 1, 9), 2, 0, "two digits correct, both in the wrong place"),
        Clue((7, 0, 6, 2, 9), 1, 1, "one digit correct and in the right place"),
        Clue((4, 7, 5, 3, 0), 3, 0, "three digits correct, all in the wrong place"),
        Clue((8, 6, 3, 0, 2), 2, 1, "two digits correct, one in the right place and one in the wrong place"),
        Clue((9, 1, 7, 0, 4), 2, 2, "two digits correct and in the right place"),
    ),
)

# Smallest useful puzzle: only 21 fits
TWO_DIGIT_DEMO = Puzzle(
    name="two-digit-demo",
    title="Two-digit warm-up",
    clues=(Clue((1, 2), 2, 0, "both digits correct, both in the wrong place"),),
    code_length=2,
)

PUZZLES: Dict[str, Puzzle] = {
    COMBINATION_LOCK.name: COMBINATION_LOCK,
    TWO_DIGIT_DEMO.name: TWO_DIGIT_DEMO,
}


def get_puzzle(name: str) -> Puzzle:
    """Raises KeyError for an unknown name."""
    try:
        return PUZZLES[name]
    except KeyError:
        raise KeyError(f"Unknown puzzle {name!r}. Known: {', '.join(sorted(PUZZLES))}.") from None
