"""
Pure lock logic (no HTTP, no storage).
Every clue carries two feedback numbers about the hidden code:
- position matches: how many indices are exactly correct (right digit, right place)
- digit matches: total count of digits shared with the hidden code,
  including the ones already in the correct position.

Note this is NOT classic Mastermind scoring: the digit count is the full
multiset overlap and is never reduced by the position count.

Digits may repeat in both the guess and the candidate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import product
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .types import Code, Digit, PartialCode, Verdict, DIGIT_MIN, DIGIT_MAX, DEFAULT_CODE_LENGTH

logger = logging.getLogger(__name__)

UNSET_MARKERS = "-_?."


def _is_digit(value) -> bool:
    # bool is an int subclass; True is not a digit
    return isinstance(value, int) and not isinstance(value, bool) and DIGIT_MIN <= value <= DIGIT_MAX


def _digit_counts(code: Sequence[Digit]) -> List[int]:
    counts = [0] * (DIGIT_MAX + 1)
    for digit in code:
        counts[digit] += 1
    return counts


@dataclass(frozen=True)
class Clue:
    """
    One guess plus the two counts the hidden code produces against it.

    target_position_matches <= target_digit_matches is not enforced: an
    inconsistent clue is a legal value that nothing will ever satisfy.
    """

    guess: Code
    target_digit_matches: int
    target_position_matches: int
    label: str = ""

    def __post_init__(self) -> None:
        guess = tuple(self.guess)
        if not guess:
            raise ValueError("Clue guess must contain at least one digit.")
        for digit in guess:
            if not _is_digit(digit):
                raise ValueError(f"Clue digits must be integers between {DIGIT_MIN} and {DIGIT_MAX}, got {digit!r}.")
        for name in ("target_digit_matches", "target_position_matches"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= len(guess):
                raise ValueError(f"{name} must be an integer between 0 and {len(guess)}, got {value!r}.")
        if not isinstance(self.label, str):
            raise ValueError("Clue label must be a string.")
        # frozen: bypass __setattr__ to store the normalized tuple
        object.__setattr__(self, "guess", guess)

    @property
    def length(self) -> int:
        return len(self.guess)


@dataclass(frozen=True)
class Evaluation:
    digit_matches: int
    position_matches: int
    satisfies: bool


@dataclass(frozen=True)
class PositionCheck:
    index: int
    guess_digit: Digit
    code_digit: Digit
    match: bool


@dataclass(frozen=True)
class Explanation:
    """Why a code does or does not satisfy one clue, spelled out."""

    verdict: Verdict
    guess: str
    code: str
    positions: Tuple[PositionCheck, ...] = ()
    shared_digits: Dict[Digit, int] = field(default_factory=dict)
    evaluation: Optional[Evaluation] = None
    notes: Tuple[str, ...] = ()


def require_code(code: Iterable, length: int) -> Code:
    """
    Boundary check for a fully specified code.
    Returns it as a tuple; raises ValueError on a wrong length or a bad digit.
    """
    code = tuple(code)
    if len(code) != length:
        raise ValueError(f"Code must have exactly {length} digits, got {len(code)}.")
    for digit in code:
        if not _is_digit(digit):
            raise ValueError(f"Each digit must be between {DIGIT_MIN} and {DIGIT_MAX} inclusive, got {digit!r}.")
    return code


def require_partial(partial: PartialCode, length: int) -> None:
    """Same as require_code, but None (unset) is allowed in any position."""
    if len(partial) != length:
        raise ValueError(f"Code must have exactly {length} positions, got {len(partial)}.")
    for digit in partial:
        if digit is not None and not _is_digit(digit):
            raise ValueError(f"Each digit must be between {DIGIT_MIN} and {DIGIT_MAX} inclusive, got {digit!r}.")


def is_complete(partial: PartialCode) -> bool:
    return all(digit is not None for digit in partial)


def _count_matches(candidate: Sequence[Digit], guess: Sequence[Digit], guess_counts: List[int]) -> Tuple[int, int]:
    # 1. Exact position matches
    position_matches = 0
    for mine, theirs in zip(candidate, guess):
        if mine == theirs:
            position_matches += 1

    # 2. Multiset overlap, position matches included
    candidate_counts = _digit_counts(candidate)
    digit_matches = 0
    for digit in range(DIGIT_MAX + 1):
        digit_matches += min(candidate_counts[digit], guess_counts[digit])

    return digit_matches, position_matches


def evaluate(candidate: Sequence[Digit], clue: Clue) -> Evaluation:
    """
    Compare a fully specified code against one clue.

    Example:
      clue.guess = (1, 2), candidate = (2, 1)
      position_matches = 0
      digit_matches    = 2  (both 1 and 2 are shared)

    The candidate must be complete; unset positions are the caller's problem
    (see validate_partial).
    """
    candidate = require_code(candidate, clue.length)

    digit_matches, position_matches = _count_matches(candidate, clue.guess, _digit_counts(clue.guess))
    return Evaluation(
        digit_matches=digit_matches,
        position_matches=position_matches,
        satisfies=(
            digit_matches == clue.target_digit_matches
            and position_matches == clue.target_position_matches
        ),
    )


def solve(clues: Sequence[Clue], code_length: int = DEFAULT_CODE_LENGTH) -> List[Code]:
    """
    Brute force every code of `code_length` digits, 00..0 -> 99..9, and keep
    the ones that satisfy every clue.

    Results come back in ascending numeric order. No clues -> every code.
    No consistent code -> empty list (not an error, the caller decides).
    """
    if isinstance(code_length, bool) or not isinstance(code_length, int) or code_length < 1:
        raise ValueError("code_length must be a positive integer.")
    for clue in clues:
        if clue.length != code_length:
            raise ValueError(
                f"Clue {clue.label or list(clue.guess)!r} has {clue.length} digits, expected {code_length}."
            )

    # Precompute per-clue digit counts once instead of per candidate
    prepared = [(clue, _digit_counts(clue.guess)) for clue in clues]

    solutions: List[Code] = []
    # product() over range(10) walks the candidates in ascending numeric order
    for candidate in product(range(DIGIT_MAX + 1), repeat=code_length):
        consistent = True
        for clue, guess_counts in prepared:
            digits, positions = _count_matches(candidate, clue.guess, guess_counts)
            if digits != clue.target_digit_matches or positions != clue.target_position_matches:
                consistent = False
                break
        if consistent:
            solutions.append(candidate)

    logger.debug("solved %d clue(s) at length %d: %d solution(s)", len(prepared), code_length, len(solutions))
    return solutions


def validate_partial(partial: PartialCode, clue: Clue) -> Verdict:
    """
    Live feedback for one clue.
    Any unset position -> UNKNOWN, whichever position it is.
    Wrong length or a bad digit -> ValueError, even while incomplete.
    """
    require_partial(partial, clue.length)
    for digit in partial:
        if digit is None:
            return Verdict.UNKNOWN
    return Verdict.VALID if evaluate(partial, clue).satisfies else Verdict.INVALID


def is_solution(code: PartialCode, solutions: Sequence[Code]) -> bool:
    """Submitted code unlocks the puzzle iff it is one of the solutions."""
    if not is_complete(code):
        return False
    return tuple(code) in solutions


def format_code(code: PartialCode) -> str:
    return "".join("-" if digit is None else str(digit) for digit in code)


def parse_partial(text: str) -> Tuple[Optional[Digit], ...]:
    """
    "2-1" -> (2, None, 1)
    Any of - _ ? . marks an unset position.
    """
    text = text.strip()
    if not text:
        raise ValueError("Code must not be empty.")
    out: List[Optional[Digit]] = []
    for char in text:
        if char in UNSET_MARKERS:
            out.append(None)
        elif char.isdigit() and char.isascii():
            out.append(int(char))
        else:
            raise ValueError(f"Unexpected character {char!r} in code {text!r}.")
    return tuple(out)


def explain(partial: PartialCode, clue: Clue) -> Explanation:
    """
    Break the comparison down position by position and digit by digit,
    for a "why did this clue light up red" view.
    """
    require_partial(partial, clue.length)

    guess_text = format_code(clue.guess)
    code_text = format_code(partial)

    if not is_complete(partial):
        return Explanation(
            verdict=Verdict.UNKNOWN,
            guess=guess_text,
            code=code_text,
            notes=("Fill in every digit before this clue can be checked.",),
        )

    positions = tuple(
        PositionCheck(index=i, guess_digit=g, code_digit=c, match=(g == c))
        for i, (g, c) in enumerate(zip(clue.guess, partial))
    )

    code_counts = _digit_counts(partial)
    guess_counts = _digit_counts(clue.guess)
    shared: Dict[Digit, int] = {}
    for digit in range(DIGIT_MAX + 1):
        common = min(code_counts[digit], guess_counts[digit])
        if common > 0:
            shared[digit] = common

    evaluation = evaluate(partial, clue)
    notes: List[str] = []
    if evaluation.digit_matches != clue.target_digit_matches:
        notes.append(
            f"expected {clue.target_digit_matches} correct digit(s), got {evaluation.digit_matches}"
        )
    if evaluation.position_matches != clue.target_position_matches:
        notes.append(
            f"expected {clue.target_position_matches} digit(s) in the right place, got {evaluation.position_matches}"
        )

    return Explanation(
        verdict=Verdict.VALID if evaluation.satisfies else Verdict.INVALID,
        guess=guess_text,
        code=code_text,
        positions=positions,
        shared_digits=shared,
        evaluation=evaluation,
        notes=tuple(notes),
    )
