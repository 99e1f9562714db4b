"""
Labels for clarity.
"""

from enum import Enum
from typing import Optional, Sequence, Tuple

Digit = int  # 0 -> 9
Code = Tuple[Digit, ...]  # fully specified, e.g. (5, 1, 3, 2, 4)
PartialCode = Sequence[Optional[Digit]]  # None = position not filled in yet

DIGIT_MIN = 0
DIGIT_MAX = 9
DEFAULT_CODE_LENGTH = 5


class Verdict(str, Enum):
    """Live per-clue feedback for an in-progress code."""

    VALID = "valid"
    INVALID = "invalid"
    UNKNOWN = "unknown"
