from .engine import Clue, Evaluation, Explanation, evaluate, explain, is_solution, solve, validate_partial
from .types import Verdict

__all__ = [
    "Clue",
    "Evaluation",
    "Explanation",
    "Verdict",
    "evaluate",
    "explain",
    "is_solution",
    "solve",
    "validate_partial",
]
