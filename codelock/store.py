"""
In-memory puzzle store
Solves each configured puzzle once (on first use) and hands out the result.
"""

import logging
from dataclasses import dataclass
from threading import RLock
from time import time
from typing import Dict, List, Mapping, Optional

from .engine import solve
from .puzzles import PUZZLES, Puzzle
from .types import Code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolvedPuzzle:
    puzzle: Puzzle
    solutions: List[Code]

    @property
    def solvable(self) -> bool:
        return len(self.solutions) > 0


class PuzzleStore:
    def __init__(self, puzzles: Optional[Mapping[str, Puzzle]] = None) -> None:
        self._puzzles: Dict[str, Puzzle] = dict(PUZZLES if puzzles is None else puzzles)
        self._solved: Dict[str, SolvedPuzzle] = {}
        self._lock = RLock()

    def names(self) -> List[str]:
        return sorted(self._puzzles)

    def puzzles(self) -> List[Puzzle]:
        return [self._puzzles[name] for name in self.names()]

    def get(self, name: str) -> Optional[SolvedPuzzle]:
        with self._lock:
            solved = self._solved.get(name)
            if solved is not None:
                return solved

            puzzle = self._puzzles.get(name)
            if puzzle is None:
                return None

            started = time()
            solutions = solve(puzzle.clues, puzzle.code_length)
            logger.info(
                "solved puzzle %r: %d solution(s) in %.2fs",
                name, len(solutions), time() - started,
            )
            # An empty result is a misconfigured puzzle, not a crash
            if not solutions:
                logger.warning("puzzle %r has no code consistent with all of its clues", name)

            solved = SolvedPuzzle(puzzle=puzzle, solutions=solutions)
            self._solved[name] = solved
            return solved
