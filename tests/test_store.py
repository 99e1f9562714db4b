"""
Testing configured puzzles and the in-memory store
- Solve once, hand out the same result, check the lock puzzle's answers.
"""

import logging

from codelock.engine import Clue, evaluate
from codelock.puzzles import COMBINATION_LOCK, PUZZLES, Puzzle, get_puzzle
from codelock.store import PuzzleStore

import pytest


def test_get_puzzle():
    assert get_puzzle("combination-lock") is COMBINATION_LOCK
    with pytest.raises(KeyError):
        get_puzzle("missing")


def test_lock_puzzle_has_five_five_digit_clues():
    assert COMBINATION_LOCK.code_length == 5
    assert len(COMBINATION_LOCK.clues) == 5
    assert all(clue.length == 5 for clue in COMBINATION_LOCK.clues)


def test_lock_puzzle_solutions_are_sound(store):
    solved = store.get("combination-lock")
    assert solved.solvable
    assert (5, 1, 3, 2, 4) in solved.solutions
    for code in solved.solutions:
        for clue in COMBINATION_LOCK.clues:
            assert evaluate(code, clue).satisfies
    assert solved.solutions == sorted(solved.solutions)


def test_demo_puzzle(store):
    assert store.get("two-digit-demo").solutions == [(2, 1)]


def test_store_solves_once_and_reuses_the_result(store):
    first = store.get("two-digit-demo")
    second = store.get("two-digit-demo")
    assert first is second


def test_store_unknown_name(store):
    assert store.get("missing") is None


def test_store_names():
    store = PuzzleStore()
    assert store.names() == sorted(PUZZLES)
    assert [p.name for p in store.puzzles()] == store.names()


def test_store_unsolvable_puzzle_is_not_an_error(caplog):
    broken = Puzzle(
        name="broken",
        title="Contradiction",
        clues=(Clue((0, 0), 2, 2), Clue((1, 1), 2, 2)),
        code_length=2,
    )
    store = PuzzleStore({"broken": broken})

    with caplog.at_level(logging.WARNING, logger="codelock.store"):
        solved = store.get("broken")

    assert solved.solutions == []
    assert solved.solvable is False
    assert "no code consistent" in caplog.text
