"""
Command line for the code-lock engine.

Commands:
    codelock solve    [--puzzle NAME] [--distinct]  : print every solution
    codelock validate CODE [--puzzle NAME]          : live verdict per clue
    codelock check    CODE [--puzzle NAME]          : does CODE open the lock?
    codelock explain  CODE INDEX [--puzzle NAME]    : spell out one clue
    codelock serve    [--host HOST] [--port PORT]   : run the HTTP API

CODE is written digit by digit; '-' (or _ ? .) marks an unset position,
e.g. "5-3-4".
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import get_settings
from .engine import Explanation, explain, format_code, is_solution, parse_partial, validate_partial
from .policy import distinct_only
from .puzzles import PUZZLES, get_puzzle
from .store import PuzzleStore, SolvedPuzzle
from .types import Verdict

logger = logging.getLogger(__name__)

VERDICT_BADGES = {
    Verdict.VALID: "[ok]",
    Verdict.INVALID: "[x] ",
    Verdict.UNKNOWN: "[?] ",
}


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_explanation(index: int, label: str, explanation: Explanation) -> str:
    lines = [
        f"Clue #{index + 1}: {label}",
        f"  guess:     {explanation.guess}",
        f"  your code: {explanation.code}",
    ]
    if explanation.evaluation is None:
        lines.extend(f"  {note}" for note in explanation.notes)
        return "\n".join(lines)

    lines.append("")
    lines.append("  positions:")
    for check in explanation.positions:
        mark = "match" if check.match else "differs"
        lines.append(f"    {check.index + 1}: {check.guess_digit} vs {check.code_digit} ({mark})")

    lines.append("  shared digits:")
    if explanation.shared_digits:
        for digit, count in explanation.shared_digits.items():
            lines.append(f"    {digit} x{count}")
    else:
        lines.append("    none")

    ev = explanation.evaluation
    lines.append("")
    lines.append(f"  correct digits: {ev.digit_matches}, in the right place: {ev.position_matches}")
    lines.append(f"  verdict: {explanation.verdict.value}")
    lines.extend(f"  - {note}" for note in explanation.notes)
    return "\n".join(lines)


# =============================================================================
# COMMANDS
# =============================================================================

def _load(store: PuzzleStore, name: str) -> SolvedPuzzle:
    # KeyError listing the known puzzles for a name outside the catalogue
    get_puzzle(name)
    solved = store.get(name)
    if solved is None:
        raise KeyError(f"Puzzle {name!r} is not loaded in this store.")
    return solved


def _read_code(text: str, solved: SolvedPuzzle):
    code = parse_partial(text)
    expected = solved.puzzle.code_length
    if len(code) != expected:
        raise ValueError(f"Code must have exactly {expected} positions for this puzzle.")
    return code


def cmd_solve(args: argparse.Namespace, store: PuzzleStore) -> int:
    solved = _load(store, args.puzzle)
    solutions = distinct_only(solved.solutions) if args.distinct else solved.solutions
    for code in solutions:
        print(format_code(code))
    print(f"{len(solutions)} solution(s)", file=sys.stderr)
    return 0


def cmd_validate(args: argparse.Namespace, store: PuzzleStore) -> int:
    solved = _load(store, args.puzzle)
    code = _read_code(args.code, solved)
    for i, clue in enumerate(solved.puzzle.clues):
        verdict = validate_partial(code, clue)
        print(f"{VERDICT_BADGES[verdict]} {i + 1}. {format_code(clue.guess)}  {clue.label}")
    return 0


def cmd_check(args: argparse.Namespace, store: PuzzleStore) -> int:
    solved = _load(store, args.puzzle)
    code = _read_code(args.code, solved)
    if is_solution(code, solved.solutions):
        print("unlocked")
        return 0
    print("wrong combination")
    return 1


def cmd_explain(args: argparse.Namespace, store: PuzzleStore) -> int:
    solved = _load(store, args.puzzle)
    clues = solved.puzzle.clues
    # 1-based on the command line, like the printed clue list
    index = args.index - 1
    if index < 0 or index >= len(clues):
        raise ValueError(f"Clue index must be between 1 and {len(clues)}.")
    code = _read_code(args.code, solved)
    print(format_explanation(index, clues[index].label, explain(code, clues[index])))
    return 0


def cmd_serve(args: argparse.Namespace, store: PuzzleStore) -> int:
    import uvicorn

    logger.info("serving the code-lock API on %s:%d", args.host, args.port)
    uvicorn.run("codelock.main:app", host=args.host, port=args.port)
    return 0


def build_parser(default_puzzle: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="codelock", description="Solve and check code-lock puzzles.")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_puzzle_flag(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--puzzle",
            default=default_puzzle,
            help=f"Puzzle name ({', '.join(sorted(PUZZLES))}); default: {default_puzzle}",
        )

    p = sub.add_parser("solve", help="Print every code consistent with all clues")
    add_puzzle_flag(p)
    p.add_argument("--distinct", action="store_true", help="Only codes without repeated digits")
    p.set_defaults(func=cmd_solve)

    p = sub.add_parser("validate", help="Per-clue verdict for a (partial) code")
    p.add_argument("code")
    add_puzzle_flag(p)
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser("check", help="Check whether a code opens the lock")
    p.add_argument("code")
    add_puzzle_flag(p)
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("explain", help="Explain how a code compares with one clue")
    p.add_argument("code")
    p.add_argument("index", type=int, help="Clue number, starting at 1")
    add_puzzle_flag(p)
    p.set_defaults(func=cmd_explain)

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None, store: Optional[PuzzleStore] = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = build_parser(settings.default_puzzle).parse_args(argv)
    try:
        return args.func(args, store or PuzzleStore())
    except (KeyError, ValueError) as exc:
        # KeyError str() wraps the message in quotes
        message = exc.args[0] if exc.args else str(exc)
        print(f"error: {message}", file=sys.stderr)
        return 2
