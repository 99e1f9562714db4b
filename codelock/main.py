'''
Code-lock API (stateless)

Endpoints:
GET  /puzzles                              -> list configured puzzles
GET  /puzzles/{name}                       -> clues & solution count
POST /puzzles/{name}/validate              -> live per-clue verdicts for a partial code
POST /puzzles/{name}/check                 -> does this code open the lock?
POST /puzzles/{name}/clues/{index}/explain -> why a clue does / does not match

Extras:
POST /solve                                -> solve an ad-hoc clue set
POST /evaluate                             -> compare one code with one clue

Nothing is stored per player; the client keeps its own in-progress code.
'''

import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings, Settings
from .engine import evaluate, explain, is_complete, is_solution, solve, validate_partial
from .policy import distinct_only
from .store import PuzzleStore, SolvedPuzzle

from .schemas import (
    CheckResponse,
    ClueOut,
    ClueVerdictOut,
    CodeRequest,
    EvaluateRequest,
    EvaluationOut,
    ExplanationOut,
    PartialCodeRequest,
    PuzzleOut,
    PuzzleSummary,
    SolveRequest,
    SolveResponse,
    ValidateResponse,
)

logger = logging.getLogger(__name__)

settings = get_settings()

# One store per process; routes get it through Depends so tests can swap it
_store = PuzzleStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Dev convenience: solve the default puzzle up front so the first request is fast
    if settings.app_env == "local":
        _store.get(settings.default_puzzle)
    yield


app = FastAPI(title="Code Lock API", version="1.0.0", lifespan=lifespan)

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


def get_store() -> PuzzleStore:
    return _store


def get_app_settings() -> Settings:
    return settings


def _solved_or_404(name: str, store: PuzzleStore) -> SolvedPuzzle:
    solved = store.get(name)
    if solved is None:
        raise HTTPException(status_code=404, detail="Puzzle not found")
    return solved


def _length_guard(code: list, solved: SolvedPuzzle) -> None:
    expected = solved.puzzle.code_length
    if len(code) != expected:
        raise HTTPException(status_code=400, detail=f"Code must have exactly {expected} digits for this puzzle.")

# ---------------- Routes ----------------

@app.get("/puzzles", response_model=List[PuzzleSummary], summary="List puzzles")
def list_puzzles(store: PuzzleStore = Depends(get_store)) -> List[PuzzleSummary]:
    return [
        PuzzleSummary(name=puzzle.name, title=puzzle.title, code_length=puzzle.code_length)
        for puzzle in store.puzzles()
    ]


@app.get("/puzzles/{name}", response_model=PuzzleOut, summary="Get a puzzle's clues")
def get_puzzle(name: str, store: PuzzleStore = Depends(get_store)) -> PuzzleOut:
    solved = _solved_or_404(name, store)
    puzzle = solved.puzzle
    return PuzzleOut(
        name=puzzle.name,
        title=puzzle.title,
        code_length=puzzle.code_length,
        clues=[ClueOut.from_clue(i, clue) for i, clue in enumerate(puzzle.clues)],
        solution_count=len(solved.solutions),
        solvable=solved.solvable,
    )


@app.post("/puzzles/{name}/validate", response_model=ValidateResponse, summary="Live feedback for every clue")
def validate_code(
    name: str,
    payload: PartialCodeRequest,
    store: PuzzleStore = Depends(get_store),
) -> ValidateResponse:
    solved = _solved_or_404(name, store)
    _length_guard(payload.code, solved)

    verdicts = [
        ClueVerdictOut(index=i, label=clue.label, verdict=validate_partial(payload.code, clue))
        for i, clue in enumerate(solved.puzzle.clues)
    ]
    return ValidateResponse(complete=is_complete(payload.code), verdicts=verdicts)


@app.post("/puzzles/{name}/check", response_model=CheckResponse, summary="Submit a combination")
def check_code(
    name: str,
    payload: CodeRequest,
    store: PuzzleStore = Depends(get_store),
) -> CheckResponse:
    solved = _solved_or_404(name, store)
    _length_guard(payload.code, solved)

    if is_solution(payload.code, solved.solutions):
        logger.info("puzzle %r unlocked", name)
        return CheckResponse(solved=True, note="Unlocked!")
    return CheckResponse(solved=False, note="Wrong combination. Try again.")


@app.post(
    "/puzzles/{name}/clues/{index}/explain",
    response_model=ExplanationOut,
    summary="Explain how a code compares with one clue",
)
def explain_clue(
    name: str,
    index: int,
    payload: PartialCodeRequest,
    store: PuzzleStore = Depends(get_store),
) -> ExplanationOut:
    solved = _solved_or_404(name, store)
    clues = solved.puzzle.clues
    if index < 0 or index >= len(clues):
        raise HTTPException(status_code=404, detail="Clue not found")
    _length_guard(payload.code, solved)

    clue = clues[index]
    return ExplanationOut.from_explanation(ClueOut.from_clue(index, clue), explain(payload.code, clue))


@app.post("/solve", response_model=SolveResponse, summary="Solve an ad-hoc clue set")
def solve_clues(
    payload: SolveRequest,
    config: Settings = Depends(get_app_settings),
) -> SolveResponse:
    if payload.code_length > config.max_solve_length:
        raise HTTPException(
            status_code=400,
            detail=f"code_length may be at most {config.max_solve_length}.",
        )
    try:
        clues = [clue.to_clue() for clue in payload.clues]
        solutions = solve(clues, payload.code_length)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))

    if payload.distinct_only:
        solutions = distinct_only(solutions)

    return SolveResponse(count=len(solutions), solutions=[list(code) for code in solutions])


@app.post("/evaluate", response_model=EvaluationOut, summary="Compare one code with one clue")
def evaluate_code(payload: EvaluateRequest) -> EvaluationOut:
    try:
        result = evaluate(payload.candidate, payload.clue.to_clue())
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    return EvaluationOut.from_evaluation(result)
