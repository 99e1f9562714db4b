"""
Explicit validation & Pydantic models
- Define the structure of API requests and responses.
- Digit ranges are checked here; lengths are checked by the routes because
  they depend on the puzzle.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from .engine import Clue, Evaluation, Explanation
from .types import Verdict, DIGIT_MIN, DIGIT_MAX, DEFAULT_CODE_LENGTH


def _check_digits(values: List[Optional[int]], allow_unset: bool) -> None:
    for digit in values:
        if digit is None and allow_unset:
            continue
        if digit is None or digit < DIGIT_MIN or digit > DIGIT_MAX:
            raise ValueError(f"Each digit must be between {DIGIT_MIN} and {DIGIT_MAX} inclusive.")


# 1. A clue as sent by a client
class ClueIn(BaseModel):
    guess: List[int] = Field(..., min_length=1, description="The guessed code")
    target_digit_matches: int = Field(..., ge=0, description="Digits shared with the hidden code (any position)")
    target_position_matches: int = Field(..., ge=0, description="Digits in exactly the right place")
    label: str = Field("", description="Free text, not used by the solver")

    @field_validator("guess")
    @classmethod
    def validate_digits(cls, guess: List[int]) -> List[int]:
        _check_digits(guess, allow_unset=False)
        return guess

    def to_clue(self) -> Clue:
        # Count ranges depend on the guess length; Clue raises ValueError
        return Clue(
            guess=tuple(self.guess),
            target_digit_matches=self.target_digit_matches,
            target_position_matches=self.target_position_matches,
            label=self.label,
        )


# 2. A configured clue, as shown to players
class ClueOut(BaseModel):
    index: int = Field(..., description="Position of the clue in its puzzle")
    guess: List[int]
    target_digit_matches: int
    target_position_matches: int
    label: str

    @classmethod
    def from_clue(cls, index: int, clue: Clue) -> "ClueOut":
        return cls(
            index=index,
            guess=list(clue.guess),
            target_digit_matches=clue.target_digit_matches,
            target_position_matches=clue.target_position_matches,
            label=clue.label,
        )


class PuzzleSummary(BaseModel):
    name: str
    title: str
    code_length: int


# 3. One puzzle with its clues; the solutions themselves are never returned
class PuzzleOut(PuzzleSummary):
    clues: List[ClueOut]
    solution_count: int = Field(..., description="How many codes satisfy every clue")
    solvable: bool = Field(..., description="False means the clues contradict each other")


# 4. Player input
class CodeRequest(BaseModel):
    code: List[int] = Field(..., description="A fully specified code")

    @field_validator("code")
    @classmethod
    def validate_digits(cls, code: List[int]) -> List[int]:
        _check_digits(code, allow_unset=False)
        return code

    model_config = {
        "json_schema_extra": {"examples": [{"code": [5, 1, 3, 2, 4]}]}
    }


class PartialCodeRequest(BaseModel):
    code: List[Optional[int]] = Field(..., description="Code being typed; null = not filled in yet")

    @field_validator("code")
    @classmethod
    def validate_digits(cls, code: List[Optional[int]]) -> List[Optional[int]]:
        _check_digits(code, allow_unset=True)
        return code

    model_config = {
        "json_schema_extra": {"examples": [{"code": [5, None, 3, None, 4]}]}
    }


# 5. Live feedback
class ClueVerdictOut(BaseModel):
    index: int
    label: str
    verdict: Verdict


class ValidateResponse(BaseModel):
    complete: bool = Field(..., description="True once every position is filled in")
    verdicts: List[ClueVerdictOut]


class CheckResponse(BaseModel):
    solved: bool
    note: str


# 6. Explanations
class EvaluationOut(BaseModel):
    digit_matches: int
    position_matches: int
    satisfies: bool

    @classmethod
    def from_evaluation(cls, evaluation: Evaluation) -> "EvaluationOut":
        return cls(
            digit_matches=evaluation.digit_matches,
            position_matches=evaluation.position_matches,
            satisfies=evaluation.satisfies,
        )


class PositionCheckOut(BaseModel):
    index: int
    guess_digit: int
    code_digit: int
    match: bool


class ExplanationOut(BaseModel):
    clue: ClueOut
    verdict: Verdict
    guess: str = Field(..., description="The clue's guess, e.g. '82619'")
    code: str = Field(..., description="The player's code, '-' for unset positions")
    positions: List[PositionCheckOut]
    shared_digits: Dict[int, int] = Field(..., description="digit -> how many times it is shared")
    evaluation: Optional[EvaluationOut] = None
    notes: List[str]

    @classmethod
    def from_explanation(cls, clue: ClueOut, explanation: Explanation) -> "ExplanationOut":
        return cls(
            clue=clue,
            verdict=explanation.verdict,
            guess=explanation.guess,
            code=explanation.code,
            positions=[
                PositionCheckOut(
                    index=p.index, guess_digit=p.guess_digit, code_digit=p.code_digit, match=p.match,
                )
                for p in explanation.positions
            ],
            shared_digits=dict(explanation.shared_digits),
            evaluation=(
                EvaluationOut.from_evaluation(explanation.evaluation)
                if explanation.evaluation is not None else None
            ),
            notes=list(explanation.notes),
        )


# 7. Ad-hoc solving
class SolveRequest(BaseModel):
    clues: List[ClueIn] = Field(default_factory=list, description="Empty list = every code matches")
    code_length: int = Field(DEFAULT_CODE_LENGTH, ge=1, description="Digits per code")
    distinct_only: bool = Field(False, description="Drop solutions with a repeated digit")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "clues": [{"guess": [1, 2], "target_digit_matches": 2, "target_position_matches": 0}],
                    "code_length": 2,
                }
            ]
        }
    }


class SolveResponse(BaseModel):
    count: int
    solutions: List[List[int]]


class EvaluateRequest(BaseModel):
    candidate: List[int]
    clue: ClueIn

    @field_validator("candidate")
    @classmethod
    def validate_digits(cls, candidate: List[int]) -> List[int]:
        _check_digits(candidate, allow_unset=False)
        return candidate
