"""
Single place to:
- Read settings from env (APP_ENV, default puzzle, solve limit, log level)
- Provide get_settings() for the API and the CLI
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# dev convenience; in prod the platform injects env vars
load_dotenv()


@dataclass(frozen=True)
class Settings:
    app_env: str
    default_puzzle: str
    # /solve walks 10**code_length candidates; keep it bounded
    max_solve_length: int
    log_level: str


def get_settings() -> Settings:
    raw_max = os.getenv("CODELOCK_MAX_SOLVE_LENGTH", "6")
    try:
        max_solve_length = int(raw_max)
    except ValueError:
        raise RuntimeError(f"CODELOCK_MAX_SOLVE_LENGTH must be an integer, got {raw_max!r}.") from None

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        default_puzzle=os.getenv("CODELOCK_PUZZLE", "combination-lock"),
        max_solve_length=max_solve_length,
        log_level=os.getenv("CODELOCK_LOG_LEVEL", "INFO").upper(),
    )
