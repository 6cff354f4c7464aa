"""Runtime settings for the jilox driver, read from the environment.

A ``.env`` file in the working directory is honored.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_HISTORY_FILE = "~/.jilox_history"
DEFAULT_PROMPT = "> "
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    history_file: str = os.path.expanduser(DEFAULT_HISTORY_FILE)
    prompt: str = DEFAULT_PROMPT


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        log_level=os.getenv("JILOX_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        history_file=os.path.expanduser(os.getenv("JILOX_HISTORY_FILE", DEFAULT_HISTORY_FILE)),
        prompt=os.getenv("JILOX_PROMPT", DEFAULT_PROMPT),
    )
