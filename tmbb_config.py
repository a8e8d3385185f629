"""
Settings for the tmbb command, read from the environment.

A .env file in the working directory is loaded first, so the same variables
can live there:
    TMBB_MAX_STEPS=0      # step budget for Run; 0 runs until halt
    TMBB_VERBOSE=false    # print every step
    TMBB_HISTORY=false    # show the execution history array after Run
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


@dataclass
class Settings:
    max_steps: Optional[int] = None
    verbose: bool = False
    history: bool = False


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got '{value}'")


def load_settings(dotenv_path=None) -> Settings:
    """
    Load settings from the environment (and .env).

    Args:
        dotenv_path: Optional path to a .env file; by default one is searched
                     for from the working directory upwards
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))

    raw_steps = os.environ.get('TMBB_MAX_STEPS', '0').strip()
    try:
        max_steps = int(raw_steps)
    except ValueError:
        raise ValueError(f"TMBB_MAX_STEPS must be an integer, got '{raw_steps}'")
    if max_steps < 0:
        raise ValueError(f"TMBB_MAX_STEPS must be >= 0, got {max_steps}")

    return Settings(
        max_steps=max_steps or None,
        verbose=_env_bool('TMBB_VERBOSE', False),
        history=_env_bool('TMBB_HISTORY', False),
    )
