"""
Utilities module for the tracker.

Provides common utility functions and helpers, including console printing
with rich formatting, ability modifiers and unique token generation.
"""

from __future__ import annotations

import itertools
import secrets
from typing import Any

from rich.console import Console
from rich.rule import Rule

# Initialize the rich console.
_console = Console(markup=True, width=120, force_terminal=True, force_jupyter=False)

# Process-wide sequence appended to every generated token.
_token_sequence = itertools.count(1)


def cprint(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output.

    Args:
        *args: Arguments to pass to the console print function.
        **kwargs: Keyword arguments to pass to the console print function.

    """
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output with a rule.

    Args:
        *args: Arguments to pass to the Rule constructor.
        **kwargs: Keyword arguments to pass to the Rule constructor.

    """
    _console.print(Rule(*args, **kwargs))


# ---- Stat Modifier ----
def get_stat_modifier(score: int) -> int:
    """
    Calculates the D&D ability score modifier.

    Args:
        score (int): The ability score.

    Returns:
        int: The modifier for the given ability score.

    """
    return (score - 10) // 2


# ---- Identity ----
def probably_unique_string(length: int = 8) -> str:
    """
    Generates a short random token followed by a process-wide sequence
    number, so two calls in the same session never return the same value.

    Args:
        length (int): The number of random characters. Defaults to 8.

    Returns:
        str: A lowercase alphanumeric token.

    """
    alphabet = "abcdefghijklmnopqrstuvwxyz0123456789"
    token = "".join(secrets.choice(alphabet) for _ in range(length))
    return f"{token}{next(_token_sequence):x}"
