"""
Dice parser module for the tracker.

Provides a safe dice expression roller used to roll monster hit points from
stat block notes such as "2d8+4", supporting dice terms combined with plain
integer arithmetic.
"""

import random
import re

from catchery import log_warning
from pydantic import BaseModel, Field


class RollBreakdown(BaseModel):
    """Class to hold roll breakdown information."""

    total: int = Field(
        description="Total roll result",
    )
    description: str = Field(
        description="Description of the roll",
    )
    rolls: list[int] = Field(
        description="List of individual dice rolls",
        default_factory=list,
    )


class DiceParser:
    """Safe parser for dice expressions without using eval() on user input."""

    # A dice term is never glued to another term or to a number.
    DICE_PATTERN = re.compile(r"(?<![\dD])(\d*)D(\d+)(?![\dD])")
    SIMPLE_MATH = re.compile(r"^[\d\s\+\-\*\/\(\)]+$")
    MAX_DICE = 100
    MAX_SIDES = 1000

    @staticmethod
    def roll(expression: str) -> RollBreakdown:
        """
        Safely parse and roll a dice expression.

        Args:
            expression (str): Dice expression like "1d20+5" or "2d6+1d4".

        Returns:
            RollBreakdown: The total, a readable description and every die rolled.

        Raises:
            ValueError: If the expression is empty, malformed or out of bounds.

        """
        if not expression or not expression.strip():
            raise ValueError("Invalid dice expression: empty")

        expr = expression.strip().upper()

        if expr.isdigit():
            return RollBreakdown(total=int(expr), description=expr)

        details: list[str] = []
        rolls: list[int] = []

        def roll_dice(match: re.Match[str]) -> str:
            """Rolls a single dice term and returns its total as text."""
            count_str, sides_str = match.groups()
            count = int(count_str) if count_str else 1
            sides = int(sides_str)

            if count <= 0:
                raise ValueError(f"Invalid dice count: {count}")
            if count > DiceParser.MAX_DICE:
                raise ValueError(f"Too many dice: {count}")
            if sides <= 0:
                raise ValueError(f"Invalid dice sides: {sides}")
            if sides > DiceParser.MAX_SIDES:
                raise ValueError(f"Too many sides: {sides}")

            term_rolls = [random.randint(1, sides) for _ in range(count)]
            rolls.extend(term_rolls)

            if count == 1:
                details.append(f"d{sides}({term_rolls[0]})")
            else:
                details.append(f"{count}d{sides}({'+'.join(map(str, term_rolls))})")

            return str(sum(term_rolls))

        processed = DiceParser.DICE_PATTERN.sub(roll_dice, expr)

        # Exponentiation is rejected: "9**9**9" would never finish.
        if not DiceParser.SIMPLE_MATH.match(processed) or "**" in processed:
            log_warning(
                f"Unsafe dice expression: {expression}",
                {"expression": expression, "processed": processed},
            )
            raise ValueError(f"Unsafe expression: {expression}")

        try:
            # Only digits, whitespace and arithmetic operators remain here.
            result = eval(processed, {"__builtins__": {}}, {})
        except (SyntaxError, ZeroDivisionError, TypeError) as e:
            raise ValueError(f"Invalid expression '{expression}': {e}") from e
        if isinstance(result, bool) or not isinstance(result, (int, float)):
            raise ValueError(f"Invalid expression '{expression}': not a number")

        terms = iter(details)
        description = DiceParser.DICE_PATTERN.sub(lambda _: next(terms), expr)
        return RollBreakdown(total=int(result), description=description, rolls=rolls)
