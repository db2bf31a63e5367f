"""
Rules helper module for the tracker.

Converts ability scores to modifiers, rolls ability checks with optional
advantage, and evaluates dice expressions.
"""

import random

from .constants import AdvantageMode
from .dice_parser import DiceParser, RollBreakdown
from .utils import get_stat_modifier


class DefaultRules:
    """
    D&D 5e rules used by combatants and encounters.

    Every method is a pure function of its inputs and the random number
    generator, so a test double only needs to override the method it cares
    about.
    """

    def get_modifier_from_score(self, score: int) -> int:
        """
        Returns the modifier for an ability score.

        Args:
            score (int): The ability score.

        Returns:
            int: The ability modifier.

        """
        return get_stat_modifier(score)

    def ability_check(
        self,
        bonus: int,
        advantage_mode: AdvantageMode | None = None,
    ) -> int:
        """
        Rolls a d20 ability check.

        Args:
            bonus (int): The modifier added to the kept die.
            advantage_mode (AdvantageMode | None): Roll twice and keep the
                higher (advantage) or lower (disadvantage) die.

        Returns:
            int: The check result.

        """
        roll = random.randint(1, 20)
        if advantage_mode == AdvantageMode.ADVANTAGE:
            roll = max(roll, random.randint(1, 20))
        elif advantage_mode == AdvantageMode.DISADVANTAGE:
            roll = min(roll, random.randint(1, 20))
        return roll + bonus

    def roll_dice_expression(self, expression: str) -> RollBreakdown:
        """
        Rolls a dice expression.

        Args:
            expression (str): The expression to roll, e.g. "2d8+4".

        Returns:
            RollBreakdown: The roll result.

        Raises:
            ValueError: If the expression is malformed.

        """
        return DiceParser.roll(expression)
