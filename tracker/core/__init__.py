"""
Core system module for the combat tracker.

This module contains the fundamental components the combatant engine relies
on: constants, dice rolling, the rules helper, settings, telemetry, logging
and console utilities.
"""

from .constants import (
    COMBATANT_DEFEATED_EVENT,
    HP_COLOR_MAX_INTENSITY,
    AdvantageMode,
    HealthLabel,
    HPVerbosity,
    PlayerType,
)
from .dice_parser import (
    DiceParser,
    RollBreakdown,
)
from .metrics import (
    MetricEvent,
    Metrics,
)
from .rules import (
    DefaultRules,
)
from .settings import (
    PlayerViewSettings,
    RulesSettings,
    Settings,
    load_settings,
)
from .utils import (
    cprint,
    crule,
    get_stat_modifier,
    probably_unique_string,
)

__all__ = [
    # Import from constants.py
    "COMBATANT_DEFEATED_EVENT",
    "HP_COLOR_MAX_INTENSITY",
    "AdvantageMode",
    "HealthLabel",
    "HPVerbosity",
    "PlayerType",
    # Import from dice_parser.py
    "DiceParser",
    "RollBreakdown",
    # Import from metrics.py
    "MetricEvent",
    "Metrics",
    # Import from rules.py
    "DefaultRules",
    # Import from settings.py
    "PlayerViewSettings",
    "RulesSettings",
    "Settings",
    "load_settings",
    # Import from utils.py
    "cprint",
    "crule",
    "get_stat_modifier",
    "probably_unique_string",
]
