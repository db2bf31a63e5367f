"""
Combatant module for the combat tracker.

Stat blocks, tags, saved records, the name index, the Combatant entity and
its spectator projection.
"""

from .display import (
    StaticCombatantViewModel,
    get_ac_display,
    get_health_label,
    get_hp_color,
    get_hp_display,
    to_static_view_model,
)
from .main import Combatant
from .name_index import combatant_counts_by_name
from .saved_combatant import SavedCombatant
from .statblock import AbilityScores, StatBlock, ValueAndNotes
from .tag import Tag

__all__ = [
    "AbilityScores",
    "Combatant",
    "SavedCombatant",
    "StatBlock",
    "StaticCombatantViewModel",
    "Tag",
    "ValueAndNotes",
    "combatant_counts_by_name",
    "get_ac_display",
    "get_health_label",
    "get_hp_color",
    "get_hp_display",
    "to_static_view_model",
]
