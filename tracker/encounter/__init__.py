"""
Encounter module for the combat tracker.
"""

from .main import Encounter, SavedEncounter, load_encounter

__all__ = [
    "Encounter",
    "SavedEncounter",
    "load_encounter",
]
