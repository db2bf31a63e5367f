"""
Shared fixtures for the tracker tests.
"""

import pytest
from tracker.core.constants import HPVerbosity
from tracker.core.settings import PlayerViewSettings, RulesSettings, Settings
from tracker.encounter.main import Encounter


@pytest.fixture
def goblin_json():
    return {
        "Id": "goblin",
        "Name": "Goblin",
        "AC": {"Value": 15, "Notes": "leather armor, shield"},
        "HP": {"Value": 7, "Notes": "2d6"},
        "Abilities": {"Str": 8, "Dex": 14, "Con": 10, "Int": 10, "Wis": 8, "Cha": 8},
    }


@pytest.fixture
def ogre_json():
    return {
        "Id": "ogre",
        "Name": "Ogre",
        "AC": {"Value": 11, "Notes": "hide armor"},
        "HP": {"Value": 30, "Notes": "7d10+27"},
        "Abilities": {"Str": 19, "Dex": 8, "Con": 16, "Int": 5, "Wis": 7, "Cha": 7},
    }


@pytest.fixture
def fighter_json():
    return {
        "Id": "fighter",
        "Name": "Tordek",
        "Player": "player",
        "AC": {"Value": 18, "Notes": "chain mail, shield"},
        "HP": {"Value": 20, "Notes": "3d10"},
        "Abilities": {"Str": 16, "Dex": 12, "Con": 16, "Int": 8, "Wis": 10, "Cha": 10},
        "InitiativeModifier": 1,
    }


@pytest.fixture
def make_settings():
    """Builds a settings snapshot from keyword overrides."""

    def _make(
        roll_monster_hp: bool = False,
        allow_negative_hp: bool = False,
        verbosity: HPVerbosity = HPVerbosity.COLORED_LABEL,
    ) -> Settings:
        return Settings(
            rules=RulesSettings(
                roll_monster_hp=roll_monster_hp,
                allow_negative_hp=allow_negative_hp,
            ),
            player_view=PlayerViewSettings(monster_hp_verbosity=verbosity),
        )

    return _make


@pytest.fixture
def encounter():
    return Encounter()
