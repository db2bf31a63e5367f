"""
Settings module for the tracker.

Defines the read-only settings snapshot consumed by combatants and the
display projection, and loads it from the JSON settings file.
"""

import json
from pathlib import Path

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import HPVerbosity


class RulesSettings(BaseModel):
    """Rule toggles that change how hit points behave."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    roll_monster_hp: bool = Field(
        default=False,
        alias="RollMonsterHp",
        description="Roll monster max HP from the stat block notes",
    )
    allow_negative_hp: bool = Field(
        default=False,
        alias="AllowNegativeHP",
        description="Let current HP drop below zero",
    )


class PlayerViewSettings(BaseModel):
    """Options for the spectator-facing player view."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    monster_hp_verbosity: HPVerbosity = Field(
        default=HPVerbosity.COLORED_LABEL,
        alias="MonsterHPVerbosity",
        description="How much monster HP detail spectators see",
    )


class Settings(BaseModel):
    """
    Snapshot of the user settings.

    Instances are immutable; changing a setting means building a new
    snapshot and handing it to the encounter.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    rules: RulesSettings = Field(
        default_factory=RulesSettings,
        alias="Rules",
    )
    player_view: PlayerViewSettings = Field(
        default_factory=PlayerViewSettings,
        alias="PlayerView",
    )


def load_settings(filepath: Path) -> Settings:
    """
    Loads settings from a JSON file.

    A missing or unreadable file is not fatal: the problem is logged and the
    default settings are returned.

    Args:
        filepath (Path): The path to the JSON settings file.

    Returns:
        Settings: The loaded settings, or the defaults.

    """
    try:
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        return Settings.model_validate(data)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError) as e:
        log_warning(
            f"Failed to load settings from {filepath}, using defaults: {e}",
            {
                "file_path": str(filepath),
                "error": str(e),
                "context": "settings_file_loading",
            },
        )
        return Settings()
