"""
Display projection module for the tracker.

Flattens a combatant into the read-only view model sent to spectators. HP
detail for monsters is reduced according to the player view settings; HP
labels use rich markup.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tracker.core.constants import HP_COLOR_MAX_INTENSITY, HealthLabel, HPVerbosity
from tracker.core.settings import Settings

from .main import Combatant
from .tag import Tag


class StaticCombatantViewModel(BaseModel):
    """What spectators are allowed to see about one combatant."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(alias="Name")
    ac: int = Field(alias="AC")
    ac_display: bool = Field(alias="ACDisplay")
    hp_display: str = Field(alias="HPDisplay")
    hp_color: str = Field(alias="HPColor")
    initiative: int = Field(alias="Initiative")
    id: str = Field(alias="Id")
    tags: list[Tag] = Field(default_factory=list, alias="Tags")
    is_player_character: bool = Field(alias="IsPlayerCharacter")

    def to_dict(self) -> dict[str, Any]:
        """Serializes the view model using its JSON keys."""
        return self.model_dump(by_alias=True)


def to_static_view_model(
    combatant: Combatant,
    settings: Settings,
) -> StaticCombatantViewModel:
    """
    Projects a combatant into its spectator view model.

    Args:
        combatant (Combatant): The combatant to project.
        settings (Settings): The settings snapshot.

    Returns:
        StaticCombatantViewModel: The view model.

    """
    return StaticCombatantViewModel(
        name=combatant.display_name,
        ac=combatant.ac,
        ac_display=get_ac_display(combatant),
        hp_display=get_hp_display(combatant, settings),
        hp_color=get_hp_color(combatant, settings),
        initiative=combatant.initiative,
        id=combatant.id,
        tags=list(combatant.tags),
        is_player_character=combatant.is_player_character,
    )


def get_ac_display(combatant: Combatant) -> bool:
    """Returns True if spectators may see the combatant's AC."""
    return combatant.is_player_character or not combatant.hide_ac


def get_health_label(combatant: Combatant) -> HealthLabel:
    """
    Returns the descriptive HP tier of a combatant.

    Args:
        combatant (Combatant): The combatant.

    Returns:
        HealthLabel: Defeated at 0 or less, Bloodied below half, Hurt below
        max, Healthy otherwise.

    """
    if combatant.current_hp <= 0:
        return HealthLabel.DEFEATED
    if combatant.current_hp < combatant.max_hp / 2:
        return HealthLabel.BLOODIED
    if combatant.current_hp < combatant.max_hp:
        return HealthLabel.HURT
    return HealthLabel.HEALTHY


def get_hp_display(combatant: Combatant, settings: Settings) -> str:
    """
    Returns the HP text shown to spectators.

    Args:
        combatant (Combatant): The combatant.
        settings (Settings): The settings snapshot.

    Returns:
        str: The HP text, possibly containing rich markup.

    """
    verbosity = settings.player_view.monster_hp_verbosity

    if combatant.is_player_character or verbosity == HPVerbosity.ACTUAL_HP:
        if combatant.temporary_hp:
            return (
                f"{combatant.current_hp}+{combatant.temporary_hp}/{combatant.max_hp}"
            )
        return f"{combatant.current_hp}/{combatant.max_hp}"

    if verbosity == HPVerbosity.HIDE_ALL:
        return ""

    if verbosity == HPVerbosity.DAMAGE_TAKEN:
        return str(combatant.current_hp - combatant.max_hp)

    label = get_health_label(combatant)
    if verbosity.hides_color:
        return label.value
    return label.colorize()


def get_hp_color(combatant: Combatant, settings: Settings) -> str:
    """
    Returns the colour of the HP text.

    Monsters shown without colour get "auto", leaving styling to the
    renderer. Everyone else gets a green to red gradient following the
    fraction of HP left.

    Args:
        combatant (Combatant): The combatant.
        settings (Settings): The settings snapshot.

    Returns:
        str: "auto" or an "rgb(r,g,b)" colour.

    """
    verbosity = settings.player_view.monster_hp_verbosity
    if not combatant.is_player_character and verbosity.hides_color:
        return "auto"

    max_hp = combatant.max_hp
    if max_hp <= 0:
        return f"rgb({HP_COLOR_MAX_INTENSITY},0,0)"
    # Negative or excess HP would push a channel out of range.
    current_hp = min(max(combatant.current_hp, 0), max_hp)
    green = math.floor((current_hp / max_hp) * HP_COLOR_MAX_INTENSITY)
    red = math.floor((max_hp - current_hp) / max_hp * HP_COLOR_MAX_INTENSITY)
    return f"rgb({red},{green},0)"
