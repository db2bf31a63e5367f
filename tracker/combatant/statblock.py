"""
Stat block module for the tracker.

Defines the static character/monster template a combatant derives its base
stats from. Stat blocks are stored as JSON with PascalCase keys; every model
here accepts either the JSON key or the Python field name.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tracker.core.constants import PlayerType


class ValueAndNotes(BaseModel):
    """A numeric stat with free-form notes, e.g. HP 13 with notes "3d8"."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    value: int = Field(default=0, alias="Value", description="Static value")
    notes: str = Field(default="", alias="Notes", description="Free-form notes")


class AbilityScores(BaseModel):
    """The six ability scores (or, on a combatant, their modifiers)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    strength: int = Field(default=10, alias="Str")
    dexterity: int = Field(default=10, alias="Dex")
    constitution: int = Field(default=10, alias="Con")
    intelligence: int = Field(default=10, alias="Int")
    wisdom: int = Field(default=10, alias="Wis")
    charisma: int = Field(default=10, alias="Cha")

    def as_dict(self) -> dict[str, int]:
        """Returns the scores keyed by short name."""
        return self.model_dump(by_alias=True)


class StatBlock(BaseModel):
    """
    Static definition of a character or monster.

    Unknown keys (actions, speed, senses and so on) are kept as extra fields
    so a stat block survives a save/restore cycle unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    id: str = Field(default="", alias="Id")
    name: str = Field(default="", alias="Name")
    ac: ValueAndNotes = Field(
        default_factory=lambda: ValueAndNotes(value=10),
        alias="AC",
    )
    hp: ValueAndNotes = Field(
        default_factory=lambda: ValueAndNotes(value=1, notes="1d4"),
        alias="HP",
    )
    abilities: AbilityScores = Field(
        default_factory=AbilityScores,
        alias="Abilities",
    )
    player: str = Field(
        default="",
        alias="Player",
        description='"player" for player characters, empty for monsters',
    )
    initiative_modifier: int | None = Field(default=None, alias="InitiativeModifier")
    initiative_advantage: bool = Field(default=False, alias="InitiativeAdvantage")

    @property
    def player_type(self) -> PlayerType:
        """Returns whether this stat block is a player or a monster."""
        if self.player == PlayerType.PLAYER.value:
            return PlayerType.PLAYER
        return PlayerType.MONSTER

    @property
    def is_player(self) -> bool:
        """Returns True for player character stat blocks."""
        return self.player_type == PlayerType.PLAYER

    def with_hp_value(self, value: int) -> "StatBlock":
        """
        Returns a copy of this stat block with a different static HP value.

        Args:
            value (int): The new HP value.

        Returns:
            StatBlock: The updated copy; this instance is left untouched.

        """
        return self.model_copy(update={"hp": self.hp.model_copy(update={"value": value})})

    def to_dict(self) -> dict[str, Any]:
        """Serializes the stat block using its JSON keys."""
        return self.model_dump(by_alias=True)

    @staticmethod
    def default() -> "StatBlock":
        """Returns the blank stat block new templates are merged over."""
        return StatBlock()

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "StatBlock":
        """
        Builds a stat block from partial JSON data.

        Top-level keys present in `data` replace those of the default stat
        block; missing keys keep their default.

        Args:
            data (dict[str, Any]): The stat block JSON.

        Returns:
            StatBlock: The merged stat block.

        """
        merged = {**StatBlock.default().to_dict(), **data}
        return StatBlock.model_validate(merged)
