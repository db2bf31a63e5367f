"""
Saved combatant module for the tracker.

Defines the persisted shape of a combatant. Only the stat block is required;
every other field falls back to the value a fresh combatant would have.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .statblock import StatBlock


class SavedCombatant(BaseModel):
    """Persisted state of one combatant."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, alias="Id")
    max_hp: int | None = Field(default=None, alias="MaxHP")
    stat_block: StatBlock = Field(alias="StatBlock")
    index_label: int | None = Field(default=None, alias="IndexLabel")
    current_hp: int | None = Field(default=None, alias="CurrentHP")
    temporary_hp: int = Field(default=0, alias="TemporaryHP", ge=0)
    initiative: int = Field(default=0, alias="Initiative")
    initiative_group: str | None = Field(default=None, alias="InitiativeGroup")
    alias: str = Field(default="", alias="Alias")
    tags: list[Any] = Field(default_factory=list, alias="Tags")
    hidden: bool = Field(default=False, alias="Hidden")
    hide_ac: bool = Field(default=True, alias="HideAC")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_legacy_id(cls, value: Any) -> Any:
        """Older saves stored numeric ids; ids are opaque strings now."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("stat_block", mode="before")
    @classmethod
    def _merge_stat_block(cls, value: Any) -> Any:
        """Saved stat blocks may be partial; merge them over the default."""
        if isinstance(value, dict):
            return StatBlock.from_dict(value)
        return value

    @field_validator("alias", mode="before")
    @classmethod
    def _none_alias(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_dict(self) -> dict[str, Any]:
        """Serializes the record using its JSON keys."""
        return self.model_dump(by_alias=True)
