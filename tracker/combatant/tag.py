"""
Tag module for the tracker.

Tags are short annotations attached to a combatant ("Prone", "Blessed"),
optionally expiring after a number of turns.
"""

from typing import Any, Literal

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DurationTiming = Literal["StartOfTurn", "EndOfTurn"]


class Tag(BaseModel):
    """
    An annotation on a combatant.

    Attributes:
        text (str):
            The tag text.
        duration_remaining (int):
            Turns left before the tag expires, 0 for a permanent tag.
        duration_timing (DurationTiming | None):
            Whether the duration ticks at the start or end of a turn.
        duration_combatant_id (str):
            Id of the combatant whose turn ticks the duration.
        combatant (Any):
            The combatant carrying the tag. Not serialized.

    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(alias="Text")
    duration_remaining: int = Field(default=0, alias="DurationRemaining", ge=0)
    duration_timing: DurationTiming | None = Field(default=None, alias="DurationTiming")
    duration_combatant_id: str = Field(default="", alias="DurationCombatantId")
    combatant: Any = Field(default=None, exclude=True, repr=False)

    @property
    def has_duration(self) -> bool:
        """Returns True if the tag expires after a number of turns."""
        return self.duration_remaining > 0 and self.duration_timing is not None

    def to_dict(self) -> dict[str, Any]:
        """Serializes the tag using its JSON keys."""
        return self.model_dump(by_alias=True)

    def __str__(self) -> str:
        if self.has_duration:
            return f"{self.text} ({self.duration_remaining})"
        return self.text

    @staticmethod
    def get_legacy_tags(tags: Any, combatant: Any) -> list["Tag"]:
        """
        Converts saved tags into `Tag` instances bound to a combatant.

        Older saves stored tags as bare strings; newer ones store objects.
        Both shapes, as well as existing `Tag` instances, are accepted.
        Entries that match neither shape are logged and skipped.

        Args:
            tags (Any): The saved tags, usually a list.
            combatant (Any): The combatant the tags belong to.

        Returns:
            list[Tag]: The converted tags, in their original order.

        """
        if not tags:
            return []
        if not isinstance(tags, list):
            log_warning(
                f"Saved tags should be a list, got: {type(tags).__name__}",
                {"tags": tags, "context": "legacy_tag_migration"},
            )
            return []

        converted: list[Tag] = []
        for index, item in enumerate(tags):
            if isinstance(item, Tag):
                converted.append(item.model_copy(update={"combatant": combatant}))
            elif isinstance(item, str):
                converted.append(Tag(text=item, combatant=combatant))
            elif isinstance(item, dict):
                try:
                    tag = Tag.model_validate(item)
                except ValidationError as e:
                    log_warning(
                        f"Skipping invalid saved tag at index {index}",
                        {"tag": item, "error": str(e), "context": "legacy_tag_migration"},
                    )
                    continue
                tag.combatant = combatant
                converted.append(tag)
            else:
                log_warning(
                    f"Skipping saved tag of unknown type {type(item).__name__}",
                    {"tag": item, "index": index, "context": "legacy_tag_migration"},
                )
        return converted
