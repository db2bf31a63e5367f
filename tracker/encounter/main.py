"""
Encounter module for the tracker.

The Encounter owns the combatants of one fight, the table of how many of
them share each name, and references to the rules, settings and telemetry
they consume.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field

from tracker.combatant.display import StaticCombatantViewModel, to_static_view_model
from tracker.combatant.main import Combatant
from tracker.combatant.saved_combatant import SavedCombatant
from tracker.combatant.statblock import StatBlock
from tracker.core.logging import log_debug
from tracker.core.metrics import Metrics
from tracker.core.rules import DefaultRules
from tracker.core.settings import Settings


class SavedEncounter(BaseModel):
    """Persisted state of an encounter."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", alias="Name")
    combatants: list[SavedCombatant] = Field(default_factory=list, alias="Combatants")

    def to_dict(self) -> dict[str, Any]:
        """Serializes the encounter using its JSON keys."""
        return self.model_dump(by_alias=True)


class Encounter:
    """
    Container of the combatants taking part in one fight.

    Attributes:
        combatants (list[Combatant]):
            The combatants, in the order they were added.
        combatant_counts_by_name (dict[str, int]):
            How many combatants were registered under each name.
        rules (DefaultRules):
            The rules helper.
        settings (Settings):
            The settings snapshot used by every combatant.
        metrics (Metrics):
            The telemetry sink.

    """

    def __init__(
        self,
        rules: DefaultRules | None = None,
        settings: Settings | None = None,
        metrics: Metrics | None = None,
    ) -> None:
        self.rules = rules or DefaultRules()
        self.settings = settings or Settings()
        self.metrics = metrics or Metrics()
        self.combatants: list[Combatant] = []
        self.combatant_counts_by_name: dict[str, int] = {}

    def add_combatant_from_stat_block(
        self,
        stat_block: StatBlock | dict[str, Any],
        saved_combatant: SavedCombatant | dict[str, Any] | None = None,
    ) -> Combatant:
        """
        Creates a combatant and adds it to the encounter.

        Args:
            stat_block (StatBlock | dict[str, Any]): The stat block or its JSON.
            saved_combatant (SavedCombatant | dict[str, Any] | None):
                The saved record to restore, if any.

        Returns:
            Combatant: The new combatant.

        """
        combatant = Combatant(stat_block, self, saved_combatant)
        self.combatants.append(combatant)
        log_debug(
            f"Added {combatant.display_name}",
            {"id": combatant.id, "max_hp": combatant.max_hp},
        )
        return combatant

    def remove_combatant(self, combatant: Combatant) -> None:
        """
        Removes a combatant from the encounter.

        The name count table is left as is, so the remaining combatants keep
        their labels.

        Args:
            combatant (Combatant): The combatant to remove.

        """
        if combatant not in self.combatants:
            log_warning(
                f"Cannot remove {combatant.display_name}: not in the encounter",
                {"id": combatant.id, "context": "remove_combatant"},
            )
            return
        self.combatants.remove(combatant)
        log_debug(f"Removed {combatant.display_name}", {"id": combatant.id})

    def get_combatant(self, combatant_id: str) -> Combatant | None:
        """Returns the combatant with the given id, if any."""
        for combatant in self.combatants:
            if combatant.id == combatant_id:
                return combatant
        return None

    def static_view_models(self) -> list[StaticCombatantViewModel]:
        """Projects every combatant that is not hidden from spectators."""
        return [
            to_static_view_model(combatant, self.settings)
            for combatant in self.combatants
            if not combatant.hidden
        ]

    # ============================================================================
    # SAVE / IMPORT
    # ============================================================================

    def save(self, name: str = "") -> SavedEncounter:
        """Captures every combatant as a saved encounter."""
        return SavedEncounter(
            name=name,
            combatants=[combatant.to_saved() for combatant in self.combatants],
        )

    def import_encounter(
        self, encounter: SavedEncounter | dict[str, Any]
    ) -> list[Combatant]:
        """
        Restores every combatant of a saved encounter into this one.

        Args:
            encounter (SavedEncounter | dict[str, Any]): The saved encounter.

        Returns:
            list[Combatant]: The restored combatants.

        """
        if isinstance(encounter, dict):
            encounter = SavedEncounter.model_validate(encounter)
        return [
            self.add_combatant_from_stat_block(saved.stat_block, saved)
            for saved in encounter.combatants
        ]


def load_encounter(file_path: Path, encounter: Encounter) -> list[Combatant]:
    """
    Imports a saved encounter from a JSON file.

    Args:
        file_path (Path): The path to the JSON file.
        encounter (Encounter): The encounter to import into.

    Returns:
        list[Combatant]: The restored combatants, empty if the file could not
        be read.

    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        log_warning(
            f"Failed to load encounter from {file_path}: {e}",
            {
                "file_path": str(file_path),
                "error": str(e),
                "context": "encounter_file_loading",
            },
        )
        return []
    return encounter.import_encounter(data)
