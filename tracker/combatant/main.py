"""
Combatant module for the tracker.

Defines the Combatant class: one live participant of an encounter, derived
from a stat block plus the state accumulated during the session (hit points,
initiative, tags, visibility).
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from catchery import log_warning

from tracker.core.constants import COMBATANT_DEFEATED_EVENT, AdvantageMode
from tracker.core.settings import Settings
from tracker.core.utils import probably_unique_string

from .name_index import combatant_counts_by_name
from .saved_combatant import SavedCombatant
from .statblock import AbilityScores, StatBlock
from .tag import Tag

if TYPE_CHECKING:
    from tracker.encounter.main import Encounter


def _require_non_negative(amount: int, param_name: str) -> int:
    """Raises ValueError unless `amount` is a non-negative integer."""
    if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
        raise ValueError(f"{param_name} must be a non-negative integer, got: {amount!r}")
    return amount


class Combatant:
    """
    A live participant in an encounter.

    Stats derived from the stat block (AC, max HP, ability modifiers,
    initiative and concentration bonuses) are recomputed exactly once every
    time `stat_block` is assigned. Live state (HP, temporary HP, initiative,
    tags, alias, visibility) is never reset by a stat block change.

    Attributes:
        encounter (Encounter):
            The encounter owning this combatant.
        id (str):
            Identifier, unique for the lifetime of the encounter.
        index_label (int):
            Disambiguates combatants sharing a name.
        max_hp (int):
            Maximum hit points, from the stat block.
        ac (int):
            Armor class, from the stat block.
        ability_modifiers (AbilityScores):
            One modifier per ability score.
        initiative_bonus (int):
            Dexterity modifier plus the stat block initiative modifier.
        concentration_bonus (int):
            Constitution modifier.
        is_player_character (bool):
            True if the stat block describes a player character.
        temporary_hp (int):
            Damage buffer consumed before hit points.
        alias (str):
            Optional display name override.
        tags (list[Tag]):
            Annotations, in the order they were added.
        initiative_group (str | None):
            Key shared by combatants whose initiative moves together.
        hidden (bool):
            Hide the combatant from the player view.
        hide_ac (bool):
            Hide the AC of a monster from the player view.

    """

    id: str
    index_label: int
    max_hp: int
    ac: int
    ability_modifiers: AbilityScores
    initiative_bonus: int
    concentration_bonus: int
    is_player_character: bool

    def __init__(
        self,
        stat_block: StatBlock | dict[str, Any],
        encounter: "Encounter",
        saved_combatant: SavedCombatant | dict[str, Any] | None = None,
    ) -> None:
        """
        Creates a combatant, fresh from a stat block or restored from a save.

        Args:
            stat_block (StatBlock | dict[str, Any]):
                The stat block, or its JSON which is merged over the default.
            encounter (Encounter):
                The owning encounter, providing rules, settings, telemetry,
                the other combatants and the name count table.
            saved_combatant (SavedCombatant | dict[str, Any] | None):
                The saved record to restore, if any.

        """
        if isinstance(stat_block, dict):
            stat_block = StatBlock.from_dict(stat_block)
        if isinstance(saved_combatant, dict):
            saved_combatant = SavedCombatant.model_validate(saved_combatant)

        self.encounter = encounter

        # Live state.
        self.alias: str = ""
        self.temporary_hp: int = 0
        self.tags: list[Tag] = []
        self.initiative_group: str | None = None
        self.hidden: bool = False
        self.hide_ac: bool = True
        self._initiative: int = 0
        self._current_hp: int = 0

        self._updating_group = False
        self._stat_block: StatBlock | None = None

        if saved_combatant:
            hp = saved_combatant.max_hp or saved_combatant.stat_block.hp.value
            self.id = saved_combatant.id or self._new_id(stat_block)
        else:
            hp = self.get_max_hp(stat_block, encounter.settings)
            self.id = self._new_id(stat_block)

        self.stat_block = stat_block.with_hp_value(hp)
        self._current_hp = self.max_hp

        if saved_combatant:
            self._process_saved_combatant(saved_combatant)

    def __repr__(self) -> str:
        return (
            f"Combatant(id={self.id!r}, name={self.display_name!r}, "
            f"hp={self._current_hp}+{self.temporary_hp}/{self.max_hp}, "
            f"initiative={self._initiative})"
        )

    # ============================================================================
    # STAT BLOCK
    # ============================================================================

    @property
    def stat_block(self) -> StatBlock:
        """The stat block this combatant derives its base stats from."""
        assert self._stat_block is not None
        return self._stat_block

    @stat_block.setter
    def stat_block(self, new_stat_block: StatBlock | dict[str, Any]) -> None:
        if isinstance(new_stat_block, dict):
            new_stat_block = StatBlock.from_dict(new_stat_block)
        old_stat_block = self._stat_block
        self._stat_block = new_stat_block
        self._process_stat_block(new_stat_block, old_stat_block)

    def _process_stat_block(
        self,
        new_stat_block: StatBlock,
        old_stat_block: StatBlock | None = None,
    ) -> None:
        """Re-derives every stat that comes from the stat block."""
        self._set_index_label(old_stat_block.name if old_stat_block else None)
        self.is_player_character = new_stat_block.is_player
        self.ac = new_stat_block.ac.value
        self.max_hp = new_stat_block.hp.value
        self.ability_modifiers = self._calculate_modifiers(new_stat_block)
        self.initiative_bonus = self.ability_modifiers.dexterity + (
            new_stat_block.initiative_modifier or 0
        )
        self.concentration_bonus = self.ability_modifiers.constitution

    def _calculate_modifiers(self, stat_block: StatBlock) -> AbilityScores:
        rules = self.encounter.rules
        return AbilityScores.model_validate(
            {
                ability: rules.get_modifier_from_score(score)
                for ability, score in stat_block.abilities.as_dict().items()
            }
        )

    def _set_index_label(self, old_name: str | None = None) -> None:
        """Registers the current name in the encounter's name count table."""
        name = self.stat_block.name
        counts = combatant_counts_by_name(
            name, self.encounter.combatant_counts_by_name, old_name
        )
        if old_name is None or old_name != name:
            self.index_label = counts[name]
        self.encounter.combatant_counts_by_name = counts

    def get_max_hp(self, stat_block: StatBlock, settings: Settings) -> int:
        """
        Determines the max HP of a freshly created combatant.

        Monsters roll their HP notes when the "roll monster HP" rule is on.
        A non-positive roll becomes 1; a malformed expression is logged and
        the static HP value is used instead.

        Args:
            stat_block (StatBlock): The stat block to read HP from.
            settings (Settings): The settings snapshot.

        Returns:
            int: The max HP.

        """
        if settings.rules.roll_monster_hp and not stat_block.is_player:
            try:
                rolled_hp = self.encounter.rules.roll_dice_expression(
                    stat_block.hp.notes
                ).total
            except ValueError as e:
                log_warning(
                    f"Failed to roll HP for {stat_block.name}: {e}",
                    {
                        "name": stat_block.name,
                        "notes": stat_block.hp.notes,
                        "fallback": stat_block.hp.value,
                        "context": "monster_hp_roll",
                    },
                )
                return stat_block.hp.value
            if rolled_hp > 0:
                return rolled_hp
            return 1
        return stat_block.hp.value

    @staticmethod
    def _new_id(stat_block: StatBlock) -> str:
        return f"{stat_block.id}.{probably_unique_string()}"

    # ============================================================================
    # SAVE / RESTORE
    # ============================================================================

    def _process_saved_combatant(self, saved_combatant: SavedCombatant) -> None:
        """Overlays the live state of a saved record."""
        if saved_combatant.index_label is not None:
            self.index_label = saved_combatant.index_label
        if saved_combatant.current_hp is not None:
            self._current_hp = saved_combatant.current_hp
        self.temporary_hp = saved_combatant.temporary_hp
        self._initiative = saved_combatant.initiative
        self.initiative_group = saved_combatant.initiative_group or None
        self.alias = saved_combatant.alias
        self.tags = Tag.get_legacy_tags(saved_combatant.tags, self)
        self.hidden = saved_combatant.hidden
        self.hide_ac = saved_combatant.hide_ac

    def to_saved(self) -> SavedCombatant:
        """
        Captures the combatant as a saved record.

        Returns:
            SavedCombatant: A record that restores to the same live state.

        """
        return SavedCombatant(
            id=self.id,
            max_hp=self.max_hp,
            stat_block=self.stat_block,
            index_label=self.index_label,
            current_hp=self._current_hp,
            temporary_hp=self.temporary_hp,
            initiative=self._initiative,
            initiative_group=self.initiative_group,
            alias=self.alias,
            tags=[tag.to_dict() for tag in self.tags],
            hidden=self.hidden,
            hide_ac=self.hide_ac,
        )

    # ============================================================================
    # DISPLAY
    # ============================================================================

    @property
    def display_name(self) -> str:
        """
        Returns the name shown for this combatant.

        The alias wins if set. Otherwise the stat block name is used,
        followed by the index label when other combatants share the name.
        """
        if self.alias:
            return self.alias
        name = self.stat_block.name
        if self.encounter.combatant_counts_by_name.get(name, 0) > 1:
            return f"{name} {self.index_label}"
        return name

    # ============================================================================
    # HIT POINTS
    # ============================================================================

    @property
    def current_hp(self) -> int:
        """Current hit points. Changed only through damage and healing."""
        return self._current_hp

    def apply_damage(self, damage: int) -> None:
        """
        Applies damage, consuming temporary HP first.

        When current HP reaches 0 or less and negative HP is not allowed, it
        is clamped to 0 and a defeat event is tracked.

        Args:
            damage (int): The damage taken, non-negative.

        Raises:
            ValueError: If `damage` is negative.

        """
        _require_non_negative(damage, "damage")
        if damage == 0:
            return

        current_hp = self._current_hp
        temporary_hp = self.temporary_hp - damage
        if temporary_hp < 0:
            current_hp += temporary_hp
            temporary_hp = 0

        if current_hp <= 0 and not self.encounter.settings.rules.allow_negative_hp:
            self.encounter.metrics.track_event(
                COMBATANT_DEFEATED_EVENT, {"Name": self.display_name}
            )
            current_hp = 0

        self._current_hp = current_hp
        self.temporary_hp = temporary_hp

    def apply_healing(self, healing: int) -> None:
        """
        Restores hit points, never above max HP.

        Args:
            healing (int): The hit points restored, non-negative.

        Raises:
            ValueError: If `healing` is negative.

        """
        _require_non_negative(healing, "healing")
        self._current_hp = min(self._current_hp + healing, self.max_hp)

    def apply_temporary_hp(self, temporary_hp: int) -> None:
        """
        Grants temporary HP. Pools do not stack: the larger one is kept.

        Args:
            temporary_hp (int): The temporary HP granted, non-negative.

        Raises:
            ValueError: If `temporary_hp` is negative.

        """
        _require_non_negative(temporary_hp, "temporary_hp")
        if temporary_hp > self.temporary_hp:
            self.temporary_hp = temporary_hp

    # ============================================================================
    # INITIATIVE
    # ============================================================================

    @property
    def initiative(self) -> int:
        """Turn order value, shared by every member of the initiative group."""
        return self._initiative

    @initiative.setter
    def initiative(self, value: int) -> None:
        self._initiative = value
        group = self.initiative_group
        if not group or self._updating_group:
            return
        with self._group_update():
            for combatant in self.encounter.combatants:
                if combatant is self or combatant.initiative_group != group:
                    continue
                with combatant._group_update():
                    combatant.initiative = value

    @contextmanager
    def _group_update(self) -> Iterator[None]:
        """Marks this combatant as taking part in a group update."""
        self._updating_group = True
        try:
            yield
        finally:
            self._updating_group = False

    def get_initiative_roll(self) -> int:
        """Rolls initiative, with advantage if the stat block grants it."""
        advantage = (
            AdvantageMode.ADVANTAGE if self.stat_block.initiative_advantage else None
        )
        return self.encounter.rules.ability_check(self.initiative_bonus, advantage)

    def get_concentration_roll(self) -> int:
        """Rolls a concentration check."""
        return self.encounter.rules.ability_check(self.concentration_bonus)
