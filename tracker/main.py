"""
Main entry point for the combat tracker.

Builds a small encounter, runs a few rounds of damage, healing and
initiative, and prints what spectators would see with rich.

Usage:
    python -m tracker.main [settings.json] [saved_encounter.json]
"""

import logging
import sys
from pathlib import Path

from rich.table import Table

from tracker.combatant.display import StaticCombatantViewModel
from tracker.core.constants import COMBATANT_DEFEATED_EVENT, PlayerType
from tracker.core.logging import setup_logging
from tracker.core.settings import Settings, load_settings
from tracker.core.utils import cprint, crule
from tracker.encounter.main import Encounter, load_encounter

GOBLIN = {
    "Id": "goblin",
    "Name": "Goblin",
    "AC": {"Value": 15, "Notes": "leather armor, shield"},
    "HP": {"Value": 7, "Notes": "2d6"},
    "Abilities": {"Str": 8, "Dex": 14, "Con": 10, "Int": 10, "Wis": 8, "Cha": 8},
}

FIGHTER = {
    "Id": "fighter",
    "Name": "Tordek",
    "Player": "player",
    "AC": {"Value": 18, "Notes": "chain mail, shield"},
    "HP": {"Value": 28, "Notes": ""},
    "Abilities": {"Str": 16, "Dex": 12, "Con": 16, "Int": 8, "Wis": 10, "Cha": 10},
    "InitiativeModifier": 1,
}


def format_name_cell(view: StaticCombatantViewModel) -> str:
    """Returns the name of a combatant marked and coloured by player type."""
    player_type = PlayerType.PLAYER if view.is_player_character else PlayerType.MONSTER
    return f"{player_type.emoji} {player_type.colorize(view.name)}"


def print_player_view(encounter: Encounter) -> None:
    """Prints the spectator view of an encounter as a table."""
    table = Table(title="Player View")
    table.add_column("Init", justify="right")
    table.add_column("Name")
    table.add_column("AC", justify="right")
    table.add_column("HP")
    table.add_column("Tags")

    for view in encounter.static_view_models():
        hp = view.hp_display
        if hp and view.hp_color != "auto":
            hp = f"[{view.hp_color}]{hp}[/]"
        table.add_row(
            str(view.initiative),
            format_name_cell(view),
            str(view.ac) if view.ac_display else "",
            hp,
            ", ".join(str(tag) for tag in view.tags),
        )
    cprint(table)


def main() -> None:
    setup_logging(logging.INFO)

    settings = Settings()
    if len(sys.argv) > 1:
        settings = load_settings(Path(sys.argv[1]))

    crule("Combat Tracker", style="bold green")
    encounter = Encounter(settings=settings)

    if len(sys.argv) > 2:
        load_encounter(Path(sys.argv[2]), encounter)
    else:
        fighter = encounter.add_combatant_from_stat_block(FIGHTER)
        goblins = [encounter.add_combatant_from_stat_block(GOBLIN) for _ in range(2)]
        for goblin in goblins:
            goblin.initiative_group = "goblins"

        fighter.initiative = fighter.get_initiative_roll()
        goblins[0].initiative = goblins[0].get_initiative_roll()

        goblins[0].apply_damage(5)
        goblins[1].apply_damage(12)
        fighter.apply_temporary_hp(5)
        fighter.apply_damage(7)

    print_player_view(encounter)

    defeated = encounter.metrics.count(COMBATANT_DEFEATED_EVENT)
    cprint(f"{defeated} combatant(s) defeated.", style="bold red")


if __name__ == "__main__":
    main()
