"""
Tests for combatant construction, restore from a save, and stat block
replacement.
"""

import pytest
from tracker.combatant.main import Combatant
from tracker.combatant.saved_combatant import SavedCombatant
from tracker.combatant.statblock import StatBlock
from tracker.core.dice_parser import RollBreakdown
from tracker.encounter.main import Encounter

# ============================================================================
# FRESH COMBATANTS
# ============================================================================


def test_fresh_combatant_uses_static_hp(encounter, goblin_json):
    goblin = Combatant(goblin_json, encounter)

    assert goblin.max_hp == 7
    assert goblin.current_hp == 7
    assert goblin.temporary_hp == 0
    assert goblin.ac == 15
    assert goblin.is_player_character is False


def test_fresh_combatant_derives_modifiers(encounter, goblin_json, fighter_json):
    goblin = Combatant(goblin_json, encounter)
    fighter = Combatant(fighter_json, encounter)

    assert goblin.ability_modifiers.dexterity == 2
    assert goblin.ability_modifiers.strength == -1
    # Missing initiative modifier defaults to zero.
    assert goblin.initiative_bonus == 2
    assert goblin.concentration_bonus == 0

    assert fighter.is_player_character is True
    assert fighter.initiative_bonus == 2
    assert fighter.concentration_bonus == 3


def test_fresh_ids_are_unique_and_derived_from_stat_block(encounter, goblin_json):
    first = Combatant(goblin_json, encounter)
    second = Combatant(goblin_json, encounter)

    assert first.id.startswith("goblin.")
    assert second.id.startswith("goblin.")
    assert first.id != second.id


def test_fresh_combatant_live_state_defaults(encounter, goblin_json):
    goblin = Combatant(goblin_json, encounter)

    assert goblin.initiative == 0
    assert goblin.initiative_group is None
    assert goblin.alias == ""
    assert goblin.tags == []
    assert goblin.hidden is False
    assert goblin.hide_ac is True


def test_partial_stat_block_is_merged_over_default(encounter):
    combatant = Combatant({"Id": "blob", "Name": "Blob"}, encounter)

    assert combatant.ac == StatBlock.default().ac.value
    assert combatant.max_hp == StatBlock.default().hp.value
    assert combatant.ability_modifiers.dexterity == 0


def test_caller_stat_block_is_not_modified(make_settings, goblin_json, mocker):
    encounter = Encounter(settings=make_settings(roll_monster_hp=True))
    mocker.patch("tracker.core.dice_parser.random.randint", side_effect=[6, 6])
    stat_block = StatBlock.from_dict(goblin_json)

    goblin = Combatant(stat_block, encounter)

    assert goblin.max_hp == 12
    assert stat_block.hp.value == 7


# ============================================================================
# HP ROLLING
# ============================================================================


def test_rolled_monster_hp(make_settings, goblin_json, mocker):
    encounter = Encounter(settings=make_settings(roll_monster_hp=True))
    mocker.patch("tracker.core.dice_parser.random.randint", side_effect=[4, 5])

    goblin = Combatant(goblin_json, encounter)

    assert goblin.max_hp == 9
    assert goblin.current_hp == 9


def test_rolled_monster_hp_is_at_least_one(make_settings, goblin_json, mocker):
    encounter = Encounter(settings=make_settings(roll_monster_hp=True))
    mocker.patch.object(
        encounter.rules,
        "roll_dice_expression",
        return_value=RollBreakdown(total=-3, description="1d4-5"),
    )

    assert Combatant(goblin_json, encounter).max_hp == 1


def test_rolled_zero_hp_becomes_one(make_settings, goblin_json, mocker):
    encounter = Encounter(settings=make_settings(roll_monster_hp=True))
    mocker.patch.object(
        encounter.rules,
        "roll_dice_expression",
        return_value=RollBreakdown(total=0, description="0"),
    )

    assert Combatant(goblin_json, encounter).max_hp == 1


@pytest.mark.parametrize("notes", ["invalid", "()", "2d6d4"])
def test_malformed_hp_notes_fall_back_to_static_hp(make_settings, goblin_json, mocker, notes):
    encounter = Encounter(settings=make_settings(roll_monster_hp=True))
    mock_log = mocker.patch("tracker.combatant.main.log_warning")
    goblin_json["HP"] = {"Value": 7, "Notes": notes}

    goblin = Combatant(goblin_json, encounter)

    assert goblin.max_hp == 7
    mock_log.assert_called_once()


def test_rolled_hp_sums_every_dice_term(make_settings, goblin_json, mocker):
    encounter = Encounter(settings=make_settings(roll_monster_hp=True))
    mocker.patch("tracker.core.dice_parser.random.randint", side_effect=[3, 4, 2])
    goblin_json["HP"] = {"Value": 7, "Notes": "2d6+1d4"}

    assert Combatant(goblin_json, encounter).max_hp == 9


def test_player_hp_is_never_rolled(make_settings, fighter_json, mocker):
    encounter = Encounter(settings=make_settings(roll_monster_hp=True))
    mock_roll = mocker.patch.object(encounter.rules, "roll_dice_expression")

    fighter = Combatant(fighter_json, encounter)

    assert fighter.max_hp == 20
    mock_roll.assert_not_called()


def test_hp_not_rolled_when_setting_is_off(encounter, goblin_json, mocker):
    mock_roll = mocker.patch.object(encounter.rules, "roll_dice_expression")

    assert Combatant(goblin_json, encounter).max_hp == 7
    mock_roll.assert_not_called()


# ============================================================================
# RESTORE
# ============================================================================


@pytest.fixture
def saved_goblin(goblin_json):
    return {
        "Id": 42,
        "MaxHP": 30,
        "StatBlock": goblin_json,
        "IndexLabel": 3,
        "CurrentHP": 12,
        "TemporaryHP": 4,
        "Initiative": 15,
        "InitiativeGroup": "goblins",
        "Alias": "Boss",
        "Tags": [
            "Prone",
            {
                "Text": "Blessed",
                "DurationRemaining": 2,
                "DurationTiming": "EndOfTurn",
                "DurationCombatantId": "cleric.1",
            },
        ],
        "Hidden": True,
        "HideAC": False,
    }


def test_restore_overlays_live_state(encounter, saved_goblin):
    goblin = Combatant(saved_goblin["StatBlock"], encounter, saved_goblin)

    assert goblin.id == "42"
    assert goblin.max_hp == 30
    assert goblin.index_label == 3
    assert goblin.current_hp == 12
    assert goblin.temporary_hp == 4
    assert goblin.initiative == 15
    assert goblin.initiative_group == "goblins"
    assert goblin.alias == "Boss"
    assert [tag.text for tag in goblin.tags] == ["Prone", "Blessed"]
    assert all(tag.combatant is goblin for tag in goblin.tags)
    assert goblin.hidden is True
    assert goblin.hide_ac is False


def test_restore_without_max_hp_uses_saved_stat_block(encounter, goblin_json):
    saved = SavedCombatant.model_validate({"Id": "goblin.abc", "StatBlock": goblin_json})

    goblin = Combatant(goblin_json, encounter, saved)

    assert goblin.max_hp == 7
    assert goblin.current_hp == 7
    assert goblin.id == "goblin.abc"


def test_restore_with_only_stat_block_uses_defaults(encounter, goblin_json):
    goblin = Combatant(goblin_json, encounter, {"StatBlock": goblin_json})

    assert goblin.id.startswith("goblin.")
    assert goblin.current_hp == goblin.max_hp
    assert goblin.initiative == 0
    assert goblin.initiative_group is None
    assert goblin.hide_ac is True
    assert goblin.hidden is False


def test_restore_never_rolls_hp(make_settings, saved_goblin, mocker):
    encounter = Encounter(settings=make_settings(roll_monster_hp=True))
    mock_roll = mocker.patch.object(encounter.rules, "roll_dice_expression")

    goblin = Combatant(saved_goblin["StatBlock"], encounter, saved_goblin)

    assert goblin.max_hp == 30
    mock_roll.assert_not_called()


def test_restore_requires_stat_block(encounter, goblin_json):
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        Combatant(goblin_json, encounter, {"Id": "goblin.abc", "CurrentHP": 3})


def test_to_saved_restores_to_same_state(encounter, saved_goblin):
    goblin = Combatant(saved_goblin["StatBlock"], encounter, saved_goblin)
    goblin.apply_damage(6)

    saved = goblin.to_saved().to_dict()
    restored = Combatant(saved["StatBlock"], Encounter(), saved)

    assert restored.id == goblin.id
    assert restored.max_hp == goblin.max_hp
    assert restored.current_hp == goblin.current_hp
    assert restored.temporary_hp == goblin.temporary_hp
    assert restored.initiative == goblin.initiative
    assert restored.initiative_group == goblin.initiative_group
    assert restored.alias == goblin.alias
    assert [tag.to_dict() for tag in restored.tags] == [
        tag.to_dict() for tag in goblin.tags
    ]


# ============================================================================
# STAT BLOCK REPLACEMENT
# ============================================================================


def test_stat_block_replacement_rederives_stats(encounter, goblin_json):
    goblin = Combatant(goblin_json, encounter)
    goblin.apply_damage(3)
    goblin.initiative = 12

    goblin.stat_block = {
        **goblin_json,
        "AC": {"Value": 17, "Notes": "chain shirt"},
        "HP": {"Value": 20, "Notes": "6d6"},
        "Abilities": {"Dex": 18, "Con": 14},
        "InitiativeModifier": 1,
    }

    assert goblin.ac == 17
    assert goblin.max_hp == 20
    assert goblin.ability_modifiers.dexterity == 4
    assert goblin.initiative_bonus == 5
    assert goblin.concentration_bonus == 2
    # Live state survives.
    assert goblin.current_hp == 4
    assert goblin.initiative == 12


def test_stat_block_replacement_derives_exactly_once(encounter, goblin_json, mocker):
    goblin = Combatant(goblin_json, encounter)
    spy = mocker.spy(goblin, "_process_stat_block")

    goblin.stat_block = StatBlock.from_dict({**goblin_json, "Name": "Goblin Boss"})

    assert spy.call_count == 1


def test_stat_block_replacement_can_switch_to_player(encounter, goblin_json):
    goblin = Combatant(goblin_json, encounter)
    goblin.stat_block = {**goblin_json, "Player": "player"}

    assert goblin.is_player_character is True
