"""
Name index module for the tracker.

Keeps track of how many combatants in an encounter share a name, so that
"Goblin 1", "Goblin 2" and so on get stable labels.
"""


def combatant_counts_by_name(
    name: str,
    counts: dict[str, int],
    old_name: str | None = None,
) -> dict[str, int]:
    """
    Updates the name count table for a combatant taking `name`.

    The input mapping is not modified; the caller writes the returned
    mapping back to the encounter. Passing the combatant's previously
    recorded name as `old_name` makes repeated calls idempotent.

    Args:
        name (str): The combatant's new name.
        counts (dict[str, int]): The current name -> count table.
        old_name (str | None): The name the combatant had before, if any.

    Returns:
        dict[str, int]: The updated table. `result[name]` is the combatant's
        index label.

    """
    updated = dict(counts)
    if old_name is not None and old_name == name:
        # Nothing changed, but a name must always have an entry.
        updated.setdefault(name, 1)
        return updated

    if old_name is not None and old_name in updated:
        updated[old_name] -= 1
        if updated[old_name] <= 0:
            del updated[old_name]

    updated[name] = updated.get(name, 0) + 1
    return updated
