"""
Combat tracker.

Tracks the live state of the combatants of a tabletop encounter: hit points,
temporary hit points, initiative and initiative groups, tags and the labels
that tell same-named combatants apart.
"""

__version__ = "0.1.0"
