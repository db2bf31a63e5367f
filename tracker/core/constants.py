"""
Constants and enumerations for the tracker.

Defines the player/monster flags, roll advantage modes, spectator HP
verbosity levels, and the colour constants used by the display projection.
"""

from enum import Enum

# The highest channel value used by the HP colour gradient.
HP_COLOR_MAX_INTENSITY = 170

# Name of the telemetry event fired when a combatant drops to 0 HP.
COMBATANT_DEFEATED_EVENT = "CombatantDefeated"


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name


class PlayerType(NiceEnum):
    """Defines whether a stat block describes a player or a monster."""

    PLAYER = "player"
    MONSTER = ""

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this player type."""
        return {
            PlayerType.PLAYER: "👤",
            PlayerType.MONSTER: "👹",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this player type."""
        return {
            PlayerType.PLAYER: "bold blue",
            PlayerType.MONSTER: "bold red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies player type color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class AdvantageMode(NiceEnum):
    """Defines how many d20s an ability check rolls and which one it keeps."""

    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


class HPVerbosity(NiceEnum):
    """Defines how much HP detail spectators see for monsters."""

    ACTUAL_HP = "Actual HP"
    COLORED_LABEL = "Colored Label"
    MONOCHROME_LABEL = "Monochrome Label"
    DAMAGE_TAKEN = "Damage Taken"
    HIDE_ALL = "Hide All"

    @property
    def hides_color(self) -> bool:
        """Returns True if monsters should be rendered without an HP colour."""
        return self in (
            HPVerbosity.MONOCHROME_LABEL,
            HPVerbosity.HIDE_ALL,
            HPVerbosity.DAMAGE_TAKEN,
        )


class HealthLabel(NiceEnum):
    """The four descriptive HP tiers shown to spectators."""

    DEFEATED = "Defeated"
    BLOODIED = "Bloodied"
    HURT = "Hurt"
    HEALTHY = "Healthy"

    @property
    def color(self) -> str:
        """Returns the color string associated with this health tier."""
        return {
            HealthLabel.DEFEATED: "bold white on red",
            HealthLabel.BLOODIED: "bold red",
            HealthLabel.HURT: "bold yellow",
            HealthLabel.HEALTHY: "bold green",
        }.get(self, "dim white")

    def colorize(self) -> str:
        """Returns the label wrapped in its rich markup style."""
        return f"[{self.color}]{self.value}[/]"
