"""Prestige upgrades — permanent meta-progression bought with prestige points.

Effects persist across every subsequent run. Cost is 2^level for all of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from idlebars.data.upgrades import GlobalUpgrade


class PrestigeUpgrade(Enum):
    COMPLETE_FASTER = "CompleteFaster"             # completion threshold × 0.95^n
    LEVEL_UP_FASTER = "LevelUpFaster"              # exp requirement × 0.95^n
    TRANSFER_EXTRA_EXP = "TransferExtraExp"        # share exp with a lagging child
    TRANSFER_EXTRA_VALUE = "TransferExtraValue"    # +1% transfer to a poorer child
    UPGRADE_ANY_BUTTON = "UpgradeAnyButton"        # unlocks the buy-any key
    AUTOMATE_GLOBAL_SPEED = "AutomateGlobalSpeed"
    AUTOMATE_GLOBAL_EXP_BOOST = "AutomateGlobalExpBoost"
    AUTOMATE_PROGRESS_BARS = "AutomateProgressBars"
    AUTOMATE_GLOBAL_GAIN = "AutomateGlobalGain"
    AUTOMATE_GLOBAL_EXP_GAIN = "AutomateGlobalExpGain"
    CHILD_COST_REDUCTION = "ChildCostReduction"    # discount bars behind their child


@dataclass(frozen=True)
class PrestigeUpgradeDef:
    description: str
    max_level: int | None = None


PRESTIGE_UPGRADES: dict[PrestigeUpgrade, PrestigeUpgradeDef] = {
    PrestigeUpgrade.COMPLETE_FASTER: PrestigeUpgradeDef("Complete bars 5% sooner"),
    PrestigeUpgrade.LEVEL_UP_FASTER: PrestigeUpgradeDef("Level up 5% quicker"),
    PrestigeUpgrade.TRANSFER_EXTRA_EXP: PrestigeUpgradeDef("Transfer 1% of exp if overleveled"),
    PrestigeUpgrade.TRANSFER_EXTRA_VALUE: PrestigeUpgradeDef("Transfer 1% of value if overvalued"),
    PrestigeUpgrade.UPGRADE_ANY_BUTTON: PrestigeUpgradeDef("Unlock the upgrade-any button", max_level=8),
    PrestigeUpgrade.AUTOMATE_GLOBAL_SPEED: PrestigeUpgradeDef("Automate global speed upgrading"),
    PrestigeUpgrade.AUTOMATE_GLOBAL_EXP_BOOST: PrestigeUpgradeDef("Automate exp boost"),
    PrestigeUpgrade.AUTOMATE_PROGRESS_BARS: PrestigeUpgradeDef("Automate progress bar purchases"),
    PrestigeUpgrade.AUTOMATE_GLOBAL_GAIN: PrestigeUpgradeDef("Automate global gain + 1"),
    PrestigeUpgrade.AUTOMATE_GLOBAL_EXP_GAIN: PrestigeUpgradeDef("Automate exp gain"),
    PrestigeUpgrade.CHILD_COST_REDUCTION: PrestigeUpgradeDef(
        "Reduce upgrade cost of bars behind their child"
    ),
}

# Which global upgrade each automation upgrade buys
AUTOMATION_PAIRS: tuple[tuple[PrestigeUpgrade, GlobalUpgrade], ...] = (
    (PrestigeUpgrade.AUTOMATE_GLOBAL_SPEED, GlobalUpgrade.SPEED),
    (PrestigeUpgrade.AUTOMATE_GLOBAL_EXP_BOOST, GlobalUpgrade.EXP_BOOST),
    (PrestigeUpgrade.AUTOMATE_PROGRESS_BARS, GlobalUpgrade.PROGRESS_BARS),
    (PrestigeUpgrade.AUTOMATE_GLOBAL_GAIN, GlobalUpgrade.GAIN),
    (PrestigeUpgrade.AUTOMATE_GLOBAL_EXP_GAIN, GlobalUpgrade.EXP_GAIN),
)
