"""Upgrade definitions — per-bar and global upgrades and their costs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from idlebars.engine.number import Float


class _Cyclic(Enum):
    """Enum whose members cycle in declaration order."""

    def next(self):
        members = list(type(self))
        return members[(members.index(self) + 1) % len(members)]

    def prev(self):
        members = list(type(self))
        return members[(members.index(self) - 1) % len(members)]


class Upgrade(_Cyclic):
    """Upgrades bought for a single bar."""

    SPEED = "Speed"
    GAIN = "Gain"
    DOUBLE = "Double"
    TRIPLE = "Triple"
    QUADRUPLE = "Quadruple"


class GlobalUpgrade(_Cyclic):
    """Upgrades affecting the whole chain, paid by the last bar."""

    SPEED = "Speed"
    EXP_BOOST = "ExpBoost"
    PROGRESS_BARS = "ProgressBars"
    GAIN = "Gain"
    EXP_GAIN = "ExpGain"


@dataclass(frozen=True)
class UpgradeDef:
    """Definition of a single upgrade."""

    label: str
    base_cost: float
    # Cost multiplier per level owned
    scaling: float
    # How many bars toward the front pay for it (0 = the bar itself)
    cost_target: int = 0

    def cost(self, level: int) -> Float:
        """Cost of the next purchase given current level owned."""
        return Float(self.base_cost) * Float(self.scaling).powf(level)


# ── Per-bar catalog ──────────────────────────────────────────────

UPGRADES: dict[Upgrade, UpgradeDef] = {
    Upgrade.SPEED: UpgradeDef(label="x1.25 SPD", base_cost=125.0, scaling=5.0),
    Upgrade.GAIN: UpgradeDef(label="+1", base_cost=3.0, scaling=2.0),
    Upgrade.DOUBLE: UpgradeDef(label="x2", base_cost=200.0, scaling=100.0, cost_target=1),
    Upgrade.TRIPLE: UpgradeDef(label="x3", base_cost=5_000.0, scaling=1_000.0, cost_target=4),
    Upgrade.QUADRUPLE: UpgradeDef(label="x4", base_cost=100_000.0, scaling=10_000.0, cost_target=7),
}

# ── Global catalog ───────────────────────────────────────────────

GLOBAL_UPGRADES: dict[GlobalUpgrade, UpgradeDef] = {
    GlobalUpgrade.SPEED: UpgradeDef(label="+5% SPD", base_cost=300.0, scaling=3.0),
    GlobalUpgrade.EXP_BOOST: UpgradeDef(label="+1s Level Up Boost", base_cost=30.0, scaling=1.5),
    GlobalUpgrade.PROGRESS_BARS: UpgradeDef(label="2 Progress Bars", base_cost=22.0, scaling=3.5),
    GlobalUpgrade.GAIN: UpgradeDef(label="+1 Gain", base_cost=120.0, scaling=3.0),
    GlobalUpgrade.EXP_GAIN: UpgradeDef(label="+1 Exp Gain", base_cost=10_000.0, scaling=8.0),
}

# Buy-any tries the most impactful upgrades first
UPGRADE_PREFERENCE: tuple[Upgrade, ...] = (
    Upgrade.QUADRUPLE,
    Upgrade.TRIPLE,
    Upgrade.DOUBLE,
    Upgrade.GAIN,
    Upgrade.SPEED,
)

GLOBAL_UPGRADE_PREFERENCE: tuple[GlobalUpgrade, ...] = (
    GlobalUpgrade.PROGRESS_BARS,
    GlobalUpgrade.GAIN,
    GlobalUpgrade.SPEED,
    GlobalUpgrade.EXP_GAIN,
    GlobalUpgrade.EXP_BOOST,
)


K = TypeVar("K", bound=Enum)


def seeded_levels(kind: type[K]) -> dict[K, int]:
    """Level map with every member of ``kind`` present at 0."""
    return {member: 0 for member in kind}
