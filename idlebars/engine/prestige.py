"""Prestige — meta-currency earned by resetting the chain, and its upgrades."""

from __future__ import annotations

from dataclasses import dataclass, field

from idlebars.data.balance import BALANCE
from idlebars.data.prestige_upgrades import PRESTIGE_UPGRADES, PrestigeUpgrade
from idlebars.data.upgrades import seeded_levels
from idlebars.engine.number import Float


def can_prestige(bar_count: int) -> bool:
    """True once the chain is long enough to reset for points."""
    return bar_count >= BALANCE.prestige.min_bars


def claimable_prestige(bar_count: int) -> Float:
    """Points a prestige would award at this chain length (fractional)."""
    if not can_prestige(bar_count):
        return Float(0.0)
    return Float(bar_count / BALANCE.prestige.bars_per_point)


@dataclass
class Prestige:
    """Persistent state across chain resets."""

    current: Float = field(default_factory=Float)
    upgrades: dict[PrestigeUpgrade, int] = field(
        default_factory=lambda: seeded_levels(PrestigeUpgrade)
    )

    def level(self, upgrade: PrestigeUpgrade) -> int:
        return self.upgrades[upgrade]

    def level_f(self, upgrade: PrestigeUpgrade) -> float:
        """Level as a float, for use in continuous multipliers."""
        return float(self.upgrades[upgrade])

    def cost(self, upgrade: PrestigeUpgrade) -> Float:
        return Float(BALANCE.prestige.cost_base ** self.upgrades[upgrade])

    def is_max_level(self, upgrade: PrestigeUpgrade) -> bool:
        max_level = PRESTIGE_UPGRADES[upgrade].max_level
        return max_level is not None and self.upgrades[upgrade] >= max_level

    def can_afford(self, upgrade: PrestigeUpgrade) -> bool:
        return not self.is_max_level(upgrade) and self.current >= self.cost(upgrade)

    def purchase(self, upgrade: PrestigeUpgrade) -> bool:
        """Attempt to buy one level. Returns True if successful."""
        if not self.can_afford(upgrade):
            return False
        self.current -= self.cost(upgrade)
        self.upgrades[upgrade] += 1
        return True

    def claim(self, bar_count: int) -> Float:
        """Bank the claimable points for a chain of ``bar_count`` bars.

        The caller is responsible for resetting the chain afterwards.
        """
        earned = claimable_prestige(bar_count)
        self.current += earned
        return earned

    # ── Effects read by the simulation ───────────────────

    def completion_threshold(self) -> float:
        bal = BALANCE.prestige
        level = self.level_f(PrestigeUpgrade.COMPLETE_FASTER)
        return BALANCE.bar.full_progress * bal.complete_faster_factor ** level

    def exp_requirement_factor(self) -> float:
        level = self.level_f(PrestigeUpgrade.LEVEL_UP_FASTER)
        return BALANCE.prestige.level_up_faster_factor ** level

    def exp_keep_share(self) -> float:
        """Share of exp gain a bar keeps when its child is behind."""
        level = self.level_f(PrestigeUpgrade.TRANSFER_EXTRA_EXP)
        return BALANCE.prestige.transfer_exp_keep_factor ** level

    def extra_transfer_ratio(self) -> float:
        level = self.level_f(PrestigeUpgrade.TRANSFER_EXTRA_VALUE)
        return BALANCE.prestige.transfer_value_step * level

    def automation_interval(self, upgrade: PrestigeUpgrade) -> float | None:
        """Seconds between automated purchases, or None if not unlocked."""
        level = self.level_f(upgrade)
        if level <= 0:
            return None
        bal = BALANCE.prestige
        return max(bal.automation_min_interval_s, bal.automation_period_s / level)
