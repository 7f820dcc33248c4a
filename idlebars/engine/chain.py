"""Chain — the ordered collection of bars and the fixed-tick orchestrator.

Owns the bars, the global upgrade levels and the prestige state. Advance it
once per tick with the current monotonic time; everything else (purchases,
prestige, highlight changes) is invoked between ticks.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

from idlebars.data.balance import BALANCE
from idlebars.data.prestige_upgrades import AUTOMATION_PAIRS, PrestigeUpgrade
from idlebars.data.upgrades import (
    GLOBAL_UPGRADE_PREFERENCE,
    GLOBAL_UPGRADES,
    UPGRADE_PREFERENCE,
    UPGRADES,
    GlobalUpgrade,
    Upgrade,
    seeded_levels,
)
from idlebars.engine.bar import Bar
from idlebars.engine.highlight import (
    NO_HIGHLIGHT,
    BarHighlight,
    GlobalHighlight,
    Highlight,
    shift_for_spawn,
)
from idlebars.engine.number import Float
from idlebars.engine.prestige import Prestige, can_prestige

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpgradeCost:
    """An affordable purchase: who pays and how much."""

    payer: int
    cost: Float


@dataclass
class Chain:
    """Complete mutable state for one run, plus prestige which outlives it."""

    # ── Bars (index 0 = front = newest) ──────────────────
    bars: deque[Bar] = field(default_factory=deque)
    speed_base: Float = field(default_factory=lambda: Float(BALANCE.bar.speed_base))

    # ── Spawn scheduler ──────────────────────────────────
    bars_to_spawn: int = BALANCE.chain.initial_bars_to_spawn
    last_bar_spawn: float | None = None
    last_bar_number: int = 0

    # ── Global upgrades: kind → level ────────────────────
    global_upgrades: dict[GlobalUpgrade, int] = field(
        default_factory=lambda: seeded_levels(GlobalUpgrade)
    )
    last_automation: dict[GlobalUpgrade, float] = field(default_factory=dict)

    # ── Clocks & persistence ─────────────────────────────
    tick: float = 0.0
    last_save: float | None = None
    save_path: Path | None = None

    # ── UI selection ─────────────────────────────────────
    highlight: Highlight = NO_HIGHLIGHT

    # ── Meta ─────────────────────────────────────────────
    prestige: Prestige = field(default_factory=Prestige)

    def global_level(self, upgrade: GlobalUpgrade) -> int:
        return self.global_upgrades[upgrade]

    # ── Tick ─────────────────────────────────────────────

    def advance(self, now: float) -> None:
        """Run one tick: spawn, advance bars, automate, autosave."""
        self.tick = now
        self._spawn_scheduled(now)
        self._advance_bars(now)
        self._automate(now)
        self._autosave(now)

    def _spawn_scheduled(self, now: float) -> None:
        if self.bars_to_spawn <= 0:
            return
        if (
            self.last_bar_spawn is not None
            and now - self.last_bar_spawn < BALANCE.chain.spawn_interval_s
        ):
            return
        self.spawn_bar()
        self.bars_to_spawn -= 1
        self.last_bar_spawn = now

    def spawn_bar(self) -> Bar:
        """Push a fresh bar onto the front of the chain."""
        self.last_bar_number += 1
        bar = Bar(number=self.last_bar_number, speed_base=self.speed_base)
        self.bars.appendleft(bar)
        self.highlight = shift_for_spawn(self.highlight)
        logger.info("Spawned bar #%d (%d in chain)", bar.number, len(self.bars))
        return bar

    def _advance_bars(self, now: float) -> None:
        bars = list(self.bars)
        for i, bar in enumerate(bars):
            downstream = bars[i + 1] if i + 1 < len(bars) else None
            bar.advance(now, downstream, self.global_upgrades, self.prestige)

    def _automate(self, now: float) -> None:
        for prestige_upgrade, global_upgrade in AUTOMATION_PAIRS:
            interval = self.prestige.automation_interval(prestige_upgrade)
            if interval is None:
                continue
            last = self.last_automation.get(global_upgrade)
            if last is not None and now - last < interval:
                continue
            # Throttle failed attempts too
            self.last_automation[global_upgrade] = now
            if self.purchase_global(global_upgrade):
                logger.info(
                    "Automation bought %s (level %d)",
                    global_upgrade.value,
                    self.global_upgrades[global_upgrade],
                )

    def _autosave(self, now: float) -> None:
        if self.last_save is None or now - self.last_save >= BALANCE.chain.save_interval_s:
            self.save(now)

    # ── Persistence ──────────────────────────────────────

    def save(self, now: float) -> bool:
        """Write a snapshot to ``save_path``. Returns True on success.

        A failed write is logged and leaves the chain untouched; the next
        scheduled save tries again.
        """
        from idlebars.engine.save import save_chain

        self.last_save = now
        if self.save_path is None:
            return False
        try:
            save_chain(self, self.save_path, now)
        except OSError:
            logger.exception("Could not save to %s", self.save_path)
            return False
        return True

    # ── Pricing ──────────────────────────────────────────

    def upgrade_cost(self, row: int, upgrade: Upgrade) -> Float:
        """Cost of the next level of ``upgrade`` on the bar at ``row``."""
        return self.bars[row].upgrade_cost(upgrade) * self._child_discount(row)

    def _child_discount(self, row: int) -> float:
        affected = self.prestige.level(PrestigeUpgrade.CHILD_COST_REDUCTION)
        if row >= affected or row + 1 >= len(self.bars):
            return 1.0
        extra = self.bars[row + 1].total_upgrades() - self.bars[row].total_upgrades()
        if extra <= 0:
            return 1.0
        bal = BALANCE.prestige
        return 1.0 - min(bal.child_discount_cap, bal.child_discount_per_upgrade * extra)

    def _upgrade_price(self, row: int, upgrade: Upgrade) -> UpgradeCost | None:
        if not 0 <= row < len(self.bars):
            return None
        payer = row - UPGRADES[upgrade].cost_target
        if payer < 0:
            return None
        cost = self.upgrade_cost(row, upgrade)
        if self.bars[payer].gathered < cost:
            return None
        return UpgradeCost(payer=payer, cost=cost)

    def can_afford(self, row: int, upgrade: Upgrade) -> bool:
        return self._upgrade_price(row, upgrade) is not None

    def global_upgrade_cost(self, upgrade: GlobalUpgrade) -> Float:
        return GLOBAL_UPGRADES[upgrade].cost(self.global_upgrades[upgrade])

    def _global_upgrade_price(self, upgrade: GlobalUpgrade) -> Float | None:
        if not self.bars:
            return None
        cost = self.global_upgrade_cost(upgrade)
        if self.bars[-1].gathered < cost:
            return None
        return cost

    def can_afford_global(self, upgrade: GlobalUpgrade) -> bool:
        return self._global_upgrade_price(upgrade) is not None

    def highlight_cost_target(self) -> int | None:
        """Index of the bar that would pay for the highlighted upgrade."""
        h = self.highlight
        if isinstance(h, BarHighlight):
            target = h.row - UPGRADES[h.upgrade].cost_target
            return target if target >= 0 else None
        if isinstance(h, GlobalHighlight) and self.bars:
            return len(self.bars) - 1
        return None

    # ── Purchases ────────────────────────────────────────

    def purchase_upgrade(self, row: int, upgrade: Upgrade) -> bool:
        """Attempt to buy ``upgrade`` for the bar at ``row``. Returns True if successful."""
        price = self._upgrade_price(row, upgrade)
        if price is None:
            return False
        self.bars[price.payer].gathered -= price.cost
        self.bars[row].inc_upgrade(upgrade, self.global_upgrades[GlobalUpgrade.SPEED])
        logger.debug(
            "Bought %s for bar #%d, paid by #%d",
            upgrade.value, self.bars[row].number, self.bars[price.payer].number,
        )
        return True

    def purchase_global(self, upgrade: GlobalUpgrade) -> bool:
        """Attempt to buy a global upgrade, paid by the last bar."""
        cost = self._global_upgrade_price(upgrade)
        if cost is None:
            return False
        self.global_upgrades[upgrade] += 1
        self.bars[-1].gathered -= cost

        if upgrade is GlobalUpgrade.PROGRESS_BARS:
            self.bars_to_spawn += BALANCE.chain.bars_per_progress_upgrade
        elif upgrade is GlobalUpgrade.SPEED:
            self.readjust_speeds()

        logger.debug("Bought global %s (level %d)", upgrade.value, self.global_upgrades[upgrade])
        return True

    def purchase_highlighted(self) -> bool:
        h = self.highlight
        if isinstance(h, BarHighlight):
            return self.purchase_upgrade(h.row, h.upgrade)
        if isinstance(h, GlobalHighlight):
            return self.purchase_global(h.upgrade)
        return False

    def purchase_any(self) -> bool:
        """Buy the first affordable upgrade, globals first, most impactful first."""
        for global_upgrade in GLOBAL_UPGRADE_PREFERENCE:
            if self.purchase_global(global_upgrade):
                return True
        for upgrade in UPGRADE_PREFERENCE:
            for row in reversed(range(len(self.bars))):
                if self.purchase_upgrade(row, upgrade):
                    return True
        return False

    def purchase_prestige_upgrade(self, upgrade: PrestigeUpgrade) -> bool:
        bought = self.prestige.purchase(upgrade)
        if bought:
            logger.info("Bought prestige %s (level %d)", upgrade.value, self.prestige.level(upgrade))
        return bought

    def readjust_speeds(self) -> None:
        """Re-run the gain exponent throttle on every bar."""
        global_speed = self.global_upgrades[GlobalUpgrade.SPEED]
        for bar in self.bars:
            bar.adjust_gain_exponent(global_speed)

    # ── Prestige ─────────────────────────────────────────

    def perform_prestige(self) -> Float:
        """Claim prestige points and reset the run. Returns points earned."""
        bar_count = len(self.bars)
        if not can_prestige(bar_count):
            return Float(0.0)

        earned = self.prestige.claim(bar_count)
        self.reset()
        logger.info("Prestiged with %d bars for %s points", bar_count, earned)
        return earned

    def reset(self) -> None:
        """Full run reset — prestige persists, everything else clears."""
        self.bars.clear()
        self.bars_to_spawn = BALANCE.chain.initial_bars_to_spawn
        self.last_bar_spawn = None
        self.last_bar_number = 0
        self.global_upgrades = seeded_levels(GlobalUpgrade)
        self.last_automation.clear()
        self.highlight = NO_HIGHLIGHT
        # Snapshot the fresh run on the next tick
        self.last_save = None
