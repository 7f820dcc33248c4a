"""Bar — one lane of the chain: fills, completes, levels up, pays downstream."""

from __future__ import annotations

from dataclasses import dataclass, field

from idlebars.data.balance import BALANCE
from idlebars.data.upgrades import UPGRADES, GlobalUpgrade, Upgrade, seeded_levels
from idlebars.engine.number import Float
from idlebars.engine.prestige import Prestige


@dataclass
class Completion:
    """What happened on a bar's last completion (display only)."""

    gain: Float                  # net of what was transferred
    transferred: Float | None    # None for the last bar
    tick: float


def level_speed_for(level: int) -> float:
    """Cumulative level speed bonus a bar has after reaching ``level``."""
    bal = BALANCE.bar
    speed = 1.0
    for reached in range(2, level + 1):
        speed += bal.level_speed_step * (reached + bal.level_speed_offset)
    return speed


@dataclass
class Bar:
    """Complete mutable state for one lane."""

    number: int
    speed_base: Float = field(default_factory=lambda: Float(BALANCE.bar.speed_base))

    # ── Progress & value ─────────────────────────────────
    progress: Float = field(default_factory=Float)
    gathered: Float = field(default_factory=Float)
    transfer_ratio: Float = field(
        default_factory=lambda: Float(BALANCE.bar.base_transfer_ratio)
    )

    # ── Upgrades: kind → level ───────────────────────────
    upgrades: dict[Upgrade, int] = field(default_factory=lambda: seeded_levels(Upgrade))

    # ── Leveling ─────────────────────────────────────────
    exp: float = 0.0
    level: int = 1
    level_speed: float = 1.0
    gain_exponent: int = 0         # 10x speed traded for 10x gain, this many times
    boost_until: float | None = None

    # ── Transient ────────────────────────────────────────
    last_completion: Completion | None = None

    # ── Derived values ───────────────────────────────────

    def speed_multiplier(self, global_speed_level: int) -> float:
        bal = BALANCE.bar
        return (
            bal.speed_upgrade_mult ** self.upgrades[Upgrade.SPEED]
            * bal.global_speed_mult ** global_speed_level
            * self.level_speed
            * 10.0 ** -self.gain_exponent
        )

    def speed(self, global_speed_level: int) -> Float:
        """Progress per tick, before any boost."""
        return self.speed_base * self.speed_multiplier(global_speed_level)

    def gain(self, global_gain_level: int) -> Float:
        """Value added to ``gathered`` on each completion."""
        u = self.upgrades
        base = Float(1 + u[Upgrade.GAIN] + global_gain_level)
        return (
            base
            * Float(2.0).powf(u[Upgrade.DOUBLE])
            * Float(3.0).powf(u[Upgrade.TRIPLE])
            * Float(4.0).powf(u[Upgrade.QUADRUPLE])
            * Float(10.0).powf(self.gain_exponent)
        )

    def exp_for_next_level(self, requirement_factor: float = 1.0) -> float:
        return BALANCE.bar.exp_base ** (self.level + 1) * requirement_factor

    def is_boosted(self, now: float) -> bool:
        return self.boost_until is not None and now < self.boost_until

    def boost_remaining(self, now: float) -> float:
        """Seconds of boost left at ``now`` (0 when not boosted)."""
        if not self.is_boosted(now):
            return 0.0
        return self.boost_until - now

    def is_ahead_of(self, other: Bar) -> bool:
        """True if ``other`` has a lower level, or the same level and less exp."""
        if other.level != self.level:
            return other.level < self.level
        return other.exp < self.exp

    def total_upgrades(self) -> int:
        return sum(self.upgrades.values())

    def recent_completion(self, now: float) -> Completion | None:
        c = self.last_completion
        if c is not None and now - c.tick < BALANCE.bar.completion_display_s:
            return c
        return None

    # ── Upgrades ─────────────────────────────────────────

    def upgrade_cost(self, upgrade: Upgrade) -> Float:
        return UPGRADES[upgrade].cost(self.upgrades[upgrade])

    def inc_upgrade(self, upgrade: Upgrade, global_speed_level: int) -> None:
        self.upgrades[upgrade] += 1
        # A speed upgrade alone can push the bar over the throttle
        if upgrade is Upgrade.SPEED:
            self.adjust_gain_exponent(global_speed_level)

    def adjust_gain_exponent(self, global_speed_level: int) -> None:
        """Trade 10x speed for a 10x gain step until under the threshold."""
        threshold = BALANCE.bar.gain_exponent_threshold
        while self.speed_multiplier(global_speed_level) >= threshold:
            self.gain_exponent += 1

    def extend_boost(self, now: float, seconds: float) -> None:
        """Add ``seconds`` of boost, stacking onto any boost still running."""
        if self.is_boosted(now):
            self.boost_until += seconds
        else:
            self.boost_until = now + seconds

    # ── Simulation ───────────────────────────────────────

    def advance(
        self,
        now: float,
        downstream: Bar | None,
        global_upgrades: dict[GlobalUpgrade, int],
        prestige: Prestige,
    ) -> Completion | None:
        """Advance one tick. Returns the completion if the bar completed.

        ``downstream`` is the next bar in the chain; exp and value may be
        pushed into it.
        """
        global_speed = global_upgrades[GlobalUpgrade.SPEED]
        # Value is paid at the rate the bar had before this tick
        gain = self.gain(global_upgrades[GlobalUpgrade.GAIN])

        increment = self.speed(global_speed)
        if self.is_boosted(now):
            increment = increment * BALANCE.bar.boost_mult

        if self.progress + increment <= prestige.completion_threshold():
            self.progress = self.progress + increment
            return None

        self._gain_exp(now, downstream, global_upgrades, prestige)
        # Residual is measured from the pre-completion progress, not the overshoot
        self.progress = BALANCE.bar.full_progress - self.progress
        self._collect(now, gain, downstream, prestige)
        return self.last_completion

    def _gain_exp(
        self,
        now: float,
        downstream: Bar | None,
        global_upgrades: dict[GlobalUpgrade, int],
        prestige: Prestige,
    ) -> None:
        exp_gain = (1 + global_upgrades[GlobalUpgrade.EXP_GAIN]) * 10.0 ** self.gain_exponent

        if downstream is not None and self.is_ahead_of(downstream):
            kept = exp_gain * prestige.exp_keep_share()
            downstream.exp += exp_gain - kept
            exp_gain = kept

        self.exp += exp_gain

        # At most one level per completion
        required = self.exp_for_next_level(prestige.exp_requirement_factor())
        if self.exp < required:
            return

        bal = BALANCE.bar
        self.exp -= required
        self.level += 1
        self.level_speed += bal.level_speed_step * (self.level + bal.level_speed_offset)
        self.adjust_gain_exponent(global_upgrades[GlobalUpgrade.SPEED])
        self.extend_boost(now, bal.boost_seconds + global_upgrades[GlobalUpgrade.EXP_BOOST])

    def _collect(
        self,
        now: float,
        gain: Float,
        downstream: Bar | None,
        prestige: Prestige,
    ) -> None:
        self.gathered += gain

        if downstream is None:
            self.last_completion = Completion(gain=gain, transferred=None, tick=now)
            return

        ratio = self.transfer_ratio
        if downstream.gathered < self.gathered:
            ratio = ratio + prestige.extra_transfer_ratio()

        transferred = self.gathered * ratio
        self.gathered -= transferred
        downstream.gathered += transferred
        self.last_completion = Completion(gain=gain - transferred, transferred=transferred, tick=now)
