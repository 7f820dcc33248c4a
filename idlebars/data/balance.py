"""Balance constants — all tuning knobs in one place.

Tweak these to adjust pacing of the chain.
All upgrade costs follow: base_cost * (scaling ^ level)
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BarBalance:
    """Tuning for a single progress bar."""

    # Progress needed to complete a bar (before CompleteFaster)
    full_progress: float = 100.0
    # Default progress per tick before any multiplier
    speed_base: float = 0.25
    # Fraction of gathered value pushed downstream on completion
    base_transfer_ratio: float = 0.01

    # Multipliers per upgrade level
    speed_upgrade_mult: float = 1.25
    global_speed_mult: float = 1.05

    # Exp needed for level n = exp_base ^ n
    exp_base: float = 1.5
    # level_speed += level_speed_step * (level + level_speed_offset) on level-up
    level_speed_step: float = 0.01
    level_speed_offset: int = 3

    # Speed multiplier at which raw speed is traded for a 10x gain step
    gain_exponent_threshold: float = 10.0

    # Seconds of doubled progress granted per level-up (before ExpBoost)
    boost_seconds: float = 1.0
    boost_mult: float = 2.0

    # How long a completion stays "recent" for display
    completion_display_s: float = 1.0


@dataclass(frozen=True)
class ChainBalance:
    """Tuning for the chain orchestrator."""

    # Bars queued at the start of every run
    initial_bars_to_spawn: int = 4
    # One bar spawns per interval while the backlog is non-empty
    spawn_interval_s: float = 1.0
    # Bars added to the backlog per ProgressBars level
    bars_per_progress_upgrade: int = 2

    # Periodic save cadence
    save_interval_s: float = 30.0

    # Fixed tick cadence of the host loop
    tick_interval_s: float = 0.04


@dataclass(frozen=True)
class PrestigeBalance:
    """Tuning for prestige and its upgrades."""

    # Minimum chain length before prestige is possible
    min_bars: int = 10
    # Prestige earned = bars / bars_per_point
    bars_per_point: float = 10.0

    # Prestige upgrade cost = cost_base ^ level
    cost_base: int = 2

    # Per-level factors
    complete_faster_factor: float = 0.95
    level_up_faster_factor: float = 0.95
    transfer_exp_keep_factor: float = 0.99
    transfer_value_step: float = 0.01

    # Automation: one attempt every automation_period_s / level
    automation_period_s: float = 60.0
    automation_min_interval_s: float = 0.001

    # ChildCostReduction: 1% off per extra downstream upgrade, capped
    child_discount_per_upgrade: float = 0.01
    child_discount_cap: float = 0.50


@dataclass(frozen=True)
class FormatBalance:
    """Number formatting."""

    # Values are truncated to this many decimals before formatting
    truncate_decimals: int = 2

    # SI suffixes, largest last
    suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "K"),
        (1e6, "M"),
        (1e9, "G"),
        (1e12, "T"),
        (1e15, "P"),
        (1e18, "E"),
        (1e21, "Z"),
        (1e24, "Y"),
    )


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    bar: BarBalance = field(default_factory=BarBalance)
    chain: ChainBalance = field(default_factory=ChainBalance)
    prestige: PrestigeBalance = field(default_factory=PrestigeBalance)
    format: FormatBalance = field(default_factory=FormatBalance)


# Singleton — import this everywhere
BALANCE = GameBalance()
