"""UI selection state — which upgrade button is highlighted.

Pure functions over small frozen variants, independent of any rendering. The
chain keeps the main-screen highlight so spawning can keep it on the same bar.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from idlebars.data.upgrades import GlobalUpgrade, Upgrade


class Direction(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class NoHighlight:
    pass


@dataclass(frozen=True)
class BarHighlight:
    upgrade: Upgrade
    row: int


@dataclass(frozen=True)
class GlobalHighlight:
    upgrade: GlobalUpgrade


@dataclass(frozen=True)
class PrestigeButtonHighlight:
    pass


@dataclass(frozen=True)
class PrestigeUpgradeHighlight:
    index: int


NO_HIGHLIGHT = NoHighlight()

Highlight = Union[NoHighlight, BarHighlight, GlobalHighlight]
PrestigeHighlight = Union[NoHighlight, PrestigeButtonHighlight, PrestigeUpgradeHighlight]


# ── Main screen ──────────────────────────────────────────────────


def move_highlight(highlight: Highlight, direction: Direction, bar_count: int) -> Highlight:
    """Move the selection one step; rows and upgrade kinds wrap around."""
    if bar_count == 0:
        return highlight

    if isinstance(highlight, BarHighlight):
        row, upgrade = highlight.row, highlight.upgrade
        if direction is Direction.LEFT:
            upgrade = upgrade.prev()
        elif direction is Direction.RIGHT:
            upgrade = upgrade.next()
        elif direction is Direction.UP:
            row = row - 1 if row > 0 else bar_count - 1
        else:
            row = 0 if row >= bar_count - 1 else row + 1
        return BarHighlight(upgrade=upgrade, row=row)

    if isinstance(highlight, GlobalHighlight):
        if direction is Direction.LEFT:
            return GlobalHighlight(highlight.upgrade.prev())
        if direction is Direction.RIGHT:
            return GlobalHighlight(highlight.upgrade.next())
        return highlight

    return BarHighlight(upgrade=Upgrade.SPEED, row=0)


def change_pane(highlight: Highlight, bar_count: int) -> Highlight:
    """Toggle between the per-bar grid and the global upgrade row."""
    if isinstance(highlight, GlobalHighlight):
        return BarHighlight(upgrade=Upgrade.SPEED, row=0)
    if isinstance(highlight, BarHighlight):
        return GlobalHighlight(GlobalUpgrade.SPEED)
    return move_highlight(highlight, Direction.DOWN, bar_count)


def shift_for_spawn(highlight: Highlight) -> Highlight:
    """Keep a bar selection on the same bar after one is pushed to the front."""
    if isinstance(highlight, BarHighlight):
        return BarHighlight(upgrade=highlight.upgrade, row=highlight.row + 1)
    return highlight


# ── Prestige screen ──────────────────────────────────────────────


def move_prestige_highlight(
    highlight: PrestigeHighlight, direction: Direction, upgrade_count: int
) -> PrestigeHighlight:
    """Up/down walk the upgrade list; left/right jump to the prestige button."""
    horizontal = direction in (Direction.LEFT, Direction.RIGHT)

    if isinstance(highlight, PrestigeUpgradeHighlight):
        if horizontal:
            return PrestigeButtonHighlight()
        if direction is Direction.DOWN:
            return PrestigeUpgradeHighlight((highlight.index + 1) % upgrade_count)
        return PrestigeUpgradeHighlight((highlight.index - 1) % upgrade_count)

    if isinstance(highlight, PrestigeButtonHighlight):
        return PrestigeUpgradeHighlight(0) if horizontal else highlight

    return PrestigeUpgradeHighlight(0)
