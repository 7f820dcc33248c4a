"""Chain panel — one line per bar: progress, value, level, speed and upgrades."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget

from idlebars.data.balance import BALANCE
from idlebars.data.upgrades import UPGRADES, GlobalUpgrade, Upgrade
from idlebars.engine.bar import Bar
from idlebars.engine.chain import Chain
from idlebars.engine.highlight import BarHighlight
from idlebars.engine.number import format_number

_GAUGE_WIDTH = 16
_BAR_COLORS = ("blue", "white", "green", "red")


def _gauge(bar: Bar) -> str:
    filled = int(float(bar.progress) / BALANCE.bar.full_progress * _GAUGE_WIDTH)
    filled = max(0, min(_GAUGE_WIDTH, filled))
    return "#" * filled + "." * (_GAUGE_WIDTH - filled)


def _upgrade_label(upgrade: Upgrade, bar: Bar, cost: str) -> str:
    udef = UPGRADES[upgrade]
    if udef.cost_target:
        return f"{udef.label}: {cost} from #{bar.number + udef.cost_target}"
    return f"{udef.label}: {cost}"


class ChainPanel(Widget):
    """Displays every bar in the chain with its upgrade buttons."""

    DEFAULT_CSS = """
    ChainPanel {
        width: 100%;
        height: 1fr;
        padding: 0 1;
        overflow-y: auto;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._chain: Chain | None = None
        self._now: float = 0.0

    def render(self) -> Text:
        text = Text()
        chain = self._chain
        if chain is None or not chain.bars:
            text.append("  Waiting for the first bar...\n", style="dim italic")
            return text

        global_speed = chain.global_level(GlobalUpgrade.SPEED)
        payer = chain.highlight_cost_target()
        highlight = chain.highlight

        for row, bar in enumerate(chain.bars):
            color = "yellow" if bar.is_boosted(self._now) else _BAR_COLORS[row % len(_BAR_COLORS)]
            number_style = "reverse bold" if row == payer else "bold"
            text.append(f"#{bar.number:<3}", style=number_style)
            text.append(f" [{_gauge(bar)}] ", style=color)
            text.append(f"{str(bar.gathered):>7} ", style="bold green")

            completion = bar.recent_completion(self._now)
            if completion is None:
                text.append(" " * 18)
            elif completion.transferred is None:
                text.append(f"{'+' + str(completion.gain):<18}", style="green")
            else:
                transfer = f"+{completion.gain}/v{completion.transferred}"
                text.append(f"{transfer:<18}", style="green")

            exp_needed = bar.exp_for_next_level(chain.prestige.exp_requirement_factor())
            level = f"L{bar.level} {format_number(bar.exp)}/{format_number(exp_needed)}"
            text.append(f"{level:<16}", style="cyan")
            speed = f"x{float(bar.speed(global_speed)):.2f}"
            text.append(f"{speed:<9}", style="dim")

            for upgrade in Upgrade:
                cost = str(chain.upgrade_cost(row, upgrade))
                selected = highlight == BarHighlight(upgrade=upgrade, row=row)
                style = "yellow" if selected else "white"
                if chain.can_afford(row, upgrade):
                    style += " bold underline"
                text.append(f"| {_upgrade_label(upgrade, bar, cost)} ", style=style)
            text.append("|\n")

        return text

    def update_from_chain(self, chain: Chain, now: float) -> None:
        """Sync panel with chain state."""
        self._chain = chain
        self._now = now
        self.refresh()
