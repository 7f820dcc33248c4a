"""Prestige screen — claimable points and the permanent upgrade list."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget

from idlebars.data.balance import BALANCE
from idlebars.data.prestige_upgrades import PRESTIGE_UPGRADES, PrestigeUpgrade
from idlebars.engine.chain import Chain
from idlebars.engine.highlight import (
    NO_HIGHLIGHT,
    PrestigeButtonHighlight,
    PrestigeHighlight,
    PrestigeUpgradeHighlight,
)
from idlebars.engine.prestige import can_prestige, claimable_prestige


class PrestigePanel(Widget):
    """Shows prestige availability and upgrades."""

    DEFAULT_CSS = """
    PrestigePanel {
        width: 100%;
        height: 1fr;
        padding: 1 2;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._chain: Chain | None = None
        self._highlight: PrestigeHighlight = NO_HIGHLIGHT

    def render(self) -> Text:
        text = Text()
        chain = self._chain
        if chain is None:
            return text

        prestige = chain.prestige
        bar_count = len(chain.bars)

        text.append("  ═══ Prestige ═══\n\n", style="bold magenta")
        text.append("  Current prestige points: ", style="dim")
        text.append(f"{prestige.current}\n", style="bold yellow")

        button_style = "bold yellow" if isinstance(self._highlight, PrestigeButtonHighlight) else "bold"
        if can_prestige(bar_count):
            text.append("  Points to claim on prestige: ", style="dim")
            text.append(f"{claimable_prestige(bar_count)}\n", style="yellow")
            text.append("  [ PRESTIGE ]\n\n", style=button_style)
        else:
            text.append(
                f"  You cannot prestige until you reach {BALANCE.prestige.min_bars} bars\n\n",
                style="dim",
            )

        for index, upgrade in enumerate(PrestigeUpgrade):
            selected = self._highlight == PrestigeUpgradeHighlight(index)
            if prestige.is_max_level(upgrade):
                cost, style = "MAXED", "dim"
            else:
                cost = str(prestige.cost(upgrade))
                style = "green" if prestige.can_afford(upgrade) else "white"
            if selected:
                style = "bold yellow"
            text.append(
                f"  {PRESTIGE_UPGRADES[upgrade].description} "
                f"(Lv.{prestige.level(upgrade)}): {cost}\n",
                style=style,
            )

        text.append("\n  [Arrows] Select  [Space] Buy  [P] Back  [Q] Quit\n", style="dim italic")
        return text

    def update_from_chain(self, chain: Chain, highlight: PrestigeHighlight) -> None:
        self._chain = chain
        self._highlight = highlight
        self.refresh()
