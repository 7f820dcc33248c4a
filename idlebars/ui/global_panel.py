"""Global upgrade row — paid for by the last bar in the chain."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget

from idlebars.data.upgrades import GLOBAL_UPGRADES, GlobalUpgrade
from idlebars.engine.chain import Chain
from idlebars.engine.highlight import GlobalHighlight


class GlobalPanel(Widget):
    DEFAULT_CSS = """
    GlobalPanel {
        width: 100%;
        height: auto;
        min-height: 3;
        padding: 1;
        border-top: solid $primary;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._chain: Chain | None = None
        self._any_unlocked: bool = False

    def render(self) -> Text:
        text = Text()
        chain = self._chain
        if chain is None:
            return text

        for upgrade in GlobalUpgrade:
            udef = GLOBAL_UPGRADES[upgrade]
            cost = chain.global_upgrade_cost(upgrade)
            style = "yellow" if chain.highlight == GlobalHighlight(upgrade) else "white"
            if chain.can_afford_global(upgrade):
                style += " bold underline"
            text.append(f"| {udef.label} | {cost} ", style=style)
        text.append("|\n")

        text.append("  [Tab] Pane  [Arrows] Select  [Space] Buy", style="dim italic")
        if self._any_unlocked:
            text.append("  [U] Buy any", style="dim italic")
        text.append("  [P] Prestige  [Q] Quit\n", style="dim italic")
        return text

    def update_from_chain(self, chain: Chain, any_unlocked: bool) -> None:
        self._chain = chain
        self._any_unlocked = any_unlocked
        self.refresh()
