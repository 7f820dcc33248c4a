"""idlebars — Textual host for the chain.

Owns the tick timer and maps keys onto the chain's command surface.
"""

from __future__ import annotations

import time

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.timer import Timer
from textual.widgets import Footer, Header

from idlebars.config import Options, StartScreen
from idlebars.data.balance import BALANCE
from idlebars.data.prestige_upgrades import PrestigeUpgrade
from idlebars.engine.chain import Chain
from idlebars.engine.highlight import (
    NO_HIGHLIGHT,
    Direction,
    PrestigeButtonHighlight,
    PrestigeHighlight,
    PrestigeUpgradeHighlight,
    change_pane,
    move_highlight,
    move_prestige_highlight,
)
from idlebars.engine.save import load_chain
from idlebars.ui.chain_panel import ChainPanel
from idlebars.ui.global_panel import GlobalPanel
from idlebars.ui.prestige_panel import PrestigePanel


class IdleBarsApp(App):
    """The idlebars TUI application."""

    TITLE = "idlebars"
    SUB_TITLE = "Fill. Level. Transfer. Prestige."

    BINDINGS = [
        Binding("space", "purchase", "Buy", show=True, priority=True),
        Binding("enter", "purchase", "Buy", show=False),
        Binding("u", "purchase_any", "Buy any", show=False),
        Binding("tab", "change_pane", "Pane", show=False, priority=True),
        Binding("up", "move('UP')", "Up", show=False),
        Binding("down", "move('DOWN')", "Down", show=False),
        Binding("left", "move('LEFT')", "Left", show=False),
        Binding("right", "move('RIGHT')", "Right", show=False),
        Binding("p", "toggle_prestige", "Prestige", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, options: Options) -> None:
        super().__init__()
        self._options = options
        self._chain: Chain = load_chain(options.save_file, time.monotonic(), options.speed_base)
        self._prestige_view: bool = options.start_screen is StartScreen.PRESTIGE
        self._prestige_highlight: PrestigeHighlight = NO_HIGHLIGHT
        self._tick_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="normal-view"):
            yield ChainPanel(id="chain-panel")
            yield GlobalPanel(id="global-panel")
        yield PrestigePanel(id="prestige-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Start the fixed-rate tick."""
        self._tick_timer = self.set_interval(BALANCE.chain.tick_interval_s, self._game_tick)
        self._sync_ui()

    def _game_tick(self) -> None:
        self._chain.advance(time.monotonic())
        self._sync_ui()

    def _sync_ui(self) -> None:
        """Push chain state to the visible widgets."""
        now = time.monotonic()
        normal = self.query_one("#normal-view", Vertical)
        prestige = self.query_one("#prestige-panel", PrestigePanel)
        normal.display = not self._prestige_view
        prestige.display = self._prestige_view

        if self._prestige_view:
            prestige.update_from_chain(self._chain, self._prestige_highlight)
        else:
            self.query_one("#chain-panel", ChainPanel).update_from_chain(self._chain, now)
            self.query_one("#global-panel", GlobalPanel).update_from_chain(
                self._chain, self._buy_any_unlocked()
            )

    def _buy_any_unlocked(self) -> bool:
        return self._chain.prestige.level(PrestigeUpgrade.UPGRADE_ANY_BUTTON) > 0

    # ── Actions ──────────────────────────────────────

    def action_purchase(self) -> None:
        if not self._prestige_view:
            self._chain.purchase_highlighted()
        elif isinstance(self._prestige_highlight, PrestigeButtonHighlight):
            earned = self._chain.perform_prestige()
            if earned > 0:
                self.notify(f"Prestiged! +{earned} points", severity="warning", timeout=3)
            else:
                self.notify("Not enough bars to prestige.", severity="error", timeout=1)
        elif isinstance(self._prestige_highlight, PrestigeUpgradeHighlight):
            upgrade = list(PrestigeUpgrade)[self._prestige_highlight.index]
            if not self._chain.purchase_prestige_upgrade(upgrade):
                self.notify("Can't afford that upgrade.", severity="error", timeout=1)
        self._sync_ui()

    def action_purchase_any(self) -> None:
        if self._prestige_view or not self._buy_any_unlocked():
            return
        self._chain.purchase_any()
        self._sync_ui()

    def action_change_pane(self) -> None:
        if self._prestige_view:
            return
        self._chain.highlight = change_pane(self._chain.highlight, len(self._chain.bars))
        self._sync_ui()

    def action_move(self, direction: str) -> None:
        d = Direction[direction]
        if self._prestige_view:
            self._prestige_highlight = move_prestige_highlight(
                self._prestige_highlight, d, len(PrestigeUpgrade)
            )
        else:
            self._chain.highlight = move_highlight(self._chain.highlight, d, len(self._chain.bars))
        self._sync_ui()

    def action_toggle_prestige(self) -> None:
        self._prestige_view = not self._prestige_view
        self._prestige_highlight = NO_HIGHLIGHT
        self._sync_ui()

    async def action_quit(self) -> None:
        """Save and quit. Also reached through Textual's own quit binding."""
        self._chain.save(time.monotonic())
        self.exit()
