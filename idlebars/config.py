"""Runtime options — where to save, how fast bars start, what to show first."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from idlebars.data.balance import BALANCE

DATA_DIR = Path.home() / ".idlebars"


class StartScreen(Enum):
    NORMAL = "normal"
    PRESTIGE = "prestige"


@dataclass(frozen=True)
class Options:
    """Everything the command line can change."""

    save_file: Path = field(default_factory=lambda: DATA_DIR / "save.json")
    speed_base: float = BALANCE.bar.speed_base
    start_screen: StartScreen = StartScreen.NORMAL
    log_file: Path = field(default_factory=lambda: DATA_DIR / "idlebars.log")
    verbose: bool = False
