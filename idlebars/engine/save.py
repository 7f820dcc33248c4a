"""Chain save/load — persists the run and prestige to disk between sessions."""

from __future__ import annotations

import json
import logging
from collections import deque
from enum import Enum
from pathlib import Path
from typing import TypeVar

from idlebars.data.prestige_upgrades import PrestigeUpgrade
from idlebars.data.upgrades import GlobalUpgrade, Upgrade, seeded_levels
from idlebars.engine.bar import Bar, level_speed_for
from idlebars.engine.chain import Chain
from idlebars.engine.number import Float
from idlebars.engine.prestige import Prestige

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Enum)


class SaveCorruptError(ValueError):
    """The snapshot on disk cannot be turned back into a chain."""


# ── Serialisation helpers ────────────────────────────────────────


def _levels_to_dict(levels: dict[K, int]) -> dict[str, int]:
    return {kind.value: level for kind, level in levels.items()}


def _levels_from_dict(kind: type[K], d: dict) -> dict[K, int]:
    # Kinds missing from older snapshots start at 0
    levels = seeded_levels(kind)
    for name, level in d.items():
        levels[kind(name)] = int(level)
    return levels


def _bar_to_dict(bar: Bar, now: float) -> dict:
    return {
        "progress": float(bar.progress),
        "gathered": float(bar.gathered),
        "transfer_ratio": float(bar.transfer_ratio),
        "upgrades": _levels_to_dict(bar.upgrades),
        "number": bar.number,
        "exp": bar.exp,
        "level": bar.level,
        # Remaining time, not a timestamp, so reloads resume correctly
        "boost_remaining": bar.boost_remaining(now),
        "speed_base": float(bar.speed_base),
        "gain_exponent": bar.gain_exponent,
        "level_speed": bar.level_speed,
    }


def _dict_to_bar(d: dict, now: float) -> Bar:
    level = int(d["level"])
    if level < 1:
        raise ValueError(f"bar level must be >= 1, got {level}")

    level_speed = d.get("level_speed")
    if level_speed is None:
        level_speed = level_speed_for(level)

    boost_remaining = float(d["boost_remaining"])

    return Bar(
        number=int(d["number"]),
        speed_base=Float(float(d["speed_base"])),
        progress=Float(float(d["progress"])),
        gathered=Float(float(d["gathered"])),
        transfer_ratio=Float(float(d["transfer_ratio"])),
        upgrades=_levels_from_dict(Upgrade, d["upgrades"]),
        exp=float(d["exp"]),
        level=level,
        level_speed=float(level_speed),
        gain_exponent=int(d["gain_exponent"]),
        boost_until=now + boost_remaining if boost_remaining > 0 else None,
    )


def _dict_to_prestige(d: dict | None) -> Prestige:
    # Snapshots from before prestige existed have no block at all
    if d is None:
        return Prestige()
    upgrades = d.get("upgrades")
    return Prestige(
        current=Float(float(d.get("current", 0.0))),
        upgrades=_levels_from_dict(PrestigeUpgrade, upgrades or {}),
    )


def chain_to_dict(chain: Chain, now: float) -> dict:
    return {
        "bars": [_bar_to_dict(bar, now) for bar in chain.bars],
        "bars_to_spawn": chain.bars_to_spawn,
        "last_bar_number": chain.last_bar_number,
        "global_upgrades": _levels_to_dict(chain.global_upgrades),
        "prestige": {
            "current": float(chain.prestige.current),
            "upgrades": _levels_to_dict(chain.prestige.upgrades),
        },
    }


def chain_from_dict(
    d: dict,
    now: float,
    speed_base: float | None = None,
    save_path: Path | None = None,
) -> Chain:
    """Rebuild a chain from a snapshot. Raises SaveCorruptError on bad data."""
    try:
        if not isinstance(d, dict):
            raise TypeError(f"snapshot must be an object, got {type(d).__name__}")
        chain = Chain(
            bars=deque(_dict_to_bar(b, now) for b in d["bars"]),
            bars_to_spawn=int(d["bars_to_spawn"]),
            last_bar_number=int(d["last_bar_number"]),
            global_upgrades=_levels_from_dict(GlobalUpgrade, d["global_upgrades"]),
            prestige=_dict_to_prestige(d.get("prestige")),
            tick=now,
            save_path=save_path,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise SaveCorruptError(f"Malformed snapshot: {exc!r}") from exc

    if speed_base is not None:
        chain.speed_base = Float(speed_base)
    chain.readjust_speeds()
    return chain


# ── Public API ───────────────────────────────────────────────────


def save_chain(chain: Chain, path: Path, now: float) -> None:
    """Persist the chain to disk atomically (temp file, then rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(chain_to_dict(chain, now), indent=2), encoding="utf-8")
    tmp.replace(path)
    logger.info("Saved %d bars to %s", len(chain.bars), path)


def load_chain(path: Path, now: float, speed_base: float | None = None) -> Chain:
    """Load the chain saved at ``path``, or a fresh one if there is none.

    A corrupt snapshot raises SaveCorruptError rather than starting over.
    """
    if not path.exists():
        logger.info("No save at %s, starting a fresh chain", path)
        chain = Chain(save_path=path)
        if speed_base is not None:
            chain.speed_base = Float(speed_base)
        return chain

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SaveCorruptError(f"{path} is not valid JSON: {exc}") from exc

    chain = chain_from_dict(data, now, speed_base=speed_base, save_path=path)
    logger.info("Loaded %d bars from %s", len(chain.bars), path)
    return chain
