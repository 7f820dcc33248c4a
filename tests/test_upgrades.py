"""Tests for the per-bar and global upgrade catalogs."""

import pytest

from idlebars.data.upgrades import (
    GLOBAL_UPGRADE_PREFERENCE,
    GLOBAL_UPGRADES,
    UPGRADE_PREFERENCE,
    UPGRADES,
    GlobalUpgrade,
    Upgrade,
    seeded_levels,
)


@pytest.mark.parametrize("udef", list(UPGRADES.values()) + list(GLOBAL_UPGRADES.values()))
def test_cost_scales_geometrically(udef):
    for level in range(6):
        ratio = float(udef.cost(level + 1)) / float(udef.cost(level))
        assert ratio == pytest.approx(udef.scaling)


def test_cost_at_level_zero_is_base_cost():
    assert UPGRADES[Upgrade.GAIN].cost(0) == 3
    assert GLOBAL_UPGRADES[GlobalUpgrade.PROGRESS_BARS].cost(0) == 22


def test_cost_targets():
    assert UPGRADES[Upgrade.SPEED].cost_target == 0
    assert UPGRADES[Upgrade.GAIN].cost_target == 0
    assert UPGRADES[Upgrade.DOUBLE].cost_target == 1
    assert UPGRADES[Upgrade.TRIPLE].cost_target == 4
    assert UPGRADES[Upgrade.QUADRUPLE].cost_target == 7


def test_every_kind_has_a_definition():
    assert set(UPGRADES) == set(Upgrade)
    assert set(GLOBAL_UPGRADES) == set(GlobalUpgrade)


def test_preference_orders():
    assert UPGRADE_PREFERENCE == (
        Upgrade.QUADRUPLE, Upgrade.TRIPLE, Upgrade.DOUBLE, Upgrade.GAIN, Upgrade.SPEED,
    )
    assert GLOBAL_UPGRADE_PREFERENCE == (
        GlobalUpgrade.PROGRESS_BARS,
        GlobalUpgrade.GAIN,
        GlobalUpgrade.SPEED,
        GlobalUpgrade.EXP_GAIN,
        GlobalUpgrade.EXP_BOOST,
    )


def test_kinds_cycle():
    assert Upgrade.SPEED.next() is Upgrade.GAIN
    assert Upgrade.QUADRUPLE.next() is Upgrade.SPEED
    assert Upgrade.SPEED.prev() is Upgrade.QUADRUPLE
    assert GlobalUpgrade.EXP_GAIN.next() is GlobalUpgrade.SPEED
    assert GlobalUpgrade.SPEED.prev() is GlobalUpgrade.EXP_GAIN


def test_seeded_levels_covers_every_kind():
    levels = seeded_levels(GlobalUpgrade)
    assert levels == {g: 0 for g in GlobalUpgrade}
