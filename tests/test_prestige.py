"""Tests for prestige points and prestige upgrades."""

import pytest

from idlebars.data.prestige_upgrades import PrestigeUpgrade
from idlebars.engine.number import Float
from idlebars.engine.prestige import Prestige, can_prestige, claimable_prestige


# ── Eligibility ──────────────────────────────────────────────────


def test_cannot_prestige_below_ten_bars():
    assert not can_prestige(9)
    assert claimable_prestige(9) == 0


def test_can_prestige_at_ten_bars():
    assert can_prestige(10)
    assert claimable_prestige(10) == 1.0


def test_claimable_is_fractional():
    assert claimable_prestige(25) == 2.5


def test_claim_adds_to_current():
    p = Prestige(current=Float(0.5))
    earned = p.claim(12)
    assert earned == pytest.approx(1.2)
    assert float(p.current) == pytest.approx(1.7)


# ── Upgrades ─────────────────────────────────────────────────────


def test_fresh_prestige_has_every_upgrade_at_zero():
    p = Prestige()
    assert p.current == 0
    assert all(p.level(u) == 0 for u in PrestigeUpgrade)


def test_cost_doubles_per_level():
    p = Prestige()
    assert p.cost(PrestigeUpgrade.COMPLETE_FASTER) == 1
    p.upgrades[PrestigeUpgrade.COMPLETE_FASTER] = 3
    assert p.cost(PrestigeUpgrade.COMPLETE_FASTER) == 8


def test_purchase_debits_and_levels_up():
    p = Prestige(current=Float(5))
    assert p.purchase(PrestigeUpgrade.LEVEL_UP_FASTER)
    assert p.current == 4
    assert p.level(PrestigeUpgrade.LEVEL_UP_FASTER) == 1
    assert p.cost(PrestigeUpgrade.LEVEL_UP_FASTER) == 2


def test_purchase_insufficient_funds_is_noop():
    p = Prestige(current=Float(0.5))
    assert not p.purchase(PrestigeUpgrade.LEVEL_UP_FASTER)
    assert p.current == 0.5
    assert p.level(PrestigeUpgrade.LEVEL_UP_FASTER) == 0


def test_upgrade_any_button_caps_at_eight():
    p = Prestige(current=Float(1e6))
    p.upgrades[PrestigeUpgrade.UPGRADE_ANY_BUTTON] = 8
    assert p.is_max_level(PrestigeUpgrade.UPGRADE_ANY_BUTTON)
    assert not p.purchase(PrestigeUpgrade.UPGRADE_ANY_BUTTON)
    assert p.current == 1e6


def test_other_upgrades_are_uncapped():
    p = Prestige()
    p.upgrades[PrestigeUpgrade.COMPLETE_FASTER] = 100
    assert not p.is_max_level(PrestigeUpgrade.COMPLETE_FASTER)


# ── Effects ──────────────────────────────────────────────────────


def test_complete_faster_lowers_threshold():
    p = Prestige()
    assert p.completion_threshold() == 100
    p.upgrades[PrestigeUpgrade.COMPLETE_FASTER] = 2
    assert p.completion_threshold() == pytest.approx(90.25)


def test_level_up_faster_scales_requirement():
    p = Prestige()
    p.upgrades[PrestigeUpgrade.LEVEL_UP_FASTER] = 1
    assert p.exp_requirement_factor() == pytest.approx(0.95)


def test_transfer_effects():
    p = Prestige()
    assert p.exp_keep_share() == 1.0
    assert p.extra_transfer_ratio() == 0.0
    p.upgrades[PrestigeUpgrade.TRANSFER_EXTRA_EXP] = 1
    p.upgrades[PrestigeUpgrade.TRANSFER_EXTRA_VALUE] = 3
    assert p.exp_keep_share() == pytest.approx(0.99)
    assert p.extra_transfer_ratio() == pytest.approx(0.03)


def test_automation_interval():
    p = Prestige()
    assert p.automation_interval(PrestigeUpgrade.AUTOMATE_GLOBAL_SPEED) is None
    p.upgrades[PrestigeUpgrade.AUTOMATE_GLOBAL_SPEED] = 60
    assert p.automation_interval(PrestigeUpgrade.AUTOMATE_GLOBAL_SPEED) == pytest.approx(1.0)
    p.upgrades[PrestigeUpgrade.AUTOMATE_GLOBAL_SPEED] = 1_000_000
    assert p.automation_interval(PrestigeUpgrade.AUTOMATE_GLOBAL_SPEED) == pytest.approx(0.001)
