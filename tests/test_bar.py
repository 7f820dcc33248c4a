"""Tests for single-bar simulation: progress, completion, leveling, transfer."""

import pytest

from idlebars.data.prestige_upgrades import PrestigeUpgrade
from idlebars.data.upgrades import GlobalUpgrade, Upgrade, seeded_levels
from idlebars.engine.bar import Bar, level_speed_for
from idlebars.engine.number import Float
from idlebars.engine.prestige import Prestige


def _globals(**levels):
    g = seeded_levels(GlobalUpgrade)
    for name, level in levels.items():
        g[GlobalUpgrade[name]] = level
    return g


def _complete(bar, now=0.0, downstream=None, global_upgrades=None, prestige=None):
    """Put the bar just short of full and advance it through a completion."""
    bar.progress = Float(99.0)
    return bar.advance(
        now, downstream, global_upgrades or _globals(), prestige or Prestige()
    )


# ── Progress ─────────────────────────────────────────────────────


def test_progress_accumulates_without_completion():
    bar = Bar(number=1)
    g, p = _globals(), Prestige()
    for i in range(10):
        assert bar.advance(i * 0.04, None, g, p) is None
    assert float(bar.progress) == pytest.approx(2.5)
    assert bar.gathered == 0


def test_reaching_exactly_full_is_not_a_completion():
    bar = Bar(number=1, speed_base=Float(1.0), progress=Float(99.0))
    assert bar.advance(0.0, None, _globals(), Prestige()) is None
    assert bar.progress == 100


def test_completion_residual_uses_pre_completion_progress():
    bar = Bar(number=1, speed_base=Float(80.0), progress=Float(30.0))
    completion = bar.advance(0.0, None, _globals(), Prestige())
    assert completion is not None
    assert bar.progress == 70


def test_completion_adds_gain_to_gathered():
    bar = Bar(number=1, speed_base=Float(2.0))
    completion = _complete(bar, now=3.0)
    assert bar.gathered == 1
    assert completion.gain == 1
    assert completion.transferred is None
    assert completion.tick == 3.0


def test_complete_faster_lowers_threshold():
    p = Prestige()
    p.upgrades[PrestigeUpgrade.COMPLETE_FASTER] = 1
    bar = Bar(number=1, speed_base=Float(2.0), progress=Float(94.0))
    assert bar.advance(0.0, None, _globals(), p) is not None
    assert float(bar.progress) == pytest.approx(6.0)


def test_recent_completion_expires_after_one_second():
    bar = Bar(number=1, speed_base=Float(2.0))
    _complete(bar, now=5.0)
    assert bar.recent_completion(5.5) is not None
    assert bar.recent_completion(6.0) is None


# ── Gain ─────────────────────────────────────────────────────────


def test_gain_formula():
    bar = Bar(number=1)
    bar.upgrades[Upgrade.GAIN] = 2
    bar.upgrades[Upgrade.DOUBLE] = 1
    bar.upgrades[Upgrade.TRIPLE] = 1
    bar.upgrades[Upgrade.QUADRUPLE] = 1
    assert float(bar.gain(1)) == pytest.approx(96.0)


def test_gain_exponent_throttles_speed():
    bar = Bar(number=1)
    bar.upgrades[Upgrade.SPEED] = 10
    assert bar.gain_exponent == 0
    bar.inc_upgrade(Upgrade.SPEED, 0)
    # 1.25 ** 11 crosses 10
    assert bar.gain_exponent == 1
    assert bar.speed_multiplier(0) == pytest.approx(1.25 ** 11 / 10)
    assert float(bar.gain(0)) == pytest.approx(10.0)


# ── Leveling ─────────────────────────────────────────────────────


def test_level_up_after_enough_completions():
    bar = Bar(number=1, speed_base=Float(2.0))
    for _ in range(3):
        _complete(bar, now=10.0)
    # 1.5 ** 2 exp needed to leave level 1
    assert bar.level == 2
    assert bar.exp == pytest.approx(0.75)
    assert bar.level_speed == pytest.approx(1.05)
    assert bar.boost_until == pytest.approx(11.0)


def test_at_most_one_level_per_completion():
    bar = Bar(number=1, speed_base=Float(2.0), exp=100.0)
    _complete(bar)
    assert bar.level == 2
    assert bar.exp == pytest.approx(98.75)


def test_level_up_rethrottles_speed():
    bar = Bar(number=1, speed_base=Float(2.0), level=2, level_speed=9.99, exp=100.0)
    _complete(bar)
    # level 3 adds 0.06, pushing the multiplier past 10
    assert bar.level == 3
    assert bar.gain_exponent == 1
    assert bar.speed_multiplier(0) < 10
    assert bar.speed_multiplier(0) == pytest.approx(1.005)


def test_level_up_faster_lowers_requirement():
    p = Prestige()
    p.upgrades[PrestigeUpgrade.LEVEL_UP_FASTER] = 1
    bar = Bar(number=1, speed_base=Float(2.0), exp=1.2)
    # 2.25 * 0.95 = 2.1375
    _complete(bar, prestige=p)
    assert bar.level == 2
    assert bar.exp == pytest.approx(2.2 - 2.1375)


def test_exp_boost_extends_boost_length():
    bar = Bar(number=1, speed_base=Float(2.0), exp=2.0)
    _complete(bar, now=0.0, global_upgrades=_globals(EXP_BOOST=2))
    assert bar.boost_until == pytest.approx(3.0)


def test_level_speed_for():
    assert level_speed_for(1) == 1.0
    assert level_speed_for(3) == pytest.approx(1.11)


# ── Boost ────────────────────────────────────────────────────────


def test_boost_doubles_progress():
    bar = Bar(number=1, boost_until=5.0)
    g, p = _globals(), Prestige()
    bar.advance(1.0, None, g, p)
    assert float(bar.progress) == pytest.approx(0.5)
    bar.advance(5.0, None, g, p)
    assert float(bar.progress) == pytest.approx(0.75)


def test_boost_stacks_additively():
    bar = Bar(number=1)
    bar.extend_boost(0.0, 1.0)
    assert bar.boost_until == 1.0
    bar.extend_boost(0.5, 1.0)
    assert bar.boost_until == 2.0
    bar.extend_boost(3.0, 1.0)
    assert bar.boost_until == 4.0
    assert bar.boost_remaining(3.5) == pytest.approx(0.5)
    assert bar.boost_remaining(10.0) == 0.0


# ── Transfer ─────────────────────────────────────────────────────


def test_value_transfer_to_downstream():
    up, down = Bar(number=2, speed_base=Float(2.0)), Bar(number=1)
    completion = _complete(up, downstream=down)
    assert float(up.gathered) == pytest.approx(0.99)
    assert float(down.gathered) == pytest.approx(0.01)
    assert float(completion.gain) == pytest.approx(0.99)
    assert float(completion.transferred) == pytest.approx(0.01)


def test_transfer_extra_value_when_downstream_is_poorer():
    p = Prestige()
    p.upgrades[PrestigeUpgrade.TRANSFER_EXTRA_VALUE] = 2
    up, down = Bar(number=2, speed_base=Float(2.0)), Bar(number=1)
    completion = _complete(up, downstream=down, prestige=p)
    assert float(completion.transferred) == pytest.approx(0.03)


def test_transfer_extra_value_skipped_when_downstream_is_richer():
    p = Prestige()
    p.upgrades[PrestigeUpgrade.TRANSFER_EXTRA_VALUE] = 2
    up = Bar(number=2, speed_base=Float(2.0))
    down = Bar(number=1, gathered=Float(50.0))
    completion = _complete(up, downstream=down, prestige=p)
    assert float(completion.transferred) == pytest.approx(0.01)


def test_exp_moves_downstream_only_with_transfer_extra_exp():
    up = Bar(number=2, speed_base=Float(2.0), level=2)
    down = Bar(number=1)
    _complete(up, downstream=down)
    assert up.exp == pytest.approx(1.0)
    assert down.exp == 0.0

    p = Prestige()
    p.upgrades[PrestigeUpgrade.TRANSFER_EXTRA_EXP] = 1
    up = Bar(number=2, speed_base=Float(2.0), level=2)
    down = Bar(number=1)
    _complete(up, downstream=down, prestige=p)
    assert up.exp == pytest.approx(0.99)
    assert down.exp == pytest.approx(0.01)


def test_exp_stays_when_downstream_is_ahead():
    p = Prestige()
    p.upgrades[PrestigeUpgrade.TRANSFER_EXTRA_EXP] = 1
    up = Bar(number=2, speed_base=Float(2.0))
    down = Bar(number=1, level=3)
    _complete(up, downstream=down, prestige=p)
    assert up.exp == pytest.approx(1.0)
    assert down.exp == 0.0


def test_is_ahead_of():
    a = Bar(number=1, level=2)
    b = Bar(number=2, level=1, exp=100.0)
    assert a.is_ahead_of(b)
    assert not b.is_ahead_of(a)
    c = Bar(number=3, level=2, exp=1.0)
    assert c.is_ahead_of(a)
