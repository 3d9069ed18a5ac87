import math
import pytest
from lazyeyekit.exercise.patterns import KINDS, iter_targets, pattern_length, pursuit_position, target


def test_saccades_loop_modulo():
    assert target("saccades", 7, 12345) == target("saccades", 2, 0)
    assert (target("saccades", 2).x, target("saccades", 2).y) == (20, 80)
    assert target("saccades", 4).duration_ms == 1000


@pytest.mark.parametrize("kind", KINDS)
def test_pure(kind):
    for step in (0, 3, 11):
        for t in (0, 250, 61_000):
            assert target(kind, step, t) == target(kind, step, t)


def test_convergence_shrinks():
    sizes = [target("convergence", s).size for s in range(4)]
    assert sizes == [50, 30, 20, 15]
    assert all(target("convergence", s).duration_ms == 2000 for s in range(4))
    assert target("convergence", 4).size == 50


def test_binocular_positions():
    pos = [(target("binocular", s).x, target("binocular", s).y) for s in range(4)]
    assert pos == [(30, 50), (70, 50), (50, 30), (50, 70)]
    assert target("binocular", 0).hex == "#7C3AED"


def test_pursuit_continuous():
    a = target("smooth-pursuit", 0, 1000)
    b = target("smooth-pursuit", 99, 1000)
    assert a == b  # time, not step, drives pursuit
    assert a.x == pytest.approx(50 + 30 * math.sin(1.0))
    assert a.y == pytest.approx(50 + 20 * math.sin(2.0))
    c = target("smooth-pursuit", 0, 1000, sub_mode="circle")
    assert (c.x, c.y) == pytest.approx((50 + 30 * math.sin(1.0), 50 + 30 * math.cos(1.0)))
    with pytest.raises(ValueError):
        pursuit_position(0, "zigzag")


def test_guided_routine_steps():
    assert (target("guided", 0).x, target("guided", 0).y) == (50, 20)
    assert (target("guided", 3).x, target("guided", 3).y) == (80, 50)
    circ = target("guided", 4, 0)
    assert (circ.x, circ.y) == pytest.approx((50, 80))
    assert target("guided", 5) == target("guided", 0)


def test_unknown_kind():
    with pytest.raises(ValueError):
        target("tetris", 0)
    with pytest.raises(ValueError):
        pattern_length("tetris")


def test_iter_targets_back_to_back():
    rows = list(iter_targets("binocular", 6))
    assert [r[0] for r in rows] == list(range(6))
    assert [r[1] for r in rows] == [0, 1500, 3000, 4500, 6000, 7500]
