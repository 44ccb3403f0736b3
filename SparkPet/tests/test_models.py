import math

import pytest

from models import Mood, Meters, FrameSet, BoundingBox, PressState, FollowTarget, fit_scale


def test_mood_accepts_sketch_tags():
    assert Mood("walk") == Mood.WANDER
    assert Mood("Sleep") == Mood.SLEEP
    assert Mood("ANGRY") == Mood.ANGRY
    with pytest.raises(ValueError):
        Mood("dancing")


def test_meters_clamp_on_creation_and_mutation():
    m = Meters(frustration=150, happiness=-5)
    assert (m.frustration, m.happiness) == (100.0, 0.0)
    m.add_frustration(-500)
    m.add_happiness(1000)
    assert (m.frustration, m.happiness) == (0.0, 100.0)
    m.add_happiness(float("nan"))
    assert m.happiness == 100.0


def test_frustration_decays_one_point_per_interval():
    m = Meters(frustration=10, happiness=0)
    m.tick(2.5, pressed=False)
    assert m.frustration == 10
    m.tick(0.5, pressed=False)
    assert m.frustration == 9
    # catches up after a long pause and keeps the remainder
    m.tick(6.5, pressed=False)
    assert m.frustration == 7
    assert m.frustration_timer == pytest.approx(0.5)


def test_frustration_holds_while_pressed():
    m = Meters(frustration=10, happiness=0)
    m.tick(30.0, pressed=True)
    assert m.frustration == 10


def test_frustration_never_goes_negative():
    m = Meters(frustration=2, happiness=0)
    m.tick(600.0, pressed=False)
    assert m.frustration == 0
    assert m.frustration_timer == 0.0


def test_empty_meter_does_not_bank_decay_time():
    m = Meters(frustration=2, happiness=1)
    m.tick(600.0, pressed=False)
    assert (m.frustration_timer, m.happiness_timer) == (0.0, 0.0)
    m.add_frustration(10)
    m.add_happiness(10)
    m.tick(0.5, pressed=False)
    assert (m.frustration, m.happiness) == (10, 10)
    m.tick(2.5, pressed=False)
    assert (m.frustration, m.happiness) == (9, 9)


def test_happiness_decays_even_while_pressed():
    m = Meters(frustration=0, happiness=10)
    m.tick(4.0, pressed=True)
    assert m.happiness == 8
    m.tick(100.0, pressed=False)
    assert m.happiness == 0


def test_press_state_counts_down():
    p = PressState()
    p.start(0.7)
    assert p.active
    assert p.tick(0.5) is False
    assert p.tick(0.5) is True
    assert not p.active
    assert p.remaining_boost_time == 0.0
    assert p.tick(0.5) is False


def test_frame_set_indexing():
    frames = FrameSet(frame_count=4, fps=8)
    assert frames.frame_at(0.0) == 0
    assert frames.frame_at(0.26) == 2
    assert frames.frame_at(0.5) == 0
    assert frames.frame_at(0.25, fps=16) == 0
    assert frames.duration == 0.5


def test_empty_frame_set_has_one_implicit_frame():
    frames = FrameSet(frame_count=0, fps=12)
    assert frames.frame_at(12.34) == 0
    assert frames.size_of(5) == (100, 100)
    assert frames.duration == pytest.approx(1 / 12)
    assert FrameSet(frame_count=3, fps=0).frame_at(1.0) == 0


def test_frame_set_sizes():
    frames = FrameSet(frame_count=2, fps=12, sizes=[(64, 32), (0, 48)])
    assert frames.size_of(0) == (64, 32)
    assert frames.size_of(1) == (100, 48)
    assert frames.size_of(2) == (64, 32)


def test_bounding_box():
    box = BoundingBox.from_center(50, 50, 20, 10)
    assert (box.x, box.y, box.w, box.h) == (40, 45, 20, 10)
    assert box.contains(40, 45)
    assert box.contains(60, 55)
    assert not box.contains(61, 50)
    assert box.overlaps(BoundingBox(55, 50, 10, 10))
    assert not box.overlaps(BoundingBox(70, 50, 10, 10))


def test_follow_target_validity():
    assert FollowTarget(1, 2).is_valid()
    assert not FollowTarget(math.inf, 2).is_valid()
    assert FollowTarget(1, 2).tolerance == 12


def test_fit_scale():
    # width-limited, height-limited and capped
    assert fit_scale(1000, 10, 800, 600, 1.35) == pytest.approx(0.4)
    assert fit_scale(10, 1000, 800, 600, 1.35) == pytest.approx(0.21)
    assert fit_scale(100, 100, 800, 600, 1.35) == 1.35
    assert fit_scale(0, 0, 800, 600, 1.35) == 1.35
    assert fit_scale(100, 100, 0, 600, 1.35) == 1.35
