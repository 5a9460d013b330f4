import pytest

from countgame.difficulty import for_stage


TIERS = [(1, 3), (4, 6), (7, 10), (11, 15), (16, 40)]


def test_first_stage():
    d = for_stage(1)
    assert d.item_count == 6
    assert d.speed == 1.0
    assert d.time_limit == 8
    assert d.count_all is True
    assert not (d.has_rotation or d.has_alpha or d.has_scale or d.similar_items)


@pytest.mark.parametrize("stage,count,speed,limit", [
    (4, 12, 1.2, 7),
    (10, 22, 1.5, 6),
    (11, 29, 1.8, 5),
    (16, 27, 2.1, 4),
    (20, 35, 2.5, 4),
])
def test_tier_values(stage, count, speed, limit):
    d = for_stage(stage)
    assert d.item_count == count
    assert d.speed == pytest.approx(speed)
    assert d.time_limit == limit


def test_flags_turn_on_by_tier():
    assert for_stage(5).has_rotation and not for_stage(5).has_alpha
    assert for_stage(8).has_alpha and not for_stage(8).has_scale
    assert for_stage(12).has_scale and not for_stage(12).similar_items
    assert for_stage(12).count_all is False
    assert for_stage(16).similar_items


@pytest.mark.parametrize("low,high", TIERS)
def test_item_count_increases_within_tier(low, high):
    counts = [for_stage(s).item_count for s in range(low, high + 1)]
    assert counts == sorted(counts)
    assert len(set(counts)) == len(counts)


@pytest.mark.parametrize("last", [3, 6, 10])
def test_item_count_jumps_at_tier_boundary(last):
    assert for_stage(last + 1).item_count > for_stage(last).item_count


def test_descriptor_is_deterministic():
    assert for_stage(13) == for_stage(13)


@pytest.mark.parametrize("stage", [0, -3])
def test_non_positive_stage_rejected(stage):
    with pytest.raises(ValueError):
        for_stage(stage)
