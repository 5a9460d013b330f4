import pytest

from countgame.models import Result, Statistics
from countgame.statistics import StatisticsAggregator


def make_result(stage=1, correct=True, time_spent=3):
    return Result(
        stage=stage, target_type=None, correct_answer=6, user_answer=6 if correct else 5,
        is_correct=correct, time_spent=time_spent, total_items=6, count_all=True,
    )


@pytest.mark.parametrize("time_spent,points", [(0, 200), (3, 170), (8, 120), (10, 100), (14, 100)])
def test_points_for_correct_answer(time_spent, points):
    assert make_result(time_spent=time_spent).points == points


def test_wrong_answer_scores_zero():
    assert make_result(correct=False, time_spent=1).points == 0


def test_accuracy_is_zero_without_answers():
    assert Statistics().accuracy_rate == 0


def test_accuracy_rate():
    stats = Statistics(correct_answers=1, total_answers=3)
    assert stats.accuracy_rate == 100 * 1 / 3


def test_record_updates_all_fields():
    aggregator = StatisticsAggregator()
    aggregator.record(make_result(stage=4, time_spent=2))
    aggregator.record(make_result(stage=2, correct=False))
    stats = aggregator.snapshot
    assert stats.highest_stage == 4
    assert stats.total_games == 2
    assert stats.correct_answers == 1
    assert stats.total_answers == 2
    assert stats.best_score == 180
    assert stats.accuracy_rate == 50


def test_best_score_is_max():
    aggregator = StatisticsAggregator()
    aggregator.record(make_result(time_spent=1))
    aggregator.record(make_result(time_spent=9))
    assert aggregator.snapshot.best_score == 190


def test_update_best_score_only_raises():
    aggregator = StatisticsAggregator()
    aggregator.update_best_score(300)
    aggregator.update_best_score(200)
    assert aggregator.snapshot.best_score == 300


def test_clear_resets_defaults():
    aggregator = StatisticsAggregator()
    aggregator.record(make_result(stage=9))
    assert aggregator.clear() == Statistics()
    assert aggregator.snapshot.highest_stage == 1


def test_snapshots_are_replaced_not_mutated():
    aggregator = StatisticsAggregator()
    before = aggregator.snapshot
    aggregator.record(make_result())
    assert before == Statistics()
    assert aggregator.snapshot is not before
