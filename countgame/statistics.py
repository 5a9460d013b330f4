import logging
from dataclasses import replace

from .models import Statistics
from .observable import Observable

logger = logging.getLogger(__name__)


class StatisticsAggregator:
    def __init__(self):
        self._statistics = Observable(Statistics())

    @property
    def observable(self):
        return self._statistics

    @property
    def snapshot(self):
        return self._statistics.value

    def record(self, result):
        current = self._statistics.value
        updated = Statistics(
            highest_stage=max(current.highest_stage, result.stage),
            total_games=current.total_games + 1,
            correct_answers=current.correct_answers + (1 if result.is_correct else 0),
            total_answers=current.total_answers + 1,
            best_score=max(current.best_score, result.points),
        )
        logger.debug("statistics updated: %s", updated)
        return self._statistics.publish(updated)

    def update_best_score(self, score):
        current = self._statistics.value
        if score > current.best_score:
            self._statistics.publish(replace(current, best_score=score))

    def clear(self):
        return self._statistics.publish(Statistics())
