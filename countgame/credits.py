import logging
import time
from dataclasses import replace

from .config import Config
from .models import Credits
from .observable import Observable

logger = logging.getLogger(__name__)

MILLIS_PER_DAY = 24 * 60 * 60 * 1000


def current_time_millis():
    return int(time.time() * 1000)


def next_midnight_millis(now_millis):
    """Start of the next UTC day after ``now_millis``."""
    return (now_millis // MILLIS_PER_DAY + 1) * MILLIS_PER_DAY


class CreditLedger:
    """Daily-replenishing token bucket gating game starts.

    Every read and consume first checks whether the reset time has passed;
    if so the balance is refilled to ``DAILY_CREDIT_AMOUNT`` and the reset
    moves to the following UTC midnight.
    """

    def __init__(self, config=Config, clock=current_time_millis):
        self.config = config
        self.clock = clock
        now = self.clock()
        self._credits = Observable(Credits(
            current=config.DAILY_CREDIT_AMOUNT,
            next_reset_millis=next_midnight_millis(now),
        ))

    @property
    def observable(self):
        return self._credits

    def get(self):
        self._reset_if_due()
        return self._credits.value

    def update(self, credits):
        self._credits.publish(credits)

    def consume(self):
        self._reset_if_due()
        credits = self._credits.value
        cost = self.config.GAME_COST
        if credits.current < cost:
            logger.info("credit consume refused: balance=%d", credits.current)
            return False
        self._credits.publish(replace(credits, current=credits.current - cost))
        return True

    def grant_daily(self):
        credits = Credits(
            current=self.config.DAILY_CREDIT_AMOUNT,
            next_reset_millis=next_midnight_millis(self.clock()),
        )
        logger.info("daily credits granted: %d (next reset %d)", credits.current, credits.next_reset_millis)
        return self._credits.publish(credits)

    def _reset_if_due(self):
        if self.clock() >= self._credits.value.next_reset_millis:
            self.grant_daily()
