"""Repository collaborator: session, statistics, settings and credits.

``GameRepository`` is the contract the state machine depends on.
``InMemoryGameRepository`` keeps everything in process memory; nothing
survives a restart.
"""

from abc import ABC, abstractmethod

from .config import Config
from .credits import CreditLedger, current_time_millis
from .models import Settings
from .observable import Observable
from .statistics import StatisticsAggregator


class GameRepository(ABC):
    # --- Session ---
    @abstractmethod
    def save_session(self, session): ...

    @abstractmethod
    def load_session(self): ...

    @abstractmethod
    def clear_session(self): ...

    # --- Statistics ---
    @abstractmethod
    def get_statistics(self): ...

    @abstractmethod
    def update_statistics(self, result): ...

    @abstractmethod
    def clear_statistics(self): ...

    @abstractmethod
    def observe_statistics(self, callback): ...

    @abstractmethod
    def get_high_score(self): ...

    @abstractmethod
    def update_high_score(self, score): ...

    # --- Settings ---
    @abstractmethod
    def get_settings(self): ...

    @abstractmethod
    def update_settings(self, settings): ...

    @abstractmethod
    def observe_settings(self, callback): ...

    # --- Credits ---
    @abstractmethod
    def get_credits(self): ...

    @abstractmethod
    def update_credits(self, credits): ...

    @abstractmethod
    def consume_credit(self):
        """Spend one game's worth of credits. True on success."""

    @abstractmethod
    def grant_daily_credits(self): ...

    @abstractmethod
    def observe_credits(self, callback): ...


class InMemoryGameRepository(GameRepository):
    def __init__(self, config=Config, clock=current_time_millis):
        self._session = None
        self._statistics = StatisticsAggregator()
        self._settings = Observable(Settings())
        self._credits = CreditLedger(config=config, clock=clock)

    def save_session(self, session):
        self._session = session

    def load_session(self):
        return self._session

    def clear_session(self):
        self._session = None

    def get_statistics(self):
        return self._statistics.snapshot

    def update_statistics(self, result):
        return self._statistics.record(result)

    def clear_statistics(self):
        return self._statistics.clear()

    def observe_statistics(self, callback):
        return self._statistics.observable.subscribe(callback)

    def get_high_score(self):
        return self._statistics.snapshot.best_score

    def update_high_score(self, score):
        self._statistics.update_best_score(score)

    def get_settings(self):
        return self._settings.value

    def update_settings(self, settings):
        self._settings.publish(settings)

    def observe_settings(self, callback):
        return self._settings.subscribe(callback)

    def get_credits(self):
        return self._credits.get()

    def update_credits(self, credits):
        self._credits.update(credits)

    def consume_credit(self):
        return self._credits.consume()

    def grant_daily_credits(self):
        return self._credits.grant_daily()

    def observe_credits(self, callback):
        return self._credits.observable.subscribe(callback)
