"""Session state machine.

One machine owns at most one live session. Commands are plain method calls
issued by a single driver; the countdown and motion drivers call back into
``tick`` and ``advance_motion`` through the scheduler.

States::

    READY -> PLAYING -> PAUSED -> PLAYING
                     -> ANSWERING -> RESULT        (counting)
                     -> RESULT                     (tapping)
    RESULT -> PLAYING (next_stage / retry_stage) | FINISHED
"""

import functools
import logging
from dataclasses import replace

from . import physics
from .config import Config
from .difficulty import for_stage
from .errors import InsufficientCreditsError, InvalidTransitionError, RepositoryError
from .generator import ItemGenerator
from .models import CountingRound, GameState, GameType, Result, Session, TappingRound
from .scheduler import ManualScheduler

logger = logging.getLogger(__name__)

COUNTDOWN = "countdown"
MOTION = "motion"


def command(name):
    """Run a command, turning repository failures into ``machine.error``."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except RepositoryError as exc:
                logger.warning("%s aborted: %s", name, exc)
                self.error = exc
                return None
        return wrapper
    return decorator


class SessionStateMachine:
    def __init__(self, repository, generator=None, scheduler=None, config=Config):
        self.repository = repository
        self.config = config
        self.generator = generator or ItemGenerator(config=config)
        self.scheduler = scheduler or ManualScheduler()
        self.error = None
        self.last_result = None
        self._session = None
        self._countdown = None
        self._motion = None

    @property
    def session(self):
        return self._session

    @property
    def state(self):
        return self._session.state if self._session else None

    # --- Credits ---

    def can_start_game(self):
        credits = self._repo("can_start_game", self.repository.get_credits)
        return credits.current > 0

    def _charge_credit(self, name):
        credits = self._repo(name, self.repository.get_credits)
        if credits.current <= 0 or not self._repo(name, self.repository.consume_credit):
            logger.warning("%s refused: no credits left", name)
            raise InsufficientCreditsError(credits.current)

    # --- Lifecycle commands ---

    @command("start_new_game")
    def start_new_game(self, game_type=GameType.COUNTING):
        """Charge one credit and open a fresh stage-1 session in READY."""
        self._charge_credit("start_new_game")
        session = Session(stage=1, state=GameState.READY, round=self._fresh_round(game_type))
        self._repo("start_new_game", self.repository.save_session, session)

        self._stop_drivers()
        self._session = session
        self.last_result = None
        logger.info("new %s game started", game_type.value)
        return session

    @command("start_stage")
    def start_stage(self, stage):
        descriptor = for_stage(stage)
        previous = self._session
        game_type = previous.game_type if previous else GameType.COUNTING

        items = self.generator.generate(descriptor)
        if game_type is GameType.TAPPING:
            # Tapping always needs a concrete target
            target_type, target_count = self.generator.choose_target(
                items, replace(descriptor, count_all=False))
            round_ = TappingRound(target_count=target_count)
        else:
            target_type, correct_answer = self.generator.choose_target(items, descriptor)
            carried = previous.round if previous and isinstance(previous.round, CountingRound) else None
            round_ = CountingRound(
                score=carried.score if carried else 0,
                lives=carried.lives if carried else self.config.INITIAL_LIVES,
                correct_answer=correct_answer,
            )

        self._stop_drivers()
        self._session = Session(
            stage=stage,
            items=tuple(items),
            target_type=target_type,
            state=GameState.PLAYING,
            time_remaining=descriptor.time_limit,
            round=round_,
        )
        self.last_result = None
        self._start_drivers()
        logger.info(
            "stage %d started: %d items, %ds, target=%s",
            stage, len(items), descriptor.time_limit,
            target_type.name if target_type else "ALL",
        )
        return self._session

    @command("tick")
    def tick(self):
        """Countdown step. Returns False when the session is not PLAYING."""
        session = self._session
        if session is None or session.state is not GameState.PLAYING:
            return False

        remaining = max(0, session.time_remaining - 1)
        if remaining > 0:
            self._session = replace(session, time_remaining=remaining)
            return True

        expired = replace(session, time_remaining=0)
        if session.game_type is GameType.TAPPING:
            self._finish_tapping_round("tick", expired)
        else:
            self._stop_drivers()
            self._session = replace(expired, state=GameState.ANSWERING)
            logger.info("stage %d time up, waiting for answer", session.stage)
        return True

    def advance_motion(self, dt=None):
        """Motion step. Returns False when the session is not PLAYING."""
        session = self._session
        if session is None or session.state is not GameState.PLAYING:
            return False
        dt = self.config.MOTION_PERIOD_SEC if dt is None else dt
        items = physics.tick(
            list(session.items), dt,
            self.config.ARENA_WIDTH, self.config.ARENA_HEIGHT, config=self.config,
        )
        self._session = replace(session, items=tuple(items))
        return True

    def pause(self):
        self._require("pause", GameState.PLAYING)
        self._stop_drivers()
        self._session = replace(self._session, state=GameState.PAUSED, paused=True)
        logger.info("stage %d paused at %ds", self._session.stage, self._session.time_remaining)
        return self._session

    def resume(self):
        self._require("resume", GameState.PAUSED)
        self._session = replace(self._session, state=GameState.PLAYING, paused=False)
        self._start_drivers()
        logger.info("stage %d resumed", self._session.stage)
        return self._session

    @command("submit_answer")
    def submit_answer(self, value):
        session = self._require("submit_answer", GameState.ANSWERING)
        if session.game_type is not GameType.COUNTING:
            raise InvalidTransitionError("submit_answer", session.state)

        result = self._build_result(session, value, session.round.correct_answer)
        counting = replace(
            session.round,
            user_answer=value,
            score=session.round.score + result.points,
        )
        updated = replace(session, state=GameState.RESULT, round=counting)
        # A failed save must leave statistics untouched
        self._repo("submit_answer", self.repository.save_session, updated)
        try:
            self._repo("submit_answer", self.repository.update_statistics, result)
        except RepositoryError:
            self._repo("submit_answer", self.repository.save_session, session)
            raise

        self._session = updated
        self.last_result = result
        logger.info(
            "stage %d answered %d (expected %d): %s, %d points",
            session.stage, value, result.correct_answer,
            "correct" if result.is_correct else "wrong", result.points,
        )
        return result

    @command("tap_item")
    def tap_item(self, item_id):
        """Tap one item. True for a hit, False for a miss, None if unknown."""
        session = self._require("tap_item", GameState.PLAYING)
        if session.game_type is not GameType.TAPPING:
            raise InvalidTransitionError("tap_item", session.state)

        item = next((it for it in session.items if it.id == item_id), None)
        if item is None:
            return None

        if item.type is not session.target_type:
            self._session = replace(
                session, round=replace(session.round, wrong_taps=session.round.wrong_taps + 1))
            return False

        tapping = replace(session.round, tapped_count=session.round.tapped_count + 1)
        remaining = tuple(it for it in session.items if it.id != item_id)
        updated = replace(session, items=remaining, round=tapping)
        if tapping.tapped_count >= tapping.target_count:
            self._finish_tapping_round("tap_item", updated)
        else:
            self._session = updated
        return True

    @command("next_stage")
    def next_stage(self):
        session = self._require("next_stage", GameState.RESULT)
        if self.last_result is None or not self.last_result.is_correct:
            raise InvalidTransitionError("next_stage", session.state)
        return self.start_stage(session.stage + 1)

    @command("retry_stage")
    def retry_stage(self):
        session = self._require("retry_stage", GameState.RESULT)
        if self.last_result is None or self.last_result.is_correct:
            raise InvalidTransitionError("retry_stage", session.state)
        self._charge_credit("retry_stage")
        # A retry starts over from stage 1 with a clean slate
        self._session = Session(state=GameState.READY, round=self._fresh_round(session.game_type))
        return self.start_stage(1)

    @command("finish")
    def finish(self):
        session = self._require("finish", GameState.RESULT)
        self._repo("finish", self.repository.clear_session)
        self._stop_drivers()
        self._session = replace(session, state=GameState.FINISHED)
        logger.info("game finished at stage %d", session.stage)
        return self._session

    @command("restore")
    def restore(self):
        """Reload the persisted session. A PLAYING snapshot comes back PAUSED."""
        session = self._repo("restore", self.repository.load_session)
        self._stop_drivers()
        if session is not None and session.state is GameState.PLAYING:
            session = replace(session, state=GameState.PAUSED, paused=True)
        self._session = session
        return session

    def clear_error(self):
        self.error = None

    def close(self):
        self._stop_drivers()

    # --- Internals ---

    def _fresh_round(self, game_type):
        if game_type is GameType.TAPPING:
            return TappingRound()
        return CountingRound(lives=self.config.INITIAL_LIVES)

    def _finish_tapping_round(self, name, session):
        tapping = session.round
        result = self._build_result(
            session, tapping.tapped_count, tapping.target_count,
            total_items=len(session.items) + tapping.tapped_count,
        )
        self._repo(name, self.repository.update_statistics, result)
        self._stop_drivers()
        self._session = replace(session, state=GameState.RESULT)
        self.last_result = result
        logger.info(
            "stage %d tapping round over: %d/%d targets, %d wrong taps",
            session.stage, tapping.tapped_count, tapping.target_count, tapping.wrong_taps,
        )

    def _build_result(self, session, user_answer, correct_answer, total_items=None):
        descriptor = for_stage(session.stage)
        return Result(
            stage=session.stage,
            target_type=session.target_type,
            correct_answer=correct_answer,
            user_answer=user_answer,
            is_correct=user_answer == correct_answer,
            time_spent=descriptor.time_limit - session.time_remaining,
            total_items=len(session.items) if total_items is None else total_items,
            count_all=descriptor.count_all,
        )

    def _require(self, name, state):
        current = self.state
        if current is not state:
            logger.warning("%s rejected in state %s", name, current)
            raise InvalidTransitionError(name, current)
        return self._session

    def _repo(self, name, fn, *args):
        try:
            return fn(*args)
        except Exception as exc:
            raise RepositoryError(name, exc) from exc

    def _start_drivers(self):
        self._stop_drivers()
        self._countdown = self.scheduler.every(self.config.COUNTDOWN_PERIOD_SEC, self.tick, name=COUNTDOWN)
        self._motion = self.scheduler.every(self.config.MOTION_PERIOD_SEC, self.advance_motion, name=MOTION)

    def _stop_drivers(self):
        for task in (self._countdown, self._motion):
            if task is not None:
                task.cancel()
        self._countdown = None
        self._motion = None
