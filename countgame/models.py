from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class ItemType(Enum):
    APPLE = ("Apple", (231, 76, 60), "🍎")
    BANANA = ("Banana", (241, 196, 15), "🍌")
    CARROT = ("Carrot", (230, 126, 34), "🥕")
    GRAPES = ("Grapes", (155, 89, 182), "🍇")
    TOMATO = ("Tomato", (214, 48, 49), "🍅")
    PEACH = ("Peach", (254, 112, 150), "🍑")

    def __init__(self, display_name, color, glyph):
        self.display_name = display_name
        self.color = color
        self.glyph = glyph


# Red-toned categories that are easy to confuse with each other
SIMILAR_ITEM_TYPES = (ItemType.APPLE, ItemType.TOMATO, ItemType.PEACH)


class GameState(Enum):
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    ANSWERING = "answering"
    RESULT = "result"
    FINISHED = "finished"


class GameType(Enum):
    COUNTING = "counting"
    TAPPING = "tapping"


@dataclass(frozen=True)
class Item:
    id: str
    type: ItemType
    x: float
    y: float
    vx: float
    vy: float
    rotation: float = 0.0
    scale: float = 1.0
    alpha: float = 1.0


@dataclass(frozen=True)
class DifficultyDescriptor:
    stage: int
    item_count: int
    speed: float
    time_limit: int
    has_rotation: bool = False
    has_alpha: bool = False
    has_scale: bool = False
    similar_items: bool = False
    count_all: bool = True


@dataclass(frozen=True)
class CountingRound:
    score: int = 0
    lives: int = 3
    correct_answer: int = 0
    user_answer: int = 0


@dataclass(frozen=True)
class TappingRound:
    target_count: int = 0
    tapped_count: int = 0
    wrong_taps: int = 0


@dataclass(frozen=True)
class Session:
    """One live game. ``round`` holds the mode-specific payload."""

    stage: int = 1
    items: Tuple[Item, ...] = ()
    target_type: Optional[ItemType] = None
    state: GameState = GameState.READY
    time_remaining: int = 0
    paused: bool = False
    round: Union[CountingRound, TappingRound] = field(default_factory=CountingRound)

    @property
    def game_type(self):
        if isinstance(self.round, TappingRound):
            return GameType.TAPPING
        return GameType.COUNTING

    @property
    def correct_answer(self):
        if isinstance(self.round, TappingRound):
            return self.round.target_count
        return self.round.correct_answer


@dataclass(frozen=True)
class Result:
    stage: int
    target_type: Optional[ItemType]
    correct_answer: int
    user_answer: int
    is_correct: bool
    time_spent: int
    total_items: int = 0
    count_all: bool = False

    @property
    def points(self):
        # Faster answers score higher
        if not self.is_correct:
            return 0
        return 100 + max(0, 10 - self.time_spent) * 10


@dataclass(frozen=True)
class Credits:
    current: int
    next_reset_millis: int


@dataclass(frozen=True)
class Statistics:
    highest_stage: int = 1
    total_games: int = 0
    correct_answers: int = 0
    total_answers: int = 0
    best_score: int = 0

    @property
    def accuracy_rate(self):
        if self.total_answers == 0:
            return 0.0
        return 100 * self.correct_answers / self.total_answers


@dataclass(frozen=True)
class Settings:
    sound_enabled: bool = True
    music_enabled: bool = True
    vibration_enabled: bool = True
    language: str = "ko"
