import gymnasium as gym

from .config import Config
from .difficulty import for_stage
from .errors import GameError, InsufficientCreditsError, InvalidTransitionError, RepositoryError
from .generator import ItemGenerator
from .models import (
    CountingRound, Credits, DifficultyDescriptor, GameState, GameType, Item, ItemType,
    Result, Session, Settings, Statistics, TappingRound,
)
from .repository import GameRepository, InMemoryGameRepository
from .scheduler import AsyncioScheduler, ManualScheduler
from .session import SessionStateMachine

gym.register(id="countgame/Counting-v0", entry_point="countgame.env:CountingGameEnv")
