import gymnasium as gym
import numpy as np

from .config import Config
from .difficulty import for_stage
from .generator import ItemGenerator
from .models import GameState
from .repository import InMemoryGameRepository
from .scheduler import ManualScheduler
from .session import COUNTDOWN, MOTION, SessionStateMachine


class CountingGameEnv(gym.Env):
    metadata = {"render_modes": []}

    user_guide = (
        "Watch the floating items until the timer runs out, then answer with how many there were "
        "(or how many of the highlighted kind)."
    )

    game_description = (
        "A counting game: fruit drifts and bounces around the arena, and each stage adds more, faster items."
    )

    auto_advance = True

    def __init__(self, render_mode=None, config=Config):
        super().__init__()
        self.render_mode = render_mode
        self.config = config

        # --- Constants ---
        self.FPS = round(1.0 / config.MOTION_PERIOD_SEC)
        self.MAX_STEPS = 20000
        self.MAX_STAGE = 30
        self.MAX_ITEMS = 64
        self.FEATURES = 8
        self.MAX_SCALE = ItemGenerator.SCALE_RANGE[1]
        # Fastest possible speed component at the last stage
        self.VELOCITY_LIMIT = 0.5 * for_stage(self.MAX_STAGE).speed * config.VELOCITY_SCALE

        # --- Gymnasium Spaces ---
        self.observation_space = gym.spaces.Box(
            low=0.0, high=1.0, shape=(self.MAX_ITEMS, self.FEATURES), dtype=np.float32
        )
        self.action_space = gym.spaces.Discrete(self.MAX_ITEMS + 1)

        # --- Game State ---
        # These are initialized in reset()
        self.machine = None
        self.steps = None
        self.frame = None
        self.score = None
        self.game_over = None
        self.won = None

        self.reset()
        self.validate_implementation()

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)

        self.steps = 0
        self.frame = 0
        self.score = 0
        self.game_over = False
        self.won = False

        if self.machine is not None:
            self.machine.close()
        repository = InMemoryGameRepository(config=self.config)
        generator = ItemGenerator(rng=self.np_random, config=self.config)
        self.machine = SessionStateMachine(
            repository, generator=generator, scheduler=ManualScheduler(), config=self.config
        )
        # Training episodes are not credit gated
        self.machine.start_stage(1)

        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.game_over:
            return self._get_observation(), 0.0, True, False, self._get_info()

        reward = 0.0
        state = self.machine.state

        if state is GameState.PLAYING:
            scheduler = self.machine.scheduler
            scheduler.advance(MOTION)
            self.frame += 1
            if self.frame % self.FPS == 0:
                scheduler.advance(COUNTDOWN)

        elif state is GameState.ANSWERING:
            result = self.machine.submit_answer(int(action))
            if result.is_correct:
                reward += result.points / 100.0
                self.score += result.points
                if result.stage >= self.MAX_STAGE:
                    self.won = True
                    self.game_over = True
                else:
                    self.machine.next_stage()
                    self.frame = 0
            else:
                reward -= 1.0
                self.game_over = True

        self.steps += 1
        truncated = self.steps >= self.MAX_STEPS and not self.game_over

        return (
            self._get_observation(),
            reward,
            self.game_over,
            truncated,
            self._get_info()
        )

    def _get_observation(self):
        obs = np.zeros((self.MAX_ITEMS, self.FEATURES), dtype=np.float32)
        session = self.machine.session
        for i, item in enumerate(session.items[:self.MAX_ITEMS]):
            obs[i] = (
                1.0,
                item.x / self.config.ARENA_WIDTH,
                item.y / self.config.ARENA_HEIGHT,
                (item.vx / self.VELOCITY_LIMIT + 1.0) / 2.0,
                (item.vy / self.VELOCITY_LIMIT + 1.0) / 2.0,
                item.scale / self.MAX_SCALE,
                item.alpha,
                1.0 if item.type is session.target_type else 0.0,
            )
        return np.clip(obs, 0.0, 1.0)

    def _get_info(self):
        session = self.machine.session
        return {
            "score": self.score,
            "steps": self.steps,
            "stage": session.stage,
            "state": session.state.value,
            "time_remaining": session.time_remaining,
            "target_type": session.target_type.name if session.target_type else None,
            "items": len(session.items),
        }

    def close(self):
        if self.machine is not None:
            self.machine.close()

    def validate_implementation(self):
        '''
        Call this at the end of __init__ to verify implementation:
        '''
        # Test action space
        assert self.action_space.n == self.MAX_ITEMS + 1

        # Test observation space
        test_obs = self._get_observation()
        assert test_obs.shape == (self.MAX_ITEMS, self.FEATURES)
        assert test_obs.dtype == np.float32

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.MAX_ITEMS, self.FEATURES)
        assert isinstance(info, dict)

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.MAX_ITEMS, self.FEATURES)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert trunc == False
        assert isinstance(info, dict)

        self.reset()


# Example of how to run the environment
if __name__ == '__main__':
    from .policy import policy

    env = CountingGameEnv()
    obs, info = env.reset(seed=0)
    terminated = truncated = False

    print(env.user_guide)

    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(policy(env))
        if reward:
            print(f"Stage {info['stage']} reward={reward:.2f} score={info['score']}")

    print(f"Game Over! Final Info: {info}")
    env.close()
