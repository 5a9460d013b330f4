from .generator import count_of
from .models import GameState


def policy(env):
    # Strategy: read the live session and, once the countdown has expired, answer with the
    # number of items matching the question (all items, or only the target kind).
    # While items are still moving the action is ignored, so any value works.
    session = env.machine.session
    if session.state is not GameState.ANSWERING:
        return 0
    return min(count_of(session.items, session.target_type), env.action_space.n - 1)
