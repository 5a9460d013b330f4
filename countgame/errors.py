class GameError(Exception):
    """Base class for recoverable game engine errors."""


class InsufficientCreditsError(GameError):
    def __init__(self, balance=0):
        super().__init__(f"Not enough credits to start a game (balance={balance})")
        self.balance = balance


class InvalidTransitionError(GameError):
    """A command was issued from a state that does not allow it."""

    def __init__(self, command, state):
        super().__init__(f"Cannot {command} while session is {getattr(state, 'name', state)}")
        self.command = command
        self.state = state


class RepositoryError(GameError):
    """The repository collaborator failed while serving a command."""

    def __init__(self, command, cause):
        super().__init__(f"{command} failed: {cause}")
        self.command = command
        self.cause = cause
