"""Exceptions raised by the game engine for rejected requests."""


class GameError(Exception):
    """Base class for caller-facing game errors."""

    default_message = 'The request could not be completed.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'type': self.__class__.__name__, 'message': self.message}


class GameNotFound(GameError):
    default_message = 'The given game does not exist.'


class GameAlreadyFull(GameError):
    default_message = 'The given game is already full.'


class GameNotStarted(GameError):
    default_message = 'The given game has not started yet.'


class OpponentMoving(GameError):
    default_message = 'Your opponent is currently moving.'


class InvalidMove(GameError):
    default_message = 'Invalid column index provided.'
