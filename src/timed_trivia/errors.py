"""Errors raised by the quiz session engine and its question loaders."""


class QuizError(Exception):
    """Base class for all quiz errors."""


class InvalidSessionError(QuizError):
    """The question sequence for a session is missing, empty or unreadable."""


class InvalidQuestionError(QuizError):
    """A question record violates the question invariants."""


class InvalidStateError(QuizError):
    """An operation was invoked in a phase that does not permit it."""
