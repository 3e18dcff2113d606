"""Timed trivia quiz runner."""

from timed_trivia.answers import FreeTextAnswer, MultiChoiceAnswer, SingleChoiceAnswer, build_answer
from timed_trivia.errors import InvalidQuestionError, InvalidSessionError, InvalidStateError, QuizError
from timed_trivia.evaluation_engine import QUESTION_TIME_BUDGET, EvaluationEngine, EvaluationResult
from timed_trivia.questions import Media, MediaKind, Question, QuestionKind
from timed_trivia.quiz_session import Phase, QuizSession, SessionSummary

__version__ = "0.1.0"

__all__ = [
    "QUESTION_TIME_BUDGET",
    "EvaluationEngine",
    "EvaluationResult",
    "FreeTextAnswer",
    "InvalidQuestionError",
    "InvalidSessionError",
    "InvalidStateError",
    "Media",
    "MediaKind",
    "MultiChoiceAnswer",
    "Phase",
    "Question",
    "QuestionKind",
    "QuizError",
    "QuizSession",
    "SessionSummary",
    "SingleChoiceAnswer",
    "build_answer",
]
