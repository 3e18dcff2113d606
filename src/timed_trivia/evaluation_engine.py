"""Evaluation Engine: answer correctness and time-decayed scoring."""

import logging
import math
from typing import Optional

from timed_trivia.answers import Answer, FreeTextAnswer, MultiChoiceAnswer, SingleChoiceAnswer
from timed_trivia.errors import InvalidStateError
from timed_trivia.questions import Question, QuestionKind

logger = logging.getLogger(__name__)

QUESTION_TIME_BUDGET = 20.0  # seconds per question
MIN_TIME_FACTOR = 0.1


class EvaluationResult:
    """Holds the outcome of one locked question."""

    def __init__(self, question_id: str, answer: Optional[Answer], is_correct: bool,
                 awarded: int, time_remaining: float, timed_out: bool = False):
        self.question_id = question_id
        self.answer = answer
        self.is_correct = is_correct
        self.awarded = awarded
        self.time_remaining = time_remaining
        self.timed_out = timed_out

    def __repr__(self):
        return (f"EvaluationResult(question_id={self.question_id!r}, is_correct={self.is_correct}, "
                f"awarded={self.awarded}, timed_out={self.timed_out})")

    def to_dict(self) -> dict:
        return {
            "question_id": self.question_id,
            "answer": answer_value(self.answer),
            "is_correct": self.is_correct,
            "awarded": self.awarded,
            "time_remaining": self.time_remaining,
            "timed_out": self.timed_out,
        }


def answer_value(answer: Optional[Answer]):
    """Plain value of an answer variant, for display and serialization."""
    if answer is None:
        return None
    if isinstance(answer, FreeTextAnswer):
        return answer.text
    if isinstance(answer, SingleChoiceAnswer):
        return answer.choice
    return sorted(answer.choices)


def is_correct(question: Question, answer: Optional[Answer]) -> bool:
    """Compare an answer against the question's correct answer.

    Text and single-choice answers match case-insensitively; multi-choice
    answers match as sets, regardless of order.
    """
    if answer is None:
        return False
    check_answer_kind(question, answer)

    if question.kind is QuestionKind.MULTI_CHOICE:
        return answer.choices == question.correct_answer

    given = answer.text if isinstance(answer, FreeTextAnswer) else answer.choice
    if not given:
        return False
    return given.lower() == question.correct_answer.lower()


def check_answer_kind(question: Question, answer: Answer) -> None:
    expected = {
        QuestionKind.FREE_TEXT: FreeTextAnswer,
        QuestionKind.SINGLE_CHOICE: SingleChoiceAnswer,
        QuestionKind.MULTI_CHOICE: MultiChoiceAnswer,
    }[question.kind]
    if not isinstance(answer, expected):
        raise InvalidStateError(
            f"Question {question.id} expects {expected.__name__}, got {type(answer).__name__}"
        )


def time_factor(time_remaining: float, time_budget: float = QUESTION_TIME_BUDGET) -> float:
    """Linear decay of the remaining time, floored at MIN_TIME_FACTOR."""
    remaining = min(max(time_remaining, 0.0), time_budget)
    return max(MIN_TIME_FACTOR, remaining / time_budget)


def award_points(points: int, factor: float) -> int:
    # Round half up; round() would send 12.5 to 12.
    return int(math.floor(points * factor + 0.5))


class EvaluationEngine:
    """Scores answers at the moment a question locks."""

    def __init__(self, time_budget: float = QUESTION_TIME_BUDGET):
        if not math.isfinite(time_budget) or time_budget <= 0:
            raise ValueError(f"time_budget must be positive, got {time_budget}")
        self.time_budget = time_budget

    def evaluate(self, question: Question, answer: Optional[Answer],
                 time_remaining: float, timed_out: bool = False,
                 time_budget: Optional[float] = None) -> EvaluationResult:
        """Decide correctness and the points awarded for ``answer``.

        ``time_budget`` overrides the engine budget for this call.
        """
        budget = self.time_budget if time_budget is None else time_budget
        correct = is_correct(question, answer)
        awarded = 0
        if correct:
            awarded = award_points(question.points, time_factor(time_remaining, budget))

        logger.info(
            f"Evaluation: question={question.id}, correct={correct}, "
            f"remaining={time_remaining:.1f}s, awarded={awarded}/{question.points}"
        )
        return EvaluationResult(
            question_id=question.id,
            answer=answer,
            is_correct=correct,
            awarded=awarded,
            time_remaining=time_remaining,
            timed_out=timed_out,
        )
