"""Quiz Session: question progression, countdown and scoring for one run."""

import logging
import math
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from timed_trivia.answers import NO_ANSWER, Answer
from timed_trivia.errors import InvalidStateError
from timed_trivia.evaluation_engine import (
    QUESTION_TIME_BUDGET,
    EvaluationEngine,
    EvaluationResult,
    answer_value,
    check_answer_kind,
)
from timed_trivia.questions import Question, validate_questions

logger = logging.getLogger(__name__)

# Remaining time below this is treated as expired (float drift from 0.1s ticks).
_EXPIRY_EPSILON = 1e-9


class Phase(str, Enum):
    IN_PROGRESS = "in_progress"
    ANSWER_LOCKED = "answer_locked"
    COMPLETED = "completed"


class SessionSummary:
    """Final outcome of a completed session, handed to the score sink."""

    def __init__(self, final_score: int, answers: Dict[str, Optional[Answer]],
                 results: List[EvaluationResult], question_count: int, max_score: int):
        self.final_score = final_score
        self.answers = answers
        self.results = results
        self.question_count = question_count
        self.max_score = max_score

    @property
    def correct_count(self) -> int:
        return sum(1 for r in self.results if r.is_correct)

    def to_dict(self) -> dict:
        return {
            "final_score": self.final_score,
            "max_score": self.max_score,
            "question_count": self.question_count,
            "correct_count": self.correct_count,
            "answers": {qid: answer_value(a) for qid, a in self.answers.items()},
            "results": [r.to_dict() for r in self.results],
        }


class QuizSession:
    """
    State machine for one pass through an ordered question sequence.

    Driven by two stimuli: answer submissions and clock ticks from the host.
    Each question is ``IN_PROGRESS`` until an answer is submitted or the
    countdown expires, then ``ANSWER_LOCKED`` until the host advances. Moving
    past the last question completes the session.

    Not safe for concurrent use; the host must serialize calls.
    """

    def __init__(self, questions: Iterable[Question], time_budget: float = QUESTION_TIME_BUDGET,
                 on_complete: Optional[Callable[[SessionSummary], None]] = None,
                 evaluation_engine: Optional[EvaluationEngine] = None):
        if not math.isfinite(time_budget) or time_budget <= 0:
            raise ValueError(f"time_budget must be positive, got {time_budget}")
        self._questions: Tuple[Question, ...] = validate_questions(questions)
        self._time_budget = float(time_budget)
        self._evaluator = evaluation_engine or EvaluationEngine(time_budget=self._time_budget)
        self._on_complete = on_complete

        self._index = 0
        self._score = 0
        self._phase = Phase.IN_PROGRESS
        self._time_remaining = self._time_budget
        self._answers: Dict[str, Optional[Answer]] = {}
        self._results: List[EvaluationResult] = []
        self._summary: Optional[SessionSummary] = None

        logger.debug(f"Session started: {len(self._questions)} questions, {self._time_budget:.0f}s each")

    # -- state ---------------------------------------------------------------

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def max_score(self) -> int:
        return sum(q.points for q in self._questions)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_question(self) -> Optional[Question]:
        if self._phase is Phase.COMPLETED:
            return None
        return self._questions[self._index]

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_completed(self) -> bool:
        return self._phase is Phase.COMPLETED

    @property
    def score(self) -> int:
        return self._score

    @property
    def time_budget(self) -> float:
        return self._time_budget

    @property
    def time_remaining(self) -> float:
        return self._time_remaining

    @property
    def time_fraction(self) -> float:
        return self._time_remaining / self._time_budget

    @property
    def answers(self) -> Dict[str, Optional[Answer]]:
        return dict(self._answers)

    @property
    def results(self) -> List[EvaluationResult]:
        return list(self._results)

    @property
    def last_result(self) -> Optional[EvaluationResult]:
        return self._results[-1] if self._results else None

    # -- operations ----------------------------------------------------------

    def submit_answer(self, answer: Optional[Answer]) -> EvaluationResult:
        """Lock the current question with ``answer`` (None for no answer) and score it."""
        self._require_phase(Phase.IN_PROGRESS, "submit_answer")
        if answer is not None:
            check_answer_kind(self._questions[self._index], answer)
        return self._lock(answer, timed_out=False)

    def tick(self, delta_seconds: float) -> Optional[EvaluationResult]:
        """Advance the countdown by ``delta_seconds``.

        Returns the timed-out result when this tick expires the question,
        otherwise None. Ticks outside ``IN_PROGRESS`` are ignored.
        """
        if not math.isfinite(delta_seconds) or delta_seconds < 0:
            raise ValueError(f"delta_seconds must be a finite non-negative number, got {delta_seconds}")
        if self._phase is not Phase.IN_PROGRESS:
            logger.debug(f"Ignoring tick in phase {self._phase.value}")
            return None

        remaining = self._time_remaining - delta_seconds
        if remaining <= _EXPIRY_EPSILON:
            self._time_remaining = 0.0
            logger.info(f"Time up on question {self._questions[self._index].id}")
            return self._lock(NO_ANSWER, timed_out=True)

        self._time_remaining = remaining
        return None

    def expire(self) -> Optional[EvaluationResult]:
        """Run the countdown out immediately."""
        return self.tick(self._time_remaining)

    def advance(self) -> Phase:
        """Move past a locked question; completes the session after the last one."""
        self._require_phase(Phase.ANSWER_LOCKED, "advance")

        if self._index >= len(self._questions) - 1:
            self._index = len(self._questions)
            self._set_phase(Phase.COMPLETED)
            self._summary = SessionSummary(
                final_score=self._score,
                answers=dict(self._answers),
                results=list(self._results),
                question_count=len(self._questions),
                max_score=self.max_score,
            )
            logger.info(f"Session complete: score {self._score}/{self.max_score}")
            if self._on_complete is not None:
                self._on_complete(self._summary)
            return self._phase

        self._index += 1
        self._time_remaining = self._time_budget
        self._set_phase(Phase.IN_PROGRESS)
        return self._phase

    def summary(self) -> SessionSummary:
        if self._summary is None:
            raise InvalidStateError("Session is not completed yet")
        return self._summary

    # -- internals -----------------------------------------------------------

    def _lock(self, answer: Optional[Answer], timed_out: bool) -> EvaluationResult:
        question = self._questions[self._index]
        result = self._evaluator.evaluate(
            question, answer, self._time_remaining, timed_out=timed_out, time_budget=self._time_budget
        )
        self._answers[question.id] = answer
        self._results.append(result)
        self._score += result.awarded
        self._set_phase(Phase.ANSWER_LOCKED)
        return result

    def _require_phase(self, phase: Phase, operation: str) -> None:
        if self._phase is not phase:
            raise InvalidStateError(
                f"{operation} is not allowed in phase {self._phase.value}"
            )

    def _set_phase(self, phase: Phase) -> None:
        logger.debug(f"Phase {self._phase.value} -> {phase.value} (question {self._index})")
        self._phase = phase
