"""Feedback Generator: text feedback for a terminal host."""

import logging
import random
from typing import Optional

from timed_trivia.evaluation_engine import EvaluationResult
from timed_trivia.questions import Question, QuestionKind

logger = logging.getLogger(__name__)

CORRECT_TEMPLATES = [
    "Correct! +{awarded} points.",
    "Nailed it! That's {awarded} points.",
    "Spot on! +{awarded} points with {remaining:.1f}s to spare.",
]

INCORRECT_TEMPLATES = [
    "Not quite. {explanation}",
    "That's not it. {explanation}",
    "Close, but no. {explanation}",
]

TIMEOUT_TEMPLATES = [
    "Time's up! {explanation}",
    "Too slow! {explanation}",
]


class FeedbackGenerator:
    """Turns evaluation results and session summaries into display text."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def generate(self, result: EvaluationResult, question: Question) -> str:
        """Feedback line for a locked question."""
        explanation = f"The answer was: {format_correct_answer(question)}"
        if result.timed_out:
            template = self._rng.choice(TIMEOUT_TEMPLATES)
        elif result.is_correct:
            template = self._rng.choice(CORRECT_TEMPLATES)
        else:
            template = self._rng.choice(INCORRECT_TEMPLATES)
        return template.format(
            awarded=result.awarded,
            remaining=result.time_remaining,
            explanation=explanation,
        )

    def generate_intro(self, question: Question, question_num: int, total: int) -> str:
        """Question header with options and answer instructions."""
        lines = [f"Question {question_num} of {total} ({question.points} pts)", question.text]
        if question.media is not None:
            lines.append(f"[{question.media.kind.value}] {question.media.url}")
        for i, option in enumerate(question.options, start=1):
            lines.append(f"  {i}. {option}")
        if question.kind is QuestionKind.MULTI_CHOICE:
            lines.append("Select all that apply, separated by commas.")
        return "\n".join(lines)

    def generate_countdown(self, time_remaining: float, time_budget: float) -> str:
        """Progress line like ``[#######...] 14.2s``."""
        width = 20
        filled = int(round(width * max(0.0, time_remaining) / time_budget))
        return f"[{'#' * filled}{'.' * (width - filled)}] {time_remaining:.1f}s"

    def generate_time_up(self) -> str:
        """Notice shown the moment the countdown expires."""
        return "\n[Quiz]: Time is up for this question! Press Enter to see the answer."

    def generate_session_summary(self, summary) -> str:
        """End-of-session summary text."""
        total = summary.question_count
        correct = summary.correct_count
        pct = (summary.final_score / summary.max_score * 100) if summary.max_score > 0 else 0

        text = (
            f"Quiz complete! {correct} of {total} correct. "
            f"Final score: {summary.final_score} / {summary.max_score} points. "
        )
        if pct >= 80:
            text += "Outstanding!"
        elif pct >= 50:
            text += "Good work, keep it up."
        else:
            text += "Come back tomorrow for another try!"
        return text


def format_correct_answer(question: Question) -> str:
    if isinstance(question.correct_answer, frozenset):
        # Keep option order for display.
        return ", ".join(o for o in question.options if o in question.correct_answer)
    return question.correct_answer
