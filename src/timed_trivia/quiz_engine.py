"""Quiz Engine: loads question banks and picks the questions for a session."""

import datetime
import json
import logging
import random
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from timed_trivia.errors import InvalidSessionError
from timed_trivia.questions import Question, validate_questions
from timed_trivia.quiz_session import QuizSession

logger = logging.getLogger(__name__)

MODES = ("sequential", "random", "daily")


class QuizEngine:
    """Question provider backed by a JSON or YAML question bank."""

    def __init__(self, question_bank_path: str, mode: str = "sequential",
                 count: Optional[int] = None, seed: Optional[int] = None):
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}; expected one of {', '.join(MODES)}")
        if count is not None and count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        self.question_bank_path = question_bank_path
        self.questions = self._load_questions(question_bank_path)
        self.mode = mode
        self.count = count
        self._rng = random.Random(seed)

    def _load_questions(self, path: str) -> List[Question]:
        bank = Path(path)
        try:
            with open(bank, "r", encoding="utf-8") as f:
                if bank.suffix.lower() in (".yaml", ".yml"):
                    records = yaml.safe_load(f)
                else:
                    records = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise InvalidSessionError(f"Could not read question bank {path}: {e}") from e

        if isinstance(records, dict):
            records = records.get("questions")
        if not isinstance(records, list):
            raise InvalidSessionError(f"Question bank {path} must hold a list of questions")

        questions = [Question.from_dict(record) for record in records]
        validate_questions(questions)
        logger.info(f"Loaded {len(questions)} questions from {path}")
        return questions

    def load_daily_questions(self, day: Optional[datetime.date] = None) -> Tuple[Question, ...]:
        """Return the ordered questions for today's session.

        In ``daily`` mode the order depends only on the date, so every player
        gets the same quiz on the same day.
        """
        questions = list(self.questions)
        if self.mode == "random":
            self._rng.shuffle(questions)
        elif self.mode == "daily":
            day = day or datetime.date.today()
            random.Random(day.toordinal()).shuffle(questions)
        if self.count is not None:
            questions = questions[:self.count]
        return tuple(questions)

    def get_question_count(self) -> int:
        if self.count is None:
            return len(self.questions)
        return min(self.count, len(self.questions))

    def new_session(self, day: Optional[datetime.date] = None, **kwargs) -> QuizSession:
        """Build a QuizSession over today's questions; kwargs go to QuizSession."""
        return QuizSession(self.load_daily_questions(day), **kwargs)
