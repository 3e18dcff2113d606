"""Submitted answer variants, one per question kind."""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Union

from timed_trivia.questions import Question, QuestionKind


@dataclass(frozen=True)
class FreeTextAnswer:
    text: str
    kind = QuestionKind.FREE_TEXT


@dataclass(frozen=True)
class SingleChoiceAnswer:
    choice: str
    kind = QuestionKind.SINGLE_CHOICE


@dataclass(frozen=True)
class MultiChoiceAnswer:
    choices: FrozenSet[str]
    kind = QuestionKind.MULTI_CHOICE

    def __post_init__(self):
        if not isinstance(self.choices, frozenset):
            object.__setattr__(self, "choices", frozenset(self.choices))


Answer = Union[FreeTextAnswer, SingleChoiceAnswer, MultiChoiceAnswer]

# Recorded for questions that were never answered (timer expiry).
NO_ANSWER = None


def build_answer(question: Question, raw) -> Optional[Answer]:
    """Turn raw host input into the answer variant for ``question``.

    ``raw`` may be a string, an iterable of strings (multi-choice) or None.
    For choice questions a 1-based option number selects that option, and a
    multi-choice string is split on commas. Blank input means no answer.
    """
    if raw is None:
        return NO_ANSWER

    if question.kind is QuestionKind.FREE_TEXT:
        text = str(raw)
        return FreeTextAnswer(text) if text.strip() else NO_ANSWER

    if question.kind is QuestionKind.SINGLE_CHOICE:
        choice = _resolve_option(question, str(raw))
        return SingleChoiceAnswer(choice) if choice else NO_ANSWER

    if isinstance(raw, str):
        parts: Iterable[str] = raw.split(",")
    else:
        parts = raw
    choices = frozenset(c for c in (_resolve_option(question, str(p)) for p in parts) if c)
    return MultiChoiceAnswer(choices) if choices else NO_ANSWER


def _resolve_option(question: Question, value: str) -> str:
    value = value.strip()
    if value.isdigit() and value not in question.options:
        index = int(value) - 1
        if 0 <= index < len(question.options):
            return question.options[index]
    return value
