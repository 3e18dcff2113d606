"""Question model: kinds, media attachments and load-time validation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from timed_trivia.errors import InvalidQuestionError, InvalidSessionError


class QuestionKind(str, Enum):
    """How a question is answered."""

    FREE_TEXT = "free_text"
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"

    @property
    def is_choice(self) -> bool:
        return self is not QuestionKind.FREE_TEXT

    @classmethod
    def parse(cls, value) -> "QuestionKind":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        kind = _KIND_ALIASES.get(key)
        if kind is None:
            raise InvalidQuestionError(f"Unknown question kind: {value!r}")
        return kind


# Record names used by question banks exported from the web quiz.
_KIND_ALIASES = {
    "text": QuestionKind.FREE_TEXT,
    "radio": QuestionKind.SINGLE_CHOICE,
    "checkbox": QuestionKind.MULTI_CHOICE,
    "free_text": QuestionKind.FREE_TEXT,
    "single_choice": QuestionKind.SINGLE_CHOICE,
    "multi_choice": QuestionKind.MULTI_CHOICE,
}

_WIRE_KIND_NAMES = {
    QuestionKind.FREE_TEXT: "text",
    QuestionKind.SINGLE_CHOICE: "radio",
    QuestionKind.MULTI_CHOICE: "checkbox",
}


class MediaKind(str, Enum):
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"


@dataclass(frozen=True)
class Media:
    """Presentational attachment; never read by scoring."""

    kind: MediaKind
    url: str


CorrectAnswer = Union[str, FrozenSet[str]]


@dataclass(frozen=True)
class Question:
    """A single trivia question, immutable once loaded."""

    id: str
    text: str
    kind: QuestionKind
    correct_answer: CorrectAnswer
    points: int
    options: Tuple[str, ...] = field(default_factory=tuple)
    media: Optional[Media] = None

    @property
    def max_points(self) -> int:
        return self.points

    def validate(self) -> "Question":
        """Check the question invariants, raising InvalidQuestionError on the first violation."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidQuestionError(f"Question id must be a non-empty string, got {self.id!r}")
        if not isinstance(self.text, str) or not self.text.strip():
            raise InvalidQuestionError(f"Question {self.id}: text is empty")
        if not isinstance(self.kind, QuestionKind):
            raise InvalidQuestionError(f"Question {self.id}: unknown kind {self.kind!r}")
        if isinstance(self.points, bool) or not isinstance(self.points, int) or self.points <= 0:
            raise InvalidQuestionError(
                f"Question {self.id}: points must be a positive integer, got {self.points!r}"
            )

        if self.kind is QuestionKind.FREE_TEXT:
            if not isinstance(self.correct_answer, str) or not self.correct_answer.strip():
                raise InvalidQuestionError(f"Question {self.id}: free-text answer is empty")
            return self

        if not self.options:
            raise InvalidQuestionError(f"Question {self.id}: {self.kind.value} question has no options")
        if any(not isinstance(o, str) or not o.strip() for o in self.options):
            raise InvalidQuestionError(f"Question {self.id}: options must be non-empty strings")
        if len(set(self.options)) != len(self.options):
            raise InvalidQuestionError(f"Question {self.id}: options contain duplicates")

        if self.kind is QuestionKind.SINGLE_CHOICE:
            if not isinstance(self.correct_answer, str):
                raise InvalidQuestionError(f"Question {self.id}: single-choice answer must be a string")
            if self.correct_answer not in self.options:
                raise InvalidQuestionError(
                    f"Question {self.id}: correct answer {self.correct_answer!r} is not one of the options"
                )
        else:
            if not isinstance(self.correct_answer, frozenset) or not self.correct_answer:
                raise InvalidQuestionError(
                    f"Question {self.id}: multi-choice answer must be a non-empty set of options"
                )
            missing = self.correct_answer.difference(self.options)
            if missing:
                raise InvalidQuestionError(
                    f"Question {self.id}: correct answers {sorted(missing)} are not among the options"
                )
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        """Build and validate a question from a bank record.

        Accepts the web quiz layout (``type``, ``correctAnswer``, ``mediaUrl``,
        ``mediaType``) as well as snake_case keys.
        """
        if not isinstance(data, dict):
            raise InvalidQuestionError(f"Question record must be a mapping, got {type(data).__name__}")

        qid = data.get("id", data.get("question_id"))
        if qid is None:
            raise InvalidQuestionError(f"Question record has no id: {data!r}")
        kind = QuestionKind.parse(data.get("type", data.get("kind", "")))

        correct = data.get("correctAnswer", data.get("correct_answer"))
        if correct is None:
            raise InvalidQuestionError(f"Question {qid}: missing correct answer")

        options: Tuple[str, ...] = ()
        if kind.is_choice:
            options = tuple(data.get("options") or ())

        if kind is QuestionKind.MULTI_CHOICE:
            if isinstance(correct, str):
                correct = frozenset([correct])
            elif isinstance(correct, (list, tuple, set, frozenset)):
                correct = frozenset(correct)
            else:
                raise InvalidQuestionError(f"Question {qid}: unsupported answer value {correct!r}")
        elif not isinstance(correct, str):
            raise InvalidQuestionError(f"Question {qid}: {kind.value} answer must be a string")

        question = cls(
            id=str(qid),
            text=data.get("text", data.get("question", "")),
            kind=kind,
            correct_answer=correct,
            points=data.get("points", 100),
            options=options,
            media=_parse_media(qid, data),
        )
        return question.validate()

    def to_dict(self) -> dict:
        if isinstance(self.correct_answer, frozenset):
            correct = sorted(self.correct_answer)
        else:
            correct = self.correct_answer
        record = {
            "id": self.id,
            "text": self.text,
            "type": _WIRE_KIND_NAMES[self.kind],
            "correctAnswer": correct,
            "points": self.points,
        }
        if self.kind.is_choice:
            record["options"] = list(self.options)
        if self.media is not None:
            record["mediaUrl"] = self.media.url
            record["mediaType"] = self.media.kind.value
        return record


def _parse_media(qid, data: dict) -> Optional[Media]:
    media = data.get("media")
    if isinstance(media, dict):
        url, kind = media.get("url"), media.get("kind", media.get("type"))
    else:
        url, kind = data.get("mediaUrl", data.get("media_url")), data.get("mediaType", data.get("media_type"))
    if not url:
        return None
    if kind is None:
        raise InvalidQuestionError(f"Question {qid}: media {url!r} has no media type")
    try:
        return Media(kind=MediaKind(str(kind).lower()), url=url)
    except ValueError:
        raise InvalidQuestionError(f"Question {qid}: unknown media type {kind!r}") from None


def validate_questions(questions: Optional[Iterable[Question]]) -> Tuple[Question, ...]:
    """Validate a whole question sequence for one session."""
    if questions is None:
        raise InvalidSessionError("No question sequence supplied")
    ordered = tuple(questions)
    if not ordered:
        raise InvalidSessionError("Question sequence is empty")

    seen = set()
    for question in ordered:
        if not isinstance(question, Question):
            raise InvalidQuestionError(f"Expected a Question, got {type(question).__name__}")
        question.validate()
        if question.id in seen:
            raise InvalidQuestionError(f"Duplicate question id {question.id!r} in session")
        seen.add(question.id)
    return ordered
