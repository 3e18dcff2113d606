"""Tests for the QuizEngine question provider."""
import datetime
import json
import pytest
import yaml
from timed_trivia.errors import InvalidQuestionError, InvalidSessionError
from timed_trivia.quiz_engine import QuizEngine
from timed_trivia.quiz_session import Phase, QuizSession


SAMPLE_QUESTIONS = [
    {
        "id": "q1",
        "text": "Capital of France?",
        "type": "radio",
        "options": ["Paris", "Lyon"],
        "correctAnswer": "Paris",
        "points": 100,
    },
    {
        "id": "q2",
        "text": "The answer to everything?",
        "type": "text",
        "correctAnswer": "42",
        "points": 200,
    },
    {
        "id": "q3",
        "text": "Primary colours of light?",
        "type": "checkbox",
        "options": ["Red", "Yellow", "Green", "Blue"],
        "correctAnswer": ["Red", "Green", "Blue"],
        "points": 150,
    },
    {
        "id": "q4",
        "text": "The red planet?",
        "type": "text",
        "correctAnswer": "Mars",
        "points": 100,
        "mediaUrl": "https://example.com/mars.jpg",
        "mediaType": "image",
    },
]


@pytest.fixture
def question_bank_file(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(SAMPLE_QUESTIONS))
    return str(path)


def ids(questions):
    return [q.id for q in questions]


def test_load_questions(question_bank_file):
    engine = QuizEngine(question_bank_file)
    assert engine.get_question_count() == 4


def test_sequential_mode(question_bank_file):
    engine = QuizEngine(question_bank_file, mode="sequential")
    assert ids(engine.load_daily_questions()) == ["q1", "q2", "q3", "q4"]


def test_count_limits_questions(question_bank_file):
    engine = QuizEngine(question_bank_file, count=2)
    assert engine.get_question_count() == 2
    assert ids(engine.load_daily_questions()) == ["q1", "q2"]


def test_count_larger_than_bank(question_bank_file):
    engine = QuizEngine(question_bank_file, count=10)
    assert engine.get_question_count() == 4


def test_random_mode_returns_all(question_bank_file):
    engine = QuizEngine(question_bank_file, mode="random", seed=3)
    assert sorted(ids(engine.load_daily_questions())) == ["q1", "q2", "q3", "q4"]


def test_daily_mode_is_stable_per_day(question_bank_file):
    day = datetime.date(2026, 3, 14)
    first = QuizEngine(question_bank_file, mode="daily").load_daily_questions(day)
    second = QuizEngine(question_bank_file, mode="daily").load_daily_questions(day)
    assert ids(first) == ids(second)
    assert sorted(ids(first)) == ["q1", "q2", "q3", "q4"]


def test_yaml_bank(tmp_path):
    path = tmp_path / "questions.yaml"
    path.write_text(yaml.safe_dump({"questions": SAMPLE_QUESTIONS[:2]}))
    engine = QuizEngine(str(path))
    assert ids(engine.load_daily_questions()) == ["q1", "q2"]


def test_missing_bank(tmp_path):
    with pytest.raises(InvalidSessionError):
        QuizEngine(str(tmp_path / "missing.json"))


def test_unparseable_bank(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(InvalidSessionError):
        QuizEngine(str(path))


def test_empty_bank(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("[]")
    with pytest.raises(InvalidSessionError):
        QuizEngine(str(path))


def test_malformed_question(tmp_path):
    bad = dict(SAMPLE_QUESTIONS[0], correctAnswer="Nice")
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([bad]))
    with pytest.raises(InvalidQuestionError):
        QuizEngine(str(path))


def test_unknown_mode(question_bank_file):
    with pytest.raises(ValueError):
        QuizEngine(question_bank_file, mode="difficulty")


def test_new_session(question_bank_file):
    engine = QuizEngine(question_bank_file, count=3)
    session = engine.new_session(time_budget=10)
    assert isinstance(session, QuizSession)
    assert session.question_count == 3
    assert session.time_budget == 10.0
    assert session.phase is Phase.IN_PROGRESS
