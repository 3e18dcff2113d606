"""Tests for the command-line entry point."""
import json
import pytest
from unittest.mock import patch
from timed_trivia.cli import build_parser, main


QUESTIONS = [
    {"id": "q1", "text": "Capital of France?", "type": "radio",
     "options": ["Paris", "Lyon"], "correctAnswer": "Paris", "points": 100},
]


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.config == "config.yaml"
    assert args.mode is None
    assert args.verbose is False


def test_missing_question_bank_exits_with_error(tmp_path, capsys):
    code = main([
        "--config", str(tmp_path / "none.yaml"),
        "--questions", str(tmp_path / "missing.json"),
    ])
    assert code == 1
    assert "Could not load today's quiz" in capsys.readouterr().out


def test_runs_session_from_bank(tmp_path):
    bank = tmp_path / "questions.json"
    bank.write_text(json.dumps(QUESTIONS))
    with patch("timed_trivia.cli.QuizRunner") as runner_cls:
        code = main([
            "--config", str(tmp_path / "none.yaml"),
            "--questions", str(bank),
            "--mode", "sequential",
            "--time-budget", "5",
        ])
    assert code == 0
    session = runner_cls.call_args[0][0]
    assert session.question_count == 1
    assert session.time_budget == 5.0
    runner_cls.return_value.run.assert_called_once()


@pytest.mark.parametrize("flags", [
    ["--count", "0"],
    ["--count", "-1"],
    ["--count", "two"],
    ["--time-budget", "0"],
    ["--time-budget", "-5"],
    ["--time-budget", "nan"],
])
def test_invalid_flags_rejected_by_parser(flags, capsys):
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(flags)
    assert exc.value.code == 2
    assert "argument" in capsys.readouterr().err


def test_positive_flags_parsed():
    args = build_parser().parse_args(["--count", "3", "--time-budget", "12.5"])
    assert args.count == 3
    assert args.time_budget == 12.5


def test_malformed_config_exits_with_error(tmp_path, capsys):
    config = tmp_path / "config.yaml"
    config.write_text("quiz: [unclosed\n")
    assert main(["--config", str(config)]) == 1
    assert "Could not read config" in capsys.readouterr().out


def test_non_mapping_config_exits_with_error(tmp_path, capsys):
    config = tmp_path / "config.yaml"
    config.write_text("- a\n- b\n")
    assert main(["--config", str(config)]) == 1


@pytest.mark.parametrize("quiz_section", [
    "  mode: weekly\n",
    "  count: 0\n",
    "  time_budget: 0\n",
    "  tick_interval: 0\n",
])
def test_bad_config_values_exit_with_error(tmp_path, capsys, quiz_section):
    bank = tmp_path / "questions.json"
    bank.write_text(json.dumps(QUESTIONS))
    config = tmp_path / "config.yaml"
    config.write_text(f"quiz:\n  question_bank: {bank}\n{quiz_section}")
    assert main(["--config", str(config)]) == 1
    assert "Could not load today's quiz" in capsys.readouterr().out
