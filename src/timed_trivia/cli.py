"""Command-line entry point for the timed trivia quiz."""

import argparse
import logging
from typing import List, Optional

import yaml

from timed_trivia.config import load_config
from timed_trivia.errors import QuizError
from timed_trivia.feedback_generator import FeedbackGenerator
from timed_trivia.quiz_engine import MODES, QuizEngine
from timed_trivia.runner import QuizRunner
from timed_trivia.session_manager import SessionManager

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None
    if not number > 0 or number == float("inf"):
        raise argparse.ArgumentTypeError(f"must be a positive number, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Timed trivia quiz")
    parser.add_argument("--config", default="config.yaml", help="Config file path")
    parser.add_argument("--questions", default=None, help="Question bank path (JSON or YAML)")
    parser.add_argument("--mode", choices=MODES, default=None)
    parser.add_argument("--count", type=positive_int, default=None, help="Number of questions to play")
    parser.add_argument("--time-budget", type=positive_float, default=None, help="Seconds per question")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except (ValueError, yaml.YAMLError) as e:
        print(f"Could not read config {args.config}: {e}")
        return 1
    quiz_cfg = config.get("quiz") or {}
    log_cfg = config.get("logging") or {}

    level_name = str(log_cfg.get("level", "WARNING")).upper()
    log_level = logging.DEBUG if args.verbose else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    question_bank = args.questions or quiz_cfg.get("question_bank")
    mode = args.mode or quiz_cfg.get("mode", "daily")
    count = args.count if args.count is not None else quiz_cfg.get("count")
    time_budget = args.time_budget if args.time_budget is not None else quiz_cfg.get("time_budget", 20.0)

    sink = SessionManager()
    try:
        engine = QuizEngine(question_bank, mode=mode, count=count)
        session = engine.new_session(time_budget=time_budget, on_complete=sink.record_session)
        runner = QuizRunner(
            session,
            FeedbackGenerator(),
            tick_interval=quiz_cfg.get("tick_interval", 0.1),
        )
    except (QuizError, ValueError, TypeError) as e:
        logger.error(f"Failed to load quiz: {e}")
        print(f"Could not load today's quiz: {e}")
        return 1

    runner.run()
    logger.info(f"Player stats: {sink.get_stats()}")
    return 0
