"""Quiz Runner: plays a QuizSession in the terminal."""

import logging
import threading
from typing import Callable, Optional

from timed_trivia.answers import build_answer
from timed_trivia.clock import TICK_INTERVAL, SessionClock, session_ticker
from timed_trivia.errors import InvalidStateError
from timed_trivia.feedback_generator import FeedbackGenerator
from timed_trivia.quiz_session import QuizSession, SessionSummary

logger = logging.getLogger(__name__)

QUIT_COMMANDS = ("quit", "exit", ":q")


class QuizRunner:
    """
    Terminal host for a quiz session.

    Reads answers on the calling thread while a SessionClock ticks the
    session in the background. Both go through one lock, so the session only
    ever sees serialized calls.
    """

    def __init__(
        self,
        session: QuizSession,
        feedback_generator: Optional[FeedbackGenerator] = None,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        clock_factory=SessionClock,
        tick_interval: float = TICK_INTERVAL,
    ):
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {tick_interval}")
        self.session = session
        self.feedback = feedback_generator or FeedbackGenerator()
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.clock_factory = clock_factory
        self.tick_interval = tick_interval
        self._lock = threading.Lock()

    def speak(self, text: str):
        self.output_fn(f"\n[Quiz]: {text}")

    def listen(self) -> Optional[str]:
        """Read one line of input; None when input is closed."""
        try:
            return self.input_fn("\n[You]: ").strip()
        except (EOFError, KeyboardInterrupt):
            return None

    def _ticker(self) -> Callable[[float], bool]:
        """Session ticker that tells the player when the countdown runs out."""
        tick = session_ticker(self.session)

        def _tick(elapsed: float) -> bool:
            keep_going = tick(elapsed)
            last = self.session.last_result
            if not keep_going and last is not None and last.timed_out and self.session.time_remaining == 0.0:
                # Runs on the clock thread while input() is still blocking.
                self.output_fn(self.feedback.generate_time_up())
            return keep_going

        return _tick

    def run_question(self) -> bool:
        """Play the current question. Returns False if the player quit."""
        session = self.session
        question = session.current_question
        self.speak(self.feedback.generate_intro(
            question, session.current_index + 1, session.question_count))
        self.output_fn(self.feedback.generate_countdown(session.time_remaining, session.time_budget))

        clock = self.clock_factory(self._ticker(), self.tick_interval, lock=self._lock)
        clock.start()
        try:
            raw = self.listen()
        finally:
            clock.stop()

        if raw is None or raw.lower() in QUIT_COMMANDS:
            return False

        with self._lock:
            try:
                result = session.submit_answer(build_answer(question, raw))
            except InvalidStateError:
                # The clock expired the question while the player was typing.
                logger.debug(f"Late answer for question {question.id} ignored")
                result = session.last_result
        self.speak(self.feedback.generate(result, question))

        with self._lock:
            session.advance()
        return True

    def run(self) -> Optional[SessionSummary]:
        """Play the whole session. Returns the summary, or None if abandoned."""
        self.speak(
            f"Welcome to today's quiz! {self.session.question_count} questions, "
            f"{self.session.time_budget:.0f} seconds each. Type 'quit' to stop."
        )
        while not self.session.is_completed:
            if not self.run_question():
                self.speak("Quiz abandoned. See you next time!")
                logger.info(f"Session abandoned at question {self.session.current_index + 1}")
                return None

        summary = self.session.summary()
        self.speak(self.feedback.generate_session_summary(summary))
        return summary
