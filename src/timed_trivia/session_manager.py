"""Session Manager: in-memory score sink for completed quiz sessions."""

import logging
import time
import uuid
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class SessionManager:
    """Collects completed sessions for one player and keeps running totals.

    ``record_session`` matches the ``on_complete`` callback of QuizSession.
    """

    def __init__(self, player_id: Optional[str] = None, total_points: int = 0):
        self.player_id = player_id or str(uuid.uuid4())
        self.total_points = total_points
        self._history: List[Dict] = []

    def record_session(self, summary) -> Dict:
        """Record a completed session summary."""
        entry = summary.to_dict()
        entry["completed_at"] = time.time()
        self._history.append(entry)
        self.total_points += int(round(summary.final_score))
        logger.info(
            f"Recorded session for {self.player_id}: {summary.final_score}/{summary.max_score} "
            f"(total {self.total_points})"
        )
        return entry

    def get_stats(self) -> dict:
        """Aggregate statistics over every recorded session."""
        played = len(self._history)
        scores = [h["final_score"] for h in self._history]
        answered = sum(h["question_count"] for h in self._history)
        correct = sum(h["correct_count"] for h in self._history)

        return {
            "player_id": self.player_id,
            "sessions_played": played,
            "total_points": self.total_points,
            "best_score": max(scores) if scores else 0,
            "avg_score": sum(scores) / played if played > 0 else 0.0,
            "questions_answered": answered,
            "correct": correct,
            "accuracy": correct / answered if answered > 0 else 0.0,
        }

    def get_history(self) -> List[Dict]:
        """Return all recorded sessions, oldest first."""
        return list(self._history)
