from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "tetris-high-score"


class HighScoreStore:
    """Single best score persisted as a small JSON document."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return max(0, int(data.get(HIGH_SCORE_KEY, 0)))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("ignoring unreadable high score file %s: %s", self.path, exc)
            return 0

    def save(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({HIGH_SCORE_KEY: int(score)}), encoding="utf-8")

    def submit(self, score: int) -> int:
        """Store `score` if it beats the saved one; return the resulting best."""
        best = self.load()
        if score > best:
            self.save(score)
            logger.info("new high score %d", score)
            return score
        return best
