from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 100, 300, 500, 800)
    points_per_level: int = 500
    initial_drop_ms: float = 560.0
    speed_factor: float = 0.92
    # Exponential speed-up would otherwise approach zero at high levels.
    min_drop_ms: float = 50.0

    def score_for_lines(self, lines: int) -> int:
        """Points for a single clear event; anything above four scores as four."""
        if lines <= 0:
            return 0
        return self.line_clear_scores[min(lines, len(self.line_clear_scores) - 1)]

    def level_for_score(self, score: int) -> int:
        return score // self.points_per_level + 1

    def drop_interval_ms(self, level: int) -> float:
        interval = self.initial_drop_ms * self.speed_factor ** (level - 1)
        return max(self.min_drop_ms, interval)
