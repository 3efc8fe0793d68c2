from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 40, 100, 300, 1200)
    lines_per_level: int = 10
    base_drop_interval_ms: int = 1000
    drop_interval_step_ms: int = 50
    min_drop_interval_ms: int = 100

    def score_for_lines(self, lines: int, level: int) -> int:
        """Points for clearing ``lines`` rows in one lock at ``level``."""
        if not 0 <= lines < len(self.line_clear_scores):
            raise ValueError(f"cannot score {lines} lines in a single lock")
        if level < 1:
            raise ValueError(f"level must be >= 1, got {level}")
        return self.line_clear_scores[lines] * level

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def drop_interval_for_level(self, level: int) -> int:
        if level < 1:
            raise ValueError(f"level must be >= 1, got {level}")
        interval = self.base_drop_interval_ms - (level - 1) * self.drop_interval_step_ms
        return max(self.min_drop_interval_ms, interval)
