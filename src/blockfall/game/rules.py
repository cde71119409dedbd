from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (40, 100, 300, 1200)
    hard_drop_points: int = 2
    lines_per_level: int = 10
    base_drop_interval: int = 1000
    drop_interval_step: int = 100
    min_drop_interval: int = 100

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        # A single piece spans at most four rows
        index = min(lines, len(self.line_clear_scores)) - 1
        return self.line_clear_scores[index] * level

    def score_for_hard_drop(self, rows: int) -> int:
        return max(0, rows) * self.hard_drop_points

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def drop_interval_for_level(self, level: int) -> int:
        return max(self.min_drop_interval, self.base_drop_interval - (level - 1) * self.drop_interval_step)
