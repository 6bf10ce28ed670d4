from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 600, 1000)

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        # Runs longer than four cannot come from a single lock; pay the top rate
        return self.line_clear_scores[min(lines, len(self.line_clear_scores)) - 1]
