"""
Match record — the flat structure a finished (or paused) match is saved as.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from deuce.models.match import Player, RuleFormat, SetState


class MatchRecord(BaseModel):
    """Serializable summary of a match. Missing counters read back as zero."""
    score: list[int] = Field(default_factory=lambda: [0, 0], min_length=2, max_length=2)
    sets: list[SetState] = Field(default_factory=list)
    date: Optional[datetime] = None
    rules_format: RuleFormat = RuleFormat.STANDARD
    number_of_sets_to_win: int = Field(default=2, ge=1, le=3)
    player_one_name: Optional[str] = None
    player_two_name: Optional[str] = None
    player_one_service_points_played: int = 0
    player_two_service_points_played: int = 0
    player_one_service_points_won: int = 0
    player_two_service_points_won: int = 0
    player_one_break_points_played: int = 0
    player_two_break_points_played: int = 0
    player_one_tiebreaks_won: int = 0
    player_two_tiebreaks_won: int = 0

    @model_validator(mode="after")
    def _check_score_matches_sets(self) -> "MatchRecord":
        if not self.sets:
            if self.score != [0, 0]:
                raise ValueError(f"score {self.score} has no sets behind it")
            return self

        for player in Player:
            won = sum(1 for s in self.sets if s.winner == player)
            if won != self.score[player.position]:
                raise ValueError(
                    f"score {self.score} does not match the set winners: "
                    f"{player.value} won {won} set(s)"
                )
            if won > self.number_of_sets_to_win:
                raise ValueError(f"{player.value} won more than {self.number_of_sets_to_win} sets")

        if min(self.score) >= self.number_of_sets_to_win:
            raise ValueError(f"score {self.score} has two winners")

        finished = max(self.score) == self.number_of_sets_to_win
        expected = sum(self.score) if finished else sum(self.score) + 1
        if len(self.sets) != expected:
            raise ValueError(f"expected {expected} set(s) for score {self.score}, got {len(self.sets)}")
        if not finished and self.sets[-1].winner is not None:
            raise ValueError("an unfinished match must end with the set in progress")
        return self
