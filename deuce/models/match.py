"""
Match data models — Player, court and format enums plus the game, set and
match state that the scoring engine mutates point by point.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from deuce.exceptions import ServiceNotSetError


# ── Rule constants ───────────────────────────────────────────────────────────

POINTS_TO_WIN_GAME = 4
POINTS_TO_WIN_TIEBREAK = 7
POINTS_TO_WIN_SUPERTIEBREAK = 10
GAMES_TO_WIN_SET = 6
WIN_MARGIN = 2


# ── Enums ────────────────────────────────────────────────────────────────────

class Player(str, Enum):
    PLAYER_ONE = "player_one"
    PLAYER_TWO = "player_two"

    @property
    def position(self) -> int:
        """Position of this player in every score pair."""
        return 0 if self is Player.PLAYER_ONE else 1

    @property
    def opponent(self) -> Player:
        return Player.PLAYER_TWO if self is Player.PLAYER_ONE else Player.PLAYER_ONE


class Court(str, Enum):
    DEUCE_COURT = "deuce_court"
    AD_COURT = "ad_court"

    @property
    def other(self) -> Court:
        return Court.AD_COURT if self is Court.DEUCE_COURT else Court.DEUCE_COURT


class RuleFormat(str, Enum):
    STANDARD = "standard"
    NO_AD = "no_ad"
    ALTERNATE = "alternate"

    @property
    def plays_supertiebreak(self) -> bool:
        """Sets tied 1-1 are decided by a single 10-point tiebreak."""
        return self in (RuleFormat.NO_AD, RuleFormat.ALTERNATE)


class SetType(str, Enum):
    TIEBREAK = "tiebreak"
    SUPER_TIEBREAK = "super_tiebreak"
    ADVANTAGE = "advantage"


class MatchStatus(str, Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    FINISHED = "finished"


# ── Formats ──────────────────────────────────────────────────────────────────

class MatchFormat(BaseModel):
    """A named rule format together with the number of sets needed to win."""
    name: str
    rule_format: RuleFormat = RuleFormat.STANDARD
    sets_to_win: int = Field(default=2, ge=1, le=3, description="1 = one set, 2 = best of 3, 3 = best of 5")
    final_set_type: SetType = SetType.TIEBREAK

    @classmethod
    def for_rules(cls, rule_format: RuleFormat, sets_to_win: int = 2) -> MatchFormat:
        rule_format = RuleFormat(rule_format)
        return cls(name=rule_format.value, rule_format=rule_format, sets_to_win=sets_to_win)


# ── Core Models ──────────────────────────────────────────────────────────────

class PointRecord(BaseModel):
    """A single scored point."""
    winner: Optional[Player] = None


class GameState(BaseModel):
    """State of a single game, regular or tiebreak."""
    points_won: list[int] = Field(default_factory=lambda: [0, 0])
    points: list[PointRecord] = Field(default_factory=list)
    number_of_points_to_win: int = POINTS_TO_WIN_GAME
    margin_to_win: int = WIN_MARGIN
    is_tiebreak: bool = False
    service_side: Court = Court.DEUCE_COURT

    @property
    def points_played(self) -> int:
        return sum(self.points_won)

    @property
    def deuce_threshold(self) -> int:
        return self.number_of_points_to_win - 1

    @property
    def is_deuce(self) -> bool:
        """Tied at or above the base threshold of a regular game."""
        if self.is_tiebreak:
            return False
        first, second = self.points_won
        return first == second and first >= self.deuce_threshold

    @property
    def winner(self) -> Optional[Player]:
        for player in Player:
            if self._wins_with(player, self.points_won):
                return player
        return None

    def record_point(self, player: Player) -> None:
        self.points_won[player.position] += 1
        self.points.append(PointRecord(winner=player))

    def has_game_point(self, player: Player) -> bool:
        """Winning the next point would win the game for ``player``."""
        if self.winner is not None:
            return False
        tally = list(self.points_won)
        tally[player.position] += 1
        return self._wins_with(player, tally)

    def player_with_game_point(self) -> Optional[Player]:
        """
        First player holding game point, or None.

        At a no-ad deciding point (3-3 with margin 1) both players hold game
        point and player one is returned; ask :meth:`has_game_point` about a
        specific player instead.
        """
        for player in Player:
            if self.has_game_point(player):
                return player
        return None

    def _wins_with(self, player: Player, tally: list[int]) -> bool:
        own = tally[player.position]
        other = tally[player.opponent.position]
        return own >= self.number_of_points_to_win and own - other >= self.margin_to_win


class SetState(BaseModel):
    """State of a set. The last game in ``games`` is the game in progress."""
    games_won: list[int] = Field(default_factory=lambda: [0, 0])
    games: list[GameState] = Field(default_factory=list)
    number_of_games_to_win: int = GAMES_TO_WIN_SET
    margin_to_win: int = WIN_MARGIN
    set_type: SetType = SetType.TIEBREAK
    no_ad: bool = False

    def model_post_init(self, __context) -> None:
        if not self.games:
            self.games.append(self.new_game())

    @property
    def current_game(self) -> GameState:
        return self.games[-1]

    @property
    def games_played(self) -> int:
        return sum(self.games_won)

    @property
    def is_tiebreak_due(self) -> bool:
        target = self.number_of_games_to_win
        return self.set_type == SetType.TIEBREAK and self.games_won == [target, target]

    @property
    def winner(self) -> Optional[Player]:
        for player in Player:
            if self._wins_with(player, self.games_won):
                return player
        return None

    def new_game(self) -> GameState:
        if self.is_tiebreak_due:
            return GameState(is_tiebreak=True, number_of_points_to_win=POINTS_TO_WIN_TIEBREAK)
        return GameState(margin_to_win=1 if self.no_ad else WIN_MARGIN)

    def record_game(self, player: Player) -> None:
        """Credit a game to ``player`` and open the next game unless the set is over."""
        self.games_won[player.position] += 1
        if self.winner is None:
            self.games.append(self.new_game())

    def has_set_point(self, player: Player) -> bool:
        if self.winner is not None or not self.current_game.has_game_point(player):
            return False
        tally = list(self.games_won)
        tally[player.position] += 1
        return self._wins_with(player, tally)

    def player_with_set_point(self) -> Optional[Player]:
        for player in Player:
            if self.has_set_point(player):
                return player
        return None

    def _wins_with(self, player: Player, tally: list[int]) -> bool:
        own = tally[player.position]
        other = tally[player.opponent.position]
        target = self.number_of_games_to_win
        if own >= target and own - other >= self.margin_to_win:
            return True
        # 7-6 after a tiebreak game
        return self.set_type == SetType.TIEBREAK and own == target + 1 and other == target


class PlayerStatistics(BaseModel):
    """Post-match counters for one player. Zero until the match is stopped."""
    service_points_played: int = 0
    service_points_won: int = 0
    break_points_played: int = 0
    tiebreaks_won: int = 0


class MatchState(BaseModel):
    """Complete scored state of a match. Snapshots of it make up the undo history."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    rule_format: RuleFormat = RuleFormat.STANDARD
    sets_to_win: int = Field(default=2, ge=1, le=3)
    final_set_type: SetType = SetType.TIEBREAK
    player_one_name: Optional[str] = None
    player_two_name: Optional[str] = None
    server: Optional[Player] = None
    sets_won: list[int] = Field(default_factory=lambda: [0, 0])
    sets: list[SetState] = Field(default_factory=list)
    status: MatchStatus = MatchStatus.NOT_STARTED
    completed_at: Optional[datetime] = None
    player_one_statistics: PlayerStatistics = Field(default_factory=PlayerStatistics)
    player_two_statistics: PlayerStatistics = Field(default_factory=PlayerStatistics)

    @property
    def winner(self) -> Optional[Player]:
        for player in Player:
            if self.sets_won[player.position] >= self.sets_to_win:
                return player
        return None

    @property
    def returning_player(self) -> Player:
        if self.server is None:
            raise ServiceNotSetError("No server yet: the returning player is undefined")
        return self.server.opponent

    @property
    def current_set(self) -> SetState:
        return self.sets[-1]

    @property
    def current_game(self) -> GameState:
        return self.current_set.current_game

    @property
    def sets_played(self) -> int:
        return sum(self.sets_won)

    @property
    def total_games_played(self) -> int:
        return sum(s.games_played for s in self.sets)

    @property
    def is_supertiebreak(self) -> bool:
        """Best of three under a format that decides 1-1 with a super-tiebreak."""
        return (
            self.rule_format.plays_supertiebreak
            and self.sets_to_win == 2
            and self.sets_won == [1, 1]
        )

    def statistics_for(self, player: Player) -> PlayerStatistics:
        if player is Player.PLAYER_ONE:
            return self.player_one_statistics
        return self.player_two_statistics
