"""
Tennis Scoring Engine — point-by-point match scoring with undo and statistics.

Implements:
- Standard, no-ad and alternate rule formats
- Game → set → match win cascade with deuce normalization
- Regular and tiebreak service rotation, including side of court
- Deciding super-tiebreak at one set all
- Break point, set point, match point and changeover detection
- Snapshot history for unlimited undo and post-match statistics
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import ValidationError

from deuce.config import settings
from deuce.engine import situations
from deuce.engine.cascade import record_point
from deuce.engine.formats import get_format, new_set
from deuce.engine.history import HistoryLedger
from deuce.engine.service import update_service
from deuce.engine.statistics import StatisticsAggregator
from deuce.exceptions import InvalidRecordError
from deuce.models.match import (
    MatchFormat,
    MatchState,
    MatchStatus,
    Player,
    PlayerStatistics,
)
from deuce.models.record import MatchRecord

logger = logging.getLogger(__name__)


class ScoringEngine:
    """
    A single match and its history.

    Usage:
        engine = ScoringEngine(get_format("no_ad"), "Alice", "Bob")
        engine.start_match(Player.PLAYER_ONE)
        engine.score_point(Player.PLAYER_TWO)
        engine.is_break_point()
    """

    def __init__(
        self,
        match_format: Optional[MatchFormat] = None,
        player_one_name: Optional[str] = None,
        player_two_name: Optional[str] = None,
        history_limit: Optional[int] = None,
    ):
        self.format = match_format or get_format(settings.DEFAULT_FORMAT)
        self.match = MatchState(
            rule_format=self.format.rule_format,
            sets_to_win=self.format.sets_to_win,
            final_set_type=self.format.final_set_type,
            player_one_name=player_one_name,
            player_two_name=player_two_name,
        )
        self.match.sets.append(new_set(self.match))
        self.history = HistoryLedger(history_limit or settings.HISTORY_LIMIT)
        self._statistics = StatisticsAggregator()

    # ── Match lifecycle ──────────────────────────────────────────────────────

    def start_match(self, first_server: Union[Player, str] = Player.PLAYER_ONE) -> MatchState:
        """
        Choose the server and begin play.
        Allowed whenever no server has been chosen yet, including after points
        were scored without one.
        """
        if self.match.server is not None:
            raise ValueError(f"Cannot start match: {self.match.server.value} is already serving")
        self.match.server = Player(first_server)
        if self.match.status == MatchStatus.NOT_STARTED:
            self.match.status = MatchStatus.PLAYING
        logger.info("Match %s started, %s to serve", self.match.id, self.match.server.value)
        return self.match

    def score_point(self, player: Union[Player, str]) -> MatchState:
        """
        Score a point for the given player.
        Every call is recorded in the history, so one undo reverses it.
        """
        player = Player(player)
        self.history.push(self.match)

        if self.match.status == MatchStatus.FINISHED:
            logger.warning("Match %s is finished; point for %s ignored", self.match.id, player.value)
            return self.match
        if self.match.status == MatchStatus.NOT_STARTED:
            self.match.status = MatchStatus.PLAYING

        record_point(self.match, player)
        update_service(self.match)
        return self.match

    def undo(self) -> Optional[MatchState]:
        """Restore the state before the last scored point. No-op on an empty history."""
        previous = self.history.pop()
        if previous is None:
            return None
        self.match = previous
        return self.match

    def stop(self) -> MatchState:
        """Record the completion date and compute post-match statistics."""
        if self.match.completed_at is None:
            self.match.completed_at = datetime.now(timezone.utc)
        self._statistics.apply(self.match, self.history)
        logger.info(
            "Match %s stopped after %d points", self.match.id, len(self.history),
        )
        return self.match

    # ── Situations ───────────────────────────────────────────────────────────

    def is_break_point(self) -> bool:
        return situations.is_break_point(self.match)

    def player_with_break_point(self) -> Optional[Player]:
        return situations.player_with_break_point(self.match)

    def is_set_point(self) -> bool:
        return situations.is_set_point(self.match)

    def player_with_set_point(self) -> Optional[Player]:
        return situations.player_with_set_point(self.match)

    def is_match_point(self) -> bool:
        return situations.is_match_point(self.match)

    def player_with_match_point(self) -> Optional[Player]:
        return situations.player_with_match_point(self.match)

    def is_changeover(self) -> bool:
        return situations.is_changeover(self.match)

    # ── Totals ───────────────────────────────────────────────────────────────

    def total_points_won(self, player: Union[Player, str]) -> int:
        player = Player(player)
        return sum(
            1
            for set_state in self.match.sets
            for game in set_state.games
            for point in game.points
            if point.winner == player
        )

    def total_games_won(self, player: Union[Player, str]) -> int:
        player = Player(player)
        return sum(set_state.games_won[player.position] for set_state in self.match.sets)

    def total_break_points_played(self, player: Union[Player, str]) -> int:
        """Break points faced on ``player``'s serve so far, counted per point."""
        player = Player(player)
        return sum(
            1
            for snapshot in self.history
            if snapshot.server == player and situations.is_break_point(snapshot)
        )

    def statistics_for(self, player: Union[Player, str]) -> PlayerStatistics:
        """Post-match counters; all zero until :meth:`stop` has run."""
        return self.match.statistics_for(Player(player))

    # ── Persistence ──────────────────────────────────────────────────────────

    def to_record(self) -> MatchRecord:
        m = self.match
        one, two = m.player_one_statistics, m.player_two_statistics
        return MatchRecord(
            score=list(m.sets_won),
            sets=[s.model_copy(deep=True) for s in m.sets],
            date=m.completed_at,
            rules_format=m.rule_format,
            number_of_sets_to_win=m.sets_to_win,
            player_one_name=m.player_one_name,
            player_two_name=m.player_two_name,
            player_one_service_points_played=one.service_points_played,
            player_two_service_points_played=two.service_points_played,
            player_one_service_points_won=one.service_points_won,
            player_two_service_points_won=two.service_points_won,
            player_one_break_points_played=one.break_points_played,
            player_two_break_points_played=two.break_points_played,
            player_one_tiebreaks_won=one.tiebreaks_won,
            player_two_tiebreaks_won=two.tiebreaks_won,
        )

    @classmethod
    def from_record(cls, record: Union[MatchRecord, dict[str, Any]]) -> ScoringEngine:
        """
        Rebuild an engine from a saved record.
        The server and undo history are not part of a record and start empty.
        """
        if not isinstance(record, MatchRecord):
            try:
                record = MatchRecord.model_validate(record)
            except ValidationError as exc:
                raise InvalidRecordError(f"Invalid match record: {exc}") from exc

        engine = cls(
            MatchFormat.for_rules(record.rules_format, record.number_of_sets_to_win),
            record.player_one_name,
            record.player_two_name,
        )
        m = engine.match
        m.sets_won = list(record.score)
        if record.sets:
            m.sets = [s.model_copy(deep=True) for s in record.sets]
        m.completed_at = record.date
        m.player_one_statistics = PlayerStatistics(
            service_points_played=record.player_one_service_points_played,
            service_points_won=record.player_one_service_points_won,
            break_points_played=record.player_one_break_points_played,
            tiebreaks_won=record.player_one_tiebreaks_won,
        )
        m.player_two_statistics = PlayerStatistics(
            service_points_played=record.player_two_service_points_played,
            service_points_won=record.player_two_service_points_won,
            break_points_played=record.player_two_break_points_played,
            tiebreaks_won=record.player_two_tiebreaks_won,
        )
        if m.winner is not None:
            m.status = MatchStatus.FINISHED
        elif m.total_games_played or m.current_game.points:
            m.status = MatchStatus.PLAYING
        return engine

    # ── Convenience ──────────────────────────────────────────────────────────

    def get_server(self) -> Optional[Player]:
        return self.match.server

    def returning_player(self) -> Player:
        """Raises ServiceNotSetError before a server has been chosen."""
        return self.match.returning_player

    def is_match_over(self) -> bool:
        return self.match.status == MatchStatus.FINISHED

    def get_winner(self) -> Optional[Player]:
        return self.match.winner
