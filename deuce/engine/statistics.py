"""
Statistics Aggregator — post-match counters computed from the history ledger.

Computes per-player:
- Service points played and won
- Break points played (once per qualifying snapshot)
- Tiebreaks won (regular and super-tiebreak games)
"""

from __future__ import annotations

from typing import Iterable

from deuce.engine.situations import is_break_point
from deuce.models.match import MatchState, Player, PlayerStatistics


class StatisticsAggregator:
    """Walks the pre-point snapshots of a match once and tallies service stats."""

    def compute(
        self,
        match: MatchState,
        snapshots: Iterable[MatchState],
    ) -> dict[Player, PlayerStatistics]:
        stats = {player: PlayerStatistics() for player in Player}
        for snapshot in snapshots:
            self._process_snapshot(stats, snapshot)
        self._count_tiebreaks(stats, match)
        return stats

    def apply(self, match: MatchState, snapshots: Iterable[MatchState]) -> None:
        """Replace the match's statistic counters with freshly computed totals."""
        stats = self.compute(match, snapshots)
        match.player_one_statistics = stats[Player.PLAYER_ONE]
        match.player_two_statistics = stats[Player.PLAYER_TWO]

    def _process_snapshot(self, stats: dict[Player, PlayerStatistics], snapshot: MatchState) -> None:
        server = snapshot.server
        if server is None:
            return

        points = snapshot.current_game.points
        if points and points[-1].winner == server:
            stats[server].service_points_won += 1

        stats[server].service_points_played += 1

        if is_break_point(snapshot):
            stats[server].break_points_played += 1

    def _count_tiebreaks(self, stats: dict[Player, PlayerStatistics], match: MatchState) -> None:
        for set_state in match.sets:
            for game in set_state.games:
                if game.is_tiebreak and game.winner is not None:
                    stats[game.winner].tiebreaks_won += 1
