"""
Win cascade — records one point and propagates game, set and match wins.
"""

from __future__ import annotations

import logging

from deuce.engine.formats import apply_set_transition, new_set
from deuce.models.match import MatchState, MatchStatus, Player

logger = logging.getLogger(__name__)


def record_point(match: MatchState, player: Player) -> None:
    """Score a point for ``player`` in the current game and cascade upwards."""
    game = match.current_game
    game.record_point(player)

    # Deuce collapses back to the base threshold so the tally stays bounded
    if game.is_deuce:
        game.points_won = [game.deuce_threshold, game.deuce_threshold]

    _check_won_game(match)


def _check_won_game(match: MatchState) -> None:
    current_set = match.current_set
    game_winner = current_set.current_game.winner
    if game_winner is None:
        return

    current_set.record_game(game_winner)
    logger.debug(
        "Match %s: game to %s, games %d-%d",
        match.id, game_winner.value, *current_set.games_won,
    )
    _check_won_set(match)


def _check_won_set(match: MatchState) -> None:
    set_winner = match.current_set.winner
    if set_winner is None:
        return

    match.sets_won[set_winner.position] += 1
    logger.debug(
        "Match %s: set to %s, sets %d-%d",
        match.id, set_winner.value, *match.sets_won,
    )
    if match.winner is None:
        match.sets.append(new_set(match))
    apply_set_transition(match)
    _check_won_match(match)


def _check_won_match(match: MatchState) -> None:
    if match.winner is not None:
        match.status = MatchStatus.FINISHED
        logger.info("Match %s finished, winner %s", match.id, match.winner.value)
