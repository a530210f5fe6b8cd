"""
Situation detection — break point, set point, match point and changeover.

All functions are read-only queries over a single match state, so they apply
equally to the live match and to any snapshot in its history.
"""

from __future__ import annotations

from typing import Optional

from deuce.models.match import MatchState, Player


def player_with_break_point(match: MatchState) -> Optional[Player]:
    """The returning player, if they are one point from winning the game."""
    if match.server is None:
        return None
    returner = match.returning_player
    if match.current_game.has_game_point(returner):
        return returner
    return None


def is_break_point(match: MatchState) -> bool:
    return player_with_break_point(match) is not None


def player_with_set_point(match: MatchState) -> Optional[Player]:
    return match.current_set.player_with_set_point()


def is_set_point(match: MatchState) -> bool:
    return player_with_set_point(match) is not None


def player_with_match_point(match: MatchState) -> Optional[Player]:
    """A player on set point whose set would also win the match."""
    for player in Player:
        if (
            match.current_set.has_set_point(player)
            and match.sets_won[player.position] == match.sets_to_win - 1
        ):
            return player
    return None


def is_match_point(match: MatchState) -> bool:
    return player_with_match_point(match) is not None


def is_changeover(match: MatchState) -> bool:
    """Players change ends before the next point."""
    current_set = match.current_set
    game = current_set.current_game

    # Every six points of a tiebreak
    if game.is_tiebreak and game.points_played > 0 and game.points_played % 6 == 0:
        return True

    # First point of a new set, carried over from the previous set
    if match.sets_played >= 1 and current_set.games_played == 0 and game.points_played == 0:
        return match.sets[match.sets_played - 1].games_played % 2 == 1

    # After every odd game within a set
    if game.points_played == 0:
        return current_set.games_played % 2 == 1
    return False
