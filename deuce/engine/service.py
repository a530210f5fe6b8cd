"""
Service rotation — who serves the next point and from which side.

Service alternates by game. Inside a tiebreak the server changes after the
first point and then every two points, serving the first point of each turn
from the ad court.
"""

from __future__ import annotations

from typing import Optional

from deuce.models.match import Court, GameState, MatchState, Player


def toggle_server(server: Optional[Player]) -> Optional[Player]:
    """Swap the server; an unset server stays unset."""
    if server is None:
        return None
    return server.opponent


def next_service(server: Optional[Player], game: GameState) -> tuple[Optional[Player], Court]:
    """Server and service side for the point after the one just recorded in ``game``."""
    if game.points_won == [0, 0]:
        return toggle_server(server), game.service_side
    if game.is_tiebreak and game.points_played % 2 == 1:
        return toggle_server(server), Court.AD_COURT
    return server, game.service_side.other


def update_service(match: MatchState) -> None:
    """Apply :func:`next_service` to the match in place."""
    game = match.current_game
    match.server, game.service_side = next_service(match.server, game)
