"""
Format policy — the catalogue of match formats, how new sets are laid out
and the switch into a deciding super-tiebreak.
"""

from __future__ import annotations

import logging

from deuce.models.match import (
    POINTS_TO_WIN_SUPERTIEBREAK,
    WIN_MARGIN,
    MatchFormat,
    MatchState,
    RuleFormat,
    SetState,
    SetType,
)

logger = logging.getLogger(__name__)


FORMATS: dict[str, MatchFormat] = {
    "standard": MatchFormat(name="standard", rule_format=RuleFormat.STANDARD, sets_to_win=2),
    "best_of_five": MatchFormat(name="best_of_five", rule_format=RuleFormat.STANDARD, sets_to_win=3),
    "one_set": MatchFormat(name="one_set", rule_format=RuleFormat.STANDARD, sets_to_win=1),
    "no_ad": MatchFormat(name="no_ad", rule_format=RuleFormat.NO_AD, sets_to_win=2),
    "alternate": MatchFormat(name="alternate", rule_format=RuleFormat.ALTERNATE, sets_to_win=2),
}


def get_format(name: str) -> MatchFormat:
    """Look up a catalogue format by name."""
    try:
        return FORMATS[name]
    except KeyError:
        raise ValueError(f"Unknown match format: {name!r}") from None


def new_set(match: MatchState) -> SetState:
    """Build the next set for ``match``; the deciding set uses the final-set type."""
    is_final_set = match.sets_played == 2 * match.sets_to_win - 2
    return SetState(
        set_type=match.final_set_type if is_final_set else SetType.TIEBREAK,
        no_ad=match.rule_format == RuleFormat.NO_AD,
    )


def start_supertiebreak(match: MatchState) -> None:
    """Collapse the current set into a single 10-point tiebreak game."""
    current_set = match.current_set
    game = current_set.current_game
    game.is_tiebreak = True
    game.number_of_points_to_win = POINTS_TO_WIN_SUPERTIEBREAK
    game.margin_to_win = WIN_MARGIN
    current_set.number_of_games_to_win = 1
    current_set.margin_to_win = 1
    current_set.set_type = SetType.SUPER_TIEBREAK
    logger.debug("Match %s: sets tied 1-1, deciding super-tiebreak started", match.id)


def apply_set_transition(match: MatchState) -> bool:
    """Run after ``sets_won`` changes. Returns True if a super-tiebreak was started."""
    if not match.is_supertiebreak or match.winner is not None:
        return False
    if match.current_set.set_type == SetType.SUPER_TIEBREAK:
        return False
    start_supertiebreak(match)
    return True
