"""
Tests for match records — saving a match and reading it back.
"""

import pytest

from deuce.engine.formats import get_format
from deuce.engine.scoring import ScoringEngine
from deuce.exceptions import InvalidRecordError
from deuce.models.match import MatchStatus, Player, RuleFormat, SetState, SetType
from deuce.models.record import MatchRecord

P1, P2 = Player.PLAYER_ONE, Player.PLAYER_TWO


class TestMatchRecord:

    def _finished_engine(self) -> ScoringEngine:
        engine = ScoringEngine(get_format("alternate"), "Alice", "Bob")
        engine.start_match(P2)
        for _ in range(2):
            engine.score_point(P1)
        for _ in range(48):
            engine.score_point(P2)
        engine.stop()
        return engine

    def test_to_record(self):
        engine = self._finished_engine()
        record = engine.to_record()
        assert record.score == [0, 2]
        assert record.rules_format == RuleFormat.ALTERNATE
        assert record.number_of_sets_to_win == 2
        assert record.player_one_name == "Alice"
        assert record.date is not None
        assert record.player_two_service_points_played == (
            engine.statistics_for(P2).service_points_played
        )

    def test_json_round_trip(self):
        engine = self._finished_engine()
        payload = engine.to_record().model_dump(mode="json")

        restored = ScoringEngine.from_record(payload)
        assert restored.match.status == MatchStatus.FINISHED
        assert restored.get_winner() == P2
        assert restored.match.sets == engine.match.sets
        assert restored.statistics_for(P1) == engine.statistics_for(P1)
        assert restored.total_games_won(P2) == 12
        assert len(restored.history) == 0
        assert restored.get_server() is None

    def test_missing_counters_default_to_zero(self):
        engine = ScoringEngine(get_format("no_ad"))
        engine.start_match()
        for _ in range(5):
            engine.score_point(P1)
        payload = engine.to_record().model_dump(mode="json")
        for key in list(payload):
            if key.endswith(("_played", "_won")):
                del payload[key]

        restored = ScoringEngine.from_record(payload)
        stats = restored.statistics_for(P1)
        assert stats.service_points_played == 0
        assert stats.tiebreaks_won == 0
        assert restored.match.rule_format == RuleFormat.NO_AD
        assert restored.match.status == MatchStatus.PLAYING

    def test_restores_supertiebreak_in_progress(self, no_ad_engine):
        for _ in range(24):
            no_ad_engine.score_point(P1)
        for _ in range(24):
            no_ad_engine.score_point(P2)
        assert no_ad_engine.match.sets_won == [1, 1]

        restored = ScoringEngine.from_record(no_ad_engine.to_record().model_dump(mode="json"))
        game = restored.match.current_game
        assert game.is_tiebreak
        assert game.number_of_points_to_win == 10
        assert restored.match.current_set.set_type == SetType.SUPER_TIEBREAK

    def test_record_instance_accepted(self):
        restored = ScoringEngine.from_record(MatchRecord(player_two_name="Bob"))
        assert restored.match.player_two_name == "Bob"
        assert restored.match.status == MatchStatus.NOT_STARTED

    @pytest.mark.parametrize("payload", [
        {"score": "two-love"},
        {"number_of_sets_to_win": 7},
        {"rules_format": "fast4"},
        {"score": [2, 0]},
        {"score": [1, 1], "rules_format": "no_ad"},
        {"score": [0, 0, 0]},
    ])
    def test_invalid_record(self, payload):
        with pytest.raises(InvalidRecordError):
            ScoringEngine.from_record(payload)

    def test_score_must_match_set_winners(self):
        payload = self._finished_engine().to_record().model_dump(mode="json")
        payload["score"] = [1, 2]
        with pytest.raises(InvalidRecordError, match="set winners"):
            ScoringEngine.from_record(payload)

    def test_set_count_must_fit_score(self):
        payload = self._finished_engine().to_record().model_dump(mode="json")
        payload["sets"].append(SetState().model_dump(mode="json"))
        with pytest.raises(InvalidRecordError, match="set\\(s\\)"):
            ScoringEngine.from_record(payload)

    def test_restored_match_answers_queries(self):
        engine = self._finished_engine()
        restored = ScoringEngine.from_record(engine.to_record())
        assert restored.is_changeover() == engine.is_changeover()
        assert restored.player_with_match_point() is None
