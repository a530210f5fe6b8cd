"""
Tests for service rotation — server and side of court after each point.
"""

from deuce.engine.scoring import ScoringEngine
from deuce.engine.service import next_service, toggle_server
from deuce.models.match import Court, GameState, Player

P1, P2 = Player.PLAYER_ONE, Player.PLAYER_TWO


class TestNextService:

    def test_unset_server_stays_unset(self):
        assert toggle_server(None) is None
        assert next_service(None, GameState()) == (None, Court.DEUCE_COURT)

    def test_new_game_toggles_server_only(self):
        game = GameState(service_side=Court.AD_COURT)
        assert next_service(P1, game) == (P2, Court.AD_COURT)

    def test_regular_point_toggles_side(self):
        game = GameState(points_won=[1, 0])
        assert next_service(P1, game) == (P1, Court.AD_COURT)
        game = GameState(points_won=[1, 1], service_side=Court.AD_COURT)
        assert next_service(P1, game) == (P1, Court.DEUCE_COURT)

    def test_tiebreak_odd_point_switches_server_to_ad_court(self):
        game = GameState(points_won=[1, 0], is_tiebreak=True, number_of_points_to_win=7)
        assert next_service(P1, game) == (P2, Court.AD_COURT)

    def test_tiebreak_even_point_toggles_side(self):
        game = GameState(
            points_won=[1, 1], is_tiebreak=True, number_of_points_to_win=7,
            service_side=Court.AD_COURT,
        )
        assert next_service(P2, game) == (P2, Court.DEUCE_COURT)


class TestServiceRotation:

    def _play_game(self, engine: ScoringEngine, winner: Player) -> None:
        for _ in range(4):
            engine.score_point(winner)

    def test_server_alternates_by_game(self, standard_engine):
        assert standard_engine.get_server() == P1
        self._play_game(standard_engine, P2)
        assert standard_engine.get_server() == P2
        self._play_game(standard_engine, P2)
        assert standard_engine.get_server() == P1

    def test_side_alternates_within_game(self, standard_engine):
        game = standard_engine.match.current_game
        assert game.service_side == Court.DEUCE_COURT
        standard_engine.score_point(P1)
        assert standard_engine.match.current_game.service_side == Court.AD_COURT
        standard_engine.score_point(P2)
        assert standard_engine.match.current_game.service_side == Court.DEUCE_COURT

    def test_new_game_starts_from_deuce_court(self, standard_engine):
        self._play_game(standard_engine, P1)
        assert standard_engine.match.current_game.service_side == Court.DEUCE_COURT

    def test_tiebreak_server_changes_on_odd_points(self, standard_engine):
        for game in range(12):
            self._play_game(standard_engine, P1 if game % 2 == 0 else P2)
        assert standard_engine.match.current_game.is_tiebreak
        # twelve games played, so the first server serves first again
        assert standard_engine.get_server() == P1

        servers = []
        changed_on = []
        for point in range(1, 11):
            before = standard_engine.get_server()
            standard_engine.score_point(P1 if point % 2 == 0 else P2)
            after = standard_engine.get_server()
            servers.append(after)
            if after != before:
                changed_on.append(point)
                assert standard_engine.match.current_game.service_side == Court.AD_COURT

        assert changed_on == [1, 3, 5, 7, 9]
        assert servers[:4] == [P2, P2, P1, P1]

    def test_no_server_before_start(self):
        engine = ScoringEngine()
        for _ in range(4):
            engine.score_point(P1)
        assert engine.get_server() is None
        assert engine.match.sets[0].games_won == [1, 0]
