import random

import pytest

from azul_rules import (
    FirstLegalAgent,
    GamePhase,
    GameResult,
    GreedyAgent,
    PassAction,
    RandomAgent,
    Variant,
    play_game,
    play_series,
)


def test_play_game_reaches_terminal_state():
    agents = [RandomAgent(rng=random.Random(1)), FirstLegalAgent()]
    result = play_game(agents, seed=123)
    assert isinstance(result, GameResult)
    assert result.final_state.is_terminal()
    assert result.final_state.phase == GamePhase.GAME_END
    assert len(result.scores) == 2
    assert all(score >= 0 for score in result.scores)
    assert len(result.score_history) == result.moves + 1


def test_play_game_summer_pavilion():
    agents = [GreedyAgent(rng=random.Random(2)), RandomAgent(rng=random.Random(3))]
    result = play_game(agents, variant=Variant.SUMMER_PAVILION, seed=7)
    assert result.final_state.round_number == 6
    assert result.final_state.tile_count() == 136
    assert all(score >= 1 for score in result.scores)
    assert len(result.round_history) == len(result.score_history)
    assert result.round_history[0] == 1
    assert result.round_history[-1] == 6
    assert result.round_history == sorted(result.round_history)


def test_play_series_is_reproducible():
    def run():
        agents = [RandomAgent(rng=random.Random(5)), GreedyAgent(rng=random.Random(6))]
        return [r.scores for r in play_series(agents, games=3, seed=5)]

    assert run() == run()
    assert len(run()) == 3


class _PassingAgent:
    def select_action(self, state):
        return PassAction()


def test_rejected_agent_move_raises():
    with pytest.raises(RuntimeError):
        play_game([_PassingAgent(), _PassingAgent()], seed=1)


def test_play_game_rejects_objects_without_select_action():
    with pytest.raises(TypeError, match="agent 0"):
        play_game([object(), FirstLegalAgent()], seed=1)
