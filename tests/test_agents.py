import random

import pytest

from azul_rules import (
    Action,
    Agent,
    EvaluationCache,
    FirstLegalAgent,
    GamePhase,
    GreedyAgent,
    PlaceAction,
    RandomAgent,
    TileColor,
    Variant,
    initialize_game,
    legal_actions,
)
from azul_rules.agents import evaluate_placement
from azul_rules.board import WALL_COLOR_TO_COL, PlayerBoard
from azul_rules.tiles import Tile


def _tiles(color, count, tag="t"):
    return [Tile(f"{tag}-{color.value}-{i}", color) for i in range(count)]


def _single_source_state(seed, tiles):
    state = initialize_game(["A", "B"], seed=seed)
    for factory in state.factories:
        factory.tiles = []
    state.factories[0].tiles = list(tiles)
    state.center = []
    return state


def test_random_agent_picks_from_available():
    state = initialize_game(["A", "B"], seed=42)
    agent = RandomAgent(rng=random.Random(42))
    chosen = agent.select_action(state)
    assert chosen in legal_actions(state)


def test_agents_raise_without_legal_actions():
    state = initialize_game(["A", "B"], seed=1)
    state.phase = GamePhase.GAME_END
    for agent in (RandomAgent(), FirstLegalAgent(), GreedyAgent()):
        with pytest.raises(RuntimeError):
            agent.select_action(state)


def test_first_legal_agent_prefers_pattern_line_over_floor():
    state = _single_source_state(10, _tiles(TileColor.BLUE, 1))
    action = FirstLegalAgent().select_action(state)
    assert action == Action(factory_id=0, color=TileColor.BLUE, pattern_line=0)


def test_greedy_rejects_unknown_difficulty():
    with pytest.raises(ValueError):
        GreedyAgent(difficulty="impossible")


def test_greedy_completes_pattern_line_when_possible():
    state = _single_source_state(11, _tiles(TileColor.RED, 1))
    action = GreedyAgent().select_action(state)
    assert action == Action(factory_id=0, color=TileColor.RED, pattern_line=0)


def test_evaluate_placement_rewards_completion():
    board = PlayerBoard()
    red = _tiles(TileColor.RED, 2)
    assert evaluate_placement(board, Action.FLOOR, red, "medium") == -10.0
    full = evaluate_placement(board, 1, red, "medium")
    partial = evaluate_placement(board, 3, red, "medium")
    assert full > partial
    # Hard play also values wall adjacency.
    board.wall[1][WALL_COLOR_TO_COL[1][TileColor.RED] - 1].filled = True
    assert evaluate_placement(board, 1, red, "hard") > full


def test_cache_is_shared_within_a_decision():
    state = _single_source_state(12, _tiles(TileColor.RED, 3))
    cache = EvaluationCache()
    GreedyAgent(difficulty="hard").select_action(state, cache)
    # One selection is reused for every line it could go to.
    assert cache.hits > 0

    hits = cache.hits
    GreedyAgent(difficulty="hard").select_action(state, cache)
    assert cache.hits > hits


def test_greedy_places_rather_than_passes():
    state = initialize_game(["A", "B"], Variant.SUMMER_PAVILION, seed=13)
    for factory in state.factories:
        factory.tiles = []
    state.center = []
    state.phase = GamePhase.TILING
    state.players[0].board.collected_tiles = _tiles(TileColor.RED, 1)
    state.players[1].board.collected_tiles = _tiles(TileColor.YELLOW, 1, "p1")
    action = GreedyAgent(rng=random.Random(0)).select_action(state)
    assert action == PlaceAction(flower=2, position=0, color=TileColor.RED)


def test_easy_greedy_plays_legal_moves():
    state = initialize_game(["A", "B"], Variant.SUMMER_PAVILION, seed=14)
    agent = GreedyAgent(difficulty="easy", rng=random.Random(14))
    assert agent.select_action(state) in legal_actions(state)


def test_agents_satisfy_agent_protocol():
    for agent in (RandomAgent(), FirstLegalAgent(), GreedyAgent()):
        assert isinstance(agent, Agent)
    assert not isinstance(object(), Agent)


def test_any_object_with_select_action_is_an_agent():
    class Scripted:
        def select_action(self, state):
            return legal_actions(state)[-1]

    agent = Scripted()
    assert isinstance(agent, Agent)
    state = initialize_game(["A", "B"], seed=3)
    assert agent.select_action(state).pattern_line == Action.FLOOR
