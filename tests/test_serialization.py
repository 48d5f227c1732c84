import json

import pytest

from azul_rules import Action, DraftAction, PassAction, PlaceAction, TileColor, Variant, initialize_game
from azul_rules.serialization import (
    action_from_dict,
    action_to_dict,
    rng_from_dict,
    rng_to_dict,
    state_from_dict,
    state_to_dict,
)


@pytest.mark.parametrize(
    "action",
    [
        Action(factory_id=Action.CENTER, color=TileColor.BLUE, pattern_line=2),
        DraftAction(factory_id=3, color=TileColor.GREEN),
        PlaceAction(flower=6, position=4, color=TileColor.TEAL),
        PassAction(keep=("red-1", "joker-0")),
        PassAction(),
    ],
)
def test_action_round_trip(action):
    payload = json.loads(json.dumps(action_to_dict(action)))
    assert action_from_dict(payload) == action


def test_action_errors():
    with pytest.raises(TypeError):
        action_to_dict(object())
    with pytest.raises(ValueError):
        action_from_dict({"type": "teleport"})


def test_state_round_trip_with_rng():
    state = initialize_game(["A", "B"], seed=123)
    state.round_log = [{"round": 1, "player": "player-0", "gained": 2, "floor_penalty": -1, "score_after": 1}]
    state.first_player_token = "player-1"
    state.players[0].board.wall[2][3].filled = True
    state.rng.random()
    snapshot = state_to_dict(
        state,
        include_supply_contents=True,
        include_rng=True,
        include_round_log=True,
    )
    restored = state_from_dict(json.loads(json.dumps(snapshot)))

    assert restored.round_number == state.round_number
    assert restored.phase == state.phase
    assert restored.current_player == state.current_player
    assert restored.first_player_token == state.first_player_token
    assert restored.round_log == state.round_log
    assert restored.rng.getstate() == state.rng.getstate()
    assert restored.bag == state.bag
    assert restored.discard_pile == state.discard_pile
    assert [f.tiles for f in restored.factories] == [f.tiles for f in state.factories]
    for left, right in zip(restored.players, state.players):
        assert left.board.score == right.board.score
        assert left.board.wall == right.board.wall
        assert left.board.floor_line == right.board.floor_line
    assert state_to_dict(restored, include_supply_contents=True) == state_to_dict(state, include_supply_contents=True)


def test_summer_pavilion_snapshot():
    state = initialize_game(["A", "B", "C"], Variant.SUMMER_PAVILION, seed=4)
    state.players[1].board.flowers[6][2] = TileColor.RED
    snapshot = state_to_dict(state, include_supply_contents=True)
    assert snapshot["variant"] == "summer_pavilion"
    assert snapshot["joker_color"] == "blue"
    assert snapshot["max_rounds"] == 6
    assert snapshot["players"][1]["board"]["flowers"][6][2] == "red"

    restored = state_from_dict(snapshot)
    assert restored.variant == Variant.SUMMER_PAVILION
    assert restored.joker_color == TileColor.BLUE
    assert restored.players[1].board.flowers == state.players[1].board.flowers
    assert restored.tile_count() == 136


def test_state_to_dict_minimal_excludes_hidden():
    state = initialize_game(["A", "B"], seed=0)
    snapshot = state_to_dict(state)
    supply = snapshot["supply"]
    assert "bag" not in supply
    assert "discard" not in supply
    assert supply["bag_count"] == 80
    assert "rng_state" not in snapshot
    assert "round_log" not in snapshot


def test_state_from_dict_requires_supply_contents():
    state = initialize_game(["A", "B"], seed=0)
    snapshot = state_to_dict(state)
    with pytest.raises(ValueError):
        state_from_dict(snapshot)
    partial = state_from_dict(snapshot, require_supply_contents=False)
    assert partial.bag == []
    assert [f.tiles for f in partial.factories] == [f.tiles for f in state.factories]


def test_restored_rng_replays_the_same_draws():
    state = initialize_game(["A", "B"], Variant.SUMMER_PAVILION, seed=9)
    data = json.loads(json.dumps(rng_to_dict(state.rng)))
    assert len(data["words"]) == 625
    restored = rng_from_dict(data)
    assert [restored.randrange(100) for _ in range(10)] == [state.rng.randrange(100) for _ in range(10)]


def test_malformed_rng_state_is_rejected():
    state = initialize_game(["A", "B"], seed=0)
    snapshot = state_to_dict(state, include_supply_contents=True, include_rng=True)
    snapshot["rng_state"]["words"] = snapshot["rng_state"]["words"][:10]
    with pytest.raises(ValueError, match="625 state words"):
        state_from_dict(snapshot)
