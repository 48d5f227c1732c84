from azul_rules import Action, GamePhase, TileColor, initialize_game
from azul_rules.board import WALL_COLOR_TO_COL
from azul_rules.rules import can_place_tiles, can_select_tiles, legal_actions, must_place_in_floor_line
from azul_rules.tiles import Tile


def _tiles(color, count, tag="t"):
    return [Tile(f"{tag}-{color.value}-{i}", color) for i in range(count)]


def _single_factory_state(seed, tiles):
    state = initialize_game(["A", "B"], seed=seed)
    for factory in state.factories:
        factory.tiles = []
    state.factories[0].tiles = list(tiles)
    state.center = []
    return state


def test_can_select_tiles_requires_color_in_source():
    state = _single_factory_state(0, _tiles(TileColor.BLUE, 2) + _tiles(TileColor.RED, 2))
    assert can_select_tiles(state, 0, TileColor.BLUE)
    assert not can_select_tiles(state, 0, TileColor.TEAL)
    assert not can_select_tiles(state, 1, TileColor.BLUE)  # empty factory
    assert not can_select_tiles(state, 99, TileColor.BLUE)  # no such factory
    assert not can_select_tiles(state, Action.CENTER, TileColor.BLUE)


def test_can_select_tiles_only_while_drafting():
    state = _single_factory_state(1, _tiles(TileColor.BLUE, 2))
    state.phase = GamePhase.GAME_END
    assert not can_select_tiles(state, 0, TileColor.BLUE)


def test_can_place_tiles_checks_line_and_wall():
    state = _single_factory_state(2, _tiles(TileColor.BLUE, 2))
    board = state.players[0].board
    blue = _tiles(TileColor.BLUE, 2)
    assert can_place_tiles(state, 0, blue)
    assert can_place_tiles(state, Action.FLOOR, blue)

    # Row 0 already holds blue on the wall.
    board.wall[0][WALL_COLOR_TO_COL[0][TileColor.BLUE]].filled = True
    assert not can_place_tiles(state, 0, blue)

    # Line 1 already collects red.
    board.pattern_lines[1].tiles = _tiles(TileColor.RED, 1, "line")
    board.pattern_lines[1].color = TileColor.RED
    assert not can_place_tiles(state, 1, blue)

    # Full line takes nothing more.
    board.pattern_lines[2].tiles = _tiles(TileColor.BLUE, 3, "line")
    board.pattern_lines[2].color = TileColor.BLUE
    assert not can_place_tiles(state, 2, blue)

    assert not can_place_tiles(state, 7, blue)
    assert not can_place_tiles(state, (0, 0), blue)
    assert not can_place_tiles(state, 0, [])


def test_must_place_in_floor_line_when_color_blocked_everywhere():
    state = _single_factory_state(3, _tiles(TileColor.BLUE, 2))
    board = state.players[0].board
    blue = _tiles(TileColor.BLUE, 2)
    assert not must_place_in_floor_line(state, blue)
    for row in range(5):
        board.wall[row][WALL_COLOR_TO_COL[row][TileColor.BLUE]].filled = True
    assert must_place_in_floor_line(state, blue)
    assert not must_place_in_floor_line(state, [])


def test_legal_actions_respects_wall_constraint():
    state = _single_factory_state(4, _tiles(TileColor.BLUE, 2) + _tiles(TileColor.RED, 2))
    actions = legal_actions(state)
    # Five lines plus the floor for each color.
    assert len(actions) == 12

    state.players[0].board.wall[0][WALL_COLOR_TO_COL[0][TileColor.BLUE]].filled = True
    actions = legal_actions(state)
    assert len(actions) == 11
    assert Action(factory_id=0, color=TileColor.BLUE, pattern_line=0) not in actions
    assert Action(factory_id=0, color=TileColor.BLUE, pattern_line=Action.FLOOR) in actions


def test_legal_actions_include_center_and_are_stable():
    state = _single_factory_state(5, _tiles(TileColor.YELLOW, 1))
    state.center = _tiles(TileColor.BLACK, 2, "center")
    first = legal_actions(state)
    assert first == legal_actions(state)
    assert any(a.factory_id is Action.CENTER and a.color == TileColor.BLACK for a in first)
    assert first[0].factory_id == 0


def test_no_legal_actions_after_game_end():
    state = _single_factory_state(6, _tiles(TileColor.BLUE, 2))
    state.phase = GamePhase.GAME_END
    assert legal_actions(state) == []
