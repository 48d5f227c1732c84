"""Classic legality checks: what may be drafted and where it may go."""

from typing import Sequence

from .actions import Action
from .board import PlayerBoard
from .enums import GamePhase, TileColor
from .state import GameState
from .tiles import Tile


def can_select_tiles(state: GameState, factory_id: int | None, color: TileColor) -> bool:
    if state.phase != GamePhase.DRAFTING:
        return False
    tiles = state.source_tiles(factory_id)
    if tiles is None:
        return False
    return any(t.color == color for t in tiles)


def line_accepts(board: PlayerBoard, line_idx: int, color: TileColor) -> bool:
    if not isinstance(line_idx, int) or not 0 <= line_idx < len(board.pattern_lines):
        return False
    line = board.pattern_lines[line_idx]
    if line.color is not None and line.color != color:
        return False
    if line.is_full:
        return False
    return not board.wall_has_color(line_idx, color)


def can_place_tiles(state: GameState, pattern_line_index: int, selected_tiles: Sequence[Tile]) -> bool:
    if state.phase != GamePhase.DRAFTING:
        return False
    player = state.get_current_player()
    if player is None or not selected_tiles:
        return False
    if pattern_line_index == Action.FLOOR:
        return True
    return line_accepts(player.board, pattern_line_index, selected_tiles[0].color)


def must_place_in_floor_line(state: GameState, selected_tiles: Sequence[Tile]) -> bool:
    """True when no pattern line can take the selection's color."""
    if not selected_tiles:
        return False
    player = state.get_current_player()
    if player is None:
        return False
    color = selected_tiles[0].color
    return not any(line_accepts(player.board, idx, color) for idx in range(len(player.board.pattern_lines)))


def legal_actions(state: GameState) -> list[Action]:
    if state.phase != GamePhase.DRAFTING:
        return []
    player = state.get_current_player()
    if player is None:
        return []
    board = player.board
    actions = []
    append = actions.append
    sources = [(f.id, f.tiles) for f in state.factories] + [(Action.CENTER, state.center)]
    for factory_id, tiles in sources:
        # Keep first-seen order so action lists are stable for a given state.
        for color in dict.fromkeys(t.color for t in tiles):
            for line_idx in range(len(board.pattern_lines)):
                if line_accepts(board, line_idx, color):
                    append(Action(factory_id=factory_id, color=color, pattern_line=line_idx))
            append(Action(factory_id=factory_id, color=color, pattern_line=Action.FLOOR))
    return actions
