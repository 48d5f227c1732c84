"""Classic wall scoring, round-end transfer and end-game bonuses.

The public ``calculate_*`` functions return a new state and leave their input
untouched; the ``score_round`` / ``apply_end_game_bonuses`` helpers work in
place and are what the turn engine calls on its own working copy.
"""

import logging

from .board import BOARD_SIZE, WALL_COLOR_TO_COL, PlayerBoard
from .enums import CLASSIC_COLORS
from .state import GameState

LOGGER = logging.getLogger(__name__)

FLOOR_PENALTIES = (-1, -1, -2, -2, -2, -3, -3)
ROW_BONUS = 2
COLUMN_BONUS = 7
COLOR_BONUS = 10


def _line_len(board: PlayerBoard, row: int, col: int, dr: int, dc: int) -> int:
    length = 1
    r = row + dr
    c = col + dc
    while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and board.wall[r][c].filled:
        length += 1
        r += dr
        c += dc
    r = row - dr
    c = col - dc
    while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and board.wall[r][c].filled:
        length += 1
        r -= dr
        c -= dc
    return length


def score_placement(board: PlayerBoard, row: int, col: int) -> int:
    horizontal = _line_len(board, row, col, 0, 1)
    vertical = _line_len(board, row, col, 1, 0)
    horiz_score = horizontal if horizontal > 1 else 0
    vert_score = vertical if vertical > 1 else 0
    return 1 if horiz_score == 0 and vert_score == 0 else horiz_score + vert_score


def floor_penalty(tile_count: int) -> int:
    return sum(FLOOR_PENALTIES[:tile_count])


def _transfer_completed_lines(state: GameState, board: PlayerBoard) -> int:
    gained = 0
    for row, line in enumerate(board.pattern_lines):
        if line.color is None or len(line.tiles) != line.capacity:
            continue
        col = WALL_COLOR_TO_COL[row][line.color]
        tiles = line.clear()
        space = board.wall[row][col]
        if space.filled:
            state.discard_pile.extend(tiles)
            continue
        space.filled = True
        gained += score_placement(board, row, col)
        # One tile stays on the wall, the rest of the line is discarded.
        state.discard_pile.extend(tiles[1:])
    return gained


def score_round(state: GameState) -> GameState:
    for player in state.players:
        board = player.board
        gained = _transfer_completed_lines(state, board)
        board.score += gained
        penalty = floor_penalty(len(board.floor_line))
        board.score = max(board.score + penalty, 0)
        state.discard_pile.extend(board.floor_line)
        board.floor_line = []
        state.round_log.append(
            {
                "round": state.round_number,
                "player": player.id,
                "gained": gained,
                "floor_penalty": penalty,
                "score_after": board.score,
            }
        )
    return state


def end_game_bonus(board: PlayerBoard) -> int:
    wall = board.wall
    bonus = ROW_BONUS * sum(1 for row in wall if all(space.filled for space in row))
    bonus += COLUMN_BONUS * sum(
        1 for col in range(BOARD_SIZE) if all(wall[r][col].filled for r in range(BOARD_SIZE))
    )
    bonus += COLOR_BONUS * sum(
        1
        for color in CLASSIC_COLORS
        if all(wall[r][WALL_COLOR_TO_COL[r][color]].filled for r in range(BOARD_SIZE))
    )
    return bonus


def apply_end_game_bonuses(state: GameState) -> GameState:
    for player in state.players:
        bonus = end_game_bonus(player.board)
        player.board.score += bonus
        LOGGER.debug("player %s end-game bonus %d", player.id, bonus)
    return state


def calculate_round_scores(state: GameState) -> GameState:
    return score_round(state.clone())


def calculate_final_scores(state: GameState) -> GameState:
    return apply_end_game_bonuses(state.clone())


def calculate_score(state: GameState, player_id: str | None = None) -> int:
    player = state.get_player(state.current_player if player_id is None else player_id)
    return 0 if player is None else player.board.score
