"""Baseline move-selection agents built on the engine's public primitives."""

import random
from dataclasses import dataclass, field
from typing import Iterable, Protocol, runtime_checkable

from . import engines
from .actions import Action, DraftAction, PassAction, PlaceAction
from .board import WALL_COLOR_TO_COL, PlayerBoard
from .enums import GamePhase, TileColor, Variant
from .state import GameState
from .tiles import Tile

DIFFICULTIES = ("easy", "medium", "hard")


@runtime_checkable
class Agent(Protocol):
    """Anything that picks a legal move for the player to act in ``state``."""

    def select_action(self, state: GameState): ...


COLOR_RANK = {c: i for i, c in enumerate(TileColor)}


def _action_key(action) -> tuple:
    if isinstance(action, Action):
        source = -1 if action.factory_id is None else action.factory_id
        line = 99 if action.pattern_line == Action.FLOOR else action.pattern_line
        return (0, source, COLOR_RANK[action.color], line)
    if isinstance(action, DraftAction):
        source = -1 if action.factory_id is None else action.factory_id
        return (1, source, COLOR_RANK[action.color], 0)
    if isinstance(action, PlaceAction):
        return (2, action.flower, action.position, COLOR_RANK[action.color])
    return (3, 0, 0, 0)


def _sorted_actions(actions: Iterable) -> list:
    return sorted(actions, key=_action_key)


class EvaluationCache:
    """Memo for one decision; created by the caller and passed down explicitly."""

    def __init__(self) -> None:
        self._selections: dict[tuple[int | None, TileColor], list[Tile]] = {}
        self._scores: dict[tuple, float] = {}
        self.hits = 0

    def selection(self, state: GameState, factory_id: int | None, color: TileColor) -> list[Tile]:
        key = (factory_id, color)
        if key in self._selections:
            self.hits += 1
            return self._selections[key]
        tiles = state.source_tiles(factory_id) or []
        selected = [t for t in tiles if t.color == color]
        self._selections[key] = selected
        return selected

    def score(self, key: tuple, compute) -> float:
        if key in self._scores:
            self.hits += 1
            return self._scores[key]
        value = compute()
        self._scores[key] = value
        return value


def wall_adjacency(board: PlayerBoard, row: int, col: int) -> int:
    wall = board.wall
    count = 0
    for dr, dc in ((0, -1), (0, 1), (-1, 0), (1, 0)):
        r, c = row + dr, col + dc
        while 0 <= r < len(wall) and 0 <= c < len(wall[r]) and wall[r][c].filled:
            count += 1
            r += dr
            c += dc
    return count * 5


def wall_completion(board: PlayerBoard, row: int, col: int, color: TileColor) -> int:
    wall = board.wall
    bonus = 0
    if sum(space.filled for space in wall[row]) == 4:
        bonus += 10
    if sum(r[col].filled for r in wall) == 4:
        bonus += 20
    if sum(space.filled for r in wall for space in r if space.color == color) == 4:
        bonus += 15
    return bonus


def evaluate_placement(board: PlayerBoard, line_idx: int, tiles: list[Tile], difficulty: str) -> float:
    """Heuristic value of putting ``tiles`` on a pattern line (higher is better)."""
    if line_idx == Action.FLOOR:
        return -10.0
    line = board.pattern_lines[line_idx]
    count = len(tiles)
    filled = len(line.tiles) + count
    score = filled / line.capacity * 10
    if filled >= line.capacity:
        score += 15
        if difficulty == "hard":
            color = tiles[0].color
            col = WALL_COLOR_TO_COL[line_idx][color]
            score += wall_adjacency(board, line_idx, col)
            score += wall_completion(board, line_idx, col, color)
    if difficulty != "easy":
        score += count * 3
    if not line.tiles and filled < line.capacity:
        score -= 5
    return score


def _classic_candidates(state: GameState, cache: EvaluationCache) -> list[tuple[Action, list[Tile]]]:
    candidates = []
    for action in engines.legal_actions(state):
        selected = cache.selection(state, action.factory_id, action.color)
        if action.pattern_line != Action.FLOOR and engines.must_place_in_floor_line(state, selected):
            continue
        candidates.append((action, selected))
    return candidates


def _lookahead_gain(state: GameState, action, cache: EvaluationCache) -> float:
    def compute() -> float:
        player_id = state.current_player
        before = engines.calculate_score(state, player_id)
        after_state = engines.apply_move(state, action)
        gained = engines.calculate_score(after_state, player_id) - before
        if isinstance(action, DraftAction):
            player = after_state.get_player(player_id)
            gained += 0.5 * len(player.board.collected_tiles)
        if isinstance(action, PassAction):
            gained -= 0.5
        return float(gained)

    return cache.score(_action_key(action), compute)


@dataclass
class RandomAgent:
    """Chooses uniformly among legal actions."""

    rng: random.Random = field(default_factory=random.Random)

    def select_action(self, state: GameState):
        actions = engines.legal_actions(state)
        if not actions:
            raise RuntimeError("no legal actions available")
        return self.rng.choice(actions)


class FirstLegalAgent:
    """Picks the first action under a stable ordering."""

    def select_action(self, state: GameState):
        actions = _sorted_actions(engines.legal_actions(state))
        if not actions:
            raise RuntimeError("no legal actions available")
        return actions[0]


@dataclass
class GreedyAgent:
    """
    One-ply greedy player.

    Classic games rate every (selection, line) pair with a pattern-line
    heuristic whose depth depends on ``difficulty``; Summer Pavilion games
    simulate each move on a copy of the state and keep the best score gain.
    "easy" plays a random legal move.
    """

    difficulty: str = "medium"
    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(f"unknown difficulty: {self.difficulty}")

    def select_action(self, state: GameState, cache: EvaluationCache | None = None):
        cache = cache if cache is not None else EvaluationCache()
        actions = engines.legal_actions(state)
        if not actions:
            raise RuntimeError("no legal actions available")
        if self.difficulty == "easy":
            return self.rng.choice(actions)
        if state.variant == Variant.CLASSIC and state.phase == GamePhase.DRAFTING:
            return self._select_classic(state, cache)
        scored = [(_lookahead_gain(state, a, cache), a) for a in actions]
        best_value = max(value for value, _ in scored)
        return _sorted_actions([a for value, a in scored if value == best_value])[0]

    def _select_classic(self, state: GameState, cache: EvaluationCache) -> Action:
        board = state.get_current_player().board
        best_value = float("-inf")
        best: list[Action] = []
        for action, selected in _classic_candidates(state, cache):
            value = cache.score(
                _action_key(action),
                lambda: evaluate_placement(board, action.pattern_line, selected, self.difficulty),
            )
            if value > best_value:
                best_value = value
                best = [action]
            elif value == best_value:
                best.append(action)
        return _sorted_actions(best)[0]
