import logging
import random
from typing import Sequence

from . import rules, scoring
from .actions import Action
from .board import Player, PlayerBoard
from .enums import GamePhase, TileColor, Variant
from .state import GameState, create_factories, distribute_factory_tiles
from .tiles import Tile, create_tiles, refill_bag, shuffle

LOGGER = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 4


def check_player_count(player_names: Sequence[str]) -> None:
    if not MIN_PLAYERS <= len(player_names) <= MAX_PLAYERS:
        raise ValueError("Azul supports 2-4 players")


def create_players(player_names: Sequence[str], board_factory=PlayerBoard) -> list[Player]:
    return [Player(id=f"player-{i}", name=name, board=board_factory()) for i, name in enumerate(player_names)]


class ClassicEngine:
    """Rules of the original Azul wall game."""

    variant = Variant.CLASSIC

    def initialize_game(
        self,
        player_names: Sequence[str],
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> GameState:
        check_player_count(player_names)
        rng = rng if rng is not None else random.Random(seed)
        players = create_players(player_names)
        state = GameState(
            players=players,
            factories=create_factories(len(players)),
            current_player=players[0].id,
            phase=GamePhase.DRAFTING,
            variant=Variant.CLASSIC,
            bag=shuffle(create_tiles(Variant.CLASSIC), rng),
            rng=rng,
        )
        return distribute_factory_tiles(state)

    def can_select_tiles(self, state: GameState, factory_id: int | None, color: TileColor) -> bool:
        return rules.can_select_tiles(state, factory_id, color)

    def can_place_tiles(self, state: GameState, target: int, tiles: Sequence[Tile]) -> bool:
        return rules.can_place_tiles(state, target, tiles)

    def must_place_in_floor_line(self, state: GameState, tiles: Sequence[Tile]) -> bool:
        return rules.must_place_in_floor_line(state, tiles)

    def legal_actions(self, state: GameState) -> list[Action]:
        return rules.legal_actions(state)

    def calculate_score(self, state: GameState, player_id: str | None = None) -> int:
        return scoring.calculate_score(state, player_id)

    def apply_move(self, state: GameState, move: Action) -> GameState:
        """Draft, place, advance the turn and resolve the round if drafting is over.

        Rejected moves return ``state`` itself so callers can detect the no-op
        by identity.
        """
        if not isinstance(move, Action):
            LOGGER.warning("classic engine cannot apply %r", move)
            return state
        if state.phase != GamePhase.DRAFTING:
            LOGGER.warning("move %r rejected in phase %s", move, state.phase.value)
            return state
        if state.get_current_player() is None:
            LOGGER.warning("current player %r not found; move ignored", state.current_player)
            return state
        if not rules.can_select_tiles(state, move.factory_id, move.color):
            LOGGER.warning("illegal selection %r", move)
            return state
        preview = [t for t in state.source_tiles(move.factory_id) if t.color == move.color]
        if not rules.can_place_tiles(state, move.pattern_line, preview):
            LOGGER.warning("illegal placement %r", move)
            return state

        new_state = state.clone()
        player = new_state.get_current_player()
        taken = self._take_tiles(new_state, move.factory_id, move.color)
        self.place_tiles(player.board, move.pattern_line, taken)
        new_state.current_player = new_state.next_player_id(player.id)
        if new_state.drafting_done():
            self.handle_round_end(new_state)
        return new_state

    def _take_tiles(self, state: GameState, factory_id: int | None, color: TileColor) -> list[Tile]:
        source = state.source_tiles(factory_id)
        taken = [t for t in source if t.color == color]
        remaining = [t for t in source if t.color != color]
        if factory_id is None:
            state.center = remaining
            if state.first_player_token is None:
                state.first_player_token = state.current_player
        else:
            state.get_factory(factory_id).tiles = []
            state.center.extend(remaining)
        return taken

    @staticmethod
    def place_tiles(board: PlayerBoard, pattern_line: int, tiles: list[Tile]) -> None:
        """Put tiles on a line up to its capacity; the surplus always lands on the floor."""
        if pattern_line == Action.FLOOR or not tiles:
            board.floor_line.extend(tiles)
            return
        line = board.pattern_lines[pattern_line]
        space = max(line.space_left, 0)
        to_line = tiles[:space]
        line.tiles.extend(to_line)
        if line.color is None and to_line:
            line.color = to_line[0].color
        board.floor_line.extend(tiles[space:])

    def handle_round_end(self, state: GameState) -> GameState:
        """Score the round in place and either end the game or deal the next round."""
        state.phase = GamePhase.TILING
        scoring.score_round(state)
        if any(all(space.filled for space in row) for p in state.players for row in p.board.wall):
            state.phase = GamePhase.GAME_END
            scoring.apply_end_game_bonuses(state)
            LOGGER.debug("game over after round %d", state.round_number)
            return state

        state.round_number += 1
        if state.first_player_token is not None:
            state.current_player = state.first_player_token
            state.first_player_token = None
        if not state.bag and state.discard_pile:
            refill_bag(state.bag, state.discard_pile, state.rng)
        distribute_factory_tiles(state)
        if state.drafting_done():
            # Nothing left to deal: the game cannot continue.
            state.phase = GamePhase.GAME_END
            scoring.apply_end_game_bonuses(state)
            LOGGER.debug("supply empty; game over after round %d", state.round_number - 1)
            return state
        state.phase = GamePhase.DRAFTING
        LOGGER.debug("round %d starts with %s", state.round_number, state.current_player)
        return state
