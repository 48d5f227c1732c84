"""Summer Pavilion rules: rotating wild color, cost-based flower placement."""

import logging
import random
from typing import Sequence

from . import pavilion_scoring
from .actions import DraftAction, PassAction, PavilionAction, PlaceAction
from .board import CENTRAL_FLOWER, FLOWER_COUNT, FLOWER_SIZE, PlayerBoard, default_flowers
from .classic import check_player_count, create_players
from .enums import PAVILION_COLORS, GamePhase, TileColor, Variant
from .pavilion_scoring import MIN_SCORE, flower_color, space_cost
from .state import GameState, create_factories, distribute_factory_tiles
from .tiles import Tile, create_tiles, draw_tiles, refill_bag, shuffle

LOGGER = logging.getLogger(__name__)

MAX_ROUNDS = 6
STARTING_SCORE = 5
MAX_SAVED_TILES = 4


def joker_color_for_round(round_number: int) -> TileColor:
    return PAVILION_COLORS[(round_number - 1) % len(PAVILION_COLORS)]


def is_wild(color: TileColor, joker_color: TileColor | None) -> bool:
    return color == TileColor.JOKER or color == joker_color


def pavilion_board() -> PlayerBoard:
    return PlayerBoard(pattern_lines=[], wall=[], flowers=default_flowers(), score=STARTING_SCORE)


def payment_for(pool: Sequence[Tile], color: TileColor, cost: int, joker_color: TileColor | None) -> list[Tile] | None:
    """Pick ``cost`` tiles paying for a ``color`` space, placed tile first.

    Matching tiles are spent before joker tiles, and joker tiles before tiles
    of the round's joker color. Returns None when the pool cannot pay.
    """
    matching = [t for t in pool if t.color == color]
    if not matching or color == TileColor.JOKER:
        return None
    jokers = [t for t in pool if t.color == TileColor.JOKER]
    joker_colored = [t for t in pool if t.color == joker_color and t.color != color]
    payment = (matching + jokers + joker_colored)[:cost]
    return payment if len(payment) == cost else None


def _is_space(target) -> bool:
    return (
        isinstance(target, tuple)
        and len(target) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in target)
    )


def _default_keep(pool: Sequence[Tile], joker_color: TileColor | None) -> list[Tile]:
    wild = [t for t in pool if is_wild(t.color, joker_color)]
    rest = [t for t in pool if not is_wild(t.color, joker_color)]
    return (wild + rest)[:MAX_SAVED_TILES]


class SummerPavilionEngine:
    """Rules of Azul: Summer Pavilion."""

    variant = Variant.SUMMER_PAVILION

    def initialize_game(
        self,
        player_names: Sequence[str],
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> GameState:
        check_player_count(player_names)
        rng = rng if rng is not None else random.Random(seed)
        players = create_players(player_names, board_factory=pavilion_board)
        state = GameState(
            players=players,
            factories=create_factories(len(players)),
            current_player=players[0].id,
            phase=GamePhase.DRAFTING,
            variant=Variant.SUMMER_PAVILION,
            bag=shuffle(create_tiles(Variant.SUMMER_PAVILION), rng),
            round_number=1,
            joker_color=joker_color_for_round(1),
            max_rounds=MAX_ROUNDS,
            start_player=players[0].id,
            rng=rng,
        )
        return distribute_factory_tiles(state)

    # Drafting

    def can_select_tiles(self, state: GameState, factory_id: int | None, color: TileColor) -> bool:
        if state.phase != GamePhase.DRAFTING:
            return False
        tiles = state.source_tiles(factory_id)
        if not tiles or not any(t.color == color for t in tiles):
            return False
        if is_wild(color, state.joker_color):
            return all(is_wild(t.color, state.joker_color) for t in tiles)
        return True

    def _draft(self, state: GameState, action: DraftAction) -> None:
        player = state.get_current_player()
        source = state.source_tiles(action.factory_id)
        if is_wild(action.color, state.joker_color):
            taken = [next(t for t in source if t.color == action.color)]
        else:
            taken = [t for t in source if t.color == action.color]
            wild = next((t for t in source if is_wild(t.color, state.joker_color)), None)
            if wild is not None:
                taken.append(wild)
        taken_ids = {t.id for t in taken}
        remaining = [t for t in source if t.id not in taken_ids]
        if action.factory_id is None:
            state.center = remaining
            if state.first_player_token is None:
                state.first_player_token = player.id
                player.board.score = max(MIN_SCORE, player.board.score - len(taken))
        else:
            state.get_factory(action.factory_id).tiles = []
            state.center.extend(remaining)
        player.board.collected_tiles.extend(taken)
        state.current_player = state.next_player_id(player.id)
        if state.drafting_done():
            self._start_placing(state)

    # Placing

    def can_place(self, state: GameState, action: PlaceAction) -> bool:
        player = self._placing_player(state)
        if player is None or not self._space_accepts(player.board, action.flower, action.position, action.color):
            return False
        pool = player.board.collected_tiles
        return payment_for(pool, action.color, space_cost(action.position), state.joker_color) is not None

    def can_place_tiles(self, state: GameState, target: tuple[int, int], tiles: Sequence[Tile]) -> bool:
        """Check an explicit payment of ``tiles`` for the space ``target``.

        The first tile is the one laid on the board and fixes the color; the
        others must match it or be wild.
        """
        player = self._placing_player(state)
        if player is None or not tiles or not _is_space(target):
            return False
        flower, position = target
        color = tiles[0].color
        if not self._space_accepts(player.board, flower, position, color):
            return False
        if len(tiles) != space_cost(position):
            return False
        pool_ids = {t.id for t in player.board.collected_tiles}
        ids = [t.id for t in tiles]
        if len(set(ids)) != len(ids) or not pool_ids.issuperset(ids):
            return False
        return all(t.color == color or is_wild(t.color, state.joker_color) for t in tiles[1:])

    def must_place_in_floor_line(self, state: GameState, tiles: Sequence[Tile] | None = None) -> bool:
        """True when the acting player cannot pay for any space and has to pass.

        ``tiles`` narrows the check to a candidate pool; by default the
        player's whole pool is used.
        """
        player = self._placing_player(state)
        if player is None:
            return False
        pool = player.board.collected_tiles if tiles is None else list(tiles)
        return not self._placements(state, player.board, pool)

    def _placing_player(self, state: GameState):
        if state.phase != GamePhase.TILING:
            return None
        player = state.get_current_player()
        if player is None or player.board.passed:
            return None
        return player

    @staticmethod
    def _space_accepts(board: PlayerBoard, flower: int, position: int, color: TileColor) -> bool:
        if not (0 <= flower < FLOWER_COUNT and 0 <= position < FLOWER_SIZE):
            return False
        if color == TileColor.JOKER or board.flowers[flower][position] is not None:
            return False
        if flower == CENTRAL_FLOWER:
            return color not in board.flowers[CENTRAL_FLOWER]
        return color == flower_color(flower)

    def _placements(self, state: GameState, board: PlayerBoard, pool: Sequence[Tile]) -> list[PlaceAction]:
        colors = list(dict.fromkeys(t.color for t in pool if t.color != TileColor.JOKER))
        actions = []
        for flower in range(FLOWER_COUNT):
            for position in range(FLOWER_SIZE):
                for color in colors:
                    if not self._space_accepts(board, flower, position, color):
                        continue
                    if payment_for(pool, color, space_cost(position), state.joker_color) is not None:
                        actions.append(PlaceAction(flower=flower, position=position, color=color))
        return actions

    def _place(self, state: GameState, action: PlaceAction) -> None:
        player = state.get_current_player()
        board = player.board
        payment = payment_for(board.collected_tiles, action.color, space_cost(action.position), state.joker_color)
        paid_ids = {t.id for t in payment}
        board.collected_tiles = [t for t in board.collected_tiles if t.id not in paid_ids]
        board.flowers[action.flower][action.position] = action.color
        # The first tile sits on the board; the rest of the payment is spent.
        state.discard_pile.extend(payment[1:])
        gained = pavilion_scoring.score_flower_placement(board.flowers, action.flower, action.position)
        board.score += gained
        LOGGER.debug(
            "player %s placed %s on %d/%d for %d",
            player.id,
            action.color.value,
            action.flower,
            action.position,
            gained,
        )
        bonus = pavilion_scoring.bonus_tiles_for_placement(board.flowers, action.flower, action.position)
        if bonus:
            drawn = draw_tiles(state.bag, bonus, state.rng)
            board.collected_tiles.extend(drawn)
            LOGGER.debug("player %s drew %d of %d bonus tiles", player.id, len(drawn), bonus)
        self._advance_placing(state)

    def _pass(self, state: GameState, action: PassAction) -> bool:
        player = state.get_current_player()
        board = player.board
        pool = board.collected_tiles
        if action.keep is None:
            kept = _default_keep(pool, state.joker_color)
        else:
            by_id = {t.id: t for t in pool}
            if len(action.keep) > MAX_SAVED_TILES or len(set(action.keep)) != len(action.keep):
                return False
            if not all(tile_id in by_id for tile_id in action.keep):
                return False
            kept = [by_id[tile_id] for tile_id in action.keep]
        kept_ids = {t.id for t in kept}
        discarded = [t for t in pool if t.id not in kept_ids]
        if discarded:
            board.score = max(MIN_SCORE, board.score - len(discarded))
        state.discard_pile.extend(discarded)
        board.saved_tiles = kept
        board.collected_tiles = []
        board.passed = True
        self._advance_placing(state)
        return True

    def _start_placing(self, state: GameState) -> None:
        state.phase = GamePhase.TILING
        opener = state.first_player_token or state.start_player or state.players[0].id
        state.current_player = opener
        self._auto_pass(state)
        if all(p.board.passed for p in state.players):
            self.handle_round_end(state)
            return
        if state.get_current_player().board.passed:
            state.current_player = self._next_active(state, opener)

    @staticmethod
    def _auto_pass(state: GameState) -> None:
        for player in state.players:
            if not player.board.passed and not player.board.collected_tiles:
                player.board.passed = True

    @staticmethod
    def _next_active(state: GameState, player_id: str) -> str:
        candidate = player_id
        for _ in range(len(state.players)):
            candidate = state.next_player_id(candidate)
            if not state.get_player(candidate).board.passed:
                return candidate
        return player_id

    def _advance_placing(self, state: GameState) -> None:
        self._auto_pass(state)
        if all(p.board.passed for p in state.players):
            self.handle_round_end(state)
            return
        state.current_player = self._next_active(state, state.current_player)

    def handle_round_end(self, state: GameState) -> GameState:
        for player in state.players:
            state.round_log.append(
                {"round": state.round_number, "player": player.id, "score_after": player.board.score}
            )
        if state.round_number >= (state.max_rounds or MAX_ROUNDS):
            state.phase = GamePhase.GAME_END
            for player in state.players:
                delta = pavilion_scoring.apply_final_scoring(player.board)
                LOGGER.debug("player %s final scoring %+d", player.id, delta)
            return state

        state.round_number += 1
        state.joker_color = joker_color_for_round(state.round_number)
        if state.first_player_token is not None:
            state.start_player = state.first_player_token
            state.first_player_token = None
        state.current_player = state.start_player or state.players[0].id
        for player in state.players:
            board = player.board
            board.collected_tiles = board.saved_tiles
            board.saved_tiles = []
            board.passed = False
        if not state.bag and state.discard_pile:
            refill_bag(state.bag, state.discard_pile, state.rng)
        distribute_factory_tiles(state)
        state.phase = GamePhase.DRAFTING
        LOGGER.debug("round %d, joker color %s", state.round_number, state.joker_color.value)
        if state.drafting_done():
            self._start_placing(state)
        return state

    # Shared interface

    def legal_actions(self, state: GameState) -> list[PavilionAction]:
        if state.phase == GamePhase.DRAFTING:
            sources = [(f.id, f.tiles) for f in state.factories] + [(None, state.center)]
            return [
                DraftAction(factory_id=factory_id, color=color)
                for factory_id, tiles in sources
                for color in dict.fromkeys(t.color for t in tiles)
                if self.can_select_tiles(state, factory_id, color)
            ]
        player = self._placing_player(state)
        if player is None:
            return []
        return self._placements(state, player.board, player.board.collected_tiles) + [PassAction()]

    def calculate_score(self, state: GameState, player_id: str | None = None) -> int:
        player = state.get_player(state.current_player if player_id is None else player_id)
        return 0 if player is None else player.board.score

    def apply_move(self, state: GameState, move: PavilionAction) -> GameState:
        """Apply a draft, placement or pass; rejected moves return ``state`` itself."""
        if state.is_terminal() or state.get_current_player() is None:
            LOGGER.warning("move %r ignored (phase %s, player %r)", move, state.phase.value, state.current_player)
            return state
        if isinstance(move, DraftAction):
            if not self.can_select_tiles(state, move.factory_id, move.color):
                LOGGER.warning("illegal draft %r", move)
                return state
            new_state = state.clone()
            self._draft(new_state, move)
            return new_state
        if isinstance(move, PlaceAction):
            if not self.can_place(state, move):
                LOGGER.warning("illegal placement %r", move)
                return state
            new_state = state.clone()
            self._place(new_state, move)
            return new_state
        if isinstance(move, PassAction):
            if self._placing_player(state) is None:
                LOGGER.warning("pass rejected in phase %s", state.phase.value)
                return state
            new_state = state.clone()
            if not self._pass(new_state, move):
                LOGGER.warning("invalid tiles to keep %r", move.keep)
                return state
            return new_state
        LOGGER.warning("summer pavilion engine cannot apply %r", move)
        return state
