import logging
import random
from dataclasses import dataclass, field

from .board import Player
from .enums import GamePhase, TileColor, Variant
from .tiles import TILES_PER_FACTORY, Tile, draw_tiles

LOGGER = logging.getLogger(__name__)


@dataclass
class Factory:
    id: int
    tiles: list[Tile] = field(default_factory=list)

    def clone(self) -> "Factory":
        return Factory(id=self.id, tiles=list(self.tiles))


@dataclass
class GameState:
    players: list[Player]
    factories: list[Factory]
    current_player: str
    phase: GamePhase
    variant: Variant = Variant.CLASSIC
    center: list[Tile] = field(default_factory=list)
    bag: list[Tile] = field(default_factory=list)
    discard_pile: list[Tile] = field(default_factory=list)
    first_player_token: str | None = None
    round_number: int = 1
    joker_color: TileColor | None = None
    max_rounds: int | None = None
    start_player: str | None = None
    rng: random.Random = field(default_factory=random.Random, repr=False)
    round_log: list[dict[str, int | str]] = field(default_factory=list)

    def clone(self) -> "GameState":
        clone_rng = random.Random()
        clone_rng.setstate(self.rng.getstate())
        return GameState(
            players=[p.clone() for p in self.players],
            factories=[f.clone() for f in self.factories],
            current_player=self.current_player,
            phase=self.phase,
            variant=self.variant,
            center=list(self.center),
            bag=list(self.bag),
            discard_pile=list(self.discard_pile),
            first_player_token=self.first_player_token,
            round_number=self.round_number,
            joker_color=self.joker_color,
            max_rounds=self.max_rounds,
            start_player=self.start_player,
            rng=clone_rng,
            round_log=[dict(entry) for entry in self.round_log],
        )

    def is_terminal(self) -> bool:
        return self.phase == GamePhase.GAME_END

    def player_index(self, player_id: str | None) -> int | None:
        for idx, player in enumerate(self.players):
            if player.id == player_id:
                return idx
        return None

    def get_player(self, player_id: str | None) -> Player | None:
        idx = self.player_index(player_id)
        return None if idx is None else self.players[idx]

    def get_current_player(self) -> Player | None:
        return self.get_player(self.current_player)

    def next_player_id(self, player_id: str) -> str:
        idx = self.player_index(player_id)
        if idx is None:
            return player_id
        return self.players[(idx + 1) % len(self.players)].id

    def get_factory(self, factory_id: int) -> Factory | None:
        for factory in self.factories:
            if factory.id == factory_id:
                return factory
        return None

    def source_tiles(self, factory_id: int | None) -> list[Tile] | None:
        if factory_id is None:
            return self.center
        factory = self.get_factory(factory_id)
        return None if factory is None else factory.tiles

    def drafting_done(self) -> bool:
        return all(not f.tiles for f in self.factories) and not self.center

    def all_tiles(self) -> list[Tile]:
        """Every tile object the state still tracks, wherever it sits."""
        tiles = list(self.bag) + list(self.discard_pile) + list(self.center)
        for factory in self.factories:
            tiles.extend(factory.tiles)
        for player in self.players:
            board = player.board
            for line in board.pattern_lines:
                tiles.extend(line.tiles)
            tiles.extend(board.floor_line)
            tiles.extend(board.collected_tiles)
            tiles.extend(board.saved_tiles)
        return tiles

    def tile_count(self) -> int:
        """Tiles in play including those fixed on walls and flowers."""
        placed = 0
        for player in self.players:
            placed += sum(1 for row in player.board.wall for space in row if space.filled)
            placed += sum(1 for flower in player.board.flowers for color in flower if color is not None)
        return len(self.all_tiles()) + placed


def create_factories(player_count: int) -> list[Factory]:
    return [Factory(id=i) for i in range(2 * player_count + 1)]


def distribute_factory_tiles(state: GameState) -> GameState:
    """Fill every factory from the bag in place.

    The discard pile is not touched here: once the bag runs dry the remaining
    factories stay short until the next round refills the bag.
    """
    for factory in state.factories:
        factory.tiles = draw_tiles(state.bag, TILES_PER_FACTORY, state.rng)
    short = [f.id for f in state.factories if len(f.tiles) < TILES_PER_FACTORY]
    if short:
        LOGGER.debug("bag empty; factories %s under-filled", short)
    return state
