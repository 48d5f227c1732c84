import random
from typing import Any, Protocol, Sequence

from .classic import ClassicEngine, check_player_count
from .enums import TileColor, Variant
from .pavilion import SummerPavilionEngine
from .state import GameState
from .tiles import Tile


class RulesEngine(Protocol):
    variant: Variant

    def initialize_game(
        self,
        player_names: Sequence[str],
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> GameState: ...

    def can_select_tiles(self, state: GameState, factory_id: int | None, color: TileColor) -> bool: ...

    def can_place_tiles(self, state: GameState, target: Any, tiles: Sequence[Tile]) -> bool: ...

    def must_place_in_floor_line(self, state: GameState, tiles: Sequence[Tile]) -> bool: ...

    def legal_actions(self, state: GameState) -> list: ...

    def apply_move(self, state: GameState, move: Any) -> GameState: ...

    def calculate_score(self, state: GameState, player_id: str | None = None) -> int: ...


ENGINES: dict[Variant, RulesEngine] = {
    Variant.CLASSIC: ClassicEngine(),
    Variant.SUMMER_PAVILION: SummerPavilionEngine(),
}


def get_engine(variant: Variant | str) -> RulesEngine:
    try:
        return ENGINES[Variant(variant)]
    except ValueError:
        raise ValueError(f"unknown variant: {variant}") from None


def initialize_game(
    player_names: Sequence[str],
    variant: Variant | str = Variant.CLASSIC,
    *,
    seed: int | None = None,
) -> GameState:
    return get_engine(variant).initialize_game(player_names, seed=seed)


def can_select_tiles(state: GameState, factory_id: int | None, color: TileColor) -> bool:
    return get_engine(state.variant).can_select_tiles(state, factory_id, color)


def can_place_tiles(state: GameState, target: Any, tiles: Sequence[Tile]) -> bool:
    return get_engine(state.variant).can_place_tiles(state, target, tiles)


def must_place_in_floor_line(state: GameState, tiles: Sequence[Tile]) -> bool:
    return get_engine(state.variant).must_place_in_floor_line(state, tiles)


def legal_actions(state: GameState) -> list:
    return get_engine(state.variant).legal_actions(state)


def apply_move(state: GameState, move: Any) -> GameState:
    return get_engine(state.variant).apply_move(state, move)


def calculate_score(state: GameState, player_id: str | None = None) -> int:
    return get_engine(state.variant).calculate_score(state, player_id)


class GameEngine:
    """Holds the live state of one game and steps it move by move."""

    def __init__(
        self,
        player_names: Sequence[str] = ("Player 1", "Player 2"),
        *,
        variant: Variant | str = Variant.CLASSIC,
        seed: int | None = None,
    ) -> None:
        check_player_count(player_names)
        self.rules = get_engine(variant)
        self.player_names = list(player_names)
        self.rng = random.Random(seed)
        self.state: GameState | None = None

    def reset(self) -> GameState:
        self.state = self.rules.initialize_game(self.player_names, rng=self.rng)
        return self.state

    def legal_actions(self) -> list:
        if self.state is None:
            raise RuntimeError("engine not initialized; call reset() first")
        return self.rules.legal_actions(self.state)

    def step(self, action: Any) -> GameState:
        if self.state is None:
            raise RuntimeError("engine not initialized; call reset() first")
        self.state = self.rules.apply_move(self.state, action)
        return self.state
