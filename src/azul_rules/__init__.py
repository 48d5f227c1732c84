from .actions import Action, DraftAction, PassAction, PlaceAction
from .agents import Agent, EvaluationCache, FirstLegalAgent, GreedyAgent, RandomAgent
from .board import PATTERN_LINE_SIZES, WALL_PATTERN, PatternLine, Player, PlayerBoard, WallSpace
from .classic import ClassicEngine
from .engines import (
    ENGINES,
    GameEngine,
    RulesEngine,
    apply_move,
    calculate_score,
    can_place_tiles,
    can_select_tiles,
    get_engine,
    initialize_game,
    legal_actions,
    must_place_in_floor_line,
)
from .enums import GamePhase, TileColor, Variant
from .pavilion import SummerPavilionEngine
from .simulation import GameResult, play_game, play_series
from .state import Factory, GameState
from .tiles import Tile

__all__ = [
    "Action",
    "Agent",
    "ClassicEngine",
    "DraftAction",
    "ENGINES",
    "EvaluationCache",
    "Factory",
    "FirstLegalAgent",
    "GameEngine",
    "GamePhase",
    "GameResult",
    "GameState",
    "GreedyAgent",
    "PATTERN_LINE_SIZES",
    "PassAction",
    "PatternLine",
    "PlaceAction",
    "Player",
    "PlayerBoard",
    "RandomAgent",
    "RulesEngine",
    "SummerPavilionEngine",
    "Tile",
    "TileColor",
    "Variant",
    "WALL_PATTERN",
    "WallSpace",
    "apply_move",
    "calculate_score",
    "can_place_tiles",
    "can_select_tiles",
    "get_engine",
    "initialize_game",
    "legal_actions",
    "must_place_in_floor_line",
    "play_game",
    "play_series",
]
