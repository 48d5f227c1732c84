from enum import Enum


class TileColor(str, Enum):
    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"
    BLACK = "black"
    TEAL = "teal"
    GREEN = "green"
    JOKER = "joker"


class GamePhase(str, Enum):
    DRAFTING = "drafting"
    TILING = "tiling"
    SCORING = "scoring"
    GAME_END = "game_end"


class Variant(str, Enum):
    CLASSIC = "classic"
    SUMMER_PAVILION = "summer_pavilion"


CLASSIC_COLORS = (
    TileColor.BLUE,
    TileColor.YELLOW,
    TileColor.RED,
    TileColor.BLACK,
    TileColor.TEAL,
)
PAVILION_COLORS = CLASSIC_COLORS + (TileColor.GREEN,)
