from dataclasses import dataclass, field

from .enums import CLASSIC_COLORS, TileColor
from .tiles import Tile

BOARD_SIZE = 5
PATTERN_LINE_SIZES = (1, 2, 3, 4, 5)

WALL_PATTERN = [
    [CLASSIC_COLORS[(col - row) % BOARD_SIZE] for col in range(BOARD_SIZE)] for row in range(BOARD_SIZE)
]
WALL_COLOR_TO_COL = [{color: col for col, color in enumerate(row)} for row in WALL_PATTERN]

FLOWER_COUNT = 7
CENTRAL_FLOWER = 6
FLOWER_SIZE = 6


@dataclass
class PatternLine:
    capacity: int
    tiles: list[Tile] = field(default_factory=list)
    color: TileColor | None = None

    @property
    def is_full(self) -> bool:
        return len(self.tiles) >= self.capacity

    @property
    def space_left(self) -> int:
        return self.capacity - len(self.tiles)

    def clear(self) -> list[Tile]:
        tiles = self.tiles
        self.tiles = []
        self.color = None
        return tiles

    def clone(self) -> "PatternLine":
        return PatternLine(capacity=self.capacity, tiles=list(self.tiles), color=self.color)


@dataclass
class WallSpace:
    row: int
    column: int
    color: TileColor
    filled: bool = False


def default_pattern_lines() -> list[PatternLine]:
    return [PatternLine(capacity=size) for size in PATTERN_LINE_SIZES]


def default_wall() -> list[list[WallSpace]]:
    return [
        [WallSpace(row=r, column=c, color=WALL_PATTERN[r][c]) for c in range(BOARD_SIZE)]
        for r in range(BOARD_SIZE)
    ]


def default_flowers() -> list[list[TileColor | None]]:
    return [[None] * FLOWER_SIZE for _ in range(FLOWER_COUNT)]


@dataclass
class PlayerBoard:
    """A player's board, score, and penalties.

    Classic games use the pattern lines, wall and floor line. Summer Pavilion
    boards leave those empty and track the drafted pool (``collected_tiles``),
    the colors placed on each flower, the tiles retained for the next round
    and whether the player has passed this placing phase.
    """

    pattern_lines: list[PatternLine] = field(default_factory=default_pattern_lines)
    wall: list[list[WallSpace]] = field(default_factory=default_wall)
    floor_line: list[Tile] = field(default_factory=list)
    score: int = 0
    collected_tiles: list[Tile] = field(default_factory=list)
    flowers: list[list[TileColor | None]] = field(default_factory=list)
    saved_tiles: list[Tile] = field(default_factory=list)
    passed: bool = False

    def wall_filled(self, row: int, col: int) -> bool:
        return self.wall[row][col].filled

    def wall_has_color(self, row: int, color: TileColor) -> bool:
        return any(space.filled and space.color == color for space in self.wall[row])

    def clone(self) -> "PlayerBoard":
        return PlayerBoard(
            pattern_lines=[line.clone() for line in self.pattern_lines],
            wall=[[WallSpace(s.row, s.column, s.color, s.filled) for s in row] for row in self.wall],
            floor_line=list(self.floor_line),
            score=self.score,
            collected_tiles=list(self.collected_tiles),
            flowers=[list(flower) for flower in self.flowers],
            saved_tiles=list(self.saved_tiles),
            passed=self.passed,
        )


@dataclass
class Player:
    id: str
    name: str
    board: PlayerBoard = field(default_factory=PlayerBoard)

    def clone(self) -> "Player":
        return Player(id=self.id, name=self.name, board=self.board.clone())
