"""Summer Pavilion board topology and scoring.

The board holds seven six-space flowers. Flowers 0-5 surround the central
flower 6. Spaces in a flower form a ring, and a few spaces touch a space on a
neighbouring flower:

* outer flower ``f`` position 0 touches central position ``f``;
* outer flower ``f`` position 1 touches position 5 of outer flower ``f + 1``.

Decorations between spaces reward surrounding them with extra tiles: the
statue between outer flowers ``f`` and ``f + 1`` (their positions 4-5 and
0-1) and the two windows on each outer flower (positions 2-3 and 4-5).
"""

from .board import CENTRAL_FLOWER, FLOWER_COUNT, FLOWER_SIZE, PlayerBoard
from .enums import PAVILION_COLORS, TileColor

OUTER_FLOWERS = range(CENTRAL_FLOWER)
MIN_SCORE = 1
ROSETTE_BONUS = 5
PILLAR_BONUS = 4
FLOWER_BONUS = {
    CENTRAL_FLOWER: 12,
    **{f: bonus for f, bonus in zip(OUTER_FLOWERS, (14, 15, 16, 17, 18, 20))},
}
COST_TIER_BONUS = {1: 4, 2: 8, 3: 12, 4: 16}
RETAINED_TILE_PENALTY = 1
STATUE_BONUS_TILES = 2
WINDOW_BONUS_TILES = 3

# A statue stands between outer flowers f and f + 1; a window spans two spaces of one outer flower.
STATUES = tuple(
    ((f, 4), (f, 5), ((f + 1) % CENTRAL_FLOWER, 0), ((f + 1) % CENTRAL_FLOWER, 1)) for f in OUTER_FLOWERS
)
WINDOWS = tuple(((f, p), (f, p + 1)) for f in OUTER_FLOWERS for p in (2, 4))

Flowers = list[list[TileColor | None]]


def flower_color(flower: int) -> TileColor | None:
    """Color accepted by an outer flower; None for the central flower."""
    if flower == CENTRAL_FLOWER:
        return None
    return PAVILION_COLORS[flower]


def space_cost(position: int) -> int:
    return position + 1


def cross_neighbors(flower: int, position: int) -> list[tuple[int, int]]:
    if flower == CENTRAL_FLOWER:
        return [(position, 0)]
    neighbors = []
    if position == 0:
        neighbors.append((CENTRAL_FLOWER, flower))
    elif position == 1:
        neighbors.append(((flower + 1) % CENTRAL_FLOWER, FLOWER_SIZE - 1))
    elif position == FLOWER_SIZE - 1:
        neighbors.append(((flower - 1) % CENTRAL_FLOWER, 1))
    return neighbors


def flower_run(flowers: Flowers, flower: int, position: int) -> int:
    """Length of the filled ring segment through ``position`` (counted as filled)."""
    ring = flowers[flower]
    others = [ring[p] is not None for p in range(FLOWER_SIZE) if p != position]
    if all(others):
        return FLOWER_SIZE
    length = 1
    step = 1
    while step < FLOWER_SIZE and ring[(position - step) % FLOWER_SIZE] is not None:
        length += 1
        step += 1
    step = 1
    while step < FLOWER_SIZE and ring[(position + step) % FLOWER_SIZE] is not None:
        length += 1
        step += 1
    return length


def flower_complete(flowers: Flowers, flower: int) -> bool:
    return all(color is not None for color in flowers[flower])


def pillar_complete(flowers: Flowers, position: int) -> bool:
    return all(flowers[f][position] is not None for f in OUTER_FLOWERS)


def cost_tier_complete(flowers: Flowers, cost: int) -> bool:
    position = cost - 1
    return all(flowers[f][position] is not None for f in range(FLOWER_COUNT))


def _surrounded(flowers: Flowers, spaces) -> bool:
    return all(flowers[f][p] is not None for f, p in spaces)


def bonus_tiles_for_placement(flowers: Flowers, flower: int, position: int) -> int:
    """Bonus tiles earned by the tile just placed at ``(flower, position)``.

    Each statue or window pays out once, when its last empty space is filled.
    """
    space = (flower, position)
    tiles = sum(STATUE_BONUS_TILES for s in STATUES if space in s and _surrounded(flowers, s))
    tiles += sum(WINDOW_BONUS_TILES for w in WINDOWS if space in w and _surrounded(flowers, w))
    return tiles


def score_flower_placement(flowers: Flowers, flower: int, position: int) -> int:
    """Points for a tile just placed at ``(flower, position)``.

    The flower's own run scores, every filled neighbour on another flower adds
    that flower's run, completing the flower adds the rosette bonus and filling
    the position on all six outer flowers adds the pillar bonus.
    """
    score = flower_run(flowers, flower, position)
    for other_flower, other_pos in cross_neighbors(flower, position):
        if flowers[other_flower][other_pos] is not None:
            score += flower_run(flowers, other_flower, other_pos)
    if flower_complete(flowers, flower):
        score += ROSETTE_BONUS
    if flower != CENTRAL_FLOWER and pillar_complete(flowers, position):
        score += PILLAR_BONUS
    return score


def final_bonus(board: PlayerBoard) -> int:
    flowers = board.flowers
    bonus = sum(FLOWER_BONUS[f] for f in range(FLOWER_COUNT) if flower_complete(flowers, f))
    bonus += sum(value for cost, value in COST_TIER_BONUS.items() if cost_tier_complete(flowers, cost))
    return bonus


def apply_final_scoring(board: PlayerBoard) -> int:
    """Add completion bonuses, charge retained tiles and return the net change."""
    before = board.score
    penalty = RETAINED_TILE_PENALTY * len(board.saved_tiles)
    board.score = max(board.score + final_bonus(board) - penalty, MIN_SCORE)
    return board.score - before
