"""Tile set construction and bag handling."""

import logging
import random
from dataclasses import dataclass
from typing import Sequence, TypeVar

from .enums import CLASSIC_COLORS, PAVILION_COLORS, TileColor, Variant

LOGGER = logging.getLogger(__name__)

TILES_PER_COLOR = {Variant.CLASSIC: 20, Variant.SUMMER_PAVILION: 22}
JOKER_TILES = 4
TILES_PER_FACTORY = 4

T = TypeVar("T")


@dataclass(frozen=True)
class Tile:
    id: str
    color: TileColor


def create_tiles(variant: Variant = Variant.CLASSIC) -> list[Tile]:
    """Build the unshuffled tile set: 100 classic tiles, 136 for Summer Pavilion."""
    colors = CLASSIC_COLORS if variant == Variant.CLASSIC else PAVILION_COLORS
    per_color = TILES_PER_COLOR[variant]
    tiles = [Tile(f"{color.value}-{i}", color) for color in colors for i in range(per_color)]
    if variant == Variant.SUMMER_PAVILION:
        tiles.extend(Tile(f"{TileColor.JOKER.value}-{i}", TileColor.JOKER) for i in range(JOKER_TILES))
    return tiles


def shuffle(seq: Sequence[T], rng: random.Random) -> list[T]:
    """Fisher-Yates over a copy of ``seq``."""
    result = list(seq)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def refill_bag(bag: list[Tile], discard: list[Tile], rng: random.Random) -> None:
    """Move the discard pile into the bag and reshuffle it, in place.

    Engines call this between rounds, only once the bag has run dry.
    """
    if not discard:
        return
    LOGGER.debug("refilling bag with %d discarded tiles", len(discard))
    bag[:] = shuffle(bag + discard, rng)
    discard.clear()


def draw_tiles(bag: list[Tile], count: int, rng: random.Random) -> list[Tile]:
    """Draw up to ``count`` tiles at random from ``bag``; a dry bag yields fewer."""
    return [bag.pop(rng.randrange(len(bag))) for _ in range(min(count, len(bag)))]


def count_by_color(tiles: Sequence[Tile]) -> dict[TileColor, int]:
    counts: dict[TileColor, int] = {}
    for tile in tiles:
        counts[tile.color] = counts.get(tile.color, 0) + 1
    return counts
