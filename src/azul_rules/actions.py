from dataclasses import dataclass

from .enums import TileColor


@dataclass(frozen=True)
class Action:
    """Classic turn: draft one color from a source and place it on a line."""

    factory_id: int | None  # None for center
    color: TileColor
    pattern_line: int  # 0-4 for pattern lines, -1 for floor

    FLOOR = -1
    CENTER = None


@dataclass(frozen=True)
class DraftAction:
    factory_id: int | None
    color: TileColor


@dataclass(frozen=True)
class PlaceAction:
    flower: int  # 0-5 outer flowers, 6 for the central flower
    position: int  # 0-5, costs position + 1
    color: TileColor


@dataclass(frozen=True)
class PassAction:
    keep: tuple[str, ...] | None = None  # tile ids to retain; None keeps the first four


PavilionAction = DraftAction | PlaceAction | PassAction
