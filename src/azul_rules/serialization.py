import random

from .actions import Action, DraftAction, PassAction, PlaceAction
from .board import WALL_PATTERN, PatternLine, Player, PlayerBoard, WallSpace
from .enums import GamePhase, TileColor, Variant
from .state import Factory, GameState
from .tiles import Tile

# 624 generator words plus the index into them.
MT_STATE_WORDS = 625


def tile_to_dict(tile: Tile) -> dict:
    return {"id": tile.id, "color": tile.color.value}


def tile_from_dict(data: dict) -> Tile:
    return Tile(id=str(data["id"]), color=TileColor(data["color"]))


def rng_to_dict(rng: random.Random) -> dict:
    """Mersenne Twister state as JSON-safe lists, enough to replay the same draws."""
    version, words, gauss_next = rng.getstate()
    return {"version": version, "words": list(words), "gauss_next": gauss_next}


def rng_from_dict(data: dict) -> random.Random:
    words = data.get("words")
    if not isinstance(words, list) or len(words) != MT_STATE_WORDS:
        raise ValueError(f"rng_state needs a list of {MT_STATE_WORDS} state words")
    rng = random.Random()
    rng.setstate((int(data["version"]), tuple(int(w) for w in words), data.get("gauss_next")))
    return rng


def action_to_dict(action) -> dict:
    if isinstance(action, Action):
        return {
            "type": "classic",
            "factory_id": action.factory_id,
            "color": action.color.value,
            "pattern_line": action.pattern_line,
        }
    if isinstance(action, DraftAction):
        return {"type": "draft", "factory_id": action.factory_id, "color": action.color.value}
    if isinstance(action, PlaceAction):
        return {
            "type": "place",
            "flower": action.flower,
            "position": action.position,
            "color": action.color.value,
        }
    if isinstance(action, PassAction):
        return {"type": "pass", "keep": None if action.keep is None else list(action.keep)}
    raise TypeError(f"unsupported action: {action!r}")


def action_from_dict(data: dict):
    kind = data["type"]
    factory_id = data.get("factory_id")
    factory_id = None if factory_id is None else int(factory_id)
    if kind == "classic":
        return Action(
            factory_id=factory_id,
            color=TileColor(data["color"]),
            pattern_line=int(data["pattern_line"]),
        )
    if kind == "draft":
        return DraftAction(factory_id=factory_id, color=TileColor(data["color"]))
    if kind == "place":
        return PlaceAction(
            flower=int(data["flower"]),
            position=int(data["position"]),
            color=TileColor(data["color"]),
        )
    if kind == "pass":
        keep = data.get("keep")
        return PassAction(keep=None if keep is None else tuple(str(k) for k in keep))
    raise ValueError(f"unknown action type: {kind}")


def state_to_dict(
    state: GameState,
    *,
    include_supply_contents: bool = False,
    include_rng: bool = False,
    include_round_log: bool = False,
) -> dict:
    def tiles(values) -> list[dict]:
        return [tile_to_dict(t) for t in values]

    def board(b: PlayerBoard) -> dict:
        return {
            "score": b.score,
            "pattern_lines": [
                {
                    "capacity": line.capacity,
                    "tiles": tiles(line.tiles),
                    "color": None if line.color is None else line.color.value,
                }
                for line in b.pattern_lines
            ],
            "wall": [[space.filled for space in row] for row in b.wall],
            "floor_line": tiles(b.floor_line),
            "collected_tiles": tiles(b.collected_tiles),
            "flowers": [[None if c is None else c.value for c in flower] for flower in b.flowers],
            "saved_tiles": tiles(b.saved_tiles),
            "passed": b.passed,
        }

    supply = {
        "factories": [{"id": f.id, "tiles": tiles(f.tiles)} for f in state.factories],
        "center": tiles(state.center),
        "bag_count": len(state.bag),
        "discard_count": len(state.discard_pile),
    }
    if include_supply_contents:
        supply["bag"] = tiles(state.bag)
        supply["discard"] = tiles(state.discard_pile)

    data = {
        "variant": state.variant.value,
        "round": state.round_number,
        "phase": state.phase.value,
        "current_player": state.current_player,
        "first_player_token": state.first_player_token,
        "joker_color": None if state.joker_color is None else state.joker_color.value,
        "max_rounds": state.max_rounds,
        "start_player": state.start_player,
        "supply": supply,
        "players": [{"id": p.id, "name": p.name, "board": board(p.board)} for p in state.players],
    }
    if include_round_log:
        data["round_log"] = [dict(entry) for entry in state.round_log]
    if include_rng:
        data["rng_state"] = rng_to_dict(state.rng)
    return data


def state_from_dict(snapshot: dict, *, require_supply_contents: bool = True) -> GameState:
    def to_tiles(values) -> list[Tile]:
        return [tile_from_dict(v) for v in values]

    def to_color(value) -> TileColor | None:
        return None if value is None else TileColor(value)

    supply_data = snapshot["supply"]
    if require_supply_contents and ("bag" not in supply_data or "discard" not in supply_data):
        raise ValueError("snapshot missing supply contents")

    players = []
    for pdata in snapshot["players"]:
        bdata = pdata["board"]
        wall = [
            [
                WallSpace(row=r, column=c, color=WALL_PATTERN[r][c], filled=bool(filled))
                for c, filled in enumerate(row)
            ]
            for r, row in enumerate(bdata["wall"])
        ]
        board = PlayerBoard(
            pattern_lines=[
                PatternLine(
                    capacity=int(line["capacity"]),
                    tiles=to_tiles(line["tiles"]),
                    color=to_color(line["color"]),
                )
                for line in bdata["pattern_lines"]
            ],
            wall=wall,
            floor_line=to_tiles(bdata["floor_line"]),
            score=int(bdata["score"]),
            collected_tiles=to_tiles(bdata.get("collected_tiles", [])),
            flowers=[[to_color(c) for c in flower] for flower in bdata.get("flowers", [])],
            saved_tiles=to_tiles(bdata.get("saved_tiles", [])),
            passed=bool(bdata.get("passed", False)),
        )
        players.append(Player(id=str(pdata["id"]), name=str(pdata["name"]), board=board))

    rng_state = snapshot.get("rng_state")
    rng = rng_from_dict(rng_state) if rng_state else random.Random()

    max_rounds = snapshot.get("max_rounds")
    return GameState(
        players=players,
        factories=[Factory(id=int(f["id"]), tiles=to_tiles(f["tiles"])) for f in supply_data["factories"]],
        current_player=str(snapshot["current_player"]),
        phase=GamePhase(snapshot["phase"]),
        variant=Variant(snapshot.get("variant", Variant.CLASSIC.value)),
        center=to_tiles(supply_data["center"]),
        bag=to_tiles(supply_data.get("bag", [])),
        discard_pile=to_tiles(supply_data.get("discard", [])),
        first_player_token=snapshot.get("first_player_token"),
        round_number=int(snapshot["round"]),
        joker_color=to_color(snapshot.get("joker_color")),
        max_rounds=None if max_rounds is None else int(max_rounds),
        start_player=snapshot.get("start_player"),
        rng=rng,
        round_log=list(snapshot.get("round_log", [])),
    )
