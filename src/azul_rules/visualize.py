import math

import matplotlib.pyplot as plt
from matplotlib import patches

from .board import CENTRAL_FLOWER, WALL_PATTERN
from .enums import TileColor, Variant
from .pavilion_scoring import flower_color
from .state import GameState

COLOR_MAP = {
    TileColor.BLUE: "#4A90E2",
    TileColor.YELLOW: "#F5D547",
    TileColor.RED: "#D64045",
    TileColor.BLACK: "#2C2C2C",
    TileColor.TEAL: "#3FB5A8",
    TileColor.GREEN: "#5DAA4B",
    TileColor.JOKER: "#B388FF",
}


def plot_player_board(ax: plt.Axes, state: GameState, player_idx: int) -> None:
    player = state.players[player_idx]
    board = player.board
    ax.set_title(f"{player.name} (score {board.score})")
    ax.set_xlim(0, 11)
    ax.set_ylim(0, 7)
    ax.invert_yaxis()
    ax.axis("off")

    for r, line in enumerate(board.pattern_lines):
        for c in range(line.capacity):
            x = 4 - c
            color = COLOR_MAP[line.color] if c < len(line.tiles) else "#FFFFFF"
            ax.add_patch(patches.Rectangle((x, r), 0.9, 0.9, linewidth=1, edgecolor="gray", facecolor=color))

    for r, row in enumerate(board.wall):
        for c, space in enumerate(row):
            face = COLOR_MAP[WALL_PATTERN[r][c]] if space.filled else "#FFFFFF"
            ax.add_patch(
                patches.Rectangle((c + 5.5, r), 0.9, 0.9, linewidth=1, edgecolor=COLOR_MAP[space.color], facecolor=face)
            )

    for i, tile in enumerate(board.floor_line):
        ax.add_patch(patches.Rectangle((i, 5.5), 0.9, 0.9, linewidth=1, edgecolor="gray", facecolor=COLOR_MAP[tile.color]))
    if state.first_player_token == player.id:
        ax.text(9.5, 6.2, "FP", fontsize=10, color="black")


def plot_flowers(ax: plt.Axes, state: GameState, player_idx: int) -> None:
    player = state.players[player_idx]
    ax.set_title(f"{player.name} (score {player.board.score})")
    ax.set_xlim(-4, 4)
    ax.set_ylim(-4, 4)
    ax.set_aspect("equal")
    ax.axis("off")
    for flower, spaces in enumerate(player.board.flowers):
        if flower == CENTRAL_FLOWER:
            cx, cy = 0.0, 0.0
        else:
            angle = math.pi / 3 * flower
            cx, cy = 2.6 * math.cos(angle), 2.6 * math.sin(angle)
        outline = COLOR_MAP.get(flower_color(flower), "#999999")
        for pos, color in enumerate(spaces):
            angle = math.pi / 3 * pos
            x, y = cx + 0.8 * math.cos(angle), cy + 0.8 * math.sin(angle)
            face = "#FFFFFF" if color is None else COLOR_MAP[color]
            ax.add_patch(patches.Circle((x, y), 0.32, linewidth=1, edgecolor=outline, facecolor=face))
            ax.text(x, y, str(pos + 1), fontsize=6, ha="center", va="center")


def plot_state(state: GameState) -> plt.Figure:
    fig, axes = plt.subplots(1, len(state.players), figsize=(4 * len(state.players), 4))
    if len(state.players) == 1:
        axes = [axes]
    plot = plot_player_board if state.variant == Variant.CLASSIC else plot_flowers
    for idx, ax in enumerate(axes):
        plot(ax, state, idx)
    title = f"Round {state.round_number} | Phase: {state.phase.value}"
    if state.joker_color is not None:
        title += f" | Joker: {state.joker_color.value}"
    fig.suptitle(title)
    fig.tight_layout()
    return fig


def plot_score_history(
    score_history: list[list[int]],
    rounds: list[int] | None = None,
    *,
    names: list[str] | None = None,
    title: str | None = None,
) -> plt.Figure:
    """Score per player after every move, with dashed lines where a new round begins.

    ``rounds`` holds the round number for each entry of ``score_history``.
    """
    fig, ax = plt.subplots(figsize=(7, 4))
    labels = names or [f"Player {p + 1}" for p in range(len(score_history[0]))]
    for p, label in enumerate(labels):
        ax.plot([s[p] for s in score_history], label=label)
    if rounds:
        for move in range(1, len(rounds)):
            if rounds[move] != rounds[move - 1]:
                ax.axvline(move, color="gray", linestyle="--", linewidth=0.8)
                ax.text(move, 1.01, f"R{rounds[move]}", transform=ax.get_xaxis_transform(), fontsize=7, ha="center")
    if title:
        ax.set_title(title)
    ax.set_xlabel("Move")
    ax.set_ylabel("Score")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig
