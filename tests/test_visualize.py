import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from azul_rules import TileColor, Variant, initialize_game  # noqa: E402
from azul_rules.visualize import plot_score_history, plot_state  # noqa: E402


def test_plot_classic_state():
    state = initialize_game(["A", "B"], seed=0)
    state.players[0].board.wall[0][0].filled = True
    fig = plot_state(state)
    assert len(fig.axes) == 2
    plt.close(fig)


def test_plot_summer_pavilion_state():
    state = initialize_game(["A", "B", "C"], Variant.SUMMER_PAVILION, seed=0)
    state.players[2].board.flowers[6][0] = TileColor.GREEN
    fig = plot_state(state)
    assert len(fig.axes) == 3
    assert "Joker: blue" in fig._suptitle.get_text()
    plt.close(fig)


def test_plot_score_history():
    fig = plot_score_history([[0, 0], [1, 0], [3, 2]])
    assert len(fig.axes[0].lines) == 2
    assert fig.axes[0].get_xlabel() == "Move"
    plt.close(fig)


def test_plot_score_history_marks_rounds():
    history = [[5, 5], [4, 5], [6, 5], [6, 8], [9, 8]]
    fig = plot_score_history(history, [1, 1, 1, 2, 2], names=["Ann", "Bob"], title="summer_pavilion")
    ax = fig.axes[0]
    # Two players plus one round boundary.
    assert len(ax.lines) == 3
    assert [t.get_text() for t in ax.get_legend().get_texts()] == ["Ann", "Bob"]
    assert ax.get_title() == "summer_pavilion"
    plt.close(fig)
