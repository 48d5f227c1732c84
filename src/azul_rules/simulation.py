import logging
from dataclasses import dataclass, field

from tqdm import tqdm

from .agents import Agent
from .engines import GameEngine
from .enums import Variant
from .state import GameState

LOGGER = logging.getLogger(__name__)


@dataclass
class GameResult:
    final_state: GameState
    scores: list[int]
    moves: int = 0
    score_history: list[list[int]] = field(default_factory=list)
    round_history: list[int] = field(default_factory=list)


def play_game(
    agents: list[Agent],
    *,
    variant: Variant | str = Variant.CLASSIC,
    seed: int | None = None,
    max_moves: int = 10_000,
) -> GameResult:
    for idx, agent in enumerate(agents):
        if not isinstance(agent, Agent):
            raise TypeError(f"agent {idx} has no select_action: {agent!r}")
    names = [f"Player {i + 1}" for i in range(len(agents))]
    engine = GameEngine(names, variant=variant, seed=seed)
    state = engine.reset()
    history = [[p.board.score for p in state.players]]
    rounds = [state.round_number]
    moves = 0
    while not state.is_terminal():
        if moves >= max_moves:
            raise RuntimeError(f"game did not finish within {max_moves} moves")
        idx = state.player_index(state.current_player)
        # Clone to protect state from accidental mutation by agent code.
        action = agents[idx].select_action(state.clone())
        next_state = engine.step(action)
        if next_state is state:
            raise RuntimeError(f"agent {idx} chose a rejected move: {action!r}")
        state = next_state
        moves += 1
        history.append([p.board.score for p in state.players])
        rounds.append(state.round_number)
    scores = [p.board.score for p in state.players]
    LOGGER.debug("game finished after %d moves with scores %s", moves, scores)
    return GameResult(final_state=state, scores=scores, moves=moves, score_history=history, round_history=rounds)


def play_series(
    agents: list[Agent],
    games: int,
    *,
    variant: Variant | str = Variant.CLASSIC,
    seed: int | None = None,
    progress: bool = False,
) -> list[GameResult]:
    results = []
    for i in tqdm(range(games), desc="games", disable=not progress):
        game_seed = None if seed is None else seed + i
        results.append(play_game(agents, variant=variant, seed=game_seed))
    return results
