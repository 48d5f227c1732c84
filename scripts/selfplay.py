#!/usr/bin/env python3
import argparse
import logging
import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from azul_rules import FirstLegalAgent, GreedyAgent, RandomAgent, Variant, play_series  # noqa: E402


def build_agent(name: str, seed: int | None):
    rng = random.Random(seed)
    if name == "random":
        return RandomAgent(rng=rng)
    if name == "first":
        return FirstLegalAgent()
    if name in ("easy", "medium", "hard"):
        return GreedyAgent(difficulty=name, rng=rng)
    raise ValueError(f"unsupported agent name: {name}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run self-play series between baseline agents.")
    parser.add_argument("--variant", choices=[v.value for v in Variant], default=Variant.CLASSIC.value)
    parser.add_argument("--agents", default="medium,random", help="Comma-separated agent names, one per seat.")
    parser.add_argument("--players", type=int, default=None, help="Seat count; agents are cycled to fill it.")
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic runs (omit for random).")
    parser.add_argument("--plot", help="Write the score history of the last game to this image path.")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    names = [n.strip() for n in args.agents.split(",") if n.strip()]
    if args.players is not None:
        names = [names[i % len(names)] for i in range(args.players)]
    agents = [build_agent(name, None if args.seed is None else args.seed + i) for i, name in enumerate(names)]

    results = play_series(agents, args.games, variant=args.variant, seed=args.seed, progress=True)
    wins = [0] * len(agents)
    totals = [0] * len(agents)
    for result in results:
        best = max(result.scores)
        for idx, score in enumerate(result.scores):
            totals[idx] += score
            if score == best:
                wins[idx] += 1
    for idx, name in enumerate(names):
        print(f"seat {idx + 1} ({name}): wins={wins[idx]} avg_score={totals[idx] / len(results):.1f}")

    if args.plot and results:
        import matplotlib

        matplotlib.use("Agg")
        from azul_rules.visualize import plot_score_history

        last = results[-1]
        fig = plot_score_history(
            last.score_history,
            last.round_history,
            names=[f"{idx + 1}: {name}" for idx, name in enumerate(names)],
            title=f"{args.variant} game {len(results)}",
        )
        fig.savefig(args.plot)


if __name__ == "__main__":
    main()
