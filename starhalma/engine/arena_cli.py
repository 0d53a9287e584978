"""CLI for running AI-vs-AI arena matches.

Usage::

    starhalma-arena --players 2 --agents greedy,mcts --difficulty easy --games 5

    # Six greedy players, print the final position of the last game
    python -m starhalma.engine.arena_cli --players 6 --agents greedy --games 1 --export
"""

from __future__ import annotations

import argparse
import logging
import sys

from starhalma.config import settings
from starhalma.engine.arena import play_game, run_arena
from starhalma.engine.bot_strategy import available_agents
from starhalma.engine.models import AgentKind, Difficulty, GameConfig, PlayerConfig
from starhalma.engine.presets import PRESET_PLAYERS, clamp_player_count


def build_arena_config(
    player_count: int,
    agents: list[str],
    difficulty: Difficulty,
) -> GameConfig:
    """All-AI config; *agents* is cycled over the seats in turn order."""
    players = PRESET_PLAYERS[clamp_player_count(player_count)]
    configs = tuple(
        PlayerConfig(
            player=player,
            is_ai=True,
            agent_kind=AgentKind(agents[i % len(agents)]),
            difficulty=difficulty,
        )
        for i, player in enumerate(players)
    )
    return GameConfig(
        player_count=len(players), active_players=players, player_configs=configs,
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="AI-vs-AI Arena")
    parser.add_argument("--players", type=int, default=2, help="2, 3, 4 or 6 (5 becomes 6)")
    parser.add_argument(
        "--agents",
        default="greedy,mcts",
        help=f"Comma-separated agent kinds per seat ({', '.join(available_agents())})",
    )
    parser.add_argument(
        "--difficulty",
        default="easy",
        choices=[d.value for d in Difficulty],
        help="MCTS search budget",
    )
    parser.add_argument("--games", type=int, default=5)
    parser.add_argument("--max-turns", type=int, default=300)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument(
        "--export",
        action="store_true",
        help="Print the final position of one extra game as JSON",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level)

    agents = [a.strip() for a in args.agents.split(",") if a.strip()]
    unknown = [a for a in agents if a not in available_agents()]
    if not agents or unknown:
        print(f"Unknown agent kind(s): {unknown or agents}", file=sys.stderr)
        sys.exit(1)

    config = build_arena_config(args.players, agents, Difficulty(args.difficulty))
    seats = ", ".join(
        f"{pc.player.name}={pc.agent_kind.value}" for pc in config.player_configs
    )
    print(f"Arena: {seats}, {args.games} games, max {args.max_turns} turns")
    print()

    result = run_arena(
        config,
        num_games=args.games,
        base_seed=args.seed,
        max_turns=args.max_turns,
        progress_callback=lambda done, total: print(
            f"\r  Game {done}/{total}", end="", flush=True
        ),
    )
    print()
    print()
    print(result.summary())

    if args.export:
        record = play_game(config, max_turns=args.max_turns, seed=args.seed + args.games)
        print(record.final_state)


if __name__ == "__main__":
    main()
