#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--mute]
    python main.py watch [--difficulty ...] [--games N] [--seed S] [--delay SECONDS]
    python main.py presets
"""
import argparse
import logging
import sys
import time

import numpy as np

from minesweeper import (
    AudioService,
    DIFFICULTY_SETUP,
    GameController,
    GameState,
    MinesweeperEnv,
    SilentAudio,
    format_board,
)

HELP = """Commands:
  r X Y   reveal (or chord) the tile at column X, row Y
  f X Y   toggle a flag
  n       new game
  q       quit"""


class TerminalBell(AudioService):
    """Rings the terminal bell for every cue."""

    def play(self, cue: str) -> None:
        sys.stdout.write("\a")
        sys.stdout.flush()


def show(controller: GameController) -> None:
    """Print the board with a status line."""
    header = "    " + " ".join(str(x % 10) for x in range(controller.width))
    print(header)
    board = format_board(controller.board.get_observation())
    for y, line in enumerate(board.split("\n")):
        print(f"{y:>2}  {line}")
    print(
        f"\n{controller.state.value.upper()} | "
        f"Flags left: {controller.flags_remaining} | "
        f"Time: {int(controller.elapsed)}s"
    )


def parse_position(parts: list) -> tuple:
    """Read the X Y arguments of a command."""
    if len(parts) != 3:
        raise ValueError("expected two coordinates")
    return int(parts[1]), int(parts[2])


def play(args: argparse.Namespace) -> None:
    """Play a game in the terminal."""
    audio = SilentAudio() if args.mute else TerminalBell()
    controller = GameController(args.difficulty, audio=audio)
    print(HELP + "\n")

    try:
        while True:
            show(controller)
            if controller.state == GameState.WIN:
                print("*** WIN! ***")
            elif controller.state == GameState.LOSE:
                print("*** LOST (hit mine) ***")

            try:
                line = input("> ").strip().lower()
            except EOFError:
                break

            parts = line.split()
            if not parts:
                continue
            command = parts[0]

            if command == "q":
                break
            if command == "n":
                controller.reset_game()
                continue
            if command not in ("r", "f"):
                print(HELP)
                continue

            try:
                x, y = parse_position(parts)
            except ValueError as exc:
                print(f"Invalid command: {exc}")
                continue

            if command == "r":
                controller.reveal_tile(x, y)
            else:
                controller.flag_tile(x, y)
    finally:
        controller.destroy()


def watch(args: argparse.Namespace) -> None:
    """Let a random player pick hidden tiles until each game ends."""
    env = MinesweeperEnv(difficulty=args.difficulty)
    rng = np.random.default_rng(args.seed)
    results = {GameState.WIN: 0, GameState.LOSE: 0}

    try:
        for game in range(args.games):
            env.reset(seed=None if args.seed is None else args.seed + game)
            terminated = False
            moves = 0
            total_reward = 0.0
            while not terminated:
                action = int(rng.choice(np.flatnonzero(env.get_action_mask())))
                _, reward, terminated, _, _ = env.step(action)
                total_reward += reward
                moves += 1
                if args.delay > 0:
                    print(f"\nGame {game + 1}, move {moves}: "
                          f"{env.action_to_position(action)}")
                    show(env.controller)
                    time.sleep(args.delay)

            state = env.controller.state
            results[state] += 1
            if args.delay <= 0:
                show(env.controller)
            print(
                f"Game {game + 1}: {state.name} after {moves} moves, "
                f"{env.controller.revealed_count}/"
                f"{env.controller.config.safe_tiles} safe tiles, "
                f"reward {total_reward:.1f}\n"
            )
    finally:
        env.close()

    print(f"Won {results[GameState.WIN]} of {args.games} games")


def presets(args: argparse.Namespace) -> None:
    """List the difficulty presets."""
    print(f"{'Difficulty':<12} {'Width':>6} {'Height':>7} {'Mines':>6}")
    print("-" * 34)
    for difficulty, config in DIFFICULTY_SETUP.items():
        print(
            f"{difficulty.value:<12} {config.width:>6} "
            f"{config.height:>7} {config.num_mines:>6}"
        )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper in the terminal")
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine events to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty",
        choices=[d.value for d in DIFFICULTY_SETUP],
        default="easy",
        help="Board preset",
    )
    play_parser.add_argument(
        "--mute", action="store_true", help="Disable the terminal bell"
    )

    watch_parser = subparsers.add_parser(
        "watch", help="Watch a random player"
    )
    watch_parser.add_argument(
        "--difficulty",
        choices=[d.value for d in DIFFICULTY_SETUP],
        default="easy",
        help="Board preset",
    )
    watch_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )
    watch_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mines and moves"
    )
    watch_parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Seconds between moves; 0 prints only final boards",
    )

    subparsers.add_parser("presets", help="List difficulty presets")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if args.command == "play":
        play(args)
    elif args.command == "watch":
        watch(args)
    elif args.command == "presets":
        presets(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
