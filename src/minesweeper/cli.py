"""
Minesweeper - command line entry point.

Usage:
    minesweeper play [--difficulty {easy,medium,hard}] [--dev]
    minesweeper simulate [--games N]
    minesweeper demo [--games N] [--delay SECONDS]
"""
import argparse
import logging
import os
import sys
import time
from typing import Callable, List, Optional

from .board import (
    BoardConfig,
    ConfigurationError,
    Difficulty,
    DIFFICULTY_PRESETS,
)
from .environment import MinesweeperEnv
from .gameplay import GamePlay

PLAY_HELP = (
    "Commands: r X Y reveal | f X Y flag | c X Y chord | "
    "n new game | d developer view | q quit"
)


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


def _status_line(game: GamePlay) -> str:
    return (
        f"{game.phase.name} | Mines left: {game.remaining_mines()} | "
        f"Time: {game.elapsed_seconds()}s"
    )


def _board_config(args: argparse.Namespace) -> Optional[BoardConfig]:
    """Custom config when any of --width/--height/--mines is given."""
    if args.width is None and args.height is None and args.mines is None:
        return None
    preset = DIFFICULTY_PRESETS[args.difficulty]
    return BoardConfig(
        width=args.width if args.width is not None else preset.width,
        height=args.height if args.height is not None else preset.height,
        num_mines=args.mines if args.mines is not None else preset.num_mines,
    )


# ============================================================================
# Commands
# ============================================================================

def play(
    args: argparse.Namespace,
    read: Callable[[str], str] = input,
) -> None:
    """Play an interactive game in the terminal."""
    game = GamePlay(
        args.difficulty,
        config=_board_config(args),
        seed=args.seed,
        dev_mode=args.dev,
    )
    actions = {
        "r": game.on_click,
        "f": game.on_right_click,
        "c": game.expand_siblings,
    }

    print(PLAY_HELP)
    while True:
        print()
        print(game.render())
        print(_status_line(game))
        try:
            line = read("> ").strip().lower()
        except EOFError:
            break
        parts = line.split()
        if not parts:
            continue

        command = parts[0]
        if command == "q":
            break
        if command == "n":
            game.reset()
            continue
        if command == "d":
            state = "on" if game.toggle_dev_mode() else "off"
            print(f"Developer view {state}")
            continue
        if command not in actions or len(parts) != 3:
            print(PLAY_HELP)
            continue

        try:
            x, y = int(parts[1]), int(parts[2])
        except ValueError:
            print("Coordinates must be integers")
            continue
        cell = game.cell(x, y)
        if cell is None:
            print(f"({x}, {y}) is off the board")
            continue
        actions[command](cell)

        if game.is_won:
            print(f"*** WIN in {game.elapsed_seconds()}s ***")
        elif game.is_lost:
            print("*** LOST (hit mine) ***")


def simulate(args: argparse.Namespace) -> None:
    """Play games with random legal moves and print statistics."""
    env = MinesweeperEnv(args.difficulty, config=_board_config(args))
    env.reset(seed=args.seed)
    env.action_space.seed(args.seed)

    wins = 0
    total_steps = 0
    total_revealed = 0
    for _ in range(args.games):
        _, info = env.reset()
        done = False
        while not done:
            action = env.action_space.sample(mask=env.get_action_mask())
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
        if info["game_state"] == "WON":
            wins += 1
        total_steps += info["steps"]
        total_revealed += info["revealed"]

    games = max(1, args.games)
    print(f"Results over {args.games} games:")
    print(f"  Win rate: {wins / games:.1%}")
    print(f"  Avg steps: {total_steps / games:.1f}")
    print(f"  Avg revealed: {total_revealed / games:.1f} cells")


def demo(args: argparse.Namespace) -> None:
    """Watch random play, one move at a time."""
    env = MinesweeperEnv(
        args.difficulty, config=_board_config(args), render_mode="ansi"
    )
    env.reset(seed=args.seed)
    env.action_space.seed(args.seed)
    width = env.config.width

    wins = 0
    for game in range(args.games):
        env.reset()
        done = False
        step = 0
        while not done:
            action = int(env.action_space.sample(mask=env.get_action_mask()))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: ({action % width}, {action // width})\n")
            print(env.render())

            if done:
                if info["game_state"] == "WON":
                    wins += 1
                    print("\n*** WIN! ***")
                else:
                    print("\n*** LOST (hit mine) ***")
            time.sleep(args.delay)

    print(f"\n=== Final: {wins}/{args.games} wins ===")


# ============================================================================
# Argument Parsing
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minesweeper", description="Minesweeper in the terminal"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--difficulty",
        type=Difficulty.parse,
        default=Difficulty.EASY,
        help="easy, medium or hard",
    )
    common.add_argument("--width", type=int, help="Custom board width")
    common.add_argument("--height", type=int, help="Custom board height")
    common.add_argument("--mines", type=int, help="Custom mine count")
    common.add_argument("--seed", type=int, default=None, help="Random seed")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser(
        "play", parents=[common], help="Play in the terminal"
    )
    play_parser.add_argument(
        "--dev", action="store_true", help="Start with developer view on"
    )

    simulate_parser = subparsers.add_parser(
        "simulate", parents=[common], help="Random play statistics"
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    demo_parser = subparsers.add_parser(
        "demo", parents=[common], help="Watch random play"
    )
    demo_parser.add_argument(
        "--games", type=int, default=3, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    commands = {"play": play, "simulate": simulate, "demo": demo}
    if args.command not in commands:
        parser.print_help()
        return 1

    try:
        commands[args.command](args)
    except ConfigurationError as error:
        print(f"Invalid board: {error}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
