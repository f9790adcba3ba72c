"""levelforge CLI entry point.

Provides subcommands for running the generator web server and for
generating a single maze, arena or maze-arena straight to the terminal.
Accepts configuration via flags and environment variables, with optional
.env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
_COLOR_ENABLED = True

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    if not sys.stdout.isatty():  # pragma: no cover - environment dependent
        _COLOR_ENABLED = False
except (AttributeError, ValueError):  # pragma: no cover
    _COLOR_ENABLED = False

__version__ = "0.1.0"

GENERATE_COMMANDS = ("maze", "arena", "maze-arena")

# (flag, config field, type, help)
MAZE_FLAGS = [
    ("--cols", "cols", int, "Maze width in cells (1..31, default 10)"),
    ("--rows", "rows", int, "Maze height in cells (1..31, default 10)"),
    ("--exit-width", "exit_width", int, "Exit width in cells (1..9, default 1)"),
    ("--center-room-size", "center_room_size", int, "Centre room size (1..6, default 1)"),
    ("--layout", "layout", str, "center-out or out-out (default center-out)"),
    ("--room-count", "room_count", int, "Rooms to carve (0..12, default 0)"),
    ("--room-min-size", "room_min_size", int, "Minimum room size in cells (default 1)"),
    ("--room-max-size", "room_max_size", int, "Maximum room size in cells (default 3)"),
]
ARENA_FLAGS = [
    ("--cols", "cols", int, "Arena width (8..64, default 24)"),
    ("--rows", "rows", int, "Arena height (8..64, default 24)"),
    ("--density", "density", float, "Wall noise density (0..0.6, default 0.28)"),
    ("--building-count", "building_count", int, "Solid building stamps (0..40, default 8)"),
    ("--building-min-size", "building_min_size", int, "Minimum building size (default 2)"),
    ("--building-max-size", "building_max_size", int, "Maximum building size (default 6)"),
    ("--smoothing-passes", "smoothing_passes", int, "Cellular automaton passes (0..6, default 2)"),
    ("--corridor-width", "corridor_width", int, "Corridor and exit width (1..4, default 1)"),
    ("--candidates", "candidates", int, "Candidate layouts to score (1..20, default 8)"),
]


def _add_generate_parser(subparsers, name, flags, help_text):
    p = subparsers.add_parser(
        name,
        help=help_text,
        formatter_class=argparse.RawTextHelpFormatter,
        description=help_text,
    )
    for flag, dest, kind, text in flags:
        p.add_argument(flag, dest=dest, type=kind, default=None, help=text)
    p.add_argument("--seed", default=None, help="Integer or any string (hashed) for a reproducible level")
    p.add_argument(
        "--format",
        dest="output_format",
        choices=("ascii", "json"),
        default="ascii",
        help="Output as an ASCII preview (default) or the JSON record",
    )
    p.set_defaults(command=name, option_fields=[dest for _f, dest, _k, _t in flags])
    return p


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    levelforge level generator

    Run the generator web server or generate a single level from the command
    line. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                       Bind address for the web server (default: 0.0.0.0)
          PORT                       Port for the web server (default: 5000)
          GENERATION_ENABLE_METRICS  Include timing stats in API responses (default: 1)
          GENERATION_DEFAULT_SEED    Seed used when a request carries none (default: random)
          LEVELFORGE_LOG_LEVEL       debug|info|warn|error (default: info)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a 12x12 out-out maze
          python run.py maze --cols 12 --rows 12 --layout out-out --seed 42

          # Arena JSON record for a word seed
          python run.py arena --seed castle --format json
        """
    )

    parser = argparse.ArgumentParser(
        prog="levelforge",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"levelforge {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the generator web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask server exposing /api/generate/*",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    _add_generate_parser(subparsers, "maze", MAZE_FLAGS, "Generate a maze (randomized DFS)")
    _add_generate_parser(subparsers, "arena", ARENA_FLAGS, "Generate a scored capture-the-flag arena")
    _add_generate_parser(subparsers, "maze-arena", MAZE_FLAGS, "Generate a maze with rooms and gameplay points")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _options_from_args(args) -> dict:
    options = {f: getattr(args, f) for f in args.option_fields if getattr(args, f) is not None}
    if args.seed is not None:
        options["seed"] = args.seed
    return options


def run_generate(args) -> int:
    """Generate one level for a generate subcommand and print it."""
    from levelforge.generation import (
        ArenaConfig,
        InvalidOptionError,
        MazeConfig,
        generate_arena,
        generate_maze,
        generate_maze_arena,
        render_result,
    )
    from levelforge.logging_utils import log

    mode = args.command
    options = _options_from_args(args)
    try:
        if mode == "arena":
            result = generate_arena(ArenaConfig.from_dict(options))
        elif mode == "maze-arena":
            result = generate_maze_arena(MazeConfig.from_dict(options))
        else:
            result = generate_maze(MazeConfig.from_dict(options))
    except InvalidOptionError as e:
        print(f"[ERROR] {e}")
        return 2

    seed = result.seed
    log.debug(event="cli_generate", kind=mode, seed=seed)
    if args.output_format == "json":
        print(json.dumps(result.to_dict()))
        return 0
    header = f"{mode} seed={seed}"
    if mode == "arena":
        header += f" score={result.score:.3f} regions={result.metrics.regions}"
    if _COLOR_ENABLED:
        header = f"{Fore.CYAN}{header}{Style.RESET_ALL}"
    print(header)
    print(render_result(result))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode in GENERATE_COMMANDS:
        return run_generate(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from levelforge.logging_utils import log
    from levelforge.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}levelforge Server Bootup{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "levelforge Server Bootup"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    metrics_on = os.getenv("GENERATION_ENABLE_METRICS", "1").strip().lower() in ("1", "true", "yes", "on")
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Metrics:'):12} {value('enabled' if metrics_on else 'disabled')}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", mode=mode, host=host, port=port, debug=debug)

    info_prefix = f"{Fore.CYAN}[INFO]{Style.RESET_ALL}" if _COLOR_ENABLED else "[INFO]"
    print(f"{info_prefix} Listening for connections... Press Ctrl+C to stop.")
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
