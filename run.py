"""Cavern CLI entry point.

Provides subcommands for generating dungeons to stdout or a file and for
running the HTTP API server. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - environment dependent
    _COLOR_ENABLED = False

VERSION_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")


def _load_version() -> str:
    try:
        with open(VERSION_FILE, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Cavern dungeon generator

    Generate cave dungeon floors as JSON, ASCII art or an animated GIF, or run
    the HTTP API server. Configuration can be provided via CLI flags or
    environment variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          DUNGEON_WIDTH        Default floor width (default: 50)
          DUNGEON_HEIGHT       Default floor height (default: 50)
          DUNGEON_FLOORS       Default number of floors (default: 1)
          DUNGEON_SEED         Default seed (default: random)
          DUNGEON_MAX_ATTEMPTS Generation retries per floor (default: 5)
          DUNGEON_MAX_FLOORS   Largest floor count the API accepts (default: 10)
          CAVERN_LOG_LEVEL     debug|info|warn|error (default: info)

        Examples:
          # Print a 60x40 floor as ASCII art
          python run.py generate --width 60 --height 40 --format ascii

          # Write a reproducible 3 floor dungeon as JSON
          python run.py generate --floors 3 --seed 1234 --output dungeon.json

          # Write the dungeon GIF plus per-floor build animations into out/
          python run.py generate --format gif --output dungeon.gif --frames

          # Run the API server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="Cavern",
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
        version=f"Cavern {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and write it out",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a dungeon as JSON, ASCII art or GIF",
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Floor width, 10-200 (default: env DUNGEON_WIDTH or 50)")
    gen_parser.add_argument("--height", type=int, default=None, help="Floor height, 10-200 (default: env DUNGEON_HEIGHT or 50)")
    gen_parser.add_argument("--floors", type=int, default=None, help="Number of floors (default: env DUNGEON_FLOORS or 1)")
    gen_parser.add_argument(
        "--type",
        dest="dungeon_type",
        choices=["cave", "forest"],
        default=None,
        help="Dungeon type (default: cave)",
    )
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (default: random)")
    gen_parser.add_argument(
        "--format",
        dest="output_format",
        choices=["json", "ascii", "gif"],
        default="json",
        help="Output format (default: json)",
    )
    gen_parser.add_argument("--output", default=None, help="Output path (default: stdout; required for gif)")
    gen_parser.add_argument(
        "--frames",
        action="store_true",
        help="Also write per-floor build animations to DUNGEON_GIF_DIR (default: out/)",
    )
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask dungeon API server",
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

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def _banner(mode: str, rows: list[tuple[str, object]]) -> str:
    title = f"{Fore.CYAN}{Style.BRIGHT}Cavern{Style.RESET_ALL}" if _COLOR_ENABLED else "Cavern"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [divider, f"  {title} {__version__}", divider, f"  {label('Mode:'):12} {value(mode.upper())}"]
    lines += [f"  {label(name + ':'):12} {value(val)}" for name, val in rows]
    lines += [divider, ""]
    return "\n".join(lines)


def _run_generate(args) -> int:
    from cavern import logging_utils
    from cavern.dungeon import BoundedIntError, Dungeon, DungeonConfig, GenerationFailed
    from cavern.logging_utils import log
    from cavern.routes.seed_api import coerce_seed

    if not args.output and "CAVERN_LOG_LEVEL" not in os.environ:
        # stdout carries the dungeon itself; only errors (on stderr) may be logged
        logging_utils.configure(level="error")

    seed = coerce_seed(args.seed) if args.seed is not None else None
    config = DungeonConfig.from_env(
        width=args.width,
        height=args.height,
        floor_count=args.floors,
        dungeon_type=args.dungeon_type,
        seed=seed,
        gif_output=True if args.frames else None,
    )
    if args.output_format == "gif" and not args.output:
        print("[ERROR] --format gif requires --output", file=sys.stderr)
        return 2

    try:
        dungeon = Dungeon.from_config(config)
    except (BoundedIntError, ValueError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    except GenerationFailed as exc:
        log.error(event="generation_failed", error=str(exc), attempts=exc.attempts)
        return 1

    if args.output_format == "json":
        payload = dungeon.to_json()
    elif args.output_format == "ascii":
        payload = dungeon.to_ascii()
    else:
        payload = dungeon.to_gif()

    if not args.output:
        print(payload)
        return 0
    try:
        mode = "wb" if isinstance(payload, bytes) else "w"
        with open(args.output, mode) as f:
            f.write(payload)
    except OSError as exc:
        log.error(event="output_write_failed", path=args.output, error=str(exc))
        return 1
    log.info(event="dungeon_written", path=args.output, format=args.output_format, seed=dungeon.seed)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()

    if mode == "generate":
        return _run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from cavern.logging_utils import log
    from cavern.server import start_server

    print(_banner(mode, [("Host", host), ("Port", port), ("Debug", "YES" if args.debug else "NO")]))
    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host=host, port=port, debug=bool(args.debug))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
