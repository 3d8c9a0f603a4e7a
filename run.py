"""Lichcrawl CLI entry point.

Subcommands:
  server    run the level API (default)
  generate  build one level and print it as text or JSON

Accepts configuration via flags and environment variables, with optional
.env loading. Run `python run.py --help` for details.
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
# No colors when output is captured (pipes, pytest)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Lichcrawl level generator

    Serve generated dungeon levels over HTTP or print a single level to the
    terminal. Generator settings come from LEVELGEN_* environment variables;
    CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          LEVELGEN_WIDTH       Level width in cells (default: 64)
          LEVELGEN_HEIGHT      Level height in cells (default: 64)
          LEVELGEN_P_CONNECT   Chance a dead end gets an extra corridor (default: 0.5)
          LICHCRAWL_LOG_LEVEL  debug|info|warn|error (default: info)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print level 2 for a fixed seed
          python run.py generate 2 --seed 1234

          # Same level as JSON, on a smaller grid
          python run.py generate 2 --seed 1234 --width 48 --height 48 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="Lichcrawl",
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
        version=f"Lichcrawl {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the level API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask level API",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one level and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a level and print it as a character map (or JSON with --json).",
    )
    gen_parser.add_argument("level", type=int, help="Stage number (1 = castle)")
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (default: random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Level width (default: env or 64)")
    gen_parser.add_argument("--height", type=int, default=None, help="Level height (default: env or 64)")
    gen_parser.add_argument("--style", default=None, help="Override the stage style (castle, caves, ...)")
    gen_parser.add_argument("--json", action="store_true", help="Print JSON instead of a character map")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def _generate(args) -> int:
    from lichcrawl.levelgen import LevelGenConfig, LevelGenerationError, LevelStyle, generate_level_with_retries
    from lichcrawl.levelgen.export import level_to_dict, render_lines
    from lichcrawl.routes.level_api import coerce_seed

    try:
        config = LevelGenConfig.from_env(width=args.width, height=args.height)
        style = LevelStyle.from_name(args.style) if args.style else None
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    if args.level < 1:
        print("[ERROR] level must be >= 1", file=sys.stderr)
        return 2
    seed = coerce_seed(args.seed)
    if args.json:
        # keep stdout parseable
        os.environ.setdefault("LICHCRAWL_LOG_LEVEL", "error")
    try:
        result = generate_level_with_retries(args.level, seed, config, style=style)
    except LevelGenerationError as e:
        print(f"[ERROR] level generation failed: {e}", file=sys.stderr)
        return 1
    if args.json:
        print(json.dumps(level_to_dict(result), indent=2))
        return 0
    header = f"level={result.level} style={result.style.value} seed={result.seed} start={tuple(result.start)}"
    print(f"{Fore.CYAN}{header}{Style.RESET_ALL}" if _COLOR_ENABLED else header)
    for line in render_lines(result):
        print(line)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from lichcrawl.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Lichcrawl Level Server{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "Lichcrawl Level Server"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Version:'):12} {value(__version__)}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))

    from lichcrawl.logging_utils import log

    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
