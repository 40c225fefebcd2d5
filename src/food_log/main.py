"""Command line entry point."""

import argparse
import sys

from food_log.app_logging import configure_logging
from food_log.config import Settings
from food_log.containers import build_container
from food_log.errors import FoodLogError
from food_log.repl import run_repl


def main(argv: list[str] | None = None) -> int:
    """Run the `food-log` command line."""
    parser = argparse.ArgumentParser(
        prog="food-log",
        description="Food Log: a personal food library and daily nutrition log.",
    )
    sub = parser.add_subparsers(dest="command")

    serve_parser = sub.add_parser("serve", help="Run the web server")
    serve_parser.add_argument("--host", type=str, default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    sub.add_parser("repl", help="Start an interactive console")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    configure_logging()
    settings = Settings()
    try:
        match args.command:
            case "serve":
                _cmd_serve(settings, args)
            case "repl":
                _cmd_repl(settings)
    except FoodLogError as exc:
        print(f"food-log: {exc.message}", file=sys.stderr)
        return 1
    return 0


def _cmd_serve(settings: Settings, args: argparse.Namespace) -> None:
    import uvicorn

    from food_log.api.app import create_app

    app = create_app(build_container(settings))
    uvicorn.run(
        app,
        host=args.host or settings.host,
        port=args.port or settings.port,
    )


def _cmd_repl(settings: Settings) -> None:
    container = build_container(settings)
    try:
        run_repl(container, sys.stdin, sys.stdout)
    finally:
        container.database.close()


if __name__ == "__main__":
    sys.exit(main())
