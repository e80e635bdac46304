"""
Sleuth CLI - Command-line interface for the solver.

Usage:
    sleuth play [elements_file]           Interactive terminal board
    sleuth check <clue> [-c ID] [-x ID]   Solve a single clue
    sleuth serve [--host H] [--port P]    Run the REST API
"""

import argparse
import logging
import os
import sys

from .config import Settings, configure_logging

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        description="Sleuth - Deduction assistant for Clue-style board games",
        prog="sleuth",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    parser.add_argument("--log-file", help="Write logs to this file")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Interactive terminal board")
    play_parser.add_argument(
        "elements_file", nargs="?", default=None,
        help=f"TOML element file (default: {settings.elements_file}, else the classic board)",
    )
    play_parser.add_argument("--board", default="classic", help="Built-in board if no file is found")
    play_parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")

    # Check command
    check_parser = subparsers.add_parser("check", help="Solve a single clue")
    check_parser.add_argument("clue", help='Clue such as "w1 | l3 | p5"')
    check_parser.add_argument(
        "--confirm", "-c", action="append", default=[], metavar="ID",
        help="Element known to be true (repeatable)",
    )
    check_parser.add_argument(
        "--dismiss", "-x", action="append", default=[], metavar="ID",
        help="Element known to be false (repeatable)",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)

    if args.command == "play":
        # The board owns the terminal: only log to a file
        if args.log_file:
            configure_logging(args.log_level, filename=args.log_file)
        else:
            logging.basicConfig(handlers=[logging.NullHandler()])
        return cmd_play(args, settings)

    configure_logging(args.log_level, filename=args.log_file)
    if args.command == "check":
        return cmd_check(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, settings: Settings):
    """Start the interactive board."""
    from .engine_core.element import Elements
    from .engine_core.errors import RegistryLoadError
    from .games import create_board
    from .session import SessionManager
    from .ui import run

    path = args.elements_file or settings.elements_file
    try:
        if args.elements_file or os.path.exists(path):
            elements = Elements.load(path)
            board_name = os.path.basename(path)
        else:
            elements = create_board(args.board)
            board_name = args.board
    except (RegistryLoadError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    session = SessionManager().create_session(elements, board_name=board_name)
    run(session, color=not args.no_color)


def cmd_check(args):
    """Solve one clue against known states."""
    from .engine_core.constraint import Constraint, Deduction
    from .engine_core.element import ElementIdentifier, ElementState, StateSnapshot
    from .engine_core.errors import ConstraintParseError

    try:
        constraint = Constraint.parse(args.clue)
    except ConstraintParseError as e:
        print(f"Error: {e}")
        sys.exit(1)

    states = {}
    for raw_ids, state in ((args.confirm, ElementState.CONFIRMED), (args.dismiss, ElementState.DISMISSED)):
        for raw_id in raw_ids:
            identifier = ElementIdentifier.parse(raw_id)
            if identifier is None:
                print(f"Error: Invalid element id: {raw_id}")
                sys.exit(1)
            states[identifier] = state

    result = constraint.solve(StateSnapshot(states))

    print(f"Clue: {constraint}")
    print(f"Leaves: {', '.join(str(leaf) for leaf in constraint.leaves())}")
    if isinstance(result, Deduction):
        print(f"Result: {result.identifier} -> {result.state.value}")
    else:
        print(f"Result: {result.kind.value}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    logger.info("Serving API on %s:%d", args.host, args.port)
    uvicorn.run("sleuth.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
