"""twwatch CLI: render recorded test workflow executions."""

import argparse
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path


def main():
    """Main CLI entry point for twwatch commands."""
    try:
        twwatch_version = get_version("twwatch")
    except PackageNotFoundError:
        twwatch_version = "dev"

    parser = argparse.ArgumentParser(
        prog="twwatch",
        description="twwatch: live renderer for test workflow execution logs"
    )
    parser.add_argument("--version", action="version", version=f"twwatch {twwatch_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output."
    )
    parent_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Diagnostics level (defaults to TWWATCH_LOG_LEVEL or WARNING)."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # watch command
    watch_parser = subparsers.add_parser(
        "watch",
        help="Render a notification stream of an execution until it closes",
        parents=[parent_parser]
    )
    watch_parser.add_argument(
        "execution",
        type=Path,
        help="Path to execution JSON (id, name, signature)"
    )
    watch_parser.add_argument(
        "--notifications",
        type=Path,
        required=True,
        help="Path to notification recording (JSON Lines)"
    )

    # logs command
    logs_parser = subparsers.add_parser(
        "logs",
        help="Render a complete execution log against its final result",
        parents=[parent_parser]
    )
    logs_parser.add_argument(
        "execution",
        type=Path,
        help="Path to execution JSON including its result"
    )
    logs_parser.add_argument(
        "--logs",
        type=Path,
        required=True,
        help="Path to the raw log file"
    )
    logs_parser.add_argument(
        "--marker",
        default=None,
        help="Step marker regex with one capture group (defaults to TWWATCH_MARKER_PATTERN)"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Lazy imports: settings are read only once a command runs
    from .config.logging import setup_logging
    from .config.settings import get_settings
    from .ui import Console

    setup_logging(level=args.log_level)
    console = Console(color=get_settings().color and not args.no_color)

    if args.command == "watch":
        from .api import watch
        from .watch import WatchInterruptedError

        try:
            outcome = watch(
                Path(args.execution).resolve(),
                Path(args.notifications).resolve(),
                console=console,
            )
            sys.exit(outcome.exit_code)
        except WatchInterruptedError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    elif args.command == "logs":
        from .api import render_logs

        try:
            render_logs(
                Path(args.execution).resolve(),
                Path(args.logs).resolve(),
                console=console,
                marker=args.marker,
            )
            console.nl()
            sys.exit(0)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
