"""
Command-line interface for clover-fab.

    clover-fab quote <board.json>        - Estimate the price of an order
    clover-fab gerber <design.json>      - Write Gerber/drill files and ZIP
    clover-fab order-url <board.json>    - Print the manufacturer quote URL
    clover-fab inspect <archive.zip>     - List the files in a package
    clover-fab config                    - Show or create configuration

Examples:
    clover-fab quote board.json --quantity 30 --shipping express
    clover-fab gerber design.json -o manufacturing/ --workers 4
    clover-fab order-url design.json
    clover-fab inspect manufacturing/Blinky.zip
    clover-fab config --init
"""

import argparse
import logging
import sys
from typing import List, Optional

from clover_fab import __version__
from clover_fab.exceptions import CloverFabError

from .utils import print_error

__all__ = ["main", "build_parser", "setup_logging"]

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure stderr logging for the CLI process."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    from .gerber_cmd import add_gerber_arguments, add_inspect_arguments, add_order_url_arguments
    from .quote_cmd import add_arguments as add_quote_arguments

    parser = argparse.ArgumentParser(
        prog="clover-fab",
        description="PCB design to manufacturer-ready fabrication bundle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"clover-fab {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    add_quote_arguments(subparsers.add_parser("quote", help="Estimate the price of an order"))
    add_gerber_arguments(subparsers.add_parser("gerber", help="Generate the Gerber package"))
    add_order_url_arguments(
        subparsers.add_parser("order-url", help="Print the manufacturer quote URL")
    )
    add_inspect_arguments(subparsers.add_parser("inspect", help="List the files in a package"))

    config_parser = subparsers.add_parser("config", help="Show or create configuration")
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument("--show", action="store_true", help="Show effective configuration")
    config_group.add_argument("--init", action="store_true", help="Create template config file")
    config_group.add_argument("--paths", action="store_true", help="Show config file paths")
    config_parser.add_argument("config_action", nargs="?", choices=["get"], help="Config action")
    config_parser.add_argument("config_key", nargs="?", help="Config key")
    config_parser.add_argument("--user", action="store_true", help="Use user config for --init")

    return parser


def _run_config_command(args) -> int:
    """Handle config command."""
    from .config_cmd import main as config_main

    sub_argv = []
    if args.show:
        sub_argv.append("--show")
    if args.init:
        sub_argv.append("--init")
    if args.paths:
        sub_argv.append("--paths")
    if args.user:
        sub_argv.append("--user")
    if args.config_action:
        sub_argv.append(args.config_action)
    if args.config_key:
        sub_argv.append(args.config_key)
    return config_main(sub_argv) or 0


def dispatch_command(args) -> int:
    """Run the selected subcommand."""
    if args.command == "config":
        return _run_config_command(args)

    from clover_fab.config import Config

    from .gerber_cmd import run_gerber, run_inspect, run_order_url
    from .quote_cmd import run as run_quote

    handlers = {
        "quote": run_quote,
        "gerber": run_gerber,
        "order-url": run_order_url,
        "inspect": run_inspect,
    }
    return handlers[args.command](args, Config.load())


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the clover-fab CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        return dispatch_command(args)
    except CloverFabError as e:
        print_error(e, verbose=args.verbose)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
