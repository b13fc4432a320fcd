"""
easify CLI entry point.

Exposes the pattern compiler and unpacking executor on the command line::

    easify compile -p "a, *b, mut c"
    easify plan -p "a, *b, c" 5
    easify unpack -p "a, *b, c" "[5, 6, 3, 7]"
    easify tuple 5 3
    easify split "host:8080" ":" 2
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from easify import __version__
from easify.config import configure, load_settings
from easify.errors import EasifyError
from easify.observability.logging import configure_logging

from .commands import cmd_compile, cmd_plan, cmd_split, cmd_tuple, cmd_unpack
from .errors import CLIError, handle_cli_exception


def _add_pattern_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        '-p', '--pattern',
        help="Slot declaration, e.g. 'a, *b, mut c'"
    )
    group.add_argument(
        '--slots-file',
        help='JSON document {"slots": [{"name": ..., "mutable": ..., "rest": ...}]}'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="easify – compile slot patterns and unpack sequences",
        prog="easify"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to an easify.toml or .easifyrc configuration file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print tracebacks with errors (or set EASIFY_VERBOSE=1)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Logging level (or set EASIFY_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    compile_parser = subparsers.add_parser('compile', help='Compile a pattern and show its slots')
    _add_pattern_arguments(compile_parser)
    compile_parser.set_defaults(func=cmd_compile)

    plan_parser = subparsers.add_parser('plan', help='Show the index/range each slot binds')
    _add_pattern_arguments(plan_parser)
    plan_parser.add_argument('length', type=int, help='Length of the sequence to plan for')
    plan_parser.set_defaults(func=cmd_plan)

    unpack_parser = subparsers.add_parser('unpack', help='Unpack a JSON array against a pattern')
    _add_pattern_arguments(unpack_parser)
    unpack_parser.add_argument('sequence', help='JSON array to unpack')
    unpack_parser.add_argument(
        '--consume', action='store_true',
        help='Use the consuming variant (owned rest bindings)'
    )
    unpack_parser.set_defaults(func=cmd_unpack)

    tuple_parser = subparsers.add_parser('tuple', help='Repeat a value into a fixed-size tuple')
    tuple_parser.add_argument('value', help='Value to repeat (JSON or plain text)')
    tuple_parser.add_argument('count', type=int, help='Number of repetitions')
    tuple_parser.set_defaults(func=cmd_tuple)

    split_parser = subparsers.add_parser('split', help='Take exactly COUNT parts of TEXT')
    split_parser.add_argument('text')
    split_parser.add_argument('delimiter')
    split_parser.add_argument('count', type=int)
    split_parser.set_defaults(func=cmd_split)

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    try:
        settings = load_settings(
            Path.cwd(),
            Path(args.config).resolve() if args.config else None,
        )
        configure(settings)
        configure_logging(args.log_level or settings.log_level)
        args.func(args)
    except (EasifyError, CLIError, ValueError) as exc:
        handle_cli_exception(exc, verbose=args.verbose)


__all__ = ["build_parser", "main"]
