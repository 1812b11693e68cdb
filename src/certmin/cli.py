"""
certmin Command-Line Interface

Runs a certified minimization of one of the library functions and
prints every surviving candidate box, their number and the upper bound
found for the global minimum.
"""

import sys
import argparse
import logging
from typing import Callable, List, Optional, TextIO

from . import __version__
from .contract import validate_precision
from .core.canonical_json import canonical_dumps
from .functions import FUNCTIONS, get_function, list_functions
from .solver.distributed import (
    EXECUTORS,
    DistributedConfig,
    DistributedMinimizer,
    DistributionError,
)


def prompt_function(read: Callable[[], str], out: Optional[TextIO] = None) -> str:
    """Ask for a function name until a known one is entered."""
    out = out or sys.stdout
    while True:
        print("Which function to optimize?", file=out)
        print("Possible choices: " + " ".join(list_functions()), file=out)
        choice = read().strip()
        if choice in FUNCTIONS:
            return choice
        print("Bad choice", file=sys.stderr)


def prompt_precision(read: Callable[[], str], out: Optional[TextIO] = None) -> float:
    """Ask for the precision until a number > 0 is entered."""
    out = out or sys.stdout
    while True:
        print("Precision? ", end="", file=out)
        out.flush()
        try:
            return validate_precision(read().strip())
        except ValueError as e:
            print(f"Bad precision: {e}", file=sys.stderr)


def _read_line() -> str:
    line = sys.stdin.readline()
    if not line:
        raise EOFError("No more input")
    return line


def setup_logging(level_name: str) -> None:
    """Attach a stderr handler to the package logger only."""
    level = getattr(logging, level_name)
    pkg_logger = logging.getLogger("certmin")
    if not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
        pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)


def cmd_solve(args):
    """Solve one minimization problem."""
    try:
        name = args.function or prompt_function(_read_line)
        precision = args.precision if args.precision is not None else prompt_precision(_read_line)

        objective = get_function(name)
        config = DistributedConfig(
            partition_depth=args.partition_depth,
            max_workers=args.workers,
            executor=args.executor,
            record_receipts=args.receipts is not None,
        )
        runner = DistributedMinimizer(objective, precision, config)
        result = runner.run()
    except (EOFError, ValueError, DistributionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for m in result.candidates:
        print(m)
    print(f"Number of minimizers: {len(result.candidates)}")
    print(f"Upper bound for minimum: {result.min_ub:.16g}")

    if args.output:
        with open(args.output, 'w') as f:
            f.write(canonical_dumps(result.to_canonical(), indent=2))
        print(f"\nResults saved to: {args.output}")

    if args.receipts:
        # Coordinator chain; worker chains are referenced by their final hash
        runner.receipts.save_json(args.receipts)
        print(f"Receipts saved to: {args.receipts}")

    return 0


def cmd_list(args):
    """List available functions with their search domains."""
    for name in list_functions():
        f = FUNCTIONS[name]
        box = f.root_box
        print(
            f"{name:18} x in [{box.x.lo:g}, {box.x.hi:g}], "
            f"y in [{box.y.lo:g}, {box.y.hi:g}]  {f.description}"
        )
    return 0


def cmd_version(args):
    """Print version information."""
    print(f"certmin {__version__}")
    print("Certified 2D global minimization by interval branch-and-bound")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='certmin',
        description='Certified global minimization of two-variable functions'
    )
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    solve_parser = subparsers.add_parser('solve', help='Minimize a function')
    solve_parser.add_argument('function', nargs='?',
                              help='Function to minimize (prompted if omitted)')
    solve_parser.add_argument('--precision', '-p', type=float,
                              help='Box width at which splitting stops (prompted if omitted)')
    solve_parser.add_argument('--workers', '-w', type=int, default=4,
                              help='Number of workers (default: 4)')
    solve_parser.add_argument('--partition-depth', '-k', type=int, default=1,
                              help='Initial splits of the root box, 4^k partitions (default: 1)')
    solve_parser.add_argument('--executor', choices=EXECUTORS, default='process',
                              help='Worker pool kind (default: process)')
    solve_parser.add_argument('--output', '-o', type=str,
                              help='Output JSON file')
    solve_parser.add_argument('--receipts', type=str,
                              help='Write the reduction receipt chain to this JSON file')
    solve_parser.set_defaults(func=cmd_solve)

    list_parser = subparsers.add_parser('list', help='List available functions')
    list_parser.set_defaults(func=cmd_list)

    ver_parser = subparsers.add_parser('version', help='Print version')
    ver_parser.set_defaults(func=cmd_version)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
