#!/usr/bin/env python3
"""
npcnames CLI
============
Command-line interface for NPC name generation.

Usage:
    npcnames generate -r dunmer -s male -n 10 --source expanded
    npcnames stats -r dunmer -s female
    npcnames check Aryon Savel -r dunmer -s male
    npcnames distance Aryon Aryan
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent to path
_parent = Path(__file__).parent.parent
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich import box

from npcnames import __version__
from npcnames.errors import NameGenError
from npcnames.settings import get_setting

# =============================================================================
# Constants
# =============================================================================

RACES = get_setting("cli.races", [])
SEXES = get_setting("cli.sexes", ["male", "female"])
ALL_FILTER = get_setting("sources.all_filter", "all")

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False, console: Console = None, err_console: Console = None):
        self.quiet = quiet
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def error(self, msg: str):
        self.err_console.print(f"Error: {msg}", markup=False)

    def notice(self, msg: str):
        if not self.quiet:
            self.console.print(f"[yellow]{msg}[/yellow]")

    def raw(self, text: str):
        """Unstyled output, always printed (machine-readable results)."""
        self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else get_setting("logging.level", "WARNING")
    logging.basicConfig(
        level=level,
        format=get_setting("logging.format", "%(message)s"),
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def make_generator(args):
    from npcnames import NPCNameGenerator, DirectoryLoader

    loader = DirectoryLoader(root=args.data) if args.data else DirectoryLoader()
    gen = NPCNameGenerator(loader=loader)
    gen.load(args.race, args.sex)
    return gen


def stats_table(stats, source: str) -> Table:
    table = Table(title=f"Dataset ({source})", box=box.SIMPLE)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Unique firstnames", str(stats.unique_firstnames))
    table.add_row("Unique lastnames", str(stats.unique_lastnames))
    table.add_row("Total firstnames", str(stats.total_firstnames))
    table.add_row("Total lastnames", str(stats.total_lastnames))
    table.add_row("Existing names", str(stats.existing_count))
    table.add_row("Blacklisted firstnames", str(stats.blacklisted_firstnames))
    table.add_row("Blacklisted lastnames", str(stats.blacklisted_lastnames))
    return table


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate novel names."""
    gen = make_generator(args)
    names = gen.generate(args.count, args.source)

    if args.json:
        out.raw(json.dumps([n.to_dict() for n in names], indent=2))
        return 0

    if not names:
        out.notice("Could not generate any novel combinations. Try a different source filter.")
        return 0

    table = Table(title="Generated Names", box=box.SIMPLE, show_header=False)
    table.add_column("Name")
    for name in names:
        table.add_row(name.full_name)
    out.print(table)

    if len(names) < args.count:
        out.notice(f"Only {len(names)} of {args.count} names could be generated.")

    stats = gen.get_stats(args.source)
    out.print(f"Generating from: {stats.unique_firstnames} firstnames × "
              f"{stats.unique_lastnames} lastnames")
    out.print(f"Checking against: {stats.existing_count} existing NPCs")
    return 0


def cmd_stats(args, out: Output):
    """Show dataset statistics."""
    gen = make_generator(args)
    stats = gen.get_stats(args.source)

    if args.json:
        out.raw(json.dumps(stats.to_dict(), indent=2))
        return 0

    out.print(stats_table(stats, args.source))
    return 0


def cmd_check(args, out: Output):
    """Check a name against existing NPCs."""
    gen = make_generator(args)
    index = gen.dataset.index
    full_name = f"{args.firstname} {args.lastname}"

    if index.exists_exact(args.firstname, args.lastname):
        out.print(f"[red]{full_name}[/red] already exists")
        return 1

    matches = index.similar_matches(args.firstname, args.lastname)
    if matches:
        out.print(f"[red]{full_name}[/red] is too similar to:")
        for m in matches:
            out.print(f"  - {m.known_name} {args.lastname} (distance {m.distance})")
        return 1

    out.print(f"[green]{full_name}[/green] is novel")
    return 0


def cmd_distance(args, out: Output):
    """Show edit distance between two names."""
    from similarity_checker import DEFAULT_THRESHOLD, distance, too_similar

    threshold = args.threshold if args.threshold is not None else DEFAULT_THRESHOLD
    dist = distance(args.a, args.b)
    verdict = "too similar" if too_similar(args.a, args.b, threshold) else "distinct"
    out.raw(f"{dist}")
    out.print(f"{args.a} / {args.b}: {verdict} (threshold {threshold})")
    return 0


# =============================================================================
# Main
# =============================================================================

def add_selection_args(p):
    p.add_argument('--race', '-r', required=True,
                   help=f"Race directory (e.g. {', '.join(RACES) or 'dunmer'})")
    p.add_argument('--sex', '-s', required=True, choices=SEXES, help='Sex')
    p.add_argument('--data', '-d', type=Path, help='Data root directory (default from app.yaml)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='npcnames',
        description='npcnames - NPC Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -r dunmer -s male -n 10
  %(prog)s generate -r dunmer -s female --source expanded --json
  %(prog)s stats -r dunmer -s male --source vanilla
  %(prog)s check Aryon Savel -r dunmer -s male
  %(prog)s distance kitten sitting
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate novel names')
    add_selection_args(p)
    p.add_argument('-n', '--count', type=int, default=get_setting("sampler.default_count", 10),
                   help='Number of names (default: %(default)s)')
    p.add_argument('--source', default=ALL_FILTER,
                   help='Source filter: all, expanded, or a source tag (default: all)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- stats ---
    p = subparsers.add_parser('stats', help='Show dataset statistics')
    add_selection_args(p)
    p.add_argument('--source', default=ALL_FILTER, help='Source filter (default: all)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- check ---
    p = subparsers.add_parser('check', aliases=['c'], help='Check a name against existing NPCs')
    p.add_argument('firstname', help='Firstname')
    p.add_argument('lastname', help='Lastname')
    add_selection_args(p)

    # --- distance ---
    p = subparsers.add_parser('distance', aliases=['dist'], help='Edit distance between two names')
    p.add_argument('a', help='First name')
    p.add_argument('b', help='Second name')
    p.add_argument('--threshold', '-t', type=int, help='Too-similar threshold')

    return parser


def main(argv=None, out: Output = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'c': 'check',
        'dist': 'distance',
    }
    command = cmd_map.get(args.command, args.command)

    setup_logging(args.verbose)
    out = out or Output(quiet=args.quiet)

    if getattr(args, 'count', 0) < 0:
        out.error("--count must be >= 0")
        return 2

    commands = {
        'generate': cmd_generate,
        'stats': cmd_stats,
        'check': cmd_check,
        'distance': cmd_distance,
    }

    handler = commands[command]
    try:
        return handler(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except NameGenError as e:
        out.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
