"""
Command line interface for furiwake.

Usage:
    furiwake 大人 おとな                     # [大人|おとな]
    furiwake --name 佐藤 さとう -r res.json  # allow name readings
    furiwake -f 話す はなす                  # JSON output
    furiwake --batch words.tsv               # one word per line
    furiwake import res.json -o furiwake.db  # build a resource database

Exit codes: 0 solved, 2 unsolved or ambiguous, 1 error.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from furiwake import __version__, settings
from furiwake.entry import InvalidEntryError
from furiwake.models import FuriganaResult
from furiwake.resources import ResourceSet
from furiwake.solver import Solver

logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_ERROR = 1
EXIT_UNSOLVED = 2

_NAME_FLAGS = ('1', 'true', 'yes', 'name')


def configure_logging(verbose: bool = False):
    """Configure root logging for command line use."""
    if settings.DEBUG:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')


# ============================================================================
# Resource Selection
# ============================================================================

def load_resources(resources_path: Optional[str], db_path: Optional[str]) -> ResourceSet:
    """
    Load resources from a JSON file or a database.

    A JSON file given on the command line wins, then a database given on
    the command line, then FURIWAKE_RESOURCES_PATH, then the configured
    database.

    Raises:
        FileNotFoundError: If the chosen file does not exist.
    """
    from furiwake.loading import load_resource_set, load_resources_json

    if resources_path is None and db_path is None and settings.RESOURCES_PATH is not None:
        resources_path = str(settings.RESOURCES_PATH)

    if resources_path is not None:
        return load_resources_json(resources_path)

    from furiwake.db.connection import get_db_path, get_session

    path = Path(db_path) if db_path is not None else get_db_path()
    if not path.exists():
        raise FileNotFoundError(
            f"Resource database not found: {path} "
            f"(build one with 'furiwake import' or pass --resources)"
        )
    with get_session(path) as session:
        return load_resource_set(session)


def read_batch(path: str) -> Iterator[Tuple[str, str, bool]]:
    """
    Read (written, reading, is_name) triples from a tab-separated file.

    Blank lines and lines starting with '#' are skipped, as are lines with
    fewer than two fields (logged).
    """
    with open(path, encoding='utf-8') as f:
        for line_no, line in enumerate(f, 1):
            line = line.rstrip('\r\n')
            if not line.strip() or line.startswith('#'):
                continue
            fields = line.split('\t')
            if len(fields) < 2:
                logger.warning(f"{path}:{line_no}: expected written<TAB>reading, skipping")
                continue
            is_name = len(fields) > 2 and fields[2].strip().lower() in _NAME_FLAGS
            yield fields[0], fields[1], is_name


# ============================================================================
# Commands
# ============================================================================

def solve_command(solver: Solver, written: str, reading: str, is_name: bool, full: bool) -> int:
    """Solve a single word and print the result."""
    try:
        solution = solver.solve_text(written, reading, is_name=is_name)
    except InvalidEntryError as e:
        print(f'Error: {e}', file=sys.stderr)
        return EXIT_ERROR

    if full:
        if solution is None:
            result = FuriganaResult.unsolved(written, reading, is_name)
        else:
            result = FuriganaResult.from_text_solution(solution)
        print(json.dumps(result.model_dump(), ensure_ascii=False))
    elif solution is not None:
        print(solution.to_bracket_text())
    else:
        print(f'No unique furigana for {reading}【{written}】', file=sys.stderr)

    return EXIT_SOLVED if solution is not None else EXIT_UNSOLVED


def batch_command(solver: Solver, path: str, full: bool) -> int:
    """Solve every word of a batch file, one output line per word."""
    solved = total = 0
    for (written, reading, is_name), solution in solver.solve_many(read_batch(path)):
        total += 1
        if solution is not None:
            solved += 1
        if full:
            if solution is None:
                result = FuriganaResult.unsolved(written, reading, is_name)
            else:
                result = FuriganaResult.from_text_solution(solution)
            print(json.dumps(result.model_dump(), ensure_ascii=False))
        else:
            text = solution.to_bracket_text() if solution is not None else ''
            print(f'{written}\t{reading}\t{text}')

    logger.info(f"Solved {solved}/{total} entries, cache hits: "
                f"{solver.cache.hits}, misses: {solver.cache.misses}")
    return EXIT_SOLVED


def import_command(args) -> int:
    """Build a resource database from a JSON resource file."""
    from furiwake.db.connection import get_db_path, get_session, init_db
    from furiwake.loading import load_resources_json, store_resource_set

    resources_path = Path(args.resources)
    if not resources_path.exists():
        print(f"Error: resource file not found: {resources_path}", file=sys.stderr)
        return EXIT_ERROR

    db_path = Path(args.output) if args.output else get_db_path()

    # Confirm overwrite
    if db_path.exists() and not args.force:
        print(f"Database already exists: {db_path}")
        response = input("Overwrite? [y/N]: ").strip().lower()
        if response != 'y':
            print("Aborted.")
            return EXIT_ERROR

    try:
        resources = load_resources_json(resources_path)
        init_db(db_path, drop=True)
        with get_session(db_path) as session:
            counts = store_resource_set(session, resources)
            session.commit()
    except Exception as e:
        print(f"Error importing resources: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(f"✅ Database written to: {db_path}")
    print(f"   Kanji: {counts['kanji']:,}")
    print(f"   Name kanji: {counts['name_kanji']:,}")
    print(f"   Expressions: {counts['expressions']:,}")
    return EXIT_SOLVED


def main_import(args: list) -> int:
    """CLI entry point for the import subcommand."""
    parser = argparse.ArgumentParser(
        description='Build a furiwake resource database from a JSON resource file',
        prog='furiwake import',
    )

    parser.add_argument(
        'resources',
        metavar='RESOURCES',
        help='JSON resource file',
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        metavar='PATH',
        help='Output database path (default: FURIWAKE_DB_PATH or data/furiwake.db)',
    )

    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing database without prompting',
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log progress',
    )

    parsed = parser.parse_args(args)
    configure_logging(parsed.verbose)
    return import_command(parsed)


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'import':
        return main_import(args_list[1:])

    parser = argparse.ArgumentParser(
        description='Align a Japanese word with its reading and print its furigana',
        prog='furiwake',
        epilog='Subcommands:\n  furiwake import RESOURCES.json -o DB    Build a resource database',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('written', nargs='?', help='Written form, e.g. 大人')
    parser.add_argument('reading', nargs='?', help='Reading in kana, e.g. おとな')

    parser.add_argument(
        '-n', '--name',
        action='store_true',
        help='The word is a proper name (allow name readings)',
    )

    parser.add_argument(
        '-b', '--batch',
        type=str,
        default=None,
        metavar='FILE',
        help='Solve every written<TAB>reading[<TAB>name] line of FILE',
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        '-r', '--resources',
        type=str,
        default=None,
        metavar='FILE',
        help='JSON resource file',
    )
    source.add_argument(
        '-d', '--database',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to SQLite resource database',
    )

    parser.add_argument(
        '-f', '--full',
        action='store_true',
        help='Print results as JSON',
    )

    parser.add_argument(
        '--fallback',
        action='store_true',
        help='Solve single-kanji words by elimination when no reading matches',
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log progress',
    )

    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version information',
    )

    parsed = parser.parse_args(args_list)

    if parsed.version:
        print(f'furiwake {__version__}')
        return EXIT_SOLVED

    if parsed.batch is None and (parsed.written is None or parsed.reading is None):
        parser.print_help()
        return EXIT_ERROR

    configure_logging(parsed.verbose)

    try:
        resources = load_resources(parsed.resources, parsed.database)
    except Exception as e:
        print(f'Error loading resources: {e}', file=sys.stderr)
        return EXIT_ERROR

    solver = Solver(resources, single_kanji_fallback=parsed.fallback or None)

    try:
        if parsed.batch is not None:
            return batch_command(solver, parsed.batch, parsed.full)
        return solve_command(solver, parsed.written, parsed.reading, parsed.name, parsed.full)
    except Exception as e:
        print(f'Error processing input: {e}', file=sys.stderr)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
