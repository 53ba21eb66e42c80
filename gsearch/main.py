#!/usr/bin/env python3
"""
gsearch - Entry Point

Search an FSDB filesystem index by name or full path from the command line.
"""

import argparse
import sys
from pathlib import Path

from gsearch import __version__
from gsearch.core.config import Config
from gsearch.core.database import Database, load
from gsearch.core.errors import FormatError
from gsearch.utils.i18n import translator as t
from gsearch.utils.output import OUTPUT_FORMATS, SORT_FIELDS, print_results, sort_results


def load_database_cli(args, config: Config) -> Database:
    """Loads the database named on the command line or in the config, exiting on failure."""
    db_path = Path(args.db).expanduser() if args.db else config.database_path()
    try:
        return load(db_path, verbose=args.verbose, progress=args.progress)
    except FormatError as e:
        print(f"{t.get('error')}: {t.get('invalid_format', db_path, e)}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"{t.get('error')}: {t.get('load_failed', db_path, e)}", file=sys.stderr)
        sys.exit(1)


def output_results(result, args, config: Config):
    sort_by = args.sort or config.get('sort_by')
    if sort_by:
        result = sort_results(result, sort_by)
    print_results(result, args.output or config.get('output_format', 'text'))


def run_search_cli(args, config: Config):
    """Handles the 'search' command."""
    database = load_database_cli(args, config)
    max_results = args.max if args.max is not None else config.get('max_results', 0)
    result = database.search(
        args.query,
        case_sensitive=args.case or config.get('case_sensitive', False),
        whole_word=args.whole or config.get('match_whole_word', False),
        search_files=not args.folders,
        search_folders=not args.files,
        max_results=max_results or 0,
    )
    output_results(result, args, config)


def run_path_cli(args, config: Config):
    """Handles the 'path' command."""
    database = load_database_cli(args, config)
    result = database.search_by_path(
        args.pattern,
        case_sensitive=args.case or config.get('case_sensitive', False),
    )
    output_results(result, args, config)


def run_stats_cli(args, config: Config):
    """Handles the 'stats' command."""
    database = load_database_cli(args, config)
    info = database.info()
    print(t.get('stats_title'))
    print(f"  {t.get('stats_version')}: {info.version}")
    print(f"  {t.get('stats_folders')}: {info.folder_count}")
    print(f"  {t.get('stats_files')}: {info.file_count}")
    print(f"  {t.get('stats_total')}: {info.total_entries}")
    print(f"  {t.get('stats_flags')}: {info.index_flags}")
    print(f"  {t.get('stats_sorted_arrays')}: {info.sorted_array_count}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gsearch',
        description="Search an FSDB filesystem index.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="""
Queries containing * or ? are wildcard patterns matched against the whole
name (or path); other queries match anywhere in the name.

Examples:
  gsearch search test
    (Files and folders whose name contains "test", any case)

  gsearch search "*.txt" --files --sort size
    (Files ending in .txt, smallest first)

  gsearch path "/home/*" --output json
    (Everything below /home as JSON)

  gsearch stats --db ./fsearch.db
"""
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--lang', choices=['en', 'de'], help='Set language for CLI output')

    db_options = argparse.ArgumentParser(add_help=False)
    db_options.add_argument('--db', type=str, help='Path to the database file (default from config)')
    db_options.add_argument('--verbose', action='store_true', help='Print loading diagnostics to stderr')
    db_options.add_argument('--progress', action='store_true', help='Show progress bars while decoding')

    result_options = argparse.ArgumentParser(add_help=False)
    result_options.add_argument('--case', action='store_true', help='Case-sensitive matching')
    result_options.add_argument('--sort', choices=SORT_FIELDS, help='Sort results')
    result_options.add_argument('--output', choices=OUTPUT_FORMATS, help='Output format')

    subparsers = parser.add_subparsers(dest='command', help='Available commands', required=True)

    # --- Search Command ---
    search_parser = subparsers.add_parser('search', parents=[db_options, result_options],
                                          help='Search entry names')
    search_parser.add_argument('query', type=str, help='Search query (supports * and ? wildcards)')
    search_parser.add_argument('--whole', action='store_true', help='Match whole words only')
    scope = search_parser.add_mutually_exclusive_group()
    scope.add_argument('--files', action='store_true', help='Search only files')
    scope.add_argument('--folders', action='store_true', help='Search only folders')
    search_parser.add_argument('--max', type=int, help='Maximum number of results (0 = unlimited)')

    # --- Path Command ---
    path_parser = subparsers.add_parser('path', parents=[db_options, result_options],
                                        help='Search full paths')
    path_parser.add_argument('pattern', type=str, help='Path pattern (supports * and ? wildcards)')

    # --- Stats Command ---
    subparsers.add_parser('stats', parents=[db_options], help='Show database statistics')

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = Config()

    lang = args.lang or config.get('language')
    if lang:
        t.set_language(lang)

    if args.command == 'search':
        run_search_cli(args, config)
    elif args.command == 'path':
        run_path_cli(args, config)
    elif args.command == 'stats':
        run_stats_cli(args, config)


if __name__ == "__main__":
    main()
