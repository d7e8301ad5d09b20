"""
CLI entrypoints for Season Tracker.

Usage:
    season-tracker show --tab fixtures
    season-tracker stats
    season-tracker serve --port 8000
"""
import argparse
import asyncio
import logging
import sys

from seasontracker.config import settings
from seasontracker.loader import LoadError, fetch_snapshot, LOAD_ERROR_MESSAGE
from seasontracker.view import (
    TABS,
    display_fixtures,
    display_results,
    render_stats,
    render_table,
)

logger = logging.getLogger('seasontracker')


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def _load():
    try:
        return asyncio.run(fetch_snapshot())
    except LoadError as e:
        logger.error(f'Load error: {e}')
        print(LOAD_ERROR_MESSAGE, file=sys.stderr)
        return None


def run_show(tab: str = 'results', all_competitions: bool = False) -> int:
    """Print one tab as a table. Returns exit code."""
    snapshot = _load()
    if snapshot is None:
        return 1

    if tab == 'fixtures':
        matches = display_fixtures(snapshot.fixtures, all_competitions=all_competitions)
    else:
        matches = display_results(snapshot.results, all_competitions=all_competitions)

    print(render_stats(snapshot.stats))
    print()
    print(render_table(matches, tab))
    return 0


def run_stats() -> int:
    snapshot = _load()
    if snapshot is None:
        return 1
    print(render_stats(snapshot.stats))
    return 0


def run_serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run('seasontracker.web:create_app', factory=True, host=host, port=port)
    return 0


def main(argv=None):
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog='season-tracker',
        description='Team results, fixtures and league stats',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', required=True)

    show_parser = subparsers.add_parser('show', help='Print results or fixtures')
    show_parser.add_argument('--tab', choices=TABS, default='results', help='Which list to show')
    show_parser.add_argument('--all', action='store_true', help='Include every competition')

    subparsers.add_parser('stats', help='Print league statistics')

    serve_parser = subparsers.add_parser('serve', help='Run the web UI')
    serve_parser.add_argument('--host', default=settings.host, help='Bind address')
    serve_parser.add_argument('--port', type=int, default=settings.port, help='Bind port')

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == 'show':
        sys.exit(run_show(args.tab, all_competitions=args.all))
    elif args.command == 'stats':
        sys.exit(run_stats())
    elif args.command == 'serve':
        sys.exit(run_serve(args.host, args.port))


if __name__ == '__main__':
    main()
