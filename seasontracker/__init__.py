"""
Season Tracker - results, fixtures and league stats for one team.

Pulls the team's ESPN schedule feeds, normalizes events into Match
records and aggregates top-flight statistics.
"""

__version__ = '1.0.0'

from seasontracker.models import Match, Stats, TeamSide
from seasontracker.normalize import classify_competition, normalize_event, parse_events
from seasontracker.stats import aggregate

__all__ = [
    'Match',
    'Stats',
    'TeamSide',
    'aggregate',
    'classify_competition',
    'normalize_event',
    'parse_events',
]
