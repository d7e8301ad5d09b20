"""
League statistics over completed matches.
"""

from typing import Iterable

from seasontracker.config import settings
from seasontracker.models import Match, Stats

POINTS = {'win': 3, 'draw': 1, 'loss': 0}


def aggregate(matches: Iterable[Match], competition: str | None = None) -> Stats:
    """
    Reduce played matches of one competition into a league-table line.

    Args:
        matches: Normalized matches (fixtures are ignored)
        competition: Competition to count (defaults to settings.top_flight)

    Returns:
        Fresh Stats object
    """
    competition = competition or settings.top_flight
    played = won = drawn = lost = goals_for = goals_against = points = 0

    for match in matches:
        if match.competition != competition or match.is_fixture:
            continue

        played += 1
        goals_for += match.tracked_score
        goals_against += match.opponent_score

        if match.result == 'win':
            won += 1
        elif match.result == 'draw':
            drawn += 1
        else:
            lost += 1
        points += POINTS[match.result]

    return Stats(
        played=played,
        won=won,
        drawn=drawn,
        lost=lost,
        goals_for=goals_for,
        goals_against=goals_against,
        points=points,
    )
