"""
Event normalization.

Turns loosely-shaped ESPN schedule events into canonical Match records
and maps league/season slugs to canonical competition names.
"""

import logging
import math
import re
from typing import Any, Mapping

from seasontracker.config import settings
from seasontracker.models import Match, TeamSide

logger = logging.getLogger('seasontracker')

# =============================================================================
# COMPETITION RULES (first match wins)
# =============================================================================

COMPETITION_RULES: list[tuple[str, tuple[str, ...], tuple[str, ...]]] = [
    # (canonical, exact slugs, substrings)
    ('Premier League', ('eng.1',), ('premier',)),
    ('Champions League', (), ('uefa.champions',)),
    ('FA Cup', (), ('eng.fa',)),
    ('Carabao Cup', (), ('eng.league_cup', 'carabao')),
    ('Community Shield', (), ('eng.community_shield',)),
    ('Friendly', (), ('club.friendly',)),
    ('Club World Cup', (), ('fifa.cwc', 'club.world')),
]

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def classify_competition(slug: str | None) -> str:
    """
    Map a league or season slug to a canonical competition name.

    Args:
        slug: Raw slug such as 'eng.1' or 'uefa.champions' (any case)

    Returns:
        Canonical name, the original slug if unrecognized, or 'Other' if empty
    """
    if not slug:
        return 'Other'
    lower = slug.lower()
    for canonical, exact, contains in COMPETITION_RULES:
        if lower in exact or any(part in lower for part in contains):
            return canonical
    return slug


def get_all_competitions() -> list[str]:
    """Get canonical competition names in rule order."""
    return [canonical for canonical, _, _ in COMPETITION_RULES]


# =============================================================================
# FIELD EXTRACTION
# =============================================================================


def _dig(obj: Any, *path: str | int) -> Any:
    """Follow a path of keys/indexes, returning None at the first gap."""
    for key in path:
        if isinstance(key, int):
            if not isinstance(obj, list) or not -len(obj) <= key < len(obj):
                return None
        elif not isinstance(obj, Mapping) or key not in obj:
            return None
        obj = obj[key]
    return obj


def _to_int(value: Any) -> int:
    """Parse a leading integer; anything unparsable or negative is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return max(int(value), 0)
    if isinstance(value, str):
        m = _LEADING_INT.match(value)
        if m:
            return max(int(m.group(1)), 0)
    return 0


def parse_score(competitor: Mapping) -> int:
    """
    Extract a competitor's score.

    ESPN sends one of three shapes: {'displayValue': '2', ...},
    {'value': 2.0, ...} or a bare '2' / 2. The first shape present wins.
    """
    score = competitor.get('score')
    if isinstance(score, Mapping):
        if score.get('displayValue'):
            return _to_int(score['displayValue'])
        if 'value' in score:
            return _to_int(score['value'])
        return 0
    if isinstance(score, (str, int, float)):
        return _to_int(score)
    return 0


def _team_side(competitor: Mapping) -> TeamSide:
    team = competitor['team']
    team_id = str(team['id'])
    return TeamSide(
        id=team_id,
        name=team.get('displayName') or team.get('name'),
        short_name=team.get('shortDisplayName') or team.get('abbreviation'),
        logo_url=team.get('logo') or settings.logo_url_template.format(team_id=team_id),
        score=parse_score(competitor),
    )


def _result(tracked: int, opponent: int) -> str:
    if tracked > opponent:
        return 'win'
    if tracked < opponent:
        return 'loss'
    return 'draw'


# =============================================================================
# EVENTS -> MATCHES
# =============================================================================


def normalize_event(
    event: Mapping,
    is_fixture: bool = False,
    team_id: str | None = None,
) -> Match | None:
    """
    Normalize one ESPN event into a Match.

    Args:
        event: Raw event record
        is_fixture: True for scheduled (not yet played) events
        team_id: Tracked team id (defaults to settings.team_id)

    Returns:
        Match, or None if the event is malformed or doesn't involve the team
    """
    team_id = team_id or settings.team_id
    try:
        competitors = _dig(event, 'competitions', 0, 'competitors') or []
        if not isinstance(competitors, list) or len(competitors) != 2:
            return None

        tracked = next(
            (c for c in competitors if str(_dig(c, 'team', 'id')) == team_id), None
        )
        opponent = next(
            (c for c in competitors if str(_dig(c, 'team', 'id')) != team_id), None
        )
        if tracked is None or opponent is None:
            return None

        is_home = tracked.get('homeAway') == 'home'
        home, away = (tracked, opponent) if is_home else (opponent, tracked)

        tracked_score = parse_score(tracked)
        opponent_score = parse_score(opponent)
        result = None if is_fixture else _result(tracked_score, opponent_score)

        slug = _dig(event, 'league', 'slug') or _dig(event, 'season', 'slug') or ''

        return Match(
            id=str(event['id']),
            date=event['date'],
            home_team=_team_side(home),
            away_team=_team_side(away),
            is_home=is_home,
            tracked_score=tracked_score,
            opponent_score=opponent_score,
            result=result,
            competition=classify_competition(slug),
            is_fixture=is_fixture,
            venue=_dig(event, 'competitions', 0, 'venue', 'fullName') or '',
        )

    except (KeyError, TypeError, AttributeError, ValueError) as e:
        event_id = event.get('id') if isinstance(event, Mapping) else None
        logger.warning(f'Skipping event {event_id}: {e}')
        return None


def parse_events(payload: Mapping | None, is_fixture: bool = False) -> list[Match]:
    """
    Normalize every event in an ESPN schedule payload.

    Args:
        payload: Decoded JSON response ({'events': [...]})
        is_fixture: True for the fixtures feed

    Returns:
        Matches in input order, malformed events dropped
    """
    events = payload.get('events') if isinstance(payload, Mapping) else None
    if not events:
        return []
    if not isinstance(events, list):
        logger.warning(f'Expected a list of events, got {type(events).__name__}')
        return []

    matches: list[Match] = []
    for event in events:
        match = normalize_event(event, is_fixture=is_fixture)
        if match:
            matches.append(match)

    logger.debug(f'Parsed {len(matches)}/{len(events)} events (fixture={is_fixture})')
    return matches
