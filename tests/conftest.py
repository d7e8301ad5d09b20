"""
Shared fixtures: ESPN-shaped schedule events built without network access.
"""
import pytest

TEAM_ID = '382'


def _score(value, shape):
    if shape == 'display':
        return {'value': float(value), 'displayValue': str(value)}
    if shape == 'value':
        return {'value': float(value)}
    if shape == 'string':
        return str(value)
    if shape == 'number':
        return value
    return None


def build_event(
    event_id='401',
    tracked_score=2,
    opponent_score=0,
    home=True,
    league_slug='eng.1',
    season_slug=None,
    date='2024-08-17T14:00Z',
    score_shape='display',
    opponent_id='359',
):
    """One ESPN schedule event with the tracked team and one opponent."""
    tracked = {
        'homeAway': 'home' if home else 'away',
        'team': {
            'id': TEAM_ID,
            'displayName': 'Manchester City',
            'shortDisplayName': 'Man City',
            'abbreviation': 'MNC',
            'logo': 'https://a.espncdn.com/i/teamlogos/soccer/500/382.png',
        },
        'score': _score(tracked_score, score_shape),
    }
    opponent = {
        'homeAway': 'away' if home else 'home',
        'team': {
            'id': opponent_id,
            'displayName': 'Arsenal',
            'shortDisplayName': 'Arsenal',
            'abbreviation': 'ARS',
        },
        'score': _score(opponent_score, score_shape),
    }
    event = {
        'id': event_id,
        'date': date,
        'competitions': [{
            'venue': {'fullName': 'Etihad Stadium'},
            'competitors': [tracked, opponent] if home else [opponent, tracked],
        }],
    }
    if league_slug is not None:
        event['league'] = {'slug': league_slug}
    if season_slug is not None:
        event['season'] = {'slug': season_slug}
    return event


@pytest.fixture
def make_event():
    return build_event


@pytest.fixture
def results_payload():
    return {'events': [
        build_event('1', 2, 0, date='2024-08-17T14:00Z'),
        build_event('2', 1, 1, home=False, date='2024-08-24T14:00Z'),
        build_event('3', 0, 3, date='2024-08-31T14:00Z'),
        build_event('4', 4, 0, league_slug='uefa.champions', date='2024-09-18T19:00Z'),
    ]}


@pytest.fixture
def fixtures_payload():
    return {'events': [
        build_event('10', 0, 0, league_slug='eng.1', date='2024-10-05T14:00Z', score_shape=None),
        build_event('11', 0, 0, league_slug='eng.1', date='2024-09-28T11:30Z', score_shape=None),
        build_event('12', 0, 0, league_slug='eng.league_cup', date='2024-09-24T19:45Z', score_shape=None),
    ]}
