"""
Rendering for Season Tracker.

Display rules (top-flight filter, date ordering, competition styles,
placeholders) plus the HTML page and terminal table built on them.
"""

import enum
from datetime import datetime, timezone
from html import escape
from typing import Iterable

import pandas as pd

from seasontracker.config import settings
from seasontracker.models import Match, Stats

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)

TABS = ('results', 'fixtures')


class CompetitionStyle(enum.Enum):
    """CSS class for a competition badge."""

    PREMIER_LEAGUE = 'premier-league'
    CHAMPIONS_LEAGUE = 'champions-league'
    FA_CUP = 'fa-cup'
    CARABAO_CUP = 'carabao-cup'
    COMMUNITY_SHIELD = 'community-shield'
    FRIENDLY = 'friendly'


_STYLES = {
    'Premier League': CompetitionStyle.PREMIER_LEAGUE,
    'Champions League': CompetitionStyle.CHAMPIONS_LEAGUE,
    'FA Cup': CompetitionStyle.FA_CUP,
    'Carabao Cup': CompetitionStyle.CARABAO_CUP,
    'Community Shield': CompetitionStyle.COMMUNITY_SHIELD,
    'Friendly': CompetitionStyle.FRIENDLY,
}


def competition_style(competition: str) -> CompetitionStyle:
    """Badge style for a competition; unknown names get the league style."""
    return _STYLES.get(competition, CompetitionStyle.PREMIER_LEAGUE)


# =============================================================================
# FORMATTING
# =============================================================================


def _parse(date_str: str) -> datetime | None:
    try:
        dt = datetime.fromisoformat(date_str.replace('Z', '+00:00'))
    except (AttributeError, ValueError):
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def format_date(date_str: str) -> str:
    """'2024-08-17T14:00Z' -> 'Sat, Aug 17' (UTC)."""
    dt = _parse(date_str)
    if dt is None:
        return date_str or ''
    dt = dt.astimezone(timezone.utc)
    return f'{dt:%a}, {dt:%b} {dt.day}'


def format_time(date_str: str) -> str:
    """'2024-08-17T14:00Z' -> '2:00 PM' (UTC)."""
    dt = _parse(date_str)
    if dt is None:
        return ''
    dt = dt.astimezone(timezone.utc)
    return f'{dt.hour % 12 or 12}:{dt:%M} {"AM" if dt.hour < 12 else "PM"}'


def result_badge(result: str | None) -> str:
    return {'win': 'W', 'draw': 'D'}.get(result, 'L')


def empty_message(tab: str) -> str:
    if tab == 'fixtures':
        return f'No upcoming {settings.top_flight} fixtures'
    return f'No {settings.top_flight} results yet'


# =============================================================================
# DISPLAY LISTS
# =============================================================================


def _sort_key(match: Match) -> datetime:
    return match.kickoff or _EPOCH


def display_results(matches: Iterable[Match], all_competitions: bool = False) -> list[Match]:
    """Top-flight results, most recent first."""
    shown = [m for m in matches if all_competitions or m.competition == settings.top_flight]
    return sorted(shown, key=_sort_key, reverse=True)


def display_fixtures(matches: Iterable[Match], all_competitions: bool = False) -> list[Match]:
    """Top-flight fixtures, soonest first."""
    shown = [m for m in matches if all_competitions or m.competition == settings.top_flight]
    return sorted(shown, key=_sort_key)


# =============================================================================
# TERMINAL
# =============================================================================


def matches_frame(matches: list[Match]) -> pd.DataFrame:
    """Tabular view of matches, one row each, in the given order."""
    rows = []
    for m in matches:
        rows.append({
            'date': m.date,
            'competition': m.competition,
            'home': m.home_team.label,
            'score': '-' if m.is_fixture else f'{m.home_team.score}-{m.away_team.score}',
            'away': m.away_team.label,
            'result': '' if m.is_fixture else result_badge(m.result),
            'venue': m.venue,
        })
    df = pd.DataFrame(rows, columns=['date', 'competition', 'home', 'score', 'away', 'result', 'venue'])
    df['date'] = pd.to_datetime(df['date'], errors='coerce', utc=True, format='ISO8601')
    return df


def render_table(matches: list[Match], tab: str = 'results') -> str:
    """Plain-text table for a tab, or its placeholder message."""
    if not matches:
        return empty_message(tab)
    df = matches_frame(matches)
    df['date'] = df['date'].dt.strftime('%a %d %b %H:%M')
    if tab == 'fixtures':
        df = df.drop(columns=['score', 'result'])
    return df.to_string(index=False)


def render_stats(stats: Stats) -> str:
    return (
        f'{settings.top_flight}: P{stats.played} W{stats.won} D{stats.drawn} L{stats.lost} '
        f'GF{stats.goals_for} GA{stats.goals_against} GD{stats.goal_difference:+d} Pts{stats.points}'
    )


# =============================================================================
# HTML
# =============================================================================


def _team_html(side, css: str) -> str:
    label = escape(side.label)
    return (
        f'<div class="team {css}">'
        f'<img src="{escape(side.logo_url)}" alt="{label}" class="team-logo">'
        f'<div class="team-info"><div class="team-name">{label}</div></div>'
        f'</div>'
    )


def _meta_html(match: Match) -> str:
    return (
        f'<div class="match-meta">'
        f'<span class="match-date">{escape(format_date(match.date))}</span>'
        f'<span class="match-competition {competition_style(match.competition).value}">'
        f'{escape(match.competition)}</span>'
        f'</div>'
    )


def result_card(match: Match) -> str:
    home, away = match.home_team, match.away_team
    css = match.result or ''
    home_cls = 'score tracked' if home.id == settings.team_id else 'score'
    away_cls = 'score tracked' if away.id == settings.team_id else 'score'
    return (
        f'<div class="match-card {css}">{_meta_html(match)}'
        f'<div class="match-teams">{_team_html(home, "home")}'
        f'<div class="match-score"><span class="{home_cls}">{home.score}</span>'
        f'<span class="score-divider">-</span>'
        f'<span class="{away_cls}">{away.score}</span></div>'
        f'{_team_html(away, "away")}'
        f'<div class="result-badge {css}">{result_badge(match.result)}</div>'
        f'</div></div>'
    )


def fixture_card(match: Match) -> str:
    return (
        f'<div class="match-card fixture">{_meta_html(match)}'
        f'<div class="match-teams">{_team_html(match.home_team, "home")}'
        f'<div class="match-score"><span class="fixture-time">{escape(format_time(match.date))}</span></div>'
        f'{_team_html(match.away_team, "away")}'
        f'</div></div>'
    )


def _list_html(controller, tab: str) -> str:
    if controller.is_loading or not controller.has_loaded:
        return f'<div class="loading">Loading {tab}...</div>'
    if controller.error:
        return f'<div class="error">{escape(controller.error)}</div>'
    snapshot = controller.snapshot
    if tab == 'fixtures':
        matches, card = display_fixtures(snapshot.fixtures), fixture_card
    else:
        matches, card = display_results(snapshot.results), result_card
    if not matches:
        return f'<div class="empty">{escape(empty_message(tab))}</div>'
    return ''.join(card(m) for m in matches)


def render_page(controller, tab: str = 'results') -> str:
    """
    Full tracker page for a TrackerController's current state.

    Args:
        controller: TrackerController (reads snapshot, error, is_loading)
        tab: Active tab, 'results' or 'fixtures'

    Returns:
        HTML document
    """
    if tab not in TABS:
        tab = 'results'
    snapshot = controller.snapshot
    stats = snapshot.stats if snapshot else Stats()
    updated = f'{snapshot.updated_at:%H:%M} UTC' if snapshot else '-'

    stat_cells = ''.join(
        f'<div class="stat"><span id="{key.replace("_", "-")}">{getattr(stats, key)}</span>'
        f'<label>{label}</label></div>'
        for key, label in [
            ('played', 'P'), ('won', 'W'), ('drawn', 'D'), ('lost', 'L'),
            ('goals_for', 'GF'), ('goals_against', 'GA'), ('points', 'Pts'),
        ]
    )
    tabs = ''.join(
        f'<a class="tab{" active" if t == tab else ""}" href="/?tab={t}">{t.title()}</a>'
        for t in TABS
    )
    sections = ''.join(
        f'<section id="{t}-section" class="{"" if t == tab else "hidden"}">'
        f'<div id="{t}-list">{_list_html(controller, t)}</div></section>'
        for t in TABS
    )
    button = (
        '<button id="refresh-btn" disabled>Refreshing...</button>'
        if controller.is_loading
        else '<button id="refresh-btn" type="submit">Refresh</button>'
    )

    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        f'<title>{escape(settings.top_flight)} Season Tracker</title></head><body>'
        f'<header><div class="stats">{stat_cells}</div>'
        f'<form method="post" action="/refresh?tab={tab}">'
        f'{button}</form>'
        f'<span>Last updated: <span id="last-updated">{updated}</span></span></header>'
        f'<nav class="tabs">{tabs}</nav>{sections}'
        '</body></html>'
    )
