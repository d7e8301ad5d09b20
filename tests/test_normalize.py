"""
Tests for competition classification and event normalization.

Unit tests run without network access.
"""
import pytest

from seasontracker import classify_competition, normalize_event, parse_events
from seasontracker.normalize import get_all_competitions, parse_score

TEAM_ID = '382'


class TestClassifier:
    """Tests for slug -> competition mapping."""

    def test_known_slugs(self):
        """Test ESPN slugs map to canonical names."""
        assert classify_competition('eng.1') == 'Premier League'
        assert classify_competition('uefa.champions') == 'Champions League'
        assert classify_competition('eng.fa') == 'FA Cup'
        assert classify_competition('eng.league_cup') == 'Carabao Cup'
        assert classify_competition('eng.community_shield') == 'Community Shield'
        assert classify_competition('club.friendly') == 'Friendly'
        assert classify_competition('fifa.cwc') == 'Club World Cup'

    def test_substring_rules(self):
        """Test season-style slugs match by substring."""
        assert classify_competition('2024-25-english-premier-league') == 'Premier League'
        assert classify_competition('carabao-cup-2024') == 'Carabao Cup'
        assert classify_competition('uefa.champions_qual') == 'Champions League'
        assert classify_competition('club.world.cup') == 'Club World Cup'

    def test_case_insensitive(self):
        """Test case insensitivity."""
        assert classify_competition('ENG.1') == classify_competition('eng.1') == 'Premier League'
        assert classify_competition('UEFA.Champions') == 'Champions League'

    def test_first_rule_wins(self):
        """Test 'premier' beats later rules in the same slug."""
        assert classify_competition('premier.carabao') == 'Premier League'

    def test_unknown_returns_original(self):
        """Test unknown slugs return the original, not lower-cased."""
        assert classify_competition('ESP.1') == 'ESP.1'
        assert classify_competition('') == 'Other'
        assert classify_competition(None) == 'Other'

    def test_rule_order(self):
        assert get_all_competitions()[0] == 'Premier League'
        assert len(get_all_competitions()) == 7


class TestScoreParsing:
    """Tests for the three ESPN score shapes."""

    @pytest.mark.parametrize('score', [
        {'value': 3.0, 'displayValue': '3'},
        {'value': 3.0},
        '3',
        3,
    ])
    def test_shapes_agree(self, score):
        assert parse_score({'score': score}) == 3

    def test_display_value_takes_precedence(self):
        assert parse_score({'score': {'value': 1.0, 'displayValue': '2'}}) == 2

    def test_empty_display_falls_back_to_value(self):
        assert parse_score({'score': {'value': 4.0, 'displayValue': ''}}) == 4

    def test_leading_integer(self):
        """Test '2 (4)' style penalty displays keep the leading number."""
        assert parse_score({'score': {'displayValue': '2 (4)'}}) == 2

    def test_unparsable_is_zero(self):
        assert parse_score({'score': {'displayValue': 'TBD'}}) == 0
        assert parse_score({'score': {'value': None}}) == 0
        assert parse_score({'score': 'abc'}) == 0
        assert parse_score({'score': {}}) == 0
        assert parse_score({}) == 0

    def test_never_negative(self):
        assert parse_score({'score': '-1'}) == 0
        assert parse_score({'score': {'value': -2.0}}) == 0


class TestNormalizeEvent:
    """Tests for event -> Match normalization."""

    def test_home_win(self, make_event):
        match = normalize_event(make_event('401', 2, 0, home=True))
        assert match is not None
        assert match.id == '401'
        assert match.is_home is True
        assert match.home_team.id == TEAM_ID
        assert match.away_team.id == '359'
        assert match.tracked_score == 2
        assert match.opponent_score == 0
        assert match.home_team.score == 2
        assert match.result == 'win'
        assert match.competition == 'Premier League'
        assert match.venue == 'Etihad Stadium'
        assert match.is_fixture is False

    def test_away_loss(self, make_event):
        match = normalize_event(make_event(tracked_score=1, opponent_score=3, home=False))
        assert match.is_home is False
        assert match.away_team.id == TEAM_ID
        assert match.home_team.score == 3
        assert match.away_team.score == 1
        assert match.result == 'loss'

    def test_draw(self, make_event):
        assert normalize_event(make_event(tracked_score=1, opponent_score=1)).result == 'draw'

    @pytest.mark.parametrize('shape', ['display', 'value', 'string', 'number'])
    def test_score_shapes_same_result(self, make_event, shape):
        match = normalize_event(make_event(tracked_score=3, opponent_score=1, score_shape=shape))
        assert (match.tracked_score, match.opponent_score) == (3, 1)

    def test_fixture_has_no_result(self, make_event):
        """Test fixtures never carry a result, whatever the scores say."""
        match = normalize_event(make_event(tracked_score=2, opponent_score=0), is_fixture=True)
        assert match.is_fixture is True
        assert match.result is None

    def test_missing_scores_default_to_zero(self, make_event):
        match = normalize_event(make_event(score_shape=None))
        assert match.tracked_score == 0
        assert match.opponent_score == 0
        assert match.result == 'draw'

    def test_season_slug_fallback(self, make_event):
        event = make_event(league_slug=None, season_slug='2024-25-uefa.champions')
        assert normalize_event(event).competition == 'Champions League'

    def test_no_slug_is_other(self, make_event):
        assert normalize_event(make_event(league_slug=None)).competition == 'Other'

    def test_display_fallbacks(self, make_event):
        """Test name/short name/logo fallbacks for the opponent."""
        event = make_event(opponent_id='360')
        team = event['competitions'][0]['competitors'][1]['team']
        del team['displayName']
        del team['shortDisplayName']
        team['name'] = 'Man United'
        match = normalize_event(event)
        assert match.away_team.name == 'Man United'
        assert match.away_team.short_name == 'ARS'
        assert match.away_team.logo_url == 'https://a.espncdn.com/i/teamlogos/soccer/500/360.png'

    def test_missing_venue(self, make_event):
        event = make_event()
        del event['competitions'][0]['venue']
        assert normalize_event(event).venue == ''

    def test_wrong_competitor_count_rejected(self, make_event):
        event = make_event()
        competitors = event['competitions'][0]['competitors']
        event['competitions'][0]['competitors'] = competitors[:1]
        assert normalize_event(event) is None
        event['competitions'][0]['competitors'] = competitors + competitors[1:]
        assert normalize_event(event) is None

    def test_tracked_team_absent_rejected(self, make_event):
        event = make_event()
        event['competitions'][0]['competitors'][0]['team']['id'] = '1'
        assert normalize_event(event) is None

    def test_both_tracked_rejected(self, make_event):
        event = make_event(opponent_id=TEAM_ID)
        assert normalize_event(event) is None

    def test_no_competitions_rejected(self, make_event):
        event = make_event()
        del event['competitions']
        assert normalize_event(event) is None

    def test_malformed_rejected(self, make_event):
        """Test broken nested fields reject the event instead of raising."""
        event = make_event()
        del event['date']
        assert normalize_event(event) is None

        event = make_event()
        event['competitions'][0]['competitors'][1]['team'] = None
        assert normalize_event(event) is None

        assert normalize_event('not an event') is None

    def test_integer_ids_compared_as_strings(self, make_event):
        event = make_event(event_id=401)
        event['competitions'][0]['competitors'][0]['team']['id'] = 382
        match = normalize_event(event)
        assert match.id == '401'
        assert match.home_team.id == TEAM_ID

    def test_immutable(self, make_event):
        match = normalize_event(make_event())
        with pytest.raises(Exception):
            match.tracked_score = 5


class TestParseEvents:
    """Tests for payload -> list of matches."""

    def test_no_events_key(self):
        assert parse_events({}) == []
        assert parse_events({'events': None}) == []
        assert parse_events(None) == []

    def test_non_list_events(self):
        assert parse_events({'events': {'id': '1'}}) == []

    def test_malformed_dropped(self, make_event):
        """Test one valid and one malformed event yields one match."""
        broken = make_event('2')
        del broken['competitions'][0]['competitors'][0]['team']
        matches = parse_events({'events': [make_event('1'), broken]})
        assert [m.id for m in matches] == ['1']

    def test_preserves_order(self, results_payload):
        matches = parse_events(results_payload)
        assert [m.id for m in matches] == ['1', '2', '3', '4']

    def test_fixture_flag(self, fixtures_payload):
        matches = parse_events(fixtures_payload, is_fixture=True)
        assert len(matches) == 3
        assert all(m.is_fixture and m.result is None for m in matches)
