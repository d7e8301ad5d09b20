"""
Configuration for Season Tracker.

Team, endpoints and top-flight competition are deployment constants;
environment variables (or a local .env) override the defaults.
"""
from dataclasses import dataclass
import os

from dotenv import load_dotenv

load_dotenv()

ESPN_SCHEDULE = 'https://site.api.espn.com/apis/site/v2/sports/soccer/all/teams/{team_id}/schedule'


@dataclass(frozen=True)
class Settings:
    """Immutable settings from environment."""

    team_id: str = os.getenv('TEAM_ID', '382')
    results_url: str = os.getenv('RESULTS_URL', ESPN_SCHEDULE.format(team_id=team_id))
    fixtures_url: str = os.getenv(
        'FIXTURES_URL', ESPN_SCHEDULE.format(team_id=team_id) + '?fixture=true'
    )
    logo_url_template: str = os.getenv(
        'LOGO_URL_TEMPLATE', 'https://a.espncdn.com/i/teamlogos/soccer/500/{team_id}.png'
    )
    top_flight: str = os.getenv('TOP_FLIGHT', 'Premier League')
    user_agent: str = os.getenv('USER_AGENT', 'seasontracker/1.0 (+github)')
    req_timeout_s: float = float(os.getenv('REQ_TIMEOUT_S', '12'))
    retries: int = int(os.getenv('RETRIES', '1'))
    host: str = os.getenv('HOST', '127.0.0.1')
    port: int = int(os.getenv('PORT', '8000'))


settings = Settings()
