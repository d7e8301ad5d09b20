"""
Data loading for Season Tracker.

Fetches the results and fixtures feeds concurrently, normalizes both and
computes league statistics. TrackerController guards against overlapping
reloads and holds the last good snapshot plus any user-facing error.
"""
import asyncio
import json
import logging
import time
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import BaseModel, Field
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
)

from seasontracker.config import settings
from seasontracker.models import Match, Stats
from seasontracker.normalize import parse_events
from seasontracker.stats import aggregate

logger = logging.getLogger('seasontracker')

LOAD_ERROR_MESSAGE = 'Failed to load data. Click refresh to try again.'


class LoadError(Exception):
    """Load-level failure (aborts the whole reload)."""
    pass


class FetchError(LoadError):
    """HTTP fetch error for either feed."""
    pass


def log_event(**kv):
    """Emit structured JSON log line."""
    print(json.dumps(kv, separators=(',', ':'), default=str))


class TrackerSnapshot(BaseModel):
    """Everything one load produces; replaced wholesale on the next load."""

    results: list[Match] = Field(default_factory=list)
    fixtures: list[Match] = Field(default_factory=list)
    stats: Stats = Field(default_factory=Stats)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def build_snapshot(results_payload: Any, fixtures_payload: Any) -> TrackerSnapshot:
    """Parse both feeds and compute stats over the results."""
    results = parse_events(results_payload, is_fixture=False)
    fixtures = parse_events(fixtures_payload, is_fixture=True)
    logger.info(f'Results: {len(results)} Fixtures: {len(fixtures)}')
    return TrackerSnapshot(results=results, fixtures=fixtures, stats=aggregate(results))


class ScheduleClient:
    """
    Async client for the ESPN team schedule feeds.

    No retries by default (RETRIES=1); refresh is the retry.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self.client = client or httpx.AsyncClient(
            follow_redirects=True,
            headers={'User-Agent': settings.user_agent, 'Accept': 'application/json'},
            timeout=settings.req_timeout_s,
        )

    @retry(
        reraise=True,
        stop=stop_after_attempt(settings.retries),
        wait=wait_exponential_jitter(initial=0.5, max=6),
        retry=retry_if_exception_type(FetchError),
    )
    async def _get_json(self, url: str) -> Any:
        """Fetch URL and decode JSON."""
        start = time.time()
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            log_event(event='fetch_failed', url=url, error=str(e))
            raise FetchError(f'Request to {url} failed: {e}') from e
        elapsed_ms = int((time.time() - start) * 1000)

        log_event(event='fetch', url=url, status=response.status_code, ms=elapsed_ms)

        if not response.is_success:
            raise FetchError(f'Failed to fetch {url}: HTTP {response.status_code}')
        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f'Invalid JSON from {url}') from e

    async def fetch_results(self) -> Any:
        return await self._get_json(settings.results_url)

    async def fetch_fixtures(self) -> Any:
        return await self._get_json(settings.fixtures_url)

    async def fetch_all(self) -> tuple[Any, Any]:
        """Fetch both feeds concurrently; either failing fails both."""
        results_payload, fixtures_payload = await asyncio.gather(
            self.fetch_results(),
            self.fetch_fixtures(),
        )
        return results_payload, fixtures_payload

    async def aclose(self):
        await self.client.aclose()


async def fetch_snapshot(client: ScheduleClient | None = None) -> TrackerSnapshot:
    """
    One-shot load for scripts and the CLI.

    Raises:
        FetchError: if either feed can't be fetched
    """
    owned = client is None
    client = client or ScheduleClient()
    try:
        results_payload, fixtures_payload = await client.fetch_all()
    finally:
        if owned:
            await client.aclose()
    return build_snapshot(results_payload, fixtures_payload)


class TrackerController:
    """
    Owns the load state behind the UI.

    A load requested while another is in flight is ignored.
    """

    def __init__(self, client: ScheduleClient | None = None):
        self.client = client or ScheduleClient()
        self.is_loading = False
        self.snapshot: TrackerSnapshot | None = None
        self.error: str | None = None

    @property
    def has_loaded(self) -> bool:
        return self.snapshot is not None or self.error is not None

    async def load(self) -> TrackerSnapshot | None:
        """
        Reload both feeds.

        Returns:
            The new snapshot, or None if skipped or failed (see self.error)
        """
        if self.is_loading:
            logger.debug('Load already in progress, ignoring')
            return None

        self.is_loading = True
        try:
            results_payload, fixtures_payload = await self.client.fetch_all()
            snapshot = build_snapshot(results_payload, fixtures_payload)
        except Exception as e:  # noqa: BLE001
            logger.error(f'Load error: {e}', exc_info=True)
            self.error = LOAD_ERROR_MESSAGE
            return None
        finally:
            self.is_loading = False

        self.snapshot = snapshot
        self.error = None
        log_event(
            event='load_done',
            results=len(snapshot.results),
            fixtures=len(snapshot.fixtures),
            points=snapshot.stats.points,
        )
        return snapshot

    async def aclose(self):
        await self.client.aclose()
