"""
Web UI for Season Tracker.

Serves the tabbed results/fixtures page with a refresh action, plus JSON
views of the current snapshot.

Run with: uvicorn --factory seasontracker.web:create_app
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse

from seasontracker import __version__
from seasontracker.loader import TrackerController
from seasontracker.view import TABS, render_page

logger = logging.getLogger('seasontracker')


def create_app(controller: TrackerController | None = None) -> FastAPI:
    """Build the app around a controller (a live ESPN one by default)."""
    controller = controller or TrackerController()
    start = datetime.now(timezone.utc).isoformat()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info('Season Tracker starting up...')
        yield
        await controller.aclose()
        logger.info('Season Tracker shutting down...')

    app = FastAPI(title='season-tracker', version=__version__, lifespan=lifespan)
    app.state.controller = controller

    async def current_snapshot():
        if not controller.has_loaded:
            await controller.load()
        if controller.error:
            raise HTTPException(status_code=503, detail=controller.error)
        if controller.snapshot is None:
            raise HTTPException(status_code=503, detail='Data is still loading')
        return controller.snapshot

    @app.get('/', response_class=HTMLResponse)
    async def index(tab: str = 'results'):
        if not controller.has_loaded:
            await controller.load()
        return render_page(controller, tab)

    @app.post('/refresh')
    async def refresh(tab: str = 'results'):
        await controller.load()
        tab = tab if tab in TABS else 'results'
        return RedirectResponse(url=f'/?tab={tab}', status_code=303)

    @app.get('/api/matches')
    async def matches():
        snapshot = await current_snapshot()
        return snapshot.model_dump(mode='json', exclude={'stats'})

    @app.get('/api/stats')
    async def stats():
        snapshot = await current_snapshot()
        return snapshot.stats.model_dump()

    @app.get('/health')
    def health():
        return {'ok': True, 'start': start}

    @app.get('/ready')
    def ready():
        return {'ready': controller.snapshot is not None, 'loading': controller.is_loading}

    return app
