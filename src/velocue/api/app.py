"""Application factory for the cue engine API."""

from typing import Optional

from fastapi import FastAPI

from velocue.api import routes as ride_routes
from velocue.core.config import EngineConfig
from velocue.core.session import RideSession
from velocue.core.timeline import Track
from velocue.logs.config import configure_logging


def create_app(track: Optional[Track] = None, config: Optional[EngineConfig] = None, setup_logging: bool = True) -> FastAPI:
    if setup_logging:
        configure_logging()
    config = config or EngineConfig.from_env()
    session = RideSession(track, config) if track is not None else None
    ride_routes.configure_ride(session, config)

    app = FastAPI(title="VeloCue cue engine")
    app.include_router(ride_routes.router)
    return app
