# /backend/calmtunes/main.py

from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from sqlalchemy import text

from calmtunes.config import Settings, load_settings
from calmtunes.db import Database
from calmtunes.logger import configure_logging
from calmtunes.middleware.basic_auth import BasicAuthMiddleware


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level, settings.log_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 앱 시작 시
        database = Database(settings)
        await database.open()
        app.state.database = database
        try:
            yield
        finally:
            # 앱 종료 시
            await database.close()

    app = FastAPI(title="CalmTunes API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(BasicAuthMiddleware, settings=settings)

    @app.get("/health")
    async def health():
        return {"ok": True}

    @app.get("/db-health")
    async def db_health(request: Request):
        # 간단한 ping
        async with request.app.state.database.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return {"db": "ok", "result": result.scalar_one()}

    return app
