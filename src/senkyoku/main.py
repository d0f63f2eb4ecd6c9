"""FastAPI application factory.

The HTTP side only answers the hosting platform's keep-alive probe; the
real work happens in the Discord bot started from the lifespan.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from senkyoku.config import Settings
from senkyoku.core.district_table import build_district_table
from senkyoku.db.engine import create_engine, create_tables, get_session
from senkyoku.db.repository import Repository
from senkyoku.models.constants import DISTRICT_COUNTS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: create engine/tables, seed districts, optionally start the Discord bot."""
    settings: Settings = app.state.settings
    engine = create_engine(settings.database_url)
    await create_tables(engine)

    if settings.senkyoku_seed_districts:
        async with get_session(engine) as session:
            inserted = await Repository(session).seed_district_counts(DISTRICT_COUNTS)
        if inserted:
            logger.info("district_seed inserted=%d", inserted)

    app.state.engine = engine
    app.state.district_table = build_district_table(settings, engine)

    discord_bot = None
    from senkyoku.discord.bot import is_discord_enabled

    if is_discord_enabled(settings):
        from senkyoku.discord.bot import start_discord_bot

        discord_bot = await start_discord_bot(settings, app.state.district_table)
        app.state.discord_bot = discord_bot
        logger.info("discord_bot_integration_started")
    else:
        app.state.discord_bot = None
        logger.info("discord_bot_integration_disabled")

    yield

    if discord_bot is not None:
        await discord_bot.close()
        logger.info("discord_bot_integration_stopped")

    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the senkyoku FastAPI application."""
    settings = settings or Settings()

    logging.basicConfig(
        level=getattr(logging, settings.senkyoku_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="senkyoku",
        version="0.1.0",
        description="Discord bot that assigns electoral sub-district roles",
        docs_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "Bot is healthy!"

    @app.get("/health")
    async def health() -> dict[str, object]:
        bot = getattr(app.state, "discord_bot", None)
        return {
            "status": "ok",
            "env": settings.senkyoku_env,
            "discord": bot is not None and bot.is_ready(),
        }

    return app


app = create_app()
