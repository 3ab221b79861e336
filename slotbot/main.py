# slotbot/main.py
import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from slotbot.config import Settings
from slotbot.database import Database
from slotbot.handlers.router import router as handlers_router
from slotbot.handlers.user.spin import router as spin_router
from slotbot.scheduler import setup_scheduler
from slotbot.services.game_api import GameApi
from slotbot.services.leaderboard import LeaderboardService
from slotbot.services.ledger import LedgerService
from slotbot.utils.middleware import (
    SlidingWindowLimiter,
    ThrottleMiddleware,
    spin_key,
    user_key,
)


def setup_logging(is_dev: bool) -> None:
    """
    Clean production logging:
    - app logs: INFO (or DEBUG in dev)
    - SQLAlchemy / driver / scheduler logs: WARNING+ (no query/pool spam)
    """
    app_level = logging.DEBUG if is_dev else logging.INFO

    logging.basicConfig(
        level=app_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    for name in (
        "sqlalchemy",
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "sqlalchemy.orm",
        "asyncpg",
        "aiosqlite",
        "apscheduler",
    ):
        logging.getLogger(name).setLevel(logging.WARNING)


def build_dispatcher(settings: Settings, game: GameApi) -> Dispatcher:
    dp = Dispatcher()

    # Inject workflow data
    dp.workflow_data["settings"] = settings
    dp.workflow_data["game"] = game

    # general cap per Telegram user
    dp.message.middleware(
        ThrottleMiddleware(
            SlidingWindowLimiter(settings.rate_limit_per_minute, 60),
            key_func=user_key,
        )
    )

    # one accepted spin per cooldown window, per wallet
    spin_router.message.middleware(
        ThrottleMiddleware(
            SlidingWindowLimiter(1, settings.spin_cooldown_seconds),
            key_func=spin_key,
            error="Too fast",
            message="Please wait a few seconds between spins",
        )
    )

    dp.include_router(handlers_router)
    return dp


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings.is_dev)
    log = logging.getLogger("slotbot")

    db = Database(settings.database_url)
    await db.init_models()
    log.info("DB initialized")

    leaderboard = LeaderboardService(db)
    ledger = LedgerService(db, leaderboard=leaderboard)
    game = GameApi(ledger, leaderboard, db=db, expose_errors=settings.is_dev)

    # projection may be empty/stale after a restart
    await leaderboard.refresh()

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = build_dispatcher(settings, game)

    scheduler = setup_scheduler(leaderboard=leaderboard, settings=settings)
    log.info("Scheduler started")

    try:
        await dp.start_polling(bot)
    except (asyncio.CancelledError, KeyboardInterrupt):
        pass
    except Exception:
        log.exception("Bot crashed")
        raise
    finally:
        # Stop scheduler
        try:
            scheduler.shutdown(wait=False)
        except Exception:
            log.exception("Failed to shutdown scheduler")

        # Let in-flight leaderboard refreshes finish before closing the engine
        try:
            await ledger.wait_background()
        except Exception:
            log.exception("Failed to drain background refreshes")

        # Close DB + bot session
        try:
            await db.close()
        except Exception:
            log.exception("Failed to close DB")

        try:
            await bot.session.close()
        except Exception:
            log.exception("Failed to close bot session")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
