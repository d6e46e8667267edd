# ledgerbot/main.py
from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

from aiogram import Bot, Dispatcher
from aiogram.enums import ParseMode
from aiogram.types import BotCommand
from aiogram.client.default import DefaultBotProperties

from ledgerbot.core.config import get_settings
from ledgerbot.core.logging import setup_logging
from ledgerbot.core.db import init_db, dispose_db
from ledgerbot.core.middlewares import DedupMiddleware
from ledgerbot.core.scheduler import start_scheduler
from ledgerbot.handlers import setup as setup_handlers
from ledgerbot.services.classifier import IntentClassifier, load_prompt
from ledgerbot.services.dedup import DuplicateFilter


async def _set_bot_commands(bot: Bot) -> None:
    commands = [
        BotCommand(command="start", description="👋 Start the bot"),
        BotCommand(command="balance", description="💰 Show current balance"),
        BotCommand(command="reset", description="♻️ Reset bank & cash to zero"),
        BotCommand(command="help", description="ℹ️ How to use the bot"),
        BotCommand(command="stats", description="📊 Show expense statistics"),
    ]
    await bot.set_my_commands(commands)


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    await init_db(settings.database_url)

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    classifier = IntentClassifier(
        api_key=settings.classifier_api_key,
        url=settings.classifier_url,
        model=settings.classifier_model,
        system_prompt=load_prompt(settings.prompt_path),
        timeout=settings.classifier_timeout,
    )
    dedup = DuplicateFilter(window=settings.dedup_window)

    # settings и classifier попадают в хендлеры по имени аргумента
    dp = Dispatcher(settings=settings, classifier=classifier)
    dp.message.outer_middleware(DedupMiddleware(dedup))

    setup_handlers(dp)
    await _set_bot_commands(bot)

    scheduler = start_scheduler(dedup)

    logging.info("Bot starting polling…")
    try:
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        scheduler.shutdown(wait=False)
        with suppress(Exception):
            await classifier.aclose()
        with suppress(Exception):
            await bot.session.close()
        await dispose_db()
        logging.info("Bot stopped.")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
