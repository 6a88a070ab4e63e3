"""
main.py
-------
Entry point for the LightBnB Telegram bot.

Responsibilities:
    - Open the database connection pool and bootstrap the schema.
    - Wire repositories and services around the shared Database.
    - Configure and start the Telegram bot with all handlers.
    - Close the pool on shutdown.
"""

from telegram import BotCommand
from telegram.ext import Application, CommandHandler

from config import TELEGRAM_BOT_TOKEN
from db.connection import Database
from db.init_db import create_tables
from handlers.start_handler import start_command, help_command
from handlers.property_handler import search_command
from handlers.reservation_handler import reservations_command
from repositories.property_repo import PropertyRepository
from repositories.reservation_repo import ReservationRepository
from repositories.user_repo import UserRepository
from services.property_service import PropertyService
from services.reservation_service import ReservationService
from utils.logger import get_logger

logger = get_logger(__name__)


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("start", "🚀 Start the bot"),
        BotCommand("help", "📖 Show help"),
        BotCommand("search", "🔎 Search properties"),
        BotCommand("reservations", "📅 Upcoming reservations"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


def build_application(db: Database) -> Application:
    """
    Build the Telegram application with services bound to ``db``.

    Handlers find their services in ``context.bot_data``.
    """
    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()

    user_repo = UserRepository(db)
    app.bot_data["property_service"] = PropertyService(PropertyRepository(db))
    app.bot_data["reservation_service"] = ReservationService(user_repo, ReservationRepository(db))

    app.add_handler(CommandHandler("start", start_command))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("search", search_command))
    app.add_handler(CommandHandler("reservations", reservations_command))
    return app


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    db = Database()
    db.open()

    try:
        create_tables(db)

        # ── 2. Build the Telegram application ─────────────
        logger.info("Starting Telegram bot...")
        app = build_application(db)

        # ── 3. Start polling ──────────────────────────────
        logger.info("🚀 LightBnB bot is running! Press Ctrl+C to stop.")
        app.run_polling(drop_pending_updates=True, allowed_updates=["message"])
    finally:
        # ── 4. Cleanup on shutdown ────────────────────────
        db.close()
        logger.info("LightBnB bot stopped.")


if __name__ == "__main__":
    main()
