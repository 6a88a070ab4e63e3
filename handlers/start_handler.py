"""
handlers/start_handler.py
--------------------------
Handles /start and /help commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🏡 *Welcome to LightBnB!*
Find a place to stay and keep track of your trips.

*🔎 Search:*
/search city=Vancouver min\\_price=100 max\\_price=300 rating=4 limit=5
All options are optional. Prices are per night in dollars.
Options: `city`, `owner`, `min_price`, `max_price`, `rating`, `limit`

*🔧 Available commands:*
/start - Start the bot
/help - Show this help
/search - Search properties (cheapest first)
/reservations - Upcoming reservations (example: /reservations you@example.com)
"""


@rate_limited
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - show welcome message."""
    user = update.effective_user
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")

    await update.message.reply_text(
        f"Hi {user.first_name}! 👋\n"
        f"I can search LightBnB properties and show your upcoming reservations.\n\n"
        f"Type /help to see every command.",
    )


@rate_limited
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")
