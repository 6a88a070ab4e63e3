"""
handlers/property_handler.py
----------------------------
Handles property search.
Delegates all logic to PropertyService, which runs in a worker thread
so blocking psycopg2 calls do not stall the event loop.
"""

import asyncio

from telegram import Update
from telegram.ext import ContextTypes

from security.rate_limiter import rate_limited
from utils.errors import QueryFailure
from utils.logger import get_logger

logger = get_logger(__name__)


@rate_limited
async def search_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /search [key=value ...] command.

    Examples:
        /search
        /search city=Vancouver rating=4
        /search min_price=50 max_price=150 limit=3
    """
    property_service = context.bot_data["property_service"]
    try:
        reply = await asyncio.to_thread(property_service.search, context.args or [])
    except QueryFailure as e:
        logger.error(f"Search failed for user {update.effective_user.id}: {e}")
        await update.message.reply_text("❌ Search is unavailable right now. Please try again later.")
        return

    await update.message.reply_text(reply)
