"""
handlers/reservation_handler.py
-------------------------------
Handles the /reservations command.
Delegates all logic to ReservationService, run in a worker thread.
"""

import asyncio

from telegram import Update
from telegram.ext import ContextTypes

from security.rate_limiter import rate_limited
from utils.errors import QueryFailure
from utils.logger import get_logger

logger = get_logger(__name__)


@rate_limited
async def reservations_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /reservations <email> command.
    Usage: /reservations guest@example.com
    """
    if not context.args:
        await update.message.reply_text(
            "⚠️ Usage: /reservations <email>\nExample: /reservations guest@example.com"
        )
        return

    email = context.args[0].strip()
    reservation_service = context.bot_data["reservation_service"]
    try:
        reply = await asyncio.to_thread(reservation_service.upcoming_for_email, email)
    except QueryFailure as e:
        logger.error(f"Reservation lookup failed for user {update.effective_user.id}: {e}")
        await update.message.reply_text("❌ Reservations are unavailable right now. Please try again later.")
        return

    await update.message.reply_text(reply)
