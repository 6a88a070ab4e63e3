"""
security/rate_limiter.py
-------------------------
Rate limiting middleware that keeps a single chat from flooding the database.
Each bot command costs at least one query, so every handler is wrapped.
"""

import time
from functools import wraps
from typing import Callable, Optional

from telegram import Update
from telegram.ext import ContextTypes

from config import RATE_LIMIT_MESSAGES, RATE_LIMIT_WINDOW_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)

# Recent command timestamps per user. Users with nothing inside the window are dropped.
_user_timestamps: dict[int, list[float]] = {}


def _evict_expired(now: float) -> None:
    """Forget timestamps older than the window, and users left with none."""
    cutoff = now - RATE_LIMIT_WINDOW_SECONDS
    for user_id in list(_user_timestamps):
        recent = [t for t in _user_timestamps[user_id] if t > cutoff]
        if recent:
            _user_timestamps[user_id] = recent
        else:
            del _user_timestamps[user_id]


def allow(user_id: int, now: Optional[float] = None) -> bool:
    """
    Record one command for a user if they are under the limit.

    Args:
        user_id: Telegram user ID.
        now: Current time in seconds; defaults to ``time.time()``.

    Returns:
        True if the command may run, False if the user hit the limit.
    """
    now = time.time() if now is None else now
    _evict_expired(now)

    recent = _user_timestamps.get(user_id, [])
    if len(recent) >= RATE_LIMIT_MESSAGES:
        return False

    _user_timestamps[user_id] = recent + [now]
    return True


def rate_limited(func: Callable):
    """
    Decorator that enforces rate limiting per user.

    Configuration (via .env):
        RATE_LIMIT_MESSAGES: Max commands per window (default: 30).
        RATE_LIMIT_WINDOW_SECONDS: Window duration in seconds (default: 60).

    Behavior:
        - Updates without a user are ignored.
        - Over the limit, replies with a warning and skips the handler.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        if not allow(user.id):
            logger.warning(f"Rate limit hit for user {user.id}")
            await update.message.reply_text(
                "⚠️ You're sending too many requests. Please wait a moment and try again."
            )
            return

        return await func(update, context, *args, **kwargs)

    return wrapper
