"""
Rate limiting using slowapi
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from studynotes.config import AI_RATE_LIMIT, RATE_LIMIT_ENABLED

limiter = Limiter(
    key_func=get_remote_address,
    enabled=RATE_LIMIT_ENABLED,
)


def ai_generation_limit():
    """Rate limit for AI generation endpoints"""
    return limiter.limit(AI_RATE_LIMIT)
