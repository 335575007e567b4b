from typing import AsyncIterator

from fastapi import Depends

from clauseclear.config import Settings, get_settings
from clauseclear.services.gemini import GeminiGateway


async def get_gateway(settings: Settings = Depends(get_settings)) -> AsyncIterator[GeminiGateway]:
    """One gateway (and one HTTP connection pool) per request."""
    async with GeminiGateway(settings) as gateway:
        yield gateway
