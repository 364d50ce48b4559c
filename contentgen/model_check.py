"""Availability check for the default Gemini model."""
import logging
from typing import Optional

import httpx

from contentgen.config import DEFAULT_GEMINI_FLASH_MODEL, DEFAULT_GEMINI_MODEL

logger = logging.getLogger(__name__)

GEMINI_API_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
CHECK_TIMEOUT_SECONDS = 2.0


async def get_effective_model(
    api_key: str,
    current_model: str,
    proxy: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Return the model to use for this session.

    Only the default pro model is checked. When the API answers 429 for it,
    the flash model is returned instead. Any other outcome, including a
    network failure or timeout, keeps ``current_model``.
    """
    if current_model != DEFAULT_GEMINI_MODEL:
        return current_model

    url = f"{GEMINI_API_ENDPOINT}/{DEFAULT_GEMINI_MODEL}:generateContent"
    body = {
        "contents": [{"parts": [{"text": "test"}]}],
        "generationConfig": {
            "maxOutputTokens": 1,
            "temperature": 0,
            "topK": 1,
            "thinkingConfig": {"thinkingBudget": 128, "includeThoughts": False},
        },
    }

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(proxy=proxy, timeout=CHECK_TIMEOUT_SECONDS)
    try:
        response = await client.post(url, params={"key": api_key}, json=body)
    except httpx.HTTPError as e:
        logger.debug("Model availability check failed, keeping %s: %s", current_model, e)
        return current_model
    finally:
        if owns_client:
            await client.aclose()

    if response.status_code == 429:
        logger.info(
            "Configured model %s is temporarily unavailable; switched to %s for this session",
            DEFAULT_GEMINI_MODEL, DEFAULT_GEMINI_FLASH_MODEL,
        )
        return DEFAULT_GEMINI_FLASH_MODEL
    return current_model
