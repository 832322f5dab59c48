import logging

import requests

from . import config
from .errors import AdapterError, TransportError

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = " (always answer like a professional on universities, Dont Ever Generate Any Kind Of Code)"
FALLBACK_MESSAGE = "I'm sorry, I couldn't generate a response at the moment. Please try again."


def build_prompt(question: str) -> str:
    return question + SYSTEM_INSTRUCTION

def generate(prompt: str, api_key: str | None = None, model: str | None = None) -> str:
    """Send one generateContent request and return the first candidate's text.

    Raises AdapterError for a missing key, a non-200 status or an unexpected
    body, and TransportError when the API could not be reached at all.
    """
    api_key = api_key or config.GEMINI_API_KEY
    model = model or config.GEMINI_MODEL
    if not api_key:
        raise AdapterError("Missing Gemini API key")

    url = f"{config.GEMINI_API_URL}/models/{model}:generateContent"
    payload = {
        "contents": [
            {
                "parts": [
                    {"text": prompt}
                ]
            }
        ]
    }

    try:
        r = requests.post(url, params={"key": api_key}, json=payload, timeout=config.GEMINI_TIMEOUT)
    except requests.RequestException as e:
        raise TransportError(f"Gemini API unreachable: {e}") from e

    if r.status_code != 200:
        raise AdapterError(f"Gemini API error: {r.status_code} - {r.text[:200]}")

    try:
        data = r.json()
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise AdapterError(f"Unexpected Gemini response format: {r.text[:200]}") from e

def complete(prompt: str, api_key: str | None = None, model: str | None = None) -> str:
    """Answer a chat question; always returns a displayable string."""
    try:
        return generate(build_prompt(prompt), api_key=api_key, model=model)
    except (AdapterError, TransportError) as e:
        logger.error("chat generation failed: %s", e)
        return FALLBACK_MESSAGE
