import json
import re

from openai import OpenAI, APIStatusError
from fastapi import HTTPException

from config import get_api_key, MOCK_MODE, OPENROUTER_BASE_URL, APP_URL, APP_TITLE, FALLBACK_STATUS_CODES


# Lazy client initialization
_client = None


def get_client():
    global _client
    if MOCK_MODE:
        return None  # Mock mode doesn't need a client
    if _client is None:
        api_key = get_api_key()
        if not api_key:
            raise HTTPException(
                status_code=500,
                detail="OPENROUTER_API_KEY not configured. Set it in environment, .env file, or ~/.openrouter/api_key"
            )
        _client = OpenAI(
            base_url=OPENROUTER_BASE_URL,
            api_key=api_key,
            default_headers={
                "HTTP-Referer": APP_URL,
                "X-Title": APP_TITLE,
            }
        )
    return _client


def should_fallback(error: Exception) -> bool:
    """Only rate limiting and gateway unavailability get a second model."""
    return isinstance(error, APIStatusError) and error.status_code in FALLBACK_STATUS_CODES


def error_status(error: Exception) -> int:
    status = getattr(error, "status_code", None)
    if isinstance(status, int) and 400 <= status < 600:
        return status
    return 500


def error_message(error: Exception) -> str:
    """Best-effort human readable message from a gateway error."""
    body = getattr(error, "body", None)
    if isinstance(body, dict):
        inner = body.get("error", body)
        if isinstance(inner, dict) and inner.get("message"):
            return inner["message"]
        if body.get("message"):
            return body["message"]
    return str(error) or "Unknown error"


def create_completion(model: str, fallback_model: str, messages: list, **kwargs):
    """Create a chat completion, retrying once on the fallback model.

    The retry happens only for HTTP 429/503 from the primary model. If the
    fallback also fails, the original error is raised so callers report what
    actually went wrong first.
    """
    client = get_client()
    try:
        return client.chat.completions.create(model=model, messages=messages, **kwargs)
    except APIStatusError as e:
        if not fallback_model or not should_fallback(e):
            raise
        print(f"Model {model} returned {e.status_code}, retrying with {fallback_model}")
        try:
            return client.chat.completions.create(model=fallback_model, messages=messages, **kwargs)
        except Exception as fallback_error:
            print(f"Fallback model {fallback_model} failed: {fallback_error}")
            raise e from fallback_error


def completion_text(response) -> str:
    if not response.choices:
        return ""
    return response.choices[0].message.content or ""


def stream_text(response):
    """Yield the text deltas of a streamed completion."""
    for chunk in response:
        if not chunk.choices:
            continue
        delta = chunk.choices[0].delta.content
        if delta:
            yield delta


def clean_llm_response(response_text: str) -> str:
    """Clean up potential markdown formatting from LLM JSON responses.

    Handles the common pattern where LLMs wrap JSON in ```json``` code blocks.
    """
    response_text = re.sub(r"```json\n?", "", response_text)
    response_text = re.sub(r"```\n?", "", response_text)
    return response_text.strip()


def extract_json_object(response_text: str) -> dict:
    """Parse the outermost {...} block of a reply that may carry prose around it."""
    match = re.search(r"\{[\s\S]*\}", response_text)
    json_str = match.group(0) if match else response_text.strip()
    parsed = json.loads(json_str)
    if not isinstance(parsed, dict):
        raise ValueError("Expected a JSON object")
    return parsed
