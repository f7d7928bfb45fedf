"""Chat widget proxy to an OpenAI-compatible chat completions endpoint."""
import logging

import httpx

from app.config import Settings
from app.schemas.chat import ChatTurn

log = logging.getLogger("uvicorn.error")

FALLBACK_REPLY = "I'm having trouble connecting right now. Please call us at (253) 861-1691."
HISTORY_TURNS = 4

SYSTEM_PROMPT = (
    "You are Hope, the friendly assistant for Fountain of Peace, an adult family home offering "
    "24-hour supervision, healthcare coordination, help with activities of daily living, home-cooked "
    "meals, housekeeping and social activities. Answer briefly and warmly. For pricing, availability "
    "or medical questions, invite the visitor to call (253) 861-1691 or book a tour on the contact page."
)


def complete_chat(settings: Settings, message: str, history: list[ChatTurn]) -> str:
    """Forward one visitor message (plus the last few turns) and return the assistant's text."""
    if not settings.chat_api_key:
        log.warning("[Chat] CHAT_API_KEY not set; returning fallback reply")
        return FALLBACK_REPLY
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    messages += [{"role": t.role, "content": t.content} for t in history[-HISTORY_TURNS:]]
    messages.append({"role": "user", "content": message})
    try:
        with httpx.Client(timeout=settings.chat_timeout_seconds) as client:
            r = client.post(
                settings.chat_api_url,
                headers={"Authorization": f"Bearer {settings.chat_api_key}"},
                json={"model": settings.chat_model, "messages": messages, "max_tokens": 300},
            )
    except httpx.HTTPError as e:
        log.error("[Chat] Request failed: %s: %s", type(e).__name__, e)
        return FALLBACK_REPLY
    if r.status_code != 200:
        log.error("[Chat] Completion failed: status=%s body=%s", r.status_code, r.text[:500])
        return FALLBACK_REPLY
    choices = (r.json() or {}).get("choices") or []
    content = ((choices[0] if choices else {}).get("message") or {}).get("content")
    return (content or "").strip() or FALLBACK_REPLY
