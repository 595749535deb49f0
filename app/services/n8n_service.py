import json
import re
from datetime import datetime, timezone
from typing import Optional
import httpx
from app.config.env_config import settings
from app.constants.error import ERROR
from app.exceptions import WebhookError
import logging

logger = logging.getLogger(__name__)

GENERATE_FORM_ACTION = "generateForm"
JSON_BLOCK_PATTERN = re.compile(r"```json\s*\n?([\s\S]*?)\n?```")


def extract_form_from_response(data) -> Optional[dict]:
    """
    Pull a form draft out of the workflow reply.

    The workflow answers either with `{"action": "generateForm", "form": {...}}`
    directly or with free text in `output` that embeds that object in a
    ```json fenced block.
    """
    if not isinstance(data, dict):
        return None

    if data.get("action") == GENERATE_FORM_ACTION and isinstance(data.get("form"), dict):
        return data["form"]

    output = data.get("output")
    if isinstance(output, str):
        for match in JSON_BLOCK_PATTERN.finditer(output):
            try:
                parsed = json.loads(match.group(1).strip())
            except json.JSONDecodeError:
                continue
            if isinstance(parsed, dict) and parsed.get("action") == GENERATE_FORM_ACTION \
                    and isinstance(parsed.get("form"), dict):
                return parsed["form"]

    return None


async def generate_form_draft(prompt: str, session_id: str) -> dict:
    """
    Ask the n8n assistant workflow to draft a form definition

    Args:
        prompt: Free-text description of the form wanted
        session_id: Conversation id the workflow keys its memory on

    Raises:
        WebhookError: the webhook failed or its reply holds no form draft
    """
    payload = {
        "sessionId": session_id,
        "action": GENERATE_FORM_ACTION,
        "chatInput": prompt,
        "query": prompt,
        "currentPage": "/forms/generator",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    headers = {}
    if settings.N8N_WEBHOOK_TOKEN:
        headers["Authorization"] = f"Bearer {settings.N8N_WEBHOOK_TOKEN}"

    try:
        async with httpx.AsyncClient(timeout=settings.N8N_TIMEOUT) as client:
            response = await client.post(settings.N8N_FORM_WEBHOOK_URL, json=payload, headers=headers)
            response.raise_for_status()
            reply = response.json()
    except httpx.HTTPError as e:
        logger.error(f"Form generation webhook failed for session {session_id}: {str(e)}")
        raise WebhookError(ERROR.AI_GENERATION_FAILED)
    except ValueError as e:
        logger.error(f"Form generation webhook returned non-JSON for session {session_id}: {str(e)}")
        raise WebhookError(ERROR.AI_UNPARSEABLE)

    draft = extract_form_from_response(reply)
    if draft is None:
        logger.warning(f"No form draft in webhook reply for session {session_id}")
        raise WebhookError(ERROR.AI_UNPARSEABLE)

    logger.info(f"Form draft generated for session {session_id}")
    return draft
