# firefly/services/webhook_service.py
"""
Best-effort notification when a report is generated from a project.

Failures are logged and dropped; they never reach the caller.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


def notify_document_saved(
    webhook_url: Optional[str],
    project_data: Dict[str, Any],
    timeout: float = 5.0,
) -> bool:
    """
    POST ``{"projectData": ...}`` to the webhook.

    Returns True when the webhook accepted the payload.
    """
    if not webhook_url:
        return False

    try:
        response = httpx.post(webhook_url, json={"projectData": project_data}, timeout=timeout)
    except httpx.HTTPError as exc:
        logger.warning("Error sending data to webhook %s: %s", webhook_url, exc)
        return False

    if response.is_success:
        logger.info("Sent project %s to webhook", project_data.get("id"))
        return True

    logger.warning(
        "Webhook %s rejected project data: %s %s",
        webhook_url, response.status_code, response.text[:200],
    )
    return False
