from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from integration.retry import send_with_retry
from motion_bridge.config import BridgeConfig
from motion_bridge.errors import ConfigurationError, UpstreamError
from motion_bridge.models import Priority, TaskRecord

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}
LEGAL_LABEL = "Legal"


def build_task_payload(task: TaskRecord, workspace_id: str) -> Dict[str, Any]:
    """Map a TaskRecord onto Motion's create-task body."""
    priority = task.priority.value
    if LEGAL_LABEL in task.tags:
        priority = Priority.HIGH.value

    payload: Dict[str, Any] = {
        "name": task.title,
        "workspaceId": workspace_id,
        "description": task.notes,
        "duration": task.minutes,
        "priority": priority,
        "labels": list(task.tags),
    }
    if task.due is not None:
        payload["dueDate"] = task.due
    return payload


class MotionClient:
    """Creates tasks in Motion and forwards replies to Motion webhooks."""

    def __init__(
        self,
        api_key: str,
        workspace_id: str,
        client: httpx.Client,
        base_url: str = "https://api.usemotion.com/v1",
        max_attempts: int = 3,
    ):
        self.api_key = (api_key or "").strip()
        self.workspace_id = (workspace_id or "").strip()
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.max_attempts = max_attempts

    @classmethod
    def from_config(cls, config: BridgeConfig, client: httpx.Client) -> "MotionClient":
        return cls(
            api_key=config.motion_api_key,
            workspace_id=config.motion_workspace_id,
            client=client,
            base_url=config.motion_base_url,
            max_attempts=config.motion_max_attempts,
        )

    def check_configured(self) -> None:
        if not self.api_key:
            raise ConfigurationError("Missing MOTION_API_KEY secret")
        if not self.workspace_id:
            raise ConfigurationError("Missing MOTION_WORKSPACE_ID secret")

    def create_task(self, task: TaskRecord) -> Any:
        self.check_configured()
        payload = build_task_payload(task, self.workspace_id)
        response = send_with_retry(
            self.client,
            "POST",
            f"{self.base_url}/tasks",
            headers={**JSON_HEADERS, "X-API-Key": self.api_key},
            json=payload,
            max_attempts=self.max_attempts,
            error_label="Motion API error",
        )
        logger.info(f"Created Motion task {task.title!r} ({payload['priority']})")
        return response.json() if response.content else {}

    def forward_to_webhook(self, url: Any, payload: Optional[Dict[str, Any]]) -> None:
        if not isinstance(url, str):
            raise UpstreamError(f"Motion webhook error: invalid URL {url!r}")

        headers = dict(JSON_HEADERS)
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        r = self.client.post(url, headers=headers, json=payload or {})
        if not r.is_success:
            logger.error(f"Motion webhook returned {r.status_code}")
            raise UpstreamError(
                f"Motion webhook error ({r.status_code}): {r.text}",
                status=r.status_code,
                detail=r.text,
            )
        logger.info("Reply forwarded to Motion webhook")
