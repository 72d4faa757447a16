import logging
from typing import Any, Dict, List, Optional

import httpx

from api.metrics import TASKS_CREATED_TOTAL, WEBHOOK_FORWARDS_TOTAL
from extraction.task_extractor import TaskExtractor, split_command
from integration.motion_client import MotionClient
from llm.llm_client import LLMClient
from motion_bridge.errors import BridgeError
from motion_bridge.models import DomainDefaults, ItemResult, defaults_for
from normalization.task_normalizer import TaskNormalizer

logger = logging.getLogger(__name__)


class BridgeBackend:
    """Central orchestration component of the relay, built once per request."""

    def __init__(
        self,
        llm: LLMClient,
        motion: MotionClient,
        normalizer: Optional[TaskNormalizer] = None,
    ):
        self.llm = llm
        self.motion = motion
        self.normalizer = normalizer or TaskNormalizer()

    def bridge(
        self,
        message: str,
        webhook_url: Any = None,
        webhook_payload: Any = None,
    ) -> dict:
        """Ask the model for a reply and optionally push it to a Motion webhook."""
        reply = self.llm.reply(message)

        if webhook_url:
            payload = dict(webhook_payload) if isinstance(webhook_payload, dict) else {}
            payload["reply"] = reply
            try:
                self.motion.forward_to_webhook(webhook_url, payload)
            except BridgeError:
                WEBHOOK_FORWARDS_TOTAL.labels(status="error").inc()
                raise
            WEBHOOK_FORWARDS_TOTAL.labels(status="ok").inc()

        return {"reply": reply, "motionForwarded": bool(webhook_url)}

    def create_tasks(
        self,
        raw_tasks: List[Any],
        defaults: Optional[DomainDefaults] = None,
    ) -> List[Dict[str, Any]]:
        """Normalize and create each task in order. One failure never stops the batch.

        With ``defaults`` unset, each item uses the defaults of its own ``domain`` field.
        """
        results: List[Dict[str, Any]] = []
        for index, raw in enumerate(raw_tasks):
            try:
                task = self.normalizer.normalize(raw, defaults)
                created = self.motion.create_task(task)
            except (BridgeError, ValueError, httpx.HTTPError) as e:
                logger.warning(f"Task {index} failed: {e}")
                TASKS_CREATED_TOTAL.labels(status="error").inc()
                results.append(ItemResult.error(index, str(e)).to_dict())
                continue

            TASKS_CREATED_TOTAL.labels(status="ok").inc()
            results.append(ItemResult.ok(index, created).to_dict())

        ok = sum(1 for r in results if r["status"] == "ok")
        logger.info(f"Batch done: {ok}/{len(results)} task(s) created")
        return results

    def add_tasks(self, raw_tasks: List[Any]) -> dict:
        self.motion.check_configured()
        return {"created": self.create_tasks(raw_tasks)}

    def route(self, text: str, command: Optional[str] = None) -> dict:
        """Extract tasks from free text with the model, then create them with command defaults."""
        label, body = split_command(text, command)
        raw_tasks = TaskExtractor(self.llm).extract(body, command=label)
        results = self.create_tasks(raw_tasks, defaults_for(label))
        return {
            "results": results,
            "count": sum(1 for r in results if r["status"] == "ok"),
        }
