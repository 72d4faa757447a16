import httpx
import pytest

from conftest import json_body
from integration.motion_client import MotionClient, build_task_payload
from motion_bridge.errors import ConfigurationError, RetryExhaustedError, UpstreamError
from motion_bridge.models import Priority, TaskRecord


def _motion(upstream, api_key="motion-key", workspace_id="workspace-123"):
    client = httpx.Client(transport=httpx.MockTransport(upstream))
    return MotionClient(api_key=api_key, workspace_id=workspace_id, client=client)


def test_payload_fields():
    task = TaskRecord(title="Write docs", notes="n", minutes=30, tags=["Docs"], due="2026-01-02")
    assert build_task_payload(task, "ws") == {
        "name": "Write docs",
        "workspaceId": "ws",
        "description": "n",
        "duration": 30,
        "priority": "MEDIUM",
        "labels": ["Docs"],
        "dueDate": "2026-01-02",
    }


def test_payload_omits_missing_due():
    assert "dueDate" not in build_task_payload(TaskRecord(title="X"), "ws")


@pytest.mark.parametrize("priority", list(Priority))
def test_legal_label_forces_high(priority):
    task = TaskRecord(title="X", priority=priority, tags=["Legal"])
    assert build_task_payload(task, "ws")["priority"] == "HIGH"


def test_create_task_sends_api_key(upstream, no_sleep):
    upstream.on("usemotion.com", lambda r: httpx.Response(200, json={"id": "task-1"}))
    out = _motion(upstream).create_task(TaskRecord(title="X"))

    assert out == {"id": "task-1"}
    request = upstream.requests[0]
    assert str(request.url) == "https://api.usemotion.com/v1/tasks"
    assert request.headers["X-API-Key"] == "motion-key"
    assert json_body(request)["workspaceId"] == "workspace-123"


@pytest.mark.parametrize(
    "kwargs, missing",
    [({"api_key": ""}, "MOTION_API_KEY"), ({"workspace_id": ""}, "MOTION_WORKSPACE_ID")],
)
def test_create_task_requires_config(upstream, kwargs, missing):
    with pytest.raises(ConfigurationError, match=missing):
        _motion(upstream, **kwargs).create_task(TaskRecord(title="X"))
    assert upstream.requests == []


def test_create_task_exhausts_retries(upstream, no_sleep):
    upstream.on("usemotion.com", lambda r: httpx.Response(500, text="oops"))
    with pytest.raises(RetryExhaustedError) as exc:
        _motion(upstream).create_task(TaskRecord(title="X"))
    assert str(exc.value) == "Motion API error (500): oops"
    assert len(upstream.requests) == 3
    assert no_sleep == pytest.approx([0.2, 0.4])


def test_webhook_uses_bearer_when_key_set(upstream):
    upstream.on("hooks.test", lambda r: httpx.Response(204))
    _motion(upstream).forward_to_webhook("https://hooks.test/in", {"reply": "hi"})
    request = upstream.requests[0]
    assert request.headers["Authorization"] == "Bearer motion-key"
    assert json_body(request) == {"reply": "hi"}


def test_webhook_without_key_has_no_auth(upstream):
    upstream.on("hooks.test", lambda r: httpx.Response(200))
    _motion(upstream, api_key="").forward_to_webhook("https://hooks.test/in", None)
    request = upstream.requests[0]
    assert "Authorization" not in request.headers
    assert json_body(request) == {}


def test_webhook_failure(upstream):
    upstream.on("hooks.test", lambda r: httpx.Response(502, text="bad gateway"))
    with pytest.raises(UpstreamError, match=r"Motion webhook error \(502\): bad gateway"):
        _motion(upstream).forward_to_webhook("https://hooks.test/in", {})
    assert len(upstream.requests) == 1
