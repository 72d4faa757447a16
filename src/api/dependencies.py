from typing import Iterator

import httpx
from fastapi import Depends

from api.backend import BridgeBackend
from integration.motion_client import MotionClient
from llm.llm_client import LLMClient
from motion_bridge.config import BridgeConfig


def get_config() -> BridgeConfig:
    # Read per request so rotated secrets apply without a restart.
    return BridgeConfig.from_env()


def get_http_client(config: BridgeConfig = Depends(get_config)) -> Iterator[httpx.Client]:
    with httpx.Client(timeout=config.http_timeout_s) as client:
        yield client


def get_backend(
    config: BridgeConfig = Depends(get_config),
    client: httpx.Client = Depends(get_http_client),
) -> BridgeBackend:
    return BridgeBackend(
        llm=LLMClient.from_config(config, client=client),
        motion=MotionClient.from_config(config, client),
    )
