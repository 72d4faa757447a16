import pytest

from llm.llm_client import LLMClient
from motion_bridge.config import BridgeConfig
from motion_bridge.errors import ConfigurationError, ReplyParseError

def test_llm_fenced_json(fake_provider_factory):
    provider = fake_provider_factory(
        '```json\n{"tasks":[{"title":"Call mom","minutes":10}]}\n```'
    )
    out = LLMClient(provider=provider).extract_tasks("Call mom")
    assert out[0]["title"] == "Call mom"

def test_llm_bare_list_accepted(fake_provider_factory):
    provider = fake_provider_factory('[{"title":"A"},{"title":"B","tags":["x"]}]')
    out = LLMClient(provider=provider).extract_tasks("A and B")
    assert [t["title"] for t in out] == ["A", "B"]

@pytest.mark.parametrize("text", ["INVALID OUTPUT", "", None, '{"items": []}', '{"tasks": [1, 2]}'])
def test_llm_invalid_extraction_raises(fake_provider_factory, text):
    client = LLMClient(provider=fake_provider_factory(text))
    with pytest.raises(ReplyParseError):
        client.extract_tasks("Anything")

def test_unknown_provider_rejected():
    with pytest.raises(ConfigurationError):
        LLMClient.from_config(BridgeConfig(llm_provider="carrier-pigeon"))
