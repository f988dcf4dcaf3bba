"""Tests for eunoia/core/ai_service.py"""

import json
from types import SimpleNamespace

import httpx
import openai
import pytest

from eunoia.config import AIConfig
from eunoia.core.ai_service import AIProviderError, AIResponseError, AIService, FlowTemplate, PromptManager
from eunoia.services.ai.schemas import SpendingSummary


class StubCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(
            choices=[SimpleNamespace(message=message)],
            usage=SimpleNamespace(total_tokens=42),
        )


def service_with(completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return AIService(ai_config=AIConfig(openai_api_key="test-key"), client=client)


class TestGenerateStructured:
    @pytest.mark.asyncio
    async def test_valid_json_is_validated(self):
        completions = StubCompletions(content=json.dumps({"spending_summary": "Steady."}))
        service = service_with(completions)

        result = await service.generate_structured(FlowTemplate.EXPENSE_TRENDS, {"total": 10}, SpendingSummary)

        assert result == SpendingSummary(spending_summary="Steady.")
        request = completions.requests[0]
        assert request["response_format"] == {"type": "json_object"}
        assert json.loads(request["messages"][1]["content"]) == {"total": 10}
        assert service.stats.successful_requests == 1
        assert service.stats.total_tokens_used == 42
        assert service.stats.requests_by_flow == {"expense_trends": 1}

    @pytest.mark.asyncio
    async def test_empty_reply_is_none(self):
        service = service_with(StubCompletions(content="  "))

        assert await service.generate_structured(FlowTemplate.EXPENSE_TRENDS, {}, SpendingSummary) is None
        assert service.stats.empty_responses == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["not json", json.dumps({"unexpected": True})])
    async def test_bad_output_raises(self, content):
        service = service_with(StubCompletions(content=content))

        with pytest.raises(AIResponseError):
            await service.generate_structured(FlowTemplate.EXPENSE_TRENDS, {}, SpendingSummary)
        assert service.stats.failed_requests == 1

    @pytest.mark.asyncio
    async def test_api_error_raises_provider_error(self):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        service = service_with(StubCompletions(error=openai.APIConnectionError(request=request)))

        with pytest.raises(AIProviderError):
            await service.generate_structured(FlowTemplate.EXPENSE_TRENDS, {}, SpendingSummary)
        assert service.stats.failed_requests == 1

    @pytest.mark.asyncio
    async def test_disabled_service_returns_none(self):
        service = AIService(ai_config=AIConfig(openai_api_key=None))

        assert service.enabled is False
        assert await service.generate_structured(FlowTemplate.EXPENSE_TRENDS, {}, SpendingSummary) is None
        assert service.get_health_status()["status"] == "degraded"


class TestPromptManager:
    def test_every_flow_has_a_template(self):
        assert set(PromptManager().templates) == set(FlowTemplate)

    def test_prompt_ends_with_schema(self):
        prompt = PromptManager().get_prompt(FlowTemplate.EXPENSE_TRENDS, SpendingSummary.model_json_schema())
        schema = prompt.rsplit("\n", 1)[-1]
        assert json.loads(schema)["title"] == "SpendingSummary"
