"""Shared test fixtures for 4Eunoia tests.

- Isolated JsonStore and ServiceManager over a temporary data directory
- FakeAIService that returns canned model output, None, or a provider error
- A fixed "now" so date windows are reproducible
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import pytest

from eunoia.config import AIConfig
from eunoia.core.ai_service import AIProviderError, AIService
from eunoia.core.database import JsonStore
from eunoia.core.models import DataMode
from eunoia.services import ServiceManager
from eunoia.utils.datetime_utils import localize


class FakeAIService(AIService):
    """AIService whose model call is replaced by a canned reply.

    reply: a dict validated into the requested output model, None for an
    empty model reply, or an Exception instance to raise.
    """

    def __init__(self, reply: Any = None):
        super().__init__(ai_config=AIConfig(openai_api_key=None))
        self.enabled = True
        self.reply = reply
        self.calls: List[Dict[str, Any]] = []

    async def generate_structured(self, template, payload, output_model, **prompt_vars):
        self.calls.append({
            "template": template,
            "payload": payload,
            "output_model": output_model,
            "prompt_vars": prompt_vars,
        })
        if isinstance(self.reply, Exception):
            raise self.reply
        if self.reply is None:
            return None
        return output_model.model_validate(self.reply)


@pytest.fixture
def fixed_now() -> datetime:
    return localize(datetime(2024, 5, 15, 12, 0))


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


@pytest.fixture
def store(temp_data_dir: Path) -> JsonStore:
    return JsonStore(temp_data_dir)


@pytest.fixture
def fake_ai() -> FakeAIService:
    return FakeAIService()


@pytest.fixture
def failing_ai() -> FakeAIService:
    return FakeAIService(reply=AIProviderError("provider unavailable"))


@pytest.fixture
def services(temp_data_dir: Path, fake_ai: FakeAIService) -> ServiceManager:
    return ServiceManager(data_dir=temp_data_dir, ai_service=fake_ai)


@pytest.fixture
def user_services(services: ServiceManager) -> ServiceManager:
    """Services for a user who has switched to their own data"""
    services.data.switch_to_user_mode("alice")
    assert services.data.get_data_mode("alice") == DataMode.USER.value
    return services


@pytest.fixture
def make_ai():
    """Build a FakeAIService with a given reply"""
    return FakeAIService
