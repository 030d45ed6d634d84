import asyncio
import json
from typing import Any, List, Dict, Optional

import pytest

from libs.dataclass.conceptual_objects import AutomationStep, ActionType, generate_id
from llm_service.abstract_llm_client import AbstractLLMClient
from pom_lib_ext.config import ResolutionConfig


class FakeLLMClient(AbstractLLMClient):
    """
    Scripted stand-in for the remote model. Each entry in `replies` is consumed by
    one call: a str is returned as the response text, an Exception is raised, and
    a float makes the call hang for that many seconds.
    """

    def __init__(self, replies: Optional[List[Any]] = None):
        super().__init__({"model": "fake-model"})
        self.replies = list(replies or [])
        self.calls: List[Dict[str, Any]] = []
        self.call_times: List[float] = []

    async def execute_chat_completion_api(self, message, response_format=None, temperature=0.2,
                                          max_tokens=None) -> str:
        self.calls.append({"messages": message, "response_format": response_format, "temperature": temperature})
        self.call_times.append(asyncio.get_running_loop().time())
        reply = self.replies.pop(0) if len(self.replies) > 1 else (self.replies[0] if self.replies else "")
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, float):
            await asyncio.sleep(reply)
            return "{}"
        return reply

    @property
    def call_count(self) -> int:
        return len(self.calls)


def make_step(order: int, action: ActionType = ActionType.CLICK, page: str = "BasePage",
              target: str = "Some Button") -> AutomationStep:
    return AutomationStep(
        id=generate_id(),
        order=order,
        description=f"step {order}",
        actionType=action,
        targetElement=target,
        simulatedSelector="#some-button",
        value=None,
        url="https://example.com",
        reasoning="test",
        pageContext=page,
    )


def reply(payload: Any) -> str:
    return json.dumps(payload)


@pytest.fixture
def fast_cfg() -> ResolutionConfig:
    return ResolutionConfig(timeoutSeconds=0.05, maxRetries=2, retryDelayBaseSeconds=0.01)
