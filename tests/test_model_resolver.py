import asyncio

import pytest

from conftest import FakeLLMClient, make_step, reply
from libs.dataclass.conceptual_objects import ActionType
from llm_service.errors import (
    ConfigurationError, LLMTimeoutError, ResponseParseError, ResponseShapeError, TransportError
)
from llm_service.model_resolver import ModelStepResolver, build_context_summary
from pom_lib_ext.config import ResolutionConfig


def resolve(resolver, instruction="Add the backpack to the cart", current_url="https://shop.example",
            previous_steps=None):
    return asyncio.run(resolver.resolve_via_model(instruction, current_url, previous_steps or []))


def test_click_only_response_with_two_prior_steps(fast_cfg):
    client = FakeLLMClient([reply({"steps": [{"actionType": "CLICK"}], "newUrl": "shop.example",
                                   "responseMessage": "ok"})])
    prior = [make_step(1), make_step(2)]

    result = resolve(ModelStepResolver(client, fast_cfg), previous_steps=prior)

    assert len(result.steps) == 1
    step = result.steps[0]
    assert step.order == 3
    assert step.actionType == ActionType.CLICK
    assert step.simulatedSelector == "body"
    assert step.targetElement == "Unknown Element"
    assert step.reasoning == "AI Generated Sequence"
    assert step.pageContext == "BasePage"
    assert step.url == "https://shop.example"
    assert result.newUrl == "https://shop.example"
    assert result.responseMessage == "ok"


def test_fully_populated_step_round_trips(fast_cfg):
    raw = {
        "actionType": "FILL",
        "targetElement": "Username Input",
        "simulatedSelector": "#user-name",
        "value": "standard_user",
        "reasoning": "id attribute is stable",
        "pageContext": "LoginPage",
    }
    client = FakeLLMClient([reply({"steps": [raw], "newUrl": "https://www.saucedemo.com/",
                                   "responseMessage": "Filled username"})])

    step = resolve(ModelStepResolver(client, fast_cfg), instruction="Type the username").steps[0]

    assert step.to_dict() | {"id": None} == raw | {
        "id": None, "order": 1, "description": "Type the username", "url": "https://www.saucedemo.com/",
    }


def test_batch_orders_are_contiguous(fast_cfg):
    raw_steps = [{"actionType": "FILL"}, {"actionType": "FILL"}, {"actionType": "CLICK"}]
    client = FakeLLMClient([reply({"steps": raw_steps, "newUrl": "https://a.example/inventory"})])
    prior = [make_step(i) for i in range(1, 6)]

    result = resolve(ModelStepResolver(client, fast_cfg), instruction="Login", previous_steps=prior)

    assert [s.order for s in result.steps] == [6, 7, 8]
    assert len({s.id for s in result.steps}) == 3
    assert {s.description for s in result.steps} == {"Login"}
    assert {s.url for s in result.steps} == {"https://a.example/inventory"}
    assert result.responseMessage == "Executed 3 steps."


def test_missing_action_type_and_page_context_default(fast_cfg):
    client = FakeLLMClient([reply({"steps": [{"targetElement": "Cart Icon"}, {"actionType": "scroll"}]})])

    result = resolve(ModelStepResolver(client, fast_cfg))

    assert [s.actionType for s in result.steps] == [ActionType.UNKNOWN, ActionType.UNKNOWN]
    assert [s.pageContext for s in result.steps] == ["BasePage", "BasePage"]


def test_lowercase_action_type_is_accepted(fast_cfg):
    client = FakeLLMClient([reply({"steps": [{"actionType": "hover"}]})])
    assert resolve(ModelStepResolver(client, fast_cfg)).steps[0].actionType == ActionType.HOVER


def test_single_step_object_is_wrapped(fast_cfg):
    client = FakeLLMClient([reply({"actionType": "ASSERT", "targetElement": "Cart Badge", "value": "1"})])

    result = resolve(ModelStepResolver(client, fast_cfg))

    assert len(result.steps) == 1
    assert result.steps[0].actionType == ActionType.ASSERT
    assert result.steps[0].value == "1"


def test_missing_new_url_keeps_current_url(fast_cfg):
    client = FakeLLMClient([reply({"steps": []})])

    result = resolve(ModelStepResolver(client, fast_cfg), current_url="https://shop.example/cart")

    assert result.steps == []
    assert result.newUrl == "https://shop.example/cart"


def test_fenced_response_is_accepted(fast_cfg):
    client = FakeLLMClient(['```json\n{"steps": [{"actionType": "WAIT"}]}\n```'])
    assert resolve(ModelStepResolver(client, fast_cfg)).steps[0].actionType == ActionType.WAIT


def test_shape_error_after_exhausting_attempts(fast_cfg):
    client = FakeLLMClient([reply({"message": "I cannot help"})])

    with pytest.raises(ResponseShapeError):
        resolve(ModelStepResolver(client, fast_cfg))
    assert client.call_count == 2


def test_empty_response_is_a_shape_error_not_a_crash(fast_cfg):
    client = FakeLLMClient([""])
    with pytest.raises(ResponseShapeError):
        resolve(ModelStepResolver(client, fast_cfg))


def test_non_object_step_entry_is_rejected(fast_cfg):
    client = FakeLLMClient([reply({"steps": ["click the button"]})])
    with pytest.raises(ResponseShapeError):
        resolve(ModelStepResolver(client, fast_cfg))


def test_parse_error_then_success_is_retried(fast_cfg):
    client = FakeLLMClient(["not json at all", reply({"steps": [{"actionType": "CLICK"}]})])

    result = resolve(ModelStepResolver(client, fast_cfg))

    assert client.call_count == 2
    assert result.steps[0].actionType == ActionType.CLICK


def test_transport_error_then_success_is_retried(fast_cfg):
    client = FakeLLMClient([TransportError("connection reset"), reply({"steps": [{"actionType": "CLICK"}]})])

    result = resolve(ModelStepResolver(client, fast_cfg))

    assert client.call_count == 2
    assert len(result.steps) == 1


def test_parse_error_surfaces_when_every_attempt_fails(fast_cfg):
    client = FakeLLMClient(["{broken"])
    with pytest.raises(ResponseParseError):
        resolve(ModelStepResolver(client, fast_cfg))
    assert client.call_count == 2


def test_timeouts_exhaust_attempts_with_linear_backoff():
    cfg = ResolutionConfig(timeoutSeconds=0.05, maxRetries=2, retryDelayBaseSeconds=0.1)
    client = FakeLLMClient([5.0])

    with pytest.raises(LLMTimeoutError) as exc:
        resolve(ModelStepResolver(client, cfg))

    assert isinstance(exc.value, TimeoutError)
    assert client.call_count == cfg.maxRetries
    gap = client.call_times[1] - client.call_times[0]
    # timeout of attempt 1 plus 1 x backoff base
    assert gap >= cfg.timeoutSeconds + cfg.retryDelayBaseSeconds * 1 - 0.01


def test_configuration_error_is_not_retried(fast_cfg):
    client = FakeLLMClient([ConfigurationError("LLM Authentication Error")])
    with pytest.raises(ConfigurationError):
        resolve(ModelStepResolver(client, fast_cfg))
    assert client.call_count == 1


def test_no_client_raises_configuration_error(fast_cfg):
    with pytest.raises(ConfigurationError):
        resolve(ModelStepResolver(None, fast_cfg))


def test_prompt_carries_instruction_url_and_history(fast_cfg):
    client = FakeLLMClient([reply({"steps": []})])
    prior = [make_step(1, ActionType.NAVIGATE, "LoginPage", "Browser Window"),
             make_step(2, ActionType.FILL, "LoginPage", "Username Input")]

    resolve(ModelStepResolver(client, fast_cfg), instruction="Login", current_url="https://www.saucedemo.com",
            previous_steps=prior)

    call = client.calls[0]
    prompt = call["messages"][-1]["content"]
    assert 'User Instruction: "Login"' in prompt
    assert "Current URL: https://www.saucedemo.com" in prompt
    assert "[LoginPage] NAVIGATE -> Browser Window\n[LoginPage] FILL -> Username Input" in prompt
    assert call["response_format"] == {"type": "json_object"}
    assert call["temperature"] == fast_cfg.temperature


def test_context_summary_for_empty_history():
    assert build_context_summary([]) == "Start of test"
