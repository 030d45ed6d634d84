"""
Date                    Author                          Change Details
19-10-2026                                              LLM Call For Instruction -> Automation Steps,
                                                        Timeout/Retry Discipline, Response Validation
"""
import asyncio
import json
import logging
from typing import Optional, List, Dict, Any

from constant.const_config import (
    DEFAULT_PAGE_CONTEXT, DEFAULT_TARGET_ELEMENT, DEFAULT_SELECTOR, DEFAULT_REASONING, EMPTY_HISTORY_SUMMARY
)
from libs.dataclass.conceptual_objects import AutomationStep, ActionType, ResolutionResult, generate_id
from llm_service.abstract_llm_client import AbstractLLMClient
from llm_service.errors import (
    StepResolutionError, ConfigurationError, LLMTimeoutError, ResponseShapeError
)
from llm_service.response_parser import parse_json_response, normalize_url
from pom_lib_ext.config import ResolutionConfig
from prompts.prompts_template import get_ai_sys_role_for_instruction_to_steps, build_instruction_prompt

logger = logging.getLogger(__name__)


def build_context_summary(previous_steps: List[AutomationStep]) -> str:
    lines = []
    for s in previous_steps:
        action = s.actionType.value if isinstance(s.actionType, ActionType) else s.actionType
        lines.append(f"[{s.pageContext}] {action} -> {s.targetElement}")
    return "\n".join(lines) or EMPTY_HISTORY_SUMMARY


def _text(raw: Dict[str, Any], key: str, default: str) -> str:
    val = raw.get(key)
    if val is None or (isinstance(val, str) and not val.strip()):
        return default
    return str(val)


def extract_raw_steps(data: Any) -> List[Dict[str, Any]]:
    """
    Pull the step list out of a parsed response. A lone step object (it has an
    actionType) is accepted and wrapped; any other shape is rejected.
    """
    if not isinstance(data, dict):
        raise ResponseShapeError(f"Invalid JSON structure: expected an object, got {type(data).__name__}")
    raw_steps = data.get("steps")
    if not isinstance(raw_steps, list):
        if "actionType" in data:
            raw_steps = [data]
        else:
            raise ResponseShapeError("Invalid JSON structure: missing 'steps' array")
    for idx, raw in enumerate(raw_steps):
        if not isinstance(raw, dict):
            raise ResponseShapeError(f"Invalid JSON structure: step {idx} is not an object")
    return raw_steps


def to_automation_step(raw: Dict[str, Any], order: int, instruction: str, url: Optional[str]) -> AutomationStep:
    value = raw.get("value")
    return AutomationStep(
        id=generate_id(),
        order=order,
        description=instruction,
        actionType=ActionType.coerce(raw.get("actionType")),
        targetElement=_text(raw, "targetElement", DEFAULT_TARGET_ELEMENT),
        simulatedSelector=_text(raw, "simulatedSelector", DEFAULT_SELECTOR),
        value=None if value is None else str(value),
        # one predicted URL for the whole batch
        url=url,
        reasoning=_text(raw, "reasoning", DEFAULT_REASONING),
        pageContext=_text(raw, "pageContext", DEFAULT_PAGE_CONTEXT),
    )


def build_resolution_result(data: Any, instruction: str, current_url: str,
                            previous_steps: List[AutomationStep]) -> ResolutionResult:
    raw_steps = extract_raw_steps(data)
    new_url = normalize_url(_text(data, "newUrl", current_url))
    base_order = len(previous_steps) + 1
    steps = [to_automation_step(raw, base_order + index, instruction, new_url)
             for index, raw in enumerate(raw_steps)]
    return ResolutionResult(
        steps=steps,
        responseMessage=_text(data, "responseMessage", f"Executed {len(steps)} steps."),
        newUrl=new_url,
    )


class ModelStepResolver:
    """
    Remote path of instruction resolution. Every attempt is: call the model under a
    timeout, parse, validate, normalize. Any failing stage fails the attempt.
    """

    def __init__(self, llm_client: Optional[AbstractLLMClient], cfg: Optional[ResolutionConfig] = None):
        self.llm_client = llm_client
        self.cfg = cfg or ResolutionConfig()

    def build_messages(self, instruction: str, current_url: str,
                       previous_steps: List[AutomationStep]) -> List[Dict[str, str]]:
        summary = build_context_summary(previous_steps)
        return [
            {"role": "system", "content": get_ai_sys_role_for_instruction_to_steps()},
            {"role": "user", "content": build_instruction_prompt(instruction, current_url, summary)},
        ]

    async def resolve_via_model(self, instruction: str, current_url: str,
                                previous_steps: List[AutomationStep]) -> ResolutionResult:
        if self.llm_client is None:
            raise ConfigurationError("API Key is missing")

        messages = self.build_messages(instruction, current_url, previous_steps)
        max_attempt = max(1, self.cfg.maxRetries)
        attempt_counter = 1
        last_error: Optional[StepResolutionError] = None
        while attempt_counter <= max_attempt:
            logger.info(f'Fetching LLM Step Resolution (Attempt Counter) - {attempt_counter}')
            try:
                return await self._attempt(messages, instruction, current_url, previous_steps)
            except ConfigurationError:
                raise
            except StepResolutionError as e:
                logger.warning(f'Attempt {attempt_counter} failed: {type(e).__name__}: {e}')
                last_error = e
                if attempt_counter < max_attempt:
                    await asyncio.sleep(self.cfg.retryDelayBaseSeconds * attempt_counter)
            attempt_counter += 1
        raise last_error

    async def _attempt(self, messages: List[Dict[str, str]], instruction: str, current_url: str,
                       previous_steps: List[AutomationStep]) -> ResolutionResult:
        try:
            text = await asyncio.wait_for(
                self.llm_client.execute_chat_completion_api(messages,
                                                            response_format={"type": "json_object"},
                                                            temperature=self.cfg.temperature),
                timeout=self.cfg.timeoutSeconds,
            )
        except asyncio.TimeoutError as e:
            raise LLMTimeoutError(f"Request timed out after {self.cfg.timeoutSeconds}s") from e

        data = parse_json_response(text)
        result = build_resolution_result(data, instruction, current_url, previous_steps)
        logger.info(f'Instruction: {instruction}\n'
                    f'Steps Returned By LLM:\n'
                    f'{json.dumps([s.to_dict() for s in result.steps], indent=2)}')
        return result
