"""
Date                    Author                          Change Details
19-10-2026                                              Recording Session (owner of the running process state)
"""
import asyncio
import logging
from dataclasses import replace
from typing import Optional

from libs.dataclass.conceptual_objects import (
    ProcessState, AutomationStep, ActionType, GeneratedFiles, new_chat_message, generate_id
)
from llm_service.errors import StepResolutionError, ConfigurationError
from llm_service.recorder_agent import RecorderAgent

logger = logging.getLogger(__name__)


class RecorderSession:
    """
    Keeps the step list, URL and chat log for one recording and feeds them to the
    agent. Instructions are handled one at a time so step orders stay contiguous.
    """

    def __init__(self, agent: RecorderAgent, state: Optional[ProcessState] = None):
        self.agent = agent
        self.state = state or ProcessState()
        self._lock = asyncio.Lock()

    async def send_message(self, instruction: str) -> ProcessState:
        async with self._lock:
            state = self.state
            state.chatHistory.append(new_chat_message("user", instruction))
            state.isProcessing = True
            state.error = None
            try:
                result = await self.agent.process_user_instruction(instruction, state.currentUrl,
                                                                   list(state.steps))
            except StepResolutionError as e:
                error_message = str(e) or "Unknown error occurred"
                logger.error(f'Instruction failed: {instruction} -> {type(e).__name__}: {error_message}')
                state.error = error_message
                state.chatHistory.append(new_chat_message(
                    "ai", f"⚠️ {error_message}. You can try again or add the step manually below."))
                return state
            finally:
                state.isProcessing = False

            state.chatHistory.append(new_chat_message(
                "ai", result.responseMessage, related_step_id=result.steps[-1].id if result.steps else None))
            state.currentUrl = result.newUrl
            state.steps.extend(result.steps)
            return state

    async def generate_code(self) -> Optional[GeneratedFiles]:
        state = self.state
        state.isProcessing = True
        try:
            state.generatedFiles = await self.agent.generate_code(list(state.steps))
        except ConfigurationError as e:
            logger.error(f'Code generation unavailable: {e}')
            state.error = "Failed to generate code."
        finally:
            state.isProcessing = False
        return state.generatedFiles

    def add_step(self) -> AutomationStep:
        step = AutomationStep(
            id=generate_id(),
            order=len(self.state.steps) + 1,
            description="Manual Step",
            actionType=ActionType.CLICK,
            targetElement="Target Element",
            simulatedSelector=".my-selector",
            value="",
            url=self.state.currentUrl,
            reasoning="Manually added by user",
            pageContext="BasePage",
        )
        self.state.steps.append(step)
        return step

    def update_step(self, step_id: str, **changes) -> AutomationStep:
        changes.pop("id", None)
        if "actionType" in changes:
            changes["actionType"] = ActionType.coerce(changes["actionType"])
        for idx, step in enumerate(self.state.steps):
            if step.id == step_id:
                self.state.steps[idx] = replace(step, **changes)
                return self.state.steps[idx]
        raise KeyError(step_id)

    def delete_step(self, step_id: str) -> None:
        self.state.steps = [s for s in self.state.steps if s.id != step_id]
