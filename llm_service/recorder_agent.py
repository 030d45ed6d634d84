"""
Date                    Author                          Change Details
19-10-2026                                              Caller facing entry points (instruction -> steps, steps -> POM code)
"""
import logging
from typing import Optional, List

from libs.dataclass.conceptual_objects import AutomationStep, ResolutionResult, GeneratedFiles
from llm_service.abstract_llm_client import AbstractLLMClient
from llm_service.code_generator import PomCodeGenerator
from llm_service.llm_factory import build_llm_client
from llm_service.model_resolver import ModelStepResolver
from llm_service.orchestrator import InstructionOrchestrator
from pom_lib_ext.config import AppConfig

logger = logging.getLogger(__name__)


class RecorderAgent:
    """
    Two entry points sharing one LLM client:
      - process_user_instruction : instruction (+ running steps) -> new steps and URL
      - generate_code            : finished steps -> {file path: source}
    Holds no per-test state; each call works only on its arguments.
    """

    def __init__(self, llm_client: Optional[AbstractLLMClient], cfg: Optional[AppConfig] = None):
        self.cfg = cfg or AppConfig()
        self.llm_client = llm_client
        self.orchestrator = InstructionOrchestrator(ModelStepResolver(llm_client, self.cfg.resolution))
        self.code_generator = PomCodeGenerator(llm_client, self.cfg.codegen)

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "RecorderAgent":
        return cls(build_llm_client(cfg.llm), cfg)

    async def process_user_instruction(self, instruction: str, current_url: str,
                                       previous_steps: List[AutomationStep]) -> ResolutionResult:
        return await self.orchestrator.handle(instruction, current_url, previous_steps)

    async def generate_code(self, steps: List[AutomationStep]) -> GeneratedFiles:
        return await self.code_generator.generate(steps)
