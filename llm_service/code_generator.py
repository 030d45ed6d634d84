"""
Date                    Author                          Change Details
19-10-2026                                              LLM Call For Steps -> POM Source Bundle
"""
import json
import logging
from typing import Optional, List, Dict, Any

from constant.const_config import CODEGEN_ERROR_FILE, CODEGEN_ERROR_TEXT
from libs.dataclass.conceptual_objects import AutomationStep, ActionType, GeneratedFiles
from llm_service.abstract_llm_client import AbstractLLMClient
from llm_service.errors import ConfigurationError, ResponseShapeError
from llm_service.response_parser import parse_json_response
from pom_lib_ext.config import CodegenConfig
from prompts.prompts_template import get_ai_sys_role_for_pom_generation, build_pom_generation_prompt

logger = logging.getLogger(__name__)


def minify_steps(steps: List[AutomationStep]) -> List[Dict[str, Any]]:
    return [
        {
            "page": s.pageContext,
            "action": s.actionType.value if isinstance(s.actionType, ActionType) else s.actionType,
            "selector": s.simulatedSelector,
            "value": s.value,
            "desc": s.description,
            "target": s.targetElement,
        }
        for s in steps
    ]


def error_bundle() -> GeneratedFiles:
    return {CODEGEN_ERROR_FILE: CODEGEN_ERROR_TEXT}


class PomCodeGenerator:
    """
    Single shot, no timeout, no retry. A failed pass comes back as an error.log
    bundle; only a missing credential is raised.
    """

    def __init__(self, llm_client: Optional[AbstractLLMClient], cfg: Optional[CodegenConfig] = None):
        self.llm_client = llm_client
        self.cfg = cfg or CodegenConfig()

    async def generate(self, steps: List[AutomationStep]) -> GeneratedFiles:
        if self.llm_client is None:
            raise ConfigurationError("API Key is missing")

        messages = [
            {"role": "system", "content": get_ai_sys_role_for_pom_generation()},
            {"role": "user", "content": build_pom_generation_prompt(minify_steps(steps), self.cfg.language)},
        ]
        try:
            text = await self.llm_client.execute_chat_completion_api(messages,
                                                                     response_format={"type": "json_object"},
                                                                     temperature=self.cfg.temperature)
            files = parse_json_response(text)
            if not isinstance(files, dict):
                raise ResponseShapeError(f"Expected a file map, got {type(files).__name__}")
        except Exception as e:
            logger.error(f"Code Gen Error: {type(e).__name__}: {e}")
            return error_bundle()

        logger.info(f'Generated {len(files)} files: {", ".join(files)}')
        return {str(path): content if isinstance(content, str) else json.dumps(content, indent=2)
                for path, content in files.items()}
