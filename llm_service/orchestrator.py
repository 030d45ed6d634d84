import logging
from typing import List, Optional, Sequence

from libs.dataclass.conceptual_objects import AutomationStep, ResolutionResult
from llm_service.heuristics import LocalResolver, NavigationHeuristic
from llm_service.model_resolver import ModelStepResolver

logger = logging.getLogger(__name__)


class InstructionOrchestrator:
    """
    Tries the local resolvers in order; the first hit is returned and the model is
    never called. Otherwise the model resolver's result or error is passed through.
    """

    def __init__(self, model_resolver: ModelStepResolver,
                 local_resolvers: Optional[Sequence[LocalResolver]] = None):
        self.model_resolver = model_resolver
        self.local_resolvers = list(local_resolvers) if local_resolvers is not None else [NavigationHeuristic()]

    async def handle(self, instruction: str, current_url: str,
                     previous_steps: List[AutomationStep]) -> ResolutionResult:
        for resolver in self.local_resolvers:
            local_result = resolver.resolve(instruction, current_url)
            if local_result:
                for index, step in enumerate(local_result.steps):
                    step.order = len(previous_steps) + 1 + index
                return local_result

        logger.info(f'No local match, delegating to model: {instruction}')
        return await self.model_resolver.resolve_via_model(instruction, current_url, previous_steps)
