import logging
from typing import Optional

from openai import AsyncOpenAI

from llm_service.abstract_llm_client import AbstractLLMClient

logger = logging.getLogger(__name__)


class OpenAILLMClient(AbstractLLMClient):
    def __init__(self, api_key: str, model: str = 'gpt-4o-mini', base_url: Optional[str] = None,
                 max_tokens: int = 8192):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        try:
            # retries are driven by the step resolver
            self.client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0
            )
            logger.info("OpenAI client initialized successfully")
        except Exception as e:
            logger.error(f"Error initializing OpenAI client: {e}")
            raise e

        init_client_config = {
            "api_key": self.api_key,
            "base_url": self.base_url,
            "model": self.model,
            "max_tokens": max_tokens,
            "client": self.client
        }

        super().__init__(init_client_config)
