"""
Date                            Author                                          Changes
19-10-2026                                                                      Async, single attempt, raw text response
"""
import logging
from abc import ABC
from typing import List, Dict, Optional

from openai import AsyncOpenAI, AuthenticationError, PermissionDeniedError, OpenAIError

from llm_service.errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


class AbstractLLMClient(ABC):
    """
    One chat completion per call. Retries and timeouts are the caller's business:
    the step resolver wraps this call together with parsing so malformed output is
    retried the same way as a dropped connection.
    """

    def __init__(self, init_client_config: dict):
        self.base_url = init_client_config.get("base_url") if init_client_config.get("base_url") else None
        self.api_key = init_client_config.get("api_key") if init_client_config.get("api_key") else None
        self.api_version = init_client_config.get("api_version") if init_client_config.get("api_version") else None
        self.model = init_client_config.get("model") if init_client_config.get("model") else None
        self.max_tokens = init_client_config.get("max_tokens") if init_client_config.get("max_tokens") else 8192
        self.client: Optional[AsyncOpenAI] = init_client_config.get("client") if init_client_config.get(
            "client") else None
        client_msg = f'Initialized' if self.client is not None else None
        logger.info(
            f'base_url: {self.base_url}, api_version: {self.api_version}, model: {self.model}, client: {client_msg}')

    async def execute_chat_completion_api(self, message: List[Dict], response_format=None,
                                          temperature=0.2, max_tokens=None) -> str:
        if response_format is None:
            response_format = dict(
                type="json_object")
        try:
            response = await self.client.chat.completions.create(model=self.model,
                                                                 messages=message,
                                                                 response_format=response_format,
                                                                 temperature=temperature,
                                                                 max_tokens=max_tokens or self.max_tokens)
        except (AuthenticationError, PermissionDeniedError) as e:
            msg = 'LLM Authentication Error'
            logger.error(msg)
            raise ConfigurationError(f'{msg}: {e}') from e
        except OpenAIError as e:
            msg = f'LLM Transport Error ({type(e).__name__})'
            logger.warning(msg)
            raise TransportError(f'{msg}: {e}') from e

        logger.debug(f'chat completion response - \n'
                     f'message - {message} \n'
                     f'response - {response}')
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
