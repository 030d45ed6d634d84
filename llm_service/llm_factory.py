import logging
from typing import Optional

from llm_service.abstract_llm_client import AbstractLLMClient
from llm_service.azure_client import AzureLLMClient
from llm_service.openai_client import OpenAILLMClient
from pom_lib_ext.config import LLMConfig

logger = logging.getLogger(__name__)


def build_llm_client(llm_cfg: LLMConfig) -> Optional[AbstractLLMClient]:
    """Returns None when no credential is configured."""
    if not llm_cfg.has_credentials:
        logger.warning("API Key is missing. Only local heuristics can resolve instructions.")
        return None
    if llm_cfg.provider == "azure":
        return AzureLLMClient(base_url=llm_cfg.baseUrl, api_key=llm_cfg.apiKey,
                              api_version=llm_cfg.apiVersion, model=llm_cfg.model,
                              max_tokens=llm_cfg.maxTokens)
    return OpenAILLMClient(api_key=llm_cfg.apiKey, model=llm_cfg.model, base_url=llm_cfg.baseUrl,
                           max_tokens=llm_cfg.maxTokens)
