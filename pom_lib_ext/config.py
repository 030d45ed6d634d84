"""
Date                    Author                          Change Details
19-10-2026                                              Data Structure For Configuration
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Literal, Optional

import dotenv

from constant.const_config import (
    ENV_FILE, DEFAULT_MODEL, TIMEOUT_SECONDS, MAX_RETRIES, RETRY_DELAY_BASE_SECONDS,
    RESOLUTION_TEMPERATURE, CODEGEN_TEMPERATURE
)

logger = logging.getLogger(__name__)

ProviderType = Literal["openai", "azure"]
LanguageType = Literal["javascript", "typescript", "python"]


@dataclass
class LLMConfig:
    provider: ProviderType = "openai"
    apiKey: Optional[str] = None
    model: str = DEFAULT_MODEL
    baseUrl: Optional[str] = None
    apiVersion: Optional[str] = None
    maxTokens: int = 8192

    @property
    def has_credentials(self) -> bool:
        return bool(self.apiKey)


@dataclass
class ResolutionConfig:
    timeoutSeconds: float = TIMEOUT_SECONDS
    maxRetries: int = MAX_RETRIES
    retryDelayBaseSeconds: float = RETRY_DELAY_BASE_SECONDS
    temperature: float = RESOLUTION_TEMPERATURE


@dataclass
class CodegenConfig:
    language: LanguageType = "javascript"
    temperature: float = CODEGEN_TEMPERATURE


@dataclass
class LoggingConfig:
    verbosity: Literal["silent", "normal", "verbose"] = "normal"
    saveRunLog: bool = True


@dataclass
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    codegen: CodegenConfig = field(default_factory=CodegenConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _env(name: str) -> Optional[str]:
    val = os.getenv(name)
    if val is None or not val.strip():
        return None
    return val.strip()


def load_app_config(env_path: Optional[str] = None) -> AppConfig:
    """
    Build an AppConfig from the process environment, after loading the .env file.
    A missing key leaves LLMConfig.apiKey as None; callers decide what that means.
    """
    dotenv.load_dotenv(dotenv_path=env_path or ENV_FILE)

    cfg = AppConfig()
    provider = (_env("LLM_PROVIDER") or cfg.llm.provider).lower()
    if provider not in ("openai", "azure"):
        raise ValueError(f"Unsupported LLM_PROVIDER: {provider}")
    cfg.llm.provider = provider
    cfg.llm.apiKey = _env("API_KEY") or _env("OPENAI_API_KEY")
    cfg.llm.model = _env("LLM_MODEL") or cfg.llm.model
    cfg.llm.baseUrl = _env("LLM_BASE_URL")
    cfg.llm.apiVersion = _env("LLM_API_VERSION")

    language = (_env("POM_LANGUAGE") or cfg.codegen.language).lower()
    if language not in ("javascript", "typescript", "python"):
        raise ValueError(f"Unsupported POM_LANGUAGE: {language}")
    cfg.codegen.language = language

    verbosity = (_env("LOG_VERBOSITY") or cfg.logging.verbosity).lower()
    if verbosity not in ("silent", "normal", "verbose"):
        raise ValueError(f"Unsupported LOG_VERBOSITY: {verbosity}")
    cfg.logging.verbosity = verbosity
    save_run_log = _env("SAVE_RUN_LOG")
    if save_run_log is not None:
        cfg.logging.saveRunLog = save_run_log.lower() not in ("0", "false", "no", "off")

    logger.info(f'provider: {cfg.llm.provider}, model: {cfg.llm.model}, base_url: {cfg.llm.baseUrl}, '
                f'api_key: {"set" if cfg.llm.has_credentials else "missing"}')
    return cfg
