from __future__ import annotations

import logging
from typing import Callable, Literal, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

AgentLogLevel = Literal["Debug", "Info", "Warn", "Error"]
AgentLogFn = Callable[[str, str], None]

LOG_LEVEL_VALUES: dict[str, int] = {
    "Debug": logging.DEBUG,
    "Info": logging.INFO,
    "Warn": logging.WARNING,
    "Error": logging.ERROR,
}

_agent_logger = logging.getLogger("app.admin_agent")


def default_logger(level: str, message: str) -> None:
    _agent_logger.log(LOG_LEVEL_VALUES.get(level, logging.INFO), message)


class AgentOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, str_strip_whitespace=True, frozen=True)

    auth_secret: str = Field(..., min_length=1)
    env_secret: str = Field(..., min_length=1)
    is_production: bool = False
    logger_level: AgentLogLevel = "Info"
    logger: Optional[AgentLogFn] = None
    server_url: str = "https://api.forestadmin.com"
    prefix: str = "/forest"
    heartbeat_interval: float = Field(60.0, gt=0)
    http_timeout: float = Field(10.0, gt=0)
    http_transport: Optional[httpx.AsyncBaseTransport] = None

    @field_validator("server_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("prefix")
    @classmethod
    def validate_prefix(cls, value: str) -> str:
        candidate = "/" + value.strip("/")
        if candidate == "/":
            raise ValueError("prefix must not be empty")
        return candidate


class AgentLogger:
    """Filtra as mensagens do agente pelo ``logger_level`` configurado."""

    def __init__(self, options: AgentOptions) -> None:
        self._threshold = LOG_LEVEL_VALUES[options.logger_level]
        self._sink = options.logger or default_logger

    def __call__(self, level: AgentLogLevel, message: str) -> None:
        if LOG_LEVEL_VALUES[level] >= self._threshold:
            self._sink(level, message)
