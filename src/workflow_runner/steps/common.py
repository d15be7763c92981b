"""Helpers compartilhados pelos Steps concretos."""

from __future__ import annotations

import requests

from workflow_runner.core.exceptions import StepExecutionError
from workflow_runner.core.pipeline.types import Payload

USER_AGENT = "workflows/1.0"

_TRUTHY = {"true", "1", "yes", "y", "on"}


def build_session() -> requests.Session:
    """Session `requests` com o User-Agent do runner."""
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    return session


def parse_bool(value: str) -> bool:
    # vazio ou qualquer valor fora de _TRUTHY é False
    return value.strip().lower() in _TRUTHY


def required(payload: Payload, key: str, type_name: str) -> str:
    """Valor não vazio de `key`, ou StepExecutionError."""
    value = payload.parameter(key)
    if not value.strip():
        raise StepExecutionError(
            message=f"Missing required parameter '{key}' for step '{type_name}'.",
            details={"parameter": key, "type_name": type_name},
            hint=f"Declare `{key}` em `parameters` do Step '{type_name}'.",
        )
    return value
