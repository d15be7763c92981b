"""
workflow_runner — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do workflow_runner.

Objetivo:
- Permitir que Engine, Resolver, Registry e Steps levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para WorkflowErrorPayload
- Evitar ValueError/RuntimeError genéricos nos pontos críticos da run

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- A mensagem é curta e humana; o `hint` aponta onde corrigir.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WorkflowException(Exception):
    """Base class para exceções internas do workflow_runner.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Registry / Lookup
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UnknownStepTypeError(WorkflowException):
    """Tipo de Step declarado na configuração não existe no registry."""


# ---------------------------------------------------------------------------
# Resolução de variáveis
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ResolutionError(WorkflowException):
    """Falha ao resolver placeholders de um parâmetro."""


@dataclass(frozen=True)
class UnresolvedVariableError(ResolutionError):
    """Placeholder referencia variável ausente em todos os tiers."""


@dataclass(frozen=True)
class MalformedPlaceholderError(ResolutionError):
    """Placeholder sintaticamente inválido (ex.: `${` sem fechamento)."""


# ---------------------------------------------------------------------------
# Execução de Steps
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StepExecutionError(WorkflowException):
    """Operação real do Step (rede, processo, filesystem) falhou."""


@dataclass(frozen=True)
class UndeclaredOutputError(StepExecutionError):
    """Step retornou chaves de saída que não declarou em `outputs()`."""
