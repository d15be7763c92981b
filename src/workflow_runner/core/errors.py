"""
workflow_runner — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do workflow_runner.
Erros fazem parte do contrato operacional da run e devem ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma recuperação implícita é permitida: a primeira falha encerra a run.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WorkflowErrorPayload:
    """
    Payload canônico de erro do workflow_runner.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)

    def describe(self) -> str:
        """Descrição humana em uma linha (mensagem + hint, quando houver)."""
        if self.hint:
            return f"{self.message} ({self.hint})"
        return self.message


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Lookup
STEP_TYPE_NOT_FOUND = "STEP_TYPE_NOT_FOUND"

# Resolução
VARIABLE_NOT_FOUND = "VARIABLE_NOT_FOUND"
PLACEHOLDER_MALFORMED = "PLACEHOLDER_MALFORMED"

# Execução
STEP_EXECUTION_ERROR = "STEP_EXECUTION_ERROR"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def step_type_not_found(
    *,
    type_name: str,
    supported: List[str],
    step_index: Optional[int] = None,
    hint: str = "Corrija o campo `type` do Step ou use um dos tipos suportados.",
) -> WorkflowErrorPayload:
    return WorkflowErrorPayload(
        type=STEP_TYPE_NOT_FOUND,
        message=f"Workflow {type_name} is not found.",
        details={
            "type_name": type_name,
            "supported": list(supported),
            "step_index": step_index,
        },
        hint=hint,
    )


def variable_not_found(
    *,
    name: str,
    raw: str,
    tiers: List[str],
    referenced: Optional[List[str]] = None,
    parameter: Optional[str] = None,
    step_index: Optional[int] = None,
    hint: str = "Exporte a variável de ambiente ou garanta que o Step anterior a produza como saída.",
) -> WorkflowErrorPayload:
    return WorkflowErrorPayload(
        type=VARIABLE_NOT_FOUND,
        message=f"Variable '{name}' is not defined.",
        details={
            "name": name,
            "raw": raw,
            "tiers": list(tiers),
            "referenced": list(referenced or []),
            "parameter": parameter,
            "step_index": step_index,
        },
        hint=hint,
    )


def placeholder_malformed(
    *,
    raw: str,
    position: int,
    parameter: Optional[str] = None,
    step_index: Optional[int] = None,
    hint: str = "Use `${NOME}` para referenciar variáveis e `$$` para um `$` literal.",
) -> WorkflowErrorPayload:
    return WorkflowErrorPayload(
        type=PLACEHOLDER_MALFORMED,
        message=f"Malformed placeholder at position {position}.",
        details={
            "raw": raw,
            "position": position,
            "parameter": parameter,
            "step_index": step_index,
        },
        hint=hint,
    )


def step_execution_error(
    *,
    type_name: str,
    step_index: Optional[int] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Efeitos colaterais de Steps anteriores não são desfeitos; verifique-os antes de reexecutar.",
) -> WorkflowErrorPayload:
    return WorkflowErrorPayload(
        type=STEP_EXECUTION_ERROR,
        message=f"Step {step_index} ('{type_name}') failed: {exc_message or exc_type}",
        details={
            "type_name": type_name,
            "step_index": step_index,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def engine_execution_error(
    *,
    step_index: Optional[int] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o event log da run para diagnosticar a falha.",
) -> WorkflowErrorPayload:
    return WorkflowErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message="Falha inesperada durante a execução do pipeline",
        details={
            "step_index": step_index,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )
