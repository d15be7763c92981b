# src/workflow_runner/core/pipeline/types.py
"""
Tipos canônicos do pipeline do workflow_runner.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre Steps, Engine e o event log da run.

Os tipos aqui definidos representam:
    - a declaração fixa de parâmetros e saídas de um Step
    - o payload de strings trocado entre Engine e Steps
    - estados finais de Steps e da run
    - resultado imutável produzido pela execução de um Step

Componentes principais:
    - StepDescriptor → nomes de parâmetros e saídas declarados por um Step
    - Payload        → mapa imutável `str -> str` (parâmetros ou saídas)
    - StepStatus     → enum de estados finais de um Step (SUCCESS, FAILED)
    - RunStatus      → enum de estados terminais da run (SUCCEEDED, FAILED)
    - StepResult     → registro imutável de uma invocação de Step

Invariantes:
    - Enums possuem valores textuais canônicos
    - Payload e StepResult são imutáveis
    - Tipos não dependem de engine, registry ou CLI

Limites explícitos:
    - Não executa Steps
    - Não resolve placeholders
    - Não decide políticas de execução
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple


@dataclass(frozen=True)
class StepDescriptor:
    """
    Declaração fixa de um Step: nomes de parâmetros e nomes de saídas.

    Cada implementação de Step possui exatamente um descriptor, conhecido
    em tempo de definição da classe e nunca mutado.

    Invariantes:
        - `parameters` e `outputs` são tuplas ordenadas de strings
        - Steps sem saídas declaram `outputs=()`
    """
    parameters: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()


class Payload(Mapping):
    """
    Mapa imutável `str -> str` trocado entre Engine e Steps.

    Usado tanto como ParameterPayload (entrada de `execute`) quanto como
    OutputPayload (saída de `execute`, após normalização pelo Engine).

    `parameter(key)` devolve string vazia para chaves ausentes: o default
    vazio é responsabilidade do Step, não do Engine.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self._data: Dict[str, str] = {
            str(k): "" if v is None else str(v) for k, v in (data or {}).items()
        }

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Payload({self._data!r})"

    def parameter(self, key: str) -> str:
        return self._data.get(key, "")

    def to_dict(self) -> Dict[str, str]:
        return dict(self._data)


class StepStatus(str, Enum):
    """
    Estados finais possíveis da execução de um Step.

    Estados definidos:
        - SUCCESS: `execute` retornou e a saída foi propagada
        - FAILED: lookup, resolução ou execução falharam

    Não existe SKIPPED: o pipeline é linear e fail-fast, Steps após uma
    falha simplesmente não aparecem no resultado.
    """
    SUCCESS = "success"
    FAILED = "failed"


class RunStatus(str, Enum):
    """Estados terminais de uma run (Pending/Resolving/Executing são transitórios)."""
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    """
    Resultado imutável da invocação de um Step.

    Campos:
        - index: posição do Step na configuração (0-based)
        - type_name: tipo declarado na configuração (normalizado em minúsculas)
        - status: estado final
        - summary: resumo textual
        - parameters: payload efetivamente entregue ao Step (após resolução)
        - outputs: saída propagada para `last_output`
        - error: payload de erro serializado (vazio em caso de sucesso)

    Invariantes:
        - Uma instância de StepResult nunca é alterada após criada
        - `error` é vazio se e somente se `status` é SUCCESS
    """
    index: int
    type_name: str
    status: StepStatus
    summary: str
    parameters: Dict[str, str] = field(default_factory=dict)
    outputs: Dict[str, str] = field(default_factory=dict)
    error: Dict[str, Any] = field(default_factory=dict)
