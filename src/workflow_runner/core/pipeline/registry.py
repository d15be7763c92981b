# src/workflow_runner/core/pipeline/registry.py
"""
Registro de tipos de Step do pipeline.

Este módulo define o `StepRegistry`, o mapa somente-leitura de
`type_name` (minúsculo) para a implementação de Step correspondente.

O registry é construído explicitamente uma única vez, no início do
processo, e repassado por referência ao Engine. Não existe instância
global: testes constroem registries substitutos com Steps falsos.

Decisões arquiteturais:
    - Chaves são normalizadas para minúsculas (lookup case-insensitive)
    - Duplicidade de tipo é erro fatal no momento da construção
    - Não existe API de mutação após a construção
    - Tipo desconhecido é erro de lookup (UnknownStepTypeError)

Limites explícitos:
    - Não executa Steps
    - Não resolve parâmetros
    - Não interage com RunContext
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Tuple

from workflow_runner.core.exceptions import UnknownStepTypeError

from .step import Step


class DuplicateStepTypeError(ValueError):
    """
    Exceção levantada quando dois Steps declaram o mesmo `type_name`.

    A comparação é feita após normalização para minúsculas: `Echo` e
    `echo` colidem. Nenhum registry parcial é produzido.
    """


def _normalize(type_name: str) -> str:
    return str(type_name).strip().lower()


class StepRegistry:
    """
    Mapa imutável `type_name -> Step`.

    Invariantes:
        - Cada `type_name` normalizado é único
        - A ordem de registro é preservada em `supported_types()`
        - O conteúdo nunca muda após `__init__`
    """

    __slots__ = ("_steps",)

    def __init__(self, steps: Iterable[Step] = ()) -> None:
        collected: Dict[str, Step] = {}
        for step in steps:
            key = _normalize(getattr(step, "type_name", "") or "")
            if not key:
                raise ValueError("step.type_name must be a non-empty string")
            if key in collected:
                raise DuplicateStepTypeError(f"Duplicate step type: {key}")
            collected[key] = step
        self._steps = MappingProxyType(collected)

    def get(self, type_name: str) -> Step:
        key = _normalize(type_name)
        try:
            return self._steps[key]
        except KeyError:
            raise UnknownStepTypeError(
                message=f"Workflow {type_name} is not found.",
                details={"type_name": type_name, "supported": list(self._steps)},
                hint=f"Use um dos tipos suportados: {', '.join(self._steps) or '(nenhum)'}.",
            ) from None

    def supported_types(self) -> Tuple[str, ...]:
        return tuple(self._steps)

    def __contains__(self, type_name: object) -> bool:
        return isinstance(type_name, str) and _normalize(type_name) in self._steps

    def __iter__(self) -> Iterator[str]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)
