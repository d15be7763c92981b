# src/workflow_runner/core/pipeline/step.py
"""
Contrato canônico de Step do workflow_runner.

Este módulo define o protocolo formal que qualquer Step deve satisfazer
para ser executável pelo Engine.

Um Step é a menor unidade executável do pipeline: um wrapper fino sobre
uma única chamada de biblioteca ou do sistema operacional (uma requisição
HTTP, um processo, um download, uma descompactação, ...).

Responsabilidades de um Step:
    - declarar nomes fixos de parâmetros e de saídas (StepDescriptor)
    - executar seu efeito colateral a partir de um Payload já resolvido
    - devolver um mapa de saídas restrito aos nomes declarados

Princípios fundamentais:
    - Steps não conhecem o Engine, o Registry nem o RunContext
    - Steps não resolvem placeholders: recebem valores concretos
    - Falhas são sinalizadas por exceção; não há retry
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não define política de ordem ou de fail-fast
    - Não garante idempotência (efeitos são reais e irreversíveis)
"""

from __future__ import annotations

from typing import Mapping, Protocol, Tuple, runtime_checkable

from .types import Payload, StepDescriptor


@runtime_checkable
class Step(Protocol):
    """
    Contrato canônico de um Step.

    Atributos obrigatórios:
        - type_name: chave (minúscula) usada no Registry
        - descriptor: parâmetros e saídas declarados

    Classes que herdam explicitamente de `Step` recebem `parameters()` e
    `outputs()` derivados do descriptor; implementações duck-typed devem
    fornecê-los por conta própria.

    Invariantes:
        - `parameters()` e `outputs()` são fixos por implementação
        - `execute` devolve apenas chaves declaradas em `outputs()`
          (um subconjunto é permitido)
    """
    type_name: str
    descriptor: StepDescriptor

    def parameters(self) -> Tuple[str, ...]:
        return tuple(self.descriptor.parameters)

    def outputs(self) -> Tuple[str, ...]:
        return tuple(self.descriptor.outputs)

    def execute(self, payload: Payload) -> Mapping[str, str]:
        """Executa o efeito colateral do Step uma única vez."""
        ...
