# src/workflow_runner/core/pipeline/__init__.py
"""
# Pipeline Core — workflow_runner

Este pacote define os **contratos canônicos** e as **estruturas fundamentais**
de um pipeline linear de Steps.

## Componentes

- **types**: `StepDescriptor`, `Payload`, `StepStatus`, `RunStatus`, `StepResult`
- **step**: `Step` (Protocol), contrato mínimo de todo Step
- **context**: `RunContext`, namespace de variáveis em dois tiers + event log
- **resolver**: `resolve`, substituição de `${NOME}` contra o RunContext
- **registry**: `StepRegistry`, mapa imutável `type_name -> Step`

## Princípios Fundamentais

- Steps **não conhecem** o Engine, o Registry nem o RunContext
- Comunicação entre Steps ocorre **apenas** via `last_output`
- A precedência de lookup é uma política nomeada (`DEFAULT_TIER_ORDER`)
"""

from .context import DEFAULT_TIER_ORDER, ENVIRONMENT_TIER, OUTPUT_TIER, RunContext
from .registry import DuplicateStepTypeError, StepRegistry
from .resolver import find_placeholders, resolve
from .step import Step
from .types import Payload, RunStatus, StepDescriptor, StepResult, StepStatus

__all__ = [
    "DEFAULT_TIER_ORDER",
    "ENVIRONMENT_TIER",
    "OUTPUT_TIER",
    "DuplicateStepTypeError",
    "Payload",
    "RunContext",
    "RunStatus",
    "Step",
    "StepDescriptor",
    "StepRegistry",
    "StepResult",
    "StepStatus",
    "find_placeholders",
    "resolve",
]
