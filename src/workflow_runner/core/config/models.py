# src/workflow_runner/core/config/models.py
"""
Estruturas imutáveis da configuração de um pipeline.

    - StepConfig     → `type_name` + parâmetros brutos (podem conter `${...}`)
    - PipelineConfig → sequência ordenada de StepConfig

Criadas uma única vez a partir do arquivo de configuração e nunca
mutadas depois disso. A ordem de `steps` é a ordem de execução.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple


@dataclass(frozen=True)
class StepConfig:
    type_name: str
    raw_parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_parameters", MappingProxyType(dict(self.raw_parameters)))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type_name, "parameters": dict(self.raw_parameters)}


@dataclass(frozen=True)
class PipelineConfig:
    steps: Tuple[StepConfig, ...] = ()
    source: Optional[str] = None

    @classmethod
    def of(cls, steps: Iterable[StepConfig], source: Optional[str] = None) -> "PipelineConfig":
        return cls(steps=tuple(steps), source=source)

    def __iter__(self) -> Iterator[StepConfig]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        return {"workflows": [s.to_dict() for s in self.steps]}
