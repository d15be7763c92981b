# src/workflow_runner/core/pipeline/context.py
"""
Contexto de execução de uma run do pipeline.

Este módulo define o `RunContext`, a estrutura que carrega o namespace
de variáveis em dois tiers ao longo de toda a run:

    - environment: snapshot imutável do ambiente do processo, capturado
      uma única vez na criação do contexto
    - last_output: saída do Step imediatamente anterior, substituída
      integralmente (nunca mesclada) após cada Step bem-sucedido

Além disso, o RunContext é o ponto central de observabilidade da run:
eventos de log estruturados são acumulados em `events`.

Invariantes:
    - `environment` nunca muda após a criação
    - `last_output` começa vazio
    - Após o Step k, `last_output` contém apenas chaves devolvidas pelo Step k
    - Logs sempre incluem `run_id` e `step`

Limites explícitos:
    - Não executa Steps
    - Não resolve placeholders (ver `resolver`)
    - Não persiste eventos automaticamente (ver `traceability.event_log`)
"""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


OUTPUT_TIER = "output"
ENVIRONMENT_TIER = "environment"

# Precedência de lookup: saída do Step anterior, depois ambiente.
DEFAULT_TIER_ORDER: Tuple[str, ...] = (OUTPUT_TIER, ENVIRONMENT_TIER)


@dataclass
class RunContext:
    """
    Contexto de execução de uma run do pipeline.

    O RunContext pertence exclusivamente ao Engine durante a run. O
    Resolver apenas o lê; Steps nunca o recebem.

    Use `RunContext.create()` para capturar o ambiente do processo.
    """
    run_id: str
    created_at: datetime
    environment: Mapping[str, str]
    tier_order: Tuple[str, ...] = DEFAULT_TIER_ORDER

    last_output: Dict[str, str] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.environment = MappingProxyType(dict(self.environment))
        unknown = [t for t in self.tier_order if t not in (OUTPUT_TIER, ENVIRONMENT_TIER)]
        if unknown:
            raise ValueError(f"Unknown variable tier(s): {', '.join(unknown)}")

    @classmethod
    def create(
        cls,
        *,
        environment: Optional[Mapping[str, str]] = None,
        run_id: Optional[str] = None,
    ) -> "RunContext":
        env = dict(os.environ) if environment is None else dict(environment)
        return cls(
            run_id=run_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            environment=env,
        )

    # -----------------------------
    # Namespace de variáveis
    # -----------------------------
    def tiers(self) -> List[Tuple[str, Mapping[str, str]]]:
        sources = {
            OUTPUT_TIER: MappingProxyType(self.last_output),
            ENVIRONMENT_TIER: self.environment,
        }
        return [(name, sources[name]) for name in self.tier_order]

    def replace_output(self, outputs: Mapping[str, Any]) -> None:
        self.last_output = {str(k): "" if v is None else str(v) for k, v in outputs.items()}

    # -----------------------------
    # Logging
    # -----------------------------
    def log(self, *, step: Optional[int], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step": step,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)
